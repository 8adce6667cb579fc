"""
Tests for signer credential configuration
"""

import os

import pytest

from oci_signer import SignerConfig, ConfigurationError, ErrorCodes


class TestFromEnv:
    """Test environment-backed configuration"""

    def test_reads_environment(self):
        config = SignerConfig.from_env({
            "OCI_TENANCY_ID": "t",
            "OCI_USER_ID": "u",
            "OCI_KEY_FINGERPRINT": "f",
            "OCI_PRIVATE_KEY_FILENAME": "/keys/key.pem",
            "OCI_PRIVATE_KEY": "ignored",
        })
        assert config == SignerConfig("t", "u", "f", "/keys/key.pem")
        assert config.key_id == "t/u/f"

    def test_explicit_values_win(self):
        config = SignerConfig.from_env({"OCI_USER_ID": "env-user", "OCI_TENANCY_ID": "env-t"}, user_id="u")
        assert config.user_id == "u"
        assert config.tenancy_id == "env-t"

    def test_empty_explicit_value_falls_back(self):
        config = SignerConfig.from_env({"OCI_USER_ID": "env-user"}, user_id="")
        assert config.user_id == "env-user"

    def test_defaults_to_os_environ(self, clean_env):
        clean_env.setenv("OCI_KEY_FINGERPRINT", "aa:bb")
        assert SignerConfig.from_env().key_fingerprint == "aa:bb"

    def test_unknown_field(self):
        with pytest.raises(TypeError):
            SignerConfig.from_env({}, region="us-ashburn-1")

    def test_missing_fields(self):
        config = SignerConfig.from_env({}, tenancy_id="t")
        assert config.missing_fields() == ["user_id", "key_fingerprint", "private_key_filename"]
        assert config.key_id == "t//"


class TestFromFile:
    """Test OCI config file loading"""

    CONFIG = (
        "[DEFAULT]\n"
        "user=ocid1.user.oc1..default\n"
        "fingerprint=11:22\n"
        "key_file=~/.oci/oci_api_key.pem\n"
        "tenancy=ocid1.tenancy.oc1..default\n"
        "region=us-ashburn-1\n"
        "\n"
        "[ADMIN]\n"
        "user=ocid1.user.oc1..admin\n"
        "key_file=/keys/admin.pem\n"
    )

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / "config"
        path.write_text(self.CONFIG)
        return path

    def test_default_profile(self, config_file):
        config = SignerConfig.from_file(config_file)
        assert config.tenancy_id == "ocid1.tenancy.oc1..default"
        assert config.user_id == "ocid1.user.oc1..default"
        assert config.key_fingerprint == "11:22"
        assert config.private_key_filename == os.path.expanduser("~/.oci/oci_api_key.pem")

    def test_named_profile_inherits_defaults(self, config_file):
        config = SignerConfig.from_file(str(config_file), profile="ADMIN")
        assert config.user_id == "ocid1.user.oc1..admin"
        assert config.private_key_filename == "/keys/admin.pem"
        assert config.tenancy_id == "ocid1.tenancy.oc1..default"

    def test_missing_profile(self, config_file):
        with pytest.raises(ConfigurationError) as exc_info:
            SignerConfig.from_file(config_file, profile="NOPE")
        assert exc_info.value.error_code == ErrorCodes.PROFILE_NOT_FOUND

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            SignerConfig.from_file(tmp_path / "absent")
        assert exc_info.value.error_code == ErrorCodes.CONFIG_FILE_ERROR

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("user=no-section\n")
        with pytest.raises(ConfigurationError):
            SignerConfig.from_file(path)
