"""
Shared fixtures for the OCI signer test suite
"""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from oci_signer.config import SignerConfig

TENANCY_ID = "ocid1.tenancy.oc1..aaaatenancy"
USER_ID = "ocid1.user.oc1..aaaauser"
FINGERPRINT = "20:3b:97:13:55:1c:5b:0d:d3:37:d8:50:4e:c5:3a:34"
TEST_DATE = "Tue, 01 Jan 2024 00:00:00 GMT"


@pytest.fixture(scope="session")
def rsa_private_key():
    """Throwaway RSA key for signing tests."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key):
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    )


@pytest.fixture
def key_file(tmp_path, private_key_pem):
    path = tmp_path / "oci_api_key.pem"
    path.write_bytes(private_key_pem)
    return str(path)


@pytest.fixture
def signer_config(key_file):
    return SignerConfig(
        tenancy_id=TENANCY_ID,
        user_id=USER_ID,
        key_fingerprint=FINGERPRINT,
        private_key_filename=key_file,
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove OCI_* variables so tests do not depend on the host environment."""
    for name in ("OCI_TENANCY_ID", "OCI_USER_ID", "OCI_KEY_FINGERPRINT",
                 "OCI_PRIVATE_KEY_FILENAME", "OCI_PRIVATE_KEY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
