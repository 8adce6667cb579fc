"""
Credential configuration for the OCI HTTP signer

Credentials can be given explicitly, read from process environment variables,
or loaded from an OCI CLI style configuration file.
"""

import os
import configparser
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from .exceptions import ConfigurationError, ErrorCodes

logger = logging.getLogger(__name__)

# Environment variable names
OCI_TENANCY_ID = 'OCI_TENANCY_ID'
OCI_USER_ID = 'OCI_USER_ID'
OCI_KEY_FINGERPRINT = 'OCI_KEY_FINGERPRINT'
OCI_PRIVATE_KEY_FILENAME = 'OCI_PRIVATE_KEY_FILENAME'
# Reserved for direct PEM material; not read by the signer
OCI_PRIVATE_KEY = 'OCI_PRIVATE_KEY'

DEFAULT_CONFIG_FILE = '~/.oci/config'
DEFAULT_PROFILE = 'DEFAULT'

# Config field -> environment variable
ENVIRONMENT_VARIABLES: Dict[str, str] = {
    'tenancy_id': OCI_TENANCY_ID,
    'user_id': OCI_USER_ID,
    'key_fingerprint': OCI_KEY_FINGERPRINT,
    'private_key_filename': OCI_PRIVATE_KEY_FILENAME,
}

# Config field -> OCI config file option
CONFIG_FILE_OPTIONS: Dict[str, str] = {
    'tenancy_id': 'tenancy',
    'user_id': 'user',
    'key_fingerprint': 'fingerprint',
    'private_key_filename': 'key_file',
}


@dataclass
class SignerConfig:
    """
    API key credentials used to sign requests

    Attributes:
        tenancy_id: OCID of the tenancy
        user_id: OCID of the user owning the API key
        key_fingerprint: Fingerprint of the uploaded public key
        private_key_filename: Path to the PEM encoded private key
    """
    tenancy_id: Optional[str] = None
    user_id: Optional[str] = None
    key_fingerprint: Optional[str] = None
    private_key_filename: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Optional[str]
    ) -> 'SignerConfig':
        """
        Build configuration from explicit values, falling back to the environment.

        Each field uses its explicit value when one is given and non-empty,
        otherwise the matching ``OCI_*`` environment variable.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)
            **overrides: Explicit field values

        Returns:
            SignerConfig: Resolved configuration
        """
        if environ is None:
            environ = os.environ

        unknown = set(overrides) - set(ENVIRONMENT_VARIABLES)
        if unknown:
            raise TypeError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")

        values = {}
        for field_name, env_name in ENVIRONMENT_VARIABLES.items():
            values[field_name] = overrides.get(field_name) or environ.get(env_name) or None

        return cls(**values)

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path] = DEFAULT_CONFIG_FILE,
        profile: str = DEFAULT_PROFILE
    ) -> 'SignerConfig':
        """
        Load configuration from an OCI CLI style INI file.

        Args:
            file_path: Path to the configuration file (``~`` is expanded)
            profile: Profile section to read

        Returns:
            SignerConfig: Configuration from the selected profile

        Raises:
            ConfigurationError: If the file cannot be read or the profile is missing
        """
        path = Path(file_path).expanduser()
        parser = configparser.ConfigParser(interpolation=None)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                parser.read_file(f)
        except (OSError, configparser.Error) as e:
            raise ConfigurationError(
                f"Failed to read configuration file: {e}",
                ErrorCodes.CONFIG_FILE_ERROR,
                {"file_path": str(path), "original_error": str(e)}
            ) from e

        if profile != parser.default_section and not parser.has_section(profile):
            raise ConfigurationError(
                f"Profile '{profile}' not found in {path}",
                ErrorCodes.PROFILE_NOT_FOUND,
                {"file_path": str(path), "profile": profile}
            )

        section = parser[profile]
        values = {}
        for field_name, option in CONFIG_FILE_OPTIONS.items():
            values[field_name] = section.get(option) or None

        if values['private_key_filename']:
            values['private_key_filename'] = str(Path(values['private_key_filename']).expanduser())

        logger.debug(f"Loaded signer configuration from {path} [{profile}]")
        return cls(**values)

    @property
    def key_id(self) -> str:
        """Key identifier in ``tenancy/user/fingerprint`` form."""
        return '/'.join([
            self.tenancy_id or '',
            self.user_id or '',
            self.key_fingerprint or '',
        ])

    def missing_fields(self) -> List[str]:
        """Names of required fields that are empty."""
        return [f.name for f in fields(self) if not getattr(self, f.name)]
