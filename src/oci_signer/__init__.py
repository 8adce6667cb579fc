"""
OCI HTTP signer
API key request signing for Oracle Cloud Infrastructure REST APIs
"""

from .version import __version__
from .config import (
    SignerConfig,
    OCI_TENANCY_ID,
    OCI_USER_ID,
    OCI_KEY_FINGERPRINT,
    OCI_PRIVATE_KEY_FILENAME,
    OCI_PRIVATE_KEY,
)
from .exceptions import (
    OCISignerError,
    ErrorCodes,
    ValidationError,
    InvalidUrlError,
    InvalidBodyError,
    MissingCredentialsError,
    PrivateKeyFileNotFoundError,
    SigningError,
    SignatureVerificationError,
    ConfigurationError,
)
from .signing import (
    Signer,
    HttpMethod,
    SigningRequest,
    KeyProvider,
    CredentialsKeyProvider,
    StaticKeyProvider,
    SignerAuth,
    create_signing_session,
    sign_string,
    verify_signature,
)

# Public API exports
__all__ = [
    '__version__',
    # Configuration
    'SignerConfig',
    'OCI_TENANCY_ID',
    'OCI_USER_ID',
    'OCI_KEY_FINGERPRINT',
    'OCI_PRIVATE_KEY_FILENAME',
    'OCI_PRIVATE_KEY',
    # Exceptions
    'OCISignerError',
    'ErrorCodes',
    'ValidationError',
    'InvalidUrlError',
    'InvalidBodyError',
    'MissingCredentialsError',
    'PrivateKeyFileNotFoundError',
    'SigningError',
    'SignatureVerificationError',
    'ConfigurationError',
    # Signing
    'Signer',
    'HttpMethod',
    'SigningRequest',
    'KeyProvider',
    'CredentialsKeyProvider',
    'StaticKeyProvider',
    'SignerAuth',
    'create_signing_session',
    'sign_string',
    'verify_signature',
]
