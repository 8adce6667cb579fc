"""
RSA-SHA256 signature engine

Signs canonical signing strings with an RSA private key (PKCS#1 v1.5,
sha256WithRSAEncryption) and re-verifies every signature against the derived
public key before returning it.
"""

import base64
import logging
from typing import Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from ..exceptions import ErrorCodes, SigningError, SignatureVerificationError

logger = logging.getLogger(__name__)

PrivateKeyMaterial = Union[str, bytes, None]


def load_private_key(private_key_pem: PrivateKeyMaterial) -> RSAPrivateKey:
    """
    Load an unencrypted PEM encoded RSA private key.

    Args:
        private_key_pem: PEM text or bytes

    Returns:
        RSAPrivateKey: Loaded key

    Raises:
        SigningError: If the key is missing, cannot be parsed, or is not RSA
    """
    if not private_key_pem:
        raise SigningError(
            "Private key is missing",
            ErrorCodes.INVALID_PRIVATE_KEY
        )

    if isinstance(private_key_pem, str):
        private_key_pem = private_key_pem.encode('utf-8')

    try:
        private_key = serialization.load_pem_private_key(private_key_pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(
            f"Cannot load private key: {e}",
            ErrorCodes.INVALID_PRIVATE_KEY,
            {"original_error": str(e)}
        ) from e

    if not isinstance(private_key, RSAPrivateKey):
        raise SigningError(
            f"Unsupported private key type: {type(private_key).__name__}",
            ErrorCodes.INVALID_PRIVATE_KEY,
            {"key_type": type(private_key).__name__}
        )

    return private_key


def verify_signature(
    signing_string: Union[str, bytes],
    signature: bytes,
    public_key: RSAPublicKey
) -> bool:
    """
    Verify an RSA-SHA256 signature.

    Args:
        signing_string: Data that was signed
        signature: Raw signature bytes
        public_key: RSA public key

    Returns:
        bool: True if the signature is valid
    """
    if isinstance(signing_string, str):
        signing_string = signing_string.encode('utf-8')

    try:
        public_key.verify(signature, signing_string, padding.PKCS1v15(), hashes.SHA256())
        return True
    except InvalidSignature:
        return False


def sign_string(signing_string: str, private_key_pem: PrivateKeyMaterial) -> str:
    """
    Sign a signing string and verify the result.

    Args:
        signing_string: Canonical signing string
        private_key_pem: PEM encoded RSA private key

    Returns:
        str: Base64 encoded signature

    Raises:
        SigningError: If the key is unusable or signing fails
        SignatureVerificationError: If the signature does not verify
    """
    private_key = load_private_key(private_key_pem)
    data = signing_string.encode('utf-8')

    try:
        signature = private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
    except Exception as e:
        raise SigningError(
            f"Cannot generate signature: {e}",
            ErrorCodes.SIGNING_FAILED,
            {"original_error": str(e)}
        ) from e

    if not verify_signature(data, signature, private_key.public_key()):
        raise SignatureVerificationError(
            "Cannot verify signature.",
            {"key_size": private_key.key_size}
        )

    logger.debug(f"Signed {len(data)} bytes with {private_key.key_size}-bit RSA key")
    return base64.b64encode(signature).decode('ascii')

