"""
Exception classes for the OCI HTTP signer
"""

from typing import Optional, Dict, Any


class OCISignerError(Exception):
    """Base exception for all OCI signer errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ErrorCodes:
    """Standard error codes for signer operations"""
    
    # Validation errors
    INVALID_URL = "INVALID_URL"
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"
    INVALID_BODY = "INVALID_BODY"
    PRIVATE_KEY_FILE_NOT_FOUND = "PRIVATE_KEY_FILE_NOT_FOUND"
    
    # Signing errors
    INVALID_PRIVATE_KEY = "INVALID_PRIVATE_KEY"
    SIGNING_FAILED = "SIGNING_FAILED"
    SIGNATURE_VERIFICATION_FAILED = "SIGNATURE_VERIFICATION_FAILED"
    
    # Configuration errors
    CONFIG_FILE_ERROR = "CONFIG_FILE_ERROR"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"


class ValidationError(OCISignerError):
    """Exception raised when signer parameters fail validation"""
    pass


class InvalidUrlError(ValidationError):
    """Exception raised for URLs that are not well-formed absolute URLs"""
    
    def __init__(self, url: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"URL is invalid: {url}", ErrorCodes.INVALID_URL, {"url": url, **(details or {})})
        self.url = url


class InvalidBodyError(ValidationError):
    """Exception raised for request bodies that cannot be signed"""
    
    def __init__(self, body_type: type):
        super().__init__(
            f"Body must be string, bytes, or None, got {body_type}",
            ErrorCodes.INVALID_BODY,
            {"body_type": body_type.__name__}
        )


class MissingCredentialsError(ValidationError):
    """Exception raised when required credential fields are empty"""
    
    def __init__(self, missing_fields):
        super().__init__(
            "OCI user ID, tenancy ID, key fingerprint and private key filename are required.",
            ErrorCodes.MISSING_CREDENTIALS,
            {"missing_fields": list(missing_fields)}
        )
        self.missing_fields = list(missing_fields)


class PrivateKeyFileNotFoundError(OCISignerError):
    """Exception raised when the configured private key file does not exist"""
    
    def __init__(self, filename: str):
        super().__init__(
            f"Private key file does not exist: {filename}",
            ErrorCodes.PRIVATE_KEY_FILE_NOT_FOUND,
            {"filename": filename}
        )
        self.filename = filename


class SigningError(OCISignerError):
    """Exception raised when a signature cannot be produced"""
    
    def __init__(self, message: str, error_code: str = ErrorCodes.SIGNING_FAILED, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class SignatureVerificationError(SigningError):
    """Exception raised when a freshly computed signature fails self-verification"""
    
    def __init__(self, message: str = "Cannot verify signature.", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.SIGNATURE_VERIFICATION_FAILED, details)


class ConfigurationError(OCISignerError):
    """Exception raised for configuration loading errors"""
    pass
