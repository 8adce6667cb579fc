"""
OCI HTTP signer - Request Signing Module

API key request signing with RSA-SHA256 signatures. This module builds the
canonical signing string for a request, signs it and assembles the headers
to send with it.
"""

from .types import (
    HttpMethod,
    SigningRequest,
    HeaderSet,
    CONTENT_TYPE_APPLICATION_JSON,
    SIGNING_HEADER_DATE,
    SIGNING_HEADER_REQUEST_TARGET,
    SIGNING_HEADER_HOST,
    SIGNING_HEADER_CONTENT_LENGTH,
    SIGNING_HEADER_CONTENT_TYPE,
    SIGNING_HEADER_X_CONTENT_SHA256,
)

from .headers import (
    select_header_names,
    build_header_values,
    build_signing_string,
    get_body_hash_base64,
    format_http_date,
    parse_header_line,
)

from .crypto import (
    load_private_key,
    sign_string,
    verify_signature,
)

from .key_provider import (
    KeyProvider,
    CredentialsKeyProvider,
    StaticKeyProvider,
)

from .signer import (
    Signer,
    validate_url,
)

from .integration import (
    SignerAuth,
    create_signing_session,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'Signer',
    'validate_url',
    # Types
    'HttpMethod',
    'SigningRequest',
    'HeaderSet',
    'CONTENT_TYPE_APPLICATION_JSON',
    'SIGNING_HEADER_DATE',
    'SIGNING_HEADER_REQUEST_TARGET',
    'SIGNING_HEADER_HOST',
    'SIGNING_HEADER_CONTENT_LENGTH',
    'SIGNING_HEADER_CONTENT_TYPE',
    'SIGNING_HEADER_X_CONTENT_SHA256',
    # Canonicalization
    'select_header_names',
    'build_header_values',
    'build_signing_string',
    'get_body_hash_base64',
    'format_http_date',
    'parse_header_line',
    # Signature engine
    'load_private_key',
    'sign_string',
    'verify_signature',
    # Key providers
    'KeyProvider',
    'CredentialsKeyProvider',
    'StaticKeyProvider',
    # HTTP Integration
    'SignerAuth',
    'create_signing_session',
]
