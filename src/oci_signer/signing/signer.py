"""
OCI API key request signer

This module provides the main signer: it validates the request parameters,
selects and resolves the headers to sign, signs the canonical signing string
with the configured RSA key and assembles the headers to send, including the
``Authorization`` header.
"""

import logging
from typing import Dict, List, Mapping, Optional, Union
from urllib.parse import urlsplit

from ..config import SignerConfig
from ..exceptions import (
    InvalidUrlError,
    MissingCredentialsError,
    PrivateKeyFileNotFoundError,
)
from .crypto import PrivateKeyMaterial, sign_string
from .headers import (
    build_header_values,
    build_signing_string,
    format_header_line,
    get_body_hash_base64,
    get_host,
    parse_header_line,
    select_header_names,
)
from .key_provider import CredentialsKeyProvider, KeyProvider
from .types import (
    CONTENT_TYPE_APPLICATION_JSON,
    SIGNATURE_ALGORITHM,
    SIGNATURE_VERSION,
    SIGNING_HEADER_REQUEST_TARGET,
    HeaderSet,
    HttpMethod,
    RequestBody,
    SigningRequest,
)

logger = logging.getLogger(__name__)


def validate_url(url: str) -> None:
    """
    Check that a URL is a well-formed absolute URL.

    Args:
        url: URL to validate

    Raises:
        InvalidUrlError: If the URL has no scheme or host, contains whitespace
            or control characters, or has an invalid port
    """
    if not isinstance(url, str) or not url:
        raise InvalidUrlError(str(url))

    if any(c.isspace() or ord(c) < 0x20 or ord(c) == 0x7f for c in url):
        raise InvalidUrlError(url)

    try:
        parts = urlsplit(url)
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise InvalidUrlError(url, {"original_error": str(e)}) from e

    if not parts.scheme or not parts.netloc or not get_host(parts):
        raise InvalidUrlError(url)


class Signer:
    """
    Signer producing OCI API key signature headers.

    The header set is computed on the first signing call and cached for the
    lifetime of the instance: later calls reuse the first request's date,
    request target, host and body headers even when called with different
    arguments. Create a new ``Signer`` for every distinct request.

    Instances are not thread safe.
    """

    def __init__(
        self,
        tenancy_id: Optional[str] = None,
        user_id: Optional[str] = None,
        key_fingerprint: Optional[str] = None,
        private_key_filename: Optional[str] = None,
        *,
        key_provider: Optional[KeyProvider] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        """
        Initialize the signer.

        Credentials that are not given explicitly are read from the
        ``OCI_TENANCY_ID``, ``OCI_USER_ID``, ``OCI_KEY_FINGERPRINT`` and
        ``OCI_PRIVATE_KEY_FILENAME`` environment variables.

        Args:
            tenancy_id: Tenancy OCID
            user_id: User OCID
            key_fingerprint: API key fingerprint
            private_key_filename: Path to the PEM private key
            key_provider: Optional key provider; overrides the credentials
            environ: Environment mapping (defaults to ``os.environ``)
        """
        self.config = SignerConfig.from_env(
            environ,
            tenancy_id=tenancy_id,
            user_id=user_id,
            key_fingerprint=key_fingerprint,
            private_key_filename=private_key_filename,
        )
        self._key_provider = key_provider
        self._headers_to_sign: Optional[HeaderSet] = None
        self._signed_request: Optional[SigningRequest] = None

    @classmethod
    def from_config(cls, config: SignerConfig, key_provider: Optional[KeyProvider] = None) -> 'Signer':
        """
        Create a signer from a resolved configuration.

        The environment is not consulted for fields left empty in ``config``.
        """
        return cls(
            tenancy_id=config.tenancy_id,
            user_id=config.user_id,
            key_fingerprint=config.key_fingerprint,
            private_key_filename=config.private_key_filename,
            key_provider=key_provider,
            environ={},
        )

    def set_key_provider(self, key_provider: KeyProvider) -> None:
        """Use ``key_provider`` for the private key and key ID."""
        self._key_provider = key_provider

    @property
    def has_key_provider(self) -> bool:
        return self._key_provider is not None

    @property
    def key_provider(self) -> KeyProvider:
        """The provider resolving key material for this signer."""
        if self._key_provider is not None:
            return self._key_provider
        return CredentialsKeyProvider(self.config)

    def get_headers(
        self,
        url: str,
        method: Union[HttpMethod, str] = HttpMethod.GET,
        body: RequestBody = None,
        content_type: Optional[str] = CONTENT_TYPE_APPLICATION_JSON,
        date: Optional[str] = None
    ) -> List[str]:
        """
        Build the signed headers for a request.

        Args:
            url: Absolute request URL
            method: HTTP method
            body: Optional request body
            content_type: Content type of the body
            date: Optional RFC 7231 date (current time if None)

        Returns:
            list: ``name: value`` header lines to send, ending with the
                  ``Authorization`` header

        Raises:
            InvalidUrlError: If the URL is malformed
            MissingCredentialsError: If credentials are incomplete
            PrivateKeyFileNotFoundError: If the key file does not exist
            SigningError: If the signature cannot be produced or verified
        """
        self.validate_parameters(url)

        request = SigningRequest(url=url, method=method, body=body, content_type=content_type, date=date)
        headers_to_sign = self.get_headers_to_sign(request)
        signing_string = build_signing_string(headers_to_sign)
        private_key = self.key_provider.get_private_key()
        signature = self.calculate_signature(signing_string, private_key)

        headers = [
            format_header_line(name, value)
            for name, value in headers_to_sign.items()
            if name != SIGNING_HEADER_REQUEST_TARGET
        ]
        key_id = self.get_key_id()
        headers.append(self.get_authorization_header(key_id, ' '.join(headers_to_sign), signature))

        logger.debug(f"Signed {request.method} request to {url} with key ID: {key_id}")
        return headers

    def get_headers_dict(self, *args, **kwargs) -> Dict[str, str]:
        """Same as ``get_headers`` but returned as a name to value mapping."""
        headers = {}
        for line in self.get_headers(*args, **kwargs):
            name, value = parse_header_line(line)
            headers[name] = value
        return headers

    def get_signing_string(
        self,
        url: str,
        method: Union[HttpMethod, str] = HttpMethod.GET,
        body: RequestBody = None,
        content_type: Optional[str] = CONTENT_TYPE_APPLICATION_JSON,
        date: Optional[str] = None
    ) -> str:
        """
        Build the canonical signing string.

        Uses the cached header set when one has already been computed.
        """
        request = SigningRequest(url=url, method=method, body=body, content_type=content_type, date=date)
        return build_signing_string(self.get_headers_to_sign(request))

    def get_headers_to_sign(self, request: SigningRequest) -> HeaderSet:
        """
        Resolve the header set for a request, computing it only once.

        Args:
            request: Request being signed

        Returns:
            dict: Cached header name to value mapping
        """
        if self._headers_to_sign is not None:
            if request != self._signed_request:
                logger.warning(
                    f"Reusing header set computed for {self._signed_request.method} "
                    f"{self._signed_request.url}; arguments for {request.method} {request.url} are ignored"
                )
            return self._headers_to_sign

        self._headers_to_sign = build_header_values(request)
        self._signed_request = request
        return self._headers_to_sign

    def calculate_signature(self, signing_string: str, private_key: PrivateKeyMaterial) -> str:
        """
        Sign and self-verify a signing string.

        Returns:
            str: Base64 encoded RSA-SHA256 signature
        """
        return sign_string(signing_string, private_key)

    def get_key_id(self) -> str:
        return self.key_provider.get_key_id()

    def get_body_hash_base64(self, body: RequestBody) -> str:
        return get_body_hash_base64(body)

    def get_signing_headers_names(self, method: Union[HttpMethod, str]) -> List[str]:
        return select_header_names(method)

    def get_authorization_header(self, key_id: str, signed_headers: str, signature: str) -> str:
        """
        Format the Authorization header line.

        Args:
            key_id: Key identifier
            signed_headers: Space separated signed header names
            signature: Base64 encoded signature
        """
        return (
            f'Authorization: Signature version="{SIGNATURE_VERSION}",'
            f'keyId="{key_id}",'
            f'algorithm="{SIGNATURE_ALGORITHM}",'
            f'headers="{signed_headers}",'
            f'signature="{signature}"'
        )

    def validate_parameters(self, url: str) -> None:
        """
        Validate the URL and, without a key provider, the credentials.

        Raises:
            InvalidUrlError: If the URL is malformed
            MissingCredentialsError: If any credential field is empty
            PrivateKeyFileNotFoundError: If the key file does not exist
        """
        validate_url(url)

        if self.has_key_provider:
            return

        missing = self.config.missing_fields()
        if missing:
            raise MissingCredentialsError(missing)

        key_provider = CredentialsKeyProvider(self.config)
        if not key_provider.key_file_exists():
            raise PrivateKeyFileNotFoundError(self.config.private_key_filename)
