"""
HTTP client integration for request signing

This module plugs the signer into the ``requests`` library as an
authentication handler, so that prepared requests carry the OCI signature
headers. Sending the request stays with the caller.
"""

import logging
from typing import Optional

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from ..config import SignerConfig
from .headers import parse_header_line
from .key_provider import KeyProvider
from .signer import Signer
from .types import CONTENT_TYPE_APPLICATION_JSON

logger = logging.getLogger(__name__)


class SignerAuth(AuthBase):
    """
    ``requests`` authentication handler adding OCI signature headers.

    A new ``Signer`` is created for every request, since a signer caches the
    header set of the first request it signs.
    """

    def __init__(
        self,
        config: Optional[SignerConfig] = None,
        key_provider: Optional[KeyProvider] = None
    ):
        """
        Initialize the auth handler.

        Args:
            config: Credentials; read from the environment when None
            key_provider: Optional key provider overriding the credentials
        """
        self.config = config if config is not None else SignerConfig.from_env()
        self.key_provider = key_provider

    def create_signer(self) -> Signer:
        return Signer.from_config(self.config, key_provider=self.key_provider)

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        # Signed length and digest must cover the bytes actually sent
        if isinstance(request.body, str):
            request.body = request.body.encode('utf-8')
            request.prepare_content_length(request.body)

        content_type = request.headers.get('Content-Type', CONTENT_TYPE_APPLICATION_JSON)

        signer = self.create_signer()
        headers = signer.get_headers(
            request.url,
            request.method,
            request.body,
            content_type,
            request.headers.get('Date'),
        )

        for line in headers:
            name, value = parse_header_line(line)
            request.headers[name] = value

        logger.debug(f"Signed {request.method} request to {request.url}")
        return request


def create_signing_session(
    config: Optional[SignerConfig] = None,
    key_provider: Optional[KeyProvider] = None,
    session: Optional[requests.Session] = None
) -> requests.Session:
    """
    Create a ``requests`` session that signs every request.

    Args:
        config: Credentials; read from the environment when None
        key_provider: Optional key provider overriding the credentials
        session: Existing session to configure

    Returns:
        requests.Session: Session with ``SignerAuth`` attached
    """
    session = session or requests.Session()
    session.auth = SignerAuth(config, key_provider)
    return session
