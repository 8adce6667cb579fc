"""
Type definitions for request signing

This module provides the request data class, HTTP method enumeration and
header name constants used by the OCI request signer.
"""

from typing import Dict, Optional, Union
from dataclasses import dataclass
from enum import Enum

from ..exceptions import InvalidBodyError


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


# Signed header names
SIGNING_HEADER_DATE = 'date'
SIGNING_HEADER_REQUEST_TARGET = '(request-target)'
SIGNING_HEADER_HOST = 'host'
SIGNING_HEADER_CONTENT_LENGTH = 'content-length'
SIGNING_HEADER_CONTENT_TYPE = 'content-type'
SIGNING_HEADER_X_CONTENT_SHA256 = 'x-content-sha256'

CONTENT_TYPE_APPLICATION_JSON = 'application/json'

SIGNATURE_VERSION = '1'
SIGNATURE_ALGORITHM = 'rsa-sha256'

# Methods whose body is covered by the signature
BODY_METHODS = (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)

# Type aliases for convenience
HeaderSet = Dict[str, str]
RequestBody = Union[str, bytes, None]


@dataclass
class SigningRequest:
    """
    Request to be signed

    Attributes:
        url: Absolute request URL
        method: HTTP method (normalized to upper case)
        body: Optional request body; text is encoded as UTF-8
        content_type: Value of the content-type header
        date: Optional RFC 7231 date; the current time is used when absent
    """
    url: str
    method: Union[HttpMethod, str] = HttpMethod.GET
    body: RequestBody = None
    content_type: Optional[str] = CONTENT_TYPE_APPLICATION_JSON
    date: Optional[str] = None

    def __post_init__(self):
        """Normalize method and body after initialization"""
        method = self.method.value if isinstance(self.method, HttpMethod) else str(self.method)
        self.method = method.upper()

        if self.body is None:
            self.body = b""
        elif isinstance(self.body, str):
            self.body = self.body.encode('utf-8')
        elif not isinstance(self.body, bytes):
            raise InvalidBodyError(type(self.body))

        if self.content_type is None:
            self.content_type = ''
