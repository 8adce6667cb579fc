"""
Header selection and canonical signing string construction

This module decides which headers participate in a signature for a given
HTTP method, resolves each of them to a concrete value and joins them into
the exact string that gets signed.
"""

import base64
import hashlib
from email.utils import formatdate
from typing import List, Optional, Tuple, Union
from urllib.parse import urlsplit, SplitResult

from .types import (
    HttpMethod,
    HeaderSet,
    RequestBody,
    SigningRequest,
    BODY_METHODS,
    SIGNING_HEADER_DATE,
    SIGNING_HEADER_REQUEST_TARGET,
    SIGNING_HEADER_HOST,
    SIGNING_HEADER_CONTENT_LENGTH,
    SIGNING_HEADER_CONTENT_TYPE,
    SIGNING_HEADER_X_CONTENT_SHA256,
)

GENERIC_HEADER_NAMES = (
    SIGNING_HEADER_DATE,
    SIGNING_HEADER_REQUEST_TARGET,
    SIGNING_HEADER_HOST,
)

BODY_HEADER_NAMES = (
    SIGNING_HEADER_CONTENT_LENGTH,
    SIGNING_HEADER_CONTENT_TYPE,
    SIGNING_HEADER_X_CONTENT_SHA256,
)


def should_hash_body(method: Union[HttpMethod, str]) -> bool:
    """
    Check whether the body headers are signed for a method.

    Args:
        method: HTTP method

    Returns:
        bool: True for POST, PUT and PATCH
    """
    name = method.value if isinstance(method, HttpMethod) else str(method)
    return name.upper() in {m.value for m in BODY_METHODS}


def select_header_names(method: Union[HttpMethod, str]) -> List[str]:
    """
    Select the names of the headers to sign, in signing order.

    Args:
        method: HTTP method

    Returns:
        list: Header names; the generic headers first, then the body headers
              for methods that carry a body
    """
    names = list(GENERIC_HEADER_NAMES)
    if should_hash_body(method):
        names.extend(BODY_HEADER_NAMES)
    return names


def format_http_date(timestamp: Optional[float] = None) -> str:
    """
    Format a timestamp as an RFC 7231 date in GMT.

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: Date such as ``Tue, 01 Jan 2024 12:00:00 GMT``
    """
    return formatdate(timestamp, usegmt=True)


def get_body_hash_base64(body: RequestBody) -> str:
    """Base64 of the raw SHA-256 digest of the body."""
    if body is None:
        body = b""
    elif isinstance(body, str):
        body = body.encode('utf-8')
    return base64.b64encode(hashlib.sha256(body).digest()).decode('ascii')


def get_content_length(body: RequestBody) -> int:
    """Length of the body in bytes."""
    if body is None:
        return 0
    if isinstance(body, str):
        return len(body.encode('utf-8'))
    return len(body)


def get_request_target(method: str, parts: SplitResult) -> str:
    """
    Build the ``(request-target)`` value.

    The path is used verbatim; the raw query string is appended only when
    it is non-empty.
    """
    uri = parts.path
    if parts.query:
        uri += '?' + parts.query
    return f"{method.lower()} {uri}"


def get_host(parts: SplitResult) -> str:
    """
    Extract the host component of a URL.

    User-info and port are dropped, case is preserved and IPv6 literals keep
    their brackets.
    """
    host_port = parts.netloc.rpartition('@')[2]
    if host_port.startswith('['):
        return host_port[:host_port.find(']') + 1]
    return host_port.partition(':')[0]


def build_header_values(request: SigningRequest) -> HeaderSet:
    """
    Resolve every header selected for the request to its value.

    Args:
        request: Request being signed

    Returns:
        dict: Header name to value, in signing order
    """
    parts = urlsplit(request.url)

    header_set: HeaderSet = {}
    for header_name in select_header_names(request.method):
        if header_name == SIGNING_HEADER_DATE:
            header_set[header_name] = request.date or format_http_date()
        elif header_name == SIGNING_HEADER_REQUEST_TARGET:
            header_set[header_name] = get_request_target(request.method, parts)
        elif header_name == SIGNING_HEADER_HOST:
            header_set[header_name] = get_host(parts)
        elif header_name == SIGNING_HEADER_CONTENT_LENGTH:
            header_set[header_name] = str(get_content_length(request.body))
        elif header_name == SIGNING_HEADER_CONTENT_TYPE:
            header_set[header_name] = request.content_type
        elif header_name == SIGNING_HEADER_X_CONTENT_SHA256:
            header_set[header_name] = get_body_hash_base64(request.body)

    return header_set


def format_header_line(name: str, value: str) -> str:
    """Format a header as a ``name: value`` line."""
    return f"{name}: {value}"


def parse_header_line(line: str) -> Tuple[str, str]:
    """
    Split a ``name: value`` header line.

    Raises:
        ValueError: If the line has no ``": "`` separator
    """
    name, separator, value = line.partition(': ')
    if not separator:
        raise ValueError(f"Invalid header line: {line!r}")
    return name, value


def build_signing_string(header_set: HeaderSet) -> str:
    """
    Join the resolved headers into the canonical signing string.

    Lines keep the header set's order and are joined by ``\\n`` with no
    trailing newline.
    """
    return '\n'.join(format_header_line(name, value) for name, value in header_set.items())
