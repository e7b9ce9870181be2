"""
Request origination: start an httpx.Request from a method and a target.
"""
import logging
from typing import Union

import httpx

from .exceptions import InvalidFormatError, InvalidUriError, MissingArgumentError
from .types import HttpMethod

logger = logging.getLogger(__name__)


def parse_uri(uri: Union[httpx.URL, str], what: str = "uri") -> httpx.URL:
    """Parse uri into an httpx.URL. No network or DNS lookup happens."""
    if uri is None:
        raise MissingArgumentError(f"{what} is required")
    if isinstance(uri, httpx.URL):
        return uri
    try:
        return httpx.URL(uri)
    except httpx.InvalidURL as exc:
        raise InvalidUriError(f"Invalid {what} {uri!r}: {exc}") from exc


def normalize_method(method: Union[HttpMethod, str]) -> str:
    """Return the upper-case method name."""
    if method is None:
        raise MissingArgumentError("method is required")
    name = method.value if isinstance(method, HttpMethod) else str(method)
    if not name.strip():
        raise InvalidFormatError("method must not be empty")
    return name.strip().upper()


def to(method: Union[HttpMethod, str], uri: Union[httpx.URL, str]) -> httpx.Request:
    """Start a request for method addressed to uri.

    Args:
        method: HttpMethod member or method name.
        uri: httpx.URL or URI string, absolute or relative.

    Returns:
        A new httpx.Request with no caller-composed headers.

    Raises:
        InvalidUriError: uri is a string httpx cannot parse.
        MissingArgumentError: method or uri is None.
    """
    name = normalize_method(method)
    url = parse_uri(uri)
    logger.debug(f"to: method={name}, url={url}")
    return httpx.Request(name, url)
