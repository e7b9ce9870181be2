"""
Fluent request builder for httpx.

Starts an httpx.Request from a method and a target, then composes typed
headers (auth, caching, conditionals, content negotiation, ranges) through
chained calls that mutate and return the same request.
"""
from .types import (
    HttpMethod,
    AuthenticationHeaderValue,
    CacheControlHeaderValue,
    EntityTagHeaderValue,
    MediaTypeWithQualityHeaderValue,
    RangeItemHeaderValue,
    RangeHeaderValue,
    RangeConditionHeaderValue,
    ANY_ENTITY_TAG,
)
from .exceptions import (
    RequestBuilderError,
    InvalidFormatError,
    InvalidUriError,
    OutOfRangeError,
    MissingArgumentError,
)
from .config import BuilderConfig, DEFAULT_CONFIG
from .request import to
from .headers import (
    with_basic_token,
    with_basic_credentials,
    with_bearer_token,
    with_proxy_authorization,
    with_header,
    with_cache_control,
    with_connection_close,
    with_transfer_encoding_chunked,
    with_max_forwards,
    with_referrer,
    with_date,
    with_if_modified_since,
    with_if_unmodified_since,
    with_accept,
    with_range,
    with_if_range,
    with_if_match,
    with_if_none_match,
)
from .typed_headers import RequestHeaders, typed_headers
from .builder import RequestBuilder

__all__ = [
    # Types
    "HttpMethod",
    "AuthenticationHeaderValue",
    "CacheControlHeaderValue",
    "EntityTagHeaderValue",
    "MediaTypeWithQualityHeaderValue",
    "RangeItemHeaderValue",
    "RangeHeaderValue",
    "RangeConditionHeaderValue",
    "ANY_ENTITY_TAG",
    # Exceptions
    "RequestBuilderError",
    "InvalidFormatError",
    "InvalidUriError",
    "OutOfRangeError",
    "MissingArgumentError",
    # Config
    "BuilderConfig",
    "DEFAULT_CONFIG",
    # Origination
    "to",
    # Header composition
    "with_basic_token",
    "with_basic_credentials",
    "with_bearer_token",
    "with_proxy_authorization",
    "with_header",
    "with_cache_control",
    "with_connection_close",
    "with_transfer_encoding_chunked",
    "with_max_forwards",
    "with_referrer",
    "with_date",
    "with_if_modified_since",
    "with_if_unmodified_since",
    "with_accept",
    "with_range",
    "with_if_range",
    "with_if_match",
    "with_if_none_match",
    # Typed view
    "RequestHeaders",
    "typed_headers",
    # Builder
    "RequestBuilder",
]

__version__ = "0.1.0"
