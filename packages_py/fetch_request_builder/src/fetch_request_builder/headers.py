"""
Header composition for httpx.Request.

Every function mutates one header on the given request and returns that same
request, so calls compose without intermediate binding:

    with_range(with_bearer_token(request, token), 0, 99)

Arguments are validated and formatted before the header collection is
touched; a failing call leaves the request unchanged.
"""
import base64
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Union

import httpx

from .config import BuilderConfig, _mask_value, resolve_config
from .exceptions import InvalidFormatError, MissingArgumentError, OutOfRangeError
from .parser import (
    ensure_token,
    format_authentication,
    format_cache_control,
    format_entity_tag,
    format_http_date,
    format_media_type,
    format_range,
    format_range_condition,
    split_tokens,
)
from .request import parse_uri
from .types import (
    AuthenticationHeaderValue,
    CacheControlHeaderValue,
    EntityTagHeaderValue,
    MediaTypeWithQualityHeaderValue,
    RangeConditionHeaderValue,
    RangeHeaderValue,
    check_field_value,
)

logger = logging.getLogger(__name__)

IfRangeCondition = Union[datetime, EntityTagHeaderValue, RangeConditionHeaderValue]


def _require(value, name: str):
    if value is None:
        raise MissingArgumentError(f"{name} is required")
    return value


def _require_datetime(value, name: str) -> datetime:
    _require(value, name)
    if not isinstance(value, datetime):
        raise InvalidFormatError(f"{name} must be a datetime, got {type(value).__name__}")
    return value


def _set(request: httpx.Request, name: str, value: str) -> httpx.Request:
    request.headers[name] = value
    return request


def _set_or_remove(request: httpx.Request, name: str, values: List[str]) -> httpx.Request:
    if values:
        request.headers[name] = ", ".join(values)
    else:
        request.headers.pop(name, None)
    return request


def _toggle_token(request: httpx.Request, name: str, token: str, enabled: bool) -> httpx.Request:
    tokens = [
        t for t in split_tokens(request.headers.get_list(name)) if t.lower() != token
    ]
    if enabled:
        tokens.append(token)
    return _set_or_remove(request, name, tokens)


def _append(request: httpx.Request, name: str, entries: List[str]) -> httpx.Request:
    existing = [v.strip() for v in request.headers.get_list(name) if v.strip()]
    return _set_or_remove(request, name, existing + entries)


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


def _with_authorization(
    request: httpx.Request,
    name: str,
    value: AuthenticationHeaderValue,
    config: Optional[BuilderConfig],
) -> httpx.Request:
    config = resolve_config(config)
    logger.debug(
        f"{name}: scheme={value.scheme}, "
        f"parameter={_mask_value(value.parameter, config.mask_visible_chars)}"
    )
    return _set(request, name, format_authentication(value))


def with_basic_token(
    request: httpx.Request, token: str, *, config: Optional[BuilderConfig] = None
) -> httpx.Request:
    """Set Authorization to Basic with an already-encoded token."""
    _require(request, "request")
    value = AuthenticationHeaderValue("Basic", _require(token, "token"))
    return _with_authorization(request, "Authorization", value, config)


def with_basic_credentials(
    request: httpx.Request,
    username: str,
    password: str,
    *,
    config: Optional[BuilderConfig] = None,
) -> httpx.Request:
    """Set Authorization to Basic base64(username:password)."""
    _require(request, "request")
    _require(username, "username")
    _require(password, "password")
    if ":" in username:
        raise InvalidFormatError("Basic auth username must not contain ':'")
    credentials = f"{username}:{password}"
    token = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
    return with_basic_token(request, token, config=config)


def with_bearer_token(
    request: httpx.Request, token: str, *, config: Optional[BuilderConfig] = None
) -> httpx.Request:
    """Set Authorization to Bearer with the given token."""
    _require(request, "request")
    value = AuthenticationHeaderValue("Bearer", _require(token, "token"))
    return _with_authorization(request, "Authorization", value, config)


def with_proxy_authorization(
    request: httpx.Request,
    scheme: str,
    token: str,
    *,
    config: Optional[BuilderConfig] = None,
) -> httpx.Request:
    """Set Proxy-Authorization to the given scheme and token."""
    _require(request, "request")
    value = AuthenticationHeaderValue(_require(scheme, "scheme"), _require(token, "token"))
    return _with_authorization(request, "Proxy-Authorization", value, config)


# ---------------------------------------------------------------------------
# Generic headers
# ---------------------------------------------------------------------------


def with_header(request: httpx.Request, name: str, *values: str) -> httpx.Request:
    """Replace the named header's values with exactly values, in order.

    Raises:
        MissingArgumentError: name is None or no values are given.
        InvalidFormatError: name is not a token or a value holds CR/LF.
    """
    _require(request, "request")
    ensure_token(_require(name, "name"), "header name")
    if not values:
        raise MissingArgumentError(f"at least one value is required for {name}")
    for value in values:
        check_field_value(_require(value, "value"), f"{name} value")

    logger.debug(f"with_header: {name} <- {len(values)} value(s)")
    request.headers.update(httpx.Headers([(name, value) for value in values]))
    return request


def with_cache_control(
    request: httpx.Request, cache_control: CacheControlHeaderValue
) -> httpx.Request:
    """Replace Cache-Control with the given directive set."""
    _require(request, "request")
    directives = format_cache_control(_require(cache_control, "cache_control"))
    logger.debug(f"with_cache_control: {directives or '<removed>'}")
    return _set_or_remove(request, "Cache-Control", [directives] if directives else [])


def with_connection_close(request: httpx.Request, close: bool) -> httpx.Request:
    """Add or remove the close token of the Connection header."""
    _require(request, "request")
    _require(close, "close")
    logger.debug(f"with_connection_close: close={bool(close)}")
    return _toggle_token(request, "Connection", "close", bool(close))


def with_transfer_encoding_chunked(request: httpx.Request, chunked: bool) -> httpx.Request:
    """Add or remove the chunked coding of the Transfer-Encoding header."""
    _require(request, "request")
    _require(chunked, "chunked")
    logger.debug(f"with_transfer_encoding_chunked: chunked={bool(chunked)}")
    return _toggle_token(request, "Transfer-Encoding", "chunked", bool(chunked))


def with_max_forwards(request: httpx.Request, count: int) -> httpx.Request:
    """Replace Max-Forwards with count."""
    _require(request, "request")
    _require(count, "count")
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidFormatError(f"Max-Forwards must be an int, got {count!r}")
    if count < 0:
        raise OutOfRangeError(f"Max-Forwards must be non-negative, got {count}")
    logger.debug(f"with_max_forwards: {count}")
    return _set(request, "Max-Forwards", str(count))


def with_referrer(request: httpx.Request, referrer: Union[httpx.URL, str]) -> httpx.Request:
    """Replace Referer; strings are parsed as URIs first."""
    _require(request, "request")
    url = parse_uri(referrer, "referrer")
    logger.debug(f"with_referrer: {url}")
    return _set(request, "Referer", str(url))


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def with_date(request: httpx.Request, date: datetime) -> httpx.Request:
    """Replace Date; naive datetimes are taken as UTC."""
    _require(request, "request")
    value = format_http_date(_require_datetime(date, "date"))
    logger.debug(f"with_date: {value}")
    return _set(request, "Date", value)


def with_if_modified_since(request: httpx.Request, date: datetime) -> httpx.Request:
    """Replace If-Modified-Since."""
    _require(request, "request")
    value = format_http_date(_require_datetime(date, "date"))
    logger.debug(f"with_if_modified_since: {value}")
    return _set(request, "If-Modified-Since", value)


def with_if_unmodified_since(request: httpx.Request, date: datetime) -> httpx.Request:
    """Replace If-Unmodified-Since."""
    _require(request, "request")
    value = format_http_date(_require_datetime(date, "date"))
    logger.debug(f"with_if_unmodified_since: {value}")
    return _set(request, "If-Unmodified-Since", value)


# ---------------------------------------------------------------------------
# Content negotiation
# ---------------------------------------------------------------------------


def with_accept(
    request: httpx.Request,
    media_type: str,
    quality: Optional[float] = None,
    *,
    config: Optional[BuilderConfig] = None,
) -> httpx.Request:
    """Append an Accept entry. Without quality no q parameter is written."""
    _require(request, "request")
    config = resolve_config(config)
    entry = MediaTypeWithQualityHeaderValue(_require(media_type, "media_type"), quality)
    text = format_media_type(entry, config.quality_precision)
    logger.debug(f"with_accept: + {text}")
    return _append(request, "Accept", [text])


# ---------------------------------------------------------------------------
# Ranges and entity-tag conditionals
# ---------------------------------------------------------------------------


def with_range(request: httpx.Request, start: int, end: int) -> httpx.Request:
    """Set Range to the single byte range start-end (inclusive)."""
    _require(request, "request")
    _require(start, "start")
    _require(end, "end")
    value = format_range(RangeHeaderValue.of(start, end))
    logger.debug(f"with_range: {value}")
    return _set(request, "Range", value)


def with_if_range(request: httpx.Request, condition: IfRangeCondition) -> httpx.Request:
    """Set If-Range to a date or an entity tag.

    The header holds exactly one form, so setting one replaces the other.
    """
    _require(request, "request")
    _require(condition, "condition")
    if isinstance(condition, datetime):
        condition = RangeConditionHeaderValue(date=condition)
    elif isinstance(condition, EntityTagHeaderValue):
        condition = RangeConditionHeaderValue(entity_tag=condition)
    elif not isinstance(condition, RangeConditionHeaderValue):
        raise InvalidFormatError(
            f"If-Range takes a datetime or an entity tag, got {type(condition).__name__}"
        )
    value = format_range_condition(condition)
    logger.debug(f"with_if_range: {value}")
    return _set(request, "If-Range", value)


def _entity_tags(tags: Sequence[EntityTagHeaderValue], name: str) -> List[str]:
    if not tags:
        raise MissingArgumentError(f"at least one entity tag is required for {name}")
    for tag in tags:
        if not isinstance(_require(tag, "tag"), EntityTagHeaderValue):
            raise InvalidFormatError(f"{name} takes entity tags, got {type(tag).__name__}")
    return [format_entity_tag(tag) for tag in tags]


def with_if_match(request: httpx.Request, *tags: EntityTagHeaderValue) -> httpx.Request:
    """Append entity tags to If-Match."""
    _require(request, "request")
    entries = _entity_tags(tags, "If-Match")
    logger.debug(f"with_if_match: + {', '.join(entries)}")
    return _append(request, "If-Match", entries)


def with_if_none_match(request: httpx.Request, *tags: EntityTagHeaderValue) -> httpx.Request:
    """Append entity tags to If-None-Match."""
    _require(request, "request")
    entries = _entity_tags(tags, "If-None-Match")
    logger.debug(f"with_if_none_match: + {', '.join(entries)}")
    return _append(request, "If-None-Match", entries)
