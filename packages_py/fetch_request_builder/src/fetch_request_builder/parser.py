"""
Header text formatting and parsing for typed request header values.
"""
import re
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Iterable, List, Optional

from .exceptions import (
    InvalidFormatError,
    MissingArgumentError,
    OutOfRangeError,
    RequestBuilderError,
)
from .types import (
    AuthenticationHeaderValue,
    CacheControlHeaderValue,
    EntityTagHeaderValue,
    MediaTypeWithQualityHeaderValue,
    RangeConditionHeaderValue,
    RangeHeaderValue,
    RangeItemHeaderValue,
    is_token,
)

ENTITY_TAG_LIST_PATTERN = re.compile(r'(W/)?"[^"]*"|\*')


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def to_utc(value: datetime) -> datetime:
    """Return value in UTC; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_http_date(value: datetime) -> str:
    """Format datetime as an IMF-fixdate, e.g. 'Sun, 06 Nov 1994 08:49:37 GMT'."""
    return format_datetime(to_utc(value), usegmt=True)


def parse_http_date(header: Optional[str]) -> Optional[datetime]:
    """Parse HTTP-date to an aware UTC datetime."""
    if not header:
        return None
    try:
        dt = parsedate_to_datetime(header.strip())
    except (TypeError, ValueError):
        return None
    if dt is None:
        return None
    return to_utc(dt)


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------


def format_authentication(value: AuthenticationHeaderValue) -> str:
    """Build Authorization header value from scheme and parameter."""
    if value.parameter:
        return f"{value.scheme} {value.parameter}"
    return value.scheme


def parse_authentication(header: Optional[str]) -> Optional[AuthenticationHeaderValue]:
    """Parse Authorization header into scheme and parameter."""
    if not header or not header.strip():
        return None
    parts = header.strip().split(None, 1)
    parameter = parts[1] if len(parts) > 1 else None
    try:
        return AuthenticationHeaderValue(parts[0], parameter)
    except RequestBuilderError:
        return None


# ---------------------------------------------------------------------------
# Cache-Control
# ---------------------------------------------------------------------------


def _quote(value: str) -> str:
    if is_token(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return re.sub(r"\\(.)", r"\1", value[1:-1])
    return value


def format_cache_control(directives: CacheControlHeaderValue) -> str:
    """Build Cache-Control header from directives."""
    parts: List[str] = []

    if directives.no_cache:
        parts.append("no-cache")
    if directives.no_store:
        parts.append("no-store")
    if directives.max_age is not None:
        parts.append(f"max-age={directives.max_age}")
    if directives.max_stale_limit is not None:
        parts.append(f"max-stale={directives.max_stale_limit}")
    elif directives.max_stale:
        parts.append("max-stale")
    if directives.min_fresh is not None:
        parts.append(f"min-fresh={directives.min_fresh}")
    if directives.no_transform:
        parts.append("no-transform")
    if directives.only_if_cached:
        parts.append("only-if-cached")
    for name, value in directives.extensions:
        parts.append(name if value is None else f"{name}={_quote(value)}")

    return ", ".join(parts)


def parse_cache_control(header: Optional[str]) -> Optional[CacheControlHeaderValue]:
    """Parse Cache-Control header into directives."""
    if not header or not header.strip():
        return None

    values = {}
    extensions = []

    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            key, value = part.split("=", 1)
            key = key.strip()
            value = value.strip()
        else:
            key = part
            value = None

        lower = key.lower()
        if lower == "no-cache":
            values["no_cache"] = True
        elif lower == "no-store":
            values["no_store"] = True
        elif lower == "no-transform":
            values["no_transform"] = True
        elif lower == "only-if-cached":
            values["only_if_cached"] = True
        elif lower == "max-stale" and value is None:
            values["max_stale"] = True
        elif lower in ("max-age", "max-stale", "min-fresh") and value:
            try:
                seconds = int(_unquote(value))
            except ValueError:
                continue
            field_name = "max_stale_limit" if lower == "max-stale" else lower.replace("-", "_")
            values[field_name] = seconds
        elif is_token(key):
            extensions.append((key, None if value is None else _unquote(value)))

    try:
        return CacheControlHeaderValue(extensions=tuple(extensions), **values)
    except RequestBuilderError:
        return None


# ---------------------------------------------------------------------------
# Entity tags
# ---------------------------------------------------------------------------


def format_entity_tag(value: EntityTagHeaderValue) -> str:
    """Build entity tag text, with W/ prefix when weak."""
    return f"W/{value.tag}" if value.is_weak else value.tag


def parse_entity_tag(header: Optional[str]) -> EntityTagHeaderValue:
    """Parse a single entity tag. Raises InvalidFormatError when malformed."""
    if header is None:
        raise MissingArgumentError("entity tag is required")
    text = header.strip()
    if text.startswith("W/"):
        return EntityTagHeaderValue(text[2:], is_weak=True)
    return EntityTagHeaderValue(text)


def parse_entity_tag_list(header: Optional[str]) -> List[EntityTagHeaderValue]:
    """Parse a comma-separated entity tag list (If-Match, If-None-Match)."""
    if not header:
        return []
    return [parse_entity_tag(m.group()) for m in ENTITY_TAG_LIST_PATTERN.finditer(header)]


# ---------------------------------------------------------------------------
# Accept
# ---------------------------------------------------------------------------


def format_quality(quality: float, precision: int = 3) -> str:
    """Format a q-value with at most precision decimals, trailing zeros dropped."""
    text = f"{quality:.{precision}f}".rstrip("0").rstrip(".")
    if quality > 0 and not text.strip("0."):
        raise OutOfRangeError(
            f"quality {quality} rounds to 0 at {precision} decimal place(s)"
        )
    return text or "0"


def format_media_type(value: MediaTypeWithQualityHeaderValue, precision: int = 3) -> str:
    """Build one Accept entry; q parameter only when quality is set."""
    if value.quality is None:
        return value.media_type
    return f"{value.media_type}; q={format_quality(value.quality, precision)}"


def parse_accept(header: Optional[str]) -> List[MediaTypeWithQualityHeaderValue]:
    """Parse Accept header into media-range entries, skipping malformed ones."""
    if not header:
        return []

    entries: List[MediaTypeWithQualityHeaderValue] = []
    for item in header.split(","):
        params = [p.strip() for p in item.split(";")]
        media_type = params[0]
        if not media_type:
            continue
        quality = None
        for param in params[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value.strip())
                except ValueError:
                    quality = None
        try:
            entries.append(MediaTypeWithQualityHeaderValue(media_type, quality))
        except RequestBuilderError:
            continue
    return entries


# ---------------------------------------------------------------------------
# Range / If-Range
# ---------------------------------------------------------------------------


def _position(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def format_range(value: RangeHeaderValue) -> str:
    """Build Range header, e.g. 'bytes=20-50'."""
    specs = ", ".join(f"{_position(r.start)}-{_position(r.end)}" for r in value.ranges)
    return f"{value.unit}={specs}"


def parse_range(header: Optional[str]) -> Optional[RangeHeaderValue]:
    """Parse Range header; None when malformed."""
    if not header or "=" not in header:
        return None
    unit, _, specs = header.partition("=")
    items: List[RangeItemHeaderValue] = []
    try:
        for spec in specs.split(","):
            start, sep, end = spec.strip().partition("-")
            if not sep:
                return None
            items.append(
                RangeItemHeaderValue(
                    int(start) if start.strip() else None,
                    int(end) if end.strip() else None,
                )
            )
        return RangeHeaderValue(ranges=tuple(items), unit=unit.strip())
    except (ValueError, RequestBuilderError):
        return None


def format_range_condition(value: RangeConditionHeaderValue) -> str:
    """Build If-Range header from its date or entity-tag form."""
    if value.entity_tag is not None:
        return format_entity_tag(value.entity_tag)
    return format_http_date(value.date)


def parse_range_condition(header: Optional[str]) -> Optional[RangeConditionHeaderValue]:
    """Parse If-Range header into its date or entity-tag form."""
    if not header or not header.strip():
        return None
    text = header.strip()
    try:
        if text.startswith('"') or text.startswith("W/"):
            return RangeConditionHeaderValue(entity_tag=parse_entity_tag(text))
        date = parse_http_date(text)
        return RangeConditionHeaderValue(date=date) if date else None
    except RequestBuilderError:
        return None


# ---------------------------------------------------------------------------
# Token lists (Connection, Transfer-Encoding)
# ---------------------------------------------------------------------------


def split_tokens(values: Iterable[str]) -> List[str]:
    """Split comma-separated header values into non-empty tokens."""
    tokens: List[str] = []
    for value in values:
        tokens.extend(t.strip() for t in value.split(",") if t.strip())
    return tokens


def has_token(values: Iterable[str], token: str) -> bool:
    """Check if token appears in the header values (case-insensitive)."""
    return token.lower() in (t.lower() for t in split_tokens(values))


def parse_non_negative_int(header: Optional[str]) -> Optional[int]:
    """Parse 1*DIGIT header value."""
    if not header:
        return None
    text = header.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def ensure_token(value: str, what: str) -> str:
    """Raise InvalidFormatError unless value is a token."""
    if not is_token(value):
        raise InvalidFormatError(f"Invalid {what}: {value!r}")
    return value
