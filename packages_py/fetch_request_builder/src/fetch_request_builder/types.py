"""
Type definitions for fetch_request_builder.

Header values are immutable and compared by value. They hold the semantic
content of a header; converting them to and from header text is done by
:mod:`fetch_request_builder.parser`.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from .exceptions import InvalidFormatError, MissingArgumentError, OutOfRangeError

if TYPE_CHECKING:
    import httpx


# RFC 9110 token and quoted entity-tag grammar
TOKEN_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
MEDIA_TYPE_PATTERN = re.compile(
    r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+/[!#$%&'*+\-.^_`|~0-9A-Za-z]+$"
)
OPAQUE_TAG_PATTERN = re.compile(r'^"[^"\x00-\x1f\x7f]*"$')


def is_token(value: str) -> bool:
    """Check if value is a valid HTTP token."""
    return bool(TOKEN_PATTERN.match(value))


def check_field_value(value: str, what: str) -> str:
    """Reject header text that would split the header line."""
    if "\r" in value or "\n" in value or "\x00" in value:
        raise InvalidFormatError(f"{what} must not contain CR, LF or NUL: {value!r}")
    return value


def _seconds(value: Union[int, timedelta, None], name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, timedelta):
        value = int(value.total_seconds())
    if value < 0:
        raise OutOfRangeError(f"{name} must be non-negative, got {value}")
    return int(value)


class HttpMethod(str, Enum):
    """Standard HTTP methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    def to(self, uri: Union["httpx.URL", str]) -> "httpx.Request":
        """Start a request for this method addressed to uri."""
        from .request import to

        return to(self, uri)


@dataclass(frozen=True)
class AuthenticationHeaderValue:
    """Authorization / Proxy-Authorization credentials."""

    scheme: str
    """Auth scheme, e.g. Basic or Bearer."""

    parameter: Optional[str] = None
    """Credentials following the scheme, sent verbatim."""

    def __post_init__(self):
        if self.scheme is None:
            raise MissingArgumentError("scheme is required")
        if not is_token(self.scheme):
            raise InvalidFormatError(f"Invalid auth scheme: {self.scheme!r}")
        if self.parameter is not None:
            if not self.parameter:
                raise MissingArgumentError("auth parameter must not be empty")
            check_field_value(self.parameter, "auth parameter")


@dataclass(frozen=True)
class CacheControlHeaderValue:
    """Cache-Control request directives.

    Delta-seconds fields accept ``int`` seconds or :class:`datetime.timedelta`
    and are stored as ``int`` seconds.
    """

    no_cache: bool = False
    """Stored response must be revalidated before use."""

    no_store: bool = False
    """Nothing about the request or response may be stored."""

    max_age: Optional[int] = None
    """Maximum acceptable response age in seconds."""

    max_stale: bool = False
    """Stale responses are acceptable."""

    max_stale_limit: Optional[int] = None
    """Upper bound in seconds on accepted staleness."""

    min_fresh: Optional[int] = None
    """Response must stay fresh for at least this many seconds."""

    no_transform: bool = False
    """Intermediaries must not transform the payload."""

    only_if_cached: bool = False
    """Only a stored response is wanted."""

    extensions: Tuple[Tuple[str, Optional[str]], ...] = field(default_factory=tuple)
    """Extension directives as (name, value) pairs; value None for bare names."""

    def __post_init__(self):
        object.__setattr__(self, "max_age", _seconds(self.max_age, "max_age"))
        object.__setattr__(
            self, "max_stale_limit", _seconds(self.max_stale_limit, "max_stale_limit")
        )
        object.__setattr__(self, "min_fresh", _seconds(self.min_fresh, "min_fresh"))
        if self.max_stale_limit is not None:
            object.__setattr__(self, "max_stale", True)

        extensions = tuple((name, value) for name, value in self.extensions)
        for name, value in extensions:
            if not is_token(name):
                raise InvalidFormatError(f"Invalid cache directive name: {name!r}")
            if value is not None:
                check_field_value(value, "cache directive value")
        object.__setattr__(self, "extensions", extensions)


@dataclass(frozen=True)
class EntityTagHeaderValue:
    """Entity tag used by If-Range, If-Match and If-None-Match."""

    tag: str
    """Opaque quoted tag, e.g. '"abc"', or '*'."""

    is_weak: bool = False
    """Weak validator (W/ prefix)."""

    def __post_init__(self):
        if self.tag is None:
            raise MissingArgumentError("tag is required")
        if self.tag == "*":
            if self.is_weak:
                raise InvalidFormatError("'*' cannot be a weak entity tag")
            return
        if not OPAQUE_TAG_PATTERN.match(self.tag):
            raise InvalidFormatError(f"Entity tag must be a quoted string: {self.tag!r}")

    @classmethod
    def parse(cls, value: str) -> "EntityTagHeaderValue":
        """Parse '"x"', 'W/"x"' or '*'."""
        from .parser import parse_entity_tag

        return parse_entity_tag(value)


ANY_ENTITY_TAG = EntityTagHeaderValue("*")


@dataclass(frozen=True)
class MediaTypeWithQualityHeaderValue:
    """One Accept media-range entry."""

    media_type: str
    """type/subtype, wildcards allowed."""

    quality: Optional[float] = None
    """q parameter (0..1); None means no q parameter is sent."""

    def __post_init__(self):
        if self.media_type is None:
            raise MissingArgumentError("media_type is required")
        if not MEDIA_TYPE_PATTERN.match(self.media_type):
            raise InvalidFormatError(f"Invalid media type: {self.media_type!r}")
        if self.quality is not None:
            if not 0.0 <= self.quality <= 1.0:
                raise OutOfRangeError(
                    f"quality must be between 0 and 1, got {self.quality}"
                )
            object.__setattr__(self, "quality", float(self.quality))


@dataclass(frozen=True)
class RangeItemHeaderValue:
    """A single byte-range spec; start None means a suffix range."""

    start: Optional[int] = None
    """First byte position."""

    end: Optional[int] = None
    """Last byte position (inclusive), or suffix length when start is None."""

    def __post_init__(self):
        if self.start is None and self.end is None:
            raise MissingArgumentError("range item needs a start or an end")
        for name, value in (("start", self.start), ("end", self.end)):
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise InvalidFormatError(f"range {name} must be an int, got {value!r}")
            if value is not None and value < 0:
                raise OutOfRangeError(f"range {name} must be non-negative, got {value}")
        if self.start is not None and self.end is not None and self.start > self.end:
            raise OutOfRangeError(
                f"range start must not exceed end, got {self.start}-{self.end}"
            )


@dataclass(frozen=True)
class RangeHeaderValue:
    """Range header: a unit and one or more range specs."""

    ranges: Tuple[RangeItemHeaderValue, ...]
    """Requested ranges in order."""

    unit: str = "bytes"
    """Range unit. Default: bytes"""

    def __post_init__(self):
        ranges = tuple(self.ranges or ())
        if not ranges:
            raise MissingArgumentError("Range needs at least one range item")
        if not is_token(self.unit):
            raise InvalidFormatError(f"Invalid range unit: {self.unit!r}")
        object.__setattr__(self, "ranges", ranges)

    @classmethod
    def of(cls, start: Optional[int], end: Optional[int], unit: str = "bytes") -> "RangeHeaderValue":
        """Build a Range with one start-end spec."""
        return cls(ranges=(RangeItemHeaderValue(start, end),), unit=unit)


@dataclass(frozen=True)
class RangeConditionHeaderValue:
    """If-Range condition: either a date or an entity tag, never both."""

    date: Optional[datetime] = None
    """HTTP-date form."""

    entity_tag: Optional[EntityTagHeaderValue] = None
    """Entity-tag form."""

    def __post_init__(self):
        if self.date is None and self.entity_tag is None:
            raise MissingArgumentError("If-Range needs a date or an entity tag")
        if self.date is not None and self.entity_tag is not None:
            raise InvalidFormatError("If-Range takes a date or an entity tag, not both")
        if self.entity_tag is not None and self.entity_tag.is_weak:
            raise InvalidFormatError("If-Range requires a strong entity tag")
