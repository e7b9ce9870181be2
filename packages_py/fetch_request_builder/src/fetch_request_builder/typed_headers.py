"""
Typed, read-only view over an httpx.Request's headers.
"""
from datetime import datetime
from typing import List, Optional, Union

import httpx

from .exceptions import RequestBuilderError
from .parser import (
    has_token,
    parse_accept,
    parse_authentication,
    parse_cache_control,
    parse_entity_tag_list,
    parse_http_date,
    parse_non_negative_int,
    parse_range,
    parse_range_condition,
)
from .types import (
    AuthenticationHeaderValue,
    CacheControlHeaderValue,
    EntityTagHeaderValue,
    MediaTypeWithQualityHeaderValue,
    RangeConditionHeaderValue,
    RangeHeaderValue,
)


class RequestHeaders:
    """Typed accessors for request headers.

    Absent or unparseable headers read as None (False for flags, [] for lists).
    """

    def __init__(self, source: Union[httpx.Request, httpx.Headers]):
        self._headers = source.headers if isinstance(source, httpx.Request) else source

    def _joined(self, name: str) -> Optional[str]:
        values = self._headers.get_list(name)
        return ", ".join(values) if values else None

    @property
    def authorization(self) -> Optional[AuthenticationHeaderValue]:
        return parse_authentication(self._headers.get("Authorization"))

    @property
    def proxy_authorization(self) -> Optional[AuthenticationHeaderValue]:
        return parse_authentication(self._headers.get("Proxy-Authorization"))

    @property
    def cache_control(self) -> Optional[CacheControlHeaderValue]:
        return parse_cache_control(self._joined("Cache-Control"))

    @property
    def connection_close(self) -> bool:
        return has_token(self._headers.get_list("Connection"), "close")

    @property
    def transfer_encoding_chunked(self) -> bool:
        return has_token(self._headers.get_list("Transfer-Encoding"), "chunked")

    @property
    def date(self) -> Optional[datetime]:
        return parse_http_date(self._headers.get("Date"))

    @property
    def if_modified_since(self) -> Optional[datetime]:
        return parse_http_date(self._headers.get("If-Modified-Since"))

    @property
    def if_unmodified_since(self) -> Optional[datetime]:
        return parse_http_date(self._headers.get("If-Unmodified-Since"))

    @property
    def accept(self) -> List[MediaTypeWithQualityHeaderValue]:
        return parse_accept(self._joined("Accept"))

    @property
    def range(self) -> Optional[RangeHeaderValue]:
        return parse_range(self._headers.get("Range"))

    @property
    def if_range(self) -> Optional[RangeConditionHeaderValue]:
        return parse_range_condition(self._headers.get("If-Range"))

    @property
    def if_match(self) -> List[EntityTagHeaderValue]:
        return self._entity_tags("If-Match")

    @property
    def if_none_match(self) -> List[EntityTagHeaderValue]:
        return self._entity_tags("If-None-Match")

    def _entity_tags(self, name: str) -> List[EntityTagHeaderValue]:
        try:
            return parse_entity_tag_list(self._joined(name))
        except RequestBuilderError:
            return []

    @property
    def max_forwards(self) -> Optional[int]:
        return parse_non_negative_int(self._headers.get("Max-Forwards"))

    @property
    def referrer(self) -> Optional[httpx.URL]:
        value = self._headers.get("Referer")
        if not value:
            return None
        try:
            return httpx.URL(value)
        except httpx.InvalidURL:
            return None

    def get_values(self, name: str) -> List[str]:
        """All values stored for name, in order, without comma splitting."""
        return self._headers.get_list(name)

    def __repr__(self) -> str:
        return f"RequestHeaders({list(self._headers.multi_items())!r})"


def typed_headers(request: httpx.Request) -> RequestHeaders:
    """Return a typed read view over request's headers."""
    return RequestHeaders(request)
