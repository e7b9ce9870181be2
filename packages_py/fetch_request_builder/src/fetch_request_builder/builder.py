"""
Fluent wrapper over the header composition functions.
"""
import logging
from datetime import datetime
from typing import Optional, Union

import httpx

from . import headers
from .config import BuilderConfig, resolve_config
from .exceptions import MissingArgumentError
from .request import to
from .typed_headers import RequestHeaders
from .types import CacheControlHeaderValue, EntityTagHeaderValue, HttpMethod

logger = logging.getLogger(__name__)


class RequestBuilder:
    """Fluent builder over a single httpx.Request.

    Every method mutates the wrapped request in place and returns the builder.

        request = (
            RequestBuilder.to(HttpMethod.GET, "https://api.example.com/items")
            .with_bearer_token(token)
            .with_accept("application/json")
            .with_range(0, 1023)
            .build()
        )
    """

    def __init__(self, request: httpx.Request, config: Optional[BuilderConfig] = None):
        if request is None:
            raise MissingArgumentError("request is required")
        self._request = request
        self._config = resolve_config(config)

    @classmethod
    def to(
        cls,
        method: Union[HttpMethod, str],
        uri: Union[httpx.URL, str],
        config: Optional[BuilderConfig] = None,
    ) -> "RequestBuilder":
        """Start a builder from a method and a target."""
        return cls(to(method, uri), config)

    @property
    def request(self) -> httpx.Request:
        return self._request

    @property
    def config(self) -> BuilderConfig:
        return self._config

    @property
    def typed_headers(self) -> RequestHeaders:
        return RequestHeaders(self._request)

    def build(self) -> httpx.Request:
        """Return the wrapped request."""
        logger.debug(
            f"build: {self._request.method} {self._request.url} "
            f"with {len(self._request.headers)} header(s)"
        )
        return self._request

    def with_basic_token(self, token: str) -> "RequestBuilder":
        headers.with_basic_token(self._request, token, config=self._config)
        return self

    def with_basic_credentials(self, username: str, password: str) -> "RequestBuilder":
        headers.with_basic_credentials(self._request, username, password, config=self._config)
        return self

    def with_bearer_token(self, token: str) -> "RequestBuilder":
        headers.with_bearer_token(self._request, token, config=self._config)
        return self

    def with_proxy_authorization(self, scheme: str, token: str) -> "RequestBuilder":
        headers.with_proxy_authorization(self._request, scheme, token, config=self._config)
        return self

    def with_header(self, name: str, *values: str) -> "RequestBuilder":
        headers.with_header(self._request, name, *values)
        return self

    def with_cache_control(self, cache_control: CacheControlHeaderValue) -> "RequestBuilder":
        headers.with_cache_control(self._request, cache_control)
        return self

    def with_connection_close(self, close: bool) -> "RequestBuilder":
        headers.with_connection_close(self._request, close)
        return self

    def with_transfer_encoding_chunked(self, chunked: bool) -> "RequestBuilder":
        headers.with_transfer_encoding_chunked(self._request, chunked)
        return self

    def with_max_forwards(self, count: int) -> "RequestBuilder":
        headers.with_max_forwards(self._request, count)
        return self

    def with_referrer(self, referrer: Union[httpx.URL, str]) -> "RequestBuilder":
        headers.with_referrer(self._request, referrer)
        return self

    def with_date(self, date: datetime) -> "RequestBuilder":
        headers.with_date(self._request, date)
        return self

    def with_if_modified_since(self, date: datetime) -> "RequestBuilder":
        headers.with_if_modified_since(self._request, date)
        return self

    def with_if_unmodified_since(self, date: datetime) -> "RequestBuilder":
        headers.with_if_unmodified_since(self._request, date)
        return self

    def with_accept(self, media_type: str, quality: Optional[float] = None) -> "RequestBuilder":
        headers.with_accept(self._request, media_type, quality, config=self._config)
        return self

    def with_range(self, start: int, end: int) -> "RequestBuilder":
        headers.with_range(self._request, start, end)
        return self

    def with_if_range(self, condition: headers.IfRangeCondition) -> "RequestBuilder":
        headers.with_if_range(self._request, condition)
        return self

    def with_if_match(self, *tags: EntityTagHeaderValue) -> "RequestBuilder":
        headers.with_if_match(self._request, *tags)
        return self

    def with_if_none_match(self, *tags: EntityTagHeaderValue) -> "RequestBuilder":
        headers.with_if_none_match(self._request, *tags)
        return self
