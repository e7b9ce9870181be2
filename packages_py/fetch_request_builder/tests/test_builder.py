"""
Tests for builder.py, config.py and typed_headers.py
"""
from datetime import timedelta

import httpx
import pytest
from pydantic import ValidationError

from fetch_request_builder import (
    DEFAULT_CONFIG,
    BuilderConfig,
    CacheControlHeaderValue,
    EntityTagHeaderValue,
    HttpMethod,
    MissingArgumentError,
    OutOfRangeError,
    RangeHeaderValue,
    RequestBuilder,
    RequestHeaders,
)
from fetch_request_builder.config import _mask_value, resolve_config


class TestBuilderConfig:
    def test_defaults(self):
        config = BuilderConfig()

        assert config.mask_visible_chars == 10
        assert config.quality_precision == 3

    @pytest.mark.parametrize("precision", [0, 4])
    def test_quality_precision_bounds(self, precision):
        with pytest.raises(ValidationError):
            BuilderConfig(quality_precision=precision)

    def test_negative_mask_rejected(self):
        with pytest.raises(ValidationError):
            BuilderConfig(mask_visible_chars=-1)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.quality_precision = 1

    def test_resolve_config(self, sample_config):
        assert resolve_config(None) is DEFAULT_CONFIG
        assert resolve_config(sample_config) is sample_config


class TestMaskValue:
    def test_empty(self):
        assert _mask_value(None) == "<empty>"
        assert _mask_value("") == "<empty>"

    # Boundary: shorter than visible prefix is fully masked
    def test_short_value(self):
        assert _mask_value("abc", 10) == "***"

    def test_long_value(self):
        assert _mask_value("abcdefgh", 3) == "abc*****"


class TestRequestBuilder:
    def test_to_starts_request(self):
        builder = RequestBuilder.to(HttpMethod.GET, "https://api.example.com/items")

        assert builder.request.method == "GET"
        assert builder.request.url == httpx.URL("https://api.example.com/items")

    def test_chain_mutates_wrapped_request(self, request_message):
        result = (
            RequestBuilder(request_message)
            .with_bearer_token("abc")
            .with_header("X-Request-Id", "42")
            .with_accept("application/json")
            .with_accept("text/plain", 0.5)
            .with_cache_control(CacheControlHeaderValue(max_age=timedelta(seconds=20)))
            .with_connection_close(True)
            .with_max_forwards(2)
            .with_range(0, 1023)
            .with_if_range(EntityTagHeaderValue('"v2"'))
            .with_if_none_match(EntityTagHeaderValue('"v1"'))
            .with_referrer("https://example.com/start")
            .with_transfer_encoding_chunked(False)
            .build()
        )

        assert result is request_message
        assert result.headers["Authorization"] == "Bearer abc"
        assert result.headers["X-Request-Id"] == "42"
        assert result.headers["Accept"] == "application/json, text/plain; q=0.5"
        assert result.headers["Cache-Control"] == "max-age=20"
        assert result.headers["Connection"] == "close"
        assert result.headers["Max-Forwards"] == "2"
        assert result.headers["Range"] == "bytes=0-1023"
        assert result.headers["If-Range"] == '"v2"'
        assert result.headers["If-None-Match"] == '"v1"'
        assert result.headers["Referer"] == "https://example.com/start"
        assert "Transfer-Encoding" not in result.headers

    def test_dates(self, request_message, fixed_date):
        builder = (
            RequestBuilder(request_message)
            .with_date(fixed_date)
            .with_if_modified_since(fixed_date)
            .with_if_unmodified_since(fixed_date)
        )

        view = builder.typed_headers
        assert view.date == fixed_date
        assert view.if_modified_since == fixed_date
        assert view.if_unmodified_since == fixed_date

    def test_auth_variants(self, request_message):
        builder = RequestBuilder(request_message).with_basic_credentials("user", "pass")
        assert request_message.headers["Authorization"] == "Basic dXNlcjpwYXNz"

        builder.with_basic_token("abcd").with_proxy_authorization("Digest", "xyz")
        assert request_message.headers["Authorization"] == "Basic abcd"
        assert request_message.headers["Proxy-Authorization"] == "Digest xyz"

    def test_if_match(self, request_message):
        RequestBuilder(request_message).with_if_match(EntityTagHeaderValue('"a"'))
        assert request_message.headers["If-Match"] == '"a"'

    def test_config_carried_through_chain(self, request_message, sample_config):
        builder = RequestBuilder(request_message, sample_config).with_accept("text/plain", 0.123)

        assert builder.config is sample_config
        assert request_message.headers["Accept"] == "text/plain; q=0.1"

    def test_errors_propagate(self, request_message):
        builder = RequestBuilder(request_message)
        with pytest.raises(OutOfRangeError):
            builder.with_range(10, 0)
        assert "Range" not in request_message.headers

    def test_requires_request(self):
        with pytest.raises(MissingArgumentError):
            RequestBuilder(None)


class TestRequestHeaders:
    def test_empty_request(self, request_message):
        view = RequestHeaders(request_message)

        assert view.authorization is None
        assert view.cache_control is None
        assert view.connection_close is False
        assert view.transfer_encoding_chunked is False
        assert view.accept == []
        assert view.if_match == []
        assert view.range is None
        assert view.if_range is None
        assert view.max_forwards is None
        assert view.referrer is None
        assert view.date is None

    def test_reads_raw_headers(self):
        headers = httpx.Headers(
            [
                ("Range", "bytes=5-10"),
                ("Connection", "Keep-Alive, Close"),
                ("Accept", "text/html"),
                ("Accept", "application/xml;q=0.9"),
            ]
        )
        view = RequestHeaders(headers)

        assert view.range == RangeHeaderValue.of(5, 10)
        assert view.connection_close is True
        assert [e.media_type for e in view.accept] == ["text/html", "application/xml"]
        assert view.get_values("Accept") == ["text/html", "application/xml;q=0.9"]

    # Decision: unparseable values read as None
    def test_unparseable_values(self):
        view = RequestHeaders(
            httpx.Headers({"Max-Forwards": "many", "Date": "someday", "If-Match": "nope"})
        )

        assert view.max_forwards is None
        assert view.date is None
        assert view.if_match == []
