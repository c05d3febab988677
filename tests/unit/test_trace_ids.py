"""Tests for trace id sanitizing and correlation id propagation into log records."""

import logging
import uuid

import pytest

from passage_search.middleware.headers import get_header, is_safe_trace_id, sanitize_trace_id
from passage_search.shared.context import reset_correlation_id, set_correlation_id
from passage_search.shared.telemetry.logging import CorrelationIdFilter


class TestTraceIds:
    @pytest.mark.parametrize("raw", ["abc-123", "A.b_c", "x" * 64, "  padded  "])
    def test_safe(self, raw: str) -> None:
        assert is_safe_trace_id(raw)
        assert sanitize_trace_id(raw) == raw.strip()

    @pytest.mark.parametrize("raw", [None, "", "bad id", "x" * 65, "a\nb", "ü"])
    def test_unsafe_replaced_with_uuid(self, raw: str | None) -> None:
        assert not is_safe_trace_id(raw)
        uuid.UUID(sanitize_trace_id(raw))

    def test_get_header_is_case_insensitive(self) -> None:
        scope = {"headers": [(b"x-correlation-id", b"abc")]}
        assert get_header(scope, "X-Correlation-ID") == "abc"
        assert get_header(scope, "X-Request-ID") is None


class TestCorrelationIdFilter:
    def _record(self) -> logging.LogRecord:
        return logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    def test_outside_request(self) -> None:
        record = self._record()
        assert CorrelationIdFilter().filter(record)
        assert record.correlation_id == "-"

    def test_inside_request(self) -> None:
        token = set_correlation_id("abc-123")
        try:
            record = self._record()
            CorrelationIdFilter().filter(record)
        finally:
            reset_correlation_id(token)
        assert record.correlation_id == "abc-123"
