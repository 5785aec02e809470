"""Tests for logging configuration module.

Verifies that logging configuration:
1. Filters out credentials (api key, secret, signature, nonce)
2. Reduces signed URLs to their path
3. Produces valid JSON output
"""

from __future__ import annotations

import io
import json
import logging
import sys

import pytest

from bittrexkit.logging_config import (
    BLOCKED_FIELDS,
    JsonFormatter,
    SimpleFormatter,
    _filter_log_record,
    _normalize_url,
    _sanitize_text,
    get_logger,
    setup_logging,
)

SIGNED_URL = "https://bittrex.com/api/v1.1/account/getbalances?apikey=abc123&nonce=1700000000"


def _record(level: int = logging.INFO, msg: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestBlockedFields:
    """Test that credential fields are properly blocked."""

    def test_blocked_fields_cover_credentials(self) -> None:
        for name in ("apikey", "api_secret", "apisign", "signature", "nonce", "headers"):
            assert name in BLOCKED_FIELDS

    def test_filter_removes_credentials(self) -> None:
        record = {
            "apikey": "k",
            "api_secret": "s",
            "apisign": "ABCDEF",
            "nonce": 1,
            "market": "BTC-ETH",
        }
        filtered = _filter_log_record(record)
        assert filtered == {"market": "BTC-ETH"}

    def test_filter_removes_partial_matches(self) -> None:
        record = {
            "request_signature": "value",
            "x_api_key_header": "value",
            "auth_token": "value",
            "safe_field": "keep",
        }
        filtered = _filter_log_record(record)
        assert filtered == {"safe_field": "keep"}

    def test_filter_case_insensitive(self) -> None:
        filtered = _filter_log_record({"APISIGN": "x", "Nonce": 5})
        assert filtered == {}


class TestSanitizeText:
    """Tests for _sanitize_text function."""

    def test_signed_query_string_removed(self) -> None:
        result = _sanitize_text(f"GET {SIGNED_URL} failed")
        assert result == "GET /api/v1.1/account/getbalances failed"

    def test_api_key_redacted(self) -> None:
        result = _sanitize_text("using apikey=abc123")
        assert "abc123" not in result
        assert "[API_KEY]" in result

    def test_secret_redacted(self) -> None:
        result = _sanitize_text("secret: hunter2")
        assert "hunter2" not in result
        assert "[SECRET]" in result

    def test_signature_redacted(self) -> None:
        result = _sanitize_text("apisign=DEADBEEF01")
        assert "DEADBEEF01" not in result
        assert "[SIGNATURE]" in result

    def test_nonce_redacted(self) -> None:
        assert _sanitize_text("nonce=1700000000") == "[NONCE]"

    def test_empty_string_unchanged(self) -> None:
        assert _sanitize_text("") == ""

    def test_safe_text_unchanged(self) -> None:
        text = "Exchange rejected request INSUFFICIENT_FUNDS"
        assert _sanitize_text(text) == text


class TestHighCardinalityFields:
    """Test normalization of high-cardinality fields."""

    def test_url_normalized_to_endpoint(self) -> None:
        filtered = _filter_log_record({"url": SIGNED_URL})
        assert filtered == {"endpoint": "/api/v1.1/account/getbalances"}

    def test_normalize_url_without_path(self) -> None:
        assert _normalize_url("https://bittrex.com") == "/"

    def test_body_and_params_redacted(self) -> None:
        filtered = _filter_log_record({"body": '{"success":true}', "params": {"a": 1}})
        assert filtered == {"body": "[BODY]", "params": "[PARAMS]"}


class TestFilterLogRecord:
    """Test the _filter_log_record function."""

    def test_scalars_preserved(self) -> None:
        record = {"attempt": 2, "ratio": 0.5, "filled": True, "reason": None}
        assert _filter_log_record(record) == record

    def test_list_capped_at_10(self) -> None:
        assert _filter_log_record({"items": list(range(15))}) == {"items": "[list:15 items]"}

    def test_small_list_stringified(self) -> None:
        assert _filter_log_record({"items": [1, 2]}) == {"items": ["1", "2"]}

    def test_nested_dict_filtered(self) -> None:
        filtered = _filter_log_record({"request": {"path": "/x", "apikey": "k"}})
        assert filtered == {"request": {"path": "/x"}}

    def test_depth_limit(self) -> None:
        record = {"a": {"b": {"c": {"d": {"e": 1}}}}}
        filtered = _filter_log_record(record)
        assert filtered["a"]["b"]["c"]["d"] == {"_truncated": "max depth exceeded"}


class TestJsonFormatter:
    """Test the JSON log formatter."""

    def test_contains_required_fields(self) -> None:
        parsed = json.loads(JsonFormatter().format(_record(msg="hello world")))
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test"
        assert parsed["msg"] == "hello world"
        assert "ts" in parsed
        assert "file" not in parsed

    def test_warning_includes_location(self) -> None:
        parsed = json.loads(JsonFormatter().format(_record(level=logging.WARNING)))
        assert parsed["file"] == "test.py"
        assert parsed["line"] == 42

    def test_extra_fields_filtered(self) -> None:
        record = _record()
        record.apikey = "secret123"
        record.url = SIGNED_URL
        record.attempts = 3

        parsed = json.loads(JsonFormatter().format(record))

        assert "apikey" not in parsed
        assert parsed["endpoint"] == "/api/v1.1/account/getbalances"
        assert parsed["attempts"] == 3
        assert "abc123" not in json.dumps(parsed)

    def test_exception_sanitized(self) -> None:
        try:
            raise RuntimeError(f"failed {SIGNED_URL}")
        except RuntimeError:
            record = logging.LogRecord(
                name="test",
                level=logging.ERROR,
                pathname="test.py",
                lineno=1,
                msg="boom",
                args=(),
                exc_info=sys.exc_info(),
            )

        parsed = json.loads(JsonFormatter().format(record))

        assert "RuntimeError" in parsed["exc"]
        assert "apikey=abc123" not in parsed["exc"]


class TestSimpleFormatter:
    """Test the simple human-readable formatter."""

    def test_basic_format(self) -> None:
        output = SimpleFormatter().format(_record(msg="hello"))
        assert output.startswith("INFO")
        assert "test: hello" in output

    def test_extra_fields_appended(self) -> None:
        record = _record()
        record.attempt = 3
        record.nonce = 99
        output = SimpleFormatter().format(record)
        assert "attempt=3" in output
        assert "nonce" not in output


class TestSetupLogging:
    """Test the setup_logging function."""

    def test_setup_logging_json(self) -> None:
        stream = io.StringIO()
        setup_logging(json_format=True, stream=stream)

        get_logger("test_json").info("test message", extra={"market": "BTC-ETH"})

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["msg"] == "test message"
        assert parsed["market"] == "BTC-ETH"

    def test_setup_logging_simple(self) -> None:
        stream = io.StringIO()
        setup_logging(json_format=False, stream=stream)

        get_logger("test_simple").info("simple test")

        output = stream.getvalue()
        assert "simple test" in output
        with pytest.raises(json.JSONDecodeError):
            json.loads(output.strip())

    def test_setup_logging_level(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.WARNING, json_format=False, stream=stream)

        logger = get_logger("test_level")
        logger.info("info message")
        logger.warning("warning message")

        output = stream.getvalue()
        assert "info message" not in output
        assert "warning message" in output
