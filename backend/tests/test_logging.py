"""
Unit tests for logging helpers.
"""

import json
import logging

from foxie.core.logging_config import JSONFormatter, filter_sensitive_data, truncate_large_data


class TestFilterSensitiveData:
    """Tests for credential masking."""

    def test_masks_nested_keys(self):
        data = {"userId": "u1", "apiKey": "x", "auth": {"token": "t", "signature": "s"}, "items": [{"password": "p"}]}
        filtered = filter_sensitive_data(data)
        assert filtered["userId"] == "u1"
        assert filtered["auth"] == {"token": "***FILTERED***", "signature": "***FILTERED***"}
        assert filtered["items"] == [{"password": "***FILTERED***"}]
        # camelCase keys do not contain "api_key"
        assert filtered["apiKey"] == "x"

    def test_primitives_pass_through(self):
        assert filter_sensitive_data("plain") == "plain"


class TestTruncateLargeData:
    """Tests for body truncation."""

    def test_short_text_unchanged(self):
        assert truncate_large_data("abc", max_length=5) == "abc"

    def test_long_text_truncated(self):
        result = truncate_large_data("a" * 20, max_length=5)
        assert result.startswith("aaaaa...")
        assert "total length: 20" in result


class TestJSONFormatter:
    """Tests for the JSON file formatter."""

    def test_includes_extra_fields(self):
        record = logging.LogRecord("foxie.test", logging.INFO, __file__, 10, "Session created", None, None)
        record.extra_fields = {"session_id": "abc"}
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "Session created"
        assert data["level"] == "INFO"
        assert data["session_id"] == "abc"
