"""Tests for content-type-aware payload decoding."""

import pytest

from hooklog.services.payload_decoder import (
    MAX_NESTING_DEPTH,
    decode_payload,
    error_envelope,
    media_type,
)

FORM = "application/x-www-form-urlencoded"


class TestMediaType:
    @pytest.mark.parametrize(
        "content_type, expected",
        [
            ("application/json", "application/json"),
            ("Application/JSON; charset=utf-8", "application/json"),
            (" application/x-www-form-urlencoded ;charset=UTF-8", FORM),
            ("", ""),
            (None, ""),
        ],
    )
    def test_media_type(self, content_type, expected):
        assert media_type(content_type) == expected


class TestJson:
    def test_json_object(self):
        result = decode_payload(b'{"a":1}', "application/json")
        assert result.ok
        assert result.payload == {"a": 1}

    def test_json_with_charset(self):
        result = decode_payload(b'{"a":1}', "application/json; charset=utf-8")
        assert result.payload == {"a": 1}

    def test_vendor_json_suffix(self):
        result = decode_payload(b"[1, 2]", "application/vnd.github+json")
        assert result.payload == [1, 2]

    def test_scalar(self):
        assert decode_payload(b"42", "application/json").payload == 42

    def test_malformed_json_yields_envelope(self):
        result = decode_payload(b"{bad", "application/json")
        assert not result.ok
        assert result.error
        assert result.payload["parse_error"] == result.error
        assert result.payload["raw"] == "{bad"

    def test_empty_body_yields_envelope(self):
        result = decode_payload(b"", "application/json")
        assert not result.ok
        assert result.payload["raw"] == ""

    def test_nan_rejected(self):
        result = decode_payload(b'{"x": NaN}', "application/json")
        assert not result.ok
        assert "NaN" in result.payload["parse_error"]

    def test_invalid_utf8_yields_envelope(self):
        result = decode_payload(b'{"a":"\xff\xfe"}', "application/json")
        assert not result.ok
        assert "�" in result.payload["raw"]


class TestNesting:
    @staticmethod
    def _nested(depth: int) -> bytes:
        return b"[" * depth + b"]" * depth

    def test_recursion_overflow_yields_envelope(self):
        raw = self._nested(100000)
        result = decode_payload(raw, "application/json")
        assert not result.ok
        assert len(result.payload["raw"]) == 2000
        assert result.payload["raw"] == "[" * 2000

    def test_depth_at_limit_accepted(self):
        result = decode_payload(self._nested(MAX_NESTING_DEPTH), "application/json")
        assert result.ok

    def test_depth_over_limit_yields_envelope(self):
        result = decode_payload(self._nested(MAX_NESTING_DEPTH + 1), "application/json")
        assert not result.ok
        assert "nested deeper" in result.payload["parse_error"]

    def test_deep_object_yields_envelope(self):
        raw = b'{"a":' * 300 + b"1" + b"}" * 300
        result = decode_payload(raw, "application/json")
        assert not result.ok

    def test_deep_form_payload_field_yields_envelope(self):
        raw = b"payload=" + b"%5B" * 300 + b"%5D" * 300
        result = decode_payload(raw, FORM)
        assert not result.ok


class TestForm:
    def test_payload_field_decoded(self):
        result = decode_payload(b"payload=%7B%22a%22%3A1%7D", FORM)
        assert result.ok
        assert result.payload == {"a": 1}

    def test_payload_field_with_plus_spaces(self):
        result = decode_payload(b"payload=%7B%22a%22%3A+1%7D", FORM)
        assert result.payload == {"a": 1}

    def test_invalid_payload_field_yields_envelope(self):
        result = decode_payload(b"payload=%7Bnope", FORM)
        assert not result.ok
        assert result.payload["raw"] == "payload=%7Bnope"

    def test_whole_body_json_without_payload_field(self):
        result = decode_payload(b'{"a":1}', FORM)
        assert result.ok
        assert result.payload == {"a": 1}

    def test_plain_pairs_fallback(self):
        result = decode_payload(b"x=1&y=two&empty=", FORM)
        assert result.ok
        assert result.payload == {"form": {"x": "1", "y": "two", "empty": ""}}

    def test_repeated_payload_field_first_wins(self):
        result = decode_payload(b"payload=%7B%22a%22%3A1%7D&payload=%7B%22a%22%3A2%7D", FORM)
        assert result.payload == {"a": 1}

    def test_repeated_key_last_wins(self):
        result = decode_payload(b"x=1&x=2", FORM)
        assert result.payload == {"form": {"x": "2"}}


class TestOtherContentTypes:
    @pytest.mark.parametrize("content_type", [None, "", "text/plain", "application/octet-stream"])
    def test_json_attempted(self, content_type):
        result = decode_payload(b'{"a":1}', content_type)
        assert result.payload == {"a": 1}

    def test_non_json_yields_envelope(self):
        result = decode_payload(b"hello world", "text/plain")
        assert not result.ok
        assert result.payload["raw"] == "hello world"


class TestEnvelope:
    def test_raw_excerpt_bounded(self):
        raw = b"x" * 5000
        result = decode_payload(raw, "application/json")
        assert len(result.payload["raw"]) == 2000

    def test_custom_excerpt_limit(self):
        result = decode_payload(b"y" * 100, "application/json", excerpt_limit=10)
        assert result.payload["raw"] == "y" * 10

    def test_error_envelope_shape(self):
        envelope = error_envelope(ValueError("boom"), b"abc")
        assert envelope == {"parse_error": "boom", "raw": "abc"}
