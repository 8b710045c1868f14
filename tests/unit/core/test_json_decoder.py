"""
Tests for JSON body decoding and error categories.
"""

import json
import sys

import pytest

from instagram_client.core.exceptions import InvalidResponseFormatException
from instagram_client.core.json_decoder import (
    MAX_DEPTH,
    JSONErrorKind,
    classify_json_error,
    decode_json,
)


class TestDecodeJson:

    def test_object(self):
        assert decode_json(b'{"data": [1, 2, 3]}') == {"data": [1, 2, 3]}

    def test_str_input(self):
        assert decode_json('{"a": null}') == {"a": None}

    @pytest.mark.parametrize("body, expected", [
        (b"[]", []),
        (b'"text"', "text"),
        (b"42", 42),
        (b"true", True),
        (b"null", None),
    ])
    def test_scalars_and_arrays(self, body, expected):
        assert decode_json(body) == expected

    def test_unicode(self):
        assert decode_json('{"name": "Łódź"}'.encode("utf-8")) == {"name": "Łódź"}


class TestDecodeErrors:

    def _reason(self, body):
        with pytest.raises(InvalidResponseFormatException) as exc_info:
            decode_json(body)
        return exc_info.value

    def test_html_is_syntax_error(self):
        exc = self._reason(b"<html><body>Bad gateway</body></html>")
        assert exc.reason is JSONErrorKind.SYNTAX
        assert exc.message == "Invalid JSON response - malformed JSON syntax"

    def test_empty_body_is_syntax_error(self):
        assert self._reason(b"").reason is JSONErrorKind.SYNTAX

    def test_truncated_body_is_syntax_error(self):
        assert self._reason(b'{"data": [1, 2').reason is JSONErrorKind.SYNTAX

    def test_control_character(self):
        exc = self._reason(b'{"caption": "line\x01break"}')
        assert exc.reason is JSONErrorKind.CTRL_CHAR
        assert exc.message == "Invalid JSON response - unexpected control character"

    @pytest.mark.parametrize("body", [b"[1}", b'{"a": 1]'])
    def test_mismatched_brackets(self, body):
        assert self._reason(body).reason is JSONErrorKind.STATE_MISMATCH

    def test_invalid_utf8(self):
        exc = self._reason(b'{"name": "\xff\xfe"}')
        assert exc.reason is JSONErrorKind.UTF8
        assert exc.message == "Invalid JSON response - malformed UTF-8"

    def test_too_deep(self):
        depth = MAX_DEPTH + 50
        body = ("[" * depth + "]" * depth).encode("ascii")
        exc = self._reason(body)
        assert exc.reason is JSONErrorKind.DEPTH
        assert exc.message == "Invalid JSON response - maximum stack depth exceeded"

    def test_nesting_beyond_recursion_limit(self):
        depth = max(sys.getrecursionlimit() * 10, 200000)
        body = ("[" * depth + "]" * depth).encode("ascii")

        with pytest.raises(InvalidResponseFormatException) as exc_info:
            decode_json(body)

        assert exc_info.value.reason is JSONErrorKind.DEPTH
        assert exc_info.value.message == "Invalid JSON response - maximum stack depth exceeded"

    def test_custom_depth_limit(self):
        with pytest.raises(InvalidResponseFormatException) as exc_info:
            decode_json(b'{"a": {"b": {"c": 1}}}', max_depth=2)
        assert exc_info.value.reason is JSONErrorKind.DEPTH

    def test_depth_at_limit_is_fine(self):
        assert decode_json(b'{"a": {"b": 1}}', max_depth=2) == {"a": {"b": 1}}

    def test_cause_is_kept(self):
        exc = self._reason(b"nope")
        assert isinstance(exc.__cause__, json.JSONDecodeError)


class TestClassifyJsonError:

    def test_recursion_error(self):
        assert classify_json_error(RecursionError()) is JSONErrorKind.DEPTH

    def test_unknown(self):
        assert classify_json_error(TypeError("odd")) is JSONErrorKind.UNKNOWN
