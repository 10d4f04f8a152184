"""Tests for string literal and identifier escaping."""

from __future__ import annotations

import io

import pytest

from chquery.sql.escape import (
    escape,
    escape_as_identifier,
    escape_as_string_literal,
    quote_identifier,
    quote_string,
)


def unescape(token: str, quote: str) -> str:
    """Reverse the backslash escaping of a quoted token."""
    assert token[0] == quote and token[-1] == quote
    inner = token[1:-1]
    out = []
    i = 0
    while i < len(inner):
        if inner[i] == "\\":
            out.append(inner[i + 1])
            i += 2
        else:
            out.append(inner[i])
            i += 1
    return "".join(out)


SAMPLES = [
    "",
    "plain",
    "foo b'ar\\",
    "'",
    "\\",
    "''",
    "\\\\",
    "'\\'",
    "\\'",
    "`tick`",
    "multi\nline\ttext",
    "unicode ✓ 数据",
    "a'b\\c`d",
]


def test_escape_string():
    """Quote becomes \\' and backslash becomes \\\\."""
    assert quote_string("foo b'ar\\") == "'foo b\\'ar\\\\'"


def test_escape_string_writes_to_sink():
    buf = io.StringIO()
    buf.write("x = ")
    escape_as_string_literal("it's", buf)
    assert buf.getvalue() == "x = 'it\\'s'"


def test_escape_identifier_writes_to_sink():
    buf = io.StringIO()
    escape_as_identifier("my`col", buf)
    assert buf.getvalue() == "`my\\`col`"


def test_identifier_leaves_single_quote_alone():
    assert quote_identifier("it's") == "`it's`"


def test_string_leaves_backtick_alone():
    assert quote_string("a`b") == "'a`b'"


def test_quote_before_backslash_not_coalesced():
    """A quote followed by an existing backslash escapes both separately."""
    assert quote_string("'\\") == "'\\'\\\\'"
    assert quote_string("\\'") == "'\\\\\\''"


def test_newlines_pass_through():
    assert quote_string("a\nb") == "'a\nb'"


@pytest.mark.parametrize("value", SAMPLES)
def test_string_round_trip(value):
    token = quote_string(value)
    assert token.startswith("'") and token.endswith("'")
    assert unescape(token, "'") == value


@pytest.mark.parametrize("value", SAMPLES)
def test_identifier_round_trip(value):
    token = quote_identifier(value)
    assert token.startswith("`") and token.endswith("`")
    assert unescape(token, "`") == value


@pytest.mark.parametrize("value", ["", "abc", "hello world", "a\nb", "SELECT 1"])
def test_no_special_characters_is_plain_quoting(value):
    assert quote_string(value) == f"'{value}'"
    assert quote_identifier(value) == f"`{value}`"


def test_custom_quote_character():
    buf = io.StringIO()
    escape('say "hi"', buf, '"')
    assert buf.getvalue() == '"say \\"hi\\""'


def test_quote_identifier_with_dialect():
    assert quote_identifier("events", dialect="mysql") == "`events`"


class FailingSink:
    """Accepts a fixed number of writes, then fails."""

    def __init__(self, limit: int):
        self.limit = limit
        self.parts: list[str] = []

    def write(self, s: str) -> int:
        if len(self.parts) >= self.limit:
            raise OSError("sink is full")
        self.parts.append(s)
        return len(s)


def test_sink_failure_propagates_with_partial_output():
    sink = FailingSink(limit=2)
    with pytest.raises(OSError, match="sink is full"):
        escape_as_string_literal("abc'def", sink)
    assert sink.parts == ["'", "abc"]
