"""Tests for exception hierarchy."""

from __future__ import annotations


from chquery.utils.exceptions import (
    BuilderBorrowedError,
    BuilderFinalizedError,
    BuilderStateError,
    ChqueryError,
    QueryFormatError,
    UnsupportedLiteralError,
    ValidationError,
)


def test_exception_hierarchy():
    """Test that all exceptions inherit from ChqueryError."""
    assert issubclass(ValidationError, ChqueryError)
    assert issubclass(QueryFormatError, ChqueryError)
    assert issubclass(BuilderStateError, ChqueryError)
    assert issubclass(BuilderFinalizedError, BuilderStateError)
    assert issubclass(BuilderBorrowedError, BuilderStateError)
    assert issubclass(UnsupportedLiteralError, ChqueryError)
    assert issubclass(UnsupportedLiteralError, TypeError)


def test_exception_message_suggestion_and_context():
    error = ChqueryError("bad thing", suggestion="do better", context={"a": 1})
    assert str(error) == "bad thing\n\nSuggestion: do better\n\nContext: a=1"
    assert str(ChqueryError("plain")) == "plain"


def test_auto_suggestions():
    assert "registered dialects" in str(ValidationError("Unknown dialect 'x'"))
    assert "register_literal" in str(UnsupportedLiteralError("nope"))
    assert "finish()" in str(BuilderBorrowedError("borrowed"))
    assert "new QueryBuilder" in str(BuilderFinalizedError("built"))


def test_exception_chaining():
    """Test that exceptions can be chained with cause."""
    cause = ValueError("Original error")
    try:
        raise QueryFormatError("Wrapped error") from cause
    except QueryFormatError as error:
        assert error.__cause__ is cause
        assert str(error) == "Wrapped error"
