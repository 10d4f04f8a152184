"""Custom exception hierarchy."""

from typing import Optional


class ChqueryError(Exception):
    """Base exception for chquery-specific failures."""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[dict[str, object]] = None,
    ):
        """Initialize exception with message, optional suggestion, and context.

        Args:
            message: Error message
            suggestion: Optional suggestion for fixing the error
            context: Optional dictionary with additional context
        """
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with suggestion if available."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            msg += f"\n\nContext: {context_str}"
        return msg


class ValidationError(ChqueryError):
    """Raised when configuration input is invalid."""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[dict[str, object]] = None,
    ):
        """Initialize validation error.

        Common suggestions:
        - Check the dialect name against the registry
        - Check environment variable values
        """
        if suggestion is None:
            if "dialect" in message.lower():
                suggestion = (
                    "Use one of the registered dialects (see chquery.engine.dialects.DIALECTS) "
                    "or register a new DialectSpec."
                )
            elif "environment" in message.lower():
                suggestion = "Check the CHQUERY_* environment variables for typos."
        super().__init__(message, suggestion, context)


class UnsupportedLiteralError(ChqueryError, TypeError):
    """Raised when a value has no SQL literal form."""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[dict[str, object]] = None,
    ):
        if suggestion is None:
            suggestion = (
                "Implement write_sql_literal(out) on the type, or register a renderer "
                "with chquery.sql.literals.register_literal()."
            )
        super().__init__(message, suggestion, context)


class QueryFormatError(ChqueryError):
    """Raised when a fragment cannot be formatted into query text."""


class BuilderStateError(ChqueryError):
    """Raised when a builder or separated session is used out of turn."""


class BuilderFinalizedError(BuilderStateError):
    """Raised when a builder is used after ``build()`` or a session after ``finish()``."""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[dict[str, object]] = None,
    ):
        if suggestion is None:
            suggestion = "Create a new QueryBuilder for each query."
        super().__init__(message, suggestion, context)


class BuilderBorrowedError(BuilderStateError):
    """Raised when a builder is used directly while a separated session is live."""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[dict[str, object]] = None,
    ):
        if suggestion is None:
            suggestion = (
                "Push through the Separated view, or call finish() on it "
                "(or leave its 'with' block) before using the builder again."
            )
        super().__init__(message, suggestion, context)
