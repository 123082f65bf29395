"""Centralized exception hierarchy for text-explainer.

Exception Hierarchy:
    TextExplainerError (base)
     ConfigurationError - Settings loading/validation errors
     CompletionError - Completion endpoint errors
        AuthError - No API key configured
        RequestError - Non-success HTTP status
        EmptyResponseError - Malformed or absent completion payload
        ProviderConnectionError - Endpoint unreachable
     SelectionError - No usable selection
     NotFoundError - Selection could not be relocated for link insertion
     NoteCreationError - Note could not be written

Usage Examples:
    try:
        text = await client.complete(prompt, system_prompt)
    except CompletionError as e:
        logger.error("explanation_failed", **e.to_dict())
"""

from typing import Any

from .error_codes import ErrorCode


class TextExplainerError(Exception):
    """Base exception for all text-explainer errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging
    """

    default_error_code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.suggestion = suggestion
        if error_code is None and self.default_error_code is not None:
            error_code = self.default_error_code.value
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with the suggestion if available."""
        if self.suggestion:
            return f"{self.message}\nSuggestion: {self.suggestion}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


# Configuration Errors


class ConfigurationError(TextExplainerError):
    """Settings loading or validation errors.

    Raised when:
    - Settings file is malformed
    - A settings value fails validation
    """

    default_error_code = ErrorCode.CFG_INVALID


# Completion Errors


class CompletionError(TextExplainerError):
    """Base class for all errors raised while obtaining a model response."""


class AuthError(CompletionError):
    """No API key is configured; raised before any network call."""

    default_error_code = ErrorCode.LLM_AUTH_MISSING

    def __init__(self, message: str = "Please set up your API key in the settings.", **kwargs: Any):
        kwargs.setdefault("suggestion", "Run `text-explainer config set api_key <KEY>`")
        super().__init__(message, **kwargs)


class RequestError(CompletionError):
    """The completion endpoint returned a non-success HTTP status."""

    default_error_code = ErrorCode.LLM_HTTP_STATUS

    def __init__(self, status_code: int, body: str, reason: str = "", **kwargs: Any):
        self.status_code = status_code
        self.body = body
        message = f"API request failed: {status_code} {reason}".rstrip() + f". {body}"
        context = kwargs.pop("context", None) or {}
        context.update({"status_code": status_code})
        super().__init__(message.strip(), context=context, **kwargs)


class EmptyResponseError(CompletionError):
    """The response payload lacks choices[0].message."""

    default_error_code = ErrorCode.LLM_EMPTY_RESPONSE

    def __init__(self, message: str = "No response received from the model", **kwargs: Any):
        super().__init__(message, **kwargs)


class ProviderConnectionError(CompletionError):
    """The completion endpoint could not be reached.

    Raised when:
    - DNS resolution or connection fails
    - The transport times out
    """

    default_error_code = ErrorCode.LLM_CONNECTION


# Document Errors


class SelectionError(TextExplainerError):
    """No non-empty selection exists."""

    default_error_code = ErrorCode.SEL_EMPTY

    def __init__(self, message: str = "No text selected", **kwargs: Any):
        super().__init__(message, **kwargs)


class NotFoundError(TextExplainerError):
    """The selected text cannot be relocated in the document.

    Never fatal: callers skip link insertion and report the note as
    created but unlinked.
    """

    default_error_code = ErrorCode.DOC_NOT_FOUND


class NoteCreationError(TextExplainerError):
    """The storage backend failed while creating a note."""

    default_error_code = ErrorCode.NOTE_CREATE_FAILED
