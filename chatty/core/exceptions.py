"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class ChattyError(Exception):
    """Base exception for chatty."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(ChattyError):
    """Resource not found."""

    pass


class ValidationError(ChattyError):
    """Validation error."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class LLMError(ChattyError):
    """LLM-related error."""

    pass


class LLMValidationError(LLMError):
    """LLM output validation failed."""

    def __init__(self, message: str, raw_output: str, attempts: int = 1):
        super().__init__(message, details={"raw_output": raw_output, "attempts": attempts})
        self.raw_output = raw_output
        self.attempts = attempts


class InfrastructureError(ChattyError):
    """Infrastructure-related error (DB, storage, etc.)."""

    pass
