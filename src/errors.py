"""
Error types raised while handling a chat request.

The handler answers ValidationError with 400 and everything else with 500.
"""

VALIDATION_MESSAGE = "Message and userId are required"


class ChatError(Exception):
    """Base class for chat handler errors."""


class ValidationError(ChatError):
    """Raised when the request body lacks message or userId."""

    def __init__(self, message: str = VALIDATION_MESSAGE):
        super().__init__(message)


class ConfigurationError(ChatError):
    """Raised when a required secret is missing from the environment."""


class UpstreamError(ChatError):
    """Raised when an external service fails the request."""


class GeminiAPIError(UpstreamError):
    """Raised when the Gemini endpoint answers with a non-success status."""

    def __init__(self, status_code: int, body: str):
        self.upstream_status = status_code
        self.body = body
        super().__init__(f"Gemini API error: {status_code} - {body}")


class DatastoreError(Exception):
    """Raised by parcel stores when a query fails."""
