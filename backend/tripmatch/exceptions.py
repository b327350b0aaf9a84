"""Search error taxonomy.

Every failure in the search pipeline is raised as one of these and turned into
an ``{"error": message}`` response by ``exception_handlers``. ``message`` is
always safe to show the user; details belong in the logs.
"""

from fastapi import status


class SearchError(Exception):
    """Base class for errors with a user-facing message and HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong on our end. Please try again."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidQueryError(SearchError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body."


class RateLimitExceededError(SearchError):
    """This service's own per-client limit was hit."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many searches. Please wait a minute and try again."


class LLMConfigurationError(SearchError):
    """No credential is configured for any LLM provider."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server configuration error: missing API key."


class LLMTimeoutError(SearchError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "The AI took too long to respond. Please try a simpler query."


class LLMRateLimitError(SearchError):
    """The LLM vendor rate-limited us."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "The AI service is busy right now. Please try again in a moment."


class LLMUnavailableError(SearchError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "We could not reach the AI service. Please try again."


class MalformedLLMResponseError(SearchError):
    """The LLM replied, but not with JSON matching the match-list schema."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "The AI returned something unexpected. Please try again."

    def __init__(self, reason: str, message: str | None = None):
        self.reason = reason  # "non-JSON" | "schema"
        super().__init__(message)


class SearchCancelledError(SearchError):
    """The client went away before the result was ready."""

    status_code = 499
    default_message = "Search cancelled."
