"""
Custom error types for rich-content to Google Docs operations.

Provides a single hierarchy so callers can tell content problems (recoverable
by falling back to another source) apart from authentication and remote
service failures.
"""

# =============================================================================
# Base Exception Hierarchy
# =============================================================================


class RichDocsError(Exception):
    """Base exception for all rich-docs errors."""

    pass


# =============================================================================
# Content Errors
# =============================================================================


class ContentError(RichDocsError):
    """Raised when source content cannot be compiled into a document plan."""

    pass


class InvalidContentError(ContentError):
    """Raised when the rich source produced no text at all after extraction."""

    def __init__(self, message: str = "Document content is empty."):
        super().__init__(message)


class MalformedSourceError(ContentError):
    """Raised when the rich source is not structured data at the container level."""

    def __init__(self, message: str, details: object | None = None):
        super().__init__(message)
        self.details = details


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(RichDocsError):
    """Raised when input validation fails."""

    pass


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthenticationError(RichDocsError):
    """Raised when authentication fails or credentials are invalid."""

    pass


class CredentialsNotFoundError(AuthenticationError):
    """Raised when no credentials are found for a user."""

    def __init__(self, user_email: str | None):
        who = user_email or "the default user"
        super().__init__(f"No Google credentials found for {who}. Please connect a Google account first.")
        self.user_email = user_email


class CredentialsExpiredError(AuthenticationError):
    """Raised when credentials have expired and cannot be refreshed."""

    pass


class TokenRefreshError(AuthenticationError):
    """Raised when token refresh fails."""

    def __init__(self, user_email: str | None, reason: str):
        super().__init__(
            f"Failed to refresh Google token for {user_email or 'the default user'}: {reason}. "
            "Please reconnect the Google account."
        )
        self.user_email = user_email
        self.reason = reason


# =============================================================================
# Sink Errors
# =============================================================================


class SinkError(RichDocsError):
    """Raised when the remote document service rejects a call."""

    def __init__(self, message: str, status_code: int | None = None, operation: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.operation = operation


class SinkAuthenticationError(SinkError):
    """Raised when the service rejects the bearer credential (401)."""

    pass


class ResourceNotFoundError(SinkError):
    """Raised when a requested document doesn't exist (404)."""

    pass


class PermissionDeniedError(SinkError):
    """Raised when the user lacks permission for an operation (403)."""

    pass


class RateLimitError(SinkError):
    """Raised when API rate limits are exceeded (429)."""

    pass


_STATUS_ERRORS: dict[int, type[SinkError]] = {
    401: SinkAuthenticationError,
    403: PermissionDeniedError,
    404: ResourceNotFoundError,
    429: RateLimitError,
}


def sink_error_for_status(status_code: int | None) -> type[SinkError]:
    """Pick the most specific SinkError subclass for an HTTP status."""
    if status_code is None:
        return SinkError
    return _STATUS_ERRORS.get(status_code, SinkError)

