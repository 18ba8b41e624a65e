"""Core utilities for rich-content Google Docs creation."""

from core.container import Container, get_container, reset_container, set_container
from core.errors import (
    AuthenticationError,
    ContentError,
    CredentialsExpiredError,
    CredentialsNotFoundError,
    InvalidContentError,
    MalformedSourceError,
    PermissionDeniedError,
    RateLimitError,
    ResourceNotFoundError,
    RichDocsError,
    SinkAuthenticationError,
    SinkError,
    TokenRefreshError,
    ValidationError,
)
from core.utils import handle_http_errors, validate_document_id, validate_index_range

__all__ = [
    "AuthenticationError",
    "Container",
    "ContentError",
    "CredentialsExpiredError",
    "CredentialsNotFoundError",
    "get_container",
    "handle_http_errors",
    "InvalidContentError",
    "MalformedSourceError",
    "PermissionDeniedError",
    "RateLimitError",
    "reset_container",
    "ResourceNotFoundError",
    "RichDocsError",
    "set_container",
    "SinkAuthenticationError",
    "SinkError",
    "TokenRefreshError",
    "validate_document_id",
    "validate_index_range",
    "ValidationError",
]
