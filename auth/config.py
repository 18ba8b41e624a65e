"""
Configuration Management for rich-content Google Docs creation.

Provides a single source of truth for OAuth client settings, credential
storage location and the default user, all read from environment variables.
"""

import os

from auth.scopes import DOCS_SCOPES

RICH_DOCS_CREDENTIALS_DIR = "~/.config/rich-docs/credentials"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
GOOGLE_DOCS_EDIT_URL = "https://docs.google.com/document/d/{document_id}/edit"


class DocsConfig:
    """
    Centralized configuration for the Google Docs integration.

    Values are read once from the environment when the instance is created;
    use `reload_docs_config()` after changing environment variables.
    """

    def __init__(self):
        # OAuth client configuration
        self.client_id = os.getenv("GOOGLE_OAUTH_CLIENT_ID") or None
        self.client_secret = os.getenv("GOOGLE_OAUTH_CLIENT_SECRET") or None
        self.token_uri = os.getenv("GOOGLE_OAUTH_TOKEN_URI", GOOGLE_TOKEN_URI)

        # Credential storage
        self.credentials_dir = os.path.expanduser(os.getenv("GOOGLE_DOCS_CREDENTIALS_DIR", RICH_DOCS_CREDENTIALS_DIR))

        # Default user for the stored-credential provider
        self.user_email = os.getenv("USER_GOOGLE_EMAIL") or None

        self.scopes = list(DOCS_SCOPES)

    def is_configured(self) -> bool:
        """Check if an OAuth client is configured for refreshing stored tokens."""
        return bool(self.client_id and self.client_secret)


# Global configuration instance
_docs_config: DocsConfig | None = None


def get_docs_config() -> DocsConfig:
    """
    Get the global configuration instance.

    Returns:
        The singleton configuration instance
    """
    global _docs_config
    if _docs_config is None:
        _docs_config = DocsConfig()
    return _docs_config


def reload_docs_config() -> DocsConfig:
    """
    Reload the configuration from environment variables.

    This is useful for testing or when environment variables change.

    Returns:
        The reloaded configuration instance
    """
    global _docs_config
    _docs_config = DocsConfig()
    return _docs_config


def get_credentials_directory() -> str:
    """Get the directory for storing user credentials."""
    return get_docs_config().credentials_dir


def document_url(document_id: str) -> str:
    """Build the browser edit URL for a document."""
    return GOOGLE_DOCS_EDIT_URL.format(document_id=document_id)
