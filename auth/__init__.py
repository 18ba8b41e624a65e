# Make the auth directory a Python package
# Public API exports from canonical locations

from auth.config import (
    GOOGLE_DOCS_EDIT_URL,
    RICH_DOCS_CREDENTIALS_DIR,
    DocsConfig,
    document_url,
    get_credentials_directory,
    get_docs_config,
    reload_docs_config,
)
from auth.credential_provider import StaticCredentialProvider, StoredCredentialProvider
from auth.credential_store import LocalDirectoryCredentialStore, get_credential_store, set_credential_store
from auth.scopes import DOCS_SCOPES

__all__ = [
    "DocsConfig",
    "get_docs_config",
    "reload_docs_config",
    "get_credentials_directory",
    "document_url",
    "get_credential_store",
    "set_credential_store",
    "LocalDirectoryCredentialStore",
    "StoredCredentialProvider",
    "StaticCredentialProvider",
    "DOCS_SCOPES",
    "RICH_DOCS_CREDENTIALS_DIR",
    "GOOGLE_DOCS_EDIT_URL",
]
