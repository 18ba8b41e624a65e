"""
Google OAuth Scopes

This module centralizes the OAuth scopes needed to create and edit documents.
Kept separate from the credential provider to avoid circular imports.
"""

# Google Docs scopes
DOCS_WRITE_SCOPE = "https://www.googleapis.com/auth/documents"

# Google Drive scopes (only files created by this app)
DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"

# Scopes requested when creating documents from rich content
DOCS_SCOPES = [
    DOCS_WRITE_SCOPE,
    DRIVE_FILE_SCOPE,
]


def has_required_scopes(available_scopes: list[str] | None, required_scopes: list[str] | None = None) -> bool:
    """Check that every required scope was granted. Unknown grants (None) are accepted."""
    if available_scopes is None:
        return True
    required = required_scopes if required_scopes is not None else DOCS_SCOPES
    return set(required).issubset(available_scopes)
