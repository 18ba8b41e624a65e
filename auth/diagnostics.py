"""
Auth diagnostics for debugging credential issues.

Enable with AUTH_DIAGNOSTICS=1 environment variable.
"""

import logging
import os

logger = logging.getLogger(__name__)


def diagnostics_enabled() -> bool:
    """Check the AUTH_DIAGNOSTICS switch (read on every call so tests can toggle it)."""
    return os.getenv("AUTH_DIAGNOSTICS", "0") == "1"


def log_credential_lookup(
    source: str,
    user_email: str | None,
    found: bool,
    reason: str | None = None,
) -> None:
    """
    Log credential lookup attempt.

    Args:
        source: Where credentials were looked up (e.g. "file_store")
        user_email: User's email address (if known)
        found: Whether credentials were found
        reason: Additional context (e.g., "expired", "missing_refresh_token")
    """
    if not diagnostics_enabled():
        return

    logger.info(f"[CRED_LOOKUP] source={source} email={user_email} found={found} reason={reason}")


def log_token_refresh(
    user_email: str | None,
    success: bool,
    error: str | None = None,
    stored: bool = False,
) -> None:
    """
    Log token refresh attempt.

    Args:
        user_email: User's email address
        success: Whether the refresh succeeded
        error: Error message if refresh failed
        stored: Whether the refreshed token was written back to the store
    """
    if not diagnostics_enabled():
        return

    logger.info(f"[TOKEN_REFRESH] email={user_email} success={success} error={error} stored={stored}")
