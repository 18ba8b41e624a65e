"""
Credential providers for the Google Docs transport.

A provider hands back credentials that are valid right now. The stored
provider loads them from a credential store, refreshes them when they have
expired and writes the refreshed token back. Missing or unrefreshable
credentials fail fast with an AuthenticationError.
"""

import logging

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from auth.config import DocsConfig, get_docs_config
from auth.credential_store import get_credential_store
from auth.diagnostics import log_credential_lookup, log_token_refresh
from auth.interfaces import BaseCredentialProvider, BaseCredentialStore
from auth.scopes import has_required_scopes
from core.errors import CredentialsExpiredError, CredentialsNotFoundError, TokenRefreshError

logger = logging.getLogger(__name__)


class StoredCredentialProvider(BaseCredentialProvider):
    """Provide credentials for one user from a credential store."""

    def __init__(
        self,
        store: BaseCredentialStore | None = None,
        user_email: str | None = None,
        config: DocsConfig | None = None,
    ):
        self._config = config or get_docs_config()
        self._store = store or get_credential_store()
        self.user_email = user_email or self._config.user_email

    def get_credentials(self) -> Credentials:
        if not self.user_email:
            log_credential_lookup("file_store", None, found=False, reason="no_user_email")
            raise CredentialsNotFoundError(None)

        credentials = self._store.get_credential(self.user_email)
        if credentials is None:
            log_credential_lookup("file_store", self.user_email, found=False, reason="missing")
            raise CredentialsNotFoundError(self.user_email)

        if not has_required_scopes(credentials.scopes, self._config.scopes):
            logger.warning(
                f"Stored credentials for {self.user_email} lack some scopes: "
                f"granted={credentials.scopes} required={self._config.scopes}"
            )

        if credentials.valid:
            log_credential_lookup("file_store", self.user_email, found=True)
            return credentials

        if not credentials.refresh_token:
            log_credential_lookup("file_store", self.user_email, found=True, reason="missing_refresh_token")
            raise CredentialsExpiredError(
                f"Google credentials for {self.user_email} have expired and carry no refresh token. "
                "Please reconnect the Google account."
            )

        log_credential_lookup("file_store", self.user_email, found=True, reason="expired")
        return self._refresh(credentials)

    def _with_client_settings(self, credentials: Credentials) -> Credentials:
        """Fill OAuth client details the stored credential lacks from configuration."""
        if not (credentials.client_id and credentials.client_secret) and not self._config.is_configured():
            logger.warning(
                f"Stored credentials for {self.user_email} lack OAuth client details and "
                "GOOGLE_OAUTH_CLIENT_ID / GOOGLE_OAUTH_CLIENT_SECRET are not set"
            )

        token_uri = credentials.token_uri or self._config.token_uri
        client_id = credentials.client_id or self._config.client_id
        client_secret = credentials.client_secret or self._config.client_secret
        if (token_uri, client_id, client_secret) == (
            credentials.token_uri,
            credentials.client_id,
            credentials.client_secret,
        ):
            return credentials

        return Credentials(
            token=credentials.token,
            refresh_token=credentials.refresh_token,
            token_uri=token_uri,
            client_id=client_id,
            client_secret=client_secret,
            scopes=credentials.scopes,
            expiry=credentials.expiry,
        )

    def _refresh(self, credentials: Credentials) -> Credentials:
        credentials = self._with_client_settings(credentials)
        logger.info(f"Refreshing expired Google credentials for {self.user_email}")
        try:
            credentials.refresh(Request())
        except RefreshError as e:
            log_token_refresh(self.user_email, success=False, error=str(e))
            logger.error(f"Token refresh failed for {self.user_email}: {e}")
            raise TokenRefreshError(self.user_email, str(e)) from e

        stored = self._store.store_credential(self.user_email, credentials)
        if not stored:
            logger.warning(f"Refreshed credentials for {self.user_email} could not be saved")
        log_token_refresh(self.user_email, success=True, stored=stored)
        return credentials


class StaticCredentialProvider(BaseCredentialProvider):
    """Provide a fixed, already-valid credential (scripts and tests)."""

    def __init__(self, credentials: Credentials):
        self._credentials = credentials

    def get_credentials(self) -> Credentials:
        return self._credentials
