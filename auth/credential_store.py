"""
Credential Store for Google Docs access.

Persists OAuth credentials as one JSON file per user (`<email>.json`) in a
local directory. Files are written atomically and readable by the owner only.
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from typing import Any

from google.oauth2.credentials import Credentials

from auth.config import get_credentials_directory
from auth.interfaces import BaseCredentialStore

logger = logging.getLogger(__name__)

CREDENTIAL_FILE_SUFFIX = ".json"


def _parse_expiry(raw: Any, user_email: str) -> datetime | None:
    if not raw:
        return None
    try:
        expiry = datetime.fromisoformat(raw)
    except (ValueError, TypeError) as e:
        logger.warning(f"Ignoring unparseable token expiry for {user_email}: {e}")
        return None
    # google-auth compares expiry against naive UTC
    return expiry.replace(tzinfo=None) if expiry.tzinfo is not None else expiry


def credentials_to_dict(credentials: Credentials) -> dict[str, Any]:
    """Serializable form of an authorized-user credential."""
    return {
        "token": credentials.token,
        "refresh_token": credentials.refresh_token,
        "token_uri": credentials.token_uri,
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "scopes": list(credentials.scopes) if credentials.scopes else None,
        "expiry": credentials.expiry.isoformat() if credentials.expiry else None,
    }


def credentials_from_dict(data: dict[str, Any], user_email: str) -> Credentials:
    """Inverse of `credentials_to_dict`; missing members stay unset."""
    return Credentials(
        token=data.get("token"),
        refresh_token=data.get("refresh_token"),
        token_uri=data.get("token_uri"),
        client_id=data.get("client_id"),
        client_secret=data.get("client_secret"),
        scopes=data.get("scopes"),
        expiry=_parse_expiry(data.get("expiry"), user_email),
    )


class LocalDirectoryCredentialStore(BaseCredentialStore):
    """Keeps each user's credential in `<base_dir>/<email>.json`."""

    def __init__(self, base_dir: str | None = None):
        self.base_dir: str = base_dir or get_credentials_directory()
        logger.debug(f"Credential store directory: {self.base_dir}")

    def _path_for(self, user_email: str) -> str:
        if os.sep in user_email or (os.altsep and os.altsep in user_email):
            raise ValueError(f"Invalid user email for credential file: {user_email!r}")
        return os.path.join(self.base_dir, f"{user_email}{CREDENTIAL_FILE_SUFFIX}")

    def get_credential(self, user_email: str) -> Credentials | None:
        path = self._path_for(user_email)
        if not os.path.isfile(path):
            logger.debug(f"No stored credential for {user_email}")
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Unreadable credential file {path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.error(f"Credential file {path} does not hold a JSON object")
            return None
        return credentials_from_dict(data, user_email)

    def store_credential(self, user_email: str, credentials: Credentials) -> bool:
        path = self._path_for(user_email)
        try:
            os.makedirs(self.base_dir, mode=0o700, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.base_dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(credentials_to_dict(credentials), f, indent=2)
                os.chmod(tmp_path, 0o600)
                os.replace(tmp_path, path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Could not write credential for {user_email} to {path}: {e}")
            return False

        logger.info(f"Saved credential for {user_email}")
        return True

    def delete_credential(self, user_email: str) -> bool:
        path = self._path_for(user_email)
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug(f"No credential to delete for {user_email}")
        except OSError as e:
            logger.error(f"Could not delete credential file {path}: {e}")
            return False
        else:
            logger.info(f"Deleted credential for {user_email}")
        return True

    def list_users(self) -> list[str]:
        try:
            names = os.listdir(self.base_dir)
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error(f"Could not list credential directory {self.base_dir}: {e}")
            return []

        return sorted(name[: -len(CREDENTIAL_FILE_SUFFIX)] for name in names if name.endswith(CREDENTIAL_FILE_SUFFIX))


_credential_store: BaseCredentialStore | None = None


def get_credential_store() -> BaseCredentialStore:
    """Get the global credential store instance."""
    global _credential_store

    if _credential_store is None:
        _credential_store = LocalDirectoryCredentialStore()
        logger.info(f"Initialized credential store: {type(_credential_store).__name__}")

    return _credential_store


def set_credential_store(store: BaseCredentialStore | None) -> None:
    """Set the global credential store instance (for testing)."""
    global _credential_store
    _credential_store = store
