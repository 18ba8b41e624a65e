"""
Abstract interfaces for authentication components.

These interfaces define the contracts for credential storage and for the
provider that hands a valid bearer credential to the document transport.
They enable dependency injection and testability.
"""

from abc import ABC, abstractmethod

from google.oauth2.credentials import Credentials


class BaseCredentialStore(ABC):
    """Abstract base for credential storage.

    Implementations handle persistent storage of OAuth credentials,
    typically to disk or a database.
    """

    @abstractmethod
    def get_credential(self, user_email: str) -> Credentials | None:
        """Get credentials for a user.

        Args:
            user_email: The user's email address.

        Returns:
            Credentials if found, None otherwise.
        """
        pass

    @abstractmethod
    def store_credential(self, user_email: str, credentials: Credentials) -> bool:
        """Store credentials for a user.

        Args:
            user_email: The user's email address.
            credentials: The OAuth credentials to store.

        Returns:
            True if stored successfully, False otherwise.
        """
        pass

    @abstractmethod
    def delete_credential(self, user_email: str) -> bool:
        """Delete credentials for a user.

        Args:
            user_email: The user's email address.

        Returns:
            True if deleted successfully, False otherwise.
        """
        pass

    @abstractmethod
    def list_users(self) -> list[str]:
        """List all users with stored credentials."""
        pass


class BaseCredentialProvider(ABC):
    """Abstract base for credential providers.

    A provider either returns credentials that are valid right now or raises
    an AuthenticationError. It never returns None, so an unauthenticated
    request can't be built by accident.
    """

    @abstractmethod
    def get_credentials(self) -> Credentials:
        """Return valid credentials.

        Raises:
            AuthenticationError: If no usable credential is available.
        """
        pass
