"""
Dependency Injection Container for rich-content document creation.

Provides a centralized container for the credential provider and the factory
that builds the document service, so tests can inject mocks.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialProviderProtocol(Protocol):
    """Protocol for credential provider implementations."""

    def get_credentials(self) -> Any:
        """Return valid credentials or raise AuthenticationError."""
        ...


@dataclass
class Container:
    """
    Dependency injection container.

    Holds the credential provider and the factory used to build the Docs
    service from it. If not provided, defaults to the standard implementations.
    """

    credential_provider: CredentialProviderProtocol | None = None
    docs_service_factory: Callable[[CredentialProviderProtocol], Any] | None = None

    def __post_init__(self) -> None:
        """Initialize with defaults if not provided."""
        if self.credential_provider is None:
            from auth.credential_provider import StoredCredentialProvider

            self.credential_provider = StoredCredentialProvider()

        if self.docs_service_factory is None:
            from gdocs.writing import DocsService

            self.docs_service_factory = DocsService.from_credentials_provider

    def docs_service(self) -> Any:
        """Build a DocsService bound to the container's credential provider."""
        return self.docs_service_factory(self.credential_provider)


# Global container instance
_container: Container | None = None


def get_container() -> Container:
    """
    Get the global container instance.

    Creates a new container with default implementations if none exists.
    """
    global _container
    if _container is None:
        _container = Container()
        logger.debug("Initialized default dependency container")
    return _container


def set_container(container: Container) -> None:
    """Set the global container instance (use in tests to inject mocks)."""
    global _container
    _container = container
    logger.debug("Set custom dependency container")


def reset_container() -> None:
    """Reset the global container between tests."""
    global _container
    _container = None
    logger.debug("Reset dependency container")
