"""
Interfaces for the remote services the gateway talks to.

``ObjectStore`` is the slice of an object-storage client the wallet needs;
``LedgerConnection`` is the business network client the health endpoint pings.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ledger_gateway.credentials.backend import Wallet


class ObjectStore(Protocol):
    """Object storage scoped to a single container.

    Objects are addressed by fully qualified URL. Transport failures are
    raised as ``httpx.HTTPError`` and are not translated.
    """

    @property
    def url(self) -> str:
        """Base URL of the container; object URLs are ``<url>/<name>``."""
        ...

    async def list_objects(self) -> list[str]:
        """List the URLs of every object in the container."""
        ...

    async def get_object(self, url: str) -> str:
        """Download the content of the object at ``url``."""
        ...

    async def put_object(self, url: str, body: str) -> None:
        """Create or overwrite the object at ``url``."""
        ...

    async def delete_object(self, url: str) -> None:
        """Delete the object at ``url``."""
        ...


class LedgerConnection(ABC):
    """Connection to a deployed business network."""

    @abstractmethod
    async def connect(
        self,
        connection_profile: str,
        business_network: str,
        user_id: str,
        user_secret: str,
        wallet: Wallet,
    ) -> None:
        """Connect to a business network.

        Args:
            connection_profile: Name of the connection profile to use
            business_network: Business network identifier
            user_id: Identity to connect as
            user_secret: Enrollment secret for ``user_id``
            wallet: Credential store holding issued identities

        Raises:
            ConfigurationError: If the connection profile cannot be loaded
            httpx.HTTPError: If the network cannot be reached
        """
        pass

    @abstractmethod
    async def ping(self) -> dict[str, Any]:
        """Test the connection.

        Returns:
            Diagnostic payload from the business network (e.g. ``{"version": ...}``)

        Raises:
            LedgerConnectionError: If ``connect()`` has not completed
            httpx.HTTPError: If the ping request fails
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the connection."""
        pass
