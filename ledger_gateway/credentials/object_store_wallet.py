"""Wallet that persists credentials into an Object Storage container.

Each credential is one object in the container; its name is the last path
segment of the object's URL. Nothing is cached: every operation lists the
container first to resolve names against the current remote state.
"""

import posixpath
from urllib.parse import quote, unquote, urlsplit

import structlog

from ledger_gateway.config.settings import ObjectStorageCredentials, discover_object_storage_credentials
from ledger_gateway.exceptions import ConfigurationError, CredentialExistsError, CredentialNotFoundError
from ledger_gateway.providers.base import ObjectStore
from ledger_gateway.providers.object_storage import ObjectStorageClient

log = structlog.get_logger(__name__)


def object_name(url: str) -> str:
    """Return the credential name of an object URL.

    Example:
        >>> object_name("https://store/v1/AUTH_x/wallet1/alice")
        'alice'
    """
    return unquote(posixpath.basename(urlsplit(url).path))


class ObjectStorageWallet:
    """Wallet backed by an Object Storage container.

    Operations are not atomic with respect to other writers: the container
    is listed and then acted upon in a second request.

    Example:
        >>> wallet = ObjectStorageWallet("wallet1")
        >>> await wallet.add("admin", enrollment_secret)
        >>> await wallet.get("admin")
    """

    def __init__(
        self,
        container: str | None,
        credentials: ObjectStorageCredentials | None = None,
        store: ObjectStore | None = None,
    ):
        """Initialize the wallet.

        Args:
            container: Name of the container holding the credentials
            credentials: Object Storage credentials; discovered from the
                service bindings when omitted
            store: Object store to use instead of an ``ObjectStorageClient``

        Raises:
            ConfigurationError: If the container is not specified or no
                Object Storage credentials can be found
        """
        if not container:
            raise ConfigurationError("container not specified")

        self.container = container
        if store is None:
            self.credentials = credentials or discover_object_storage_credentials()
            store = ObjectStorageClient(self.credentials, container)
        else:
            self.credentials = credentials
        self.store = store

    async def _find(self, name: str) -> str | None:
        for url in await self.store.list_objects():
            if object_name(url) == name:
                return url
        return None

    async def _require(self, name: str) -> str:
        url = await self._find(name)
        if url is None:
            raise CredentialNotFoundError(f"file {name} does not exist", reference=name)
        return url

    async def list(self) -> list[str]:
        """List the names of all credentials in the wallet."""
        return [object_name(url) for url in await self.store.list_objects()]

    async def contains(self, name: str) -> bool:
        return await self._find(name) is not None

    async def get(self, name: str) -> str:
        url = await self._require(name)
        return await self.store.get_object(url)

    async def add(self, name: str, value: str) -> None:
        """Store new credentials at ``<container url>/<name>``.

        The name is percent-encoded in full, ``/`` included, so any name
        read back from the container listing equals the one stored.
        """
        if await self._find(name) is not None:
            raise CredentialExistsError(f"file {name} already exists", reference=name)

        await self.store.put_object(f"{self.store.url}/{quote(name, safe='')}", value)
        log.info("wallet_entry_added", container=self.container, name=name)

    async def update(self, name: str, value: str) -> None:
        """Overwrite credentials at the URL the container listing returned."""
        url = await self._require(name)
        await self.store.put_object(url, value)
        log.info("wallet_entry_updated", container=self.container, name=name)

    async def remove(self, name: str) -> None:
        url = await self._require(name)
        await self.store.delete_object(url)
        log.info("wallet_entry_removed", container=self.container, name=name)
