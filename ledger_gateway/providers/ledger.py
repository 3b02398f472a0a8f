"""Business network connection over the ledger REST API."""

from pathlib import Path
from typing import Any

import httpx
import structlog

from ledger_gateway.config.settings import ConnectionProfile
from ledger_gateway.credentials.backend import Wallet
from ledger_gateway.exceptions import LedgerConnectionError
from ledger_gateway.providers.base import LedgerConnection
from ledger_gateway.utils.connection_pool import HTTPConnectionPool, get_pool

log = structlog.get_logger(__name__)


class BusinessNetworkConnection(LedgerConnection):
    """Connection to a business network exposed through a REST endpoint.

    The identity used for requests comes from the wallet: if the wallet
    already holds a secret for the user it is reused, otherwise the supplied
    enrollment secret is stored in the wallet under the user id.
    """

    def __init__(self, profiles_dir: Path, pool: HTTPConnectionPool | None = None):
        """Initialize connection.

        Args:
            profiles_dir: Directory containing connection profiles
            pool: Connection pool to use (defaults to a shared pool per endpoint)
        """
        self.profiles_dir = profiles_dir
        self._pool = pool
        self.profile: ConnectionProfile | None = None
        self.business_network: str | None = None
        self._auth: tuple[str, str] | None = None

    @property
    def connected(self) -> bool:
        return self._auth is not None

    async def connect(
        self,
        connection_profile: str,
        business_network: str,
        user_id: str,
        user_secret: str,
        wallet: Wallet,
    ) -> None:
        """Connect to a business network and verify it answers a ping."""
        self.profile = ConnectionProfile.load(self.profiles_dir.expanduser(), connection_profile)
        self.business_network = business_network

        if self._pool is None:
            self._pool = await get_pool(
                name=f"ledger-{self.profile.url}",
                base_url=self.profile.url,
                timeout=self.profile.timeout,
            )

        if await wallet.contains(user_id):
            secret = await wallet.get(user_id)
            log.debug("ledger_identity_loaded", user_id=user_id)
        else:
            await wallet.add(user_id, user_secret)
            secret = user_secret
            log.info("ledger_identity_stored", user_id=user_id)

        self._auth = (user_id, secret)
        try:
            result = await self.ping()
        except (httpx.HTTPError, LedgerConnectionError):
            self._auth = None
            raise

        log.info(
            "ledger_connected",
            profile=connection_profile,
            business_network=business_network,
            version=result.get("version"),
        )

    async def ping(self) -> dict[str, Any]:
        if self._pool is None or self._auth is None:
            raise LedgerConnectionError("Connection not established", network=self.business_network)

        response = await self._pool.get(
            "/api/system/ping",
            auth=self._auth,
        )
        response.raise_for_status()

        result = response.json()
        if not isinstance(result, dict):
            raise LedgerConnectionError("Ping returned a non-object payload", network=self.business_network)
        return result

    async def disconnect(self) -> None:
        """Forget the identity and pool reference (pool manager closes the pool)."""
        self._auth = None
        self._pool = None
        log.info("ledger_disconnected", business_network=self.business_network)
