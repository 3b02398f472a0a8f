"""
HTTP connection pooling for the ledger and object-storage clients.

Pools are shared per remote service and released together at server shutdown.
"""

import asyncio
from typing import Any

import httpx
import structlog

log = structlog.get_logger(__name__)


class HTTPConnectionPool:
    """HTTP connection pool wrapping a lazily created ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        max_connections: int = 10,
        max_keepalive_connections: int = 5,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.max_connections = max_connections
        self.max_keepalive_connections = max_keepalive_connections
        self.timeout = timeout
        self.headers = headers or {}
        self.transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Initialize the connection pool."""
        async with self._lock:
            if self._client is None:
                limits = httpx.Limits(
                    max_keepalive_connections=self.max_keepalive_connections,
                    max_connections=self.max_connections,
                    keepalive_expiry=30.0,
                )

                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    limits=limits,
                    timeout=self.timeout,
                    http2=True,
                    headers=self.headers,
                    transport=self.transport,
                )

                log.info(
                    "connection_pool_initialized",
                    base_url=self.base_url,
                    max_connections=self.max_connections,
                )

    async def close(self) -> None:
        """Close the connection pool."""
        async with self._lock:
            if self._client:
                await self._client.aclose()
                self._client = None
                log.info("connection_pool_closed", base_url=self.base_url)

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            await self.initialize()

        assert self._client is not None
        return self._client

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make GET request."""
        client = await self._ensure_client()
        return await client.get(url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make POST request."""
        client = await self._ensure_client()
        return await client.post(url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make PUT request."""
        client = await self._ensure_client()
        return await client.put(url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make DELETE request."""
        client = await self._ensure_client()
        return await client.delete(url, **kwargs)

    async def __aenter__(self) -> "HTTPConnectionPool":
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()


class ConnectionPoolManager:
    """Manage multiple connection pools."""

    def __init__(self) -> None:
        self._pools: dict[str, HTTPConnectionPool] = {}
        self._lock = asyncio.Lock()

    async def get_pool(
        self,
        name: str,
        base_url: str,
        max_connections: int = 10,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> HTTPConnectionPool:
        """Get or create a named connection pool."""
        async with self._lock:
            if name not in self._pools:
                pool = HTTPConnectionPool(
                    base_url=base_url,
                    max_connections=max_connections,
                    timeout=timeout,
                    headers=headers,
                )
                await pool.initialize()
                self._pools[name] = pool
                log.info("connection_pool_created", name=name, base_url=base_url)

            return self._pools[name]

    async def close_all(self) -> None:
        """Close all connection pools."""
        async with self._lock:
            for pool in self._pools.values():
                await pool.close()
            self._pools.clear()
            log.info("all_connection_pools_closed")


# Global pool manager
_pool_manager = ConnectionPoolManager()


async def get_pool(
    name: str,
    base_url: str,
    max_connections: int = 10,
    timeout: float = 30.0,
    headers: dict[str, str] | None = None,
) -> HTTPConnectionPool:
    """Get a named connection pool from the global manager."""
    return await _pool_manager.get_pool(
        name=name,
        base_url=base_url,
        max_connections=max_connections,
        timeout=timeout,
        headers=headers,
    )


async def close_all_pools() -> None:
    """Close every pool held by the global manager."""
    await _pool_manager.close_all()
