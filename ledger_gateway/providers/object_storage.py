"""Object Storage client using the Swift REST API.

Authenticates with Keystone v3 password credentials, discovers the public
``object-store`` endpoint for the configured region from the token catalog,
and performs container listing and per-object GET/PUT/DELETE with an
``X-Auth-Token`` header.
"""

from typing import Any
from urllib.parse import quote

import structlog

from ledger_gateway.config.settings import ObjectStorageCredentials
from ledger_gateway.exceptions import ConfigurationError
from ledger_gateway.utils.connection_pool import HTTPConnectionPool, get_pool

log = structlog.get_logger(__name__)


class ObjectStorageClient:
    """Swift client bound to a single container."""

    def __init__(
        self,
        credentials: ObjectStorageCredentials,
        container: str,
        pool: HTTPConnectionPool | None = None,
    ):
        """Initialize the client.

        Authentication is deferred until the first request.

        Args:
            credentials: Object Storage service credentials
            container: Container holding the objects
            pool: Connection pool to use (defaults to a shared pool per auth URL)
        """
        self.credentials = credentials
        self.container = container
        self._pool = pool
        self._token: str | None = None
        self._endpoint: str | None = None

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def url(self) -> str:
        """Container URL. Only valid after authentication."""
        if self._endpoint is None:
            raise RuntimeError("ObjectStorageClient is not authenticated")
        return f"{self._endpoint}/{quote(self.container, safe='')}"

    async def _get_pool(self) -> HTTPConnectionPool:
        if self._pool is None:
            self._pool = await get_pool(
                name=f"object-storage-{self.credentials.auth_url}",
                base_url=self.credentials.auth_url,
            )
        return self._pool

    async def authenticate(self) -> None:
        """Obtain a token and the object-store endpoint.

        Raises:
            httpx.HTTPStatusError: If the identity service rejects the credentials
            ConfigurationError: If the catalog has no object-store endpoint
                for the configured region
        """
        pool = await self._get_pool()
        response = await pool.post(
            f"{self.credentials.auth_url}/v3/auth/tokens",
            json=self._auth_body(),
        )
        response.raise_for_status()

        self._token = response.headers["X-Subject-Token"]
        self._endpoint = self._find_endpoint(response.json())
        log.info(
            "object_storage_authenticated",
            region=self.credentials.region,
            container=self.container,
        )

    def _auth_body(self) -> dict[str, Any]:
        return {
            "auth": {
                "identity": {
                    "methods": ["password"],
                    "password": {
                        "user": {
                            "id": self.credentials.user_id,
                            "password": self.credentials.password.get_secret_value(),
                        }
                    },
                },
                "scope": {"project": {"id": self.credentials.project_id}},
            }
        }

    def _find_endpoint(self, token_data: dict[str, Any]) -> str:
        catalog = token_data.get("token", {}).get("catalog", [])
        for service in catalog:
            if service.get("type") != "object-store":
                continue
            for endpoint in service.get("endpoints", []):
                if endpoint.get("interface") == "public" and endpoint.get("region") == self.credentials.region:
                    return endpoint["url"].rstrip("/")

        raise ConfigurationError(f"No public object-store endpoint for region '{self.credentials.region}'")

    async def _ensure_authenticated(self) -> HTTPConnectionPool:
        if self._token is None:
            await self.authenticate()
        return await self._get_pool()

    def _headers(self) -> dict[str, str]:
        if self._token is None:
            raise RuntimeError("ObjectStorageClient is not authenticated")
        return {"X-Auth-Token": self._token}

    async def list_objects(self) -> list[str]:
        """List the URLs of every object in the container."""
        pool = await self._ensure_authenticated()
        response = await pool.get(self.url, headers={**self._headers(), "Accept": "text/plain"})
        response.raise_for_status()

        names = [line for line in response.text.splitlines() if line]
        log.debug("object_storage_listed", container=self.container, count=len(names))
        return [f"{self.url}/{quote(name, safe='')}" for name in names]

    async def get_object(self, url: str) -> str:
        pool = await self._ensure_authenticated()
        response = await pool.get(url, headers=self._headers())
        response.raise_for_status()
        return response.text

    async def put_object(self, url: str, body: str) -> None:
        pool = await self._ensure_authenticated()
        response = await pool.put(url, headers=self._headers(), content=body.encode("utf-8"))
        response.raise_for_status()

    async def delete_object(self, url: str) -> None:
        pool = await self._ensure_authenticated()
        response = await pool.delete(url, headers=self._headers())
        response.raise_for_status()
