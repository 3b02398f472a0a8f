"""HTTP server exposing the business network health check."""

import socket
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ledger_gateway.config.cloud_env import CloudEnvironment
from ledger_gateway.config.settings import GatewaySettings
from ledger_gateway.credentials.backend import Wallet
from ledger_gateway.credentials.object_store_wallet import ObjectStorageWallet
from ledger_gateway.providers.base import LedgerConnection
from ledger_gateway.providers.ledger import BusinessNetworkConnection
from ledger_gateway.utils.connection_pool import close_all_pools

log = structlog.get_logger(__name__)


def create_app(ledger: LedgerConnection, hostname: str | None = None) -> FastAPI:
    """Build the application around an established ledger connection.

    Args:
        ledger: Connected business network
        hostname: Host identifier added to ping responses (defaults to this host)
    """
    app = FastAPI(title="Ledger Gateway")
    app.state.ledger = ledger
    app.state.hostname = hostname or socket.gethostname()

    @app.get("/")
    async def ping(request: Request) -> dict[str, Any]:
        """Ping the business network."""
        result = await request.app.state.ledger.ping()
        return {**result, "hostname": request.app.state.hostname}

    @app.exception_handler(Exception)
    async def handle_error(request: Request, exc: Exception) -> JSONResponse:
        log.error("request_failed", path=request.url.path, error=str(exc), exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    return app


async def connect_ledger(
    settings: GatewaySettings,
    wallet: Wallet | None = None,
    ledger: LedgerConnection | None = None,
) -> LedgerConnection:
    """Connect to the configured business network.

    Args:
        settings: Process settings
        wallet: Wallet to store identities in (defaults to the Object
            Storage container from settings)
        ledger: Connection to open (defaults to a REST connection)

    Raises:
        ConfigurationError: If the wallet or connection profile cannot be set up
        httpx.HTTPError: If a remote service fails
    """
    if wallet is None:
        wallet = ObjectStorageWallet(settings.container)
    if ledger is None:
        ledger = BusinessNetworkConnection(settings.profiles_dir)

    await ledger.connect(
        settings.connection_profile,
        settings.business_network,
        settings.user_id,
        settings.user_secret.get_secret_value(),
        wallet,
    )
    return ledger


class GatewayServer(uvicorn.Server):
    """uvicorn server that reports the public URL once listening."""

    def __init__(self, config: uvicorn.Config, public_url: str):
        super().__init__(config)
        self.public_url = public_url

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if not self.should_exit:
            log.info("application_started", url=self.public_url)


async def serve(
    settings: GatewaySettings,
    cloud_env: CloudEnvironment,
    host: str | None = None,
    port: int | None = None,
) -> bool:
    """Connect to the business network, then serve HTTP until shutdown.

    Returns:
        False if the listener could not start
    """
    try:
        ledger = await connect_ledger(settings)
        app = create_app(ledger)

        config = uvicorn.Config(
            app,
            host=host or cloud_env.bind,
            port=port or cloud_env.port,
            log_config=None,
        )
        server = GatewayServer(config, public_url=cloud_env.url)
        await server.serve()
        await ledger.disconnect()
        return server.started
    finally:
        await close_all_pools()
