"""CLI entry point for the ledger gateway."""

import asyncio
import sys

import click
import structlog

from ledger_gateway.cli.wallet import wallet_group
from ledger_gateway.config.cloud_env import CloudEnvironment
from ledger_gateway.config.settings import GatewaySettings
from ledger_gateway.exceptions import LedgerGatewayError
from ledger_gateway.server import serve
from ledger_gateway.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option("--log-level", envvar="LOG_LEVEL", default="INFO", help="Logging level")
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """ledger-gateway: business network health check and identity wallet."""
    configure_logging(log_level)
    ctx.ensure_object(dict)


@cli.command(name="serve")
@click.option("--host", default=None, help="Bind address (defaults to the platform binding)")
@click.option("--port", type=int, default=None, help="Port (defaults to $PORT or 3000)")
def serve_command(host: str | None, port: int | None) -> None:
    """Connect to the business network and start the HTTP server."""
    try:
        settings = GatewaySettings.load()
        cloud_env = CloudEnvironment.from_environ()
        started = asyncio.run(serve(settings, cloud_env, host=host, port=port))
    except LedgerGatewayError as e:
        log.error("startup_failed", error=e.message, exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        log.error("startup_failed", error=str(e), exc_info=True)
        sys.exit(1)

    if not started:
        log.error("startup_failed", error="HTTP listener did not start")
        sys.exit(1)


cli.add_command(wallet_group)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
