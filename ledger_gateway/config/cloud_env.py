"""Cloud Foundry application environment.

Parses the platform metadata a Cloud Foundry style runtime injects into the
process environment:

- ``VCAP_APPLICATION``: application name and routes; its presence means the
  process is running on the platform rather than on a developer machine.
- ``VCAP_SERVICES``: bound service instances grouped by service label, each
  with a ``name`` and a ``credentials`` mapping.
- ``PORT``: port the platform router forwards traffic to.

Outside the platform the application binds to ``localhost:3000``.
"""

from __future__ import annotations

import json
import os
import re
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel, Field

from ledger_gateway.exceptions import ConfigurationError

log = structlog.get_logger(__name__)

DEFAULT_PORT = 3000


class ServiceBinding(BaseModel):
    """A single bound service instance from ``VCAP_SERVICES``."""

    name: str
    label: str = ""
    tags: list[str] = Field(default_factory=list)
    credentials: dict[str, Any] = Field(default_factory=dict)


class CloudEnvironment(BaseModel):
    """Application environment resolved from platform metadata."""

    application: dict[str, Any] | None = None
    services: dict[str, list[ServiceBinding]] = Field(default_factory=dict)
    port_override: int | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> CloudEnvironment:
        """Build the environment from ``os.environ`` (or the given mapping).

        Raises:
            ConfigurationError: If VCAP_* variables are not valid JSON or PORT
                is not an integer
        """
        env = os.environ if environ is None else environ

        application = _load_json(env, "VCAP_APPLICATION")
        services = _load_json(env, "VCAP_SERVICES") or {}

        port_override = None
        if env.get("PORT"):
            try:
                port_override = int(env["PORT"])
            except ValueError as e:
                raise ConfigurationError(f"PORT must be an integer, got: {env['PORT']}") from e

        try:
            return cls(application=application, services=services, port_override=port_override)
        except ValueError as e:
            raise ConfigurationError(f"Invalid VCAP_SERVICES structure: {e}") from e

    @property
    def is_local(self) -> bool:
        """True when not running on the platform."""
        return self.application is None

    @property
    def name(self) -> str | None:
        return (self.application or {}).get("name")

    @property
    def port(self) -> int:
        if self.port_override is not None:
            return self.port_override
        return int((self.application or {}).get("port") or DEFAULT_PORT)

    @property
    def bind(self) -> str:
        return "localhost" if self.is_local else "0.0.0.0"  # nosec B104 # platform router binding

    @property
    def urls(self) -> list[str]:
        uris = (self.application or {}).get("application_uris") or []
        if not uris:
            return [f"http://localhost:{self.port}"]
        return [f"https://{uri}" for uri in uris]

    @property
    def url(self) -> str:
        return self.urls[0]

    def get_service(self, pattern: str | re.Pattern[str]) -> ServiceBinding | None:
        """Find the first bound service whose name matches ``pattern``.

        Args:
            pattern: Exact service name, or a compiled regular expression
                searched against the service name

        Returns:
            Matching binding, or None
        """
        for bindings in self.services.values():
            for binding in bindings:
                if isinstance(pattern, re.Pattern):
                    if pattern.search(binding.name):
                        return binding
                elif binding.name == pattern:
                    return binding
        return None

    def get_service_credentials(self, pattern: str | re.Pattern[str]) -> dict[str, Any] | None:
        """Credentials of the first service matching ``pattern``, or None."""
        binding = self.get_service(pattern)
        if binding is None:
            log.debug("service_binding_not_found", pattern=str(getattr(pattern, "pattern", pattern)))
            return None
        return binding.credentials


def _load_json(env: Mapping[str, str], var_name: str) -> Any:
    raw = env.get(var_name)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{var_name} is not valid JSON: {e}") from e
