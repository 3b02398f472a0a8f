"""Configuration for the ledger gateway."""

from ledger_gateway.config.cloud_env import CloudEnvironment, ServiceBinding
from ledger_gateway.config.settings import (
    ConnectionProfile,
    GatewaySettings,
    ObjectStorageCredentials,
    discover_object_storage_credentials,
)

__all__ = [
    "CloudEnvironment",
    "ConnectionProfile",
    "GatewaySettings",
    "ObjectStorageCredentials",
    "ServiceBinding",
    "discover_object_storage_credentials",
]
