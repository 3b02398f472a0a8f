"""Clients for the ledger and object storage services."""

from ledger_gateway.providers.base import LedgerConnection, ObjectStore
from ledger_gateway.providers.ledger import BusinessNetworkConnection
from ledger_gateway.providers.object_storage import ObjectStorageClient

__all__ = [
    "BusinessNetworkConnection",
    "LedgerConnection",
    "ObjectStorageClient",
    "ObjectStore",
]
