"""Credential storage for business network identities."""

from ledger_gateway.credentials.backend import Wallet
from ledger_gateway.credentials.exceptions import (
    CredentialError,
    CredentialExistsError,
    CredentialNotFoundError,
)
from ledger_gateway.credentials.object_store_wallet import ObjectStorageWallet, object_name

__all__ = [
    "CredentialError",
    "CredentialExistsError",
    "CredentialNotFoundError",
    "ObjectStorageWallet",
    "Wallet",
    "object_name",
]
