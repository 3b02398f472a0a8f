"""Credential-related exceptions.

Re-exported from ledger_gateway.exceptions so wallet callers can import
everything they need from ledger_gateway.credentials.
"""

from ledger_gateway.exceptions import (
    CredentialError,
    CredentialExistsError,
    CredentialNotFoundError,
)

__all__ = [
    "CredentialError",
    "CredentialExistsError",
    "CredentialNotFoundError",
]
