"""Wallet protocol for credential storage."""

from typing import Protocol


class Wallet(Protocol):
    """Protocol defining the interface of a wallet.

    A wallet maps unique names to opaque credential values. The business
    network connection reads and writes issued identities through it.
    """

    async def list(self) -> list[str]:
        """List the names of all credentials in the wallet."""
        ...

    async def contains(self, name: str) -> bool:
        """Check whether the named credentials are in the wallet."""
        ...

    async def get(self, name: str) -> str:
        """Retrieve the named credentials.

        Raises:
            CredentialNotFoundError: If no credentials have that name
        """
        ...

    async def add(self, name: str, value: str) -> None:
        """Store new credentials.

        Raises:
            CredentialExistsError: If credentials with that name already exist
        """
        ...

    async def update(self, name: str, value: str) -> None:
        """Replace existing credentials.

        Raises:
            CredentialNotFoundError: If no credentials have that name
        """
        ...

    async def remove(self, name: str) -> None:
        """Delete existing credentials.

        Raises:
            CredentialNotFoundError: If no credentials have that name
        """
        ...
