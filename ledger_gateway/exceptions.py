"""Custom exception hierarchy for the ledger gateway.

Exception Hierarchy:
    LedgerGatewayError (base)
    ├── ConfigurationError
    ├── CredentialError
    │   ├── CredentialNotFoundError
    │   └── CredentialExistsError
    └── LedgerConnectionError

Transport failures raised by httpx are deliberately not part of this
hierarchy; they propagate to callers untranslated.

Example Usage:
    >>> from ledger_gateway.exceptions import ConfigurationError
    >>> try:
    ...     profile = ConnectionProfile.load(directory, name)
    ... except FileNotFoundError as e:
    ...     raise ConfigurationError(f"Connection profile not found: {name}") from e
"""


class LedgerGatewayError(Exception):
    """Base exception for all ledger gateway errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(LedgerGatewayError):
    """Configuration-related errors.

    Raised synchronously while the process is being set up.

    Examples:
        - Storage container name not specified
        - No Object Storage service binding in VCAP_SERVICES
        - Required environment variable missing
        - Connection profile missing or malformed
    """

    pass


class CredentialError(LedgerGatewayError):
    """Credential store errors.

    Attributes:
        message: Human-readable error description
        reference: Name of the wallet entry involved
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: Name of the wallet entry involved
            suggestion: Optional suggestion for resolution
        """
        self.reference = reference
        self.suggestion = suggestion

        full_message = message
        if suggestion:
            full_message = f"{message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # Preserve original message (super sets self.message to full_message)
        self.message = message


class CredentialNotFoundError(CredentialError):
    """No wallet entry with the requested name exists in the container."""

    pass


class CredentialExistsError(CredentialError):
    """A wallet entry with the requested name already exists in the container."""

    pass


class LedgerConnectionError(LedgerGatewayError):
    """The business network connection is unusable.

    Attributes:
        network: Business network identifier, if known
    """

    def __init__(self, message: str, network: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            network: Business network identifier
        """
        self.network = network
        full_message = f"{message} (network: {network})" if network else message
        super().__init__(full_message)
        self.message = message
