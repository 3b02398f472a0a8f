"""
Configuration system using Pydantic for type-safe settings management.

Settings are read once from the process environment at startup and passed
explicitly to the components that need them.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledger_gateway.config.cloud_env import CloudEnvironment
from ledger_gateway.exceptions import ConfigurationError

OBJECT_STORAGE_SERVICE = re.compile(r"Object Storage")

DEFAULT_AUTH_URL = "https://identity.open.softlayer.com"
DEFAULT_REGION = "dallas"


class ObjectStorageCredentials(BaseModel):
    """Object Storage service credentials from a service binding.

    Field aliases follow the keys the Object Storage service writes into
    ``VCAP_SERVICES`` (``userId``, ``projectId``, ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    user_id: str = Field(..., alias="userId", min_length=1)
    password: SecretStr
    project_id: str = Field(..., alias="projectId", min_length=1)
    auth_url: str = Field(default=DEFAULT_AUTH_URL)
    region: str = Field(default=DEFAULT_REGION)

    @field_validator("auth_url")
    @classmethod
    def strip_auth_url(cls, value: str) -> str:
        """Normalize auth URL (trailing slash and any ``/v3`` suffix)."""
        value = value.rstrip("/")
        if value.endswith("/v3"):
            value = value[: -len("/v3")]
        return value


def discover_object_storage_credentials(
    cloud_env: CloudEnvironment | None = None,
) -> ObjectStorageCredentials:
    """Resolve Object Storage credentials from the service bindings.

    Args:
        cloud_env: Environment to search (defaults to the process environment)

    Returns:
        Credentials of the first bound service named like ``Object Storage``

    Raises:
        ConfigurationError: If no binding matches or its credentials are incomplete
    """
    env = cloud_env or CloudEnvironment.from_environ()
    creds = env.get_service_credentials(OBJECT_STORAGE_SERVICE)
    if not creds:
        raise ConfigurationError("could not find credentials for Object Storage service")

    try:
        return ObjectStorageCredentials.model_validate(creds)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Object Storage credentials: {e}") from e


class ConnectionProfile(BaseModel):
    """Ledger connection profile.

    Profiles live at ``<profiles_dir>/<name>/connection.json``.
    """

    name: str
    url: str = Field(..., description="Base URL of the business network REST endpoint")
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        if not (value.startswith("http://") or value.startswith("https://")):
            raise ValueError(f"url must start with http:// or https://, got: {value}")
        return value.rstrip("/")

    @classmethod
    def load(cls, profiles_dir: Path, name: str) -> ConnectionProfile:
        """Load a named connection profile.

        Raises:
            ConfigurationError: If the profile is missing, unreadable or invalid
        """
        profile_file = profiles_dir / name / "connection.json"
        if not profile_file.exists():
            raise ConfigurationError(f"Connection profile not found: {profile_file}")

        try:
            data: Any = json.loads(profile_file.read_text())
        except OSError as e:
            raise ConfigurationError(f"Cannot read connection profile: {profile_file}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in connection profile {profile_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError("Connection profile must be a JSON object")

        try:
            return cls(**{**data, "name": name})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid connection profile {name}: {e}") from e


class GatewaySettings(BaseSettings):
    """Process settings resolved from environment variables."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    connection_profile: str = Field(
        ..., validation_alias=AliasChoices("COMPOSER_CONNECTION_PROFILE", "connection_profile")
    )
    business_network: str = Field(
        ..., validation_alias=AliasChoices("COMPOSER_BUSINESS_NETWORK", "business_network")
    )
    user_id: str = Field(..., validation_alias=AliasChoices("COMPOSER_USER_ID", "user_id"))
    user_secret: SecretStr = Field(..., validation_alias=AliasChoices("COMPOSER_USER_SECRET", "user_secret"))
    container: str = Field(..., validation_alias=AliasChoices("OBJECT_STORAGE_CONTAINER", "container"))
    profiles_dir: Path = Field(
        default=Path("~/.composer-connection-profiles"),
        validation_alias=AliasChoices("COMPOSER_PROFILES_DIR", "profiles_dir"),
    )

    @classmethod
    def load(cls, **overrides: Any) -> GatewaySettings:
        """Read settings from the environment.

        Raises:
            ConfigurationError: If a required variable is missing or invalid
        """
        try:
            return cls(**overrides)
        except ValidationError as e:
            missing = [str(err["loc"][0]) for err in e.errors() if err["type"] == "missing"]
            if missing:
                raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}") from e
            raise ConfigurationError(f"Invalid settings: {e}") from e
