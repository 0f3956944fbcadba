"""
ovsx-client - Client Configuration

Two layers:
- OVSXClientOptions: immutable options handed to OVSXClient at construction
- Settings: environment-backed defaults (OVSX_ prefix) for create_client()

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Frozen pydantic model for configuration owned by a single client
"""

from __future__ import annotations

from nodesemver import valid
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from ovsx_client.core.exceptions import ConfigurationError

DEFAULT_API_URL = "https://open-vsx.org/"
DEFAULT_API_VERSION = "1.50.0"


class OVSXClientOptions(BaseModel):
    """Options for a single OVSXClient.

    Attributes:
        api_version: Host application API version checked against
            each extension's ``engines.vscode`` range
        api_url: Base URL of the registry (e.g. https://open-vsx.org/)
    """

    model_config = ConfigDict(frozen=True)

    api_version: str
    api_url: str

    def model_post_init(self, __context: object) -> None:
        if not self.api_url:
            raise ConfigurationError("api_url must not be empty")
        if valid(self.api_version, False) is None:
            raise ConfigurationError(
                f"api_version {self.api_version!r} is not a valid semantic version"
            )


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    All settings can be overridden via environment variables with OVSX_ prefix.
    Example: OVSX_API_URL=https://open-vsx.org/, OVSX_API_VERSION=1.84.0
    """

    # Registry
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION

    # Transport
    timeout: float = 30.0
    max_retries: int = 1
    retry_delay: float = 1.0

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Tracing configuration
    tracing_enabled: bool = False
    tracing_console_export: bool = False

    model_config = SettingsConfigDict(
        env_prefix="OVSX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def client_options(self) -> OVSXClientOptions:
        """Build the immutable client options from these settings."""
        return OVSXClientOptions(api_version=self.api_version, api_url=self.api_url)


def get_settings() -> Settings:
    """Get client settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
