"""
Propel Settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find project root (where .env file is located)
PROJECT_ROOT = Path(__file__).parent.parent


class PropelSettings(BaseSettings):
    """
    Propel provider configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="PROPEL_",  # All provider env vars must start with PROPEL_
    )

    # API credentials
    client_id: str | None = Field(
        default=None, description="The CLIENT_ID for API operations (env: PROPEL_CLIENT_ID)"
    )

    client_secret: str | None = Field(
        default=None,
        description="The CLIENT_SECRET for API operations (env: PROPEL_CLIENT_SECRET)",
    )

    api_url: str = Field(
        default="https://api.us-east-2.propeldata.com/graphql",
        description="GraphQL endpoint of the Propel API (env: PROPEL_API_URL)",
    )

    auth_url: str = Field(
        default="https://auth.us-east-2.propeldata.com/oauth2/token",
        description="OAuth2 token endpoint (env: PROPEL_AUTH_URL)",
    )

    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for a single API request (env: PROPEL_REQUEST_TIMEOUT)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: PROPEL_LOG_LEVEL)",
    )

    # Polling Configuration
    poll_delay: float = Field(
        default=10.0,
        description="Seconds to wait before the first status read (env: PROPEL_POLL_DELAY)",
    )

    poll_interval: float = Field(
        default=10.0,
        description="Seconds between status reads (env: PROPEL_POLL_INTERVAL)",
    )

    poll_min_interval: float = Field(
        default=5.0,
        description="Lower bound on the poll interval (env: PROPEL_POLL_MIN_INTERVAL)",
    )

    poll_stability: int = Field(
        default=3,
        ge=1,
        description="Consecutive target observations required (env: PROPEL_POLL_STABILITY)",
    )

    # Timeouts (seconds)
    create_timeout: float = Field(
        default=30 * 60,
        description="Default create timeout (env: PROPEL_CREATE_TIMEOUT)",
    )

    delete_timeout: float = Field(
        default=30 * 60,
        description="Default delete timeout (env: PROPEL_DELETE_TIMEOUT)",
    )

    timeout_safety_margin: float = Field(
        default=60.0,
        description="Subtracted from every timeout before polling (env: PROPEL_TIMEOUT_SAFETY_MARGIN)",
    )


# Global settings instance
_settings: PropelSettings | None = None


def get_settings() -> PropelSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        PropelSettings instance
    """
    global _settings
    if _settings is None:
        _settings = PropelSettings()
    return _settings


def reload_settings() -> PropelSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh PropelSettings instance
    """
    global _settings
    _settings = PropelSettings()
    return _settings
