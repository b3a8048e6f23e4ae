# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv. Every setting has a default so the tracker
works with zero configuration.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before any settings are instantiated
load_dotenv()


class TrackerSettings(BaseSettings):
    """Event tracking settings."""

    model_config = SettingsConfigDict(env_prefix="TRACKER_")

    base_url: str = Field(
        default="http://localhost:8080", description="Collector base URL"
    )
    endpoint: str = Field(default="/api/v1/track", description="Event submission path")
    api_key: Optional[str] = Field(default=None, description="Project API key (X-API-Key)")
    user_id: Optional[str] = Field(default=None, description="Initial user identifier")
    auto_track: bool = Field(
        default=True,
        description="Capture page view, click, form submit, scroll and unload automatically",
    )

    # Session configuration
    session_timeout_minutes: int = Field(default=30, description="Session window in minutes")
    sliding_expiration: bool = Field(
        default=False,
        description="Extend the session window on every tracked event",
    )

    # Delivery configuration
    request_timeout_seconds: float = Field(default=5.0, description="HTTP request timeout")
    max_workers: int = Field(
        default=1,
        description="Delivery threads (1 keeps events in call order)",
    )
    scroll_throttle_ms: int = Field(
        default=1000, description="Minimum gap between automatic scroll events"
    )

    @property
    def track_url(self) -> str:
        """Absolute URL of the event submission endpoint."""
        from urllib.parse import urljoin

        return urljoin(self.base_url, self.endpoint)

    @property
    def health_url(self) -> str:
        """Absolute URL of the collector health check."""
        from urllib.parse import urljoin

        return urljoin(self.base_url, "/health")


class DeviceSettings(BaseSettings):
    """Overrides for the device context attached to events.

    Unset fields are derived from the running interpreter.
    """

    model_config = SettingsConfigDict(env_prefix="DEVICE_")

    user_agent: Optional[str] = Field(default=None, description="User agent string")
    screen_width: Optional[int] = Field(default=None, description="Screen width in pixels")
    screen_height: Optional[int] = Field(default=None, description="Screen height in pixels")
    language: Optional[str] = Field(default=None, description="Language tag (e.g. en-US)")
    platform: Optional[str] = Field(default=None, description="Platform string")


class StorageSettings(BaseSettings):
    """Session persistence settings."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    impl: Literal["memory", "cookie", "valkey"] = Field(
        default="cookie",
        description="Session store implementation (memory, cookie, valkey)",
    )
    cookie_file: Optional[Path] = Field(
        default=None,
        description="LWP cookie file so the session survives process restarts",
    )
    key_prefix: str = Field(default="tracker:", description="Key prefix for Valkey entries")


class ValkeySettings(BaseSettings):
    """Valkey (Redis-compatible) connection settings for session state."""

    model_config = SettingsConfigDict(env_prefix="VALKEY_")

    host: str = Field(default="localhost", description="Valkey host")
    port: int = Field(default=6379, description="Valkey port")
    password: Optional[str] = Field(default=None, description="Valkey password")
    db: int = Field(default=0, description="Valkey database number")
    ssl: bool = Field(default=False, description="Use SSL/TLS connection")

    @property
    def url(self) -> str:
        """Build Valkey connection URL."""
        scheme = "rediss" if self.ssl else "redis"
        if self.password:
            return f"{scheme}://:{self.password}@{self.host}:{self.port}/{self.db}"
        return f"{scheme}://{self.host}:{self.port}/{self.db}"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    tracker: TrackerSettings = Field(default_factory=TrackerSettings)
    device: DeviceSettings = Field(default_factory=DeviceSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    valkey: ValkeySettings = Field(default_factory=ValkeySettings)

    # General settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()
