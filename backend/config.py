from functools import lru_cache
from typing import List, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when the backend is started without a usable configuration."""


class Settings(BaseSettings):
    """Runtime configuration for the Songsmith backend."""

    #----------------------------------------------------------
    # Remote music API settings
    #----------------------------------------------------------
    music_api_key: SecretStr = Field(
        default="",
        description="API key for authenticating with the music generation service.",
    )

    music_api_base_url: str = Field(
        default="https://api.songsmith.example/v1",
        description="Root URL of the music generation REST API.",
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Timeout applied to every single call against the music API.",
    )

    #----------------------------------------------------------
    # Generation settings
    #----------------------------------------------------------
    music_duration: int = Field(
        default=16,
        gt=0,
        description="Target track duration in seconds sent with each job.",
    )
    music_mode: str = Field(
        default="music",
        description="Generation pipeline requested from the remote service.",
    )

    #----------------------------------------------------------
    # Polling settings
    #----------------------------------------------------------
    poll_interval_seconds: float = Field(
        default=15.0,
        gt=0.0,
        description="Fixed wait between two job status checks.",
    )
    max_wait_seconds: Optional[float] = Field(
        default=900.0,
        ge=0.0,
        description="Total wait budget for one job. Set to null to poll without a bound.",
    )

    #----------------------------------------------------------
    # Server settings
    #----------------------------------------------------------
    cors_origins: List[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level used when the backend is started as a script.",
    )

    model_config = SettingsConfigDict(
        env_prefix="SONGSMITH_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def require_api_key(self) -> str:
        """Return the music API key, raising ConfigurationError when it is unset."""
        key = self.music_api_key.get_secret_value().strip()
        if not key:
            raise ConfigurationError(
                "Music API key is not configured. Set SONGSMITH_MUSIC_API_KEY and restart."
            )
        return key


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
