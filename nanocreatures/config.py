"""Client settings loaded from environment variables."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://nanocreatures.app"


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """NanoCreatures client configuration. Values come from NANOCREATURES_* variables."""

    # Service
    base_url: str = Field(default=DEFAULT_BASE_URL)

    # Process-wide API key, sent on sign-up / sign-in when set
    api_key: str = Field(default="")

    # Per-request timeout in seconds
    timeout: float = Field(default=30.0)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="NANOCREATURES_",
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    def normalized_base_url(self) -> str:
        """Return ``base_url`` without a trailing slash."""
        return self.base_url.rstrip("/")


settings = Settings()
