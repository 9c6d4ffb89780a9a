from typing import Any, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data/finance.db"


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Finance MCP"
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    # Database
    DATABASE_URL: str = DEFAULT_DATABASE_URL
    SQLITE_BUSY_TIMEOUT_MS: int = 5000

    # Transport
    TRANSPORT: Literal["stdio", "http"] = "stdio"
    HOST: str = "127.0.0.1"
    PORT: int = 3000

    # Pydantic v2 compatible settings: read .env and ignore extra env vars
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("TRANSPORT", mode="before")
    @classmethod
    def normalize_transport(cls, value: Any) -> Any:
        """Accept TRANSPORT=HTTP and friends from the environment."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Fail fast when production points the store at something other than sqlite."""
        if self.ENV.lower() == "production" and not self.DATABASE_URL.startswith("sqlite"):
            raise ValueError("DATABASE_URL must be a sqlite URL; the store relies on sqlite pragmas.")
        return self


settings = Settings()
