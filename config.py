from functools import lru_cache
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from the environment and a local .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Comma-separated in the environment, e.g. CORS_ORIGINS=http://a,http://b
    cors_origins: Annotated[List[str], NoDecode] = ["http://localhost:3000"]
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    # GET /user/{email} answers 200 with a null body for unknown emails; 404 when off
    missing_user_as_null: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
