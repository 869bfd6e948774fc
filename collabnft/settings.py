"""Runtime configuration, loaded from COLLAB_* environment variables (or .env)."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COLLAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Approval policy
    approval_threshold: int = 3  # net votes needed to finalize either way
    minimum_votes: int = 3       # up votes needed before approval

    # HTTP adapter
    host: str = "127.0.0.1"
    port: int = 8088
    public_base_url: str = "http://localhost:8088"

    # Logging
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
