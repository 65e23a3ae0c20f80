"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden from the environment (CIVICTRUST_ prefix) or .env
    - get_settings() is cached (lru_cache), one instance per process
    - admin_address is the GENESIS authority; later transfers live in the audit log

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CIVICTRUST_", case_sensitive=False,
    )

    # Database
    database_url: str = (
        "postgresql+asyncpg://civictrust:civictrust@db:5432/civictrust"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Ledger
    admin_address: str = "0x0000000000000000000000000000000000000001"
    # Off: in-memory only, state lost on restart
    persist_audit_log: bool = True

    @field_validator("admin_address")
    @classmethod
    def admin_address_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("admin_address cannot be empty")
        return v.strip().lower()

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
