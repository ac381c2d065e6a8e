from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docvault import __version__

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


class DocVaultSettings(BaseSettings):
    """
    Service configuration.

    Env names match the deployment variables of the original service:
      PORT, UPLOAD_DIR, DB_NAME, MAX_FILE_SIZE, CORS_ORIGIN
    plus DATABASE_URL (overrides DB_NAME) and STORAGE_BACKEND (disk | memory).
    """

    app_name: str = "docvault"
    app_version: str = __version__

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    storage_backend: Literal["disk", "memory"] = Field(default="disk")
    upload_dir: str = Field(default="uploads")
    db_name: str = Field(default="documents.db")
    database_url: Optional[str] = Field(default=None)
    db_echo: bool = Field(default=False)

    max_file_size: int = Field(default=DEFAULT_MAX_FILE_SIZE)
    cors_origin: str = Field(default="http://localhost:5173")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("max_file_size")
    @classmethod
    def _positive_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("MAX_FILE_SIZE must be a positive integer")
        return v

    @field_validator("storage_backend", mode="before")
    @classmethod
    def _lower_backend(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @property
    def cors_origins(self) -> list[str]:
        """CORS_ORIGIN accepts a comma-separated list."""
        return [o.strip() for o in self.cors_origin.split(",") if o.strip()]

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url or f"sqlite:///{self.db_name}"
        # normalize sync driver urls to their async drivers
        if url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings(**kwargs) -> DocVaultSettings:
    # Only include kwargs that are not None, so env/defaults are used otherwise
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return DocVaultSettings(**filtered)
