"""Application settings and configuration (Pydantic v2)."""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Database (Docker uses host "db")
    database_url: str = Field(
        default="postgresql://registry_user:registry_pass@db:5432/school_registry",
        description="Postgres DSN",
    )
    auto_create_tables: bool = Field(
        default=True, description="Create missing tables on startup"
    )

    # JWT
    jwt_secret_key: str = Field(
        default="your-super-secret-jwt-key-change-this-in-production",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_access_token_expire_minutes: int = Field(default=30)

    # Bootstrap admin account
    admin_user: str = Field(default="admin")
    admin_pass: str = Field(default="admin123")

    # Numbering: partitions (year / day) are computed in school local time
    numbering_utc_offset_hours: int = Field(default=7, ge=-12, le=14)

    # Student photos
    upload_dir: Path = Field(default=Path("uploads"))
    max_photo_size_bytes: int = Field(default=2 * 1024 * 1024)

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",
    )


# Global settings instance
settings = Settings()
