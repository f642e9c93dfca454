"""
Hub Catalog Application Configuration
Environment-driven settings for storage, HTTP serving and logging
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

BACKEND_ROOT = Path(__file__).resolve().parent.parent
REPO_ROOT = BACKEND_ROOT.parent


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Hub Catalog"
    app_version: str = "1.0.0"
    debug: bool = False

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 4000

    # Storage
    database_url: str = Field(
        default=f"sqlite:///{BACKEND_ROOT / 'database.db'}",
        description="SQLAlchemy URL of the catalog store",
    )
    storage_timeout: float = Field(default=5.0, description="Seconds a storage call may wait on a locked database")
    atomic_registration: bool = Field(
        default=True,
        description="Run plugin insert, tag resolution and association insert in one transaction",
    )

    # Static assets
    public_dir: str = str(REPO_ROOT / "public")

    # CORS
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    @field_validator("port")
    @classmethod
    def port_in_range(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("storage_timeout")
    @classmethod
    def timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Storage timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    class Config:
        env_file = ".env"
        env_prefix = "HUBCATALOG_"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return Settings()
