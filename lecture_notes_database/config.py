"""Runtime configuration for the lecture notes backend."""
import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# PUBLIC_INTERFACE
class Settings(BaseModel):
    """Settings loaded from the environment (and a .env file, if present)."""

    database_url: str = Field(default_factory=lambda: os.getenv("DATABASE_URL", ""))
    db_pool_size: int = Field(
        default_factory=lambda: int(os.getenv("DB_POOL_SIZE", "5")), ge=1
    )
    session_ttl_days: int = Field(
        default_factory=lambda: int(os.getenv("SESSION_TTL_DAYS", "7")), ge=1
    )
    register_only_for_admin: bool = Field(
        default_factory=lambda: _env_bool("REGISTER_ONLY_FOR_ADMIN")
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
    )

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Build a fresh Settings object from the current environment."""
    load_dotenv()
    return Settings()
