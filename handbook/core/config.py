"""Application configuration from environment."""
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

# Base path for bundled data (parent of handbook/)
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Handbook API"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./handbook.db"

    # JWT
    secret_key: str = "change-me-in-production-use-env"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 3
    refresh_token_expire_days: int = 7

    # Passwords
    bcrypt_rounds: int = 12

    # Registration
    username_pattern: str = r"^z\d{7}@ad\.unsw\.edu\.au$"
    verification_code_expire_minutes: int = 10
    # Development only: accepted in addition to issued codes when set
    static_verification_code: str | None = None

    # Comments
    comment_delete_policy: Literal["owner", "any"] = "owner"
    rating_min: int = 1
    rating_max: int = 5
    recommend_limit: int = 5

    # Static course / program reference data
    catalog_path: Path = BASE_DIR / "data" / "catalog.json"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
