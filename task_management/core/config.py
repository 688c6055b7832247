"""
Configuration settings for the Task Management service.
"""
import os
from functools import lru_cache
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings:
    """Application settings"""

    def __init__(self, **overrides):
        # Service information
        self.service_name: str = os.getenv("SERVICE_NAME", "task_management")
        self.service_version: str = "1.0.0"
        self.debug: bool = _env_bool("DEBUG")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

        # Server
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))

        # Database configuration
        self.database_url: str = os.getenv(
            "DATABASE_URL",
            "sqlite:///./task_management.db"
        )
        # Abort startup when the initial database probe fails
        self.db_connect_fatal: bool = _env_bool("DB_CONNECT_FATAL")

        # API configuration
        self.api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
        self.max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))
        self.default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
        self.allowed_origins: List[str] = os.getenv("ALLOWED_ORIGINS", "*").split(",")

        # Security
        self.secret_key: str = os.getenv(
            "SECRET_KEY",
            "task-management-secret-key-change-in-production"
        )
        self.algorithm: str = os.getenv("ALGORITHM", "HS256")
        self.access_token_expire_minutes: int = int(
            os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")
        )

        # Comments become read-only once this window has passed
        self.comment_edit_grace_minutes: int = int(
            os.getenv("COMMENT_EDIT_GRACE_MINUTES", "15")
        )

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise ValueError(f"Unknown setting: {key}")
            setattr(self, key, value)


@lru_cache()
def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
