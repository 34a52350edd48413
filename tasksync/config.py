"""Environment configuration for the task synchronization client."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

STORE_BACKENDS = ("rest", "sql")


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        self.TASKS_STORE_BACKEND: str = os.getenv("TASKS_STORE_BACKEND", "rest").lower()
        self.TASKS_API_URL: str = os.getenv("TASKS_API_URL", "").rstrip("/")
        self.TASKS_API_KEY: str = os.getenv("TASKS_API_KEY", "")
        self.TASKS_TABLE: str = os.getenv("TASKS_TABLE", "todos")
        self.TASKS_HTTP_TIMEOUT_SECONDS: float = float(
            os.getenv("TASKS_HTTP_TIMEOUT_SECONDS", "10")
        )
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://")
        self.AUTH_JWT_SECRET: str = os.getenv("AUTH_JWT_SECRET", "")
        self.JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
        self.NOTIFICATION_BUFFER_SIZE: int = int(os.getenv("NOTIFICATION_BUFFER_SIZE", "50"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

    def validate(self) -> None:
        """Validate that required environment variables are set."""
        if self.TASKS_STORE_BACKEND not in STORE_BACKENDS:
            raise ValueError(
                f"TASKS_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}"
            )
        if self.TASKS_STORE_BACKEND == "rest" and not self.TASKS_API_URL:
            raise ValueError("TASKS_API_URL environment variable is required")
        if self.TASKS_STORE_BACKEND == "sql" and not self.DATABASE_URL:
            raise ValueError("DATABASE_URL environment variable is required")
        if self.NOTIFICATION_BUFFER_SIZE < 1:
            raise ValueError("NOTIFICATION_BUFFER_SIZE must be positive")
        if not self.AUTH_JWT_SECRET:
            raise ValueError("AUTH_JWT_SECRET environment variable is required")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    return settings
