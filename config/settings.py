"""Application settings and configuration management."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LOCAL_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:5000",
    "http://127.0.0.1:5500",
)


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    CONFIG_PATH: str = Field(default="app_config.json")
    FRONTEND_URL: Optional[str] = None

    RESUME_CHAR_LIMIT: int = 3000
    MIN_RESUME_CHARS: int = 50
    MAX_PDF_PAGES: int = 50

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_assignment=True)

    def cors_origins(self) -> List[str]:
        """Allowed origins; an unset FRONTEND_URL opens CORS to every origin."""

        if not self.FRONTEND_URL:
            return ["*"]
        return [self.FRONTEND_URL, *LOCAL_ORIGINS]


settings = Settings()
