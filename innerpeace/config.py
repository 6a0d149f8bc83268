from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

DEMO_PLACEHOLDERS = {"", "demo", "demo-database-url"}


class Settings(BaseSettings):
    # Remote document store (SQLAlchemy async URL)
    DATABASE_URL: str = ""
    STORE_PROJECT_ID: str = ""
    DEMO_MODE: bool = False
    STORE_TIMEOUT_SECONDS: float = 8.0

    # Oracle Settings (Gemini)
    GEMINI_API_KEY: str = ""
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    GEMINI_TEMPERATURE: float = 0.7
    GEMINI_MAX_OUTPUT_TOKENS: int = 1024
    ORACLE_TIMEOUT_SECONDS: float = 30.0

    # Therapist finder (external collaborator)
    MAPS_API_KEY: str = ""

    # History windows
    MOOD_HISTORY_LIMIT: int = 30
    JOURNAL_HISTORY_LIMIT: int = 50
    CHAT_HISTORY_LIMIT: int = 20

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[Path] = None

    class Config:
        env_file = ".env"
        extra = "ignore"


def get_settings() -> Settings:
    """Reads configuration fresh on every call; nothing is cached."""
    return Settings()


def is_demo_mode(current: Optional[Settings] = None) -> bool:
    current = current or get_settings()
    if current.DEMO_MODE:
        return True
    return current.DATABASE_URL.strip() in DEMO_PLACEHOLDERS

