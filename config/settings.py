from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. The API key is only
    ever read from the environment (or .env); nothing is hard-coded.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.google_api_key: Optional[str] = os.getenv("GOOGLE_API_KEY") or None
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.temperature: float = float(os.getenv("MODEL_TEMPERATURE", "0.3"))
        self.top_p: float = float(os.getenv("MODEL_TOP_P", "0.9"))
        self.classifier_max_tokens: int = int(os.getenv("CLASSIFIER_MAX_TOKENS", "1000"))
        self.classifier_timeout: float = float(
            os.getenv("CLASSIFIER_TIMEOUT_SECONDS", "30")
        )
        self.ledger_api_url: Optional[str] = os.getenv(
            "LEDGER_API_URL", "http://127.0.0.1:8000/api"
        )
        self.ledger_timeout: float = float(os.getenv("LEDGER_TIMEOUT_SECONDS", "10"))
        self.default_language: str = os.getenv("DEFAULT_LANGUAGE", "en")
        self.max_sessions: int = int(os.getenv("CHAT_MAX_SESSIONS", "1000"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
