from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Values are read once
    when the process starts and never change afterwards.
    """

    app_env: str = "development"
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODEL
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    request_timeout: float = 30.0
    log_level: str = "INFO"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    @classmethod
    def from_env(cls) -> "Settings":
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        return cls(
            app_env=os.getenv("APP_ENV", "development"),
            gemini_api_key=api_key or None,
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT") or DEFAULT_PORT),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
