# lunarscope/settings.py
# Centralized configuration for the service.

from __future__ import annotations

import logging
import os
import sys
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

# Pick up a local .env (GEMINI_API_KEY etc.) when running outside a hosting provider
load_dotenv()


class Settings:
    """
    All configuration is read from environment variables.
    Do NOT commit secrets; set them in your hosting provider or a local .env file.
    """

    def __init__(self) -> None:
        # --- API keys ---
        self.GEMINI_API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")

        # --- Models ---
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

        # --- HTTP surface ---
        self.CORS_ORIGINS: List[str] = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ]
        self.PORT: int = int(os.getenv("PORT", "8000"))

        # --- Misc ---
        self.LOG_LEVEL: str = os.getenv("LUNARSCOPE_LOG_LEVEL", "INFO").upper()

    @property
    def has_gemini_key(self) -> bool:
        return bool(self.GEMINI_API_KEY)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings; call get_settings.cache_clear() after changing the environment."""
    return Settings()


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Install a stderr handler on the package logger.
    Safe to call more than once; existing handlers are replaced.
    """
    st = settings or get_settings()
    logger = logging.getLogger("lunarscope")
    logger.setLevel(getattr(logging, st.LOG_LEVEL, logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger
