"""
Application settings.

Values come from environment variables (or a local .env file).

Usage:
    from core.config import settings
    settings.database_url
"""

import os
import sys
from datetime import date
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value or not value.strip():
        return None
    return date.fromisoformat(value.strip())


class Settings:
    def __init__(self):
        self.app_name = os.getenv("APP_NAME", "ISP Billing API")
        self.debug = _parse_bool(os.getenv("DEBUG"), False)
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./isp_billing.db")

        self.cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")

        # Fixed reference date for "current period" logic. None = today.
        self.billing_as_of = _parse_date(os.getenv("BILLING_AS_OF"))

        # Insert demo customers on first start (empty ledger only)
        self.seed_demo_data = _parse_bool(os.getenv("SEED_DEMO_DATA"), True)

        # OpenAI-compatible chat completions endpoint for the admin assistant
        self.assistant_api_key = os.getenv("ASSISTANT_API_KEY", "")
        self.assistant_api_url = os.getenv(
            "ASSISTANT_API_URL", "https://api.groq.com/openai/v1/chat/completions"
        )
        self.assistant_model = os.getenv("ASSISTANT_MODEL", "llama-3.1-8b-instant")
        self.assistant_timeout = float(os.getenv("ASSISTANT_TIMEOUT", "60"))

    @property
    def cors_origins_list(self) -> List[str]:
        return [x.strip() for x in self.cors_origins.split(",") if x.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


def configure_logging():
    """Single stderr sink at settings.log_level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )
