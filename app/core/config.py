# /app/core/config.py

"""
Central runtime configuration.

Every environment variable the service reads is resolved here, once, into a
frozen `Settings` object. Modules never call `os.getenv` directly; they ask
for `get_settings()` so tests can swap the whole configuration in one place.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, FrozenSet, Optional

from dotenv import load_dotenv

load_dotenv()

# --- Policy Constants ---
TRIAL_DURATION_DAYS = 3

TIER_GENERATION_LIMITS: Dict[str, int] = {
    "free": 10,
    "pro": 500,
    "business": 999999,  # Effectively unlimited
}

FREE_TIER_PLATFORMS: FrozenSet[str] = frozenset({"threads", "linkedin"})

RATE_LIMIT_WINDOW_SECONDS = 60
RATE_LIMIT_USER_PER_WINDOW = 10
RATE_LIMIT_IP_PER_WINDOW = 20
RATE_LIMIT_GLOBAL_PER_WINDOW = 1000

HISTORY_PAGE_SIZE = 50


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./repurpose.db"
    log_level: str = "INFO"
    app_url: str = "http://localhost:3000"

    # --- LLM Providers ---
    llm_provider: str = "openai"
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    google_api_key: Optional[str] = None
    openai_model: str = "gpt-4-turbo-preview"
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    gemini_model: str = "gemini-2.0-flash-exp"

    # --- Rate Limiting (optional) ---
    redis_url: Optional[str] = None

    # --- Identity Provider ---
    clerk_jwt_public_key: Optional[str] = None
    clerk_webhook_secret: Optional[str] = None

    # --- Billing ---
    stripe_secret_key: Optional[str] = None
    stripe_webhook_secret: Optional[str] = None
    stripe_price_ids: Dict[str, str] = field(default_factory=dict)

    @property
    def provider_credentials(self) -> Dict[str, Optional[str]]:
        return {
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
            "gemini": self.google_api_key,
        }

    @property
    def provider_models(self) -> Dict[str, str]:
        return {
            "openai": self.openai_model,
            "anthropic": self.anthropic_model,
            "gemini": self.gemini_model,
        }


def load_settings() -> Settings:
    """Builds a Settings object from the current process environment."""
    price_ids = {}
    if _env("STRIPE_PRICE_ID_PRO"):
        price_ids[_env("STRIPE_PRICE_ID_PRO")] = "pro"
    if _env("STRIPE_PRICE_ID_BUSINESS"):
        price_ids[_env("STRIPE_PRICE_ID_BUSINESS")] = "business"

    # PEM keys pasted into .env files usually carry escaped newlines.
    public_key = _env("CLERK_JWT_PUBLIC_KEY")
    if public_key:
        public_key = public_key.replace("\\n", "\n")

    return Settings(
        database_url=_env("DATABASE_URL", "sqlite:///./repurpose.db"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        app_url=_env("APP_URL", "http://localhost:3000"),
        llm_provider=_env("LLM_PROVIDER", "openai").lower(),
        openai_api_key=_env("OPENAI_API_KEY"),
        anthropic_api_key=_env("ANTHROPIC_API_KEY"),
        google_api_key=_env("GOOGLE_API_KEY"),
        openai_model=_env("OPENAI_MODEL", "gpt-4-turbo-preview"),
        anthropic_model=_env("ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022"),
        gemini_model=_env("GEMINI_MODEL", "gemini-2.0-flash-exp"),
        redis_url=_env("REDIS_URL"),
        clerk_jwt_public_key=public_key,
        clerk_webhook_secret=_env("CLERK_WEBHOOK_SECRET"),
        stripe_secret_key=_env("STRIPE_SECRET_KEY"),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET"),
        stripe_price_ids=price_ids,
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
