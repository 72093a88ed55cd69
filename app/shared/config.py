from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: str = "") -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    razorpay_key_id: str
    razorpay_key_secret: str
    razorpay_api_base: str
    gateway_timeout_seconds: float
    sheets_backend_url: str
    sheets_timeout_seconds: float
    jwt_secret: str
    jwt_access_ttl_minutes: int
    idempotency_ttl_seconds: float
    cors_allow_origins: tuple[str, ...]
    log_level: str


def get_settings() -> Settings:
    return Settings(
        razorpay_key_id=_env("RAZORPAY_KEY_ID", ""),
        razorpay_key_secret=_env("RAZORPAY_KEY_SECRET", ""),
        razorpay_api_base=_env("RAZORPAY_API_BASE", "https://api.razorpay.com/v1"),
        gateway_timeout_seconds=float(_env("GATEWAY_TIMEOUT_SECONDS", "8")),
        sheets_backend_url=_env("SHEETS_BACKEND_URL", ""),
        sheets_timeout_seconds=float(_env("SHEETS_TIMEOUT_SECONDS", "8")),
        jwt_secret=_env("JWT_SECRET", ""),
        jwt_access_ttl_minutes=int(_env("JWT_ACCESS_TTL_MINUTES", "60")),
        idempotency_ttl_seconds=float(_env("IDEMPOTENCY_TTL_SECONDS", "86400")),
        cors_allow_origins=_csv("CORS_ALLOW_ORIGINS", "*"),
        log_level=_env("LOG_LEVEL", "INFO"),
    )
