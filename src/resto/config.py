from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    app_env: str
    log_level: str
    otel_service_name: str
    otel_exporter_endpoint: str | None
    currency: str
    popular_items_limit: int


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise RuntimeError(f"{name} must be >= 1")
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        app_env=os.getenv("APP_ENV", "dev").lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        otel_service_name=os.getenv("OTEL_SERVICE_NAME", "resto-engine"),
        otel_exporter_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
        currency=os.getenv("RESTO_CURRENCY", "IDR").upper(),
        popular_items_limit=_int_env("RESTO_POPULAR_ITEMS_LIMIT", 5),
    )
