from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from resto.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("APP_ENV", "LOG_LEVEL", "RESTO_CURRENCY", "RESTO_POPULAR_ITEMS_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.app_env == "dev"
    assert settings.log_level == "INFO"
    assert settings.currency == "IDR"
    assert settings.popular_items_limit == 5


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("RESTO_CURRENCY", "sgd")
    monkeypatch.setenv("RESTO_POPULAR_ITEMS_LIMIT", "10")

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.currency == "SGD"
    assert settings.popular_items_limit == 10


@pytest.mark.parametrize("raw", ["ten", "0"])
def test_invalid_popular_items_limit(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("RESTO_POPULAR_ITEMS_LIMIT", raw)
    with pytest.raises(RuntimeError):
        get_settings()
