"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import LedgerSettings


def _isolate(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: MagicMock())
    for name in (
        "CACHE_TTL",
        "CACHE_MAX_ENTRIES",
        "REPORT_MONTHLY_WINDOW",
        "RECENT_TRANSACTIONS_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_uses_defaults(monkeypatch) -> None:
    """Unset variables should fall back to the documented defaults."""
    _isolate(monkeypatch)

    settings = LedgerSettings.from_env()

    assert settings.cache_ttl_seconds == 300
    assert settings.monthly_window == 6
    assert settings.recent_transactions_limit == 5
    assert settings.cache_max_entries == 100


def test_from_env_reads_overrides(monkeypatch) -> None:
    """Valid integers should override the defaults."""
    _isolate(monkeypatch)
    monkeypatch.setenv("CACHE_TTL", "60")
    monkeypatch.setenv("CACHE_MAX_ENTRIES", "500")
    monkeypatch.setenv("REPORT_MONTHLY_WINDOW", " 12 ")
    monkeypatch.setenv("RECENT_TRANSACTIONS_LIMIT", "3")

    settings = LedgerSettings.from_env()

    assert settings.cache_ttl_seconds == 60
    assert settings.cache_max_entries == 500
    assert settings.monthly_window == 12
    assert settings.recent_transactions_limit == 3


def test_from_env_warns_on_invalid_values(monkeypatch) -> None:
    """Invalid or non-positive values should warn and use defaults."""
    _isolate(monkeypatch)
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    monkeypatch.setenv("CACHE_TTL", "soon")
    monkeypatch.setenv("REPORT_MONTHLY_WINDOW", "0")

    settings = LedgerSettings.from_env()

    assert settings.cache_ttl_seconds == 300
    assert settings.monthly_window == 6
    assert logger.warning.call_count == 2
