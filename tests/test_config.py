import logging
from logging.handlers import RotatingFileHandler

import pytest

from habitlens.config import Environment, load_config
from habitlens.dashboard.config import DashboardSettings
from habitlens.utils.logger import setup_logger


def test_defaults(monkeypatch):
    for name in ("ENVIRONMENT", "HABITS_API_BASE_URL", "HABITS_API_TOKEN", "ENRICH_CONCURRENCY",
                 "ANALYTICS_TIMEZONE", "HEATMAP_DAYS"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()
    assert config.environment == Environment.DEVELOPMENT
    assert config.client.base_url == "http://localhost:3000"
    assert config.client.timeout_seconds == 15.0
    assert config.analytics.enrich_concurrency == 4
    assert config.analytics.heatmap_days == 28
    assert config.analytics.timezone == "UTC"


def test_env_overrides_and_token_is_masked(monkeypatch):
    monkeypatch.setenv("HABITS_API_BASE_URL", "https://habits.example.com/")
    monkeypatch.setenv("HABITS_API_TOKEN", "abcdef123")
    monkeypatch.setenv("ENRICH_CONCURRENCY", "8")
    monkeypatch.setenv("ANALYTICS_TIMEZONE", "Europe/Moscow")

    config = load_config()
    assert config.client.base_url == "https://habits.example.com"
    assert config.analytics.enrich_concurrency == 8

    data = config.to_dict()
    assert data["client"]["token"] == "abcd..."
    assert data["analytics"]["timezone"] == "Europe/Moscow"


@pytest.mark.parametrize("name, value", [
    ("HABITS_API_BASE_URL", "ftp://habits"),
    ("ENRICH_CONCURRENCY", "0"),
    ("ANALYTICS_TIMEZONE", "Mars/Olympus"),
    ("HABITS_API_TIMEOUT", "-1"),
])
def test_invalid_values_are_reported(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match="Ошибки конфигурации"):
        load_config()


def test_dashboard_settings_validation():
    settings = DashboardSettings(LOG_LEVEL="debug", ENVIRONMENT="Testing", TIMEZONE="Asia/Tokyo")
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.ENVIRONMENT == "testing"

    with pytest.raises(ValueError):
        DashboardSettings(DASHBOARD_PORT=70000)
    with pytest.raises(ValueError):
        DashboardSettings(TIMEZONE="Nowhere/City")


def test_setup_logger_does_not_duplicate_handlers(tmp_path):
    log_file = tmp_path / "logs" / "habitlens.log"
    previous_level = logging.getLogger().level

    root = setup_logger(str(log_file), "warning")
    setup_logger(str(log_file), "warning")
    ours = [h for h in root.handlers
            if isinstance(h, RotatingFileHandler) and h.baseFilename == str(log_file.resolve())]
    try:
        assert len(ours) == 1
        assert root.level == logging.WARNING
        assert log_file.parent.is_dir()
    finally:
        for handler in ours:
            root.removeHandler(handler)
            handler.close()
        root.setLevel(previous_level)
