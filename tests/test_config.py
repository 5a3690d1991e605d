from pathlib import Path

import pytest
from pydantic import ValidationError

from timeledger.core.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.break_hours == 0.5
    assert settings.data_path == Path("data/ledger.json")
    assert settings.cors_origin_list == []


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TIMELEDGER_BREAK_HOURS", "0.75")
    monkeypatch.setenv("TIMELEDGER_LOG_LEVEL", "debug")
    monkeypatch.setenv("TIMELEDGER_CORS_ORIGINS", "http://a.test, http://b.test")

    settings = Settings(_env_file=None)

    assert settings.break_hours == 0.75
    assert settings.log_level == "DEBUG"
    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]


def test_negative_break_rejected():
    with pytest.raises(ValidationError):
        Settings(break_hours=-1, _env_file=None)


def test_error_monitoring_only_with_dsn(monkeypatch):
    from timeledger.core import monitoring

    calls = []
    monkeypatch.setattr(monitoring.sentry_sdk, "init", lambda **kwargs: calls.append(kwargs))

    assert monitoring.configure_error_monitoring(Settings(_env_file=None)) is False
    assert monitoring.configure_error_monitoring(Settings(sentry_dsn="https://key@sentry.example/1", env="prod", _env_file=None)) is True
    assert calls == [{"dsn": "https://key@sentry.example/1", "environment": "prod", "traces_sample_rate": 0.2}]
