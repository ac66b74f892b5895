from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import AppSettings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("PORT", "VIDEO_INFO_PORT", "VIDEO_INFO_HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = AppSettings()

    assert settings.port == 3000
    assert settings.http_timeout_seconds == 30.0
    assert settings.rate_limit_max == 100
    assert settings.rate_limit_window_seconds == 900


def test_port_is_read_from_plain_env_var(monkeypatch):
    monkeypatch.setenv("PORT", "8081")

    assert AppSettings().port == 8081


def test_prefixed_env_vars(monkeypatch):
    monkeypatch.setenv("VIDEO_INFO_HTTP_TIMEOUT_SECONDS", "12.5")

    assert AppSettings().http_timeout_seconds == 12.5


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("PORT=4000\nVIDEO_INFO_RATE_LIMIT_MAX=5\n", encoding="utf-8")

    settings = AppSettings()

    assert settings.port == 4000
    assert settings.rate_limit_max == 5


def test_invalid_port_is_rejected(monkeypatch):
    monkeypatch.setenv("PORT", "70000")

    with pytest.raises(ValidationError):
        AppSettings()
