from pathlib import Path

import pytest
from pydantic import ValidationError

from configurator_tool.config.settings import Settings


def test_settings_read_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CONFIGURATOR_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CONFIGURATOR_DEFAULT_SITE", "andere-site")
    monkeypatch.setenv("CONFIGURATOR_ENV", "development")
    monkeypatch.setenv("REVALIDATION_SECRET", "geheim")
    monkeypatch.setenv("SMTP_HOST", "smtp.example.be")
    monkeypatch.setenv("SMTP_PORT", "2525")
    monkeypatch.setenv("QUOTE_RECIPIENT", "offertes@example.be")
    monkeypatch.setenv("QUOTE_TEST_EMAIL", "test@example.be")

    settings = Settings()

    assert settings.data_dir == tmp_path
    assert settings.sites_dir == tmp_path / "sites"
    assert settings.default_site == "andere-site"
    assert settings.is_test_mode
    assert settings.revalidation_secret == "geheim"
    assert settings.smtp_host == "smtp.example.be"
    assert settings.smtp_port == 2525
    assert settings.quote_recipient == "offertes@example.be"
    assert settings.test_email == "test@example.be"


def test_settings_defaults(monkeypatch):
    for name in ("CONFIGURATOR_DATA_DIR", "CONFIGURATOR_DEFAULT_SITE", "CONFIGURATOR_ENV", "SMTP_PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(project_root=Path("/srv/configurator"))

    assert settings.data_dir == Path("/srv/configurator/data")
    assert settings.default_site == "vpg"
    assert settings.smtp_port == 587
    assert not settings.is_test_mode


def test_invalid_smtp_port_is_rejected(monkeypatch):
    monkeypatch.setenv("SMTP_PORT", "abc")
    with pytest.raises(ValidationError):
        Settings()
