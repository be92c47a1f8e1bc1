import pytest

from company_finder.core import config
from company_finder.core.errors import ConfigError


def test_get_settings_defaults():
    settings = config.get_settings()

    assert settings.company_source == "overpass"
    assert settings.search_radius_m == 3000
    assert settings.max_display_emails == 2
    assert settings.email_local_parts == ("hr", "careers", "info", "contact")
    assert settings.request_timeout == 10.0
    assert (settings.default_latitude, settings.default_longitude) == (23.0225, 72.5714)
    assert settings.sample_fallback is False


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("COMPANY_SOURCE", "Backend")
    monkeypatch.setenv("SEARCH_RADIUS_M", "1500")
    monkeypatch.setenv("MAX_DISPLAY_EMAILS", "4")
    monkeypatch.setenv("EMAIL_LOCAL_PARTS", "HR, jobs, ,hr")
    monkeypatch.setenv("DEFAULT_PHONE_REGION", " in ")
    monkeypatch.setenv("SAMPLE_FALLBACK", "yes")

    settings = config.get_settings()

    assert settings.company_source == "backend"
    assert settings.search_radius_m == 1500
    assert settings.max_display_emails == 4
    assert settings.email_local_parts == ("hr", "jobs")
    assert settings.default_phone_region == "IN"
    assert settings.sample_fallback is True


def test_get_settings_rejects_unknown_source(monkeypatch):
    monkeypatch.setenv("COMPANY_SOURCE", "puppeteer")
    with pytest.raises(ConfigError):
        config.get_settings()


def test_get_settings_rejects_invalid_default_point(monkeypatch):
    monkeypatch.setenv("DEFAULT_LATITUDE", "123")
    with pytest.raises(ConfigError):
        config.get_settings()


def test_get_settings_warns_on_bad_radius(monkeypatch, caplog):
    monkeypatch.setenv("SEARCH_RADIUS_M", "-5")

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert settings.search_radius_m == 3000
    assert "SEARCH_RADIUS_M=-5 is not positive" in " ".join(caplog.messages)


def test_get_settings_warns_when_backend_url_missing(monkeypatch, caplog):
    monkeypatch.setenv("COMPANY_SOURCE", "backend")
    monkeypatch.setenv("BACKEND_URL", "")

    with caplog.at_level("WARNING"):
        config.get_settings()

    assert "BACKEND_URL is not configured" in " ".join(caplog.messages)
