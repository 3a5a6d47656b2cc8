import pytest

from common.config.settings import CoreSettings, get_settings


def test_defaults_when_unset():
    settings = get_settings()

    assert settings == CoreSettings()
    assert settings.connect_timeout_seconds == 10.0
    assert settings.pg_schema == "public"
    assert settings.classified_error_telemetry is True


def test_values_from_env(monkeypatch):
    monkeypatch.setenv("DB_CONNECT_TIMEOUT_SECONDS", "3")
    monkeypatch.setenv("INTROSPECTION_PG_SCHEMA", " sales ")
    monkeypatch.setenv("DAL_CLASSIFIED_ERROR_TELEMETRY", "off")

    settings = get_settings()

    assert settings.connect_timeout_seconds == 3.0
    assert settings.pg_schema == "sales"
    assert settings.classified_error_telemetry is False


def test_blank_schema_falls_back_to_public(monkeypatch):
    monkeypatch.setenv("INTROSPECTION_PG_SCHEMA", "  ")
    assert get_settings().pg_schema == "public"


@pytest.mark.parametrize("raw", ["0", "-1", "soon"])
def test_invalid_timeout_rejected(monkeypatch, raw):
    monkeypatch.setenv("DB_CONNECT_TIMEOUT_SECONDS", raw)
    with pytest.raises(ValueError):
        get_settings()


def test_settings_read_on_every_call(monkeypatch):
    monkeypatch.setenv("DB_CONNECT_TIMEOUT_SECONDS", "1")
    first = get_settings()
    monkeypatch.setenv("DB_CONNECT_TIMEOUT_SECONDS", "2")

    assert get_settings().connect_timeout_seconds != first.connect_timeout_seconds
