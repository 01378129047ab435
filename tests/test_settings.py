"""Tests for environment-driven settings parsing."""

import pytest

import settings


def test_env_int_uses_default_when_unset(monkeypatch):
    monkeypatch.delenv("DASHBOARD_PORT", raising=False)

    assert settings._env_int("DASHBOARD_PORT", 8050) == 8050


def test_env_int_parses_value(monkeypatch):
    monkeypatch.setenv("DASHBOARD_DEFAULT_TARIFF", "45")

    assert settings._env_int("DASHBOARD_DEFAULT_TARIFF", 0) == 45


def test_env_int_error_names_variable(monkeypatch):
    monkeypatch.setenv("DASHBOARD_PORT", "eighty")

    with pytest.raises(ValueError, match="DASHBOARD_PORT"):
        settings._env_int("DASHBOARD_PORT", 8050)


def test_env_bool(monkeypatch):
    monkeypatch.setenv("DASHBOARD_DEBUG", "Yes")

    assert settings._env_bool("DASHBOARD_DEBUG") is True
