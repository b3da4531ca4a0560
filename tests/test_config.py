"""Tests for settings and logging setup."""

import logging

import pytest

from aether_nav.config import Settings, _load_settings_cached, load_settings
from aether_nav.logging_utils import configure_logging, get_logger


@pytest.fixture(autouse=True)
def fresh_settings():
    _load_settings_cached.cache_clear()
    yield
    _load_settings_cached.cache_clear()


class TestLoadSettings:
    def test_defaults(self, monkeypatch):
        for key in ("EVENT_LOG_CAPACITY", "REASONING_TIMEOUT_SECONDS", "POLICY_PRIVILEGED_ROLES"):
            monkeypatch.delenv(key, raising=False)

        settings = load_settings()

        assert settings.events.capacity == 100
        assert settings.policy.privileged_roles == ["privileged-user", "admin"]
        assert settings.policy.restricted_regions == ["EU"]
        assert settings.rules.new_navigation_load_threshold == 0.9
        assert settings.reasoning.model == "gemini-3-flash-preview"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("EVENT_LOG_CAPACITY", "25")
        monkeypatch.setenv("EVENT_FORWARD_ENABLED", "false")
        monkeypatch.setenv("POLICY_PRIVILEGED_ROLES", "root, ops-lead")
        monkeypatch.setenv("REASONING_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")

        settings = load_settings()

        assert settings.events.capacity == 25
        assert settings.events.forward_enabled is False
        assert settings.policy.privileged_roles == ["root", "ops-lead"]
        assert settings.reasoning.timeout_seconds == 2.5
        assert settings.reasoning.api_key == "test-key"

    def test_invalid_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv("EVENT_LOG_CAPACITY", "lots")
        monkeypatch.setenv("POLICY_AUTHORIZATION_PASS_RATE", "high")

        settings = load_settings()

        assert settings.events.capacity == 100
        assert settings.policy.authorization_pass_rate == 0.8

    def test_cached(self):
        assert load_settings() is load_settings()

    def test_settings_model_defaults(self):
        assert Settings().events.forward_enabled is True

    def test_number_type_follows_default(self, monkeypatch):
        monkeypatch.setenv("EVENT_LOG_CAPACITY", "2.5")
        monkeypatch.setenv("REASONING_TIMEOUT_SECONDS", "7")

        settings = load_settings()

        assert settings.events.capacity == 100
        assert settings.reasoning.timeout_seconds == 7.0
        assert isinstance(settings.reasoning.timeout_seconds, float)


class TestLogging:
    @pytest.fixture(autouse=True)
    def restore_root_level(self):
        root = logging.getLogger()
        level = root.level
        yield
        root.setLevel(level)

    def test_level_from_settings(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_get_logger(self):
        assert get_logger("aether_nav.test").name == "aether_nav.test"
