"""
Settings Tests

Tests environment-driven settings and their validation.
"""

import pytest

from keyguard.config import (
    DEFAULT_MAX_LOG_LENGTH,
    DEFAULT_PASSWORD_MIN_LENGTH,
    Settings,
    load_settings,
)
from keyguard.schemas.inputs import ClassifierPolicy


ENV_VARS = [
    "KEYGUARD_PRODUCTION",
    "KEYGUARD_CLASSIFIER_POLICY",
    "KEYGUARD_WORDLIST_PATH",
    "KEYGUARD_MAX_LOG_LENGTH",
    "KEYGUARD_PASSWORD_MIN_LENGTH",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all keyguard variables for the duration of a test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadSettings:

    def test_defaults(self, clean_env):
        settings = load_settings()

        assert settings == Settings()
        assert settings.production is False
        assert settings.classifier_policy == ClassifierPolicy.LOGISTIC
        assert settings.wordlist_path is None
        assert settings.max_log_length == DEFAULT_MAX_LOG_LENGTH
        assert settings.password_min_length == DEFAULT_PASSWORD_MIN_LENGTH

    def test_values_from_environment(self, clean_env):
        clean_env.setenv("KEYGUARD_PRODUCTION", "True")
        clean_env.setenv("KEYGUARD_CLASSIFIER_POLICY", "HEURISTIC")
        clean_env.setenv("KEYGUARD_WORDLIST_PATH", "/etc/keyguard/words.txt")
        clean_env.setenv("KEYGUARD_MAX_LOG_LENGTH", "1024")
        clean_env.setenv("KEYGUARD_PASSWORD_MIN_LENGTH", "10")

        settings = load_settings()

        assert settings.production is True
        assert settings.classifier_policy == ClassifierPolicy.HEURISTIC
        assert settings.wordlist_path == "/etc/keyguard/words.txt"
        assert settings.max_log_length == 1024
        assert settings.password_min_length == 10

    @pytest.mark.parametrize("value", ["0", "false", "no", ""])
    def test_production_falsy(self, clean_env, value):
        clean_env.setenv("KEYGUARD_PRODUCTION", value)
        assert load_settings().production is False

    def test_unknown_policy(self, clean_env):
        clean_env.setenv("KEYGUARD_CLASSIFIER_POLICY", "svm")
        with pytest.raises(ValueError):
            load_settings()

    @pytest.mark.parametrize("value", ["lots", "-5"])
    def test_invalid_integer(self, clean_env, value):
        clean_env.setenv("KEYGUARD_MAX_LOG_LENGTH", value)
        with pytest.raises(ValueError):
            load_settings()

    def test_settings_are_frozen(self):
        with pytest.raises(AttributeError):
            Settings().production = True
