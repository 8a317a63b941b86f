"""
Keyguard Settings

Process-level settings read from environment variables (and a local .env file
when present):

- KEYGUARD_PRODUCTION: disables diagnostic log lines (default: false)
- KEYGUARD_CLASSIFIER_POLICY: logistic | heuristic (default: logistic)
- KEYGUARD_WORDLIST_PATH: challenge word list (default: bundled list)
- KEYGUARD_MAX_LOG_LENGTH: largest keystroke log scanned, in characters
  (default: 65536)
- KEYGUARD_PASSWORD_MIN_LENGTH: fallback minimum password length for callers
  without a realm policy (default: 4)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from keyguard.schemas.inputs import DEFAULT_PASSWORD_MIN_LENGTH, ClassifierPolicy


logger = logging.getLogger(__name__)


DEFAULT_MAX_LOG_LENGTH = 65536

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Immutable process settings."""
    production: bool = False
    classifier_policy: ClassifierPolicy = ClassifierPolicy.LOGISTIC
    wordlist_path: Optional[str] = None
    max_log_length: int = DEFAULT_MAX_LOG_LENGTH
    password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def load_settings() -> Settings:
    """
    Build Settings from the current environment.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    load_dotenv()

    production = os.getenv("KEYGUARD_PRODUCTION", "false").strip().lower() in _TRUTHY
    policy_name = os.getenv("KEYGUARD_CLASSIFIER_POLICY", ClassifierPolicy.LOGISTIC.value)

    try:
        policy = ClassifierPolicy(policy_name.strip().lower())
    except ValueError:
        logger.critical(f"Unknown KEYGUARD_CLASSIFIER_POLICY: {policy_name!r}")
        raise

    settings = Settings(
        production=production,
        classifier_policy=policy,
        wordlist_path=os.getenv("KEYGUARD_WORDLIST_PATH") or None,
        max_log_length=_int_env("KEYGUARD_MAX_LOG_LENGTH", DEFAULT_MAX_LOG_LENGTH),
        password_min_length=_int_env(
            "KEYGUARD_PASSWORD_MIN_LENGTH", DEFAULT_PASSWORD_MIN_LENGTH
        ),
    )
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings singleton, read once per process."""
    return load_settings()
