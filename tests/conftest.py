"""
Keyguard Test Suite - Shared Pytest Fixtures

This conftest.py provides:
- A keystroke log builder producing the same JSON shape as the login form
- Settings, config and evaluator instances
- Sample human and automated typing logs

Usage:
    pytest tests/ -v
"""

import json
from typing import Callable, Optional, Sequence

import pytest

from keyguard.challenge import ChallengeWordSelector
from keyguard.config import Settings
from keyguard.evaluator import AutomationEvaluator
from keyguard.schemas.inputs import DetectionConfig


# =============================================================================
# Keystroke Log Builder
# =============================================================================

def build_keystroke_log(
    down_downs: Sequence[Optional[float]] = (),
    dwell_times: Sequence[Optional[float]] = (),
    insert_lengths: Sequence[int] = (),
    step_ms: float = 150.0,
) -> str:
    """
    Build a keystroke log the way the browser logger serialises it.

    One "down" record per down_downs entry, one "up" record per dwell_times
    entry and one "insert" record per insert_lengths entry. None becomes a
    JSON null (the first key-down of a session has no down_down).
    """
    records = []
    ts = 0.0
    for i in range(max(len(down_downs), len(dwell_times), len(insert_lengths))):
        if i < len(down_downs):
            records.append({"type": "down", "timestamp": ts, "down_down": down_downs[i]})
        if i < len(insert_lengths):
            records.append({"len": insert_lengths[i], "type": "insert", "timestamp": ts + 1.0})
        if i < len(dwell_times):
            records.append({"type": "up", "timestamp": ts + 2.0, "dwellTime": dwell_times[i]})
        ts += step_ms
    return json.dumps({"keystrokes": records, "totalTime": ts})


@pytest.fixture
def make_log() -> Callable[..., str]:
    """Fixture exposing build_keystroke_log."""
    return build_keystroke_log


# =============================================================================
# Sample Logs
# =============================================================================

# Medians: down-down 210.0, distance 12.5, dwell 100.5
HUMAN_DOWN_DOWNS = [None, 180.0, 210.0, 250.0, 190.0, 230.0, 205.0, 260.0]
HUMAN_DWELLS = [95.0, 110.0, 88.0, 102.0, 120.0, 97.0, 105.0, 99.0]

# Medians: down-down 10.0, distance 0.0, dwell 5.0
SCRIPTED_DOWN_DOWNS = [None, 10.0, 10.0, 10.0, 10.0, 10.0, 10.0, 10.0]
SCRIPTED_DWELLS = [5.0] * 8


@pytest.fixture
def human_log() -> str:
    """Eight characters typed by a person on a physical keyboard."""
    return build_keystroke_log(HUMAN_DOWN_DOWNS, HUMAN_DWELLS, [1] * 8)


@pytest.fixture
def scripted_log() -> str:
    """Eight synthetic key events with a fixed 10ms rhythm."""
    return build_keystroke_log(SCRIPTED_DOWN_DOWNS, SCRIPTED_DWELLS, [1] * 8)


@pytest.fixture
def pasted_log() -> str:
    """A password manager filling 12 characters at once."""
    return build_keystroke_log(insert_lengths=[12])


# =============================================================================
# Service Fixtures
# =============================================================================

TEST_WORDS = ("alpha", "bravo", "charlie", "delta", "echo")


@pytest.fixture
def settings() -> Settings:
    """Non-production settings with default limits."""
    return Settings(production=False)


@pytest.fixture
def detection_config() -> DetectionConfig:
    return DetectionConfig()


@pytest.fixture
def selector() -> ChallengeWordSelector:
    return ChallengeWordSelector(TEST_WORDS)


@pytest.fixture
def evaluator(settings, detection_config, selector) -> AutomationEvaluator:
    """Evaluator wired with a small in-memory word list."""
    return AutomationEvaluator(
        settings=settings,
        config=detection_config,
        selector=selector,
    )
