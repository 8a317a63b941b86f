"""
Keyguard

Keystroke-based automation detection for login attempts.
"""

from keyguard.evaluator import (
    AutomationEvaluator,
    KeystrokeProfileMatcher,
    min_length_from_policy,
)

__all__ = [
    "AutomationEvaluator",
    "KeystrokeProfileMatcher",
    "min_length_from_policy",
]
