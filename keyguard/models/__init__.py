"""
Keyguard Models

Rule-based and learned automation detectors.
"""

from keyguard.models.classifiers import (
    AutomationClassifier,
    HeuristicAutomationClassifier,
    LogisticAutomationClassifier,
    build_classifier,
)
from keyguard.models.type_one import TypeOneDetector

__all__ = [
    "TypeOneDetector",
    "AutomationClassifier",
    "LogisticAutomationClassifier",
    "HeuristicAutomationClassifier",
    "build_classifier",
]
