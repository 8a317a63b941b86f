"""
Keyguard Automation Classifiers

Two interchangeable strategies that score a FeatureVector:

- LogisticAutomationClassifier: logistic regression with offline-fitted
  weights and bias
- HeuristicAutomationClassifier: auditable thresholds over the same features

An empty vector always counts as automated: missing timing data is itself
evidence of non-human input.
"""

import math
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

import numpy as np

from keyguard.processors.features import FeatureVector
from keyguard.schemas.inputs import ClassifierPolicy, DetectionConfig


# Number of features both strategies expect
VECTOR_SIZE = 3


class AutomationClassifier(ABC):
    """Common interface for feature-vector automation classifiers."""

    policy: ClassifierPolicy

    def __init__(self, config: Optional[DetectionConfig] = None) -> None:
        self.config = config or DetectionConfig()

    @abstractmethod
    def is_automated(self, vector: FeatureVector) -> bool:
        """Return True if the vector indicates automated input."""


class LogisticAutomationClassifier(AutomationClassifier):
    """
    Logistic regression over (median down-down, median distance, median dwell).

        z = bias + sum(weights[i] * vector[i])
        probability = 1 / (1 + exp(-z))
        automated = probability > decision_threshold

    All fitted weights are negative: slower, longer-held, more dispersed
    typing lowers the probability of automation.
    """

    policy = ClassifierPolicy.LOGISTIC

    def __init__(self, config: Optional[DetectionConfig] = None) -> None:
        super().__init__(config)
        self._weights = np.asarray(self.config.weights, dtype=np.float64)

    def decision_value(self, vector: FeatureVector) -> float:
        """Linear score z for a non-empty vector."""
        values = np.asarray(vector.values, dtype=np.float64)
        return float(self.config.bias + np.dot(self._weights, values))

    def probability(self, vector: FeatureVector) -> float:
        """
        Probability of automation for a non-empty vector.

        Uses the two-sided sigmoid so large |z| never overflows.
        """
        z = self.decision_value(vector)
        if z >= 0:
            return 1.0 / (1.0 + math.exp(-z))
        ez = math.exp(z)
        return ez / (1.0 + ez)

    def is_automated(self, vector: FeatureVector) -> bool:
        if vector.is_empty:
            return True

        probability = self.probability(vector)
        return probability > self.config.decision_threshold


class HeuristicAutomationClassifier(AutomationClassifier):
    """
    Threshold rules over the same features.

    Automated only if all three hold at once:
        - median down-down <= median_down_down_threshold (fast presses)
        - median distance >= median_distance_threshold (dispersed timing)
        - median dwell <= median_dwell_time_threshold (short holds)
    """

    policy = ClassifierPolicy.HEURISTIC

    def is_automated(self, vector: FeatureVector) -> bool:
        if len(vector) < VECTOR_SIZE:
            return True

        cfg = self.config
        return (
            vector.median_down_down <= cfg.median_down_down_threshold
            and vector.median_down_down_distance >= cfg.median_distance_threshold
            and vector.median_dwell_time <= cfg.median_dwell_time_threshold
        )


_CLASSIFIERS: Dict[ClassifierPolicy, Type[AutomationClassifier]] = {
    ClassifierPolicy.LOGISTIC: LogisticAutomationClassifier,
    ClassifierPolicy.HEURISTIC: HeuristicAutomationClassifier,
}


def build_classifier(
    policy: ClassifierPolicy = ClassifierPolicy.LOGISTIC,
    config: Optional[DetectionConfig] = None,
) -> AutomationClassifier:
    """
    Create the classifier for a policy.

    Raises:
        ValueError: If policy is not a known ClassifierPolicy value.
    """
    return _CLASSIFIERS[ClassifierPolicy(policy)](config)
