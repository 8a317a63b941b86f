"""
Keyguard Schemas

Public exports for input and output Pydantic models.
"""

from keyguard.schemas.inputs import (
    ClassifierPolicy,
    DetectionConfig,
    EvaluationRequest,
)
from keyguard.schemas.outputs import (
    AttemptDecision,
    AutomationVerdict,
)

__all__ = [
    # Input
    "ClassifierPolicy",
    "DetectionConfig",
    "EvaluationRequest",
    # Output
    "AttemptDecision",
    "AutomationVerdict",
]
