"""
Keyguard Input Schemas

Pydantic V2 models for:
- Detection constants shared by the classifiers (DetectionConfig)
- Per-attempt evaluation request (EvaluationRequest)
"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


# Fallback for callers whose realm has no password policy
DEFAULT_PASSWORD_MIN_LENGTH = 4


# =============================================================================
# Enums
# =============================================================================

class ClassifierPolicy(str, Enum):
    """Strategy used to score the timing feature vector."""
    LOGISTIC = "logistic"
    HEURISTIC = "heuristic"


# =============================================================================
# Detection Configuration
# =============================================================================

class DetectionConfig(BaseModel):
    """
    Read-only detection constants.

    Heuristic thresholds (milliseconds):
        - median_down_down_threshold: median key-down to key-down time at or
          below this value looks automated
        - median_distance_threshold: median distance between sorted
          down-down times at or above this value looks automated
        - median_dwell_time_threshold: median key hold time at or below this
          value looks automated

    Logistic regression constants were fitted offline. The decision threshold
    sits slightly below 0.5 to reduce false negatives.
    """
    model_config = ConfigDict(frozen=True)

    median_down_down_threshold: float = Field(70.0, ge=0.0)
    median_distance_threshold: float = Field(1.1, ge=0.0)
    median_dwell_time_threshold: float = Field(40.0, ge=0.0)

    weights: Tuple[float, float, float] = Field(
        (-0.1367, -0.0271, -0.10671),
        description="Weights for (median down-down, median distance, median dwell)"
    )
    bias: float = Field(19.17261, description="Logistic regression intercept")
    decision_threshold: float = Field(
        0.45,
        ge=0.0,
        le=1.0,
        description="Probability above which automation is assumed"
    )


# =============================================================================
# Evaluation Request
# =============================================================================

class EvaluationRequest(BaseModel):
    """
    A single login attempt to evaluate.

    password_min_length comes from the caller's realm password policy and
    differs between callers, so it travels with the request.
    """
    model_config = ConfigDict(frozen=True)

    username: str = Field(..., description="Username of the authenticating user")
    keystroke_data: str = Field(
        "",
        description="Raw keystroke log captured by the login form"
    )
    password_min_length: int = Field(
        DEFAULT_PASSWORD_MIN_LENGTH,
        ge=0,
        description="Minimum password length from the realm password policy"
    )
