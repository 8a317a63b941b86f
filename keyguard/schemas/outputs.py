"""
Keyguard Output Schemas

Pydantic V2 model for the automation verdict handed back to the
authentication flow.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from keyguard.schemas.inputs import ClassifierPolicy


class AttemptDecision(str, Enum):
    """What the authentication flow should do next."""
    PROCEED = "PROCEED"
    CHALLENGE = "CHALLENGE"


class AutomationVerdict(BaseModel):
    """
    Result of evaluating one login attempt.

    - automated: True when either detector fired
    - decision: PROCEED to profile verification, or CHALLENGE with a word
    - challenge_word: only set when automated

    type_one, policy and feature_vector are diagnostics for the caller's
    audit trail. They must not be surfaced to the end user.
    """
    model_config = ConfigDict(frozen=True)

    automated: bool = Field(..., description="Automation suspected")
    decision: AttemptDecision = Field(..., description="Next step for the flow")
    challenge_word: Optional[str] = Field(
        None,
        description="Secondary typing challenge, set only when automated"
    )
    policy: ClassifierPolicy = Field(..., description="Classifier policy applied")
    type_one: bool = Field(
        False,
        description="Paste/insert style automation detected from event counts"
    )
    feature_vector: List[float] = Field(
        default_factory=list,
        description="Timing features; empty when not computed or insufficient"
    )
