"""
Keyguard Automation Evaluator

Stateless evaluator for login keystroke logs.

Detection Layers:
    Parse → Type-One → Feature Vector → Classifier → Challenge Word

One instance is shared by every concurrent login attempt. All collaborators
are fixed at construction; everything that varies per attempt (username, log,
password_min_length, policy override) is passed to evaluate().
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from keyguard.challenge import ChallengeWordSelector, load_word_list
from keyguard.config import DEFAULT_PASSWORD_MIN_LENGTH, Settings, get_settings
from keyguard.models import (
    AutomationClassifier,
    LogisticAutomationClassifier,
    TypeOneDetector,
    build_classifier,
)
from keyguard.processors import (
    EMPTY_VECTOR,
    FeatureVector,
    FeatureVectorBuilder,
    KeystrokeLogParser,
)
from keyguard.schemas.inputs import ClassifierPolicy, DetectionConfig, EvaluationRequest
from keyguard.schemas.outputs import AttemptDecision, AutomationVerdict


logger = logging.getLogger(__name__)


# =============================================================================
# Password Policy
# =============================================================================

def min_length_from_policy(
    policy_config: Optional[Mapping[str, Any]],
    default: int = DEFAULT_PASSWORD_MIN_LENGTH,
) -> int:
    """
    Minimum password length from a realm password-policy mapping.

    Uses the integer "length" entry when present, else default.
    """
    if not policy_config:
        return default
    length = policy_config.get("length")
    if isinstance(length, bool):
        return default
    try:
        value = int(length)
    except (TypeError, ValueError):
        return default
    return value if value >= 0 else default


# =============================================================================
# Profile Matching (extension point)
# =============================================================================

class KeystrokeProfileMatcher:
    """
    Compares an attempt's keystrokes against the user's typing profile.

    Not implemented: there is no stored profile to compare against, so every
    attempt matches. Subclass and override matches() to plug in a real
    comparison.
    """

    def matches(self, username: str, keystroke_data: str) -> bool:
        return True


# =============================================================================
# Evaluator
# =============================================================================

class AutomationEvaluator:
    """
    Decides whether a login attempt was typed by a human.

    Either detector firing marks the attempt automated:
        - TypeOneDetector on event counts (checked first, short-circuits)
        - the policy's classifier on the timing feature vector
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        config: Optional[DetectionConfig] = None,
        selector: Optional[ChallengeWordSelector] = None,
        profile_matcher: Optional[KeystrokeProfileMatcher] = None,
    ) -> None:
        """Initialize evaluator."""
        self.settings = settings or get_settings()
        self.config = config or DetectionConfig()

        self.parser = KeystrokeLogParser()
        self.feature_builder = FeatureVectorBuilder()
        self.type_one_detector = TypeOneDetector()

        # Both strategies are built up front and selected per call
        self.classifiers: Dict[ClassifierPolicy, AutomationClassifier] = {
            policy: build_classifier(policy, self.config)
            for policy in ClassifierPolicy
        }

        self.selector = selector or ChallengeWordSelector(
            load_word_list(self.settings.wordlist_path)
        )
        self.profile_matcher = profile_matcher or KeystrokeProfileMatcher()

        logger.info(
            f"AutomationEvaluator initialized (policy={self.settings.classifier_policy.value}, "
            f"production={self.settings.production}, words={len(self.selector.words)})"
        )

    @property
    def diagnostics(self) -> bool:
        """Diagnostic log lines are only emitted outside production."""
        return not self.settings.production

    # -------------------------------------------------------------------------
    # Evaluate
    # -------------------------------------------------------------------------

    def evaluate(
        self,
        request: EvaluationRequest,
        policy: Optional[ClassifierPolicy] = None,
    ) -> AutomationVerdict:
        """
        Evaluate one login attempt.

        Args:
            request: Username, raw keystroke log and realm minimum length.
            policy: Classifier override; defaults to the configured policy.

        Returns:
            AutomationVerdict with a challenge word when automated.
        """
        policy = ClassifierPolicy(policy) if policy is not None else self.settings.classifier_policy
        keystrokes = request.keystroke_data or ""

        if len(keystrokes) > self.settings.max_log_length:
            logger.warning(
                f"Keystroke log too large ({len(keystrokes)} > "
                f"{self.settings.max_log_length} chars), assuming automation"
            )
            return self._verdict(request, policy, automated=True, type_one=False, vector=EMPTY_VECTOR)

        if self.diagnostics:
            logger.debug(f"Received keystroke data for {request.username!r}: {keystrokes}")

        counts = self.parser.parse(keystrokes)

        if self.diagnostics:
            logger.debug(
                f"Parsed counts: down={counts.down_count}, up={counts.up_count}, "
                f"insert={counts.insert_count}, insert_lengths={list(counts.insert_lengths)}"
            )

        if self.type_one_detector.is_automated(counts, request.password_min_length):
            if self.diagnostics:
                logger.debug("Type-one automation detected")
            return self._verdict(request, policy, automated=True, type_one=True, vector=EMPTY_VECTOR)

        vector = self.feature_builder.build(counts)
        classifier = self.classifiers[policy]
        automated = classifier.is_automated(vector)

        if self.diagnostics:
            if isinstance(classifier, LogisticAutomationClassifier) and not vector.is_empty:
                logger.debug(f"Logistic probability {classifier.probability(vector):.4f}")
            logger.debug(
                f"Vector {vector.as_list()} -> {policy.value} classifier automated={automated}"
            )

        return self._verdict(request, policy, automated=automated, type_one=False, vector=vector)

    def _verdict(
        self,
        request: EvaluationRequest,
        policy: ClassifierPolicy,
        automated: bool,
        type_one: bool,
        vector: FeatureVector,
    ) -> AutomationVerdict:
        if automated:
            if self.diagnostics:
                logger.debug("Automation detected, issuing challenge word")
            return AutomationVerdict(
                automated=True,
                decision=AttemptDecision.CHALLENGE,
                challenge_word=self.selector.select(request.username),
                policy=policy,
                type_one=type_one,
                feature_vector=vector.as_list(),
            )

        return AutomationVerdict(
            automated=False,
            decision=AttemptDecision.PROCEED,
            policy=policy,
            type_one=False,
            feature_vector=vector.as_list(),
        )

    # -------------------------------------------------------------------------
    # Profile Verification
    # -------------------------------------------------------------------------

    def verify_profile(self, username: str, keystroke_data: Optional[str]) -> bool:
        """
        Final keystroke check after a PROCEED verdict or a completed challenge.

        Delegates to the profile matcher extension point.
        """
        return self.profile_matcher.matches(username, keystroke_data or "")
