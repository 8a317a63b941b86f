"""
Keyguard Processors

Public exports for keystroke log parsing and feature engineering.
"""

from keyguard.processors.features import (
    EMPTY_VECTOR,
    FeatureVector,
    FeatureVectorBuilder,
    median,
)
from keyguard.processors.keystrokes import KeystrokeLogParser, ParsedCounts

__all__ = [
    "KeystrokeLogParser",
    "ParsedCounts",
    "FeatureVector",
    "FeatureVectorBuilder",
    "EMPTY_VECTOR",
    "median",
]
