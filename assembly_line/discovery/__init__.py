"""Discovery phase: input diagnosis, adaptive questions and session flow."""

from .entropy import (
    DetectedDetails,
    EntropyLevel,
    InputDiagnosis,
    InputFeatures,
    diagnose,
    extract_features,
)
from .inputs import DiscoveryInputs
from .progress import calculate_progress, should_show_gate
from .questions import QUESTION_FIELDS, QUESTIONS, generate_questions, question_key
from .session import DiscoveryError, DiscoverySession, DiscoverySessionStore, DiscoveryStatus

__all__ = [
    "DetectedDetails",
    "DiscoveryError",
    "DiscoveryInputs",
    "DiscoverySession",
    "DiscoverySessionStore",
    "DiscoveryStatus",
    "EntropyLevel",
    "InputDiagnosis",
    "InputFeatures",
    "QUESTIONS",
    "QUESTION_FIELDS",
    "calculate_progress",
    "diagnose",
    "extract_features",
    "generate_questions",
    "question_key",
    "should_show_gate",
]
