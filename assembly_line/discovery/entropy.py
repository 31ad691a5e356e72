"""Input entropy diagnosis for the discovery phase.

Scores a free-text submission (plus the fields already confirmed) into one of
four entropy levels describing how much unprompted detail the creator already
supplied. The level sizes the follow-up question budget: sparse input gets
more questions, well-structured input gets fewer.

Pure-Python keyword heuristics, no LLM calls. ``diagnose`` is total: every
string input yields a diagnosis, falling back to COLD.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .inputs import DiscoveryInputs

logger = logging.getLogger(__name__)


class EntropyLevel(str, Enum):
    """How much detail the input carries, lowest to highest."""

    COLD = "COLD"  # Single topic, no context (6 questions)
    UNSTRUCTURED = "UNSTRUCTURED"  # Multiple elements, no structure (5 questions)
    INTUITIVE = "INTUITIVE"  # Natural story arc (3 questions)
    ARCHITECTED = "ARCHITECTED"  # Explicit section structure (2 questions)


# Question budget per level
RECOMMENDED_QUESTIONS: dict[EntropyLevel, int] = {
    EntropyLevel.COLD: 6,
    EntropyLevel.UNSTRUCTURED: 5,
    EntropyLevel.INTUITIVE: 3,
    EntropyLevel.ARCHITECTED: 2,
}

# Heuristic constants; keep as-is until product guidance says otherwise
ARCHITECTED_MIN_WORDS = 40
INTUITIVE_MIN_WORDS = 15
UNSTRUCTURED_MIN_WORDS = 8
UNSTRUCTURED_MIN_ELEMENTS = 2
CONTEXT_MIN_WORDS = 20
CONTEXT_MIN_SENTENCES = 3
TOPIC_MIN_WORDS = 3

AUDIENCE_KEYWORDS = ("audience", "people", "students", "entrepreneurs", "developers")
GOAL_KEYWORDS = ("want", "goal", "help", "teach", "show")
STRUCTURE_KEYWORDS = ("first", "then", "finally", "step 1", "part 1")

# Word boundaries and \w match ASCII letters only
_AUDIENCE_RE = re.compile(r"\b(for|to|helping|teaching)\s+\w+", re.ASCII)
_GOAL_RE = re.compile(r"\b(so that|in order to|because)\b", re.ASCII)
_STRUCTURE_RE = re.compile(r"\b(intro|hook|body|conclusion)\b", re.ASCII)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class DetectedDetails:
    """Which discovery elements a diagnosis reports as present."""

    topic: bool
    audience: bool
    goal: bool
    context: bool
    structure: bool

    def to_dict(self) -> dict[str, bool]:
        return {
            "topic": self.topic,
            "audience": self.audience,
            "goal": self.goal,
            "context": self.context,
            "structure": self.structure,
        }


@dataclass(frozen=True)
class InputFeatures:
    """Raw detection markers extracted from one input."""

    word_count: int
    sentence_count: int
    has_topic: bool
    has_audience: bool
    has_goal: bool
    has_context: bool
    has_structure: bool

    @property
    def element_count(self) -> int:
        """Number of the five elements detected."""
        return sum(
            [
                self.has_topic,
                self.has_audience,
                self.has_goal,
                self.has_context,
                self.has_structure,
            ]
        )


@dataclass(frozen=True)
class InputDiagnosis:
    """Classification of one input, with the follow-up budget it implies.

    Attributes:
        level: Entropy level assigned
        has_details: Elements reported present; each level reports a curated
            subset, so these may differ from the raw InputFeatures
        recommended_questions: Question budget, fixed per level
        reasoning: Human-readable justification
        confidence: Self-reported certainty, fixed per level
    """

    level: EntropyLevel
    has_details: DetectedDetails
    recommended_questions: int
    reasoning: str
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the camelCase keys stored in session documents."""
        return {
            "level": self.level.value,
            "hasDetails": self.has_details.to_dict(),
            "recommendedQuestions": self.recommended_questions,
            "reasoning": self.reasoning,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InputDiagnosis":
        """Rebuild a diagnosis produced by :meth:`to_dict`."""
        details = data.get("hasDetails", {})
        return cls(
            level=EntropyLevel(data["level"]),
            has_details=DetectedDetails(
                topic=bool(details.get("topic", False)),
                audience=bool(details.get("audience", False)),
                goal=bool(details.get("goal", False)),
                context=bool(details.get("context", False)),
                structure=bool(details.get("structure", False)),
            ),
            recommended_questions=int(data["recommendedQuestions"]),
            reasoning=str(data.get("reasoning", "")),
            confidence=float(data["confidence"]),
        )


def _count_words(text: str) -> int:
    return len(text.split())


def _count_sentences(text: str) -> int:
    return sum(1 for segment in _SENTENCE_SPLIT_RE.split(text) if segment.strip())


def extract_features(
    user_input: str,
    current_inputs: DiscoveryInputs | Mapping[str, Any] | None = None,
) -> InputFeatures:
    """Extract detection markers from input text and known fields.

    Keyword checks are case-insensitive substring matches, so "then" also
    fires inside longer words. That looseness is part of the heuristic.
    """
    inputs = DiscoveryInputs.coerce(current_inputs)
    lower = user_input.lower()
    word_count = _count_words(user_input)
    sentence_count = _count_sentences(user_input)

    has_topic = inputs.has("topic") or word_count >= TOPIC_MIN_WORDS
    has_audience = (
        inputs.has("target_audience")
        or any(keyword in lower for keyword in AUDIENCE_KEYWORDS)
        or _AUDIENCE_RE.search(lower) is not None
    )
    has_goal = (
        inputs.has("goal")
        or any(keyword in lower for keyword in GOAL_KEYWORDS)
        or _GOAL_RE.search(lower) is not None
    )
    has_context = word_count > CONTEXT_MIN_WORDS or sentence_count >= CONTEXT_MIN_SENTENCES
    has_structure = (
        any(keyword in lower for keyword in STRUCTURE_KEYWORDS)
        or _STRUCTURE_RE.search(lower) is not None
    )

    return InputFeatures(
        word_count=word_count,
        sentence_count=sentence_count,
        has_topic=has_topic,
        has_audience=has_audience,
        has_goal=has_goal,
        has_context=has_context,
        has_structure=has_structure,
    )


def diagnose(
    user_input: str,
    current_inputs: DiscoveryInputs | Mapping[str, Any] | None = None,
) -> InputDiagnosis:
    """Diagnose input quality using the 4-level entropy system.

    Rules are evaluated in priority order and the first match wins; they are
    not mutually exclusive, so the order is the tie-break.

    Args:
        user_input: The creator's initial or latest message
        current_inputs: Fields already gathered during discovery (read only)

    Returns:
        InputDiagnosis with classification and question budget
    """
    f = extract_features(user_input, current_inputs)

    if (
        f.has_structure
        and f.has_context
        and f.has_topic
        and f.has_audience
        and f.word_count > ARCHITECTED_MIN_WORDS
    ):
        diagnosis = InputDiagnosis(
            level=EntropyLevel.ARCHITECTED,
            has_details=DetectedDetails(
                topic=True,
                audience=True,
                goal=f.has_goal,
                context=True,
                structure=True,
            ),
            recommended_questions=RECOMMENDED_QUESTIONS[EntropyLevel.ARCHITECTED],
            reasoning=(
                "Input demonstrates clear narrative structure with explicit sections. "
                "Minimal clarification needed."
            ),
            confidence=0.95,
        )
    elif (
        f.has_context
        and f.has_topic
        and (f.has_audience or f.has_goal)
        and f.word_count > INTUITIVE_MIN_WORDS
    ):
        diagnosis = InputDiagnosis(
            level=EntropyLevel.INTUITIVE,
            has_details=DetectedDetails(
                topic=True,
                audience=f.has_audience,
                goal=f.has_goal,
                context=True,
                structure=False,
            ),
            recommended_questions=RECOMMENDED_QUESTIONS[EntropyLevel.INTUITIVE],
            reasoning=(
                "Input has natural flow with multiple elements but lacks precision. "
                "Some clarification needed."
            ),
            confidence=0.80,
        )
    elif (
        f.word_count > UNSTRUCTURED_MIN_WORDS
        and f.has_topic
        and f.element_count >= UNSTRUCTURED_MIN_ELEMENTS
    ):
        diagnosis = InputDiagnosis(
            level=EntropyLevel.UNSTRUCTURED,
            has_details=DetectedDetails(
                topic=True,
                audience=f.has_audience,
                goal=f.has_goal,
                context=False,
                structure=False,
            ),
            recommended_questions=RECOMMENDED_QUESTIONS[EntropyLevel.UNSTRUCTURED],
            reasoning=(
                "Input contains relevant elements but lacks clear structure. "
                "Comprehensive discovery needed."
            ),
            confidence=0.70,
        )
    else:
        # High confidence that sparse input really is cold
        diagnosis = InputDiagnosis(
            level=EntropyLevel.COLD,
            has_details=DetectedDetails(
                topic=f.has_topic,
                audience=False,
                goal=False,
                context=False,
                structure=False,
            ),
            recommended_questions=RECOMMENDED_QUESTIONS[EntropyLevel.COLD],
            reasoning=(
                "Input lacks context and detail. "
                "Full discovery protocol required to extract viable content."
            ),
            confidence=0.90,
        )

    logger.debug(
        "Diagnosed input as %s (words=%d, sentences=%d, elements=%d)",
        diagnosis.level.value,
        f.word_count,
        f.sentence_count,
        f.element_count,
    )
    return diagnosis
