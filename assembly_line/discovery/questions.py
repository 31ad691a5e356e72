"""Adaptive follow-up question generation.

Produces the next batch of discovery questions for a diagnosis. Core
questions (audience, goal, UAV, credibility) are asked only for fields that
are still unknown; level-specific fillers top the batch up to the question
budget of the diagnosed entropy level.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .entropy import EntropyLevel, InputDiagnosis
from .inputs import DiscoveryInputs

logger = logging.getLogger(__name__)

# =============================================================================
# Question Copy
# =============================================================================

QUESTIONS: dict[str, str] = {
    # Core questions
    "audience": (
        "Who exactly is your target audience? "
        "Be specific about their role, situation, or pain point."
    ),
    "goal": (
        "After watching this video, what specific action or realization "
        "should the viewer have?"
    ),
    "uav": (
        "What makes YOUR perspective on this topic different or valuable "
        "compared to others?"
    ),
    "credibility": (
        "What proof, credentials, or results do you have that will make viewers "
        "trust you on this topic?"
    ),
    # COLD fillers
    "platform": (
        "Which platforms will this content live on (TikTok, Instagram, YouTube), "
        "and how long should it be?"
    ),
    "surprising_fact": (
        "What's the most surprising or counterintuitive fact about this topic "
        "that would grab attention?"
    ),
    "common_mistake": "What common mistake do people make when trying to achieve this goal?",
    # UNSTRUCTURED fillers
    "key_insight": (
        "What's the key insight or 'aha moment' that changes everything for your audience?"
    ),
    "obstacle": (
        "What specific struggle or obstacle do people hit when they try the current approach?"
    ),
    "filming_constraints": (
        "Any filming constraints I should know about (location, equipment, time)?"
    ),
    # INTUITIVE fillers
    "tone": (
        "For tone, should the delivery be authoritative, conversational, intense, or inspiring?"
    ),
    "visual_style": (
        "Any visual style preferences for the storyboard (minimal, dynamic, text-heavy)?"
    ),
    # ARCHITECTED fillers
    "modifications": (
        "Anything else you want to emphasize or modify in the structure you outlined?"
    ),
    "duration": "Preferred video duration?",
}

# Input field an answer fills, for questions that map onto one
QUESTION_FIELDS: dict[str, str] = {
    "audience": "target_audience",
    "goal": "goal",
    "uav": "uav_description",
    "credibility": "credentials",
    "platform": "duration",
    "tone": "tone",
    "duration": "duration",
}

# Fillers appended after the core questions, in order, per level
LEVEL_FILLERS: dict[EntropyLevel, tuple[str, ...]] = {
    EntropyLevel.COLD: ("platform", "surprising_fact", "common_mistake"),
    EntropyLevel.UNSTRUCTURED: ("key_insight", "obstacle", "filming_constraints"),
    EntropyLevel.INTUITIVE: ("tone", "visual_style"),
    EntropyLevel.ARCHITECTED: ("modifications", "duration"),
}

_KEY_BY_TEXT: dict[str, str] = {text: key for key, text in QUESTIONS.items()}


def question_key(question: str) -> str | None:
    """Return the stable key for a question text, or None if unknown."""
    return _KEY_BY_TEXT.get(question)


def generate_question_keys(
    diagnosis: InputDiagnosis,
    current_inputs: DiscoveryInputs | Mapping[str, Any] | None = None,
) -> list[str]:
    """Select question keys for a diagnosis, capped at its question budget."""
    inputs = DiscoveryInputs.coerce(current_inputs)
    limit = diagnosis.recommended_questions
    keys: list[str] = []

    if not diagnosis.has_details.audience and not inputs.has("target_audience"):
        keys.append("audience")

    if not diagnosis.has_details.goal and not inputs.has("goal"):
        keys.append("goal")

    if not inputs.has("uav_description"):
        keys.append("uav")

    if not inputs.has("credentials") and not inputs.has("proof_points"):
        keys.append("credibility")

    for filler in LEVEL_FILLERS[diagnosis.level]:
        if len(keys) < limit:
            keys.append(filler)

    return keys[:limit]


def generate_questions(
    diagnosis: InputDiagnosis,
    current_inputs: DiscoveryInputs | Mapping[str, Any] | None = None,
) -> list[str]:
    """Generate adaptive follow-up questions based on entropy level.

    Args:
        diagnosis: Result of :func:`~assembly_line.discovery.entropy.diagnose`
        current_inputs: Fields already gathered (read only)

    Returns:
        New list of question texts, never longer than
        ``diagnosis.recommended_questions``
    """
    questions = [QUESTIONS[key] for key in generate_question_keys(diagnosis, current_inputs)]
    logger.debug(
        "Generated %d/%d questions for %s input",
        len(questions),
        diagnosis.recommended_questions,
        diagnosis.level.value,
    )
    return questions
