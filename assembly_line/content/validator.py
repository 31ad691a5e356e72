"""Mechanical quality checks for generated content.

Pure-Python scoring of a ContentOutput against the inputs it was generated
from, plus the duration-derived targets (word count, shot count, beats) and
the script and storyboard checks built on them. No LLM calls.
"""

import logging
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from ..config import (
    DEFAULT_EXPECTED_WORDS,
    EXPECTED_WORDS_BY_DURATION,
    GENERIC_PHRASES,
    VALIDATION_PASS_SCORE,
)
from .models import ContentOutput, StoryboardFrame, UserInputs

logger = logging.getLogger(__name__)

_DIGIT_RE = re.compile(r"\d")
# Beat markers written into scripts, e.g. [0:00-0:03]
_BEAT_TIMESTAMP_RE = re.compile(r"\[0:\d{2}-0:\d{2}\]")
_CLOCK_RE = re.compile(r"(\d+):(\d+)")
_SECONDS_RE = re.compile(r"\d+(?:\.\d+)?")

# Delivery speed in words per second
WORDS_PER_SECOND = {"high-energy": 3.0, "conversational": 2.3}
# Seconds lost to natural pauses
BREATH_TAX_SECONDS = 3
MAX_SHOTS = 60

# Script and storyboard checks: every issue costs the same
ISSUE_PENALTY = 20
HOOK_CHARS = 100
MIN_AUDIENCE_MENTIONS = 2
MIN_SHOT_TYPES = 5
MAX_SHOT_SECONDS = 5


@dataclass
class ContentValidationResult:
    """Outcome of validating one content package."""

    score: int
    passed: bool
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    metrics: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WordCountRequirements:
    min_words: int
    max_words: int
    target_words: int


@dataclass(frozen=True)
class ShotCountRequirements:
    min_shots: int
    max_shots: int
    target_shots: int


@dataclass(frozen=True)
class ScriptRequirements:
    """What a script of a given length has to deliver.

    Build with :meth:`for_duration` so word and beat targets stay consistent
    with :func:`calculate_word_count` and :func:`get_expected_beats`.
    """

    duration: float
    min_words: int
    max_words: int
    target_words: int
    expected_beats: int
    topic: str = ""
    audience: str = ""
    uav: str = ""
    goal: str = ""

    @classmethod
    def for_duration(
        cls,
        duration: float,
        topic: str = "",
        audience: str = "",
        uav: str = "",
        goal: str = "",
        style: Literal["high-energy", "conversational"] = "high-energy",
    ) -> "ScriptRequirements":
        words = calculate_word_count(duration, style)
        return cls(
            duration=duration,
            min_words=words.min_words,
            max_words=words.max_words,
            target_words=words.target_words,
            expected_beats=get_expected_beats(duration),
            topic=topic,
            audience=audience,
            uav=uav,
            goal=goal,
        )


@dataclass(frozen=True)
class StoryboardRequirements:
    """Shot targets for a storyboard of a given length."""

    duration: float
    min_shots: int
    max_shots: int
    target_shots: int
    min_shot_types: int = MIN_SHOT_TYPES

    @classmethod
    def for_duration(
        cls, duration: float, min_shot_types: int = MIN_SHOT_TYPES
    ) -> "StoryboardRequirements":
        shots = calculate_shot_count(duration)
        return cls(
            duration=duration,
            min_shots=shots.min_shots,
            max_shots=shots.max_shots,
            target_shots=shots.target_shots,
            min_shot_types=min_shot_types,
        )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def validate_content_output(
    output: ContentOutput | Mapping[str, Any],
    inputs: UserInputs | Mapping[str, Any],
) -> ContentValidationResult:
    """Score a generated package from 0 to 100.

    Deductions:
    - Script under 70% of the expected word count: -30 (under 90%: -10)
    - Topic not mentioned: -20
    - First UAV marker missing (only checked when markers are given): -20
    - Each generic phrase found: -5
    - No numbers or percentages: -15

    Args:
        output: Generated package
        inputs: Creator inputs (topic, duration, uav_markers are used)

    Returns:
        ContentValidationResult; ``passed`` when the score is at least 70
    """
    if not isinstance(output, ContentOutput):
        output = ContentOutput.model_validate(output)
    if not isinstance(inputs, UserInputs):
        inputs = UserInputs.model_validate(inputs)

    issues: list[str] = []
    suggestions: list[str] = []
    score = 100

    script_text = output.script_text
    lower_text = script_text.lower()
    word_count = len(script_text.split())
    expected_words = EXPECTED_WORDS_BY_DURATION.get(inputs.duration or "", DEFAULT_EXPECTED_WORDS)

    # Check 1: word count
    if word_count < expected_words * 0.7:
        score -= 30
        issues.append(f"Script too short: {word_count} words vs {expected_words} expected")
        suggestions.append("Increase the output token budget for script generation")
    elif word_count < expected_words * 0.9:
        score -= 10

    # Check 2: topic mentioned
    topic = inputs.topic or ""
    topic_mentioned = bool(topic) and topic.lower() in lower_text
    if not topic_mentioned:
        score -= 20
        issues.append(f'Topic "{topic}" not mentioned')
        suggestions.append('Add to context: "You MUST mention [topic] explicitly"')

    # Check 3: UAV incorporated
    uav_incorporated = False
    if inputs.uav_markers:
        first_marker = inputs.uav_markers.split(",")[0].strip()
        uav_incorporated = first_marker in script_text
        if not uav_incorporated:
            score -= 20
            issues.append(f'UAV "{first_marker}" not incorporated')
            suggestions.append("Emphasize UAV in context")

    # Check 4: generic phrases
    found_generic = [phrase for phrase in GENERIC_PHRASES if phrase in lower_text]
    if found_generic:
        score -= len(found_generic) * 5
        issues.append(f"Generic phrases: {', '.join(found_generic)}")
        suggestions.append("Add rejection rules to prompt")

    # Check 5: specific data
    if not _DIGIT_RE.search(script_text) and "%" not in script_text:
        score -= 15
        issues.append("No specific numbers or data")
        suggestions.append("Request concrete examples in prompt")

    score = max(0, min(100, score))
    result = ContentValidationResult(
        score=score,
        passed=score >= VALIDATION_PASS_SCORE,
        issues=issues,
        suggestions=suggestions,
        metrics={
            "wordCount": word_count,
            "expectedWordCount": expected_words,
            "topicMentioned": topic_mentioned,
            "uavIncorporated": uav_incorporated,
            "genericPhraseCount": len(found_generic),
        },
    )

    if issues:
        logger.warning(f"Content validation score {score}/100, issues: {'; '.join(issues)}")
    else:
        logger.info(f"Content validation score {score}/100")
    return result


def calculate_word_count(
    duration: float,
    style: Literal["high-energy", "conversational"] = "high-energy",
) -> WordCountRequirements:
    """Spoken word targets for a video of ``duration`` seconds.

    Usable time is the duration minus a 3 second breath tax, but never less
    than 90% of the duration. The range is the target +/- 10%.
    """
    words_per_second = WORDS_PER_SECOND.get(style, WORDS_PER_SECOND["high-energy"])
    usable_time = max(duration - BREATH_TAX_SECONDS, duration * 0.9)

    target_words = _round_half_up(usable_time * words_per_second)
    requirements = WordCountRequirements(
        min_words=math.floor(target_words * 0.9),
        max_words=math.ceil(target_words * 1.1),
        target_words=target_words,
    )
    logger.debug(
        f"Word count for {duration}s ({style}): "
        f"{requirements.min_words}-{requirements.max_words} (target: {target_words})"
    )
    return requirements


def calculate_shot_count(duration: float) -> ShotCountRequirements:
    """Storyboard shot targets: one shot every 2 to 3 seconds, capped at 60."""
    return ShotCountRequirements(
        min_shots=math.floor(duration / 3),
        max_shots=min(math.ceil(duration / 2), MAX_SHOTS),
        target_shots=min(_round_half_up(duration / 2.5), MAX_SHOTS),
    )


def get_expected_beats(duration: float) -> int:
    """Number of structural beats a script of this length should have."""
    if duration <= 20:
        return 3  # Hook, value, CTA
    if duration <= 45:
        return 6  # Hook, context, three values, CTA
    if duration <= 75:
        return 5  # Promise, problem, agitate, solution, result
    return 7  # Adds proof and CTA


# =============================================================================
# Script and storyboard checks
# =============================================================================


def _issue_score(issues: list[str]) -> int:
    return max(0, 100 - len(issues) * ISSUE_PENALTY)


def parse_timestamp(timestamp: str) -> int:
    """Seconds in an ``M:SS`` clock value; 0 when there is none."""
    match = _CLOCK_RE.search(timestamp)
    if not match:
        return 0
    return int(match.group(1)) * 60 + int(match.group(2))


def shot_seconds(frame: StoryboardFrame) -> float:
    """Length of one shot, from its duration (``3s``) or its timestamp span."""
    if frame.duration:
        match = _SECONDS_RE.search(frame.duration)
        if match:
            return float(match.group())
    if frame.timestamp and "-" in frame.timestamp:
        start, end = frame.timestamp.split("-", 1)
        return parse_timestamp(end) - parse_timestamp(start)
    return 0


def timed_script_text(output: ContentOutput) -> str:
    """Script text with each line's timing written as a ``[0:00-0:03]`` beat marker."""
    return " ".join(
        f"[{line.timing}] {line.text}" if line.timing else line.text for line in output.script
    )


def validate_script(
    script: str | ContentOutput,
    requirements: ScriptRequirements,
) -> ContentValidationResult:
    """Check a script against length, relevance and pacing requirements.

    Checks:
    1. Word count within the requirement's range
    2. Topic appears in the hook (first 100 characters)
    3. Audience named at least twice
    4. UAV present (skipped when the requirement has none)
    5. At least one beat timestamp per expected beat

    Every issue costs 20 points; the script passes only with no issues.

    Args:
        script: Script text, or a package whose line timings become beat markers
        requirements: Targets, usually from :meth:`ScriptRequirements.for_duration`

    Returns:
        ContentValidationResult
    """
    if isinstance(script, ContentOutput):
        script = timed_script_text(script)

    issues: list[str] = []
    suggestions: list[str] = []
    duration = f"{requirements.duration:g}s"

    # 1. Word count
    word_count = len(script.split())
    if word_count < requirements.min_words:
        issues.append(f"Script too short: {word_count} words (minimum: {requirements.min_words})")
        suggestions.append(
            f"Add {requirements.min_words - word_count} more words to fill a {duration} video"
        )
    if word_count > requirements.max_words:
        issues.append(f"Script too long: {word_count} words (maximum: {requirements.max_words})")
        suggestions.append(
            f"Remove {word_count - requirements.max_words} words; viewers can't take in "
            f"that much in {duration}"
        )

    # 2. Topic in hook
    topic = requirements.topic
    topic_in_hook = bool(topic) and topic.lower() in script[:HOOK_CHARS].lower()
    if not topic_in_hook:
        issues.append(f'Topic "{topic}" not found in hook (first {HOOK_CHARS} characters)')
        suggestions.append(f'Start with "{topic}" to signal relevance immediately')

    # 3. Audience language
    audience = requirements.audience
    audience_mentions = (
        len(re.findall(re.escape(audience), script, re.IGNORECASE)) if audience else 0
    )
    if audience_mentions < MIN_AUDIENCE_MENTIONS:
        issues.append(
            f'Audience "{audience}" mentioned only {audience_mentions} time(s) '
            f"(need {MIN_AUDIENCE_MENTIONS}+)"
        )
        suggestions.append(f'Use "{audience}" terminology naturally to build relevance')

    # 4. UAV
    uav_present = False
    if requirements.uav:
        uav_present = requirements.uav.lower() in script.lower()
        if not uav_present:
            issues.append(f'Unique Added Value "{requirements.uav}" not present in script')
            suggestions.append(f'Present "{requirements.uav}" as the key solution or secret')

    # 5. Beat timestamps
    timestamp_count = len(_BEAT_TIMESTAMP_RE.findall(script))
    if requirements.expected_beats > 0 and timestamp_count < requirements.expected_beats:
        issues.append(
            f"Missing timestamps: found {timestamp_count}, "
            f"expected {requirements.expected_beats} beats"
        )
        suggestions.append("Add timestamps like [0:00-0:03] for each structural beat")

    score = _issue_score(issues)
    result = ContentValidationResult(
        score=score,
        passed=not issues,
        issues=issues,
        suggestions=suggestions,
        metrics={
            "wordCount": word_count,
            "wordCountRequired": f"{requirements.min_words}-{requirements.max_words}",
            "topicInHook": topic_in_hook,
            "audienceMentions": audience_mentions,
            "uavPresent": uav_present,
            "timestampCount": timestamp_count,
            "expectedBeats": requirements.expected_beats,
        },
    )

    logger.info(
        f"Script validation: {word_count} words ({result.metrics['wordCountRequired']}), "
        f"{timestamp_count}/{requirements.expected_beats} beats, score {score}/100"
    )
    if issues:
        logger.warning(f"Script issues: {'; '.join(issues)}")
    return result


def validate_storyboard(
    frames: Sequence[StoryboardFrame] | ContentOutput,
    requirements: StoryboardRequirements,
) -> ContentValidationResult:
    """Check a storyboard against shot count, variety, coverage and shot length.

    Coverage uses the last frame's timestamp when it has one, otherwise the
    sum of all shot lengths. Every issue costs 20 points; the storyboard
    passes only with no issues.
    """
    if isinstance(frames, ContentOutput):
        frames = frames.storyboard
    frames = list(frames)

    issues: list[str] = []
    suggestions: list[str] = []
    metrics: dict[str, Any] = {
        "shotCount": len(frames),
        "shotCountRequired": f"{requirements.min_shots}-{requirements.max_shots}",
    }

    # 1. Shot count
    if len(frames) < requirements.min_shots:
        issues.append(f"Too few shots: {len(frames)} (minimum: {requirements.min_shots})")
        suggestions.append(
            f"Add {requirements.min_shots - len(frames)} more visual events; viewers need a "
            "pattern interrupt every 2-3 seconds"
        )
    if len(frames) > requirements.max_shots:
        issues.append(f"Too many shots: {len(frames)} (maximum: {requirements.max_shots})")
        suggestions.append(
            f"Remove {len(frames) - requirements.max_shots} shots; rapid cuts cause fatigue"
        )

    # 2. Shot variety
    shot_types = list(dict.fromkeys(frame.shot_type for frame in frames if frame.shot_type))
    metrics["shotTypes"] = shot_types
    metrics["shotVariety"] = len(shot_types)
    if len(shot_types) < requirements.min_shot_types:
        issues.append(
            f"Low variety: only {len(shot_types)} shot types "
            f"(need {requirements.min_shot_types}+)"
        )
        suggestions.append("Mix in punch-ins, B-roll, text overlays and jump cuts")

    # 3. Time coverage
    if frames:
        last = frames[-1]
        if last.timestamp and "-" in last.timestamp:
            end_seconds: float = parse_timestamp(last.timestamp.split("-", 1)[1])
        else:
            end_seconds = sum(shot_seconds(frame) for frame in frames)
        if end_seconds:
            metrics["coverage"] = f"{end_seconds:g}s / {requirements.duration:g}s"
            if end_seconds < requirements.duration - 1:
                issues.append(
                    f"Incomplete coverage: ends at {end_seconds:g}s "
                    f"(need {requirements.duration:g}s)"
                )
                suggestions.append(
                    f"Add shots to cover the remaining "
                    f"{requirements.duration - end_seconds:g} seconds"
                )

    # 4. Long shots
    long_shots = [frame for frame in frames if shot_seconds(frame) > MAX_SHOT_SECONDS]
    if long_shots:
        issues.append(
            f"{len(long_shots)} shot(s) exceed {MAX_SHOT_SECONDS} seconds (reduces retention)"
        )
        suggestions.append("Split long shots into 2-3 second segments with punch-ins or B-roll")

    score = _issue_score(issues)
    logger.info(
        f"Storyboard validation: {len(frames)} shots ({metrics['shotCountRequired']}), "
        f"{len(shot_types)} types, coverage {metrics.get('coverage', 'N/A')}, score {score}/100"
    )
    if issues:
        logger.warning(f"Storyboard issues: {'; '.join(issues)}")
    return ContentValidationResult(
        score=score, passed=not issues, issues=issues, suggestions=suggestions, metrics=metrics
    )
