"""Centralized configuration for the Content Assembly Line.

This module provides a single source of truth for configuration constants
and feature flags, so that prompt selection and export behaviour are a
function of explicit configuration rather than of ambient process state.

Design Principles:
- Enums for type-safe status and option values
- Feature flags are an immutable object built once and passed around
- Nothing here reads the environment at import time
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from enum import Enum

logger = logging.getLogger(__name__)

# =============================================================================
# Enums for Type Safety
# =============================================================================


class ProjectStatus(Enum):
    """Lifecycle of a content project."""

    INPUTTING = "inputting"
    HOOK_SELECTION = "hook_selection"
    GENERATING = "generating"
    COMPLETE = "complete"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class Platform(Enum):
    """Publishing platforms the generated package can target."""

    TIKTOK = "tiktok"
    INSTAGRAM = "instagram"
    YOUTUBE_SHORTS = "youtube_shorts"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid platform values as strings."""
        return [platform.value for platform in cls]


class ContentGoal(Enum):
    """What the viewer should get out of the video."""

    EDUCATE = "educate"
    ENTERTAIN = "entertain"
    PROMOTE = "promote"
    INSPIRE = "inspire"
    INFORM = "inform"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid goal values as strings."""
        return [goal.value for goal in cls]


# =============================================================================
# Feature Flags
# =============================================================================

# Environment variable -> FeatureFlags field
FEATURE_FLAG_ENV_VARS: dict[str, str] = {
    "use_enhanced_cal_prompt": "ENHANCED_CAL",
}


@dataclass(frozen=True)
class FeatureFlags:
    """Feature flags for experimental behaviour and gradual rollouts.

    Attributes:
        use_enhanced_cal_prompt: Use the enhanced v2 content generation prompt
            instead of the legacy prompt (the safe fallback).
    """

    use_enhanced_cal_prompt: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FeatureFlags":
        """Create flags from environment variables.

        A flag is enabled only when its variable is exactly the string
        ``true``. Any other value, including ``TRUE`` or padded text, or no value
        leaves it disabled.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            FeatureFlags built from the environment
        """
        env = os.environ if environ is None else environ
        values = {name: env.get(var) == "true" for name, var in FEATURE_FLAG_ENV_VARS.items()}
        return cls(**values)

    def is_enabled(self, feature: str) -> bool:
        """Check whether a feature flag is enabled.

        Raises:
            KeyError: If the feature name is not a known flag
        """
        known = {f.name for f in fields(self)}
        if feature not in known:
            raise KeyError(f"Unknown feature flag: {feature}")
        return getattr(self, feature) is True

    def as_dict(self) -> dict[str, bool]:
        """Return all flags as a plain dict."""
        return asdict(self)

    def log_status(self, log: logging.Logger | None = None) -> None:
        """Log the status of every flag at INFO level."""
        log = log or logger
        log.info("Feature flag configuration:")
        for name, value in self.as_dict().items():
            log.info("  %s: %s", name, "ENABLED" if value else "DISABLED")


# =============================================================================
# Discovery Configuration
# =============================================================================

# Minimum answered questions before the "continue vs. generate now" gate
PROGRESSION_GATE_MIN_ANSWERS = 3

# Directory (relative to the working directory) for persisted discovery sessions
DEFAULT_SESSION_DIR = "sessions"


# =============================================================================
# Content Validation Configuration
# =============================================================================

# Expected spoken word count by requested duration
EXPECTED_WORDS_BY_DURATION: dict[str, int] = {
    "15s": 45,
    "30s": 90,
    "60s": 170,
    "90s": 240,
}

# Fallback when the duration is missing or not in the table
DEFAULT_EXPECTED_WORDS = 240

# Minimum score for a package to pass validation
VALIDATION_PASS_SCORE = 70

# Phrases that mark generic, low-effort scripts
GENERIC_PHRASES = [
    "in today's world",
    "have you ever wondered",
    "it's no secret",
    "the key to success",
    "as we all know",
]


# =============================================================================
# Export Configuration
# =============================================================================

# Seconds each script line occupies in SRT subtitles
SRT_SECONDS_PER_LINE = 3

# Maximum number of hashtags derived from B-roll keywords
MAX_EXPORT_HASHTAGS = 5

# Frame duration used in shot lists when a frame has none
DEFAULT_FRAME_DURATION = "3s"
