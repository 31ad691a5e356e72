"""Platform rules for alternative post captions.

Each publishing platform has its own caption length, hashtag budget and
tone. These rules feed the caption section of the generation prompt and
the check run on the captions that come back.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from .models import AlternativeCaption

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformCaptionRules:
    """Caption limits and style guidance for one platform."""

    max_chars: int
    max_hashtags: int
    emoji_allowed: bool
    tone_guide: str
    hook_style: str
    cta_examples: tuple[str, ...]


PLATFORM_CAPTION_RULES: dict[str, PlatformCaptionRules] = {
    "tiktok": PlatformCaptionRules(
        max_chars=150,
        max_hashtags=5,
        emoji_allowed=True,
        tone_guide="Casual, punchy, trend-aware",
        hook_style="Question or bold statement",
        cta_examples=("Follow for more", "Save this", "Try it!"),
    ),
    "instagram": PlatformCaptionRules(
        max_chars=2200,
        max_hashtags=30,
        emoji_allowed=True,
        tone_guide="Story-driven, authentic, relatable",
        hook_style='First line must grab attention (before "...more")',
        cta_examples=(
            "Save for later",
            "Share with a friend who needs this",
            "Double tap if you agree",
        ),
    ),
    "youtube": PlatformCaptionRules(
        max_chars=200,
        max_hashtags=3,
        emoji_allowed=False,
        tone_guide="SEO-focused, descriptive, searchable",
        hook_style="Title-style with keywords",
        cta_examples=("Subscribe for more", "Like & Comment", "Watch the full video"),
    ),
    "twitter": PlatformCaptionRules(
        max_chars=280,
        max_hashtags=2,
        emoji_allowed=True,
        tone_guide="Ultra-concise, quotable, shareable",
        hook_style="Hot take or insight",
        cta_examples=("RT if you agree", "Quote tweet your take", "Thread below"),
    ),
    "linkedin": PlatformCaptionRules(
        max_chars=3000,
        max_hashtags=3,
        emoji_allowed=False,
        tone_guide="Professional, thought-leadership, insightful",
        hook_style="Pattern interrupt + professional hook",
        cta_examples=("Agree? Comment below", "Share your experience", "Follow for daily insights"),
    ),
}

# Platform values from inputs that share another platform's caption rules
PLATFORM_ALIASES = {"youtube_shorts": "youtube"}

# Used when the inputs name no platforms
DEFAULT_CAPTION_PLATFORMS = ["instagram", "tiktok"]

MIN_CAPTIONS_PER_PLATFORM = 4
MIN_HOOK_CHARS = 5


@dataclass
class CaptionValidationResult:
    valid: bool
    issues: list[str] = field(default_factory=list)


def _rules_key(platform: str) -> str:
    return PLATFORM_ALIASES.get(platform, platform)


def supported_platforms(platforms: Sequence[str]) -> list[str]:
    """Platforms that have caption rules, in the given order, aliases resolved."""
    return [
        _rules_key(platform)
        for platform in platforms
        if _rules_key(platform) in PLATFORM_CAPTION_RULES
    ]


def extract_platforms(inputs: BaseModel | Mapping[str, Any] | None) -> list[str]:
    """Lower-cased platform names from creator inputs.

    A list is used as given, a string is split on commas. Anything else falls
    back to Instagram and TikTok.
    """
    if isinstance(inputs, BaseModel):
        inputs = inputs.model_dump(mode="json")
    raw = (inputs or {}).get("platforms")

    if isinstance(raw, (list, tuple)):
        return [str(platform).lower() for platform in raw]
    if isinstance(raw, str):
        return [platform.strip().lower() for platform in raw.split(",")]
    return list(DEFAULT_CAPTION_PLATFORMS)


def build_caption_prompt_section(platforms: Sequence[str]) -> str:
    """Prompt section asking for caption variations per platform.

    Returns an empty string when none of the platforms has caption rules.
    """
    valid = supported_platforms(platforms)
    if not valid:
        return ""

    lines = [
        "6. ALTERNATIVE CAPTIONS (PLATFORM-SPECIFIC):",
        "",
        f"Generate 4-6 caption variations FOR EACH PLATFORM the user selected: {', '.join(valid)}",
        "",
        "PLATFORM BEST PRACTICES (RESEARCH-BACKED):",
    ]
    for platform in valid:
        rules = PLATFORM_CAPTION_RULES[platform]
        lines.extend(
            [
                "",
                f"{platform.upper()} Captions:",
                f"- Max length: {rules.max_chars} characters",
                f"- Hashtags: {rules.max_hashtags} max",
                f"- Emoji: {'Encouraged (1-3 max)' if rules.emoji_allowed else 'Avoid'}",
                f"- Tone: {rules.tone_guide}",
                f"- Hook style: {rules.hook_style}",
                f"- CTA examples: {', '.join(rules.cta_examples)}",
            ]
        )
    lines.extend(
        [
            "",
            "FOR EACH CAPTION, PROVIDE:",
            '- id: unique identifier (e.g., "tiktok-1")',
            "- platform: the platform name",
            "- caption: the full caption text including hashtags",
            "- hook: the opening line (first 50 chars)",
            "- body: the main content",
            "- cta: call to action (if applicable)",
            "- hashtags: array of hashtags used",
            "- characterCount: total characters",
            '- estimatedEngagement: "low" | "medium" | "high" | "viral"',
            "- researchSource: brief note on why this caption works",
        ]
    )
    return "\n".join(lines)


def validate_captions(
    captions: Sequence[AlternativeCaption | Mapping[str, Any]],
    platform: str,
) -> CaptionValidationResult:
    """Check one platform's captions against its limits.

    Raises:
        ValueError: If the platform has no caption rules
    """
    key = _rules_key(platform)
    if key not in PLATFORM_CAPTION_RULES:
        raise ValueError(
            f"No caption rules for platform: {platform}. "
            f"Available: {', '.join(PLATFORM_CAPTION_RULES)}"
        )
    rules = PLATFORM_CAPTION_RULES[key]
    parsed = [
        c if isinstance(c, AlternativeCaption) else AlternativeCaption.model_validate(c)
        for c in captions
    ]

    issues = []
    if len(parsed) < MIN_CAPTIONS_PER_PLATFORM:
        issues.append(
            f"Only {len(parsed)} captions generated, minimum is {MIN_CAPTIONS_PER_PLATFORM}"
        )
    for caption in parsed:
        if caption.character_count > rules.max_chars:
            issues.append(
                f'Caption "{caption.id}" exceeds {rules.max_chars} char limit '
                f"({caption.character_count})"
            )
        if len(caption.hashtags) > rules.max_hashtags:
            issues.append(
                f'Caption "{caption.id}" has {len(caption.hashtags)} hashtags, '
                f"max is {rules.max_hashtags}"
            )
        if not caption.hook or len(caption.hook) < MIN_HOOK_CHARS:
            issues.append(f'Caption "{caption.id}" missing proper hook')

    if issues:
        logger.warning(f"{key} captions failed {len(issues)} check(s)")
    return CaptionValidationResult(valid=not issues, issues=issues)
