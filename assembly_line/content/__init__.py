"""Generated content package models and quality validation."""

from .captions import (
    PLATFORM_CAPTION_RULES,
    CaptionValidationResult,
    PlatformCaptionRules,
    build_caption_prompt_section,
    extract_platforms,
    validate_captions,
)
from .models import (
    AgentStatus,
    AlternativeCaption,
    BRollItem,
    Caption,
    ChatMessage,
    ContentOutput,
    Hook,
    Project,
    ScriptLine,
    StoryboardFrame,
    TechSpecs,
    UserInputs,
)
from .validator import (
    ContentValidationResult,
    ScriptRequirements,
    ShotCountRequirements,
    StoryboardRequirements,
    WordCountRequirements,
    calculate_shot_count,
    calculate_word_count,
    get_expected_beats,
    validate_content_output,
    validate_script,
    validate_storyboard,
)

__all__ = [
    "PLATFORM_CAPTION_RULES",
    "AgentStatus",
    "AlternativeCaption",
    "BRollItem",
    "Caption",
    "CaptionValidationResult",
    "ChatMessage",
    "ContentOutput",
    "ContentValidationResult",
    "Hook",
    "PlatformCaptionRules",
    "Project",
    "ScriptLine",
    "ScriptRequirements",
    "ShotCountRequirements",
    "StoryboardFrame",
    "StoryboardRequirements",
    "TechSpecs",
    "UserInputs",
    "WordCountRequirements",
    "build_caption_prompt_section",
    "calculate_shot_count",
    "calculate_word_count",
    "extract_platforms",
    "get_expected_beats",
    "validate_captions",
    "validate_content_output",
    "validate_script",
    "validate_storyboard",
]
