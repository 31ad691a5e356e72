"""Prompt assembly for the generation backend.

Selection between the legacy and enhanced content prompts is a pure function
of a FeatureFlags object. Nothing here reads the environment or calls a model;
callers send the returned text themselves.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from ..config import FeatureFlags
from ..content.captions import build_caption_prompt_section, extract_platforms
from ..content.models import Hook
from .hook_library import HookTemplate, get_hook_pattern_summary, get_relevant_hook_patterns
from .loader import load_template

logger = logging.getLogger(__name__)

MAX_HOOK_TEMPLATES = 5

NOT_SPECIFIED = "Not specified"
DEFAULT_AUDIENCE = "General audience"
DEFAULT_TONE = "Engaging and professional"
DEFAULT_DURATION = "30-60 seconds"


def _wire_dict(inputs: BaseModel | Mapping[str, Any] | None) -> dict[str, Any]:
    """Inputs as a camelCase dict of set values."""
    if inputs is None:
        return {}
    if isinstance(inputs, BaseModel):
        return inputs.model_dump(by_alias=True, exclude_none=True, mode="json")
    return dict(inputs)


def _content_details(inputs: BaseModel | Mapping[str, Any] | None) -> str:
    data = _wire_dict(inputs)
    platforms = data.get("platforms")
    platforms_text = (
        ", ".join(str(p) for p in platforms) if isinstance(platforms, list) else NOT_SPECIFIED
    )
    lines = [
        "Content Details:",
        f"- Topic: {data.get('topic') or NOT_SPECIFIED}",
        f"- Goal: {data.get('goal') or NOT_SPECIFIED}",
        f"- Platforms: {platforms_text}",
        f"- Target Audience: {data.get('targetAudience') or DEFAULT_AUDIENCE}",
        f"- Tone: {data.get('tone') or DEFAULT_TONE}",
        f"- Duration: {data.get('duration') or DEFAULT_DURATION}",
    ]
    return "\n".join(lines)


def get_chat_system_instruction() -> str:
    """System instruction for the discovery chat model."""
    return load_template("chat_system")


def get_content_generation_prompt(flags: FeatureFlags | None = None) -> str:
    """Content generation prompt selected by feature flags.

    Args:
        flags: Feature flags; defaults to all flags off (legacy prompt)

    Returns:
        The enhanced v2 prompt when ``use_enhanced_cal_prompt`` is set,
        otherwise the legacy prompt
    """
    flags = flags or FeatureFlags()
    name = "content_generation_v2" if flags.use_enhanced_cal_prompt else "content_generation"
    return f"{load_template(name)}\n\n{load_template('content_output_format')}"


def build_chat_context(
    user_message: str,
    current_inputs: BaseModel | Mapping[str, Any] | None = None,
) -> str:
    """Wrap a chat message with the inputs gathered so far."""
    inputs_json = json.dumps(_wire_dict(current_inputs), separators=(",", ":"))
    return f"Current gathered inputs: {inputs_json}\n\nUser message: {user_message}"


def build_hook_prompt(
    inputs: BaseModel | Mapping[str, Any] | None,
    hook_templates: Sequence[str] | None = None,
    hook_patterns: str | None = None,
) -> str:
    """Prompt asking for six ranked hooks.

    Args:
        inputs: Creator inputs
        hook_templates: Optional proven hook templates for this niche; the
            first five are included as inspiration
        hook_patterns: Optional summary of proven patterns by category, as
            returned by ``get_hook_pattern_summary``

    Returns:
        Prompt text
    """
    sections = [load_template("hook_generation")]

    if hook_patterns:
        sections.append(f"PROVEN VIRAL HOOK PATTERNS FOR THIS NICHE:\n{hook_patterns}")

    if hook_templates:
        examples = "\n".join(f'- "{t}"' for t in list(hook_templates)[:MAX_HOOK_TEMPLATES])
        sections.append(
            "HIGH-PERFORMING HOOK TEMPLATES TO DRAW INSPIRATION FROM:\n"
            f"{examples}\n\n"
            "Adapt the templates to the specific topic while keeping the psychological "
            "hooks that made them successful."
        )

    sections.append(_content_details(inputs))
    sections.append(
        "Generate 6 hooks with unique ranks (1-6, where 1 is best). "
        "The rank=1 hook should have isRecommended=true:"
    )
    return "\n\n".join(sections)


def build_library_hook_prompt(
    inputs: BaseModel | Mapping[str, Any] | None,
    templates: list[HookTemplate] | None = None,
) -> str:
    """Hook prompt seeded from the hook library for the creator's niche.

    The niche is the topic, audience and goal joined with spaces. The prompt
    carries the pattern summary for that niche and its five best templates.

    Raises:
        PromptLoadError: If the hook database cannot be read
    """
    data = _wire_dict(inputs)
    niche = " ".join(
        str(data.get(key) or "") for key in ("topic", "targetAudience", "goal")
    ).strip()
    relevant = get_relevant_hook_patterns(niche, 10, templates)
    logger.debug(f"Seeding hook prompt with {len(relevant)} templates for niche '{niche}'")
    return build_hook_prompt(
        inputs,
        hook_templates=[hook.template for hook in relevant],
        hook_patterns=get_hook_pattern_summary(niche, templates),
    )


def build_content_prompt(
    inputs: BaseModel | Mapping[str, Any] | None,
    hook: Hook | Mapping[str, Any],
    flags: FeatureFlags | None = None,
    include_alternative_captions: bool = False,
) -> str:
    """Prompt asking for the full content package built on the selected hook.

    With ``include_alternative_captions``, a section asking for post captions
    per selected platform is added when any platform has caption rules.
    """
    if not isinstance(hook, Hook):
        hook = Hook.model_validate(hook)

    flags = flags or FeatureFlags()
    logger.debug(
        "Building content prompt (%s)",
        "enhanced" if flags.use_enhanced_cal_prompt else "legacy",
    )

    selected_hook = "\n".join(
        [
            "Selected Hook:",
            f"- Type: {hook.type}",
            f'- Text: "{hook.text}"',
            f"- Preview: {hook.preview}",
        ]
    )
    sections = [get_content_generation_prompt(flags), _content_details(inputs), selected_hook]
    if include_alternative_captions:
        caption_section = build_caption_prompt_section(extract_platforms(_wire_dict(inputs)))
        if caption_section:
            sections.append(caption_section)
    sections.append("Generate the complete content package now, starting with this hook:")
    return "\n\n".join(sections)
