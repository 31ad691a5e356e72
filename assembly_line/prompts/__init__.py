"""Prompt templates and builders for hook and content generation."""

from .builders import (
    build_chat_context,
    build_content_prompt,
    build_hook_prompt,
    build_library_hook_prompt,
    get_chat_system_instruction,
    get_content_generation_prompt,
)
from .hook_library import (
    HookAdaptationContext,
    HookTemplate,
    adapt_hook_template,
    generate_enhanced_hooks,
    get_all_categories,
    get_hook_pattern_summary,
    get_relevant_hook_patterns,
    get_templates_by_category,
    load_hook_database,
)
from .loader import PromptLoadError, clear_template_cache, load_template

__all__ = [
    "HookAdaptationContext",
    "HookTemplate",
    "PromptLoadError",
    "adapt_hook_template",
    "build_chat_context",
    "build_content_prompt",
    "build_hook_prompt",
    "build_library_hook_prompt",
    "clear_template_cache",
    "generate_enhanced_hooks",
    "get_all_categories",
    "get_chat_system_instruction",
    "get_content_generation_prompt",
    "get_hook_pattern_summary",
    "get_relevant_hook_patterns",
    "get_templates_by_category",
    "load_hook_database",
    "load_template",
]
