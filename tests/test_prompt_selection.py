"""Tests for prompt templates, flag-driven selection and prompt builders."""

import json

import pytest

from assembly_line.config import FeatureFlags
from assembly_line.content.models import Hook, UserInputs
from assembly_line.discovery.inputs import DiscoveryInputs
from assembly_line.prompts.hook_library import HookTemplate
from assembly_line.prompts import (
    PromptLoadError,
    build_chat_context,
    build_content_prompt,
    build_hook_prompt,
    build_library_hook_prompt,
    clear_template_cache,
    get_chat_system_instruction,
    get_content_generation_prompt,
    load_template,
)

SAMPLE_HOOK = {
    "id": "hook-1",
    "type": "QUESTION",
    "text": "Why is your grocery bill so high?",
    "preview": "Opens a curiosity gap",
    "rank": 1,
    "isRecommended": True,
}


# =============================================================================
# Template loading
# =============================================================================


class TestLoadTemplate:
    def test_loads_and_caches(self):
        clear_template_cache()
        first = load_template("hook_generation")
        assert first is load_template("hook_generation")

    def test_missing_template_raises(self):
        with pytest.raises(PromptLoadError, match="not found"):
            load_template("does_not_exist")

    def test_chat_instruction_requests_json(self):
        assert "readyForHooks" in get_chat_system_instruction()


# =============================================================================
# Selection
# =============================================================================


class TestContentPromptSelection:
    def test_legacy_by_default(self):
        prompt = get_content_generation_prompt()
        assert prompt.startswith("Generate a complete content package")
        assert "v2.0" not in prompt

    def test_legacy_when_flag_off(self):
        assert get_content_generation_prompt(FeatureFlags()) == get_content_generation_prompt()

    def test_enhanced_when_flag_on(self):
        prompt = get_content_generation_prompt(FeatureFlags(use_enhanced_cal_prompt=True))
        assert prompt.startswith("C.A.L. (CONTENT ASSEMBLY LINE) v2.0")

    def test_both_prompts_define_output_format(self):
        for flags in (FeatureFlags(), FeatureFlags(use_enhanced_cal_prompt=True)):
            prompt = get_content_generation_prompt(flags)
            assert '"techSpecs"' in prompt
            assert '"bRoll"' in prompt

    def test_selection_ignores_environment(self, monkeypatch):
        monkeypatch.setenv("ENHANCED_CAL", "true")
        assert "v2.0" not in get_content_generation_prompt(FeatureFlags())


# =============================================================================
# Builders
# =============================================================================


class TestBuildChatContext:
    def test_format(self):
        context = build_chat_context("make it punchy", {"topic": "AI"})
        assert context == 'Current gathered inputs: {"topic":"AI"}\n\nUser message: make it punchy'

    def test_discovery_inputs_serialised_camel_case(self):
        inputs = DiscoveryInputs(target_audience="nurses")
        context = build_chat_context("hi", inputs)
        payload = context.split("\n\n")[0].removeprefix("Current gathered inputs: ")
        assert json.loads(payload) == {"targetAudience": "nurses"}

    def test_no_inputs(self):
        assert build_chat_context("hi").startswith("Current gathered inputs: {}")


class TestBuildHookPrompt:
    def test_fallbacks_for_missing_inputs(self):
        prompt = build_hook_prompt({})

        assert "- Topic: Not specified" in prompt
        assert "- Goal: Not specified" in prompt
        assert "- Platforms: Not specified" in prompt
        assert "- Target Audience: General audience" in prompt
        assert "- Tone: Engaging and professional" in prompt
        assert "- Duration: 30-60 seconds" in prompt

    def test_ends_with_ranking_instruction(self):
        prompt = build_hook_prompt(UserInputs(topic="AI"))
        assert prompt.endswith(
            "Generate 6 hooks with unique ranks (1-6, where 1 is best). "
            "The rank=1 hook should have isRecommended=true:"
        )

    def test_user_inputs_rendered(self):
        inputs = UserInputs(
            topic="Meal prep",
            goal="educate",
            platforms=["tiktok", "instagram"],
            target_audience="busy parents",
            duration="30s",
        )

        prompt = build_hook_prompt(inputs)

        assert "- Topic: Meal prep" in prompt
        assert "- Goal: educate" in prompt
        assert "- Platforms: tiktok, instagram" in prompt
        assert "- Target Audience: busy parents" in prompt
        assert "- Duration: 30s" in prompt

    def test_hook_templates_capped_at_five(self):
        templates = [f"Template {i}" for i in range(8)]

        prompt = build_hook_prompt({}, templates)

        assert '- "Template 4"' in prompt
        assert '- "Template 5"' not in prompt

    def test_no_template_block_without_templates(self):
        assert "HOOK TEMPLATES" not in build_hook_prompt({})

    def test_pattern_summary_section(self):
        prompt = build_hook_prompt({}, hook_patterns="**LIST:**\n- \"3 tips\"")

        assert "PROVEN VIRAL HOOK PATTERNS FOR THIS NICHE:\n**LIST:**\n- \"3 tips\"" in prompt
        assert prompt.index("PROVEN VIRAL") < prompt.index("Content Details:")


class TestBuildLibraryHookPrompt:
    def test_seeded_from_library(self):
        library = [
            HookTemplate(f"Plain {i} (insert topic)", "CURIOSITY") for i in range(6)
        ] + [HookTemplate("Budget (insert topic) for parents", "PAIN POINT")]

        prompt = build_library_hook_prompt(
            UserInputs(topic="Budget", target_audience="parents"), templates=library
        )

        assert "PROVEN VIRAL HOOK PATTERNS FOR THIS NICHE:\n**PAIN POINT:**" in prompt
        assert '- "Budget (insert topic) for parents"' in prompt
        assert '- "Plain 3 (insert topic)"' in prompt
        assert '- "Plain 4 (insert topic)"' not in prompt.split("HIGH-PERFORMING")[1]
        assert "- Topic: Budget" in prompt

    def test_uses_packaged_library(self):
        prompt = build_library_hook_prompt({"topic": "meal prep"})
        assert "HIGH-PERFORMING HOOK TEMPLATES" in prompt


class TestBuildContentPrompt:
    def test_includes_selected_hook(self):
        prompt = build_content_prompt({"topic": "Groceries"}, SAMPLE_HOOK)

        assert "Selected Hook:\n- Type: QUESTION\n" in prompt
        assert '- Text: "Why is your grocery bill so high?"' in prompt
        assert "- Preview: Opens a curiosity gap" in prompt
        assert prompt.endswith(
            "Generate the complete content package now, starting with this hook:"
        )

    def test_accepts_hook_model(self):
        prompt = build_content_prompt(UserInputs(), Hook.model_validate(SAMPLE_HOOK))
        assert "- Topic: Not specified" in prompt

    def test_flag_selects_base_prompt(self):
        legacy = build_content_prompt({}, SAMPLE_HOOK)
        enhanced = build_content_prompt(
            {}, SAMPLE_HOOK, FeatureFlags(use_enhanced_cal_prompt=True)
        )

        assert legacy.startswith("Generate a complete content package")
        assert enhanced.startswith("C.A.L. (CONTENT ASSEMBLY LINE) v2.0")

    def test_alternative_captions_opt_in(self):
        inputs = UserInputs(platforms=["tiktok", "youtube_shorts"])

        plain = build_content_prompt(inputs, SAMPLE_HOOK)
        with_captions = build_content_prompt(
            inputs, SAMPLE_HOOK, include_alternative_captions=True
        )

        assert "ALTERNATIVE CAPTIONS" not in plain
        assert "6. ALTERNATIVE CAPTIONS (PLATFORM-SPECIFIC):" in with_captions
        assert "YOUTUBE Captions:" in with_captions
        assert with_captions.endswith(
            "Generate the complete content package now, starting with this hook:"
        )

    def test_alternative_captions_default_platforms(self):
        prompt = build_content_prompt({}, SAMPLE_HOOK, include_alternative_captions=True)

        assert "INSTAGRAM Captions:" in prompt
        assert "TIKTOK Captions:" in prompt
