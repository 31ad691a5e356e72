"""Tests for input entropy diagnosis.

Covers:
- Feature extraction (word/sentence counts, keyword and regex markers)
- Priority-ordered classification into the four entropy levels
- Per-level detail narrowing, confidence and question budget
- Known fields feeding detection without being mutated
- Serialisation round trip used by session persistence
"""

import dataclasses
import logging

import pytest

from assembly_line.discovery.entropy import (
    DetectedDetails,
    EntropyLevel,
    InputDiagnosis,
    diagnose,
    extract_features,
)
from assembly_line.discovery.inputs import DiscoveryInputs

ARCHITECTED_PITCH = (
    "First, I'll hook them, then explain the problem, then reveal my method to "
    "entrepreneurs in under 3 minutes, finally give a clear call to action. My audience "
    "is bootstrapped founders and the goal is to get them to try my tool."
)
INTUITIVE_PITCH = (
    "I teach people how to save money on groceries. Most families overspend every week. "
    "My tips cut bills in half."
)
UNSTRUCTURED_PITCH = "A quick video about budgeting apps for college students on a tight budget"


# =============================================================================
# Feature extraction
# =============================================================================


class TestExtractFeatures:
    """Raw detection markers."""

    def test_empty_input_has_no_features(self):
        features = extract_features("")
        assert features.word_count == 0
        assert features.sentence_count == 0
        assert features.element_count == 0

    def test_word_count_ignores_extra_whitespace(self):
        features = extract_features("  one   two\tthree\n four  ")
        assert features.word_count == 4

    def test_sentence_count_skips_empty_segments(self):
        features = extract_features("Hi!!! What... Really?  ")
        assert features.sentence_count == 3

    def test_topic_needs_three_words(self):
        assert extract_features("two words").has_topic is False
        assert extract_features("three whole words").has_topic is True

    def test_known_topic_counts_as_topic(self):
        assert extract_features("AI", {"topic": "AI tools"}).has_topic is True

    def test_audience_keyword_is_substring_match(self):
        assert extract_features("peoples").has_audience is True

    def test_audience_regex(self):
        assert extract_features("a guide for nurses").has_audience is True

    def test_goal_regex(self):
        assert extract_features("do it in order to win").has_goal is True

    def test_structure_keyword_matches_inside_words(self):
        # "then" occurs inside "strengthen"
        assert extract_features("strengthen your core").has_structure is True
        assert extract_features("quiet voice").has_structure is False

    def test_structure_regex_requires_word_boundary(self):
        assert extract_features("the conclusion matters").has_structure is True
        assert extract_features("hooked on phonics").has_structure is False

    def test_regex_word_characters_are_ascii(self):
        # an accented word after "for" is not an audience
        assert extract_features("tips for émigrés").has_audience is False
        # "é" is not a word character, so a boundary precedes "hook"
        assert extract_features("crochéhook").has_structure is True

    def test_context_from_three_sentences(self):
        assert extract_features("One. Two. Three.").has_context is True

    def test_context_from_more_than_twenty_words(self):
        text = " ".join(["word"] * 21)
        assert extract_features(text).has_context is True
        assert extract_features(" ".join(["word"] * 20)).has_context is False

    def test_case_insensitive(self):
        assert extract_features("FOR DEVELOPERS").has_audience is True

    def test_blank_known_field_is_absent(self):
        features = extract_features("AI", {"topic": "   ", "targetAudience": ""})
        assert features.has_topic is False
        assert features.has_audience is False


# =============================================================================
# Classification
# =============================================================================


class TestDiagnoseLevels:
    """Priority-ordered classification."""

    def test_structured_pitch_is_architected(self):
        diagnosis = diagnose(ARCHITECTED_PITCH, {})

        assert diagnosis.level is EntropyLevel.ARCHITECTED
        assert diagnosis.recommended_questions == 2
        assert diagnosis.confidence == 0.95
        assert diagnosis.has_details == DetectedDetails(
            topic=True, audience=True, goal=True, context=True, structure=True
        )

    def test_natural_pitch_is_intuitive(self):
        diagnosis = diagnose(INTUITIVE_PITCH)

        assert diagnosis.level is EntropyLevel.INTUITIVE
        assert diagnosis.recommended_questions == 3
        assert diagnosis.confidence == 0.80
        assert diagnosis.has_details == DetectedDetails(
            topic=True, audience=True, goal=True, context=True, structure=False
        )

    def test_loose_pitch_is_unstructured(self):
        diagnosis = diagnose(UNSTRUCTURED_PITCH)

        assert diagnosis.level is EntropyLevel.UNSTRUCTURED
        assert diagnosis.recommended_questions == 5
        assert diagnosis.confidence == 0.70
        assert diagnosis.has_details == DetectedDetails(
            topic=True, audience=True, goal=False, context=False, structure=False
        )

    def test_single_word_is_cold(self):
        diagnosis = diagnose("AI", {})

        assert diagnosis.level is EntropyLevel.COLD
        assert diagnosis.recommended_questions == 6
        assert diagnosis.confidence == 0.90
        assert diagnosis.has_details == DetectedDetails(
            topic=False, audience=False, goal=False, context=False, structure=False
        )

    def test_short_input_with_signals_stays_cold(self):
        """Seven words fail every word-count gate despite audience and goal signals."""
        text = "I want to help developers learn faster"
        features = extract_features(text)
        assert features.word_count == 7
        assert features.has_audience and features.has_goal

        diagnosis = diagnose(text, {})

        assert diagnosis.level is EntropyLevel.COLD
        assert diagnosis.has_details.topic is True
        assert diagnosis.has_details.audience is False
        assert diagnosis.has_details.goal is False

    def test_empty_input_is_cold(self):
        diagnosis = diagnose("")
        assert diagnosis.level is EntropyLevel.COLD
        assert diagnosis.has_details.topic is False
        assert diagnosis.recommended_questions == 6

    def test_architected_needs_more_than_forty_words(self):
        words = ARCHITECTED_PITCH.split()
        assert len(words) == 41
        shortened = " ".join(words[:-1])

        assert diagnose(shortened).level is EntropyLevel.INTUITIVE

    @pytest.mark.parametrize(
        "text",
        ["", "AI", "x " * 500, "?!.", ARCHITECTED_PITCH, "\n\t  \n", "émigré café naïve"],
    )
    def test_every_input_yields_one_level_with_matching_budget(self, text):
        budgets = {
            EntropyLevel.COLD: 6,
            EntropyLevel.UNSTRUCTURED: 5,
            EntropyLevel.INTUITIVE: 3,
            EntropyLevel.ARCHITECTED: 2,
        }
        diagnosis = diagnose(text)
        assert diagnosis.recommended_questions == budgets[diagnosis.level]


class TestDetailNarrowing:
    """Each level reports a fixed subset of details regardless of raw features."""

    def test_intuitive_reports_no_structure_even_when_detected(self):
        text = (
            "First we cover the problem, then the fix. I help people sleep better. "
            "Short and practical."
        )
        assert extract_features(text).has_structure is True

        diagnosis = diagnose(text)

        assert diagnosis.level is EntropyLevel.INTUITIVE
        assert diagnosis.has_details.structure is False

    def test_unstructured_reports_no_context_even_when_detected(self):
        text = "Coffee. Brewing tips. Better mornings for everyone every day."
        assert extract_features(text).has_context is True

        diagnosis = diagnose(text)

        assert diagnosis.level is EntropyLevel.UNSTRUCTURED
        assert diagnosis.has_details.context is False

    def test_cold_reports_no_audience_even_when_known(self):
        known = {"topic": "AI", "targetAudience": "devs", "goal": "learn"}

        diagnosis = diagnose("", known)

        assert diagnosis.level is EntropyLevel.COLD
        assert diagnosis.has_details.topic is True
        assert diagnosis.has_details.audience is False
        assert diagnosis.has_details.goal is False


# =============================================================================
# Purity
# =============================================================================


class TestDiagnosePurity:
    def test_idempotent(self):
        assert diagnose(INTUITIVE_PITCH, {"goal": "x"}) == diagnose(INTUITIVE_PITCH, {"goal": "x"})

    def test_returns_fresh_immutable_value(self):
        first = diagnose("AI")
        second = diagnose("AI")
        assert first is not second
        with pytest.raises(dataclasses.FrozenInstanceError):
            first.level = EntropyLevel.ARCHITECTED

    def test_known_fields_not_mutated(self):
        known = {"topic": "AI", "platforms": ["tiktok"]}
        diagnose(ARCHITECTED_PITCH, known)
        assert known == {"topic": "AI", "platforms": ["tiktok"]}

    def test_accepts_discovery_inputs(self):
        inputs = DiscoveryInputs(target_audience="nurses")
        assert extract_features("x", inputs).has_audience is True

    def test_logs_level_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="assembly_line.discovery.entropy"):
            diagnose("AI")
        assert "Diagnosed input as COLD" in caplog.text


class TestDiagnosisSerialisation:
    def test_to_dict_uses_camel_case_keys(self):
        data = diagnose(ARCHITECTED_PITCH).to_dict()
        assert data["level"] == "ARCHITECTED"
        assert data["recommendedQuestions"] == 2
        assert data["hasDetails"]["structure"] is True

    def test_from_dict_restores_diagnosis(self):
        diagnosis = diagnose(UNSTRUCTURED_PITCH)
        assert InputDiagnosis.from_dict(diagnosis.to_dict()) == diagnosis
