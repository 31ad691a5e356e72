"""Tests for discovery progress helpers."""

import pytest

from assembly_line.discovery.progress import calculate_progress, should_show_gate


class TestCalculateProgress:
    @pytest.mark.parametrize(
        "answered,total,expected",
        [
            (3, 6, 50),
            (0, 6, 0),
            (6, 6, 100),
            (1, 3, 33),
            (2, 3, 67),
            (1, 6, 17),
        ],
    )
    def test_percentages(self, answered, total, expected):
        assert calculate_progress(answered, total) == expected

    def test_zero_total_is_zero(self):
        assert calculate_progress(0, 0) == 0
        assert calculate_progress(5, 0) == 0

    def test_halves_round_up(self):
        assert calculate_progress(1, 8) == 13
        assert calculate_progress(5, 8) == 63

    def test_clamped_to_range(self):
        assert calculate_progress(9, 6) == 100
        assert calculate_progress(-1, 6) == 0


class TestShouldShowGate:
    @pytest.mark.parametrize(
        "answered,total,expected",
        [
            (2, 6, False),
            (3, 6, True),
            (5, 6, True),
            (6, 6, False),
            (3, 3, False),
            (4, 5, True),
            (0, 0, False),
        ],
    )
    def test_gate(self, answered, total, expected):
        assert should_show_gate(answered, total) is expected
