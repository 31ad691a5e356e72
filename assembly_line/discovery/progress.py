"""Progress helpers for the discovery question flow."""

import math

from ..config import PROGRESSION_GATE_MIN_ANSWERS


def calculate_progress(answered: int, total: int) -> int:
    """Percentage of questions answered, as an integer in [0, 100].

    Halves round up (``calculate_progress(1, 8) == 13``). Returns 0 when
    there are no questions.
    """
    if total == 0:
        return 0
    percent = math.floor(answered / total * 100 + 0.5)
    return max(0, min(100, percent))


def should_show_gate(answered: int, total: int) -> bool:
    """Whether to offer the "continue answering vs. generate now" choice.

    Shown once enough questions are answered, and only while some remain.
    """
    return answered >= PROGRESSION_GATE_MIN_ANSWERS and answered < total
