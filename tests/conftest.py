"""Shared test fixtures and helpers.

Centralizes sample content packages used by the validator and exporter tests.
"""

import logging

import pytest

from assembly_line.content.models import ContentOutput

# ---------------------------------------------------------------------------
# Sample content package
# ---------------------------------------------------------------------------

_SAMPLE_OUTPUT = {
    "script": [
        {
            "lineNumber": 1,
            "speaker": "HOST",
            "text": "Budgeting feels impossible until you try the envelope method.",
            "timing": "0:00-0:03",
            "notes": "Direct to camera",
        },
        {
            "lineNumber": 2,
            "speaker": "HOST",
            "text": "I cut my grocery bill by 30% in one month.",
            "timing": "0:03-0:06",
        },
        {
            "lineNumber": 3,
            "text": "Follow for part two, where I show my exact spreadsheet.",
        },
    ],
    "storyboard": [
        {
            "frameNumber": 1,
            "shotType": "CLOSE-UP",
            "description": "Host holding a stack of envelopes",
            "visualNotes": "Quick push-in",
            "duration": "3s",
        },
        {
            "frameNumber": 2,
            "shotType": "B-ROLL",
            "description": "Receipts on a kitchen table",
        },
    ],
    "techSpecs": {
        "aspectRatio": "9:16",
        "resolution": "1080x1920",
        "frameRate": "30fps",
        "duration": "15s",
        "audioFormat": "AAC 128kbps stereo",
        "exportFormat": "MP4 H.264",
        "platforms": ["tiktok", "instagram"],
    },
    "bRoll": [
        {
            "id": "b1",
            "description": "Cash sorted into labelled envelopes",
            "source": "User footage",
            "timestamp": "0:01",
            "keywords": ["budgeting", "cash envelopes", "personal finance"],
        },
        {
            "id": "b2",
            "description": "Grocery receipt close-up",
            "source": "Stock footage",
            "keywords": ["budgeting", "groceries", "saving money", "receipts"],
        },
    ],
    "captions": [
        {"id": "c1", "timestamp": "0:00", "text": "Budgeting made simple", "style": "emphasis"},
        {"id": "c2", "timestamp": "0:03", "text": "30% saved"},
    ],
}


@pytest.fixture
def sample_output_dict():
    """Wire-format (camelCase) content package."""
    return {
        key: [dict(item) for item in value] if isinstance(value, list) else dict(value)
        for key, value in _SAMPLE_OUTPUT.items()
    }


@pytest.fixture
def sample_output(sample_output_dict):
    """Parsed ContentOutput."""
    return ContentOutput.model_validate(sample_output_dict)


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    app_level = logging.getLogger("assembly_line").level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("assembly_line").setLevel(app_level)
