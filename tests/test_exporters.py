"""Tests for content package exporters.

Covers:
- CSV rows and hashtags
- SRT timing blocks
- Markdown production sheet sections
- PDF shot list rows and rendering
- Registry lookup and filename sanitisation
"""

import csv
import io

import pytest

from assembly_line.exporters import (
    EXPORTERS,
    CSVExporter,
    ExportError,
    MarkdownExporter,
    PDFExporter,
    SRTExporter,
    format_srt_time,
    generate_hashtags,
    get_exporter,
    sanitize_filename,
)
from assembly_line.exporters.pdf_exporter import build_shot_list_rows, build_tech_spec_lines

EXPECTED_HASHTAGS = "#budgeting #cashenvelopes #personalfinance #groceries #savingmoney"


# =============================================================================
# Registry and filenames
# =============================================================================


class TestRegistry:
    @pytest.mark.parametrize("name", ["csv", "srt", "markdown", "pdf"])
    def test_get_exporter(self, name):
        assert isinstance(get_exporter(name), EXPORTERS[name])

    def test_lookup_is_case_insensitive(self):
        assert isinstance(get_exporter("CSV"), CSVExporter)

    def test_unknown_format_raises(self):
        with pytest.raises(ValueError, match="Unknown export format: docx"):
            get_exporter("docx")


class TestFilenames:
    def test_sanitize(self):
        assert sanitize_filename("My Video: Take 2!") == "my_video__take_2_"

    def test_non_ascii_replaced(self):
        assert sanitize_filename("Café") == "caf_"

    @pytest.mark.parametrize(
        "exporter,filename",
        [
            (CSVExporter(), "my_video__take_2__script.csv"),
            (SRTExporter(), "my_video__take_2__subtitles.srt"),
            (MarkdownExporter(), "my_video__take_2__production_sheet.md"),
            (PDFExporter(), "my_video__take_2__shot_list.pdf"),
        ],
    )
    def test_get_filename(self, exporter, filename):
        assert exporter.get_filename("My Video: Take 2!") == filename

    def test_default_title(self):
        assert CSVExporter().get_filename() == "script_script.csv"


# =============================================================================
# CSV
# =============================================================================


class TestCSVExporter:
    def test_hashtags_first_five_unique(self, sample_output):
        assert generate_hashtags(sample_output) == EXPECTED_HASHTAGS

    def test_no_keywords_no_hashtags(self, sample_output):
        assert generate_hashtags(sample_output.model_copy(update={"b_roll": []})) == ""

    def test_rows(self, sample_output):
        rows = list(csv.reader(io.StringIO(CSVExporter().export(sample_output))))

        assert rows[0] == ["LineNumber", "Speaker", "Text", "Timing", "Notes", "Hashtags"]
        assert len(rows) == 4
        assert rows[1] == [
            "1",
            "HOST",
            "Budgeting feels impossible until you try the envelope method.",
            "0:00-0:03",
            "Direct to camera",
            EXPECTED_HASHTAGS,
        ]
        assert rows[3][1:5] == [
            "",
            "Follow for part two, where I show my exact spreadsheet.",
            "",
            "",
        ]

    def test_commas_quoted(self, sample_output):
        content = CSVExporter().export(sample_output)
        assert '"Follow for part two, where I show my exact spreadsheet."' in content

    def test_accepts_wire_dict(self, sample_output_dict):
        assert CSVExporter().export(sample_output_dict).startswith("LineNumber,")

    def test_invalid_dict_raises(self):
        with pytest.raises(ExportError, match="Invalid content package"):
            CSVExporter().export({"script": []})

    def test_export_bytes_utf8(self, sample_output):
        data = CSVExporter().export_bytes(sample_output)
        assert data.decode("utf-8") == CSVExporter().export(sample_output)


# =============================================================================
# SRT
# =============================================================================


class TestSRTExporter:
    def test_format_time(self):
        assert format_srt_time(0) == "00:00:00,000"
        assert format_srt_time(3725) == "01:02:05,000"

    def test_export(self, sample_output):
        assert SRTExporter().export(sample_output) == (
            "1\n"
            "00:00:00,000 --> 00:00:03,000\n"
            "Budgeting feels impossible until you try the envelope method.\n"
            "\n"
            "2\n"
            "00:00:03,000 --> 00:00:06,000\n"
            "I cut my grocery bill by 30% in one month.\n"
            "\n"
            "3\n"
            "00:00:06,000 --> 00:00:09,000\n"
            "Follow for part two, where I show my exact spreadsheet."
        )

    def test_custom_slot_length(self, sample_output):
        content = SRTExporter(seconds_per_line=5).export(sample_output)
        assert "00:00:05,000 --> 00:00:10,000" in content

    def test_empty_script(self, sample_output):
        assert SRTExporter().export(sample_output.model_copy(update={"script": []})) == ""


# =============================================================================
# Markdown
# =============================================================================


class TestMarkdownExporter:
    def test_sections(self, sample_output):
        content = MarkdownExporter().export(sample_output, "Envelope Budgeting")

        assert content.startswith("# Envelope Budgeting\n")
        assert "## Script" in content
        assert "| # | Speaker | Text | Timing | Notes |" in content
        assert "### Frame 1: CLOSE-UP (3s)" in content
        assert "### Frame 2: B-ROLL\n" in content
        assert "- **Aspect Ratio:** 9:16" in content
        assert "- **Platforms:** tiktok, instagram" in content
        assert "## B-Roll" in content
        assert "## Captions" in content

    def test_empty_sections_omitted(self, sample_output):
        bare = sample_output.model_copy(update={"b_roll": [], "captions": []})

        content = MarkdownExporter().export(bare)

        assert "## B-Roll" not in content
        assert "## Captions" not in content
        assert "## Technical Specifications" in content

    def test_pipes_escaped(self, sample_output):
        line = sample_output.script[0].model_copy(update={"text": "this | that"})
        content = MarkdownExporter().export(sample_output.model_copy(update={"script": [line]}))
        assert "this \\| that" in content


# =============================================================================
# PDF
# =============================================================================


class TestPDFExporter:
    def test_shot_list_rows(self, sample_output):
        assert build_shot_list_rows(sample_output) == [
            [
                "1",
                "Host holding a stack of envelopes\n\nB-Roll: Cash sorted into labelled envelopes",
                "Budgeting feels impossible until you try the envelope method.",
                "3s",
            ],
            [
                "2",
                "Receipts on a kitchen table\n\nB-Roll: Grocery receipt close-up",
                "I cut my grocery bill by 30% in one month.",
                "3s",
            ],
        ]

    def test_rows_without_b_roll_or_script(self, sample_output):
        bare = sample_output.model_copy(update={"b_roll": [], "script": []})
        rows = build_shot_list_rows(bare)
        assert rows[1] == ["2", "Receipts on a kitchen table", "", "3s"]

    def test_tech_spec_lines(self, sample_output):
        assert build_tech_spec_lines(sample_output) == [
            "Aspect Ratio: 9:16",
            "Resolution: 1080x1920",
            "Frame Rate: 30fps",
            "Duration: 15s",
            "Platforms: tiktok, instagram",
        ]

    def test_export_bytes_is_pdf(self, sample_output):
        data = PDFExporter().export_bytes(sample_output, "Envelope <Budgeting> & more")
        assert data.startswith(b"%PDF")

    def test_text_export_unsupported(self, sample_output):
        with pytest.raises(ExportError):
            PDFExporter().export(sample_output)

    def test_invalid_dict_raises(self):
        with pytest.raises(ExportError):
            PDFExporter().export_bytes({"storyboard": "nope"})
