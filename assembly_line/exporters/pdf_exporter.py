"""
PDF shot list export using ReportLab.

Renders the storyboard as a production sheet: one table row per scene with
the visual description (plus matching B-roll), the script line spoken over
it, and its duration, followed by a technical specifications block.
"""

from __future__ import annotations

import io
import logging
from datetime import date
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)
from reportlab.platypus.flowables import HRFlowable

from ..config import DEFAULT_FRAME_DURATION
from ..content.models import ContentOutput
from .base import DEFAULT_TITLE, BaseExporter, ExportError

logger = logging.getLogger(__name__)

SHEET_TITLE = "C.A.L PRODUCTION SHEET"
TABLE_HEADERS = ["Scene #", "Visual / B-Roll Description", "Audio / Script", "Duration"]

HEADER_FILL = colors.Color(50 / 255, 50 / 255, 50 / 255)
MARGIN = 20 * mm
COLUMN_WIDTHS = [15 * mm, 55 * mm, 80 * mm, 20 * mm]


def _build_styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    custom: dict[str, ParagraphStyle] = {}

    custom["title"] = ParagraphStyle(
        "CalTitle",
        parent=base["Title"],
        fontName="Courier",
        fontSize=18,
        alignment=TA_CENTER,
        spaceAfter=6,
    )
    custom["project"] = ParagraphStyle(
        "CalProject",
        parent=base["Normal"],
        fontName="Courier",
        fontSize=14,
        leading=18,
        alignment=TA_CENTER,
        spaceAfter=4,
    )
    custom["meta"] = ParagraphStyle(
        "CalMeta",
        parent=base["Normal"],
        fontName="Courier",
        fontSize=10,
        alignment=TA_CENTER,
        spaceAfter=6,
    )
    custom["table_header"] = ParagraphStyle(
        "CalTableHeader",
        parent=base["Normal"],
        fontName="Helvetica-Bold",
        fontSize=9,
        textColor=colors.white,
    )
    custom["table_cell"] = ParagraphStyle(
        "CalTableCell",
        parent=base["Normal"],
        fontName="Helvetica",
        fontSize=8,
        leading=10,
    )
    custom["script_cell"] = ParagraphStyle(
        "CalScriptCell",
        parent=custom["table_cell"],
        fontName="Courier",
    )
    custom["h2"] = ParagraphStyle(
        "CalH2",
        parent=base["Heading2"],
        fontName="Helvetica-Bold",
        fontSize=12,
        spaceBefore=12,
        spaceAfter=6,
    )
    custom["spec"] = ParagraphStyle(
        "CalSpec",
        parent=base["Normal"],
        fontName="Courier",
        fontSize=9,
        leading=12,
    )
    return custom


def _markup(text: str) -> str:
    """Escape text for a Paragraph and keep its line breaks."""
    return escape(text).replace("\n", "<br/>")


def build_shot_list_rows(output: ContentOutput) -> list[list[str]]:
    """Scene rows for the shot list table, as plain text.

    Storyboard frame ``i`` is paired with script line ``i`` and B-roll item
    ``i`` when those exist.
    """
    rows = []
    for index, frame in enumerate(output.storyboard):
        script_line = output.script[index] if index < len(output.script) else None
        b_roll = output.b_roll[index] if index < len(output.b_roll) else None

        visual = frame.description
        if b_roll is not None:
            visual += f"\n\nB-Roll: {b_roll.description}"

        rows.append(
            [
                str(frame.frame_number or index + 1),
                visual,
                script_line.text if script_line else "",
                frame.duration or DEFAULT_FRAME_DURATION,
            ]
        )
    return rows


def build_tech_spec_lines(output: ContentOutput) -> list[str]:
    """``Label: value`` lines for the specs block, skipping empty values."""
    specs = output.tech_specs
    pairs = [
        ("Aspect Ratio:", specs.aspect_ratio),
        ("Resolution:", specs.resolution),
        ("Frame Rate:", specs.frame_rate),
        ("Duration:", specs.duration),
        ("Platforms:", ", ".join(specs.platforms) if specs.platforms else ""),
    ]
    return [f"{label} {value}" for label, value in pairs if value]


class PDFExporter(BaseExporter):
    """Export the storyboard as a printable PDF shot list."""

    format_name = "PDF"
    file_extension = "pdf"
    mime_type = "application/pdf"
    filename_suffix = "_shot_list"

    def export(self, output: ContentOutput, title: str = DEFAULT_TITLE) -> str:
        """PDF is binary; use :meth:`export_bytes`."""
        raise ExportError("PDF export produces binary content; use export_bytes()")

    def export_bytes(self, output: ContentOutput, title: str = DEFAULT_TITLE) -> bytes:
        """Render the shot list to PDF bytes.

        Raises:
            ExportError: If ReportLab fails to lay out the document
        """
        output = self.coerce_output(output)
        styles = _build_styles()

        story: list = [
            Paragraph(SHEET_TITLE, styles["title"]),
            Paragraph(_markup(title), styles["project"]),
            Paragraph(f"Generated: {date.today().isoformat()}", styles["meta"]),
            HRFlowable(width="100%", thickness=0.5, color=colors.black),
            Spacer(1, 8 * mm),
        ]

        table_data = [[Paragraph(h, styles["table_header"]) for h in TABLE_HEADERS]]
        for scene, visual, script, duration in build_shot_list_rows(output):
            table_data.append(
                [
                    Paragraph(_markup(scene), styles["table_cell"]),
                    Paragraph(_markup(visual), styles["table_cell"]),
                    Paragraph(_markup(script), styles["script_cell"]),
                    Paragraph(_markup(duration), styles["table_cell"]),
                ]
            )

        table = Table(table_data, colWidths=COLUMN_WIDTHS, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
                    ("GRID", (0, 0), (-1, -1), 0.1, colors.black),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("ALIGN", (0, 0), (0, -1), "CENTER"),
                    ("ALIGN", (3, 0), (3, -1), "CENTER"),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        story.append(table)

        spec_lines = build_tech_spec_lines(output)
        if spec_lines:
            story.append(Paragraph("TECHNICAL SPECIFICATIONS", styles["h2"]))
            story.extend(Paragraph(_markup(line), styles["spec"]) for line in spec_lines)

        buf = io.BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=A4,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title=f"{title} shot list",
        )
        try:
            doc.build(story)
        except Exception as e:
            logger.error(f"PDF shot list rendering failed: {e}")
            raise ExportError(f"Failed to render PDF shot list: {e}") from e

        pdf_bytes = buf.getvalue()
        logger.info(
            f"Rendered PDF shot list: {len(output.storyboard)} scenes, {len(pdf_bytes)} bytes"
        )
        return pdf_bytes
