"""Export script lines to CSV format."""

import csv
import io

from ..config import MAX_EXPORT_HASHTAGS
from ..content.models import ContentOutput
from .base import DEFAULT_TITLE, BaseExporter


def generate_hashtags(output: ContentOutput) -> str:
    """Hashtags from the first unique B-roll keywords, whitespace removed."""
    keywords: list[str] = []
    for item in output.b_roll:
        if item.keywords:
            keywords.extend(item.keywords)

    unique_keywords = list(dict.fromkeys(keywords))[:MAX_EXPORT_HASHTAGS]
    return " ".join(f"#{''.join(keyword.split())}" for keyword in unique_keywords)


class CSVExporter(BaseExporter):
    """Export the script to CSV, one row per line.

    Suitable for spreadsheet review and teleprompter imports. Every row
    carries the package hashtags.
    """

    format_name = "CSV"
    file_extension = "csv"
    mime_type = "text/csv"
    filename_suffix = "_script"

    HEADERS = ["LineNumber", "Speaker", "Text", "Timing", "Notes", "Hashtags"]

    def export(self, output: ContentOutput, title: str = DEFAULT_TITLE) -> str:
        """Transform the script to CSV format."""
        output = self.coerce_output(output)
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(self.HEADERS)

        hashtags = generate_hashtags(output)
        for index, line in enumerate(output.script):
            writer.writerow(
                [
                    line.line_number or index + 1,
                    line.speaker or "",
                    line.text,
                    line.timing or "",
                    line.notes or "",
                    hashtags,
                ]
            )

        return buffer.getvalue()
