"""Export a content package to Markdown format."""

from ..content.models import ContentOutput
from .base import DEFAULT_TITLE, BaseExporter


def _cell(value: object) -> str:
    """Make a value safe for a Markdown table cell."""
    if value is None:
        return ""
    return str(value).replace("|", "\\|").replace("\n", " ")


class MarkdownExporter(BaseExporter):
    """Export the package as a human-readable production sheet.

    Sections: script table, storyboard, technical specifications, B-roll
    list and captions. Empty sections are omitted.
    """

    format_name = "Markdown"
    file_extension = "md"
    mime_type = "text/markdown"
    filename_suffix = "_production_sheet"

    def export(self, output: ContentOutput, title: str = DEFAULT_TITLE) -> str:
        """Transform the package to Markdown format."""
        output = self.coerce_output(output)
        lines = [f"# {title}\n"]

        if output.script:
            lines.append("## Script\n")
            lines.append("| # | Speaker | Text | Timing | Notes |")
            lines.append("|---|---------|------|--------|-------|")
            for index, line in enumerate(output.script):
                lines.append(
                    f"| {line.line_number or index + 1} | {_cell(line.speaker)} | "
                    f"{_cell(line.text)} | {_cell(line.timing)} | {_cell(line.notes)} |"
                )
            lines.append("")

        if output.storyboard:
            lines.append("## Storyboard\n")
            for index, frame in enumerate(output.storyboard):
                duration = f" ({frame.duration})" if frame.duration else ""
                lines.append(
                    f"### Frame {frame.frame_number or index + 1}: {frame.shot_type}{duration}\n"
                )
                lines.append(frame.description)
                if frame.visual_notes:
                    lines.append(f"\n*Visual notes:* {frame.visual_notes}")
                lines.append("")

        lines.extend(self._format_tech_specs(output))

        if output.b_roll:
            lines.append("## B-Roll\n")
            for item in output.b_roll:
                when = f" @ {item.timestamp}" if item.timestamp else ""
                lines.append(f"- **{item.description}** ({item.source}){when}")
                if item.keywords:
                    lines.append(f"  - Keywords: {', '.join(item.keywords)}")
            lines.append("")

        if output.captions:
            lines.append("## Captions\n")
            for caption in output.captions:
                style = f" _{caption.style}_" if caption.style else ""
                lines.append(f"- `{caption.timestamp}` {caption.text}{style}")
            lines.append("")

        return "\n".join(lines)

    def _format_tech_specs(self, output: ContentOutput) -> list[str]:
        """Format technical specifications as a bullet list."""
        specs = output.tech_specs
        rows = [
            ("Aspect Ratio", specs.aspect_ratio),
            ("Resolution", specs.resolution),
            ("Frame Rate", specs.frame_rate),
            ("Duration", specs.duration),
            ("Audio Format", specs.audio_format),
            ("Export Format", specs.export_format),
            ("Platforms", ", ".join(specs.platforms) if specs.platforms else None),
        ]
        lines = ["## Technical Specifications\n"]
        lines.extend(f"- **{label}:** {value}" for label, value in rows if value)
        lines.append("")
        return lines
