"""Export script lines as SRT subtitles."""

from ..config import SRT_SECONDS_PER_LINE
from ..content.models import ContentOutput
from .base import DEFAULT_TITLE, BaseExporter


def format_srt_time(seconds: int) -> str:
    """Format whole seconds as an SRT timestamp (``HH:MM:SS,000``)."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},000"


class SRTExporter(BaseExporter):
    """Export the script as subtitles, giving each line a fixed time slot."""

    format_name = "SRT"
    file_extension = "srt"
    mime_type = "text/plain"
    filename_suffix = "_subtitles"

    def __init__(self, seconds_per_line: int = SRT_SECONDS_PER_LINE):
        self.seconds_per_line = seconds_per_line

    def export(self, output: ContentOutput, title: str = DEFAULT_TITLE) -> str:
        """Transform the script to SRT format."""
        output = self.coerce_output(output)
        blocks = []
        current_time = 0

        for index, line in enumerate(output.script, start=1):
            end_time = current_time + self.seconds_per_line
            blocks.append(
                f"{index}\n"
                f"{format_srt_time(current_time)} --> {format_srt_time(end_time)}\n"
                f"{line.text}\n\n"
            )
            current_time = end_time

        return "".join(blocks).strip()
