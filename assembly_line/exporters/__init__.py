"""Content package exporters for production tools."""

from .base import BaseExporter, ExportError, sanitize_filename
from .csv_exporter import CSVExporter, generate_hashtags
from .markdown_exporter import MarkdownExporter
from .pdf_exporter import PDFExporter
from .srt_exporter import SRTExporter, format_srt_time

__all__ = [
    # Base
    "BaseExporter",
    "ExportError",
    "sanitize_filename",
    # Exporters
    "CSVExporter",
    "MarkdownExporter",
    "PDFExporter",
    "SRTExporter",
    # Helpers
    "format_srt_time",
    "generate_hashtags",
    # Registry
    "EXPORTERS",
    "get_exporter",
]

# Registry of available exporters
EXPORTERS = {
    "csv": CSVExporter,
    "srt": SRTExporter,
    "markdown": MarkdownExporter,
    "pdf": PDFExporter,
}


def get_exporter(format_name: str) -> BaseExporter:
    """
    Get an exporter instance by format name.

    Args:
        format_name: One of 'csv', 'srt', 'markdown', 'pdf'

    Returns:
        Exporter instance

    Raises:
        ValueError: If format_name is not recognized
    """
    format_lower = format_name.lower()
    if format_lower not in EXPORTERS:
        available = ", ".join(EXPORTERS.keys())
        raise ValueError(f"Unknown export format: {format_name}. Available: {available}")

    return EXPORTERS[format_lower]()
