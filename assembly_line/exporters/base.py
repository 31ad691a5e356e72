"""Base exporter class for all content package exporters."""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..content.models import ContentOutput

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE | re.ASCII)

DEFAULT_TITLE = "Script"


class ExportError(Exception):
    """Raised when a content package cannot be exported."""

    pass


def sanitize_filename(name: str) -> str:
    """Replace every character that is not an ASCII letter or digit with ``_``."""
    return _UNSAFE_FILENAME_RE.sub("_", name).lower()


class BaseExporter(ABC):
    """Base class for all content package exporters."""

    format_name: str = "Unknown"
    file_extension: str = "txt"
    mime_type: str = "text/plain"
    filename_suffix: str = "_export"

    @abstractmethod
    def export(self, output: ContentOutput, title: str = DEFAULT_TITLE) -> str:
        """
        Transform a content package to export format string.

        Args:
            output: Generated content package
            title: Project title

        Returns:
            Formatted string content
        """
        pass

    def export_bytes(self, output: ContentOutput, title: str = DEFAULT_TITLE) -> bytes:
        """
        Export a content package as bytes.

        Returns:
            UTF-8 encoded bytes
        """
        content = self.export(output, title)
        return content.encode("utf-8")

    def get_filename(self, title: str = DEFAULT_TITLE) -> str:
        """
        Generate export filename.

        Args:
            title: Project title

        Returns:
            Sanitized title plus this format's suffix and extension
        """
        return f"{sanitize_filename(title)}{self.filename_suffix}.{self.file_extension}"

    @staticmethod
    def coerce_output(output: ContentOutput | Mapping[str, Any]) -> ContentOutput:
        """Accept a ContentOutput or its wire-format dict.

        Raises:
            ExportError: If the dict is not a valid content package
        """
        if isinstance(output, ContentOutput):
            return output
        try:
            return ContentOutput.model_validate(output)
        except ValidationError as e:
            logger.error(f"Invalid content package for export: {e}")
            raise ExportError(f"Invalid content package: {e}") from e
