"""
Prompt loader for generation templates.

Templates live as ``<name>.txt`` files in the ``templates`` directory next to
this module. Loaded text is cached per name.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Global cache for loaded templates
_template_cache: dict[str, str] = {}


class PromptLoadError(Exception):
    """Exception raised when a prompt template cannot be loaded."""

    pass


def load_template(name: str, use_cache: bool = True) -> str:
    """
    Load a prompt template by name.

    Args:
        name: Template name without extension (e.g. 'hook_generation')
        use_cache: Whether to use cached templates (default: True)

    Returns:
        Template text with trailing whitespace removed

    Raises:
        PromptLoadError: If the template file cannot be found or read
    """
    if use_cache and name in _template_cache:
        logger.debug(f"Loading template '{name}' from cache")
        return _template_cache[name]

    template_file = TEMPLATES_DIR / f"{name}.txt"

    try:
        text = template_file.read_text(encoding="utf-8").rstrip()
    except FileNotFoundError:
        error_msg = f"Prompt template '{name}' not found. Expected file: {template_file}"
        logger.error(error_msg)
        raise PromptLoadError(error_msg) from None
    except OSError as e:
        error_msg = f"Error reading prompt template '{name}': {e}. File: {template_file}"
        logger.error(error_msg)
        raise PromptLoadError(error_msg) from e

    logger.debug(f"Loaded template '{name}' from {template_file}")
    _template_cache[name] = text
    return text


def clear_template_cache() -> None:
    """Clear the template cache."""
    _template_cache.clear()
