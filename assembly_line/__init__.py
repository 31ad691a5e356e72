"""Content Assembly Line: adaptive discovery and content packaging for short-form video."""

__version__ = "0.4.0"
