"""Exceptions raised by mdt-term.

Hierarchy::

    MdtError
    ├── RenderIOError        writing to the output sink failed
    ├── UnmappedColorError   quantized palette has no entry for a color
    └── ConfigError          settings file or values are invalid

Malformed tables are not errors: the renderer logs a warning and draws the
columns it knows about.
"""

from __future__ import annotations


class MdtError(Exception):
    """Base class for all mdt-term errors."""

    def __init__(self, message: str, original_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class RenderIOError(MdtError):
    """The output sink raised while rendering. Rendering stops at the first failure."""


class UnmappedColorError(MdtError):
    """A highlight color has no entry in the quantized palette."""

    def __init__(self, rgb: tuple[int, int, int]) -> None:
        r, g, b = rgb
        super().__init__(f"No palette entry for color #{r:02x}{g:02x}{b:02x}")
        self.rgb = rgb


class ConfigError(MdtError):
    """Configuration could not be loaded or failed validation."""
