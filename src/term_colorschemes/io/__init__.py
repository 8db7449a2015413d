"""
Color scheme file IO.

Readers and writers for the modern ``.colorscheme`` and legacy
``.schema`` formats, and discovery of scheme files on disk.
"""

from .exceptions import (
    ColorSchemeError,
    ColorSchemeParseError,
    ColorSchemeStorageError,
    InvalidColorIndexError,
    ReadOnlyColorSchemeError,
)
from .formats import SchemeFormat, format_for_path, extension_for_format

__all__ = [
    "ColorSchemeError",
    "ColorSchemeParseError",
    "ColorSchemeStorageError",
    "InvalidColorIndexError",
    "ReadOnlyColorSchemeError",
    "SchemeFormat",
    "format_for_path",
    "extension_for_format",
]
