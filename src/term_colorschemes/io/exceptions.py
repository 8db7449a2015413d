"""IO exceptions."""


class ColorSchemeError(Exception):
    """Base class for color scheme errors."""


class ColorSchemeParseError(ColorSchemeError):
    """Raised when a single record of a scheme file cannot be parsed."""


class ColorSchemeStorageError(ColorSchemeError):
    """Raised when a scheme file cannot be read or written."""


class InvalidColorIndexError(ColorSchemeError, IndexError):
    """Raised when a palette slot index is outside the color table."""


class ReadOnlyColorSchemeError(ColorSchemeError):
    """Raised when a read-only scheme, such as the shared default, is modified."""
