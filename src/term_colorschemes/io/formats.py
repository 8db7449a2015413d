"""On-disk color scheme formats and extension based dispatch."""

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from term_colorschemes.protocols import ColorSchemeConfig, get_scheme_config


class SchemeFormat(Enum):
    """Supported color scheme file formats."""

    MODERN = "modern"  # sectioned key/value .colorscheme files
    LEGACY = "legacy"  # line-oriented .schema files


def extension_for_format(scheme_format: SchemeFormat, config: Optional[ColorSchemeConfig] = None) -> str:
    config = config or get_scheme_config()
    if scheme_format is SchemeFormat.MODERN:
        return config.modern_extension
    return config.legacy_extension


def format_for_path(path: Union[str, Path], config: Optional[ColorSchemeConfig] = None) -> Optional[SchemeFormat]:
    """
    Determine the format of a scheme file from its extension.

    Args:
        path: Path of the scheme file
        config: Configuration providing the extensions (uses global config if None)

    Returns:
        SchemeFormat, or None if the extension is not a scheme extension
    """
    suffix = Path(path).suffix.lower()
    for scheme_format in SchemeFormat:
        if suffix == extension_for_format(scheme_format, config).lower():
            return scheme_format
    return None
