"""Base configuration class for color scheme discovery.

Provides hooks for applications to customize where color schemes are
looked up and where modified schemes are written.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


def _default_user_dir() -> str:
    return str(Path.home() / ".local" / "share" / "term_colorschemes" / "colorschemes")


def _default_system_dirs() -> List[str]:
    return [
        "/usr/share/term_colorschemes/colorschemes",
        "/usr/local/share/term_colorschemes/colorschemes",
    ]


@dataclass
class ColorSchemeConfig:
    """Configuration for color scheme lookup and persistence.

    Applications can subclass this to provide custom configuration.

    Attributes:
        user_dir: Writable directory searched first; modified schemes are saved here
        system_dirs: Read-only directories searched after the user directory
        modern_extension: File extension of the sectioned key/value format
        legacy_extension: File extension of the legacy line-oriented format
    """

    user_dir: Optional[str] = field(default_factory=_default_user_dir)
    system_dirs: List[str] = field(default_factory=_default_system_dirs)
    modern_extension: str = ".colorscheme"
    legacy_extension: str = ".schema"


# Global config instance (set by application)
_scheme_config: Optional[ColorSchemeConfig] = None


def set_scheme_config(config: Optional[ColorSchemeConfig]) -> None:
    """Set the global color scheme configuration.

    Args:
        config: ColorSchemeConfig instance, or None to restore the defaults
    """
    global _scheme_config
    _scheme_config = config


def get_scheme_config() -> ColorSchemeConfig:
    """Get the current color scheme configuration.

    Returns:
        Current ColorSchemeConfig or default if not set
    """
    if _scheme_config is None:
        return ColorSchemeConfig()
    return _scheme_config
