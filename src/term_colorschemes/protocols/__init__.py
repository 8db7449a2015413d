"""
Configuration hooks.

Applications register a ColorSchemeConfig to control the search roots
used by the color scheme registry.
"""

from .scheme_config import ColorSchemeConfig, set_scheme_config, get_scheme_config

__all__ = [
    "ColorSchemeConfig",
    "set_scheme_config",
    "get_scheme_config",
]
