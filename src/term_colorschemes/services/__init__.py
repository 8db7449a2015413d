"""
Service layer.

The color scheme registry: lazy discovery, caching, deletion and
persistence of named color schemes.
"""

from .color_scheme_registry import ColorSchemeRegistry

__all__ = [
    "ColorSchemeRegistry",
]
