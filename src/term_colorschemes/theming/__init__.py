"""
Theming and color scheme model.

Palette slot layout, color entries, randomization ranges and the
ColorScheme itself.
"""

from .color_entry import ColorEntry, TABLE_COLORS, DEFAULT_BACK_COLOR, DEFAULT_FORE_COLOR
from .randomization import RandomizationRange, MAX_HUE
from .color_scheme import ColorScheme, create_default_color_scheme
from .accessible_scheme import AccessibleColorScheme

__all__ = [
    "ColorEntry",
    "TABLE_COLORS",
    "DEFAULT_BACK_COLOR",
    "DEFAULT_FORE_COLOR",
    "RandomizationRange",
    "MAX_HUE",
    "ColorScheme",
    "create_default_color_scheme",
    "AccessibleColorScheme",
]
