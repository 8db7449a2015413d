"""
Palette slot layout and the color entry value type.

A terminal palette has TABLE_COLORS slots: background and foreground,
eight ANSI colors, then the intense variants of all ten.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from PyQt6.QtGui import QColor

from term_colorschemes.io.exceptions import InvalidColorIndexError

BASE_COLORS = 2 + 8
INTENSITIES = 2
TABLE_COLORS = INTENSITIES * BASE_COLORS

DEFAULT_BACK_COLOR = 0
DEFAULT_FORE_COLOR = 1

MAX_COLOR_VALUE = 255

COLOR_NAMES: Tuple[str, ...] = (
    "Background",
    "Foreground",
    "Color0",
    "Color1",
    "Color2",
    "Color3",
    "Color4",
    "Color5",
    "Color6",
    "Color7",
    "BackgroundIntense",
    "ForegroundIntense",
    "Color0Intense",
    "Color1Intense",
    "Color2Intense",
    "Color3Intense",
    "Color4Intense",
    "Color5Intense",
    "Color6Intense",
    "Color7Intense",
)

TRANSLATED_COLOR_NAMES: Tuple[str, ...] = (
    "Background",
    "Foreground",
    "Color 1",
    "Color 2",
    "Color 3",
    "Color 4",
    "Color 5",
    "Color 6",
    "Color 7",
    "Color 8",
    "Background (Intense)",
    "Foreground (Intense)",
    "Color 1 (Intense)",
    "Color 2 (Intense)",
    "Color 3 (Intense)",
    "Color 4 (Intense)",
    "Color 5 (Intense)",
    "Color 6 (Intense)",
    "Color 7 (Intense)",
    "Color 8 (Intense)",
)


def check_index(index: int) -> int:
    """Return index unchanged, or raise InvalidColorIndexError if it is not a palette slot."""
    if not 0 <= index < TABLE_COLORS:
        raise InvalidColorIndexError(
            f"Color index {index} outside palette range [0, {TABLE_COLORS})"
        )
    return index


@dataclass(frozen=True)
class ColorEntry:
    """
    A single palette color.

    Attributes:
        color: RGB tuple (r, g, b), each channel 0-255
        transparent: Whether the color should be drawn transparently
        bold: Whether text drawn in this color should be bold
    """

    color: Tuple[int, int, int] = (0, 0, 0)
    transparent: bool = False
    bold: bool = False

    def to_qcolor(self) -> QColor:
        """Convert the RGB tuple to a QColor."""
        return QColor(*self.color)

    def to_hex(self) -> str:
        r, g, b = self.color
        return f"#{r:02x}{g:02x}{b:02x}"

    def with_color(self, color: Tuple[int, int, int]) -> "ColorEntry":
        """Return a copy with a different color and the same flags."""
        return replace(self, color=tuple(color))

    @classmethod
    def from_qcolor(cls, color: QColor, transparent: bool = False, bold: bool = False) -> "ColorEntry":
        return cls((color.red(), color.green(), color.blue()), transparent, bold)


# Table of default color entries, indexed by palette slot
DEFAULT_COLOR_TABLE: Tuple[ColorEntry, ...] = (
    # normal
    ColorEntry((0xFF, 0xFF, 0xFF), transparent=True),  # Background
    ColorEntry((0x00, 0x00, 0x00)),                    # Foreground
    ColorEntry((0x00, 0x00, 0x00)),                    # Black
    ColorEntry((0xB2, 0x18, 0x18)),                    # Red
    ColorEntry((0x18, 0xB2, 0x18)),                    # Green
    ColorEntry((0xB2, 0x68, 0x18)),                    # Yellow
    ColorEntry((0x18, 0x18, 0xB2)),                    # Blue
    ColorEntry((0xB2, 0x18, 0xB2)),                    # Magenta
    ColorEntry((0x18, 0xB2, 0xB2)),                    # Cyan
    ColorEntry((0xB2, 0xB2, 0xB2)),                    # White
    # intense
    ColorEntry((0xFF, 0xFF, 0xFF), transparent=True),
    ColorEntry((0x00, 0x00, 0x00)),
    ColorEntry((0x68, 0x68, 0x68)),
    ColorEntry((0xFF, 0x54, 0x54)),
    ColorEntry((0x54, 0xFF, 0x54)),
    ColorEntry((0xFF, 0xFF, 0x54)),
    ColorEntry((0x54, 0x54, 0xFF)),
    ColorEntry((0xFF, 0x54, 0xFF)),
    ColorEntry((0x54, 0xFF, 0xFF)),
    ColorEntry((0xFF, 0xFF, 0xFF)),
)
