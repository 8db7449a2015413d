"""
Color scheme built from the application's QPalette.

Intended for users who rely on specially designed desktop colors: the
terminal palette is derived from the same QPalette roles the rest of the
application uses.
"""

import logging
from typing import Optional

from PyQt6.QtGui import QGuiApplication, QPalette

from term_colorschemes.theming.color_entry import TABLE_COLORS, ColorEntry
from term_colorschemes.theming.color_scheme import ColorScheme

logger = logging.getLogger(__name__)

# Palette roles cycled through the terminal palette slots
PALETTE_ROLES = (
    QPalette.ColorRole.Text,
    QPalette.ColorRole.Base,
    QPalette.ColorRole.PlaceholderText,
    QPalette.ColorRole.Highlight,
    QPalette.ColorRole.Link,
    QPalette.ColorRole.LinkVisited,
    QPalette.ColorRole.BrightText,
    QPalette.ColorRole.ToolTipText,
)


class AccessibleColorScheme(ColorScheme):
    """
    Color scheme which uses colors from a QPalette.

    Slot ``i`` takes the color of ``PALETTE_ROLES[i % len(PALETTE_ROLES)]``.
    """

    def __init__(self, palette: Optional[QPalette] = None):
        """
        Initialize the scheme from a palette.

        Args:
            palette: QPalette to read colors from (uses the application palette if None)
        """
        super().__init__(name="accessible", description="Accessible Color Scheme")

        if palette is None:
            if QGuiApplication.instance() is None:
                logger.warning("No QGuiApplication instance found, using default colors")
                return
            palette = QGuiApplication.palette()

        for index in range(TABLE_COLORS):
            role = PALETTE_ROLES[index % len(PALETTE_ROLES)]
            color = palette.color(QPalette.ColorGroup.Active, role)
            self.set_color_table_entry(index, ColorEntry.from_qcolor(color))

        logger.debug("Created accessible color scheme from palette")
