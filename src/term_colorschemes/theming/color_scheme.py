"""
Terminal Color Scheme

A color scheme holds the palette used to draw text and character
backgrounds in a terminal display, together with the opacity of the
display background and optional per-slot randomization that lets several
terminal instances share a scheme and still look different.
"""

import logging
from typing import Callable, List, Optional, Tuple

from PyQt6.QtCore import QCoreApplication
from PyQt6.QtGui import QColor

from term_colorschemes.io.exceptions import ReadOnlyColorSchemeError
from term_colorschemes.theming.color_entry import (
    COLOR_NAMES,
    DEFAULT_BACK_COLOR,
    DEFAULT_COLOR_TABLE,
    DEFAULT_FORE_COLOR,
    MAX_COLOR_VALUE,
    TABLE_COLORS,
    TRANSLATED_COLOR_NAMES,
    ColorEntry,
    check_index,
)
from term_colorschemes.theming.randomization import (
    MAX_HUE,
    NULL_RANGE,
    RandomizationRange,
    randomize_entry,
)

logger = logging.getLogger(__name__)

# HSV value below which a background counts as dark
DARK_BACKGROUND_THRESHOLD = 127

# Description given to schemes whose file does not name them
UNNAMED_DESCRIPTION = "Un-named Color Scheme"

ChangeCallback = Callable[["ColorScheme"], None]


class ColorScheme:
    """
    Palette, opacity and randomization settings for a terminal display.

    A new scheme uses the shared default color table. The first call to
    set_color_table_entry() gives the scheme a private copy of that table,
    so edits never leak into the default or into other schemes. The
    randomization table is likewise only allocated once a slot is given a
    non-null range.

    Mutators notify registered change callbacks; the registry uses this to
    know which schemes must be written back to disk.
    """

    def __init__(self, name: str = "", description: str = "", opacity: float = 1.0):
        self._name = name
        self._description = description
        self._opacity = self._clamp_opacity(opacity)
        self._table: Optional[List[ColorEntry]] = None
        self._random_table: Optional[List[RandomizationRange]] = None
        self._randomized_background = False
        self._change_callbacks: List[ChangeCallback] = []
        self._read_only = False

    def __repr__(self) -> str:
        return f"ColorScheme(name={self._name!r}, description={self._description!r}, opacity={self._opacity})"

    # ---- basic attributes ----

    @property
    def name(self) -> str:
        """Registry key and on-disk base filename of the scheme."""
        return self._name

    @name.setter
    def name(self, name: str):
        self._check_writable()
        if name == self._name:
            return
        self._name = name
        self._notify_changed()

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, description: str):
        self._check_writable()
        self._description = description
        self._notify_changed()

    @property
    def opacity(self) -> float:
        """Opacity of the display background, 0 (transparent) to 1 (opaque)."""
        return self._opacity

    @opacity.setter
    def opacity(self, opacity: float):
        self._check_writable()
        self._opacity = self._clamp_opacity(opacity)
        self._notify_changed()

    @property
    def randomized_background_color(self) -> bool:
        """Whether the background slot takes part in randomization."""
        return self._randomized_background

    @randomized_background_color.setter
    def randomized_background_color(self, randomize: bool):
        self._check_writable()
        self._randomized_background = bool(randomize)
        if randomize and self.randomization_range(DEFAULT_BACK_COLOR).is_null():
            # full hue and saturation range, value untouched
            self._set_range(DEFAULT_BACK_COLOR, RandomizationRange(MAX_HUE, MAX_COLOR_VALUE, 0))
        self._notify_changed()

    @property
    def read_only(self) -> bool:
        """Whether mutators refuse to change this scheme."""
        return self._read_only

    def set_read_only(self):
        """Freeze the scheme. Use copy() to get an editable version."""
        self._read_only = True

    def _check_writable(self):
        if self._read_only:
            raise ReadOnlyColorSchemeError(f"Color scheme '{self._name}' is read-only, copy() it to edit")

    @staticmethod
    def _clamp_opacity(opacity: float) -> float:
        return max(0.0, min(1.0, float(opacity)))

    # ---- color table ----

    def color_table(self) -> Tuple[ColorEntry, ...]:
        """Return the active color table: the custom table if set, else the default."""
        if self._table is None:
            return DEFAULT_COLOR_TABLE
        return tuple(self._table)

    def has_custom_color_table(self) -> bool:
        return self._table is not None

    def set_color_table_entry(self, index: int, entry: ColorEntry):
        """Set a single entry within the color palette."""
        self._check_writable()
        check_index(index)
        if self._table is None:
            self._table = list(DEFAULT_COLOR_TABLE)
        self._table[index] = entry
        self._notify_changed()

    def get_color_table(self, random_seed: int = 0) -> List[ColorEntry]:
        """
        Return the effective palette for this scheme.

        Args:
            random_seed: Seed picking the jitter for randomized slots.
                A seed of 0 disables randomization.

        Returns:
            List[ColorEntry]: TABLE_COLORS entries, one per palette slot
        """
        return [self._effective_entry(index, random_seed) for index in range(TABLE_COLORS)]

    def color_entry(self, index: int, random_seed: int = 0) -> ColorEntry:
        """Retrieve a single entry of the effective palette, see get_color_table()."""
        check_index(index)
        return self._effective_entry(index, random_seed)

    def _effective_entry(self, index: int, random_seed: int) -> ColorEntry:
        entry = self.color_table()[index]
        if random_seed == 0 or self._random_table is None:
            return entry
        if index == DEFAULT_BACK_COLOR and not self._randomized_background:
            return entry
        return randomize_entry(entry, self._random_table[index], random_seed, index)

    def foreground_color(self) -> QColor:
        """Primary color used to draw text in this scheme."""
        return self.color_table()[DEFAULT_FORE_COLOR].to_qcolor()

    def background_color(self) -> QColor:
        """Primary color used to draw the terminal background in this scheme."""
        return self.color_table()[DEFAULT_BACK_COLOR].to_qcolor()

    def has_dark_background(self) -> bool:
        """True if the background color's HSV value is below 127."""
        return self.background_color().value() < DARK_BACKGROUND_THRESHOLD

    # ---- randomization ----

    def set_randomization_range(self, index: int, hue: int, saturation: int, value: int):
        """
        Set how far the color at ``index`` may be randomized.

        A range of all zeros clears randomization for the slot.
        """
        self._check_writable()
        check_index(index)
        self._set_range(index, RandomizationRange(hue, saturation, value))
        self._notify_changed()

    def _set_range(self, index: int, rng: RandomizationRange):
        if self._random_table is None:
            if rng.is_null():
                return
            self._random_table = [NULL_RANGE] * TABLE_COLORS
        self._random_table[index] = rng

    def randomization_range(self, index: int) -> RandomizationRange:
        check_index(index)
        if self._random_table is None:
            return NULL_RANGE
        return self._random_table[index]

    def has_randomization(self) -> bool:
        """True if any slot has a non-null randomization range."""
        if self._random_table is None:
            return False
        return any(not rng.is_null() for rng in self._random_table)

    # ---- persistence ----

    def read(self, filename: str) -> bool:
        """
        Populate this scheme from a ``.colorscheme`` file.

        Args:
            filename: Path of the file to read

        Returns:
            bool: False if the file could not be read at all
        """
        # Import here to avoid circular imports
        from term_colorschemes.io.modern_format import read_color_scheme_file
        return read_color_scheme_file(self, filename)

    def write(self, filename: str) -> None:
        """
        Write this scheme to a ``.colorscheme`` file.

        Raises:
            ColorSchemeStorageError: If the file cannot be written
        """
        from term_colorschemes.io.modern_format import write_color_scheme_file
        write_color_scheme_file(self, filename)

    def copy(self) -> "ColorScheme":
        """Return an independent copy without change callbacks, always writable."""
        other = ColorScheme(self._name, self._description, self._opacity)
        if self._table is not None:
            other._table = list(self._table)
        if self._random_table is not None:
            other._random_table = list(self._random_table)
        other._randomized_background = self._randomized_background
        return other

    # ---- change notification ----

    def register_change_callback(self, callback: ChangeCallback):
        """
        Register a callback to be called when the scheme changes.

        Args:
            callback: Function called with this scheme
        """
        if callback not in self._change_callbacks:
            self._change_callbacks.append(callback)

    def unregister_change_callback(self, callback: ChangeCallback):
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)

    def _notify_changed(self):
        for callback in list(self._change_callbacks):
            try:
                callback(self)
            except Exception as e:
                logger.warning(f"Color scheme change callback failed for '{self._name}': {e}")

    # ---- slot names ----

    @staticmethod
    def color_name_for_index(index: int) -> str:
        """Canonical name of a palette slot, as used for sections in scheme files."""
        return COLOR_NAMES[check_index(index)]

    @staticmethod
    def translated_color_name_for_index(index: int) -> str:
        """Human readable name of a palette slot."""
        return QCoreApplication.translate("ColorScheme", TRANSLATED_COLOR_NAMES[check_index(index)])


def create_default_color_scheme() -> ColorScheme:
    """Create the built-in scheme used when no name is given."""
    return ColorScheme(name="", description="Default")
