"""
Reader and writer for the sectioned ``.colorscheme`` format.

The file is an INI file handled through QSettings. Top level keys (the
``[General]`` section) hold the description, opacity and background
randomization flag; every palette slot has its own section named after
the slot, e.g.::

    [General]
    Description=Dark Pastels
    Opacity=0.9

    [Background]
    Color=44,44,44
    Transparency=false
    HueRange=30

Values that are missing or malformed fall back to the default for that
field. Unknown sections and keys are ignored.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from PyQt6.QtCore import QSettings

from term_colorschemes.io.exceptions import ColorSchemeParseError, ColorSchemeStorageError
from term_colorschemes.theming.color_entry import (
    DEFAULT_COLOR_TABLE,
    MAX_COLOR_VALUE,
    TABLE_COLORS,
    ColorEntry,
)
from term_colorschemes.theming.color_scheme import UNNAMED_DESCRIPTION, ColorScheme

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off", ""}

# Keys read for each slot; later names are older spellings
_TRANSPARENCY_KEYS = ("Transparency", "Transparent")
_HUE_KEYS = ("HueRange", "MaxRandomHue")
_SATURATION_KEYS = ("SaturationRange", "MaxRandomSaturation")
_VALUE_KEYS = ("ValueRange", "MaxRandomValue")


def _as_text(raw: Any) -> Optional[str]:
    """Flatten a QSettings value to text; comma separated values come back as lists."""
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        return ", ".join(str(part) for part in raw)
    return str(raw)


def _first_present(settings: QSettings, keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if settings.contains(key):
            return settings.value(key)
    return None


def parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = _as_text(raw)
    if text is None:
        raise ColorSchemeParseError("missing boolean value")
    lowered = text.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ColorSchemeParseError(f"invalid boolean value {text!r}")


def parse_int(raw: Any) -> int:
    text = _as_text(raw)
    if text is None:
        raise ColorSchemeParseError("missing integer value")
    try:
        return int(text.strip())
    except ValueError as e:
        raise ColorSchemeParseError(f"invalid integer value {text!r}") from e


def parse_float(raw: Any) -> float:
    text = _as_text(raw)
    if text is None:
        raise ColorSchemeParseError("missing real value")
    try:
        return float(text.strip())
    except ValueError as e:
        raise ColorSchemeParseError(f"invalid real value {text!r}") from e


def parse_rgb(raw: Any) -> Tuple[int, int, int]:
    """Parse ``r,g,b`` (or the list QSettings makes of it) into an RGB tuple."""
    if isinstance(raw, (list, tuple)):
        parts = [str(part) for part in raw]
    else:
        text = _as_text(raw)
        if text is None:
            raise ColorSchemeParseError("missing color value")
        parts = text.split(",")

    if len(parts) != 3:
        raise ColorSchemeParseError(f"expected 3 color components, got {len(parts)}")

    rgb = tuple(parse_int(part) for part in parts)
    if any(c < 0 or c > MAX_COLOR_VALUE for c in rgb):
        raise ColorSchemeParseError(f"color component out of range in {rgb}")
    return rgb


def _read_field(settings: QSettings, keys: Tuple[str, ...], parser, default, context: str):
    raw = _first_present(settings, keys)
    if raw is None:
        return default
    try:
        return parser(raw)
    except ColorSchemeParseError as e:
        logger.warning(f"Ignoring {context}/{keys[0]}: {e}")
        return default


def _read_color_entry(settings: QSettings, scheme: ColorScheme, index: int) -> None:
    section = ColorScheme.color_name_for_index(index)
    default = DEFAULT_COLOR_TABLE[index]

    settings.beginGroup(section)
    try:
        color = _read_field(settings, ("Color",), parse_rgb, default.color, section)
        transparent = _read_field(settings, _TRANSPARENCY_KEYS, parse_bool, default.transparent, section)
        bold = _read_field(settings, ("Bold",), parse_bool, default.bold, section)
        hue = _read_field(settings, _HUE_KEYS, parse_int, 0, section)
        saturation = _read_field(settings, _SATURATION_KEYS, parse_int, 0, section)
        value = _read_field(settings, _VALUE_KEYS, parse_int, 0, section)
    finally:
        settings.endGroup()

    scheme.set_color_table_entry(index, ColorEntry(color, transparent, bold))
    scheme.set_randomization_range(index, hue, saturation, value)


def read_color_scheme_file(scheme: ColorScheme, filename: Union[str, Path]) -> bool:
    """
    Populate ``scheme`` in place from a ``.colorscheme`` file.

    The scheme's name becomes the file's base name.

    Args:
        scheme: ColorScheme to populate
        filename: Path of the file to read

    Returns:
        bool: False if the file is missing or unreadable, True otherwise
    """
    path = Path(filename)
    if not path.is_file() or not os.access(path, os.R_OK):
        logger.warning(f"Cannot read color scheme file {path}")
        return False

    settings = QSettings(str(path), QSettings.Format.IniFormat)
    if settings.status() != QSettings.Status.NoError:
        logger.warning(f"Failed to parse color scheme file {path}: {settings.status()}")
        return False

    scheme.name = path.stem

    # Keys of the [General] section are top level keys in QSettings
    description = _as_text(settings.value("Description"))
    scheme.description = description if description is not None else UNNAMED_DESCRIPTION
    scheme.opacity = _read_field(settings, ("Opacity",), parse_float, 1.0, "General")

    for index in range(TABLE_COLORS):
        _read_color_entry(settings, scheme, index)

    # after the slots, so an enabled flag can fill in the background range
    scheme.randomized_background_color = _read_field(
        settings, ("RandomizeBackground",), parse_bool, False, "General"
    )

    logger.debug(f"Read color scheme '{scheme.name}' from {path}")
    return True


def write_color_scheme_file(scheme: ColorScheme, filename: Union[str, Path]) -> None:
    """
    Write ``scheme`` to a ``.colorscheme`` file, replacing any existing content.

    Args:
        scheme: ColorScheme to write
        filename: Destination path

    Raises:
        ColorSchemeStorageError: If the file cannot be written
    """
    path = Path(filename)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ColorSchemeStorageError(f"Cannot create directory for {path}: {e}") from e

    settings = QSettings(str(path), QSettings.Format.IniFormat)
    settings.clear()

    settings.setValue("Description", scheme.description)
    settings.setValue("Opacity", scheme.opacity)
    settings.setValue("RandomizeBackground", scheme.randomized_background_color)

    for index, entry in enumerate(scheme.color_table()):
        settings.beginGroup(ColorScheme.color_name_for_index(index))
        settings.setValue("Color", [str(c) for c in entry.color])
        settings.setValue("Transparency", entry.transparent)
        settings.setValue("Bold", entry.bold)

        rng = scheme.randomization_range(index)
        if not rng.is_null():
            settings.setValue("HueRange", rng.hue)
            settings.setValue("SaturationRange", rng.saturation)
            settings.setValue("ValueRange", rng.value)
        settings.endGroup()

    settings.sync()
    if settings.status() != QSettings.Status.NoError:
        raise ColorSchemeStorageError(f"Failed to write color scheme file {path}: {settings.status()}")

    logger.info(f"Color scheme '{scheme.name}' saved to {path}")
