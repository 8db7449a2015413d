"""
Reader for the legacy line-oriented ``.schema`` color scheme format.

Only the title and the palette entries are supported::

    # comment
    title Black on Light Yellow
    color 0 255 255 221 1 0    # background
    color 1   0   0   0 0 0    # foreground

Background images, blend colors and the other directives of the format
are ignored.
"""

import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

from term_colorschemes.io.exceptions import ColorSchemeParseError
from term_colorschemes.theming.color_entry import MAX_COLOR_VALUE, TABLE_COLORS, ColorEntry
from term_colorschemes.theming.color_scheme import UNNAMED_DESCRIPTION, ColorScheme

logger = logging.getLogger(__name__)

_COMMENT = re.compile(r"#.*$")

# Directives of the format that are understood but deliberately not applied
_IGNORED_DIRECTIVES = {"image", "transparency", "rcolor", "sysfg", "sysbg"}


class LegacySchemaReader:
    """Reads a color scheme from a stream containing a ``.schema`` file."""

    def __init__(self, device: Any):
        """
        Initialize the reader.

        Args:
            device: Readable stream, binary or text, positioned at the start of the file
        """
        self._device = device

    def read(self) -> Optional[ColorScheme]:
        """
        Read and parse the stream.

        Lines that cannot be parsed are skipped. A file without a title line gets
        the same placeholder description as an unnamed ``.colorscheme`` file.

        Returns:
            ColorScheme, or None if the stream could not be read at all
        """
        try:
            readable = getattr(self._device, "readable", None)
            if readable is not None and not readable():
                logger.warning("Color scheme stream is not readable")
                return None
            data = self._device.read()
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read legacy color scheme: {e}")
            return None

        if isinstance(data, bytes):
            text = data.decode("utf-8", errors="replace")
        else:
            text = data

        scheme = ColorScheme()
        for line_number, raw_line in enumerate(text.splitlines(), start=1):
            line = " ".join(_COMMENT.sub("", raw_line).split())
            if not line:
                continue

            directive = line.split(" ", 1)[0]
            try:
                if directive == "color":
                    self._read_color_line(line, scheme)
                elif directive == "title":
                    self._read_title_line(line, scheme)
                elif directive in _IGNORED_DIRECTIVES:
                    logger.debug(f"Ignoring unsupported legacy directive on line {line_number}: {line!r}")
                else:
                    logger.warning(f"Unknown legacy color scheme directive on line {line_number}: {line!r}")
            except ColorSchemeParseError as e:
                logger.warning(f"Skipping legacy color scheme line {line_number} ({line!r}): {e}")

        if not scheme.description:
            scheme.description = UNNAMED_DESCRIPTION

        return scheme

    def _read_color_line(self, line: str, scheme: ColorScheme) -> None:
        # format is: color [index] [red] [green] [blue] [transparent] [bold]
        tokens = line.split(" ")
        if len(tokens) != 7:
            raise ColorSchemeParseError(f"expected 7 fields, got {len(tokens)}")

        try:
            index, red, green, blue, transparent, bold = (int(token) for token in tokens[1:])
        except ValueError as e:
            raise ColorSchemeParseError(f"non numeric field: {e}") from e

        if not 0 <= index < TABLE_COLORS:
            raise ColorSchemeParseError(f"color index {index} out of range")
        if any(c < 0 or c > MAX_COLOR_VALUE for c in (red, green, blue)):
            raise ColorSchemeParseError("color component out of range")
        if transparent not in (0, 1) or bold not in (0, 1):
            raise ColorSchemeParseError("transparent and bold flags must be 0 or 1")

        entry = ColorEntry((red, green, blue), transparent=bool(transparent), bold=bool(bold))
        scheme.set_color_table_entry(index, entry)

    def _read_title_line(self, line: str, scheme: ColorScheme) -> None:
        _, _, description = line.partition(" ")
        if not description:
            raise ColorSchemeParseError("title line without a title")
        scheme.description = description


def read_legacy_color_scheme(path: Union[str, Path]) -> Optional[ColorScheme]:
    """
    Read a ``.schema`` file into a ColorScheme named after the file.

    Args:
        path: Path of the file

    Returns:
        ColorScheme, or None if the file could not be opened or read
    """
    path = Path(path)
    try:
        with open(path, "rb") as device:
            scheme = LegacySchemaReader(device).read()
    except OSError as e:
        logger.warning(f"Failed to open legacy color scheme {path}: {e}")
        return None

    if scheme is not None:
        scheme.name = path.stem
        logger.debug(f"Read legacy color scheme '{scheme.name}' from {path}")
    return scheme
