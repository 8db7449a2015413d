"""Seed-keyed color randomization for telling terminal sessions apart.

Each palette slot may carry a RandomizationRange. For a given seed the
jitter applied to a slot is derived from a hash of (seed, slot index), so
the same seed always produces the same palette and no generator state is
carried between calls.
"""

import hashlib
from dataclasses import dataclass
from typing import Tuple

from PyQt6.QtGui import QColor

from term_colorschemes.theming.color_entry import ColorEntry, MAX_COLOR_VALUE

MAX_HUE = 340
HUE_DEGREES = 360


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


@dataclass(frozen=True)
class RandomizationRange:
    """How far a palette slot may be perturbed in HSV space.

    Attributes:
        hue: Maximum hue shift in degrees either way (0-340)
        saturation: Maximum saturation shift either way (0-255)
        value: Maximum value shift either way (0-255)
    """

    hue: int = 0
    saturation: int = 0
    value: int = 0

    def __post_init__(self):
        object.__setattr__(self, "hue", _clamp(self.hue, 0, MAX_HUE))
        object.__setattr__(self, "saturation", _clamp(self.saturation, 0, MAX_COLOR_VALUE))
        object.__setattr__(self, "value", _clamp(self.value, 0, MAX_COLOR_VALUE))

    def is_null(self) -> bool:
        return self.hue == 0 and self.saturation == 0 and self.value == 0


NULL_RANGE = RandomizationRange()


def _offset(raw: int, limit: int) -> int:
    """Map raw hash bits onto [-limit, +limit]."""
    if limit == 0:
        return 0
    return raw % (2 * limit + 1) - limit


def slot_offsets(seed: int, index: int, rng: RandomizationRange) -> Tuple[int, int, int]:
    """Derive the (hue, saturation, value) shifts for one slot and seed."""
    digest = hashlib.md5(f"{seed}:{index}".encode("utf-8")).digest()
    hue_raw = int.from_bytes(digest[0:4], byteorder="big")
    sat_raw = int.from_bytes(digest[4:8], byteorder="big")
    val_raw = int.from_bytes(digest[8:12], byteorder="big")
    return (
        _offset(hue_raw, rng.hue),
        _offset(sat_raw, rng.saturation),
        _offset(val_raw, rng.value),
    )


def randomize_entry(entry: ColorEntry, rng: RandomizationRange, seed: int, index: int) -> ColorEntry:
    """
    Apply the seed's jitter for slot ``index`` to ``entry``.

    Hue wraps around the color circle; saturation and value are clamped
    to 0-255. Transparency and bold flags are kept.

    Args:
        entry: Base color entry from the active table
        rng: Randomization range of the slot
        seed: Randomization seed
        index: Palette slot index

    Returns:
        ColorEntry: Entry with the jittered color
    """
    if rng.is_null():
        return entry

    hue_shift, sat_shift, val_shift = slot_offsets(seed, index, rng)

    hue, saturation, value, _ = entry.to_qcolor().getHsv()
    # achromatic colors report a hue of -1
    hue = max(hue, 0)

    new_hue = (hue + hue_shift) % HUE_DEGREES
    new_saturation = _clamp(saturation + sat_shift, 0, MAX_COLOR_VALUE)
    new_value = _clamp(value + val_shift, 0, MAX_COLOR_VALUE)

    color = QColor.fromHsv(new_hue, new_saturation, new_value)
    return entry.with_color((color.red(), color.green(), color.blue()))
