"""
term-colorschemes: color scheme management for terminal displays.

Named palettes with opacity and per-slot randomization, readers for the
sectioned ``.colorscheme`` format and the legacy line-oriented ``.schema``
format, and a lazily populated registry that caches schemes and writes
modified ones back to disk.

Architecture:
- Theming: ColorEntry, RandomizationRange, ColorScheme, AccessibleColorScheme
- IO: modern and legacy file formats, scheme file discovery
- Protocols: configuration hooks for search roots
- Services: ColorSchemeRegistry
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
