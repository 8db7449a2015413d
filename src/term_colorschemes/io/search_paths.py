"""
Color scheme file discovery.

Scheme files are looked up in the user's writable scheme directory first
and then in the read-only system directories, so a user copy of a scheme
shadows the system one with the same name.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from term_colorschemes.io.formats import SchemeFormat, extension_for_format
from term_colorschemes.protocols import ColorSchemeConfig, get_scheme_config

logger = logging.getLogger(__name__)


class SchemeLocator:
    """Finds color scheme files below the configured search roots."""

    def __init__(self, config: Optional[ColorSchemeConfig] = None):
        self.config = config or get_scheme_config()

    @property
    def user_dir(self) -> Optional[Path]:
        if not self.config.user_dir:
            return None
        return Path(self.config.user_dir)

    @property
    def system_dirs(self) -> List[Path]:
        return [Path(d) for d in self.config.system_dirs]

    def search_dirs(self) -> List[Path]:
        """Return the search roots in lookup order, user directory first."""
        dirs = []
        if self.user_dir is not None:
            dirs.append(self.user_dir)
        dirs.extend(self.system_dirs)
        return dirs

    def list_schemes(self, scheme_format: SchemeFormat) -> Dict[str, Path]:
        """
        List scheme files of one format.

        Args:
            scheme_format: Format whose files to list

        Returns:
            Dict mapping scheme name to the file that wins the lookup for it
        """
        extension = extension_for_format(scheme_format, self.config)
        found: Dict[str, Path] = {}
        for directory in self.search_dirs():
            if not directory.is_dir():
                continue
            try:
                candidates = sorted(directory.iterdir())
            except OSError as e:
                logger.warning(f"Cannot list color scheme directory {directory}: {e}")
                continue
            for candidate in candidates:
                if candidate.suffix.lower() == extension.lower() and candidate.is_file():
                    found.setdefault(candidate.stem, candidate)
        logger.debug(f"Found {len(found)} {scheme_format.value} color schemes")
        return found

    def find(self, name: str, scheme_format: SchemeFormat) -> Optional[Path]:
        """Return the file holding scheme ``name`` in the given format, if any."""
        if not name or Path(name).name != name:
            return None
        extension = extension_for_format(scheme_format, self.config)
        for directory in self.search_dirs():
            candidate = directory / f"{name}{extension}"
            if candidate.is_file():
                return candidate
        return None

    def is_system_path(self, path: Union[str, Path]) -> bool:
        """True if ``path`` lives below one of the read-only system directories."""
        resolved = Path(path).resolve()
        for directory in self.system_dirs:
            try:
                resolved.relative_to(directory.resolve())
            except ValueError:
                continue
            return True
        return False

    def is_user_path(self, path: Union[str, Path]) -> bool:
        """True if ``path`` lives below the writable user directory."""
        if self.user_dir is None:
            return False
        try:
            Path(path).resolve().relative_to(self.user_dir.resolve())
        except ValueError:
            return False
        return True

    def user_path_for(self, name: str) -> Optional[Path]:
        """Path a modified scheme is saved to, or None without a user directory."""
        if self.user_dir is None:
            return None
        return self.user_dir / f"{name}{extension_for_format(SchemeFormat.MODERN, self.config)}"
