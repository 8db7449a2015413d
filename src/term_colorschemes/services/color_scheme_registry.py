"""Registry of the color schemes available to terminal displays.

Schemes are discovered in the user and system scheme directories, in both
the ``.colorscheme`` and the legacy ``.schema`` formats. A scheme file is
only parsed the first time its name is requested; after that the parsed
ColorScheme is served from the cache.

Lifecycle:
- Construct one registry per application and hand it to the code that
  needs schemes.
- Edit cached schemes freely; edits are tracked.
- Call close() (or leave a ``with`` block) to write every modified scheme
  to the user directory in ``.colorscheme`` format and release the cache.

Example Usage:

    with ColorSchemeRegistry() as registry:
        scheme = registry.find_color_scheme("DarkPastels") or registry.default_color_scheme()
        palette = scheme.get_color_table(random_seed=session_id)
"""

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from PyQt6.QtCore import QObject, pyqtSignal

from term_colorschemes.io.exceptions import ColorSchemeStorageError
from term_colorschemes.io.formats import SchemeFormat, format_for_path
from term_colorschemes.io.legacy_reader import read_legacy_color_scheme
from term_colorschemes.io.search_paths import SchemeLocator
from term_colorschemes.protocols import ColorSchemeConfig
from term_colorschemes.theming.color_scheme import ColorScheme, create_default_color_scheme

logger = logging.getLogger(__name__)


class ColorSchemeRegistry(QObject):
    """Caching registry of named color schemes with modification tracking."""

    color_scheme_loaded = pyqtSignal(str)
    color_scheme_deleted = pyqtSignal(str)

    def __init__(self, config: Optional[ColorSchemeConfig] = None, parent: Optional[QObject] = None):
        """
        Initialize the registry. No scheme files are read until requested.

        Args:
            config: Search root configuration (uses global config if None)
            parent: Optional Qt parent object
        """
        super().__init__(parent)
        self._locator = SchemeLocator(config)
        self._lock = threading.RLock()
        self._color_schemes: Dict[str, ColorScheme] = {}
        self._scheme_paths: Dict[str, Path] = {}
        self._modified_schemes: Set[ColorScheme] = set()
        self._have_loaded_all = False
        self._default_color_scheme = create_default_color_scheme()
        self._default_color_scheme.set_read_only()

        logger.debug(f"ColorSchemeRegistry initialized with search dirs {self._locator.search_dirs()}")

    def __enter__(self) -> "ColorSchemeRegistry":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # ---- lookup ----

    def default_color_scheme(self) -> ColorScheme:
        """
        Return the built-in default color scheme.

        The instance is shared by every caller and is read-only; copy() it
        to derive an editable scheme.
        """
        return self._default_color_scheme

    def find_color_scheme(self, name: str) -> Optional[ColorScheme]:
        """
        Return the color scheme called ``name``.

        An empty name gives the read-only default scheme. The first request for a name
        loads it from disk, preferring the ``.colorscheme`` file over a
        legacy ``.schema`` file.

        Args:
            name: Scheme name (the base name of its file)

        Returns:
            ColorScheme, or None if no scheme with that name exists
        """
        with self._lock:
            if name in self._color_schemes:
                return self._color_schemes[name]
            if not name:
                return self._default_color_scheme

            for scheme_format in (SchemeFormat.MODERN, SchemeFormat.LEGACY):
                path = self._locator.find(name, scheme_format)
                if path is not None and self._load_color_scheme(path, scheme_format):
                    return self._color_schemes.get(name)

        logger.debug(f"Color scheme '{name}' not found")
        return None

    def all_color_schemes(self) -> List[ColorScheme]:
        """
        Return all available color schemes, sorted by name.

        The first call locates, reads and parses every scheme file on disk,
        later calls are served from the cache.
        """
        with self._lock:
            if not self._have_loaded_all:
                self._load_all_color_schemes()
                self._have_loaded_all = True
            return [self._color_schemes[name] for name in sorted(self._color_schemes)]

    def color_scheme_names(self) -> List[str]:
        return [scheme.name for scheme in self.all_color_schemes()]

    def _load_all_color_schemes(self) -> None:
        loaded = 0
        for scheme_format in (SchemeFormat.MODERN, SchemeFormat.LEGACY):
            for name, path in self._locator.list_schemes(scheme_format).items():
                if name in self._color_schemes:
                    continue
                if self._load_color_scheme(path, scheme_format):
                    loaded += 1
        logger.info(f"Loaded {loaded} color schemes")

    # ---- loading ----

    def load_custom_color_scheme(self, path: Union[str, Path]) -> bool:
        """
        Load a color scheme from an arbitrary path.

        The format is chosen by extension. The scheme becomes available under
        the file's base name, replacing any cached scheme of that name.

        Args:
            path: Path to a ``.colorscheme`` or ``.schema`` file

        Returns:
            bool: True if the scheme was loaded
        """
        path = Path(path)
        scheme_format = format_for_path(path, self._locator.config)
        if scheme_format is None:
            logger.warning(f"Unsupported color scheme file type: {path}")
            return False
        if not path.is_file():
            logger.warning(f"Color scheme file does not exist: {path}")
            return False
        return self._load_color_scheme(path, scheme_format)

    def _load_color_scheme(self, path: Path, scheme_format: SchemeFormat) -> bool:
        if scheme_format is SchemeFormat.MODERN:
            scheme = ColorScheme()
            if not scheme.read(str(path)):
                scheme = None
        else:
            scheme = read_legacy_color_scheme(path)

        if scheme is None:
            logger.warning(f"Failed to load color scheme from {path}")
            return False

        with self._lock:
            self._install(scheme, path)
        logger.debug(f"Loaded color scheme '{scheme.name}' from {path}")
        return True

    def add_color_scheme(self, scheme: ColorScheme) -> bool:
        """
        Add a scheme created in memory. It is written to the user directory on close().

        Args:
            scheme: Named ColorScheme to add

        Returns:
            bool: False if the scheme has no name
        """
        if not scheme.name:
            logger.warning("Cannot add a color scheme without a name")
            return False
        with self._lock:
            self._install(scheme, None)
            self._modified_schemes.add(scheme)
        return True

    def _install(self, scheme: ColorScheme, path: Optional[Path]) -> None:
        previous = self._color_schemes.get(scheme.name)
        if previous is not None and previous is not scheme:
            previous.unregister_change_callback(self._on_scheme_changed)
            self._modified_schemes.discard(previous)

        self._color_schemes[scheme.name] = scheme
        if path is None:
            self._scheme_paths.pop(scheme.name, None)
        else:
            self._scheme_paths[scheme.name] = path
        scheme.register_change_callback(self._on_scheme_changed)
        self.color_scheme_loaded.emit(scheme.name)

    # ---- deletion ----

    def delete_color_scheme(self, name: str) -> bool:
        """
        Delete a color scheme from the registry.

        The backing file is only removed when it lives in the user
        directory. Schemes loaded from any other path are just dropped from
        the cache and their file is left alone.

        Returns:
            bool: False if the scheme does not exist, is the default scheme,
                  lives in a system directory or its file cannot be removed
        """
        if not name:
            logger.warning("The default color scheme cannot be deleted")
            return False

        with self._lock:
            scheme = self.find_color_scheme(name)
            if scheme is None:
                return False

            path = self._scheme_paths.get(name)
            if path is not None:
                if self._locator.is_system_path(path):
                    logger.warning(f"Refusing to delete system color scheme {path}")
                    return False
                if self._locator.is_user_path(path):
                    try:
                        path.unlink()
                    except FileNotFoundError:
                        logger.debug(f"Color scheme file {path} already removed")
                    except OSError as e:
                        logger.warning(f"Failed to remove color scheme - {path}: {e}")
                        return False
                else:
                    logger.info(f"Keeping color scheme file {path}, it is outside the user directory")

            del self._color_schemes[name]
            self._scheme_paths.pop(name, None)
            self._modified_schemes.discard(scheme)
            scheme.unregister_change_callback(self._on_scheme_changed)

        logger.info(f"Deleted color scheme '{name}'")
        self.color_scheme_deleted.emit(name)
        return True

    # ---- modification tracking ----

    def _on_scheme_changed(self, scheme: ColorScheme) -> None:
        with self._lock:
            if self._color_schemes.get(scheme.name) is not scheme:
                old_name = next((n for n, s in self._color_schemes.items() if s is scheme), None)
                if old_name is None:
                    return
                if not self._rename(old_name, scheme):
                    return
            self._modified_schemes.add(scheme)
            logger.debug(f"Color scheme '{scheme.name}' modified")

    def _rename(self, old_name: str, scheme: ColorScheme) -> bool:
        # The file under the old name stays on disk, the scheme is saved
        # under its new name on close()
        del self._color_schemes[old_name]
        self._scheme_paths.pop(old_name, None)

        if not scheme.name:
            logger.warning(f"Color scheme '{old_name}' lost its name and was dropped from the registry")
            scheme.unregister_change_callback(self._on_scheme_changed)
            self._modified_schemes.discard(scheme)
            return False

        previous = self._color_schemes.get(scheme.name)
        if previous is not None:
            previous.unregister_change_callback(self._on_scheme_changed)
            self._modified_schemes.discard(previous)
        self._color_schemes[scheme.name] = scheme
        self._scheme_paths.pop(scheme.name, None)
        logger.debug(f"Color scheme '{old_name}' renamed to '{scheme.name}'")
        return True

    def is_modified(self, name: str) -> bool:
        with self._lock:
            scheme = self._color_schemes.get(name)
            return scheme is not None and scheme in self._modified_schemes

    def close(self) -> bool:
        """
        Write modified schemes to the user directory and release the cache.

        A scheme that cannot be written is logged and skipped; the others
        are still written.

        Returns:
            bool: True if every modified scheme was written
        """
        with self._lock:
            success = True
            for scheme in sorted(self._modified_schemes, key=lambda s: s.name):
                if not self._save_color_scheme(scheme):
                    success = False

            for scheme in self._color_schemes.values():
                scheme.unregister_change_callback(self._on_scheme_changed)
            self._modified_schemes.clear()
            self._color_schemes.clear()
            self._scheme_paths.clear()
            self._have_loaded_all = False

        logger.debug("ColorSchemeRegistry closed")
        return success

    def _save_color_scheme(self, scheme: ColorScheme) -> bool:
        path = self._locator.user_path_for(scheme.name)
        if path is None:
            logger.error(f"No user color scheme directory configured, cannot save '{scheme.name}'")
            return False
        try:
            scheme.write(str(path))
        except ColorSchemeStorageError as e:
            logger.error(f"Failed to save color scheme '{scheme.name}': {e}")
            return False
        self._scheme_paths[scheme.name] = path
        return True
