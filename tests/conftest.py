"""pytest configuration and fixtures for term-colorschemes tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from term_colorschemes.protocols import ColorSchemeConfig, set_scheme_config  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def reset_scheme_config():
    """Keep tests from leaking a global configuration."""
    yield
    set_scheme_config(None)


@pytest.fixture
def scheme_dirs(tmp_path):
    """User and system scheme directories below tmp_path."""
    user_dir = tmp_path / "user"
    system_dir = tmp_path / "system"
    user_dir.mkdir()
    system_dir.mkdir()
    return user_dir, system_dir


@pytest.fixture
def scheme_config(scheme_dirs):
    user_dir, system_dir = scheme_dirs
    return ColorSchemeConfig(user_dir=str(user_dir), system_dirs=[str(system_dir)])


def write_modern_scheme(directory, name, description="Modern", background="0,0,0", opacity="1"):
    path = directory / f"{name}.colorscheme"
    path.write_text(
        "[General]\n"
        f"Description={description}\n"
        f"Opacity={opacity}\n"
        "\n"
        "[Background]\n"
        f"Color={background}\n"
        "\n"
        "[Foreground]\n"
        "Color=220,220,220\n"
    )
    return path


def write_legacy_scheme(directory, name, title="Legacy", background=(255, 255, 221)):
    path = directory / f"{name}.schema"
    r, g, b = background
    path.write_text(
        "# legacy schema\n"
        f"title {title}\n"
        f"color 0 {r} {g} {b} 1 0   # background\n"
        "color 1 0 0 0 0 0         # foreground\n"
        "image tile /opt/kde3/share/wallpapers/paper.jpg\n"
    )
    return path
