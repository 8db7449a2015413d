"""Tests for color scheme file formats and discovery."""

import io

import pytest

from term_colorschemes.io import SchemeFormat, format_for_path
from term_colorschemes.io.legacy_reader import LegacySchemaReader, read_legacy_color_scheme
from term_colorschemes.io.modern_format import UNNAMED_DESCRIPTION, parse_rgb
from term_colorschemes.io.exceptions import ColorSchemeParseError
from term_colorschemes.io.search_paths import SchemeLocator
from term_colorschemes.theming import ColorEntry, ColorScheme, RandomizationRange, TABLE_COLORS
from term_colorschemes.theming.color_entry import DEFAULT_COLOR_TABLE

from conftest import write_legacy_scheme, write_modern_scheme


# ---- modern format ----

def test_modern_round_trip(tmp_path):
    """Writing then reading a scheme gives an equivalent scheme."""
    scheme = ColorScheme(name="roundtrip", description="Round, trip", opacity=0.75)
    scheme.set_color_table_entry(0, ColorEntry((12, 34, 56), transparent=True))
    scheme.set_color_table_entry(1, ColorEntry((250, 240, 230), bold=True))
    scheme.set_color_table_entry(7, ColorEntry((0, 128, 255), transparent=True, bold=True))
    scheme.set_randomization_range(3, 30, 20, 10)
    scheme.set_randomization_range(15, 340, 255, 255)
    scheme.randomized_background_color = True

    path = tmp_path / "roundtrip.colorscheme"
    scheme.write(str(path))

    loaded = ColorScheme()
    assert loaded.read(str(path))

    assert loaded.name == "roundtrip"
    assert loaded.description == "Round, trip"
    assert loaded.opacity == pytest.approx(0.75)
    assert loaded.randomized_background_color is True
    assert loaded.color_table() == scheme.color_table()
    for index in range(TABLE_COLORS):
        assert loaded.randomization_range(index) == scheme.randomization_range(index)


def test_modern_read_handwritten_file(tmp_path):
    """Malformed values fall back to defaults, unknown sections are ignored."""
    path = tmp_path / "hand.colorscheme"
    path.write_text(
        "[General]\n"
        "Description=Hand Written\n"
        "Opacity=abc\n"
        "Wallpaper=/tmp/wall.png\n"
        "\n"
        "[Foreground]\n"
        "Color=10,20,30\n"
        "Bold=true\n"
        "\n"
        "[Color1]\n"
        "Color=300,0,0\n"
        "HueRange=20\n"
        "\n"
        "[Color2]\n"
        "Color=1,2\n"
        "Transparent=true\n"
        "MaxRandomValue=15\n"
        "\n"
        "[Unknown]\n"
        "Foo=bar\n"
    )

    scheme = ColorScheme()
    assert scheme.read(str(path))

    assert scheme.name == "hand"
    assert scheme.description == "Hand Written"
    assert scheme.opacity == 1.0
    assert scheme.color_table()[1] == ColorEntry((10, 20, 30), transparent=False, bold=True)
    assert scheme.color_table()[3] == DEFAULT_COLOR_TABLE[3]
    assert scheme.randomization_range(3) == RandomizationRange(hue=20)
    assert scheme.color_table()[4].color == DEFAULT_COLOR_TABLE[4].color
    assert scheme.color_table()[4].transparent is True
    assert scheme.randomization_range(4) == RandomizationRange(value=15)
    assert scheme.color_table()[0] == DEFAULT_COLOR_TABLE[0]


def test_modern_read_without_description(tmp_path):
    path = tmp_path / "bare.colorscheme"
    path.write_text("[Background]\nColor=0,0,0\n")

    scheme = ColorScheme()
    assert scheme.read(str(path))
    assert scheme.description == UNNAMED_DESCRIPTION
    assert scheme.has_dark_background()


def test_modern_randomize_background_flag_sets_range(tmp_path):
    """An enabled flag without a background range gives slot 0 the full range."""
    path = tmp_path / "jitter.colorscheme"
    path.write_text(
        "[General]\n"
        "RandomizeBackground=true\n"
        "\n"
        "[Background]\n"
        "Color=40,90,160\n"
    )

    scheme = ColorScheme()
    assert scheme.read(str(path))

    assert scheme.randomized_background_color is True
    assert scheme.randomization_range(0) == RandomizationRange(340, 255, 0)
    base = scheme.color_table()[0]
    assert any(scheme.get_color_table(seed)[0] != base for seed in range(1, 50))


def test_modern_read_missing_file(tmp_path):
    scheme = ColorScheme(name="untouched")
    assert not scheme.read(str(tmp_path / "missing.colorscheme"))
    assert scheme.name == "untouched"


def test_parse_rgb():
    assert parse_rgb("1, 2, 3") == (1, 2, 3)
    assert parse_rgb(["4", "5", "6"]) == (4, 5, 6)
    with pytest.raises(ColorSchemeParseError):
        parse_rgb("1,2")
    with pytest.raises(ColorSchemeParseError):
        parse_rgb("1,2,x")
    with pytest.raises(ColorSchemeParseError):
        parse_rgb("1,2,256")


# ---- legacy format ----

def _read_legacy(text: str) -> ColorScheme:
    scheme = LegacySchemaReader(io.BytesIO(text.encode("utf-8"))).read()
    assert scheme is not None
    return scheme


def test_legacy_color_line_sets_entry():
    """``color 2 255 0 0 0 1`` is opaque pure red with bold set."""
    scheme = _read_legacy("color 2 255 0 0 0 1\n")
    assert scheme.color_table()[2] == ColorEntry((255, 0, 0), transparent=False, bold=True)


def test_legacy_out_of_range_index_is_skipped():
    scheme = _read_legacy(
        "color 99 255 0 0 0 1\n"
        "color 3 0 255 0 1 0\n"
    )
    assert scheme.color_table()[3] == ColorEntry((0, 255, 0), transparent=True, bold=False)
    for index in range(TABLE_COLORS):
        if index != 3:
            assert scheme.color_table()[index] == DEFAULT_COLOR_TABLE[index]


@pytest.mark.parametrize(
    "line",
    [
        "color 2 256 0 0 0 0",
        "color 2 255 0 0 2 0",
        "color 2 255 0 0 0",
        "color 2 red 0 0 0 0",
        "color -1 0 0 0 0 0",
    ],
)
def test_legacy_malformed_lines_are_skipped(line):
    scheme = _read_legacy(f"{line}\ncolor 4 1 2 3 0 0\n")
    assert scheme.color_table()[2] == DEFAULT_COLOR_TABLE[2]
    assert scheme.color_table()[4].color == (1, 2, 3)


def test_legacy_title_comments_and_directives():
    scheme = _read_legacy(
        "# old style schema\n"
        "\n"
        "title   Black on   Light Yellow\n"
        "image tile /tmp/paper.jpg\n"
        "transparency 0.5 0 0 0\n"
        "color 0 255 255 221 0 0   # background\n"
        "bogus directive\n"
    )
    assert scheme.description == "Black on Light Yellow"
    assert scheme.color_table()[0].color == (255, 255, 221)
    assert scheme.opacity == 1.0
    assert not scheme.has_randomization()


def test_legacy_without_title_gets_unnamed_description():
    scheme = _read_legacy("color 2 255 0 0 0 1\n")
    assert scheme.description == UNNAMED_DESCRIPTION


def test_legacy_reader_accepts_text_stream():
    scheme = LegacySchemaReader(io.StringIO("title Text\ncolor 1 9 9 9 0 0\n")).read()
    assert scheme.description == "Text"
    assert scheme.color_table()[1].color == (9, 9, 9)


def test_legacy_unreadable_stream_returns_none():
    stream = io.BytesIO(b"title Closed\n")
    stream.close()
    assert LegacySchemaReader(stream).read() is None


def test_read_legacy_color_scheme_names_after_file(tmp_path):
    path = write_legacy_scheme(tmp_path, "LightPaper", title="Light Paper")
    scheme = read_legacy_color_scheme(path)
    assert scheme.name == "LightPaper"
    assert scheme.description == "Light Paper"
    assert scheme.color_table()[0] == ColorEntry((255, 255, 221), transparent=True)


def test_read_legacy_color_scheme_missing_file(tmp_path):
    assert read_legacy_color_scheme(tmp_path / "missing.schema") is None


# ---- formats and discovery ----

def test_format_for_path():
    assert format_for_path("a/b/Dark.colorscheme") is SchemeFormat.MODERN
    assert format_for_path("Paper.SCHEMA") is SchemeFormat.LEGACY
    assert format_for_path("notes.txt") is None


def test_locator_prefers_user_dir(scheme_config, scheme_dirs):
    user_dir, system_dir = scheme_dirs
    write_modern_scheme(system_dir, "Shared", description="System")
    user_copy = write_modern_scheme(user_dir, "Shared", description="User")
    write_modern_scheme(system_dir, "OnlySystem")
    write_legacy_scheme(system_dir, "Old")

    locator = SchemeLocator(scheme_config)

    modern = locator.list_schemes(SchemeFormat.MODERN)
    assert sorted(modern) == ["OnlySystem", "Shared"]
    assert modern["Shared"] == user_copy
    assert list(locator.list_schemes(SchemeFormat.LEGACY)) == ["Old"]
    assert locator.find("Shared", SchemeFormat.MODERN) == user_copy
    assert locator.find("Old", SchemeFormat.MODERN) is None
    assert locator.find("../Shared", SchemeFormat.MODERN) is None


def test_locator_system_paths(scheme_config, scheme_dirs):
    user_dir, system_dir = scheme_dirs
    locator = SchemeLocator(scheme_config)
    assert locator.is_system_path(system_dir / "x.colorscheme")
    assert not locator.is_system_path(user_dir / "x.colorscheme")
    assert locator.user_path_for("Mine") == user_dir / "Mine.colorscheme"
