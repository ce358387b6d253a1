"""Unit tests for the command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from fontgarden import __version__
from fontgarden.cli import app
from fontgarden.domain import Fontgarden, glyph_names
from fontgarden.io import load_fontgarden, read_font, save_fontgarden, write_font

runner = CliRunner()


@pytest.fixture
def ufos(tmp_path: Path, light_wide, light_condensed) -> list[Path]:
    """Two UFO sources written to disk."""
    paths = []
    for document in (light_wide, light_condensed):
        path = tmp_path / f"MutatorSans-{document.info.styleName}.ufo"
        write_font(document, path)
        paths.append(path)
    return paths


@pytest.fixture
def glyph_lists(tmp_path: Path) -> dict[str, Path]:
    """Glyph list files for a Latin and a Punctuation set."""
    latin = tmp_path / "latin.txt"
    latin.write_text("Aacute\nS\n")
    punctuation = tmp_path / "punctuation.txt"
    punctuation.write_text("quotedblbase\n\nquotedblleft\n")
    return {"Latin": latin, "Punctuation": punctuation}


@pytest.fixture
def garden(tmp_path: Path) -> Path:
    path = tmp_path / "MutatorSans.fontgarden"
    save_fontgarden(Fontgarden(), path)
    return path


def _import_args(garden: Path, glyph_lists: dict[str, Path], ufos: list[Path]) -> list[str]:
    args = ["--quiet", "import", str(garden)]
    for set_name, path in glyph_lists.items():
        args += ["--glyphs-file", str(path), "--set", set_name]
    return args + [str(path) for path in ufos]


class TestGlobalOptions:
    """Tests for options shared by every command."""

    def test_version(self) -> None:
        """Test --version prints the version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_invalid_log_level(self, tmp_path: Path) -> None:
        """Test unknown log levels are rejected."""
        result = runner.invoke(app, ["--log-level", "LOUD", "new", str(tmp_path / "g")])
        assert result.exit_code == 2

    def test_log_file(self, tmp_path: Path, garden: Path, ufos: list[Path]) -> None:
        """Test --log-file receives the operation log."""
        log_file = tmp_path / "fontgarden.log"
        result = runner.invoke(
            app,
            ["--log-file", str(log_file), "--quiet", "import", str(garden), str(ufos[0])],
        )
        assert result.exit_code == 0, result.output
        assert "Glyphs imported" in log_file.read_text(encoding="utf-8")


class TestNew:
    """Tests for the new command."""

    def test_creates_empty_fontgarden(self, tmp_path: Path) -> None:
        """Test an empty directory tree is created."""
        path = tmp_path / "Family.fontgarden"
        result = runner.invoke(app, ["new", str(path)])
        assert result.exit_code == 0, result.output
        assert path.is_dir()
        assert load_fontgarden(path) == Fontgarden()

    def test_refuses_existing_path(self, garden: Path) -> None:
        """Test an existing path is left alone."""
        (garden / "notes.txt").write_text("keep")
        result = runner.invoke(app, ["new", str(garden)])
        assert result.exit_code == 1
        assert (garden / "notes.txt").read_text() == "keep"


class TestImport:
    """Tests for the import command."""

    def test_import_into_sets(self, garden: Path, glyph_lists, ufos) -> None:
        """Test glyph lists route glyphs and their components into sets."""
        result = runner.invoke(app, _import_args(garden, glyph_lists, ufos))
        assert result.exit_code == 0, result.output

        fontgarden = load_fontgarden(garden)
        assert set(fontgarden.sets) == {"Latin", "Punctuation"}
        assert fontgarden.sets["Latin"].coverage() == {"A", "Aacute", "acute", "S"}
        assert fontgarden.sets["Punctuation"].coverage() == {
            "comma",
            "quotedblbase",
            "quotedblleft",
        }
        assert fontgarden.source_names() == {"LightWide", "LightCondensed"}

    def test_import_everything_into_default_set(self, garden: Path, ufos) -> None:
        """Test fonts without glyph lists go into the default set."""
        result = runner.invoke(app, ["import", str(garden), str(ufos[0])])
        assert result.exit_code == 0, result.output

        fontgarden = load_fontgarden(garden)
        assert set(fontgarden.sets) == {"default"}
        assert len(fontgarden.sets["default"].coverage()) == 8

    def test_source_name_option(self, garden: Path, ufos) -> None:
        """Test --source-name overrides the style name."""
        result = runner.invoke(
            app, ["import", str(garden), "--source-name", "Light", str(ufos[0])]
        )
        assert result.exit_code == 0, result.output
        assert load_fontgarden(garden).source_names() == {"Light"}

    def test_source_name_needs_single_font(self, garden: Path, ufos) -> None:
        """Test --source-name is rejected with more than one font."""
        result = runner.invoke(
            app, ["import", str(garden), "--source-name", "Light", *map(str, ufos)]
        )
        assert result.exit_code == 2

    def test_unpaired_glyph_files(self, garden: Path, glyph_lists, ufos) -> None:
        """Test every glyph file needs a matching set."""
        result = runner.invoke(
            app, ["import", str(garden), "-g", str(glyph_lists["Latin"]), str(ufos[0])]
        )
        assert result.exit_code == 2

    def test_missing_font(self, garden: Path, tmp_path: Path) -> None:
        """Test a missing UFO fails without touching the Fontgarden."""
        result = runner.invoke(app, ["import", str(garden), str(tmp_path / "Missing.ufo")])
        assert result.exit_code == 1
        assert load_fontgarden(garden) == Fontgarden()

    def test_missing_fontgarden(self, tmp_path: Path, ufos) -> None:
        """Test importing into a path that is not a Fontgarden."""
        result = runner.invoke(app, ["import", str(tmp_path / "nowhere"), str(ufos[0])])
        assert result.exit_code == 1


class TestExport:
    """Tests for the export command."""

    @pytest.fixture
    def populated(self, garden: Path, glyph_lists, ufos) -> Path:
        result = runner.invoke(app, _import_args(garden, glyph_lists, ufos))
        assert result.exit_code == 0, result.output
        return garden

    def test_export_set(self, populated: Path, tmp_path: Path) -> None:
        """Test one UFO is written per source with the set's glyphs."""
        output_dir = tmp_path / "build"
        result = runner.invoke(
            app, ["export", str(populated), "--set", "Latin", "-o", str(output_dir)]
        )
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in output_dir.iterdir()) == [
            "LightCondensed.ufo",
            "LightWide.ufo",
        ]

        document = read_font(output_dir / "LightWide.ufo")
        assert glyph_names(document) == {"A", "Aacute", "acute", "S"}
        assert document.layers.defaultLayer.name == "foreground"
        assert [layer.name for layer in document.layers] == ["foreground", "background"]
        assert document.lib["public.postscriptNames"] == {"Aacute": "uni00C1"}

    def test_export_glyphs_file_pulls_in_components(
        self, populated: Path, tmp_path: Path
    ) -> None:
        """Test exporting by glyph list closes over components."""
        glyphs_file = tmp_path / "export.txt"
        glyphs_file.write_text("quotedblbase\n")
        output_dir = tmp_path / "build"
        result = runner.invoke(
            app,
            [
                "export",
                str(populated),
                "--glyphs-file",
                str(glyphs_file),
                "--source-name",
                "LightCondensed",
                "-o",
                str(output_dir),
            ],
        )
        assert result.exit_code == 0, result.output
        assert [p.name for p in output_dir.iterdir()] == ["LightCondensed.ufo"]
        document = read_font(output_dir / "LightCondensed.ufo")
        assert glyph_names(document) == {"comma", "quotedblbase"}

    def test_set_or_glyphs_file_required(self, populated: Path) -> None:
        """Test neither selection option is an error."""
        result = runner.invoke(app, ["export", str(populated)])
        assert result.exit_code == 2

    def test_set_and_glyphs_file_exclusive(self, populated: Path, glyph_lists) -> None:
        """Test both selection options together are an error."""
        result = runner.invoke(
            app,
            ["export", str(populated), "--set", "Latin", "-g", str(glyph_lists["Latin"])],
        )
        assert result.exit_code == 2

    def test_unknown_set(self, populated: Path, tmp_path: Path) -> None:
        """Test exporting a set that does not exist."""
        result = runner.invoke(
            app, ["export", str(populated), "--set", "Cyrillic", "-o", str(tmp_path / "build")]
        )
        assert result.exit_code == 1
        assert not (tmp_path / "build").exists()
