"""Font reader for loading UFO sources.

This module provides the FontReader class for loading UFO font sources
into ufoLib2 fonts.
"""

from pathlib import Path

from fontTools.ufoLib import DEFAULT_GLYPHS_DIRNAME, UFOReader
from fontTools.ufoLib.errors import UFOLibError
from ufoLib2 import Font

from fontgarden.exceptions import LoadError, LoadErrorKind


class FontReader:
    """Loads UFO sources eagerly into ufoLib2 fonts.

    Example:
        with FontReader(Path("Font-Bold.ufo")) as reader:
            font = reader.font
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the UFO directory or .ufoz file
        """
        self._font_path = font_path
        self._font: Font | None = None

    def load(self) -> None:
        """Read every layer, the lib and the info of the UFO.

        Raises:
            LoadError: If the UFO does not exist, has no default layer or
                cannot be read
        """
        if not self._font_path.exists():
            raise LoadError(LoadErrorKind.IO, f"Font file not found: {self._font_path}")
        try:
            reader = UFOReader(self._font_path, validate=True)
        except (UFOLibError, OSError) as e:
            raise LoadError(LoadErrorKind.IO, f"Cannot open {self._font_path}: {e}") from e

        try:
            if self._font_path.is_dir() and not (self._font_path / DEFAULT_GLYPHS_DIRNAME).is_dir():
                raise LoadError(
                    LoadErrorKind.NO_DEFAULT_LAYER, f"Font has no default layer: {self._font_path}"
                )
            self._font = Font.read(reader, lazy=False)
        except (UFOLibError, OSError) as e:
            raise LoadError(LoadErrorKind.IO, f"Cannot read {self._font_path}: {e}") from e
        finally:
            reader.close()

    @property
    def font(self) -> Font:
        """Return the loaded font.

        Raises:
            RuntimeError: If the font has not been loaded yet
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    def close(self) -> None:
        """Drop the loaded font."""
        self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def read_font(font_path: Path) -> Font:
    """Read a UFO source into a ufoLib2 Font.

    Raises:
        LoadError: If the UFO cannot be read
    """
    with FontReader(font_path) as reader:
        return reader.font
