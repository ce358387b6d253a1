"""Font writer for saving exported fonts as UFO sources."""

from pathlib import Path

from ufoLib2 import Font


class FontWriter:
    """Writes a ufoLib2 Font as a UFO 3 source.

    An existing file or directory at the output path is replaced.

    Example:
        writer = FontWriter(font, Path("Bold.ufo"))
        writer.save()
    """

    def __init__(self, font: Font, output_path: Path) -> None:
        """Initialize the font writer.

        Args:
            font: The font to write
            output_path: Path where the UFO will be saved
        """
        self._font = font
        self._output_path = output_path

    def save(self) -> None:
        """Save the font to the output path.

        Raises:
            OSError: If the output cannot be replaced or written
            fontTools.ufoLib.errors.UFOLibError: If the font is not
                representable as a UFO
        """
        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        self._font.save(self._output_path, overwrite=True)

    @staticmethod
    def get_output_path(output_dir: Path, source_name: str, extension: str = "ufo") -> Path:
        """Generate the output path for an exported source.

        Converts: ("out", "Bold") -> out/Bold.ufo

        Args:
            output_dir: Directory to write into
            source_name: Name of the exported source
            extension: Document extension without the dot

        Returns:
            Path of the output document
        """
        return output_dir / f"{source_name}.{extension}"


def write_font(font: Font, output_path: Path) -> None:
    """Write a Font as a UFO source, replacing existing output."""
    FontWriter(font, output_path).save()
