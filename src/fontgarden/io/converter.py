"""Converters between single GLIF files and ufoLib2 glyphs.

fontTools' glifLib does the parsing and serialization; the ufoLib2 glyph is
passed to it as the glyph object and its point pen as the drawing target.
"""

from pathlib import Path

from fontTools.misc import etree
from fontTools.ufoLib.glifLib import readGlyphFromString, writeGlyphToString
from ufoLib2.objects import Glyph

from fontgarden.domain.color import Color


def glif_to_glyph(data: str | bytes) -> Glyph:
    """Parse GLIF data into a Glyph.

    Raises:
        fontTools.ufoLib.glifLib.GlifLibError: If the data is not valid GLIF
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    glyph = Glyph()
    readGlyphFromString(data, glyphObject=glyph, pointPen=glyph.getPointPen())
    # The glyph name is read-only on ufoLib2 glyphs, so glifLib skips it.
    return glyph.copy(name=etree.fromstring(data).get("name"))


def glyph_to_glif(glyph: Glyph) -> str:
    """Serialize a Glyph to GLIF text.

    Raises:
        fontTools.ufoLib.glifLib.GlifLibError: If the glyph cannot be represented
    """
    return writeGlyphToString(glyph.name, glyphObject=glyph, drawPointsFunc=glyph.drawPoints)


def read_glif(path: Path) -> Glyph:
    """Load a single .glif file."""
    return glif_to_glyph(path.read_bytes())


def write_glif(glyph: Glyph, path: Path) -> None:
    """Write a single .glif file."""
    path.write_text(glyph_to_glif(glyph), encoding="utf-8")


def pop_mark_color(glyph: Glyph) -> Color | None:
    """Remove the mark color from a glyph and return it as a Color.

    Raises:
        ValueError: If the lib holds something that is not a color string
    """
    value = glyph.markColor
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"expected a color string, got {type(value).__name__}")
    color = Color.from_string(value)
    glyph.markColor = None
    return color


def embed_mark_color(glyph: Glyph, color: Color | None) -> None:
    """Store a color annotation as the glyph's mark color."""
    if color is not None:
        glyph.markColor = color.to_rgba_string()
