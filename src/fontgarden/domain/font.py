"""Queries over ufoLib2 fonts that span every layer.

Import and export treat a glyph as present, and its components as
referenced, when any layer has them.
"""

from ufoLib2 import Font
from ufoLib2.objects import Glyph


def component_names(glyph: Glyph) -> list[str]:
    """Return the base glyph names of a glyph's components, in order."""
    return [component.baseGlyph for component in glyph.components]


def glyph_names(font: Font) -> set[str]:
    """Return the names of glyphs present in any layer of a font."""
    names: set[str] = set()
    for layer in font.layers:
        names.update(layer.keys())
    return names


def components_of(font: Font, name: str) -> list[str]:
    """Return the glyphs ``name`` references in any layer, first seen first.

    Args:
        font: Font to search
        name: Glyph name

    Returns:
        Base glyph names without duplicates; empty if no layer has the glyph
    """
    seen: dict[str, None] = {}
    for layer in font.layers:
        glyph = layer.get(name)
        if glyph is not None:
            seen.update(dict.fromkeys(component_names(glyph)))
    return list(seen)
