"""Domain models for Fontgarden.

This module contains the repository tree. Glyphs and the external font
documents it imports from and exports to are ufoLib2 objects:

- The repository: Fontgarden, Set, Source, Layer, GlyphRecord
- Cross-layer font queries: glyph_names, components_of
- Color annotations: Color

Key invariants:
- A glyph name has metadata or drawings in at most one Set
- Every Source has exactly one default Layer
- A Layer's color marks only refer to glyphs in that layer
"""

from fontgarden.domain.color import Color
from fontgarden.domain.font import component_names, components_of, glyph_names
from fontgarden.domain.garden import Fontgarden, Layer, Set, Source
from fontgarden.domain.records import GlyphRecord, OpenTypeCategory

__all__: list[str] = [
    # Enums
    "OpenTypeCategory",
    # Repository
    "Fontgarden",
    "GlyphRecord",
    "Layer",
    "Set",
    "Source",
    # Values
    "Color",
    # Font queries
    "component_names",
    "components_of",
    "glyph_names",
]
