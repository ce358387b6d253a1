"""Core algorithms for fontgarden.

This module contains the operations on the repository tree:

- Composite closure (transitive component dependencies)
- Import (routing glyphs from a font document into sets)
- Export (assembling and pruning per-source output documents)

All functions work on in-memory objects only; reading and writing files is
left to ``fontgarden.io``.

Key functions:
- close: Expand glyph names by their component references
- find_component_cycles: Report cyclic component references
- import_glyphs: Merge glyphs from a font document into a Fontgarden
- route_glyphs: Decide the destination set of each glyph
- export_sources: Build output documents for a glyph and source selection
- assemble_sources: Union same-named sources across sets
"""

from fontgarden.core.closure import close, find_component_cycles
from fontgarden.core.exporter import assemble_sources, build_document, export_sources
from fontgarden.core.importer import extract_glyph_data, import_glyphs, route_glyphs

__all__ = [
    # Closure
    "close",
    "find_component_cycles",
    # Export
    "assemble_sources",
    "build_document",
    "export_sources",
    # Import
    "extract_glyph_data",
    "import_glyphs",
    "route_glyphs",
]
