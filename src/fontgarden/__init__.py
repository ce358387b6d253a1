"""Fontgarden - A multi-source glyph repository.

Fontgarden stores the glyphs of a family of font sources split into
disjoint named sets, so that each set can be worked on, versioned and
exported on its own. Glyphs are imported from UFO sources and exported back
into UFO sources for any selection of sets and sources.

Example:
    $ fontgarden new MyFamily.fontgarden
    $ fontgarden import MyFamily.fontgarden --glyphs-file latin.txt --set Latin Bold.ufo
    $ fontgarden export MyFamily.fontgarden --set Latin --output-dir build
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
