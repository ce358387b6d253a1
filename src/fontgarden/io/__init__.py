"""I/O layer for fontgarden.

This module handles the on-disk Fontgarden layout and reading and writing
UFO font sources using ufoLib2.

Key responsibilities:
- Load and save the Fontgarden directory tree
- Derive collision-free, case-insensitive-safe file names
- Read and write the glyph metadata and color annotation tables
- Load UFO sources into ufoLib2 fonts and write exported fonts

Key classes and functions:
- FontReader: Load UFO sources
- FontWriter: Save exported documents
- load_fontgarden / save_fontgarden: Repository storage
"""

from fontgarden.io.metadata import load_glyph_list
from fontgarden.io.reader import FontReader, read_font
from fontgarden.io.storage import load_fontgarden, save_fontgarden
from fontgarden.io.writer import FontWriter, write_font

__all__ = [
    "FontReader",
    "FontWriter",
    "load_fontgarden",
    "load_glyph_list",
    "read_font",
    "save_fontgarden",
    "write_font",
]
