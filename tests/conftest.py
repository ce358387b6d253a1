"""Shared fixtures: in-memory glyphs and ufoLib2 fonts.

The fonts mimic two masters of MutatorSans: a "foreground" default layer,
a "background" layer with a couple of glyphs, composite glyphs and the
font-wide metadata tables.
"""

from collections.abc import Callable, Iterable

import pytest
from fontTools.misc.transform import Transform
from ufoLib2 import Font
from ufoLib2.objects import Component, Contour, Glyph, Info, Point

GlyphFactory = Callable[..., Glyph]
DocumentFactory = Callable[..., Font]


def _square(size: int) -> Contour:
    return Contour(
        points=[
            Point(0, 0, "line"),
            Point(size, 0, "line"),
            Point(size, size, "line"),
            Point(0, size, "line"),
        ]
    )


def _glyph(
    name: str,
    components: Iterable[str] = (),
    unicodes: Iterable[int] = (),
    width: int = 500,
    mark_color: str | None = None,
    contour_size: int | None = 100,
) -> Glyph:
    glyph = Glyph(name=name, width=width, unicodes=list(unicodes))
    if contour_size is not None and not components:
        glyph.contours.append(_square(contour_size))
    for offset, base in enumerate(components):
        glyph.components.append(Component(base, Transform(1, 0, 0, 1, offset * 100, 0)))
    glyph.markColor = mark_color
    return glyph


def _mutator_document(style_name: str = "LightWide", width: int = 500) -> Font:
    font = Font(
        info=Info(familyName="MutatorMathTest", styleName=style_name),
        lib={
            "public.postscriptNames": {"Aacute": "uni00C1"},
            "public.openTypeCategories": {"A": "base", "acute": "mark", "Aacute": "base"},
            "public.skipExportGlyphs": ["arrowleft"],
        },
    )
    font.layers.renameLayer(font.layers.defaultLayer.name, "foreground")
    foreground = font.layers.defaultLayer
    for glyph in (
        _glyph("A", unicodes=[0x41], width=width, mark_color="1,0,0,1"),
        _glyph("acute", unicodes=[0xB4], width=width // 2),
        _glyph("Aacute", components=["A", "acute"], unicodes=[0xC1], width=width),
        _glyph("S", unicodes=[0x53], width=width, mark_color="0,0.5,1,1"),
        _glyph("comma", unicodes=[0x2C], width=width // 2),
        _glyph("quotedblbase", components=["comma", "comma"], unicodes=[0x201E], width=width),
        _glyph("quotedblleft", unicodes=[0x201C], width=width),
        _glyph("arrowleft", unicodes=[0x2190], width=width),
    ):
        foreground.insertGlyph(glyph, copy=False)

    background = font.layers.newLayer("background")
    background.insertGlyph(_glyph("A", width=width, contour_size=80), copy=False)
    background.insertGlyph(
        _glyph("S", width=width, contour_size=80, mark_color="0,1,0,1"), copy=False
    )
    return font


@pytest.fixture
def make_glyph() -> GlyphFactory:
    """Factory for glyphs with a square contour or offset components."""
    return _glyph


@pytest.fixture
def make_document() -> DocumentFactory:
    """Factory for MutatorSans-like fonts."""
    return _mutator_document


@pytest.fixture
def light_wide() -> Font:
    return _mutator_document("LightWide", width=500)


@pytest.fixture
def light_condensed() -> Font:
    return _mutator_document("LightCondensed", width=300)
