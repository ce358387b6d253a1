"""Importing glyphs from a UFO font into a Fontgarden.

Import routes every incoming glyph to the set that already covers it, and
only unclaimed glyphs to the requested target set. Metadata is refreshed on
every import; drawings are replaced by name.
"""

from collections.abc import Iterable
from typing import Any

import structlog
from ufoLib2 import Font
from ufoLib2.objects import Glyph

from fontgarden.config import CyclePolicy
from fontgarden.core.closure import close
from fontgarden.domain.color import Color
from fontgarden.domain.font import components_of, glyph_names as font_glyph_names
from fontgarden.domain.garden import Fontgarden
from fontgarden.domain.records import GlyphRecord, OpenTypeCategory
from fontgarden.exceptions import LoadError, LoadErrorKind, NamingError
from fontgarden.io.converter import pop_mark_color
from fontgarden.io.naming import validate_directory_name

logger = structlog.get_logger(__name__)

POSTSCRIPT_NAMES_KEY = "public.postscriptNames"
OPENTYPE_CATEGORIES_KEY = "public.openTypeCategories"
SKIP_EXPORT_KEY = "public.skipExportGlyphs"
GLYPH_ORDER_KEY = "public.glyphOrder"


def _lib_mapping(font: Font, key: str) -> dict[str, Any]:
    value = font.lib.get(key, {})
    if not isinstance(value, dict):
        raise LoadError(LoadErrorKind.GLYPH_DATA, f"lib key '{key}' is not a dictionary")
    return value


def extract_glyph_data(font: Font, glyph_names: Iterable[str]) -> dict[str, GlyphRecord]:
    """Build glyph records from a font's lib tables.

    Glyphs missing from the tables get default metadata. Code points come
    from the default layer glyph.

    Raises:
        LoadError: If a lib table is malformed or names an unknown category
    """
    postscript_names = _lib_mapping(font, POSTSCRIPT_NAMES_KEY)
    categories = _lib_mapping(font, OPENTYPE_CATEGORIES_KEY)
    skip_export = font.lib.get(SKIP_EXPORT_KEY, [])
    if not isinstance(skip_export, list):
        raise LoadError(LoadErrorKind.GLYPH_DATA, f"lib key '{SKIP_EXPORT_KEY}' is not a list")
    skip_export_names = set(skip_export)

    glyph_data: dict[str, GlyphRecord] = {}
    for name in glyph_names:
        raw_category = categories.get(name)
        try:
            category = OpenTypeCategory.parse(raw_category)
        except ValueError as e:
            raise LoadError(
                LoadErrorKind.OPENTYPE_CATEGORY,
                f"glyph '{name}': unknown OpenType category {raw_category!r}",
                glyph_name=name,
                raw=raw_category,
            ) from e

        glyph = font.get(name)
        glyph_data[name] = GlyphRecord(
            postscript_name=postscript_names.get(name),
            codepoints=list(glyph.unicodes) if glyph is not None else [],
            opentype_category=category,
            export=name not in skip_export_names,
        )
    return glyph_data


def route_glyphs(
    fontgarden: Fontgarden, glyph_names: set[str], target_set_name: str
) -> dict[str, set[str]]:
    """Decide which set each glyph is imported into.

    Glyphs already covered by a set stay in that set; sets are consulted in
    name order. The remainder goes to ``target_set_name``.

    Returns:
        Glyph names by destination set name, without empty entries
    """
    routing: dict[str, set[str]] = {}
    leftovers = set(glyph_names)
    for set_name, set_ in fontgarden.iter_sets():
        claimed = set_.coverage() & leftovers
        if claimed:
            routing[set_name] = claimed
            leftovers -= claimed
    if leftovers:
        routing.setdefault(target_set_name, set()).update(leftovers)
    return routing


def import_glyphs(
    fontgarden: Fontgarden,
    font: Font,
    glyph_names: Iterable[str],
    set_name: str,
    source_name: str,
    cycle_policy: CyclePolicy = CyclePolicy.IGNORE,
) -> dict[str, set[str]]:
    """Import glyphs from a font into the Fontgarden.

    The requested names are first closed over the font's components in
    every layer. Each glyph then goes to the set that already covers it, or
    to ``set_name`` if no set does. In every destination set, the source
    named ``source_name`` is created if needed; the font's default layer is
    merged into the source's default layer and every other layer into the
    layer of the same name.

    Args:
        fontgarden: Repository to import into, modified in place
        font: External font, left unchanged
        glyph_names: Glyphs requested for import
        set_name: Set for glyphs not yet in any set
        source_name: Source the drawings belong to
        cycle_policy: Handling of cyclic component references

    Returns:
        Imported glyph names by destination set name

    Raises:
        LoadError: If names are invalid or the font's metadata tables or
            mark colors are malformed
    """
    for kind, name in (("set", set_name), ("source", source_name)):
        try:
            validate_directory_name(name)
        except NamingError as e:
            raise LoadError(LoadErrorKind.INVALID_NAME, f"invalid {kind} name: {e}", raw=name) from e

    requested = close(glyph_names, lambda name: components_of(font, name), cycle_policy)
    available = font_glyph_names(font)
    missing = requested - available
    if missing:
        logger.warning("Glyphs not in font", glyphs=sorted(missing))
    names = requested & available

    glyph_data = extract_glyph_data(font, names)
    routing = route_glyphs(fontgarden, names, set_name)
    default_layer_name = font.layers.defaultLayer.name

    # Copies and colors are taken before the repository is touched.
    prepared: list[tuple[str, list[tuple[Glyph, Color | None]]]] = []
    for font_layer in font.layers:
        entries = []
        for glyph in font_layer:
            if glyph.name not in names:
                continue
            glyph = glyph.copy()
            try:
                color = pop_mark_color(glyph)
            except ValueError as e:
                raise LoadError(
                    LoadErrorKind.COLOR_MARKS,
                    f"glyph '{glyph.name}': invalid mark color: {e}",
                    glyph_name=glyph.name,
                ).within("layer", font_layer.name) from e
            entries.append((glyph, color))
        if entries:
            prepared.append((font_layer.name, entries))

    for target_name, routed in sorted(routing.items()):
        logger.debug(
            "Routing glyphs",
            set=target_name,
            source=source_name,
            count=len(routed),
            rerouted=target_name != set_name,
        )
        set_ = fontgarden.get_or_create_set(target_name)
        for name in routed:
            set_.glyph_data[name] = glyph_data[name]

        source = set_.get_or_create_source(source_name, default_layer_name)
        for layer_name, entries in prepared:
            picked = [(glyph, color) for glyph, color in entries if glyph.name in routed]
            if not picked:
                continue
            if layer_name == default_layer_name:
                layer = source.default_layer()
            else:
                layer = source.get_or_create_layer(layer_name)
            for glyph, color in picked:
                layer.insert_glyph(glyph, color)

    return routing
