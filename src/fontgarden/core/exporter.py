"""Assembling output font documents from a Fontgarden.

Sources of the same name in different sets are unioned into one document,
pruned to the requested glyphs plus everything they reference.
"""

from collections.abc import Iterable

import structlog
from ufoLib2 import Font
from ufoLib2.constants import DEFAULT_LAYER_NAME

from fontgarden.config import CyclePolicy
from fontgarden.core.closure import close
from fontgarden.core.importer import (
    GLYPH_ORDER_KEY,
    OPENTYPE_CATEGORIES_KEY,
    POSTSCRIPT_NAMES_KEY,
    SKIP_EXPORT_KEY,
)
from fontgarden.domain.font import component_names, glyph_names as font_glyph_names
from fontgarden.domain.garden import Fontgarden, Layer, Source
from fontgarden.domain.records import GlyphRecord, OpenTypeCategory
from fontgarden.exceptions import ExportError
from fontgarden.io.converter import embed_mark_color

logger = structlog.get_logger(__name__)


def assemble_sources(
    fontgarden: Fontgarden, source_names: Iterable[str]
) -> dict[str, Source]:
    """Union the named sources across all sets.

    Every set's default layer maps onto the assembled default layer. When
    sets disagree on the default layer's name, the first set in name order
    decides it.

    Returns:
        Deep copies of the assembled sources by name
    """
    wanted = set(source_names)
    assembled: dict[str, Source] = {}
    for set_name, set_ in fontgarden.iter_sets():
        for source_name in sorted(wanted & set_.sources.keys()):
            source = set_.sources[source_name]
            target = assembled.get(source_name)
            if target is None:
                target = Source.with_default_layer(source.default_layer_name)
                assembled[source_name] = target
            elif target.default_layer_name != source.default_layer_name:
                logger.warning(
                    "Default layer names differ",
                    source=source_name,
                    set=set_name,
                    expected=target.default_layer_name,
                    found=source.default_layer_name,
                )
            for layer_name, layer in source.iter_layers():
                if layer.default:
                    target_layer = target.default_layer()
                else:
                    target_layer = target.get_or_create_layer(layer_name)
                _merge_layer(target_layer, layer)
    return assembled


def _merge_layer(target: Layer, layer: Layer) -> None:
    for name, glyph in layer.glyphs.items():
        target.insert_glyph(glyph.copy(), layer.color_marks.get(name))


def _collect_glyph_data(fontgarden: Fontgarden, names: set[str]) -> dict[str, GlyphRecord]:
    glyph_data: dict[str, GlyphRecord] = {}
    for _, set_ in fontgarden.iter_sets():
        for name, record in set_.glyph_data.items():
            if name in names:
                glyph_data[name] = record
    return glyph_data


def _embed_glyph_data(font: Font, glyph_data: dict[str, GlyphRecord]) -> None:
    present = font_glyph_names(font)
    postscript_names = {}
    categories = {}
    skip_export = []
    for name in sorted(present):
        record = glyph_data.get(name)
        if record is None:
            continue
        if record.postscript_name is not None:
            postscript_names[name] = record.postscript_name
        if record.opentype_category is not OpenTypeCategory.UNASSIGNED:
            categories[name] = record.opentype_category.value
        if not record.export:
            skip_export.append(name)

    if postscript_names:
        font.lib[POSTSCRIPT_NAMES_KEY] = postscript_names
    if categories:
        font.lib[OPENTYPE_CATEGORIES_KEY] = categories
    if skip_export:
        font.lib[SKIP_EXPORT_KEY] = skip_export
    font.lib[GLYPH_ORDER_KEY] = sorted(present)


def build_document(source: Source) -> Font:
    """Turn an assembled source into an output font.

    The source's default layer becomes the font's default layer under the
    source's own default layer name. Empty non-default layers are left out.
    Color annotations are embedded into the glyphs as mark colors.

    Raises:
        ValueError: If the font rejects a glyph, or a non-default layer
            takes the reserved default layer name
        KeyError: If the font already has a layer of that name
    """
    font = Font()
    font.layers.renameLayer(font.layers.defaultLayer.name, source.default_layer_name)
    for layer_name, layer in source.iter_layers():
        if layer.default:
            font_layer = font.layers.defaultLayer
        elif layer.is_empty():
            continue
        elif layer_name == DEFAULT_LAYER_NAME:
            raise ValueError(f"layer name '{layer_name}' is reserved for the default layer")
        else:
            font_layer = font.layers.newLayer(layer_name)
        for name in sorted(layer.glyphs):
            glyph = layer.glyphs[name]
            embed_mark_color(glyph, layer.color_marks.get(name))
            font_layer.insertGlyph(glyph, copy=False)
    return font


def export_sources(
    fontgarden: Fontgarden,
    glyph_names: Iterable[str],
    source_names: Iterable[str],
    cycle_policy: CyclePolicy = CyclePolicy.IGNORE,
    embed_glyph_data: bool = True,
) -> dict[str, Font]:
    """Build one output document per requested source.

    The requested glyphs are closed over the components found in the
    assembled layers, and every layer is pruned to that closed set. Sources
    left without any glyph are omitted from the result.

    Args:
        fontgarden: Repository to export from, left unchanged
        glyph_names: Glyphs requested for export
        source_names: Sources to export
        cycle_policy: Handling of cyclic component references
        embed_glyph_data: Whether to write glyph metadata into each
            document's lib

    Returns:
        Output documents by source name

    Raises:
        ExportError: If an output document cannot be built
    """
    assembled = assemble_sources(fontgarden, source_names)

    def components_of(name: str) -> list[str]:
        seen: dict[str, None] = {}
        for source in assembled.values():
            for layer in source.layers.values():
                glyph = layer.glyphs.get(name)
                if glyph is not None:
                    seen.update(dict.fromkeys(component_names(glyph)))
        return list(seen)

    closed = close(glyph_names, components_of, cycle_policy)
    glyph_data = _collect_glyph_data(fontgarden, closed) if embed_glyph_data else {}

    documents: dict[str, Font] = {}
    for source_name in sorted(assembled):
        source = assembled[source_name]
        for layer in source.layers.values():
            layer.retain(closed)
        if all(layer.is_empty() for layer in source.layers.values()):
            logger.debug("Skipping empty source", source=source_name)
            continue
        try:
            document = build_document(source)
        except (ValueError, KeyError) as e:
            raise ExportError(source_name, str(e)) from e
        if embed_glyph_data:
            _embed_glyph_data(document, glyph_data)
        logger.debug(
            "Source assembled",
            source=source_name,
            glyphs=len(font_glyph_names(document)),
            layers=len(document.layers),
        )
        documents[source_name] = document

    return documents
