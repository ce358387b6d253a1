"""The Fontgarden repository tree.

A Fontgarden holds named Sets. Each Set owns the metadata of its glyphs and
one Source per contributing font; each Source owns named Layers, exactly one
of which is the default layer. A glyph name belongs to at most one Set.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ufoLib2.objects import Glyph

from fontgarden.domain.color import Color
from fontgarden.domain.records import GlyphRecord
from fontgarden.exceptions import UnknownSetError


@dataclass
class Layer:
    """One drawing layer of a source.

    Attributes:
        glyphs: Glyphs by name
        color_marks: Color annotations by glyph name, only for glyphs present
        default: Whether this is the source's default layer
    """

    glyphs: dict[str, Glyph] = field(default_factory=dict)
    color_marks: dict[str, Color] = field(default_factory=dict)
    default: bool = False

    def __post_init__(self) -> None:
        orphans = set(self.color_marks) - set(self.glyphs)
        if orphans:
            raise ValueError(f"color marks for missing glyphs: {sorted(orphans)}")

    def insert_glyph(self, glyph: Glyph, color: Color | None = None) -> None:
        """Insert or replace a glyph together with its color annotation."""
        if not glyph.name:
            raise ValueError("cannot insert a glyph without a name")
        self.glyphs[glyph.name] = glyph
        if color is None:
            self.color_marks.pop(glyph.name, None)
        else:
            self.color_marks[glyph.name] = color

    def retain(self, names: set[str]) -> None:
        """Drop every glyph and color annotation not in ``names``."""
        self.glyphs = {n: g for n, g in self.glyphs.items() if n in names}
        self.color_marks = {n: c for n, c in self.color_marks.items() if n in names}

    def is_empty(self) -> bool:
        return not self.glyphs


@dataclass
class Source:
    """One contributing font within a set, made of named layers."""

    layers: dict[str, Layer]

    def __post_init__(self) -> None:
        defaults = [name for name, layer in self.layers.items() if layer.default]
        if len(defaults) != 1:
            raise ValueError(
                f"a source needs exactly one default layer, found {len(defaults)}"
            )

    @classmethod
    def with_default_layer(cls, name: str) -> "Source":
        """Create a source holding one empty default layer."""
        return cls(layers={name: Layer(default=True)})

    @property
    def default_layer_name(self) -> str:
        return next(name for name, layer in self.layers.items() if layer.default)

    def default_layer(self) -> Layer:
        return self.layers[self.default_layer_name]

    def get_or_create_layer(self, name: str) -> Layer:
        """Return the named layer, creating an empty non-default one if absent."""
        layer = self.layers.get(name)
        if layer is None:
            layer = Layer()
            self.layers[name] = layer
        return layer

    def iter_layers(self) -> Iterator[tuple[str, Layer]]:
        """Iterate layers with the default layer first, the rest by name."""
        default_name = self.default_layer_name
        yield default_name, self.layers[default_name]
        for name in sorted(self.layers):
            if name != default_name:
                yield name, self.layers[name]

    def glyph_names(self) -> set[str]:
        names: set[str] = set()
        for layer in self.layers.values():
            names.update(layer.glyphs)
        return names


@dataclass
class Set:
    """A disjoint partition of the glyph namespace.

    Attributes:
        glyph_data: Metadata records by glyph name
        sources: Sources by name
    """

    glyph_data: dict[str, GlyphRecord] = field(default_factory=dict)
    sources: dict[str, Source] = field(default_factory=dict)

    def coverage(self) -> set[str]:
        """Return every glyph name with metadata or a drawing in this set.

        Computed from the current contents on every call.
        """
        names = set(self.glyph_data)
        for source in self.sources.values():
            names.update(source.glyph_names())
        return names

    def get_or_create_source(self, name: str, default_layer_name: str) -> Source:
        """Return the named source, creating it with an empty default layer."""
        source = self.sources.get(name)
        if source is None:
            source = Source.with_default_layer(default_layer_name)
            self.sources[name] = source
        return source


@dataclass
class Fontgarden:
    """The whole multi-source glyph repository."""

    sets: dict[str, Set] = field(default_factory=dict)

    def iter_sets(self) -> Iterator[tuple[str, Set]]:
        """Iterate sets ordered by name."""
        for name in sorted(self.sets):
            yield name, self.sets[name]

    def get_or_create_set(self, name: str) -> Set:
        set_ = self.sets.get(name)
        if set_ is None:
            set_ = Set()
            self.sets[name] = set_
        return set_

    def coverage(self) -> set[str]:
        names: set[str] = set()
        for set_ in self.sets.values():
            names.update(set_.coverage())
        return names

    def glyphs_in_sets(self, set_names: Iterable[str]) -> set[str]:
        """Return the combined coverage of the named sets.

        Raises:
            UnknownSetError: If a name does not refer to an existing set
        """
        names: set[str] = set()
        for set_name in set_names:
            set_ = self.sets.get(set_name)
            if set_ is None:
                raise UnknownSetError(set_name)
            names.update(set_.coverage())
        return names

    def source_names(self) -> set[str]:
        """Return the names of all sources across all sets."""
        names: set[str] = set()
        for set_ in self.sets.values():
            names.update(set_.sources)
        return names
