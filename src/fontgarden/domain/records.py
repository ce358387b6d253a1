"""Per-glyph metadata shared by all sources of a set."""

from dataclasses import dataclass, field
from enum import Enum


class OpenTypeCategory(str, Enum):
    """OpenType glyph class, as stored in ``public.openTypeCategories``."""

    UNASSIGNED = "unassigned"
    BASE = "base"
    LIGATURE = "ligature"
    MARK = "mark"
    COMPONENT = "component"

    @classmethod
    def parse(cls, text: str | None) -> "OpenTypeCategory":
        """Parse the textual form of a category.

        An empty or missing value is ``UNASSIGNED``.

        Raises:
            ValueError: If the text names no category
        """
        if not text:
            return cls.UNASSIGNED
        return cls(text)


@dataclass
class GlyphRecord:
    """Metadata for one glyph name, independent of any drawing.

    Code points are kept unique in first-seen order.

    Attributes:
        postscript_name: Production name, if different from the glyph name
        codepoints: Unicode code points
        opentype_category: OpenType glyph class
        export: Whether the glyph is exported into compiled fonts
    """

    postscript_name: str | None = None
    codepoints: list[int] = field(default_factory=list)
    opentype_category: OpenTypeCategory = OpenTypeCategory.UNASSIGNED
    export: bool = True

    def __post_init__(self) -> None:
        self.codepoints = list(dict.fromkeys(self.codepoints))
