"""CSV codec for glyph metadata and color annotation tables.

``glyph_data.csv`` columns: name, postscript_name, codepoints,
opentype_category, export. Code points are space separated uppercase hex
without a prefix. A missing export column means every glyph is exported.

``color_marks.csv`` columns: name, color. A missing file is an empty table.
"""

import csv
import string
from pathlib import Path

from fontgarden.domain.color import Color
from fontgarden.domain.records import GlyphRecord, OpenTypeCategory
from fontgarden.exceptions import LoadError, LoadErrorKind, NamingError
from fontgarden.io.naming import validate_name

GLYPH_DATA_COLUMNS = ("name", "postscript_name", "codepoints", "opentype_category", "export")
COLOR_MARKS_COLUMNS = ("name", "color")

_HEX_DIGITS = frozenset(string.hexdigits)


def parse_codepoints(text: str) -> list[int]:
    """Parse whitespace separated hex code points, dropping duplicates.

    Raises:
        ValueError: If a token is not a hex number naming a Unicode scalar value
    """
    codepoints: list[int] = []
    for token in text.split():
        if not _HEX_DIGITS.issuperset(token):
            raise ValueError(f"not a hexadecimal number: {token!r}")
        value = int(token, 16)
        if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
            raise ValueError(f"not a Unicode scalar value: {token!r}")
        if value not in codepoints:
            codepoints.append(value)
    return codepoints


def format_codepoints(codepoints: list[int]) -> str:
    return " ".join(f"{value:04X}" for value in codepoints)


def _parse_export(text: str | None) -> bool:
    if text is None or text.strip() == "":
        return True
    value = text.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"expected 'true' or 'false', got {text!r}")


def _row_name(raw: str | None, kind: LoadErrorKind) -> str:
    try:
        return validate_name(raw or "")
    except NamingError as e:
        raise LoadError(kind, str(e), raw=raw) from e


def load_glyph_data(path: Path) -> dict[str, GlyphRecord]:
    """Load a set's glyph metadata table.

    Args:
        path: Path to glyph_data.csv

    Returns:
        Glyph records by glyph name (empty if the file does not exist)

    Raises:
        LoadError: If the file cannot be read or a row is malformed
    """
    glyph_data: dict[str, GlyphRecord] = {}
    if not path.exists():
        return glyph_data

    try:
        with path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None:
                return glyph_data
            if "name" not in reader.fieldnames:
                raise LoadError(LoadErrorKind.GLYPH_DATA, "missing 'name' column")
            for row in reader:
                record_name, record = _parse_glyph_row(row)
                if record_name in glyph_data:
                    raise LoadError(
                        LoadErrorKind.GLYPH_DATA,
                        f"glyph '{record_name}' is listed twice",
                        glyph_name=record_name,
                    )
                glyph_data[record_name] = record
    except csv.Error as e:
        raise LoadError(LoadErrorKind.GLYPH_DATA, f"malformed CSV: {e}") from e
    except OSError as e:
        raise LoadError(LoadErrorKind.IO, f"cannot read {path.name}: {e}") from e

    return glyph_data


def _parse_glyph_row(row: dict[str, str | None]) -> tuple[str, GlyphRecord]:
    name = _row_name(row.get("name"), LoadErrorKind.GLYPH_DATA)

    raw_codepoints = row.get("codepoints") or ""
    try:
        codepoints = parse_codepoints(raw_codepoints)
    except ValueError as e:
        raise LoadError(
            LoadErrorKind.CODEPOINT,
            f"glyph '{name}': invalid code points {raw_codepoints!r}: {e}",
            glyph_name=name,
            raw=raw_codepoints,
        ) from e

    raw_category = row.get("opentype_category")
    try:
        category = OpenTypeCategory.parse(raw_category)
    except ValueError as e:
        raise LoadError(
            LoadErrorKind.OPENTYPE_CATEGORY,
            f"glyph '{name}': unknown OpenType category {raw_category!r}",
            glyph_name=name,
            raw=raw_category,
        ) from e

    raw_export = row.get("export")
    try:
        export = _parse_export(raw_export)
    except ValueError as e:
        raise LoadError(
            LoadErrorKind.GLYPH_DATA,
            f"glyph '{name}': invalid export flag {raw_export!r}",
            glyph_name=name,
            raw=raw_export,
        ) from e

    return name, GlyphRecord(
        postscript_name=row.get("postscript_name") or None,
        codepoints=codepoints,
        opentype_category=category,
        export=export,
    )


def write_glyph_data(glyph_data: dict[str, GlyphRecord], path: Path) -> None:
    """Write a set's glyph metadata table, sorted by glyph name.

    Raises:
        OSError: If the file cannot be written
    """
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(GLYPH_DATA_COLUMNS)
        for name in sorted(glyph_data):
            record = glyph_data[name]
            writer.writerow(
                (
                    name,
                    record.postscript_name or "",
                    format_codepoints(record.codepoints),
                    record.opentype_category.value,
                    "true" if record.export else "false",
                )
            )


def load_color_marks(path: Path) -> dict[str, Color]:
    """Load a layer's color annotation table.

    Args:
        path: Path to color_marks.csv

    Returns:
        Colors by glyph name (empty if the file does not exist)

    Raises:
        LoadError: If the file cannot be read or a row is malformed
    """
    color_marks: dict[str, Color] = {}
    if not path.exists():
        return color_marks

    try:
        with path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None:
                return color_marks
            missing = [column for column in COLOR_MARKS_COLUMNS if column not in reader.fieldnames]
            if missing:
                raise LoadError(
                    LoadErrorKind.COLOR_MARKS, f"missing columns: {', '.join(missing)}"
                )
            for row in reader:
                name = _row_name(row.get("name"), LoadErrorKind.COLOR_MARKS)
                raw_color = row.get("color") or ""
                try:
                    color_marks[name] = Color.from_string(raw_color)
                except ValueError as e:
                    raise LoadError(
                        LoadErrorKind.COLOR_MARKS,
                        f"glyph '{name}': invalid color {raw_color!r}: {e}",
                        glyph_name=name,
                        raw=raw_color,
                    ) from e
    except csv.Error as e:
        raise LoadError(LoadErrorKind.COLOR_MARKS, f"malformed CSV: {e}") from e
    except OSError as e:
        raise LoadError(LoadErrorKind.IO, f"cannot read {path.name}: {e}") from e

    return color_marks


def write_color_marks(color_marks: dict[str, Color], path: Path) -> None:
    """Write a layer's color annotation table, sorted by glyph name.

    Raises:
        OSError: If the file cannot be written
    """
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(COLOR_MARKS_COLUMNS)
        for name in sorted(color_marks):
            writer.writerow((name, color_marks[name].to_rgba_string()))


def load_glyph_list(path: Path) -> list[str]:
    """Read a glyph list file: one name per line, blank lines skipped.

    Raises:
        LoadError: If the file cannot be read or holds an invalid name
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(LoadErrorKind.IO, f"cannot read glyph list {path}: {e}") from e

    names: list[str] = []
    for line in text.splitlines():
        name = line.strip()
        if not name:
            continue
        try:
            names.append(validate_name(name))
        except NamingError as e:
            raise LoadError(LoadErrorKind.INVALID_NAME, str(e), raw=name) from e
    return names
