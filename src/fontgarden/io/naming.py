"""Name validation and collision-free file naming.

File names are derived from glyph and layer names so that they stay unique
on case-insensitive file systems: uppercase letters are followed by an
underscore, characters that are illegal on common file systems become
underscores, and reserved device names are escaped. Callers track the names
already used in a directory (lowercased) and get a numbered variant on
collision.
"""

from fontgarden.exceptions import FileNameExhaustedError, NamingError

ILLEGAL_CHARACTERS = frozenset('":*+/<>?[\\]|')

PATH_SEPARATORS = ("/", "\\")

RESERVED_FILE_NAMES = frozenset(
    ["con", "prn", "aux", "clock$", "nul"]
    + [f"com{i}" for i in range(1, 10)]
    + [f"lpt{i}" for i in range(1, 10)]
)

MAX_FILE_NAME_LENGTH = 255
MAX_COLLISION_ATTEMPTS = 99


def validate_name(name: str) -> str:
    """Check that a name is usable as a set, source, layer or glyph name.

    Names must be non-empty and free of control characters.

    Args:
        name: Raw name text

    Returns:
        The name, unchanged

    Raises:
        NamingError: If the name is invalid
    """
    if not name:
        raise NamingError(name, "name is empty")
    for char in name:
        if ord(char) < 0x20 or 0x7F <= ord(char) <= 0x9F:
            raise NamingError(name, f"contains control character {ord(char):#04x}")
    return name


def validate_directory_name(name: str) -> str:
    """Check a set or source name, which is stored verbatim as a directory name.

    On top of ``validate_name``, path separators are rejected.

    Raises:
        NamingError: If the name is invalid
    """
    validate_name(name)
    for separator in PATH_SEPARATORS:
        if separator in name:
            raise NamingError(name, f"contains path separator {separator!r}")
    return name


def user_name_to_file_name(
    name: str,
    existing: set[str],
    prefix: str = "",
    suffix: str = "",
) -> str:
    """Derive a file name for a glyph or layer name.

    Args:
        name: Glyph or layer name
        existing: Lowercased file names already in use
        prefix: Text placed verbatim before the name
        suffix: Text placed after the name, e.g. ".glif"

    Returns:
        A file name whose lowercased form is not in ``existing``

    Raises:
        FileNameExhaustedError: If all numbered variants are taken
    """
    parts = [prefix]
    for index, char in enumerate(name):
        if char in ILLEGAL_CHARACTERS:
            parts.append("_")
        elif index == 0 and char == "." and not prefix:
            parts.append("_")
        elif char.isupper():
            parts.append(char + "_")
        else:
            parts.append(char)
    stem = "".join(parts)

    if stem.lower() in RESERVED_FILE_NAMES:
        stem = "_" + stem

    stem = stem[: MAX_FILE_NAME_LENGTH - len(suffix)]

    if not suffix:
        trimmed = stem.rstrip(". ")
        stem = trimmed + "_" * (len(stem) - len(trimmed))

    file_name = stem + suffix
    if file_name.lower() not in existing:
        return file_name

    # Numbered variants need two more characters.
    base = stem[: MAX_FILE_NAME_LENGTH - len(suffix) - 2]
    for counter in range(1, MAX_COLLISION_ATTEMPTS + 1):
        candidate = f"{base}{counter:02d}{suffix}"
        if candidate.lower() not in existing:
            return candidate

    raise FileNameExhaustedError(name, MAX_COLLISION_ATTEMPTS)
