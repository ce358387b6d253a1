"""Exception hierarchy for Fontgarden.

Load and save failures are tagged with a ``kind`` and wrapped once by every
container they pass through (layer, source, set), so the final error names
the exact path at which the failure happened. The wrapped error is kept as
``__cause__``.
"""

from collections.abc import Iterable
from enum import Enum, auto
from typing import Any


class FontgardenError(Exception):
    """Base exception for all Fontgarden errors."""

    pass


class NamingError(FontgardenError):
    """A set, source, layer or glyph name is not a valid identifier."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}")


class FileNameExhaustedError(FontgardenError):
    """No collision-free file name could be derived for a user name."""

    def __init__(self, name: str, attempts: int) -> None:
        self.name = name
        self.attempts = attempts
        super().__init__(
            f"Could not find a free file name for {name!r} after {attempts} attempts"
        )


class UnknownSetError(FontgardenError):
    """A requested set does not exist in the Fontgarden."""

    def __init__(self, set_name: str) -> None:
        self.set_name = set_name
        super().__init__(f"No set named '{set_name}' in the Fontgarden")


class ComponentCycleError(FontgardenError):
    """A composite glyph references itself through its components."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Component cycle: {' -> '.join(cycle)}")


class _PathError(FontgardenError):
    """An error that records the chain of containers it was raised from."""

    def __init__(
        self,
        kind: Enum,
        message: str,
        path: Iterable[tuple[str, str]] = (),
        **context: Any,
    ) -> None:
        self.kind = kind
        self.message = message
        self.path: tuple[tuple[str, str], ...] = tuple(path)
        self.context = context
        super().__init__(self._render())

    def _render(self) -> str:
        if not self.path:
            return self.message
        location = " / ".join(f"{container} '{name}'" for container, name in self.path)
        return f"{location}: {self.message}"

    def within(self, container: str, name: str) -> "_PathError":
        """Return this error wrapped by an enclosing container.

        Callers raise the result ``from`` the original error.
        """
        return type(self)(
            self.kind,
            self.message,
            path=((container, name), *self.path),
            **self.context,
        )


class LoadErrorKind(Enum):
    """Variants of a failure while loading or importing."""

    NOT_A_DIRECTORY = auto()
    IO = auto()
    INVALID_NAME = auto()
    DUPLICATE_GLYPHS = auto()
    NO_DEFAULT_LAYER = auto()
    DUPLICATE_LAYER = auto()
    DUPLICATE_GLYPH_FILE = auto()
    LAYER_INFO = auto()
    GLYPH = auto()
    GLYPH_DATA = auto()
    COLOR_MARKS = auto()
    OPENTYPE_CATEGORY = auto()
    CODEPOINT = auto()


class LoadError(_PathError):
    """Error loading a Fontgarden or reading an external font document."""

    kind: LoadErrorKind


class SaveErrorKind(Enum):
    """Variants of a failure while saving."""

    CLEANUP = auto()
    CREATE_DIR = auto()
    FILE_NAME = auto()
    WRITE_GLYPH_DATA = auto()
    WRITE_LAYER_INFO = auto()
    WRITE_COLOR_MARKS = auto()
    WRITE_GLYPH = auto()


class SaveError(_PathError):
    """Error saving a Fontgarden to disk."""

    kind: SaveErrorKind


class ExportError(FontgardenError):
    """Error building or writing an output font document."""

    def __init__(self, source_name: str, reason: str) -> None:
        self.source_name = source_name
        self.reason = reason
        super().__init__(f"Failed to export source '{source_name}': {reason}")
