"""Directory storage for a Fontgarden.

Layout::

    <root>/set.<SetName>/
        glyph_data.csv
        source.<SourceName>/
            glyphs/                     default layer
                layerinfo.plist         { name: <LayerName> }
                color_marks.csv
                <glyph file>.glif
            glyphs.<layer file name>/   one per non-default layer

Every failure is wrapped once per container on the way up, so errors name
the full set/source/layer/glyph path.
"""

import shutil
from collections.abc import Callable
from pathlib import Path

import structlog
from fontTools.misc import plistlib
from fontTools.ufoLib.errors import UFOLibError

from fontgarden.config import StorageConfig
from fontgarden.domain.garden import Fontgarden, Layer, Set, Source
from fontgarden.exceptions import (
    FileNameExhaustedError,
    LoadError,
    LoadErrorKind,
    NamingError,
    SaveError,
    SaveErrorKind,
)
from fontgarden.io.converter import read_glif, write_glif
from fontgarden.io.metadata import (
    load_color_marks,
    load_glyph_data,
    write_color_marks,
    write_glyph_data,
)
from fontgarden.io.naming import (
    user_name_to_file_name,
    validate_directory_name,
    validate_name,
)

logger = structlog.get_logger(__name__)


def _strip_prefix(directory: Path, prefix: str) -> str | None:
    if not directory.is_dir() or not directory.name.startswith(prefix):
        return None
    return directory.name[len(prefix):]


def _entry_name(raw: str, validate: Callable[[str], str] = validate_name) -> str:
    try:
        return validate(raw)
    except NamingError as e:
        raise LoadError(LoadErrorKind.INVALID_NAME, str(e), raw=raw) from e


def _list_dir(path: Path) -> list[Path]:
    try:
        return sorted(path.iterdir())
    except OSError as e:
        raise LoadError(LoadErrorKind.IO, f"cannot list {path}: {e}") from e


# Loading


def load_fontgarden(path: Path, config: StorageConfig | None = None) -> Fontgarden:
    """Load a Fontgarden from a directory.

    Args:
        path: Root directory of the Fontgarden
        config: Storage layout, defaults to the standard layout

    Returns:
        The loaded Fontgarden

    Raises:
        LoadError: If the directory is missing, malformed, or two sets
            cover the same glyph name
    """
    config = config or StorageConfig()
    if not path.is_dir():
        raise LoadError(LoadErrorKind.NOT_A_DIRECTORY, f"a Fontgarden must be a directory: {path}")

    fontgarden = Fontgarden()
    seen_glyph_names: set[str] = set()

    for entry in _list_dir(path):
        raw_name = _strip_prefix(entry, config.set_prefix)
        if raw_name is None:
            continue
        set_name = _entry_name(raw_name, validate_directory_name)
        try:
            set_ = _load_set(entry, config)
        except LoadError as e:
            raise e.within("set", set_name) from e

        coverage = set_.coverage()
        overlap = seen_glyph_names & coverage
        if overlap:
            raise LoadError(
                LoadErrorKind.DUPLICATE_GLYPHS,
                f"set '{set_name}' contains glyphs already in another set: "
                f"{', '.join(sorted(overlap))}",
                set_name=set_name,
                glyph_names=sorted(overlap),
            )
        seen_glyph_names |= coverage
        fontgarden.sets[set_name] = set_

    logger.debug("Fontgarden loaded", path=str(path), sets=len(fontgarden.sets))
    return fontgarden


def _load_set(path: Path, config: StorageConfig) -> Set:
    glyph_data = load_glyph_data(path / config.glyph_data_file)

    sources: dict[str, Source] = {}
    for entry in _list_dir(path):
        raw_name = _strip_prefix(entry, config.source_prefix)
        if raw_name is None:
            continue
        source_name = _entry_name(raw_name, validate_directory_name)
        try:
            sources[source_name] = _load_source(entry, config)
        except LoadError as e:
            raise e.within("source", source_name) from e

    return Set(glyph_data=glyph_data, sources=sources)


def _load_source(path: Path, config: StorageConfig) -> Source:
    layers: dict[str, Layer] = {}
    for entry in _list_dir(path):
        if not entry.is_dir():
            continue
        is_default = entry.name == config.default_layer_dir
        if not is_default and not entry.name.startswith(config.layer_dir_prefix):
            continue
        try:
            layer_name, layer = _load_layer(entry, config, is_default)
        except LoadError as e:
            raise e.within("layer directory", entry.name) from e
        if layer_name in layers:
            raise LoadError(
                LoadErrorKind.DUPLICATE_LAYER,
                f"two layer directories are named '{layer_name}'",
                layer_name=layer_name,
            )
        layers[layer_name] = layer

    if not any(layer.default for layer in layers.values()):
        raise LoadError(
            LoadErrorKind.NO_DEFAULT_LAYER,
            f"no default layer directory '{config.default_layer_dir}' found",
        )
    return Source(layers=layers)


def _load_layer(path: Path, config: StorageConfig, is_default: bool) -> tuple[str, Layer]:
    layer_info_path = path / config.layer_info_file
    try:
        with layer_info_path.open("rb") as f:
            layer_info = plistlib.load(f)
    except OSError as e:
        raise LoadError(LoadErrorKind.IO, f"cannot read {config.layer_info_file}: {e}") from e
    except (ValueError, SyntaxError) as e:
        raise LoadError(
            LoadErrorKind.LAYER_INFO, f"malformed {config.layer_info_file}: {e}"
        ) from e
    if not isinstance(layer_info, dict) or not isinstance(layer_info.get("name"), str):
        raise LoadError(
            LoadErrorKind.LAYER_INFO, f"{config.layer_info_file} has no layer name"
        )
    layer_name = _entry_name(layer_info["name"])

    glyphs = {}
    for entry in _list_dir(path):
        if not entry.is_file() or entry.suffix != config.glyph_suffix:
            continue
        try:
            glyph = read_glif(entry)
        except (UFOLibError, OSError) as e:
            raise LoadError(
                LoadErrorKind.GLYPH, f"cannot read glyph file {entry.name}: {e}", raw=entry.name
            ) from e
        if glyph.name in glyphs:
            raise LoadError(
                LoadErrorKind.DUPLICATE_GLYPH_FILE,
                f"glyph '{glyph.name}' is stored in more than one file",
                glyph_name=glyph.name,
            )
        glyphs[glyph.name] = glyph

    color_marks = load_color_marks(path / config.color_marks_file)
    orphans = sorted(set(color_marks) - set(glyphs))
    if orphans:
        raise LoadError(
            LoadErrorKind.COLOR_MARKS,
            f"color marks for glyphs not in the layer: {', '.join(orphans)}",
            glyph_names=orphans,
        )

    return layer_name, Layer(glyphs=glyphs, color_marks=color_marks, default=is_default)


# Saving


def save_fontgarden(
    fontgarden: Fontgarden, path: Path, config: StorageConfig | None = None
) -> None:
    """Save a Fontgarden, replacing anything at ``path``.

    Not crash-atomic: callers that need atomicity save to a temporary
    directory and rename it.

    Raises:
        SaveError: If any part of the tree cannot be written
    """
    config = config or StorageConfig()
    try:
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()
    except OSError as e:
        raise SaveError(SaveErrorKind.CLEANUP, f"cannot remove {path}: {e}") from e
    try:
        path.mkdir(parents=True)
    except OSError as e:
        raise SaveError(SaveErrorKind.CREATE_DIR, f"cannot create {path}: {e}") from e

    for set_name, set_ in fontgarden.iter_sets():
        try:
            _save_set(set_, path / f"{config.set_prefix}{set_name}", config)
        except SaveError as e:
            raise e.within("set", set_name) from e

    logger.debug("Fontgarden saved", path=str(path), sets=len(fontgarden.sets))


def _mkdir(path: Path) -> None:
    try:
        path.mkdir()
    except OSError as e:
        raise SaveError(SaveErrorKind.CREATE_DIR, f"cannot create {path.name}: {e}") from e


def _save_set(set_: Set, path: Path, config: StorageConfig) -> None:
    _mkdir(path)
    try:
        write_glyph_data(set_.glyph_data, path / config.glyph_data_file)
    except OSError as e:
        raise SaveError(
            SaveErrorKind.WRITE_GLYPH_DATA, f"cannot write {config.glyph_data_file}: {e}"
        ) from e

    for source_name in sorted(set_.sources):
        try:
            _save_source(
                set_.sources[source_name], path / f"{config.source_prefix}{source_name}", config
            )
        except SaveError as e:
            raise e.within("source", source_name) from e


def _save_source(source: Source, path: Path, config: StorageConfig) -> None:
    _mkdir(path)
    existing_dir_names = {config.default_layer_dir.lower()}
    for layer_name, layer in source.iter_layers():
        try:
            if layer.default:
                dir_name = config.default_layer_dir
            else:
                try:
                    dir_name = user_name_to_file_name(
                        layer_name, existing_dir_names, prefix=config.layer_dir_prefix
                    )
                except FileNameExhaustedError as e:
                    raise SaveError(SaveErrorKind.FILE_NAME, str(e)) from e
                existing_dir_names.add(dir_name.lower())
            _save_layer(layer_name, layer, path / dir_name, config)
        except SaveError as e:
            raise e.within("layer", layer_name) from e


def _save_layer(layer_name: str, layer: Layer, path: Path, config: StorageConfig) -> None:
    _mkdir(path)
    try:
        with (path / config.layer_info_file).open("wb") as f:
            plistlib.dump({"name": layer_name}, f)
    except OSError as e:
        raise SaveError(
            SaveErrorKind.WRITE_LAYER_INFO, f"cannot write {config.layer_info_file}: {e}"
        ) from e

    existing_file_names: set[str] = set()
    for glyph_name in sorted(layer.glyphs):
        try:
            file_name = user_name_to_file_name(
                glyph_name, existing_file_names, suffix=config.glyph_suffix
            )
        except FileNameExhaustedError as e:
            raise SaveError(SaveErrorKind.FILE_NAME, str(e)).within("glyph", glyph_name) from e
        existing_file_names.add(file_name.lower())
        try:
            write_glif(layer.glyphs[glyph_name], path / file_name)
        except (UFOLibError, OSError) as e:
            raise SaveError(
                SaveErrorKind.WRITE_GLYPH, f"cannot write {file_name}: {e}"
            ).within("glyph", glyph_name) from e

    try:
        write_color_marks(layer.color_marks, path / config.color_marks_file)
    except OSError as e:
        raise SaveError(
            SaveErrorKind.WRITE_COLOR_MARKS, f"cannot write {config.color_marks_file}: {e}"
        ) from e
