"""CLI application entry point for fontgarden.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import structlog
import typer
from fontTools.ufoLib.errors import UFOLibError

from fontgarden import __version__
from fontgarden.cli.output import (
    console,
    print_document_info,
    print_error,
    print_header,
    print_routing,
    print_step,
    print_success,
)
from fontgarden.config import FontgardenSettings, LoggingConfig
from fontgarden.core import export_sources, import_glyphs
from fontgarden.domain.font import glyph_names
from fontgarden.domain.garden import Fontgarden
from fontgarden.exceptions import ExportError, FontgardenError
from fontgarden.io import (
    FontWriter,
    load_fontgarden,
    load_glyph_list,
    read_font,
    save_fontgarden,
)
from fontgarden.utils.logging import OperationLogger, configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="fontgarden",
    help="Store the glyphs of a font family in sets, and import and export them as UFO sources.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Fontgarden[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Manage a Fontgarden repository."""
    if log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(
            f"expected one of {', '.join(LOG_LEVELS)}", param_hint="--log-level"
        )

    settings = FontgardenSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper(),
            quiet=quiet,
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=settings.logging.quiet,
    )
    ctx.obj = settings


@app.command()
def new(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Fontgarden directory to create", show_default=False),
    ],
) -> None:
    """Create an empty Fontgarden.

    Example:
        fontgarden new MyFamily.fontgarden
    """
    settings: FontgardenSettings = ctx.obj
    if path.exists():
        print_error(f"Path already exists: {path}")
        raise typer.Exit(code=1)

    try:
        save_fontgarden(Fontgarden(), path, settings.storage)
    except FontgardenError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not settings.logging.quiet:
        console.print(f"Created empty Fontgarden at {path}", markup=False)


@app.command("import")
def import_command(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Fontgarden directory to import into", show_default=False),
    ],
    fonts: Annotated[
        list[Path],
        typer.Argument(help="UFO sources to import from", show_default=False),
    ],
    glyphs_files: Annotated[
        list[Path] | None,
        typer.Option(
            "--glyphs-file",
            "-g",
            help="Text file of glyph names to import, one per line; pairs with --set",
        ),
    ] = None,
    set_names: Annotated[
        list[str] | None,
        typer.Option(
            "--set",
            "-s",
            help="Set to import the glyphs of the matching --glyphs-file into",
        ),
    ] = None,
    source_name: Annotated[
        str | None,
        typer.Option(
            "--source-name",
            help="Source to import into (default: the font's style name)",
        ),
    ] = None,
) -> None:
    """Import glyphs from UFO sources into a Fontgarden.

    Glyphs already in a set stay in that set. Without --glyphs-file, every
    glyph of each font is imported into the default set.

    Example:
        fontgarden import MyFamily.fontgarden -g latin.txt -s Latin Bold.ufo Light.ufo
    """
    settings: FontgardenSettings = ctx.obj
    glyphs_files = glyphs_files or []
    set_names = set_names or []
    if len(glyphs_files) != len(set_names):
        raise typer.BadParameter(
            f"got {len(glyphs_files)} glyph files for {len(set_names)} sets",
            param_hint="--glyphs-file/--set",
        )
    if source_name is not None and len(fonts) > 1:
        raise typer.BadParameter(
            "can only be used with a single font", param_hint="--source-name"
        )

    quiet = settings.logging.quiet
    operation = OperationLogger(structlog.get_logger("fontgarden"))
    operation.start()

    try:
        if not quiet:
            print_header(__version__)
            print_step("Loading Fontgarden")
        fontgarden = load_fontgarden(path, settings.storage)
        batches = [
            (set_name, load_glyph_list(glyphs_file))
            for glyphs_file, set_name in zip(glyphs_files, set_names)
        ]

        for font_path in fonts:
            if not quiet:
                print_step(f"Importing {font_path.name}")
            font = read_font(font_path)
            name = source_name or font.info.styleName or font_path.stem
            operation.log_document_read(font_path, name)
            if not quiet:
                print_document_info(
                    path=str(font_path),
                    source_name=name,
                    glyph_count=len(glyph_names(font)),
                    layer_count=len(font.layers),
                )

            font_batches = batches or [
                (settings.importing.default_set_name, sorted(glyph_names(font)))
            ]
            for set_name, names in font_batches:
                routing = import_glyphs(
                    fontgarden,
                    font,
                    names,
                    set_name,
                    name,
                    settings.closure.cycle_policy,
                )
                operation.log_import(routing, name)
                if not quiet:
                    print_routing(routing)

        if not quiet:
            print_step("Saving Fontgarden")
        save_fontgarden(fontgarden, path, settings.storage)
    except FontgardenError as e:
        operation.log_error(e)
        print_error(str(e))
        raise typer.Exit(code=1)

    operation.finish()
    if not quiet:
        stats = operation.stats
        print_success(
            output_path=str(path),
            total_time_s=stats.duration_seconds,
            glyphs=stats.glyphs_imported,
            sets=len(stats.sets_touched),
        )


@app.command("export")
def export_command(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Fontgarden directory to export from", show_default=False),
    ],
    set_names: Annotated[
        list[str] | None,
        typer.Option(
            "--set",
            "-s",
            help="Set to export; may be repeated",
        ),
    ] = None,
    glyphs_file: Annotated[
        Path | None,
        typer.Option(
            "--glyphs-file",
            "-g",
            help="Alternatively, a text file of glyph names to export, one per line",
        ),
    ] = None,
    source_names: Annotated[
        list[str] | None,
        typer.Option(
            "--source-name",
            help="Source to export; may be repeated (default: all sources)",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory to write UFO sources into (default: current directory)",
        ),
    ] = None,
) -> None:
    """Export glyphs from a Fontgarden as one UFO source per source name.

    Composite glyphs are exported together with the glyphs they reference.

    Example:
        fontgarden export MyFamily.fontgarden --set Latin --set Punctuation -o build
    """
    settings: FontgardenSettings = ctx.obj
    if bool(set_names) == (glyphs_file is not None):
        raise typer.BadParameter(
            "exactly one of --set or --glyphs-file is required",
            param_hint="--set/--glyphs-file",
        )

    quiet = settings.logging.quiet
    output_dir = output_dir or Path.cwd()
    operation = OperationLogger(structlog.get_logger("fontgarden"))
    operation.start()

    try:
        if not quiet:
            print_header(__version__)
            print_step("Loading Fontgarden")
        fontgarden = load_fontgarden(path, settings.storage)
        if set_names:
            requested = fontgarden.glyphs_in_sets(set_names)
        else:
            requested = set(load_glyph_list(glyphs_file))
        sources = source_names or sorted(fontgarden.source_names())

        if not quiet:
            print_step("Assembling sources")
        documents = export_sources(
            fontgarden,
            requested,
            sources,
            settings.closure.cycle_policy,
            settings.export.embed_glyph_data,
        )

        if not quiet:
            print_step("Writing sources")
        for name, document in documents.items():
            output_path = FontWriter.get_output_path(
                output_dir, name, settings.export.document_extension
            )
            try:
                output_dir.mkdir(parents=True, exist_ok=True)
                FontWriter(document, output_path).save()
            except (OSError, UFOLibError) as e:
                raise ExportError(name, str(e)) from e
            operation.log_document_written(output_path, name, len(glyph_names(document)))
            if not quiet:
                console.print(f"  {output_path}", markup=False)
    except FontgardenError as e:
        operation.log_error(e)
        print_error(str(e))
        raise typer.Exit(code=1)

    operation.finish()
    if not quiet:
        stats = operation.stats
        print_success(
            output_path=str(output_dir),
            total_time_s=stats.duration_seconds,
            glyphs=stats.glyphs_exported,
            documents=stats.documents_written,
        )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
