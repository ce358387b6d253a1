"""Rich console output helpers for the CLI."""

from rich.console import Console
from rich.markup import escape
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Fontgarden[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_document_info(path: str, source_name: str, glyph_count: int, layer_count: int) -> None:
    """Print information about a font document read for import.

    Args:
        path: Path to the document
        source_name: Source the document is imported as
        glyph_count: Number of glyphs across all layers
        layer_count: Number of layers
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    line.append(f" ({source_name})")
    console.print(line)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {layer_count} layers")


def print_routing(routing: dict[str, set[str]]) -> None:
    """Print how imported glyphs were distributed over sets.

    Args:
        routing: Glyph names by destination set name
    """
    for set_name, glyph_names in sorted(routing.items()):
        console.print(f"  [green]{len(glyph_names)}[/green] glyphs {SYM_DOT} set {escape(set_name)}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    total_time_s: float,
    glyphs: int,
    sets: int | None = None,
    documents: int | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Fontgarden or output directory written
        total_time_s: Total run time in seconds
        glyphs: Number of glyphs imported or exported
        sets: Number of sets touched, for imports
        documents: Number of documents written, for exports
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    parts = [f"{glyphs} glyphs"]
    if sets is not None:
        parts.append(f"{sets} sets")
    if documents is not None:
        parts.append(f"{documents} documents")
    console.print("  " + f" {SYM_DOT} ".join(parts))


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")
