"""Command-line interface for Drafty."""

import logging
from pathlib import Path
from typing import Callable, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from drafty_text import __version__
from drafty_text.config import Settings, get_settings
from drafty_text.formats import SUPPORTED_EXTENSIONS, get_handler, to_console_text
from drafty_text.formats.html_handler import to_html
from drafty_text.formats.json_handler import to_json
from drafty_text.formats.txt_handler import to_markup
from drafty_text.formatting.ir import Document

app = typer.Typer(
    name="drafty-text",
    help="Convert inline markup to Drafty documents and render them.",
    add_completion=False,
)
console = Console()

# Formats which can be printed to stdout
PRINTERS: dict[str, Callable[[Document], str]] = {
    "json": to_json,
    "html": to_html,
    "txt": to_markup,
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Drafty v{__version__}")
        raise typer.Exit()


def load_config() -> Settings:
    """Load settings, exiting with a message if they are invalid."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    settings = load_config()
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_document(path: Path) -> Document:
    """Read a document with the handler matching the file extension."""
    handler = get_handler(path.suffix)()
    return handler.read(path)


def convert_file(
    input_path: Path,
    output_path: Optional[Path],
    output_format: str,
    verbose: bool,
) -> bool:
    """Convert a single file. Returns True on success."""
    if output_path is None and output_format not in PRINTERS:
        console.print(
            f"[red]Error:[/red] Unknown format: {output_format} "
            f"(choose from {', '.join(PRINTERS)})"
        )
        return False

    if verbose:
        console.print(f"[blue]Input:[/blue] {input_path}")
        console.print(f"[blue]Output:[/blue] {output_path or output_format}")

    try:
        document = load_document(input_path)
        if output_path is None:
            typer.echo(PRINTERS[output_format](document))
        else:
            get_handler(output_path.suffix)().write(document, output_path)
            console.print(f"[green]Success:[/green] {output_path}")
        return True
    except Exception as e:
        console.print(f"[red]Error processing {input_path.name}:[/red] {e}")
        if verbose:
            console.print_exception()
        return False


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Convert inline markup (*bold*, _italic_, ~strike~, `code`) into
    Drafty documents and render them as JSON, HTML, text or DOCX.
    """


@app.command()
def convert(
    path: Path = typer.Argument(
        ...,
        help=f"Input file ({', '.join(SUPPORTED_EXTENSIONS)})",
        exists=True,
        dir_okay=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file; its extension selects the format",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Format printed when no output file is given: json, html or txt",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """
    Convert a document between formats.

    Examples:

        drafty-text convert note.txt

        drafty-text convert note.txt --format html

        drafty-text convert note.txt -o note.docx

        drafty-text convert note.json -o note.html
    """
    setup_logging(verbose)
    use_format = (output_format or get_settings().output_format).lower()

    success = convert_file(path, output, use_format, verbose)
    raise typer.Exit(0 if success else 1)


@app.command()
def show(
    path: Path = typer.Argument(
        ...,
        help="Input file to display",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Render a document in the terminal."""
    setup_logging(verbose)
    try:
        document = load_document(path)
    except Exception as e:
        console.print(f"[red]Error processing {path.name}:[/red] {e}")
        raise typer.Exit(1)

    console.print(to_console_text(document))


if __name__ == "__main__":
    app()
