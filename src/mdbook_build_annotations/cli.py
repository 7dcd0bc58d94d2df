"""mdbook-build-annotations CLI interface.

mdBook calls the preprocessor in two ways:
- without arguments: read ``[context, book]`` from stdin, write the book to stdout
- ``supports <renderer>``: exit 0 if the renderer is supported, 1 otherwise

Global options:
- --verbose: Enable debug output
- --quiet: Warnings and errors only
- --json-logs: Log JSON lines to stderr
- --version: Show version and exit
"""

from typing import Annotated

import typer

from mdbook_build_annotations import __version__
from mdbook_build_annotations.errors import AnnotationError
from mdbook_build_annotations.preprocessor import BuildAnnotations, handle_preprocessing
from mdbook_build_annotations.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="mdbook-build-annotations",
    help="mdBook preprocessor that stamps chapters with package and git provenance",
    add_completion=False,
)

_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"mdbook-build-annotations {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    json_logs: Annotated[
        bool,
        typer.Option(
            "--json-logs",
            help="Write log lines to stderr as JSON",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Append build provenance footers to every chapter of an mdBook book.

    Without a command, reads the book from stdin and writes the annotated
    book to stdout.
    """
    configure_from_cli(verbose=verbose, quiet=quiet, json_output=json_logs)

    if ctx.invoked_subcommand is not None:
        return

    preprocessor = BuildAnnotations()
    try:
        handle_preprocessing(preprocessor)
    except AnnotationError as e:
        _logger.error(f"{preprocessor.name} failed to handle preprocessing: {e}")
        raise typer.Exit(1)
    except Exception as e:
        _logger.exception(f"{preprocessor.name} failed to handle preprocessing: {e}")
        raise typer.Exit(1)


@app.command()
def supports(
    renderer: Annotated[
        str,
        typer.Argument(help="Renderer name, e.g. html"),
    ],
) -> None:
    """Check whether a renderer is supported by this preprocessor.

    Exit codes:
        0: Renderer supported
        1: Renderer not supported
    """
    supported = BuildAnnotations().supports_renderer(renderer)
    raise typer.Exit(0 if supported else 1)


if __name__ == "__main__":
    app()
