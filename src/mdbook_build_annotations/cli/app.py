import logging
import sys
from typing import Annotated

import typer

from mdbook_build_annotations import PREPROCESSOR_NAME, __version__
from mdbook_build_annotations.cli.logs import init_logger
from mdbook_build_annotations.core.errors import AnnotationError
from mdbook_build_annotations.core.protocol import handle_preprocessing, supports_renderer

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="mdbook-build-annotations",
    help="mdBook preprocessor that adds package name, version and git commit to every chapter.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"mdbook-build-annotations {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def run(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=_print_version, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Read [context, book] from stdin and write the annotated book to stdout."""
    init_logger()
    if ctx.invoked_subcommand is not None:
        return
    try:
        handle_preprocessing(sys.stdin.buffer, sys.stdout)
    except AnnotationError as exc:
        logger.error("%s failed to handle preprocessing: %s", PREPROCESSOR_NAME, exc)
        raise typer.Exit(1) from exc


@app.command("supports")
def supports(
    renderer: Annotated[str, typer.Argument(help="Renderer name mdBook is about to run.")],
) -> None:
    """Check whether a renderer is supported by this preprocessor."""
    supported = supports_renderer(renderer)
    logger.debug("Renderer %s supported: %s", renderer, supported)
    raise typer.Exit(0 if supported else 1)


def main() -> None:
    app()
