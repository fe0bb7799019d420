"""CLI entry point for mdt. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from mdt.term.config import RenderConfig, load_config
from mdt.term.errors import MdtError
from mdt.term.parser import parse
from mdt.term.renderer import Renderer
from mdt.term.utils import Writer

logger = logging.getLogger(__name__)


def render_source(source: str, output: Writer, config: RenderConfig | None = None) -> None:
    """Parse markdown *source* and render it to *output*."""
    Renderer(config).render(parse(source), output)


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "-t/-T",
    "--truecolor/--no-truecolor",
    default=None,
    help="Highlight code with 24-bit color (default: detect from the terminal)",
)
@click.option("-a", "--ascii", "ascii_tables", is_flag=True, help="Draw tables with ASCII borders")
@click.option("-w", "--width", type=click.IntRange(min=1), default=None, help="Display width in columns")
@click.option("--theme", default=None, help="Pygments style for truecolor highlighting")
@click.option("--hard-breaks", is_flag=True, help="Render line breaks inside paragraphs")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    help="Diagnostics written to stderr",
)
def main(source, truecolor, ascii_tables, width, theme, hard_breaks, log_level):
    """Render a markdown FILE (or stdin) to the terminal."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(
            {
                "truecolor": truecolor,
                "ascii_tables": ascii_tables or None,
                "width": width,
                "theme": theme,
                "hard_breaks": hard_breaks or None,
            }
        )
        try:
            text = source.read()
        except (UnicodeDecodeError, OSError) as e:
            raise click.FileError(source.name, hint=str(e)) from e
        logger.debug("Read %d characters from %s", len(text), source.name)
        render_source(text, sys.stdout, config)
    except MdtError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
