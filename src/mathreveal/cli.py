"""A script to render Markdown documents with embedded math"""

import logging
import sys
from typing import Any

import click
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from mathreveal import __version__
from mathreveal.config import cfg, cfg_file
from mathreveal.console import console, consoleErr, consolePlain
from mathreveal.engine import ENGINES, UnknownEngineError
from mathreveal.extractor import extract
from mathreveal.render import RenderOptions, render_document

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.option("-V", "--version", is_flag=True, help="Show mathreveal version")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity.")
@click.pass_context
def main(ctx: Any, version: bool, verbose: int) -> None:
    """Render Markdown with embedded LaTeX math.

    Math may be written as $$...$$ or \\[...\\] for display math, and as $...$
    or \\(...\\) for inline math. Defaults are read from the config file
    `~/.config/mathreveal/mathreveal.json`, or from the file given by the
    environment variable MATHREVEAL_CONFIG.

    Note: Use `mathreveal subcmd --help` to get detailed help for a given
    subcommand.
    """
    if version:
        console.print(f"mathreveal {__version__}")
        sys.exit()

    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"
    else:
        level = str(cfg["log_level"]).upper()

    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=consoleErr, show_time=False, show_path=False)],
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("file", type=click.File("r", encoding="utf8"))
@click.option(
    "-o", "--output", type=click.File("w", encoding="utf8"), help="Write HTML here."
)
@click.option(
    "-e",
    "--engine",
    help=f"Math engine, one of: {', '.join(ENGINES)}.",
)
@click.option("--strict", is_flag=True, default=None, help="Fail on invalid math.")
@click.option(
    "--reveal/--no-reveal", default=None, help="Enable word-by-word reveal."
)
def render(
    file: Any,
    output: Any | None,
    engine: str | None,
    strict: bool | None,
    reveal: bool | None,
) -> None:
    """Render a Markdown file to HTML.

    Use - as FILE to read from stdin.

    Examples:

    \b
        # Render to stdout with the configured defaults
        mathreveal render notes.md

    \b
        # Leave math for KaTeX in the browser and skip the animation
        mathreveal render -e client --no-reveal notes.md -o notes.html
    """
    options = RenderOptions.from_config(engine=engine, strict=strict, reveal=reveal)
    try:
        document = render_document(file.read(), options)
    except UnknownEngineError as error:
        console.error(str(error))
        raise click.Abort() from error

    html = document.to_html()
    if output is None:
        click.echo(html)
    else:
        _ = output.write(html + "\n")
        console.print(f"Rendered {len(document.spans)} math spans to {output.name}")


@main.command("extract")
@click.argument("file", type=click.File("r", encoding="utf8"))
def extract_spans(file: Any) -> None:
    """List the math spans found in a Markdown file."""
    _, spans = extract(file.read())
    if not spans:
        consolePlain.print("No math found")
        return

    table = Table(
        show_edge=False,
        padding=(0, 3, 0, 0),
        box=None,
        header_style=None,
    )
    table.add_column("Marker", header_style="yellow", no_wrap=True)
    table.add_column("Mode", header_style="white")
    table.add_column("Source", header_style="white")
    for span in spans.values():
        table.add_row(span.id, span.display_mode.value, Text(span.raw_content))
    consolePlain.print(table)


@main.command("config")
def show_config() -> None:
    """Print the effective configuration."""
    if cfg_file.exists():
        consolePlain.print(f"[yellow]Config file:[/yellow] {cfg_file}")
    else:
        consolePlain.print("[yellow]Config file:[/yellow] Not found")

    for key, value in sorted(cfg.items()):
        consolePlain.print(f"[yellow]{key}:[/yellow] {escape(repr(value))}")
