"""urlelide CLI - Click command definition and main entry point."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import orjson
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from urlelide.format import format_url_for_computers, format_url_for_humans
from urlelide.parse import parse_url

console = Console(stderr=True)

MODES = ["human", "computer", "parse", "all"]
DEFAULT_MAX_LENGTH = 50


@click.command()
@click.argument("source")
@click.option(
    "-m", "--mode",
    type=click.Choice(MODES),
    default="human",
    help="Output mode (default: human)",
)
@click.option("-n", "--max-length", default=DEFAULT_MAX_LENGTH, type=click.IntRange(min=0),
              help="Character budget for human mode")
@click.option("--slashes-denote-host", is_flag=True,
              help="Parse mode: treat a leading // as the start of a host")
@click.option("-o", "--output", "output_path", type=click.Path(), default=None,
              help="Output file. Omit for stdout.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose progress output")
def main(
    source: str,
    mode: str,
    max_length: int,
    slashes_denote_host: bool,
    output_path: str | None,
    verbose: bool,
):
    """Parse and pretty-print URLs that may be malformed.

    SOURCE can be a URL, a text file with one URL per line, or - for stdin.

    \b
    Examples:
        urlelide https://www.google.com/foobar -n 16     # google.com/foob…
        urlelide 'https://ουτοπία.δπθ.gr/' -m computer   # punycode + escapes
        urlelide 'http://a@b@c/' -m parse                 # record as JSON
        urlelide links.txt -m all -v                      # every view, per line
        cat links.txt | urlelide -                         # read stdin
    """
    urls = _read_source(source)
    if not urls:
        raise click.ClickException(f"No URLs found in source: {source}")

    if verbose:
        console.print(Panel(
            f"[bold]urlelide - URL formatter[/bold]\n{escape(source)}\n"
            f"Mode: {mode} (max length {max_length})",
            expand=False,
        ))

    outputs = []
    for i, url in enumerate(urls):
        if verbose and len(urls) > 1:
            console.print(f"[dim]URL {i + 1}/{len(urls)}: {escape(url)}[/dim]")
        outputs.append(_render(url, mode, max_length, slashes_denote_host))

    output = "\n".join(outputs)

    if output_path:
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(output + "\n", encoding="utf-8")
        console.print(f"[green]Saved:[/green] {out}")
    else:
        click.echo(output)


def _read_source(source: str) -> list[str]:
    """Collect input URLs from an argument, a file or stdin."""
    if source == "-":
        lines = sys.stdin.read().splitlines()
    else:
        source_path = Path(source)
        try:
            is_file = source_path.is_file()
        except (OSError, ValueError):
            # not a usable path, so it is a URL
            is_file = False
        if not is_file:
            return [source]
        try:
            lines = source_path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise click.ClickException(f"Cannot read {source}: {e}")

    return [line for line in lines if line.strip()]


def _render(url: str, mode: str, max_length: int, slashes_denote_host: bool) -> str:
    """Produce the output text for one URL."""
    if mode == "human":
        return format_url_for_humans(url, max_length)

    if mode == "computer":
        return format_url_for_computers(url)

    if mode == "parse":
        record = parse_url(url, slashes_denote_host).to_dict()
        return orjson.dumps(record, option=orjson.OPT_INDENT_2).decode()

    # all: every view at once, printed to stderr as a panel and to stdout as JSON
    human = format_url_for_humans(url, max_length)
    computer = format_url_for_computers(url)
    console.print(Panel(
        f"[bold]human:[/bold]    {escape(human)}\n"
        f"[bold]computer:[/bold] {escape(computer)}",
        title=escape(url),
        expand=False,
    ))
    return orjson.dumps(
        {
            "human": human,
            "computer": computer,
            "parsed": parse_url(url, slashes_denote_host).to_dict(),
        },
        option=orjson.OPT_INDENT_2,
    ).decode()


if __name__ == "__main__":
    main()
