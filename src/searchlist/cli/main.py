"""CLI entry point for searchlist.

``searchlist pick`` reads items (one per line, ``title<TAB>description``)
from a file or stdin, opens the picker, and prints the chosen titles.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console

from .. import __version__
from ..core.config import SearchListConfig, load_config
from ..errors import ConfigError
from ..tui.items import ListItem
from ..util.error import format_error
from ..util.log import Log, LogLevel

app = typer.Typer(
    name="searchlist",
    help="Filterable multi-select list for the terminal",
    no_args_is_help=True,
    add_completion=False,
)

console = Console(stderr=True)
log = Log.create({"service": "cli"})


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"searchlist {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Write a log file at this level (debug, info, warn, error)",
    ),
):
    """searchlist - pick items from a fuzzy-filtered list."""
    if log_level is not None:
        try:
            level = LogLevel.parse(log_level)
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(2)
        Log.configure(level=level, file=True)


def reattach_tty() -> None:
    """Point fd 0 back at the terminal after items were piped in on stdin."""
    if os.name != "posix":
        return
    fd = os.open("/dev/tty", os.O_RDONLY)
    os.dup2(fd, 0)
    os.close(fd)


def read_items(lines: List[str]) -> List[ListItem]:
    """Parse non-blank lines into items."""
    return [ListItem.parse(line) for line in lines if line.strip()]


def build_config(config_path: Optional[Path], overrides: Dict[str, Any]) -> SearchListConfig:
    """Load the config file and apply flags that were actually given."""
    given = {key: value for key, value in overrides.items() if value}
    return load_config(config_path, **given)


@app.command()
def pick(
    file: Optional[Path] = typer.Argument(
        None,
        help="File with one item per line (default: stdin)",
    ),
    fuzzy: bool = typer.Option(False, "--fuzzy", help="Rank with fuzzy matching"),
    case_sensitive: bool = typer.Option(False, "--case-sensitive", help="Match case exactly"),
    matches_only: bool = typer.Option(False, "--matches-only", help="Hide items that do not match"),
    sort_by_matches: bool = typer.Option(False, "--sort-by-matches", help="Order matches by match count"),
    reverse: bool = typer.Option(False, "--reverse", help="Sort match counts descending"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="JSON configuration file",
    ),
):
    """Pick items interactively and print their titles."""
    try:
        config = build_config(
            config_path,
            {
                "fuzzy": fuzzy,
                "case_sensitive": case_sensitive,
                "matches_only": matches_only,
                "sort_by_match_count": sort_by_matches,
                "reverse_sort": reverse,
            },
        )
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {format_error(e)}")
        raise typer.Exit(1)

    if file is not None:
        try:
            lines = file.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            console.print(f"[red]Error:[/red] cannot read {file}: {e.strerror}")
            raise typer.Exit(1)
    else:
        if sys.stdin.isatty():
            console.print("[red]Error:[/red] no input: pass a file or pipe lines on stdin")
            raise typer.Exit(1)
        lines = sys.stdin.read().splitlines()

    items = read_items(lines)
    if not items:
        console.print("[yellow]Nothing to pick from.[/yellow]")
        raise typer.Exit(1)

    from ..tui.app import run_picker

    if file is None:
        try:
            reattach_tty()
        except OSError as e:
            console.print(f"[red]Error:[/red] no terminal to run the picker on: {e.strerror}")
            raise typer.Exit(1)
    log.info("picker started", {"items": len(items), "fuzzy": config.fuzzy})
    chosen = run_picker(items, config)
    if not chosen:
        raise typer.Exit(1)
    for item in chosen:
        typer.echo(item.title)
