"""
Command line interface for the polling monitor.

Usage:
    polling-monitor watch DIRECTORY [--interval SECONDS] [--duration SECONDS]
    polling-monitor snapshot DIRECTORY
"""

import logging
import logging.config
import threading
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from polling_monitor.config.settings import MonitorConfig
from polling_monitor.core.interfaces import IFileEntry
from polling_monitor.models.case import IOCase
from polling_monitor.models.exceptions import BaseError
from polling_monitor.monitoring.listeners import FileAlterationListenerAdaptor
from polling_monitor.monitoring.monitor import FileAlterationMonitor
from polling_monitor.monitoring.observer import FileAlterationObserver

logger = logging.getLogger(__name__)

# Initialize rich console
console = Console()

_STYLES = {"created": "green", "changed": "yellow", "deleted": "red"}


class ConsoleListener(FileAlterationListenerAdaptor):
    """Prints every notification to the console relative to the observed root."""

    def __init__(self, root: Path, output: Console = console):
        self.root = root
        self.output = output
        self.counts = {"created": 0, "changed": 0, "deleted": 0}

    def _print(self, action: str, kind: str, path: Path) -> None:
        self.counts[action] += 1
        try:
            shown = path.relative_to(self.root)
        except ValueError:
            shown = path
        style = _STYLES[action]
        self.output.print(f"[{style}]{action:<8}[/{style}] {kind:<9} [italic]{shown}[/italic]")

    def on_directory_create(self, directory: Path) -> None:
        self._print("created", "directory", directory)

    def on_directory_change(self, directory: Path) -> None:
        self._print("changed", "directory", directory)

    def on_directory_delete(self, directory: Path) -> None:
        self._print("deleted", "directory", directory)

    def on_file_create(self, file: Path) -> None:
        self._print("created", "file", file)

    def on_file_change(self, file: Path) -> None:
        self._print("changed", "file", file)

    def on_file_delete(self, file: Path) -> None:
        self._print("deleted", "file", file)


def build_config(
    interval: float | None = None,
    ignore: tuple[str, ...] = (),
    case: str | None = None,
    verbose: bool = False,
) -> MonitorConfig:
    """Create a configuration from the environment with command line overrides applied."""
    overrides: dict[str, Any] = {}
    if interval is not None:
        overrides["poll_interval_seconds"] = interval
    if ignore:
        overrides["ignored_patterns"] = list(ignore)
    if case is not None:
        overrides["case_sensitivity"] = case
    if verbose:
        overrides["log_level"] = "DEBUG"
    return MonitorConfig(**overrides)


def create_stats_table(listener: ConsoleListener, stats: dict[str, Any]) -> Table:
    """Create a table summarizing a watch session."""
    table = Table(title="Monitoring Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("Poll passes", str(stats["passes"]))
    table.add_row("Observer failures", str(stats["observer_failures"]))
    for action, count in listener.counts.items():
        table.add_row(f"Entries {action}", str(count))

    return table


def build_tree(entry: IFileEntry, tree: Tree) -> Tree:
    """Add an entry's children to a rich tree, directories in bold."""
    for child in entry.children:
        if child.is_directory:
            build_tree(child, tree.add(f"[bold blue]{child.name}/[/bold blue]"))
            continue
        # Size is a FileEntry extra, not part of the IFileEntry capability set
        length = getattr(child, "length", None)
        tree.add(child.name if length is None else f"{child.name} [dim]({length} bytes)[/dim]")
    return tree


def count_entries(entry: IFileEntry) -> int:
    return sum(1 + count_entries(child) for child in entry.children)


case_option = click.option(
    '--case',
    type=click.Choice([c.value for c in IOCase], case_sensitive=False),
    default=None,
    help='Case sensitivity used to match file names',
)
ignore_option = click.option(
    '--ignore', '-i', multiple=True, help='Wildcard pattern to ignore (repeatable, replaces configured patterns)'
)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Poll directories and report created, changed and deleted files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument('directory', type=click.Path(file_okay=False, path_type=Path))
@click.option('--interval', '-n', type=float, default=None, help='Seconds between poll passes')
@click.option(
    '--duration', '-t', type=float, default=None, help='Stop after this many seconds (run until Ctrl+C if omitted)'
)
@ignore_option
@case_option
@click.pass_context
def watch(
    ctx: click.Context,
    directory: Path,
    interval: float | None,
    duration: float | None,
    ignore: tuple[str, ...],
    case: str | None,
):
    """Watch DIRECTORY and print every change as it is detected."""
    try:
        config = build_config(interval, ignore, case, ctx.obj.get("verbose", False))
    except (BaseError, ValueError) as e:
        raise click.BadParameter(str(e)) from e
    logging.config.dictConfig(config.get_log_config())

    directory = directory.resolve()
    observer = FileAlterationObserver.from_config(directory, config)
    listener = ConsoleListener(directory)
    observer.add_listener(listener)
    monitor = FileAlterationMonitor(config.poll_interval_seconds, observer)

    console.print(
        Panel.fit(
            f"Watching [bold]{directory}[/bold]\n"
            f"Interval: {config.poll_interval_seconds}s, case: {config.case_sensitivity.value}",
            title="polling-monitor",
            border_style="blue",
        )
    )

    monitor.start()
    try:
        # Event.wait(None) blocks until interrupted
        threading.Event().wait(duration)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
    finally:
        try:
            monitor.stop(config.resolve_stop_timeout())
        except BaseError as e:
            logger.error("Error stopping monitor: %s", e)

    console.print(create_stats_table(listener, monitor.get_monitoring_stats()))


@main.command()
@click.argument('directory', type=click.Path(exists=True, file_okay=False, path_type=Path))
@ignore_option
@case_option
@click.pass_context
def snapshot(ctx: click.Context, directory: Path, ignore: tuple[str, ...], case: str | None):
    """Print the snapshot tree an observer builds for DIRECTORY."""
    try:
        config = build_config(ignore=ignore, case=case, verbose=ctx.obj.get("verbose", False))
    except (BaseError, ValueError) as e:
        raise click.BadParameter(str(e)) from e
    logging.config.dictConfig(config.get_log_config())

    directory = directory.resolve()
    observer = FileAlterationObserver.from_config(directory, config)
    observer.initialize()

    console.print(build_tree(observer.root_entry, Tree(f"[bold blue]{directory}[/bold blue]")))
    console.print(f"{count_entries(observer.root_entry)} entries")


if __name__ == '__main__':
    main()
