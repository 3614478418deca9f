"""Command-line interface for oalogtail."""

import argparse
import logging
import signal
import sys
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from oalogtail.config import TailerConfig
from oalogtail.config import resolve_log_dir
from oalogtail.constants import DEFAULT_LOG_LEVEL
from oalogtail.constants import LOG_FILE_SUFFIX
from oalogtail.constants import LOG_LEVELS
from oalogtail.constants import PRIMARY_LOG_FILE_NAME
from oalogtail.exceptions import OaLogTailError
from oalogtail.filters import EventFilter
from oalogtail.filters import parse_severities
from oalogtail.models import LogSeverity
from oalogtail.parser.core import parse_log_file
from oalogtail.render import EventPrinter
from oalogtail.tailer import LogTailer
from oalogtail.watcher import WatchdogGrowthSource

logger = logging.getLogger(__name__)

#: Seconds between wake-ups of the follow loop
FOLLOW_POLL_INTERVAL: float = 0.5


def configure_logging(level: str, console: Console) -> None:
    """Route oalogtail diagnostics through rich on the given console."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _severity_arg(value: str) -> LogSeverity:
    try:
        (severity,) = parse_severities([value])
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return severity


def _make_filter(args: argparse.Namespace) -> EventFilter:
    severities = frozenset(args.severity) if args.severity else frozenset(LogSeverity)
    return EventFilter(severities=severities, search=args.search or "")


def _install_pause_toggle(tailer: LogTailer, console: Console) -> None:
    """Toggle pause/resume on SIGUSR1 where the platform has it."""
    if not hasattr(signal, "SIGUSR1"):
        return

    def _toggle(signum: int, frame: object) -> None:
        if tailer.is_paused:
            tailer.resume()
            console.print("[green]Resumed[/green]")
        else:
            tailer.pause()
            console.print("[yellow]Paused[/yellow] (new log content is skipped)")

    signal.signal(signal.SIGUSR1, _toggle)


def cmd_follow(args: argparse.Namespace, console: Console, err_console: Console) -> int:
    """Tail a log directory and print new events until interrupted."""
    log_dir = resolve_log_dir(args.log_dir, args.workspace)
    config = TailerConfig(
        log_dir=log_dir,
        primary_log_name=args.primary,
        file_suffix=args.suffix,
        log_level=args.log_level,
    )
    printer = EventPrinter(console, _make_filter(args), as_json=args.json)
    source = WatchdogGrowthSource(log_dir, config.file_suffix)
    tailer = LogTailer.from_config(config, printer, source=source)

    tailer.start()
    _install_pause_toggle(tailer, err_console)
    err_console.print(f"Watching [bold]{log_dir}[/bold] for new log entries (Ctrl+C to exit)")
    try:
        while tailer.is_running:
            time.sleep(FOLLOW_POLL_INTERVAL)
    except KeyboardInterrupt:
        pass  # Clean exit on Ctrl+C
    finally:
        tailer.flush()
        tailer.stop()
    return 0


def cmd_parse(args: argparse.Namespace, console: Console, err_console: Console) -> int:
    """Parse a complete PVSS_II.log and print its events."""
    try:
        events = parse_log_file(args.file)
    except OSError as e:
        err_console.print(f"[red]Error:[/red] cannot read {args.file}: {e}")
        return 1

    printer = EventPrinter(console, _make_filter(args), as_json=args.json)
    for event in events:
        printer(event)
    logger.info("Printed %d of %d events", printer.printed, len(events))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its sub-commands."""
    parser = argparse.ArgumentParser(
        prog="oalogtail",
        description="Follow and parse WinCC OA PVSS_II.log files.",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Level of oalogtail's own diagnostics (default: %(default)s).",
    )

    filters = argparse.ArgumentParser(add_help=False)
    filters.add_argument(
        "--severity",
        action="append",
        type=_severity_arg,
        metavar="SEVERITY",
        help="Only show events of this severity (repeatable).",
    )
    filters.add_argument("--search", help="Only show events containing this text.")
    filters.add_argument("--json", action="store_true", help="Print events as JSON lines.")

    commands = parser.add_subparsers(dest="command", required=True)

    follow = commands.add_parser(
        "follow",
        parents=[filters],
        help="Print events appended to the log directory from now on.",
    )
    follow.add_argument(
        "log_dir",
        nargs="?",
        type=Path,
        help="Log directory. Defaults to the 'log' directory of --workspace.",
    )
    follow.add_argument(
        "--workspace",
        type=Path,
        help="Project directory containing a 'log' directory (default: cwd).",
    )
    follow.add_argument(
        "--primary",
        default=PRIMARY_LOG_FILE_NAME,
        help="Structured log file name (default: %(default)s).",
    )
    follow.add_argument(
        "--suffix",
        default=LOG_FILE_SUFFIX,
        help="Extension of files to tail (default: %(default)s).",
    )
    follow.set_defaults(handler=cmd_follow)

    parse = commands.add_parser(
        "parse",
        parents=[filters],
        help="Print all events of an existing PVSS_II.log.",
    )
    parse.add_argument("file", type=Path, help="Log file to parse.")
    parse.set_defaults(handler=cmd_parse)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the exit status."""
    args = build_parser().parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)
    configure_logging(args.log_level, err_console)

    try:
        return int(args.handler(args, console, err_console))
    except OaLogTailError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
