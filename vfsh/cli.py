"""Main CLI entry point for vfsh."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from vfsh import __version__
from vfsh.client import RemoteFileSystem
from vfsh.commands.handlers import FileCommands, build_registry
from vfsh.config.manager import ShellConfig, get_config_manager
from vfsh.formatter import Formatter
from vfsh.history import HistoryNavigator
from vfsh.repl import REPL
from vfsh.shell import Shell

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vfsh", description="Shell for a remote virtual filesystem")
    parser.add_argument("--url", help="Root URL of the remote filesystem")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("--config", type=Path, help="Path to a JSON config file")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument(
        "--unordered",
        action="store_true",
        help="Render results as soon as they finish instead of in submission order",
    )
    parser.add_argument(
        "-c",
        "--command",
        action="append",
        metavar="LINE",
        help="Run a command line and exit (repeatable)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def run_commands(shell: Shell, formatter: Formatter, lines: List[str]) -> int:
    """Run lines one after another; returns 1 if any of them failed."""
    status = 0
    for sequence, line in enumerate(lines, start=1):
        formatter.print_input(line)
        result = await shell.execute(line, sequence)
        formatter.print_result(result)
        if result.error:
            status = 1
    return status


async def run(config: ShellConfig, lines: Optional[List[str]] = None) -> int:
    """Wire up the shell for a config and run it interactively or over lines."""
    formatter = Formatter()
    history = HistoryNavigator(config.history_file, config.max_history)
    history.load()

    async with RemoteFileSystem.connect(config.base_url, config.timeout) as remote:
        commands = FileCommands(remote)
        shell = Shell(build_registry(commands), history)
        try:
            if lines:
                return await run_commands(shell, formatter, lines)
            await REPL(shell, commands, formatter, config).run()
            return 0
        finally:
            history.save()


def main(argv: Optional[List[str]] = None):
    """Main entry point for vfsh."""
    args = build_parser().parse_args(argv)

    try:
        config = get_config_manager(
            args.config,
            base_url=args.url,
            timeout=args.timeout,
            log_level=args.log_level,
            ordered=False if args.unordered else None,
        ).get()
    except ValueError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.log_level)
    logger.debug("Using %s", config)

    try:
        status = asyncio.run(run(config, args.command))
    except KeyboardInterrupt:
        print("\n\nInterrupted. Goodbye!", file=sys.stderr)
        status = 0
    sys.exit(status)


if __name__ == "__main__":
    main()
