"""Command-line entry point for GitMate."""

import argparse
import logging
from typing import List, Optional

from . import __description__, __version__
from .config import Config, build_config
from .console import GitMateConsole
from .errors import error_handler
from .git_sync.operations import run_fetch

EXIT_OK = 0
EXIT_USAGE = 2

NO_COMMAND_MESSAGE = 'no command supplied. Try "help" for a list of commands.'

COMMANDS = {
    "fetch": "fetch [remote]  fetch all remotes, then merge master, develop and dev "
             "against <remote> (default: origin)",
    "help": "help            show this message",
}


def setup_logging(config: Config) -> None:
    """Setup logging for a command-line run."""
    class StructuredFormatter(logging.Formatter):
        def format(self, record):
            # Add structured data if available
            if hasattr(record, 'operation') and config.log_level == "DEBUG":
                record.msg = f"[{record.operation}] {record.msg}"
            return super().format(record)

    if config.log_level == "DEBUG":
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    else:
        log_format = 'gitmate: %(message)s'

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format=log_format,
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Set up specific loggers
    loggers = [
        'gitmate.cli',
        'gitmate.config',
        'gitmate.git_sync',
        'gitmate.shell',
        'gitmate.error_handler'
    ]

    formatter = StructuredFormatter(log_format, datefmt='%Y-%m-%d %H:%M:%S')

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(getattr(logging, config.log_level))

        # Add console handler if not already present
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.propagate = False


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitmate",
        description=__description__,
        epilog="commands:\n  " + "\n  ".join(COMMANDS.values()),
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--repo", metavar="PATH", help="repository to work on (default: current directory)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="log verbosity (default: INFO)"
    )
    parser.add_argument("--no-clear", action="store_true", help="do not clear the screen before running")
    parser.add_argument("--no-header", action="store_true", help="do not print the banner")
    parser.add_argument("command", nargs="?", help="command to run")
    parser.add_argument("args", nargs="*", help="command arguments")
    return parser


def fetch_command(config: Config, args: List[str], console: Optional[GitMateConsole] = None) -> int:
    """Validate the ``fetch`` arguments and start the run."""
    if len(args) > 1:
        error_handler.handle_usage_error(
            f"fetch accepts at most one argument (a remote name), got {len(args)}: {' '.join(args)}",
            {'operation': 'fetch'}
        )
        return EXIT_USAGE

    requested_remote = args[0] if args else None
    return run_fetch(config, requested_remote, console=console)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse the command line and dispatch to a command. Returns the exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(
            repo_dir=args.repo,
            log_level=args.log_level,
            clear_screen=not args.no_clear,
            show_header=not args.no_header
        )
    except ValueError as e:
        parser.error(str(e))

    setup_logging(config)
    console = GitMateConsole()

    if args.command == "fetch":
        return fetch_command(config, args.args, console)

    if args.command == "help":
        parser.print_help()
        return EXIT_OK

    logging.getLogger('gitmate.cli').debug(f"unknown command: {args.command!r}")
    console.print_message(NO_COMMAND_MESSAGE)
    return EXIT_OK
