"""
CLI — Entry point and error boundary

    metalcloud-cli <subject> <predicate> [flags]
    metalcloud-cli help [<subject> <predicate>]
    metalcloud-cli <subject> <predicate> -h

The registry is built once per process. Output of a successful command
goes to stdout; errors go to stderr with an exit code:

    0    success
    1    command failed (remote error, not found, not confirmed, ...)
    2    usage error (unknown command, missing or invalid argument)
    130  interrupted
"""

import argparse
import logging
import os
import shutil
import sys
from typing import IO, Optional, Sequence

from . import __version__
from .client import JsonRpcClient, MetalCloudClient
from .commands import (
    PROGRAM_NAME, CommandArgumentParser, CommandContext, CommandDescriptor, CommandRegistry,
    build_argument_parser, build_registry, dispatch,
)
from .config import Config, ConfigManager
from .core import OperatorIO, TerminalIO
from .errors import InvalidArgument, MetalCloudCLIError, UnknownCommand
from .presentation.symbols import get_symbols, safe_print

logger = logging.getLogger(__name__)

# Exit codes
SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2
KEYBOARD_INTERRUPT = 130

HELP_WORDS = ("help",)
HELP_FLAGS = ("-h", "--help", "-help")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Global options; everything from the subject on is left to the command."""
    parser = CommandArgumentParser(
        prog=PROGRAM_NAME,
        description="metalcloud-cli -- manage drive arrays, network profiles, secrets and subnet pools",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument('-h', '--help', action='store_true', help='Show available commands')
    parser.add_argument('-V', '--version', action='store_true', help='Show version and exit')
    parser.add_argument(
        '--debug',
        action='store_true',
        default=os.environ.get("METALCLOUD_DEBUG", "").lower() in ("1", "true", "yes"),
        help='Log API calls and dispatch decisions to stderr (or set METALCLOUD_DEBUG=1)'
    )
    parser.add_argument('command', nargs=argparse.REMAINDER)
    return parser


def setup_logging(debug: bool, stream: IO[str]) -> None:
    """Send package log records to stream: WARNING by default, DEBUG when asked."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=stream)
    logging.getLogger("metalcloud_cli").setLevel(level)


# =============================================================================
# Help
# =============================================================================

def _spelling(primary: str, alias: str) -> str:
    return f"{primary} ({alias})" if alias and alias != primary else primary


def format_command_list(registry: CommandRegistry) -> str:
    """Listing of every command, grouped by subject in registration order."""
    rows = [
        (
            f"{_spelling(d.subject, d.alt_subject)} {_spelling(d.predicate, d.alt_predicate)}",
            d.description,
        )
        for d in registry
    ]
    width = max((len(name) for name, _ in rows), default=0)

    lines = [
        f"usage: {PROGRAM_NAME} <subject> <predicate> [flags]",
        "",
        "Commands:",
    ]
    lines.extend(f"  {name.ljust(width)}  {description}" for name, description in rows)
    lines.extend([
        "",
        f"Run '{PROGRAM_NAME} <subject> <predicate> -h' for the flags of a command.",
    ])
    return "\n".join(lines)


def format_command_help(descriptor: CommandDescriptor) -> str:
    """Flag help for one command, with its usage example if it has one."""
    epilog = f"Example:\n{descriptor.example}" if descriptor.example else ""
    parser = build_argument_parser(
        descriptor.arguments_type,
        prog=descriptor.prog,
        description=descriptor.description,
        epilog=epilog,
    )
    return parser.format_help().rstrip("\n")


def _wants_help(tokens: Sequence[str]) -> bool:
    return any(token in HELP_FLAGS for token in tokens)


# =============================================================================
# Context
# =============================================================================

def create_client(config: Config) -> MetalCloudClient:
    """
    Build the API client from configuration.

    Raises:
        MetalCloudCLIError: Endpoint or API key missing
    """
    error = config.api.validate()
    if error:
        raise MetalCloudCLIError(error)
    return JsonRpcClient(config.api.endpoint, config.api.api_key, user_email=config.api.user_email)


def terminal_width(config: Config, stream: IO[str]) -> Optional[int]:
    """Configured width, or the terminal's when attached to one (None = unlimited)."""
    if config.display.width:
        return config.display.width
    if hasattr(stream, "isatty") and stream.isatty():
        return shutil.get_terminal_size().columns
    return None


# =============================================================================
# Main
# =============================================================================

def main(
    argv: Optional[Sequence[str]] = None,
    client: Optional[MetalCloudClient] = None,
    io: Optional[OperatorIO] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
    config: Optional[Config] = None,
    registry: Optional[CommandRegistry] = None
) -> int:
    """
    Run one command and return the process exit code.

    Collaborators default to the real terminal, configuration and
    JSON-RPC client; passing them in runs the CLI against doubles.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        options = build_parser().parse_args(argv)
        setup_logging(options.debug, stderr)

        if options.version:
            safe_print(f"{PROGRAM_NAME} {__version__}", file=stdout)
            return SUCCESS

        registry = registry or build_registry()
        tokens = options.command

        # "help <subject> <predicate>" is the same as "<subject> <predicate> -h"
        if tokens and tokens[0] in HELP_WORDS:
            tokens = tokens[1:3] + ["-h"] if len(tokens) >= 3 else []

        if options.help or not tokens or tokens[0] in HELP_FLAGS:
            safe_print(format_command_list(registry), file=stdout)
            return SUCCESS

        descriptor = registry.find(tokens[0], tokens[1] if len(tokens) > 1 else "")

        if _wants_help(tokens[2:]):
            safe_print(format_command_help(descriptor), file=stdout)
            return SUCCESS

        config = config or ConfigManager().load()
        error = config.display.validate()
        if error:
            raise InvalidArgument(error)

        ctx = CommandContext(
            client=client or create_client(config),
            io=io or TerminalIO(),
            stdin=stdin,
            width=terminal_width(config, stdout),
            symbols=get_symbols(config.display.symbols),
        )

        result = dispatch(registry, tokens, ctx)

    except KeyboardInterrupt:
        safe_print("\nAborted by user.", file=stderr)
        return KEYBOARD_INTERRUPT
    except MetalCloudCLIError as e:
        safe_print(f"Error: {e.message}", file=stderr)
        if e.hint:
            safe_print(f"Hint: {e.hint}", file=stderr)
        if isinstance(e, (InvalidArgument, UnknownCommand)):
            return USAGE_ERROR
        return GENERAL_ERROR

    if result:
        safe_print(result, file=stdout)
    return SUCCESS


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
