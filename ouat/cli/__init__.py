"""
ouat CLI entry point.

This module provides the main command line interface for the story
translator, dispatching subcommands to the focused command modules.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from ouat import __version__
from ouat.config import load_workspace_config
from ouat.errors import ConfigError

from .commands import cmd_build, cmd_check, cmd_run
from .context import CLIContext
from .errors import CLIConfigError, handle_cli_exception, wrap_exception


_LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}


def _configure_logging(args) -> None:
    """Configure the ``ouat`` logger from ``--log-level`` (default: warn)."""
    log_level = (getattr(args, 'log_level', None) or 'warn').lower()
    numeric_level = _LOG_LEVELS.get(log_level, logging.WARNING)

    package_logger = logging.getLogger('ouat')
    package_logger.setLevel(numeric_level)

    # Add console handler if not already present
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate messages
        package_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Once Upon a Time story translator - turn .ouat stories into C++ programs",
        prog="ouat"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to an ouat.toml configuration file'
    )
    parser.add_argument(
        '--workspace',
        default=None,
        help='Workspace root directory (defaults to current working directory)'
    )
    parser.add_argument(
        '--log-level',
        choices=sorted(_LOG_LEVELS),
        default=None,
        help='Set logging level for translator diagnostics'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Build subcommand
    build_parser_ = subparsers.add_parser(
        'build',
        help='Translate a story into a C++ source file'
    )
    build_parser_.add_argument('file', help='Path to the .ouat story')
    build_parser_.add_argument(
        '--out', '-o', default=None,
        help='Output .cpp path (default: <out_dir>/<story>.cpp)'
    )
    build_parser_.add_argument(
        '--print-tokens', action='store_true', help='Print the token stream'
    )
    build_parser_.add_argument(
        '--print-ast', action='store_true', help='Print the statement tree'
    )
    build_parser_.add_argument(
        '--print-states', action='store_true', help='Print the derived world-state flags'
    )
    build_parser_.set_defaults(func=cmd_build)

    # Run subcommand
    run_parser = subparsers.add_parser(
        'run',
        help='Translate, compile with the native toolchain and run a story'
    )
    run_parser.add_argument('file', help='Path to the .ouat story')
    run_parser.add_argument(
        '--out', '-o', default=None,
        help='Output .cpp path (default: <out_dir>/<story>.cpp)'
    )
    run_parser.set_defaults(func=cmd_run)

    # Check subcommand
    check_parser = subparsers.add_parser(
        'check',
        help='Tokenize and parse a story without generating code'
    )
    check_parser.add_argument('file', help='Path to the .ouat story')
    check_parser.set_defaults(func=cmd_check)

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        >>> main(['build', 'story.ouat'])  # doctest: +SKIP
        >>> main(['run', 'story.ouat'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, print help
    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    _configure_logging(args)

    workspace_root = (
        Path(args.workspace).resolve()
        if args.workspace
        else Path.cwd()
    )
    config_path = Path(args.config).resolve() if args.config else None
    try:
        config = load_workspace_config(workspace_root, config_path)
    except ConfigError as exc:
        handle_cli_exception(
            wrap_exception(exc, message=exc.format(), error_class=CLIConfigError),
            verbose=args.verbose,
        )

    # Attach CLI context to args
    args.cli_context = CLIContext(
        workspace_root=workspace_root,
        config=config,
    )

    # Execute command
    args.func(args)


__all__ = ["main", "build_parser"]


if __name__ == '__main__':  # pragma: no cover
    main()
