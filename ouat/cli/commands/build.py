"""
Build and check command implementations.

``build`` translates a story into a C++ source file; ``check`` stops after
tokenizing and parsing.
"""

import argparse
from pathlib import Path

from ouat.compiler import TranslationResult, translate_file, write_output
from ouat.lang.parser import parse_story

from ..context import CLIContext, get_cli_context, resolve_output_path, resolve_source_path
from ..errors import CLIBuildError, handle_cli_exception, wrap_exception
from ..output import print_story, print_success, print_tokens, print_world_state


def translate_to_output(ctx: CLIContext, args: argparse.Namespace) -> tuple[TranslationResult, Path]:
    """Translate ``args.file`` and write the unit; shared by build and run."""
    source_path = resolve_source_path(args.file)
    result = translate_file(source_path)

    output = resolve_output_path(ctx, source_path, getattr(args, "out", None))
    try:
        write_output(result, output)
    except OSError as exc:
        raise wrap_exception(
            exc,
            message=f"Could not write generated source to {output}",
            error_class=CLIBuildError,
        ) from exc
    return result, output


def cmd_build(args: argparse.Namespace) -> None:
    """
    Handle the 'build' subcommand.

    Args:
        args: Parsed command-line arguments containing:
            - file: Path to the .ouat story
            - out: Output .cpp path (optional)
            - print_tokens: Dump the token stream (optional)
            - print_ast: Dump the statement tree (optional)
            - print_states: Dump the world-state flags (optional)

    Examples:
        >>> cmd_build(args)  # doctest: +SKIP
        ✓ Generated build/story.cpp
    """
    try:
        ctx = get_cli_context(args)
        result, output = translate_to_output(ctx, args)

        if getattr(args, "print_tokens", False):
            print_tokens(result.tokens)
        if getattr(args, "print_ast", False):
            print_story(result.story)
        if getattr(args, "print_states", False):
            print_world_state(result.world_state)

        print_success(f"Generated {output}")
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def cmd_check(args: argparse.Namespace) -> None:
    """Handle the 'check' subcommand: tokenize and parse only."""
    try:
        source_path = resolve_source_path(args.file)
        story = parse_story(source_path.read_text(encoding="utf-8"), str(source_path))
        print_success(f"{source_path.name}: {len(story.statements)} top-level statements")
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


__all__ = ["cmd_build", "cmd_check", "translate_to_output"]
