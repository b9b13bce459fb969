"""
Run command implementation.

Translates the story, builds it with the configured native compiler and
executes the produced binary, surfacing its stdout/stderr.
"""

import argparse

from ouat.toolchain import Toolchain

from ..context import get_cli_context
from ..errors import handle_cli_exception
from ..output import print_success
from .build import translate_to_output


def cmd_run(args: argparse.Namespace) -> None:
    """
    Handle the 'run' subcommand.

    A non-zero exit from the compiler or the binary is fatal.

    Examples:
        >>> cmd_run(args)  # doctest: +SKIP
        ✓ Generated build/story.cpp
        ✓ Built build/story
        Once upon a time...
    """
    try:
        ctx = get_cli_context(args)
        _, output = translate_to_output(ctx, args)
        print_success(f"Generated {output}")

        toolchain = Toolchain.from_settings(ctx.config.toolchain)
        binary = toolchain.compile(output)
        print_success(f"Built {binary}")

        toolchain.run_binary(binary)
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


__all__ = ["cmd_run"]
