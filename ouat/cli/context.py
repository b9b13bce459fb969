"""
CLI context management.

This module provides the CLIContext dataclass shared by every subcommand
and the helpers that resolve source and output paths against it.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ouat.config import WorkspaceConfig

from .errors import CLIConfigError, CLIFileNotFoundError


@dataclass
class CLIContext:
    """
    Shared context resolved from workspace configuration.

    Attributes:
        workspace_root: Root directory of the workspace
        config: Parsed workspace configuration
    """

    workspace_root: Path
    config: WorkspaceConfig


def get_cli_context(args: argparse.Namespace) -> CLIContext:
    """
    Retrieve CLIContext from parsed arguments.

    Raises:
        CLIConfigError: If context was not initialized
    """
    ctx = getattr(args, "cli_context", None)
    if ctx is None:
        raise CLIConfigError(
            "CLI context was not initialized before command execution",
            hint="This is an internal error - please report it",
            code="CLI_CONTEXT_NOT_INITIALIZED"
        )
    return ctx


def resolve_source_path(file: str) -> Path:
    """Resolve the story path, which must name an existing file."""
    path = Path(file).resolve()
    if not path.is_file():
        raise CLIFileNotFoundError(
            f"Story file not found: {file}",
            hint="Pass the path to a .ouat story",
            context={"path": str(path)},
        )
    return path


def resolve_output_path(ctx: CLIContext, source: Path, out: Optional[str]) -> Path:
    """``-o`` wins; otherwise ``<out_dir>/<stem>.cpp`` from the workspace config."""
    if out:
        return Path(out).resolve()
    return ctx.config.output_path_for(source)


__all__ = [
    "CLIContext",
    "get_cli_context",
    "resolve_source_path",
    "resolve_output_path",
]
