"""
CLI command modules.

Each command module handles a specific CLI subcommand (build, check, run).
"""

from .build import cmd_build, cmd_check
from .run import cmd_run

__all__ = ["cmd_build", "cmd_check", "cmd_run"]
