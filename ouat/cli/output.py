"""
Output formatting for CLI operations.

Token, tree and world-state dumps are rendered with Rich; success
messages use a checkmark prefix.
"""

from typing import Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ouat.analysis import WorldState
from ouat.ast import Story, format_tree
from ouat.lang.parser.grammar.lexer import Token

console = Console()


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Generated build/story.cpp")  # doctest: +SKIP
        ✓ Generated build/story.cpp
    """
    console.print(f"✓ {message}", markup=False, highlight=False, soft_wrap=True)


def print_tokens(tokens: Iterable[Token]) -> None:
    """Print the token stream as a table, one described token per row."""
    table = Table(title="Tokens")
    table.add_column("#", justify="right")
    table.add_column("Token")

    for index, token in enumerate(tokens):
        # Text cells are never parsed as console markup.
        table.add_row(str(index), Text(token.describe()))

    console.print(table)


def print_story(story: Story) -> None:
    """Print the statement tree outline."""
    console.print(format_tree(story), markup=False, highlight=False, soft_wrap=True)


def print_world_state(world_state: WorldState) -> None:
    """Print the derived state flags with their initial values."""
    table = Table(title="World state")
    table.add_column("Flag")
    table.add_column("Initial value")

    for key, value in world_state.items():
        table.add_row(key, "true" if value else "false")

    console.print(table)


__all__ = [
    "console",
    "print_success",
    "print_tokens",
    "print_story",
    "print_world_state",
]
