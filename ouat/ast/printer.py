"""Plain-text outline of a statement tree."""

from __future__ import annotations

from typing import List, Sequence

from .statements import (
    Comment,
    Conditional,
    ForEach,
    FunctionCall,
    FunctionDecl,
    Interactive,
    Narrative,
    RandomLean,
    Return,
    Statement,
    Story,
    Tell,
    VariableDecl,
    VariableDeclBlock,
    WhileLoop,
)

INDENT = "  "


def format_tree(story: Story) -> str:
    """Render ``story`` as an indented outline, one node per line."""
    lines = ["Story"]
    _format_block(story.statements, 1, lines)
    return "\n".join(lines)


def _format_block(statements: Sequence[Statement], depth: int, lines: List[str]) -> None:
    for statement in statements:
        _format_statement(statement, depth, lines)


def _format_statement(statement: Statement, depth: int, lines: List[str]) -> None:
    pad = INDENT * depth
    if isinstance(statement, Narrative):
        lines.append(f"{pad}Narrative: {statement.text}")
    elif isinstance(statement, Conditional):
        lines.append(f"{pad}Conditional: {statement.condition}")
        lines.append(f"{pad}{INDENT}Then:")
        _format_block(statement.then_branch, depth + 2, lines)
        if statement.else_branch:
            lines.append(f"{pad}{INDENT}Else:")
            _format_block(statement.else_branch, depth + 2, lines)
    elif isinstance(statement, Interactive):
        lines.append(f"{pad}Interactive: {statement.prompt}")
    elif isinstance(statement, RandomLean):
        lines.append(f"{pad}RandomLean: {statement.subject} -> {statement.state_a} | {statement.state_b}")
    elif isinstance(statement, WhileLoop):
        lines.append(f"{pad}While: {statement.condition}")
        _format_block(statement.body, depth + 1, lines)
    elif isinstance(statement, ForEach):
        lines.append(f"{pad}ForEach: {statement.iterator} in {statement.collection}")
        _format_block(statement.body, depth + 1, lines)
    elif isinstance(statement, FunctionDecl):
        lines.append(f"{pad}FunctionDeclaration: {statement.name}")
        _format_block(statement.body, depth + 1, lines)
    elif isinstance(statement, FunctionCall):
        lines.append(f"{pad}FunctionCall: {statement.name}")
    elif isinstance(statement, Return):
        lines.append(f"{pad}Return")
    elif isinstance(statement, Comment):
        lines.append(f"{pad}Comment: {statement.text}")
    elif isinstance(statement, VariableDecl):
        lines.append(f"{pad}VariableDeclaration: {statement.owner} {statement.name} {statement.value}")
    elif isinstance(statement, VariableDeclBlock):
        lines.append(f"{pad}VariableDeclarationBlock:")
        _format_block(statement.declarations, depth + 1, lines)
    elif isinstance(statement, Tell):
        lines.append(f"{pad}Tell: {statement.message}")
    else:
        raise TypeError(f"Unknown statement node: {type(statement).__name__}")


__all__ = ["format_tree"]
