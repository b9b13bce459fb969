"""Statement tree node definitions for the story notation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple, Union


@dataclass(frozen=True)
class Narrative:
    """A plain sentence; its text is the space-joined source words."""

    text: str


@dataclass(frozen=True)
class Conditional:
    """``If <condition> then ... [Else ...] End.``

    An ``Else if`` chain is stored as a single nested :class:`Conditional`
    held as the sole element of ``else_branch``.
    """

    condition: str
    then_branch: Tuple["Statement", ...] = ()
    else_branch: Tuple["Statement", ...] = ()


@dataclass(frozen=True)
class Interactive:
    prompt: str


@dataclass(frozen=True)
class RandomLean:
    """``Random <subject> leans towards <state_a> or <state_b>.``"""

    subject: str
    state_a: str
    state_b: str


@dataclass(frozen=True)
class WhileLoop:
    condition: str
    body: Tuple["Statement", ...] = ()


@dataclass(frozen=True)
class ForEach:
    iterator: str
    collection: str
    body: Tuple["Statement", ...] = ()


@dataclass(frozen=True)
class FunctionDecl:
    name: str
    body: Tuple["Statement", ...] = ()


@dataclass(frozen=True)
class FunctionCall:
    name: str


@dataclass(frozen=True)
class Return:
    pass


@dataclass(frozen=True)
class Comment:
    """An aside kept in the tree; it never produces code."""

    text: str


@dataclass(frozen=True)
class VariableDecl:
    owner: str
    name: str
    value: str

    @property
    def is_integral(self) -> bool:
        """True when the literal value is composed entirely of ASCII decimal digits."""
        return self.value.isascii() and self.value.isdecimal()


@dataclass(frozen=True)
class VariableDeclBlock:
    declarations: Tuple[VariableDecl, ...] = ()


@dataclass(frozen=True)
class Tell:
    message: str


Statement = Union[
    Narrative,
    Conditional,
    Interactive,
    RandomLean,
    WhileLoop,
    ForEach,
    FunctionDecl,
    FunctionCall,
    Return,
    Comment,
    VariableDecl,
    VariableDeclBlock,
    Tell,
]

# Every statement variant, in declaration order.  Consumers dispatch on
# these and raise ``TypeError`` for anything else.
STATEMENT_TYPES: Tuple[type, ...] = (
    Narrative,
    Conditional,
    Interactive,
    RandomLean,
    WhileLoop,
    ForEach,
    FunctionDecl,
    FunctionCall,
    Return,
    Comment,
    VariableDecl,
    VariableDeclBlock,
    Tell,
)


@dataclass(frozen=True)
class Story:
    """Root of the tree: the top-level statement list."""

    statements: Tuple[Statement, ...] = ()


def child_blocks(statement: Statement) -> Tuple[Tuple[Statement, ...], ...]:
    """Return the nested statement lists owned by ``statement``."""
    if isinstance(statement, Conditional):
        return (statement.then_branch, statement.else_branch)
    if isinstance(statement, (WhileLoop, ForEach, FunctionDecl)):
        return (statement.body,)
    if isinstance(statement, VariableDeclBlock):
        return (statement.declarations,)
    if isinstance(statement, STATEMENT_TYPES):
        return ()
    raise TypeError(f"Unknown statement node: {type(statement).__name__}")


def walk(node: Union[Story, Statement]) -> Iterator[Statement]:
    """Yield every statement below ``node`` in source (pre-)order."""
    if isinstance(node, Story):
        blocks: Tuple[Tuple[Statement, ...], ...] = (node.statements,)
    else:
        yield node
        blocks = child_blocks(node)
    for block in blocks:
        for child in block:
            yield from walk(child)


__all__ = [
    "Narrative",
    "Conditional",
    "Interactive",
    "RandomLean",
    "WhileLoop",
    "ForEach",
    "FunctionDecl",
    "FunctionCall",
    "Return",
    "Comment",
    "VariableDecl",
    "VariableDeclBlock",
    "Tell",
    "Statement",
    "STATEMENT_TYPES",
    "Story",
    "child_blocks",
    "walk",
]
