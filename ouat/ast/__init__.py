"""Public AST exports for the story translator."""

from .statements import (
    STATEMENT_TYPES,
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
    child_blocks,
    walk,
)
from .printer import format_tree

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
    "format_tree",
]
