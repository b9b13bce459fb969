"""Language front end: keywords, tokenizer and parser."""

from .keywords import (
    BLOCK_TERMINATORS,
    CONDITION_VERBS,
    CONTROL_KEYWORDS,
    STATE_VERBS,
    suggest_keyword,
)
from .parser import StoryParser, Token, TokenType, parse_story, tokenize

__all__ = [
    "BLOCK_TERMINATORS",
    "CONDITION_VERBS",
    "CONTROL_KEYWORDS",
    "STATE_VERBS",
    "suggest_keyword",
    "StoryParser",
    "Token",
    "TokenType",
    "parse_story",
    "tokenize",
]
