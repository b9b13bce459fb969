"""Grammar-level building blocks for the story parser."""

from .lexer import KEYWORDS, Lexer, Token, TokenType, tokenize

__all__ = ["KEYWORDS", "Lexer", "Token", "TokenType", "tokenize"]
