"""Recursive descent parser for the story notation.

The parser consumes the token stream produced by
:mod:`ouat.lang.parser.grammar.lexer` and builds a :class:`~ouat.ast.Story`.
There is no error recovery: the first mismatch raises
:class:`~ouat.errors.ParseError` carrying the offending line and column.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ouat.ast import Statement, Story
from ouat.errors import ParseError
from ouat.lang.keywords import (
    BLOCK_TERMINATORS,
    EPILOGUE_TEXT,
    EPILOGUE_WORDS,
    PROLOGUE_TEXT,
    PROLOGUE_WORDS,
)

from .grammar.lexer import Token, TokenType, tokenize
from .declarations import DeclarationParsingMixin
from .statements import StatementParsingMixin

logger = logging.getLogger(__name__)


class StoryParser(StatementParsingMixin, DeclarationParsingMixin):
    """
    Recursive descent parser for story programs.

    Grammar:
        Program = Prologue , "." , { Statement } , Epilogue , "." ;
        Prologue = "once" , "upon" , "a" , "time" ;
        Epilogue = "the" , "story" , "ends" ;

    Keywords are matched on the lowercased spelling of word tokens, so
    ``End``, ``END`` and ``end`` all close a block.
    """

    def __init__(self, source: str, *, path: str = ""):
        """Initialize parser with source code."""
        self.source = source
        self.path = path

        # Tokenize source
        self.tokens = tokenize(source, path)
        self.pos = 0

    # ====================================================================
    # Token Management
    # ====================================================================

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Peek at token without consuming."""
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def current(self) -> Optional[Token]:
        """Get current token."""
        return self.peek(0)

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current()
        if token is None or token.type == TokenType.EOF:
            raise self.error("Unexpected end of file")
        self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        token = self.current()
        return token is not None and token.type in types

    def consume_if(self, *types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        if self.match(*types):
            return self.advance()
        return None

    def expect(self, token_type: TokenType, description: str) -> Token:
        """Expect a token of the given type and consume it."""
        if not self.match(token_type):
            raise self.error(f"Expected {description}", expected=[description])
        return self.advance()

    def at_eof(self) -> bool:
        return self.match(TokenType.EOF)

    # ====================================================================
    # Word Matching
    # ====================================================================

    def check_word(self, *words: str, offset: int = 0) -> bool:
        """Check whether the token at ``offset`` is one of ``words`` (any case)."""
        token = self.peek(offset)
        return token is not None and token.is_word and token.lower in words

    def consume_word(self, *words: str) -> Optional[Token]:
        if self.check_word(*words):
            return self.advance()
        return None

    def expect_word(self, *words: str) -> Token:
        """Expect one of ``words`` and consume it."""
        if not self.check_word(*words):
            expected = [f"'{word}'" for word in words]
            raise self.error(
                f"Expected {' or '.join(expected)}",
                expected=expected,
            )
        return self.advance()

    def expect_period(self) -> Token:
        return self.expect(TokenType.PERIOD, "'.'")

    def at_terminator(self) -> bool:
        return self.check_word(*BLOCK_TERMINATORS)

    def at_epilogue(self) -> bool:
        """Lookahead for ``The story ends .``."""
        for offset, word in enumerate(EPILOGUE_WORDS):
            if not self.check_word(word, offset=offset):
                return False
        following = self.peek(len(EPILOGUE_WORDS))
        return following is not None and following.type == TokenType.PERIOD

    def collect_sentence(self) -> List[Token]:
        """Consume tokens up to and including the next period; return the ones before it."""
        tokens: List[Token] = []
        while not self.match(TokenType.PERIOD):
            if self.at_eof():
                raise self.error("Unterminated sentence", expected=["'.'"])
            tokens.append(self.advance())
        self.advance()
        return tokens

    def collect_until(self, *words: str) -> List[Token]:
        """Consume tokens up to (not including) one of ``words`` within the current sentence."""
        tokens: List[Token] = []
        while not self.check_word(*words):
            if self.at_eof() or self.match(TokenType.PERIOD):
                expected = [f"'{word}'" for word in words]
                raise self.error(
                    f"Expected {' or '.join(expected)} before the end of the sentence",
                    expected=expected,
                )
            tokens.append(self.advance())
        return tokens

    @staticmethod
    def join_tokens(tokens: Sequence[Token]) -> str:
        return " ".join(token.value for token in tokens)

    # ====================================================================
    # Errors
    # ====================================================================

    def error(
        self,
        message: str,
        token: Optional[Token] = None,
        *,
        expected: Optional[Sequence[str]] = None,
        suggestion: Optional[str] = None,
    ) -> ParseError:
        """Create a parse error at ``token`` (default: current position)."""
        token = token or self.current()
        if token is None:
            return ParseError(
                message,
                path=self.path or None,
                expected=expected,
                suggestion=suggestion,
            )
        found = "end of file" if token.type == TokenType.EOF else f"'{token.value}'"
        return ParseError(
            message,
            path=self.path or None,
            line=token.line,
            column=token.column,
            expected=expected,
            found=found,
            suggestion=suggestion,
        )

    # ====================================================================
    # High-Level Parsing
    # ====================================================================

    def parse(self) -> Story:
        """
        Parse an entire story.

        Grammar:
            Program = Prologue , "." , { Statement } , Epilogue , "." ;
        """
        self.parse_prologue()

        statements: List[Statement] = []
        while not self.at_epilogue():
            if self.at_eof():
                raise self.error(
                    f"Missing story epilogue '{EPILOGUE_TEXT}'",
                    expected=[f"'{EPILOGUE_TEXT}'"],
                )
            if self.at_terminator():
                token = self.current()
                raise self.error(
                    f"Unexpected '{token.value}' outside of a block",
                    expected=["a statement", f"'{EPILOGUE_TEXT}'"],
                )
            statements.append(self.parse_statement())

        self.parse_epilogue()

        story = Story(statements=tuple(statements))
        logger.debug(
            "Parsed %d top-level statements from %s",
            len(story.statements),
            self.path or "<string>",
        )
        return story

    def parse_prologue(self) -> None:
        """Parse ``Once upon a time .``; the phrase is mandatory."""
        for word in PROLOGUE_WORDS:
            if not self.check_word(word):
                raise self.error(
                    f"Story must begin with '{PROLOGUE_TEXT}'",
                    expected=[f"'{word}'"],
                )
            self.advance()
        self.expect_period()

    def parse_epilogue(self) -> None:
        """Parse ``The story ends .`` followed by the end of input."""
        for word in EPILOGUE_WORDS:
            self.expect_word(word)
        self.expect_period()
        if not self.at_eof():
            raise self.error(
                f"Unexpected content after '{EPILOGUE_TEXT}'",
                expected=["end of file"],
            )


__all__ = ["StoryParser"]
