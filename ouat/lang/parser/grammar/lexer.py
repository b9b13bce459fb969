"""Lexical analyzer (tokenizer) for the story notation.

Converts source text into a flat stream of tokens for parsing.  The lexer
knows nothing about grammar: it only groups characters into words,
numbers, quoted strings, periods and list punctuation, and classifies
words through the keyword table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import List, Mapping, Optional

from ouat.errors import LexError
from ouat.lang.keywords import (
    ADJECTIVE_WORDS,
    NOUN_WORDS,
    SUBJECT_WORDS,
    VERB_WORDS,
)

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for the story notation."""

    # Literals
    STRING = auto()
    NUMBER = auto()

    # Words
    IDENTIFIER = auto()
    SUBJECT = auto()
    NOUN = auto()
    ADJECTIVE = auto()
    VERB = auto()

    # Phase markers
    ONCE = auto()
    UPON = auto()
    A = auto()
    TIME = auto()
    ENDS = auto()

    # Keywords - Conditionals
    IF = auto()
    THEN = auto()
    ELSE = auto()
    END = auto()
    ENDIF = auto()

    # Keywords - Loops
    WHILE = auto()
    ENDWHILE = auto()
    FOR = auto()
    EACH = auto()
    IN = auto()
    DO = auto()
    ENDFOR = auto()

    # Keywords - Functions
    DEFINE = auto()
    FUNCTION = auto()
    AS = auto()
    ENDFUNCTION = auto()
    CALL = auto()
    RETURN = auto()

    # Keywords - Interaction and fate
    CHOOSE = auto()
    RANDOM = auto()
    LEANS = auto()
    TOWARDS = auto()
    OR = auto()

    # Keywords - Output and asides
    TELL = auto()
    NARRATE = auto()
    REMARK = auto()
    NOTE = auto()

    # Keywords - Declarations
    HAS = auto()
    IS = auto()

    # Punctuation
    PERIOD = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COMMA = auto()

    # Special
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A single token with the position of its first character."""

    type: TokenType
    value: str
    line: int
    column: int

    @property
    def lower(self) -> str:
        return self.value.lower()

    @property
    def is_word(self) -> bool:
        """True for tokens spelled by the source as a bare word."""
        return self.type not in _NON_WORD_TYPES

    def describe(self) -> str:
        return f"{self.type.name}({self.value!r}) at line {self.line}, column {self.column}"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


_NON_WORD_TYPES = frozenset({
    TokenType.STRING,
    TokenType.NUMBER,
    TokenType.PERIOD,
    TokenType.LBRACKET,
    TokenType.RBRACKET,
    TokenType.COMMA,
    TokenType.EOF,
})


def _build_keyword_table() -> Mapping[str, TokenType]:
    table = {}
    for word in SUBJECT_WORDS:
        table[word] = TokenType.SUBJECT
    for word in NOUN_WORDS:
        table[word] = TokenType.NOUN
    for word in ADJECTIVE_WORDS:
        table[word] = TokenType.ADJECTIVE
    for word in VERB_WORDS:
        table[word] = TokenType.VERB
    # Phase markers and control keywords win over the vocabulary.
    table.update({
        "once": TokenType.ONCE,
        "upon": TokenType.UPON,
        "a": TokenType.A,
        "time": TokenType.TIME,
        "ends": TokenType.ENDS,

        "if": TokenType.IF,
        "then": TokenType.THEN,
        "else": TokenType.ELSE,
        "end": TokenType.END,
        "endif": TokenType.ENDIF,

        "while": TokenType.WHILE,
        "endwhile": TokenType.ENDWHILE,
        "for": TokenType.FOR,
        "each": TokenType.EACH,
        "in": TokenType.IN,
        "do": TokenType.DO,
        "endfor": TokenType.ENDFOR,

        "define": TokenType.DEFINE,
        "function": TokenType.FUNCTION,
        "as": TokenType.AS,
        "endfunction": TokenType.ENDFUNCTION,
        "call": TokenType.CALL,
        "return": TokenType.RETURN,

        "choose": TokenType.CHOOSE,
        "random": TokenType.RANDOM,
        "leans": TokenType.LEANS,
        "towards": TokenType.TOWARDS,
        "toward": TokenType.TOWARDS,
        "or": TokenType.OR,

        "tell": TokenType.TELL,
        "narrate": TokenType.NARRATE,
        "remark": TokenType.REMARK,
        "note": TokenType.NOTE,

        "has": TokenType.HAS,
        "is": TokenType.IS,
    })
    return MappingProxyType(table)


# Keyword mapping, looked up by the lowercased word.
KEYWORDS: Mapping[str, TokenType] = _build_keyword_table()

# Punctuation allowed inside a word besides letters, digits and underscore.
WORD_PUNCTUATION = frozenset(",;:?!-'")

PUNCTUATION_TOKENS = {
    '.': TokenType.PERIOD,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    ',': TokenType.COMMA,
}

COMMENT_CHAR = '#'
QUOTE_CHAR = '"'


class Lexer:
    """Tokenizer for story source code."""

    def __init__(self, source: str, path: str = ""):
        """Initialize lexer with source code."""
        self.source = source
        self.path = path
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def error(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> LexError:
        """Create a lexer error at the given (or current) position."""
        return LexError(
            message,
            path=self.path or None,
            line=self.line if line is None else line,
            column=self.column if column is None else column,
        )

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_comment(self) -> None:
        """Skip a line comment starting with '#'."""
        while self.peek() is not None and self.peek() != '\n':
            self.advance()

    def read_string(self) -> str:
        """Read a double-quoted string literal; a backslash escapes the next character."""
        start_line, start_column = self.line, self.column
        self.advance()  # opening quote
        chars = []
        while True:
            char = self.peek()
            if char is None:
                raise self.error("Unterminated string literal", start_line, start_column)
            if char == QUOTE_CHAR:
                self.advance()
                break
            if char == '\\':
                self.advance()
                escaped = self.advance()
                if escaped is None:
                    raise self.error("Unterminated string literal", start_line, start_column)
                chars.append(escaped)
            else:
                chars.append(self.advance())
        return ''.join(chars)

    def read_word(self) -> str:
        """Read a run of word characters."""
        chars = []
        while self.peek() is not None and _is_word_char(self.peek()):
            chars.append(self.advance())
        return ''.join(chars)

    def add_token(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        """Add a token to the list."""
        self.tokens.append(Token(type=token_type, value=value, line=line, column=column))

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while self.pos < len(self.source):
            char = self.peek()

            if char.isspace():
                self.advance()
                continue

            if char == COMMENT_CHAR:
                self.skip_comment()
                continue

            line, column = self.line, self.column

            if char == QUOTE_CHAR:
                value = self.read_string()
                self.add_token(TokenType.STRING, value, line, column)
                continue

            # '.' always terminates; ',' only stands alone when it starts a token
            if char in PUNCTUATION_TOKENS:
                self.advance()
                self.add_token(PUNCTUATION_TOKENS[char], char, line, column)
                continue

            if _is_word_char(char):
                value = self.read_word()
                if _is_decimal(value):
                    self.add_token(TokenType.NUMBER, value, line, column)
                else:
                    token_type = KEYWORDS.get(value.lower(), TokenType.IDENTIFIER)
                    self.add_token(token_type, value, line, column)
                continue

            if not char.isprintable():
                self.advance()
                continue

            raise self.error(f"Unexpected character: {char!r}", line, column)

        self.add_token(TokenType.EOF, '', self.line, self.column)
        logger.debug("Tokenized %d tokens from %s", len(self.tokens), self.path or "<string>")
        return self.tokens


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == '_' or char in WORD_PUNCTUATION


def _is_decimal(value: str) -> bool:
    return value.isascii() and value.isdecimal()


def tokenize(source: str, path: str = "") -> List[Token]:
    """Tokenize story source code."""
    lexer = Lexer(source, path)
    return lexer.tokenize()


__all__ = ["Token", "TokenType", "Lexer", "KEYWORDS", "tokenize"]
