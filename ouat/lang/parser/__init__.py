"""Story notation parser package.

Public API:
    parse_story(source, path) -> Story
    StoryParser - The recursive descent parser class
    tokenize(source, path) -> List[Token]

Error types:
    LexError, ParseError
"""

from ouat.ast import Story
from ouat.errors import LexError, ParseError

from .grammar.lexer import Token, TokenType, tokenize
from .parse import StoryParser


def parse_story(source: str, path: str = "") -> Story:
    """
    Parse story source code into a :class:`~ouat.ast.Story` tree.

    Args:
        source: Story source code to parse
        path: Optional file path for error reporting

    Returns:
        Story tree

    Raises:
        LexError: If the source contains an unterminated string or an
            unrecognized character
        ParseError: If the tokens do not form a story

    Example:
        ```python
        story = parse_story("Once upon a time. The hero wakes. The story ends.")
        print(story.statements[0].text)  # "The hero wakes"
        ```
    """
    parser = StoryParser(source, path=path)
    return parser.parse()


__all__ = [
    "parse_story",
    "StoryParser",
    "Token",
    "TokenType",
    "tokenize",
    "LexError",
    "ParseError",
]
