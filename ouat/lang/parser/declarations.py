"""Narrative and variable declaration parsing for StoryParser.

A plain sentence is a narrative unless it carries a number literal and a
``has``/``is`` word, in which case it declares one or more variables:

    The hero has strength of 10 and agility of 7.
    The hero has strength of 10 and the dragon has a hoard of 500.
"""

from typing import List, Optional, Sequence, Tuple

from ouat.ast import Narrative, Statement, VariableDecl, VariableDeclBlock
from ouat.lang.keywords import (
    DECLARATION_KEYWORDS,
    DECLARATION_LINKS,
    DECLARATION_SEPARATOR,
)

from .grammar.lexer import Token, TokenType

_INDEFINITE_ARTICLES = ('a', 'an')


class DeclarationParsingMixin:
    """Mixin with the narrative and declaration parsing methods."""

    def parse_narrative_or_declaration(self) -> Statement:
        """
        Parse a sentence as a narrative or a declaration block.

        Grammar:
            Declaration = Owner , ( "has" | "is" ) , [ "a" | "an" ] , Words ,
                          ( "of" | "is" ) , Words ;
            DeclarationBlock = Declaration , { "and" , ( Declaration | ShortDeclaration ) } ;
            ShortDeclaration = [ "a" | "an" ] , Words , ( "of" | "is" ) , Words ;
        """
        start = self.current()
        tokens = self.collect_sentence()
        if self._looks_like_declaration(tokens):
            return self.parse_declaration_block(tokens, start)
        return Narrative(text=self.join_tokens(tokens))

    @staticmethod
    def _looks_like_declaration(tokens: Sequence[Token]) -> bool:
        has_number = any(token.type == TokenType.NUMBER for token in tokens)
        has_link = any(token.lower in DECLARATION_KEYWORDS for token in tokens)
        return has_number and has_link

    def parse_declaration_block(self, tokens: Sequence[Token], start: Token) -> VariableDeclBlock:
        declarations: List[VariableDecl] = []
        owner: Optional[str] = None

        for segment in self._split_segments(tokens):
            if not segment:
                raise self.error("Empty variable declaration around 'and'", start)
            declaration = self._parse_full_declaration(segment)
            if declaration is None and owner is not None:
                declaration = self._parse_short_declaration(segment, owner)
            if declaration is None:
                raise self.error(
                    "Malformed variable declaration",
                    segment[0],
                    expected=["<owner> has <name> of <value>"],
                    suggestion="Write declarations as 'The hero has strength of 10.'",
                )
            owner = declaration.owner
            declarations.append(declaration)

        return VariableDeclBlock(declarations=tuple(declarations))

    @staticmethod
    def _split_segments(tokens: Sequence[Token]) -> List[List[Token]]:
        segments: List[List[Token]] = [[]]
        for token in tokens:
            if token.is_word and token.lower == DECLARATION_SEPARATOR:
                segments.append([])
            else:
                segments[-1].append(token)
        return segments

    def _parse_full_declaration(self, segment: Sequence[Token]) -> Optional[VariableDecl]:
        """``<owner> (has|is) [a] <name> (of|is) <value>``; ``None`` if the shape does not fit."""
        for index, token in enumerate(segment):
            if token.is_word and token.lower in DECLARATION_KEYWORDS:
                break
        else:
            return None
        if index == 0:
            return None

        parsed = self._parse_name_and_value(segment[index + 1:])
        if parsed is None:
            return None
        name, value = parsed
        return VariableDecl(owner=self.join_tokens(segment[:index]), name=name, value=value)

    def _parse_short_declaration(self, segment: Sequence[Token], owner: str) -> Optional[VariableDecl]:
        """``[a] <name> (of|is) <value>`` continuing the previous owner."""
        parsed = self._parse_name_and_value(segment)
        if parsed is None:
            return None
        name, value = parsed
        return VariableDecl(owner=owner, name=name, value=value)

    def _parse_name_and_value(self, tokens: Sequence[Token]) -> Optional[Tuple[str, str]]:
        tokens = list(tokens)
        if tokens and tokens[0].is_word and tokens[0].lower in _INDEFINITE_ARTICLES:
            tokens = tokens[1:]
        # The name takes at least one word; the first link after it splits off the value.
        for index in range(1, len(tokens)):
            token = tokens[index]
            if token.is_word and token.lower in DECLARATION_LINKS:
                name, value = tokens[:index], tokens[index + 1:]
                if not value:
                    return None
                return self.join_tokens(name), self.join_tokens(value)
        return None


__all__ = ["DeclarationParsingMixin"]
