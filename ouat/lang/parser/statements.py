"""Statement parsing methods for StoryParser.

Contains the control statements (conditionals, loops, functions, prompts,
random leans, tells and comments) and the block scanner shared by every
construct that owns a nested body.
"""

from typing import List, Optional, Sequence, Tuple

from ouat.ast import (
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
    Tell,
    WhileLoop,
)
from ouat.lang.keywords import (
    COMMENT_MARKERS,
    CONDITIONAL_CLOSERS,
    FOR_EACH_CLOSERS,
    FUNCTION_CLOSERS,
    WHILE_CLOSERS,
    suggest_keyword,
)

from .grammar.lexer import Token, TokenType


class StatementParsingMixin:
    """Mixin with the statement-level parsing methods."""

    # This will be mixed into StoryParser, so we have access to all parser methods

    def parse_statement(self) -> Statement:
        """
        Parse a single statement, dispatching on its first word.

        Grammar:
            Statement = Conditional | Interactive | RandomLean | WhileLoop
                      | ForEach | FunctionDecl | FunctionCall | Return
                      | Comment | Tell | NarrativeOrDeclaration ;
        """
        token = self.current()
        if token.type == TokenType.PERIOD:
            raise self.error("Expected a statement", expected=["a statement"])

        word = token.lower if token.is_word else None
        if word == 'if':
            return self.parse_conditional()
        if word == 'choose':
            return self.parse_interactive()
        if word == 'random':
            return self.parse_random_lean()
        if word == 'while':
            return self.parse_while_loop()
        if word == 'for' and self.check_word('each', offset=1):
            return self.parse_for_each()
        if word == 'define':
            return self.parse_function_declaration()
        if word == 'call':
            return self.parse_function_call()
        if word == 'return':
            return self.parse_return()
        if word in COMMENT_MARKERS:
            return self.parse_comment()
        if word == 'tell':
            return self.parse_tell()
        return self.parse_narrative_or_declaration()

    # ====================================================================
    # Blocks
    # ====================================================================

    def parse_block(self, closers: Sequence[str], opener: Token) -> Tuple[List[Statement], Token]:
        """
        Parse statements until a block terminator.

        Returns the statements and the terminator token, which is left
        unconsumed.  Reaching the epilogue or the end of input first is an
        unterminated block.
        """
        statements: List[Statement] = []
        misspelled: Optional[Tuple[Token, str]] = None

        while not self.at_terminator():
            if self.at_epilogue() or self.at_eof():
                suggestion = None
                if misspelled is not None:
                    typo, keyword = misspelled
                    suggestion = (
                        f"Did you mean '{keyword}' instead of '{typo.value}' "
                        f"at line {typo.line}?"
                    )
                raise self.error(
                    f"Unterminated block opened by '{opener.value}' at line {opener.line}",
                    expected=[f"'{closer}'" for closer in closers],
                    suggestion=suggestion,
                )

            first = self.current()
            statement = self.parse_statement()
            if misspelled is None and isinstance(statement, Narrative) and first.is_word \
                    and statement.text == first.value:
                keyword = suggest_keyword(first.value, 'terminator')
                if keyword in closers:
                    misspelled = (first, keyword)
            statements.append(statement)

        return statements, self.current()

    def expect_closer(self, closers: Sequence[str], opener: Token) -> Token:
        """Consume the block terminator, which must be one of ``closers``."""
        token = self.current()
        if token.lower not in closers:
            suggestion = None
            if len(closers) == 1:
                suggestion = f"Close the '{opener.value}' block with '{closers[0].capitalize()}.'"
            raise self.error(
                f"Mismatched block terminator '{token.value}' for '{opener.value}' "
                f"at line {opener.line}",
                expected=[f"'{closer}'" for closer in closers],
                suggestion=suggestion,
            )
        self.advance()
        self.expect_period()
        return token

    # ====================================================================
    # Conditionals
    # ====================================================================

    def parse_conditional(self) -> Conditional:
        """
        Parse a conditional.

        Grammar:
            Conditional = "if" , Words , "then" , [ "." ] , { Statement } ,
                          [ "else" , ( Conditional | [ "." ] , { Statement } ) ] ,
                          ( "end" | "endif" ) , "." ;

        ``Else if`` nests a conditional that consumes its own end marker.
        """
        opener = self.expect_word('if')
        condition_tokens = self.collect_until('then')
        if not condition_tokens:
            raise self.error("Conditional requires a condition before 'then'")
        self.expect_word('then')
        self.consume_if(TokenType.PERIOD)

        then_branch, _ = self.parse_block(CONDITIONAL_CLOSERS, opener)
        else_branch: List[Statement] = []

        if self.consume_word('else'):
            if self.check_word('if'):
                else_branch.append(self.parse_conditional())
                return Conditional(
                    condition=self.join_tokens(condition_tokens),
                    then_branch=tuple(then_branch),
                    else_branch=tuple(else_branch),
                )
            self.consume_if(TokenType.PERIOD)
            else_branch, _ = self.parse_block(CONDITIONAL_CLOSERS, opener)
            if self.check_word('else'):
                raise self.error(
                    "Conditional already has an 'else' branch",
                    expected=[f"'{closer}'" for closer in CONDITIONAL_CLOSERS],
                )

        self.expect_closer(CONDITIONAL_CLOSERS, opener)
        return Conditional(
            condition=self.join_tokens(condition_tokens),
            then_branch=tuple(then_branch),
            else_branch=tuple(else_branch),
        )

    # ====================================================================
    # Loops
    # ====================================================================

    def parse_while_loop(self) -> WhileLoop:
        """
        Parse a while loop.

        Grammar:
            WhileLoop = "while" , Words , "." , { Statement } , "endwhile" , "." ;
        """
        opener = self.expect_word('while')
        condition_tokens = self.collect_sentence()
        if not condition_tokens:
            raise self.error("While loop requires a condition", opener)
        body, _ = self.parse_block(WHILE_CLOSERS, opener)
        self.expect_closer(WHILE_CLOSERS, opener)
        return WhileLoop(condition=self.join_tokens(condition_tokens), body=tuple(body))

    def parse_for_each(self) -> ForEach:
        """
        Parse a collection loop.

        Grammar:
            ForEach = "for" , "each" , Word , "in" , Words , "do" , [ "." ] ,
                      { Statement } , "endfor" , "." ;

        A bracket-delimited collection is unwrapped.
        """
        opener = self.expect_word('for')
        self.expect_word('each')

        iterator = self.current()
        if not iterator.is_word or iterator.lower == 'in':
            raise self.error("Expected an iterator name after 'for each'", expected=["a name"])
        self.advance()
        self.expect_word('in')

        collection_tokens = self.collect_until('do')
        collection = self.join_tokens(collection_tokens)
        if collection.startswith('[') and collection.endswith(']'):
            collection = collection[1:-1].strip()
        if not collection:
            raise self.error("For each loop requires a collection before 'do'")
        self.expect_word('do')
        self.consume_if(TokenType.PERIOD)

        body, _ = self.parse_block(FOR_EACH_CLOSERS, opener)
        self.expect_closer(FOR_EACH_CLOSERS, opener)
        return ForEach(iterator=iterator.value, collection=collection, body=tuple(body))

    # ====================================================================
    # Functions
    # ====================================================================

    def parse_function_declaration(self) -> FunctionDecl:
        """
        Parse a function declaration.

        Grammar:
            FunctionDecl = "define" , "the" , "function" , Words , "as" , [ "." ] ,
                           { Statement } , "endfunction" , "." ;
        """
        opener = self.expect_word('define')
        self.expect_word('the')
        self.expect_word('function')

        name_tokens = self.collect_until('as')
        if not name_tokens:
            raise self.error("Function declaration requires a name before 'as'")
        self.expect_word('as')
        self.consume_if(TokenType.PERIOD)

        body, _ = self.parse_block(FUNCTION_CLOSERS, opener)
        self.expect_closer(FUNCTION_CLOSERS, opener)
        return FunctionDecl(name=self.join_tokens(name_tokens), body=tuple(body))

    def parse_function_call(self) -> FunctionCall:
        opener = self.expect_word('call')
        name_tokens = self.collect_sentence()
        if not name_tokens:
            raise self.error("Call requires a function name", opener)
        return FunctionCall(name=self.join_tokens(name_tokens))

    def parse_return(self) -> Return:
        self.expect_word('return')
        self.expect_period()
        return Return()

    # ====================================================================
    # Prompts, fate, output and asides
    # ====================================================================

    def parse_interactive(self) -> Interactive:
        self.expect_word('choose')
        return Interactive(prompt=self.join_tokens(self.collect_sentence()))

    def parse_random_lean(self) -> RandomLean:
        """
        Parse a random lean.

        Grammar:
            RandomLean = "random" , Words , "leans" , ( "towards" | "toward" ) ,
                         Words , "or" , Words , "." ;
        """
        opener = self.expect_word('random')
        subject = self.collect_until('leans')
        self.expect_word('leans')
        self.expect_word('towards', 'toward')
        state_a = self.collect_until('or')
        self.expect_word('or')
        state_b = self.collect_sentence()

        for part, tokens in (("subject", subject), ("first state", state_a), ("second state", state_b)):
            if not tokens:
                raise self.error(f"Random lean is missing its {part}", opener)

        return RandomLean(
            subject=self.join_tokens(subject),
            state_a=self.join_tokens(state_a),
            state_b=self.join_tokens(state_b),
        )

    def parse_tell(self) -> Tell:
        self.expect_word('tell')
        if not self.match(TokenType.STRING):
            raise self.error(
                "Expected a quoted message after 'tell'",
                expected=["string literal"],
                suggestion='Wrap the message in double quotes, e.g. Tell "Hello".',
            )
        message = self.advance().value
        self.expect_period()
        return Tell(message=message)

    def parse_comment(self) -> Comment:
        self.advance()
        return Comment(text=self.join_tokens(self.collect_sentence()))


__all__ = ["StatementParsingMixin"]
