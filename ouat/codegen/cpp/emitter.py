"""
C++ code emitter.

Walks the statement tree and produces a single self-contained C++17
compilation unit.  The fixed skeleton (includes, the random helper, the
``main`` frame and the declarations hoisted to its top) comes from the
Jinja2 template in :mod:`ouat.codegen.cpp.templates`; the statement bodies
are produced here, one source line at a time.

Hoisted declarations, in order:

* one ``bool`` per world-state flag, initialised to its derived value;
* one empty ``std::vector<std::string>`` per collection iterated by a
  ``For each`` loop that is not itself the iterator of an enclosing loop;
* one ``std::function<void()>`` per function name, so functions can be
  defined anywhere in the story and called from anywhere after that.

Conditions use point form (``[the] subject (was|is) [not] state``).  A
condition naming a known flag becomes that flag, negated if needed; any
other condition is emitted as ``true``.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ouat import __version__
from ouat.analysis import WorldState, parse_condition, parse_state_phrase, state_key, strip_article
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
    Story,
    Tell,
    VariableDecl,
    VariableDeclBlock,
    WhileLoop,
    walk,
)
from ouat.lang.keywords import STATE_VERBS

from .templates import render_unit

logger = logging.getLogger(__name__)

INDENT = "    "

CPP_RESERVED_WORDS = frozenset({
    "alignas", "alignof", "and", "and_eq", "asm", "auto", "bitand", "bitor",
    "bool", "break", "case", "catch", "char", "char16_t", "char32_t", "class",
    "compl", "const", "constexpr", "const_cast", "continue", "decltype",
    "default", "delete", "do", "double", "dynamic_cast", "else", "enum",
    "explicit", "export", "extern", "false", "float", "for", "friend", "goto",
    "if", "inline", "int", "long", "mutable", "namespace", "new", "noexcept",
    "not", "not_eq", "nullptr", "operator", "or", "or_eq", "private",
    "protected", "public", "register", "reinterpret_cast", "return", "short",
    "signed", "sizeof", "static", "static_assert", "static_cast", "struct",
    "switch", "template", "this", "thread_local", "throw", "true", "try",
    "typedef", "typeid", "typename", "union", "unsigned", "using", "virtual",
    "void", "volatile", "wchar_t", "while", "xor", "xor_eq",
    # Names the emitted unit already uses
    "main", "std", "getRandomBool", "randomChoice", "userInput",
})

_WHITESPACE = re.compile(r"\s+")
_NON_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_]")

_CPP_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def identifier(text: str) -> str:
    """
    Turn a story phrase into a C++ identifier.

    Case is kept, whitespace runs become ``_`` and anything else outside
    ``[A-Za-z0-9_]`` is dropped.  A leading digit gets a ``_`` prefix and a
    reserved word gets a ``_`` suffix.

    Examples:
        >>> identifier("round table")
        'round_table'
        >>> identifier("healHero")
        'healHero'
    """
    name = _NON_IDENTIFIER_CHARS.sub("", _WHITESPACE.sub("_", text.strip()))
    if not name:
        return "unnamed"
    if name[0].isdigit():
        name = f"_{name}"
    if name in CPP_RESERVED_WORDS:
        name = f"{name}_"
    return name


def variable_identifier(declaration: VariableDecl) -> str:
    """``The hero`` + ``strength`` -> ``the_hero_strength``."""
    name = identifier(f"{declaration.owner} {declaration.name}").lower()
    if name in CPP_RESERVED_WORDS:
        name = f"{name}_"
    return name


def string_literal(text: str) -> str:
    """Quote ``text`` as a C++ string literal."""
    escaped = "".join(_CPP_ESCAPES.get(char, char) for char in text)
    return f'"{escaped}"'


class CppEmitter:
    """Emit a C++ compilation unit for a story and its world state."""

    def __init__(self, world_state: WorldState) -> None:
        self.world_state = world_state
        self._lines: List[str] = []
        # One dict per open C++ block: variable identifier -> (type, emitted name).
        self._scopes: List[Dict[str, Tuple[str, str]]] = []
        self._reserved: Set[str] = set()

    # ====================================================================
    # Entry point
    # ====================================================================

    def emit(self, story: Story, *, source_name: str = "") -> str:
        collections = collect_collections(story)
        functions = collect_functions(story)
        self._lines = []
        self._scopes = []
        self._reserved = set(self.world_state) | set(collections) | set(functions)
        self._emit_block(story.statements, depth=1, in_function=False)

        context = {
            "version": __version__,
            "source_name": source_name,
            "states": [
                (key, "true" if value else "false")
                for key, value in self.world_state.items()
            ],
            "collections": collections,
            "functions": functions,
            "body": self._lines,
        }
        code = render_unit(context)
        logger.debug(
            "Emitted %d body lines, %d flags, %d collections, %d functions",
            len(self._lines),
            len(context["states"]),
            len(context["collections"]),
            len(context["functions"]),
        )
        return code

    # ====================================================================
    # Conditions
    # ====================================================================

    def condition_expression(self, condition: str) -> str:
        """Translate condition text into a C++ boolean expression."""
        phrase = parse_condition(condition)
        key = self.world_state.resolve(phrase)
        if key is None:
            return "true"
        return f"!{key}" if phrase.negated else key

    # ====================================================================
    # Statements
    # ====================================================================

    def _line(self, depth: int, text: str) -> None:
        self._lines.append(f"{INDENT * depth}{text}")

    def _emit_block(self, statements: Sequence[Statement], *, depth: int, in_function: bool) -> None:
        self._scopes.append({})
        try:
            for statement in statements:
                self._emit_statement(statement, depth=depth, in_function=in_function)
        finally:
            self._scopes.pop()

    def _emit_statement(self, statement: Statement, *, depth: int, in_function: bool) -> None:
        if isinstance(statement, Narrative):
            self._emit_narrative(statement, depth)
        elif isinstance(statement, Conditional):
            self._emit_conditional(statement, depth, in_function)
        elif isinstance(statement, Interactive):
            self._emit_interactive(statement, depth)
        elif isinstance(statement, RandomLean):
            self._emit_random_lean(statement, depth)
        elif isinstance(statement, WhileLoop):
            self._line(depth, f"while ({self.condition_expression(statement.condition)}) {{")
            self._emit_block(statement.body, depth=depth + 1, in_function=in_function)
            self._line(depth, "}")
        elif isinstance(statement, ForEach):
            iterator = identifier(statement.iterator)
            collection = identifier(statement.collection)
            self._line(depth, f"for (const auto& {iterator} : {collection}) {{")
            self._emit_block(statement.body, depth=depth + 1, in_function=in_function)
            self._line(depth, "}")
        elif isinstance(statement, FunctionDecl):
            self._line(depth, f"{identifier(statement.name)} = [&]() {{")
            self._emit_block(statement.body, depth=depth + 1, in_function=True)
            self._line(depth, "};")
        elif isinstance(statement, FunctionCall):
            self._line(depth, f"{identifier(statement.name)}();")
        elif isinstance(statement, Return):
            self._line(depth, "return;" if in_function else "return 0;")
        elif isinstance(statement, Comment):
            pass
        elif isinstance(statement, VariableDecl):
            self._emit_variable(statement, depth)
        elif isinstance(statement, VariableDeclBlock):
            for declaration in statement.declarations:
                self._emit_variable(declaration, depth)
        elif isinstance(statement, Tell):
            self._line(depth, f"std::cout << {string_literal(statement.message)} << std::endl;")
        else:
            raise TypeError(f"Unknown statement node: {type(statement).__name__}")

    def _emit_narrative(self, statement: Narrative, depth: int) -> None:
        self._line(depth, f"std::cout << {string_literal(statement.text)} << std::endl;")
        phrase = parse_state_phrase(statement.text, STATE_VERBS)
        key = self.world_state.resolve(phrase)
        if key is not None:
            self._line(depth, f"{key} = {'false' if phrase.negated else 'true'};")

    def _emit_conditional(self, statement: Conditional, depth: int, in_function: bool) -> None:
        # An else branch holding a single conditional continues the chain.
        node = statement
        keyword = "if"
        while True:
            self._line(depth, f"{keyword} ({self.condition_expression(node.condition)}) {{")
            self._emit_block(node.then_branch, depth=depth + 1, in_function=in_function)
            else_branch = node.else_branch
            if len(else_branch) == 1 and isinstance(else_branch[0], Conditional):
                node = else_branch[0]
                keyword = "} else if"
                continue
            if else_branch:
                self._line(depth, "} else {")
                self._emit_block(else_branch, depth=depth + 1, in_function=in_function)
            break
        self._line(depth, "}")

    def _emit_interactive(self, statement: Interactive, depth: int) -> None:
        self._line(depth, "{")
        self._line(depth + 1, f"std::cout << {string_literal(statement.prompt + ' ')};")
        self._line(depth + 1, "std::string userInput;")
        self._line(depth + 1, "std::getline(std::cin, userInput);")
        self._line(depth, "}")

    def _emit_random_lean(self, statement: RandomLean, depth: int) -> None:
        subject = strip_article(statement.subject)
        self._line(depth, "{")
        self._line(depth + 1, f"// Randomly determine the state of {subject}")
        self._line(depth + 1, "bool randomChoice = getRandomBool();")
        for state, value in ((statement.state_a, "randomChoice"), (statement.state_b, "!randomChoice")):
            key = state_key(statement.subject, state)
            if key in self.world_state:
                self._line(depth + 1, f"{key} = {value};")
        self._line(
            depth + 1,
            f"std::cout << {string_literal(f'The {subject} was ')} << (randomChoice ? "
            f"{string_literal(statement.state_a)} : {string_literal(statement.state_b)}) "
            f"<< \".\" << std::endl;",
        )
        self._line(depth, "}")

    def _emit_variable(self, declaration: VariableDecl, depth: int) -> None:
        """
        Declare a variable, or assign it when an enclosing block already has it.

        A repeat that switches between integral and textual values, or a
        name already taken by a hoisted flag, collection or function, gets a
        numbered name instead.
        """
        name = variable_identifier(declaration)
        if declaration.is_integral:
            cpp_type, value = "int", str(int(declaration.value))
        else:
            cpp_type, value = "std::string", string_literal(declaration.value)

        declared = self._lookup_variable(name)
        if declared is not None and declared[0] == cpp_type:
            self._line(depth, f"{declared[1]} = {value};")
            return

        taken = self._taken_names()
        emitted = name
        if declared is not None or emitted in taken:
            index = 2
            while f"{name}_{index}" in taken:
                index += 1
            emitted = f"{name}_{index}"
        self._scopes[-1][name] = (cpp_type, emitted)
        self._line(depth, f"{cpp_type} {emitted} = {value};")

    def _lookup_variable(self, name: str) -> Optional[Tuple[str, str]]:
        for scope in reversed(self._scopes):
            if name in scope:
                return scope[name]
        return None

    def _taken_names(self) -> Set[str]:
        taken = set(self._reserved)
        for scope in self._scopes:
            taken.update(emitted for _, emitted in scope.values())
        return taken


def collect_collections(story: Story) -> List[str]:
    """Distinct collection identifiers iterated anywhere, minus enclosing iterators."""
    names: List[str] = []
    _collect_collections(story.statements, frozenset(), names)
    return names


def _collect_collections(statements: Iterable[Statement], bound: Set[str], names: List[str]) -> None:
    for statement in statements:
        if isinstance(statement, ForEach):
            collection = identifier(statement.collection)
            if collection not in bound and collection not in names:
                names.append(collection)
            _collect_collections(statement.body, bound | {identifier(statement.iterator)}, names)
        elif isinstance(statement, Conditional):
            _collect_collections(statement.then_branch, bound, names)
            _collect_collections(statement.else_branch, bound, names)
        elif isinstance(statement, (WhileLoop, FunctionDecl)):
            _collect_collections(statement.body, bound, names)


def collect_functions(story: Story) -> List[str]:
    """Distinct function identifiers, declared or called, in source order."""
    names: List[str] = []
    for statement in walk(story):
        if isinstance(statement, (FunctionDecl, FunctionCall)):
            name = identifier(statement.name)
            if name not in names:
                names.append(name)
    return names


def emit_cpp(story: Story, world_state: WorldState, *, source_name: str = "") -> str:
    """Emit the C++ compilation unit for ``story``."""
    return CppEmitter(world_state).emit(story, source_name=source_name)


__all__ = [
    "CppEmitter",
    "CPP_RESERVED_WORDS",
    "identifier",
    "variable_identifier",
    "string_literal",
    "collect_collections",
    "collect_functions",
    "emit_cpp",
]
