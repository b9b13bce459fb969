"""
Front-to-back translation pipeline.

``translate`` runs text -> tokens -> tree -> world state -> C++ source.
Lexing and parsing stop at the first defect by raising
:class:`~ouat.errors.LexError` or :class:`~ouat.errors.ParseError`; the
analysis and emission passes never fail.  No partial output is produced on
error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from .analysis import WorldState, analyze_world_state
from .ast import Story
from .codegen import emit_cpp
from .lang.parser import StoryParser
from .lang.parser.grammar.lexer import Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationResult:
    """Everything one translation run produced."""

    tokens: List[Token]
    story: Story
    world_state: WorldState
    code: str


def translate(source: str, *, path: str = "") -> TranslationResult:
    """Translate story ``source`` into a C++ compilation unit."""
    parser = StoryParser(source, path=path)
    story = parser.parse()
    world_state = analyze_world_state(story)
    source_name = Path(path).name if path else ""
    code = emit_cpp(story, world_state, source_name=source_name)
    logger.debug("Translated %s", path or "<string>")
    return TranslationResult(tokens=parser.tokens, story=story, world_state=world_state, code=code)


def translate_file(path: Union[str, Path], *, encoding: str = "utf-8") -> TranslationResult:
    """Read ``path`` and translate its contents."""
    source_path = Path(path)
    source = source_path.read_text(encoding=encoding)
    return translate(source, path=str(source_path))


def write_output(result: TranslationResult, output: Path) -> Path:
    """Write the generated unit, creating parent directories as needed."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.code, encoding="utf-8")
    logger.debug("Wrote %d characters to %s", len(result.code), output)
    return output


__all__ = ["TranslationResult", "translate", "translate_file", "write_output"]
