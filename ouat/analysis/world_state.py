"""
World-state analysis.

Stories never declare their boolean state explicitly.  Instead, sentences
such as ``The dragon is asleep.`` or ``The door was not locked.`` imply a
flag named ``<subject>_is_<state>``.  This pass walks the statement tree in
source order and derives the symbol table of those flags together with
their initial value:

* narratives using ``was``/``is``/``became`` record ``key = not negated``;
* conditional and while-loop conditions using ``was``/``is`` record the
  same way, so flags only ever tested still get declared;
* random leans pin both participating flags to ``False`` once the scan is
  complete.

A key may be seen several times; the last polarity wins.  The pass never
fails: phrasing it does not understand is ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ouat.ast import Conditional, Narrative, RandomLean, Story, WhileLoop, walk
from ouat.lang.keywords import ARTICLES, CONDITION_VERBS, NEGATION, STATE_VERBS

logger = logging.getLogger(__name__)

_ARTICLE_PREFIXES = tuple(f"{article} " for article in ARTICLES)
_WHITESPACE = re.compile(r"\s+")
_NON_KEY_CHARS = re.compile(r"[^a-z_]")


def strip_article(text: str) -> str:
    """Drop a leading ``the``/``a``/``an`` (any case), keeping the rest as written."""
    stripped = text.strip()
    lowered = stripped.lower()
    for prefix in _ARTICLE_PREFIXES:
        if lowered.startswith(prefix):
            return stripped[len(prefix):].lstrip()
    return stripped


def normalize(text: str) -> str:
    """
    Normalize a subject or state phrase into a key fragment.

    A leading article is stripped, the text lowercased, whitespace turned
    into underscores and anything but ASCII letters and ``_`` dropped.

    Examples:
        >>> normalize("The Dragon")
        'dragon'
        >>> normalize("round table")
        'round_table'
    """
    lowered = strip_article(text).lower()
    return _NON_KEY_CHARS.sub("", _WHITESPACE.sub("_", lowered))


def state_key(subject: str, state: str) -> str:
    return f"{normalize(subject)}_is_{normalize(state)}"


@dataclass(frozen=True)
class StatePhrase:
    """A ``subject verb [not] state`` phrase split into its parts."""

    subject: str
    state: str
    negated: bool = False

    @property
    def key(self) -> str:
        return state_key(self.subject, self.state)

    @property
    def value(self) -> bool:
        return not self.negated


def parse_state_phrase(text: str, verbs=STATE_VERBS) -> Optional[StatePhrase]:
    """
    Split ``text`` on the first state verb after the first word.

    Returns ``None`` when no verb is found or when either the subject or
    the state would be empty after normalization.
    """
    words = text.split()
    for index in range(1, len(words)):
        if words[index].lower() in verbs:
            break
    else:
        return None

    subject_words = words[:index]
    state_words = words[index + 1:]
    negated = False
    if state_words and state_words[0].lower() == NEGATION:
        negated = True
        state_words = state_words[1:]

    subject = " ".join(subject_words)
    state = " ".join(state_words)
    if not normalize(subject) or not normalize(state):
        return None
    return StatePhrase(subject=subject, state=state, negated=negated)


def parse_condition(text: str) -> Optional[StatePhrase]:
    """Point-form condition: ``[the] subject (was|is) [not] state``."""
    return parse_state_phrase(text, CONDITION_VERBS)


class WorldState(Mapping[str, bool]):
    """Read-only, insertion-ordered mapping of state keys to initial values."""

    def __init__(self, values: Optional[Mapping[str, bool]] = None) -> None:
        self._values: Dict[str, bool] = dict(values or {})

    def __getitem__(self, key: str) -> bool:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"WorldState({self._values!r})"

    def resolve(self, phrase: Optional[StatePhrase]) -> Optional[str]:
        """Return the key of ``phrase`` if it names a known flag."""
        if phrase is None:
            return None
        key = phrase.key
        return key if key in self._values else None


class WorldStateAnalyzer:
    """Derive the world-state symbol table from a story."""

    def __init__(self) -> None:
        self._values: Dict[str, bool] = {}
        self._pinned: List[Tuple[str, str]] = []

    def analyze(self, story: Story) -> WorldState:
        for statement in walk(story):
            if isinstance(statement, Narrative):
                self._record(parse_state_phrase(statement.text, STATE_VERBS))
            elif isinstance(statement, (Conditional, WhileLoop)):
                self._record(parse_condition(statement.condition))
            elif isinstance(statement, RandomLean):
                self._pinned.append((statement.subject, statement.state_a))
                self._pinned.append((statement.subject, statement.state_b))

        for subject, state in self._pinned:
            if normalize(subject) and normalize(state):
                self._values[state_key(subject, state)] = False

        logger.debug("Derived %d world-state flags", len(self._values))
        return WorldState(self._values)

    def _record(self, phrase: Optional[StatePhrase]) -> None:
        if phrase is not None:
            self._values[phrase.key] = phrase.value


def analyze_world_state(story: Story) -> WorldState:
    """Run the world-state pass over ``story``."""
    return WorldStateAnalyzer().analyze(story)


__all__ = [
    "strip_article",
    "normalize",
    "state_key",
    "StatePhrase",
    "parse_state_phrase",
    "parse_condition",
    "WorldState",
    "WorldStateAnalyzer",
    "analyze_world_state",
]
