"""Semantic passes over the statement tree."""

from .world_state import (
    StatePhrase,
    WorldState,
    WorldStateAnalyzer,
    analyze_world_state,
    normalize,
    strip_article,
    parse_condition,
    parse_state_phrase,
    state_key,
)

__all__ = [
    "StatePhrase",
    "WorldState",
    "WorldStateAnalyzer",
    "analyze_world_state",
    "strip_article",
    "normalize",
    "parse_condition",
    "parse_state_phrase",
    "state_key",
]
