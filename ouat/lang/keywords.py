"""
Story Notation Keywords and Grammar Constants.

This module is the single source of truth for the words the translator
recognises: the fixed opening and closing phrases, the control keywords,
the block terminators, and a small vocabulary of subjects, nouns,
adjectives and verbs used to classify word tokens.

All tables are built once at import time and never mutated afterwards.

**Usage:**
    from ouat.lang import BLOCK_TERMINATORS, suggest_keyword

    if word not in BLOCK_TERMINATORS:
        suggestion = suggest_keyword(word, 'terminator')
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Tuple
import difflib


# ============================================================================
# Phase markers
# ============================================================================

PROLOGUE_WORDS: Tuple[str, ...] = ("once", "upon", "a", "time")
EPILOGUE_WORDS: Tuple[str, ...] = ("the", "story", "ends")

PROLOGUE_TEXT = "Once upon a time."
EPILOGUE_TEXT = "The story ends."


# ============================================================================
# Control keywords
# ============================================================================

CONTROL_KEYWORDS: FrozenSet[str] = frozenset({
    # Conditionals
    'if', 'then', 'else', 'end', 'endif',
    # Loops
    'while', 'endwhile',
    'for', 'each', 'in', 'do', 'endfor',
    # Functions
    'define', 'function', 'as', 'endfunction', 'call', 'return',
    # Interaction and fate
    'choose', 'random', 'leans', 'towards', 'toward', 'or',
    # Output and asides
    'tell', 'narrate', 'remark', 'note',
    # Declarations
    'has', 'is',
})

# Words that close a nested block.  Scanning a block body stops on any of
# them; the enclosing construct then checks it is the one it expects.
BLOCK_TERMINATORS: FrozenSet[str] = frozenset({
    'else', 'end', 'endif', 'endwhile', 'endfor', 'endfunction',
})

CONDITIONAL_CLOSERS: Tuple[str, ...] = ('end', 'endif')
WHILE_CLOSERS: Tuple[str, ...] = ('endwhile',)
FOR_EACH_CLOSERS: Tuple[str, ...] = ('endfor',)
FUNCTION_CLOSERS: Tuple[str, ...] = ('endfunction',)

COMMENT_MARKERS: FrozenSet[str] = frozenset({'narrate', 'remark', 'note'})

DECLARATION_KEYWORDS: FrozenSet[str] = frozenset({'has', 'is'})
DECLARATION_LINKS: FrozenSet[str] = frozenset({'of', 'is'})
DECLARATION_SEPARATOR = 'and'


# ============================================================================
# World-state phrasing
# ============================================================================

# Verbs that turn a narrative sentence into a state assignment.
STATE_VERBS: FrozenSet[str] = frozenset({'was', 'is', 'became'})

# Verbs recognised inside condition text.
CONDITION_VERBS: FrozenSet[str] = frozenset({'was', 'is'})

NEGATION = 'not'

ARTICLES: Tuple[str, ...] = ('the', 'a', 'an')


# ============================================================================
# Vocabulary used to classify word tokens
# ============================================================================

SUBJECT_WORDS: FrozenSet[str] = frozenset({
    'hero', 'heroine', 'princess', 'prince', 'king', 'queen', 'knight',
    'dragon', 'wizard', 'witch', 'giant', 'companion', 'villager',
})

NOUN_WORDS: FrozenSet[str] = frozenset({
    'character', 'object', 'story', 'castle', 'kingdom', 'forest',
    'door', 'room', 'sword', 'treasure', 'village', 'tower',
})

ADJECTIVE_WORDS: FrozenSet[str] = frozenset({
    'big', 'small', 'old', 'new', 'brave', 'afraid', 'awake', 'asleep',
    'friendly', 'hostile', 'happy', 'sad', 'open', 'closed', 'locked',
    'unlocked', 'alive', 'dead', 'hungry', 'strong', 'weak', 'not',
})

VERB_WORDS: FrozenSet[str] = frozenset({
    'go', 'goes', 'went', 'talk', 'talks', 'look', 'looks', 'was',
    'became', 'becomes', 'lived', 'fought', 'wins', 'won', 'ran',
    'walked', 'found', 'opens', 'opened', 'sleeps', 'wakes',
})


# ============================================================================
# Keyword suggestions
# ============================================================================

KEYWORD_TYPOS: Dict[str, str] = {
    'endwile': 'endwhile',
    'end_while': 'endwhile',
    'endfore': 'endfor',
    'endforeach': 'endfor',
    'end_for': 'endfor',
    'endfunc': 'endfunction',
    'end_function': 'endfunction',
    'endfn': 'endfunction',
    'fi': 'endif',
    'elif': 'else',
    'towrds': 'towards',
}


def suggest_keyword(unknown: str, context: str = 'any') -> Optional[str]:
    """
    Suggest the most likely keyword for a misspelled word.

    Args:
        unknown: The word found in the source
        context: 'terminator' to restrict candidates to block closers,
            'any' for all control keywords

    Returns:
        Suggested keyword or None if nothing is close enough

    Examples:
        >>> suggest_keyword('endwile')
        'endwhile'

        >>> suggest_keyword('endfro', 'terminator')
        'endfor'
    """
    lowered = unknown.lower()
    if lowered in KEYWORD_TYPOS:
        return KEYWORD_TYPOS[lowered]

    candidates = _get_candidate_keywords(context)
    close_matches = difflib.get_close_matches(lowered, candidates, n=1, cutoff=0.6)
    if close_matches:
        return close_matches[0]
    return None


def _get_candidate_keywords(context: str) -> List[str]:
    if context == 'terminator':
        return sorted(BLOCK_TERMINATORS)
    return sorted(CONTROL_KEYWORDS)


__all__ = [
    "PROLOGUE_WORDS",
    "EPILOGUE_WORDS",
    "PROLOGUE_TEXT",
    "EPILOGUE_TEXT",
    "CONTROL_KEYWORDS",
    "BLOCK_TERMINATORS",
    "CONDITIONAL_CLOSERS",
    "WHILE_CLOSERS",
    "FOR_EACH_CLOSERS",
    "FUNCTION_CLOSERS",
    "COMMENT_MARKERS",
    "DECLARATION_KEYWORDS",
    "DECLARATION_LINKS",
    "DECLARATION_SEPARATOR",
    "STATE_VERBS",
    "CONDITION_VERBS",
    "NEGATION",
    "ARTICLES",
    "SUBJECT_WORDS",
    "NOUN_WORDS",
    "ADJECTIVE_WORDS",
    "VERB_WORDS",
    "KEYWORD_TYPOS",
    "suggest_keyword",
]
