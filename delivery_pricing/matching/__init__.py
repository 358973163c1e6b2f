"""Address-to-zone matching engine.

This module provides:
- ZoneMatcher: Exact, then fuzzy, then suggestion-based zone resolution
- MatchResult / NoMatchResult / Suggestion: Request-scoped match outcomes
- MatchedBy: Which phase produced a match
- jaro_winkler: Similarity used by the fuzzy and suggestion phases
"""

from .engine import FUZZY_THRESHOLD, MAX_SUGGESTIONS, NO_MATCH_MESSAGE, ZoneMatcher
from .models import MatchedBy, MatchResult, NoMatchResult, Suggestion
from .similarity import jaro_winkler

__all__ = [
    "ZoneMatcher",
    "MatchResult",
    "NoMatchResult",
    "Suggestion",
    "MatchedBy",
    "jaro_winkler",
    "FUZZY_THRESHOLD",
    "MAX_SUGGESTIONS",
    "NO_MATCH_MESSAGE",
]
