"""Text normalization for address-to-zone matching.

This module provides:
- normalize: Canonicalize address and keyword text for comparison
- fold_diacritics: Strip accents so visually equivalent spellings compare equal
"""

from .text import LETTER_FOLDS, PHRASE_ALIASES, TOKEN_ALIASES, fold_diacritics, normalize

__all__ = [
    "normalize",
    "fold_diacritics",
    "TOKEN_ALIASES",
    "PHRASE_ALIASES",
    "LETTER_FOLDS",
]
