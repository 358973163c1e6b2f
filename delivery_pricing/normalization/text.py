"""Address text normalization.

normalize() is applied identically to customer addresses and to every zone
keyword, so all comparisons in the matcher are normalized-vs-normalized.
"""

import re
import unicodedata

# Whole-token aliases. No replacement is itself an alias, which keeps
# normalize() idempotent.
TOKEN_ALIASES = {
    "ii": "2",
    "iii": "3",
    "rd": "road",
    "ave": "avenue",
}

# Spelled-out abbreviations (e.g. "F.C.T." -> "f c t" after punctuation stripping)
PHRASE_ALIASES = {
    "f c t": "fct",
}

# Latin letters that NFKD leaves whole (no base letter + combining mark)
LETTER_FOLDS = {
    "ø": "o", "Ø": "O",
    "ł": "l", "Ł": "L",
    "đ": "d", "Đ": "D",
    "ð": "d", "Ð": "D",
    "ħ": "h", "Ħ": "H",
    "ı": "i",
    "æ": "ae", "Æ": "AE",
    "œ": "oe", "Œ": "OE",
    "þ": "th", "Þ": "TH",
}
_LETTER_FOLD_TABLE = str.maketrans(LETTER_FOLDS)

_NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]+")
_TOKEN_ALIAS_PATTERN = re.compile(
    r"(?<!\S)(" + "|".join(map(re.escape, TOKEN_ALIASES)) + r")(?!\S)"
)
_PHRASE_ALIAS_PATTERN = re.compile(
    r"(?<!\S)(" + "|".join(map(re.escape, PHRASE_ALIASES)) + r")(?!\S)"
)


def fold_diacritics(text: str) -> str:
    """Reduce accented and stroked Latin letters to their plain spelling.

    Combining marks are dropped after NFKD; letters NFKD cannot split
    (ø, ł, đ, æ, ...) go through LETTER_FOLDS. Case is preserved.

    Example:
        >>> fold_diacritics("Lúgbè")
        'Lugbe'
        >>> fold_diacritics("Łódź")
        'Lodz'
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.translate(_LETTER_FOLD_TABLE)


def normalize(raw: str) -> str:
    """Canonicalize an address or keyword for comparison.

    Normalization steps:
    - Fold diacritics (NFKD, combining marks dropped, stroked letters mapped) and case-fold
    - Replace every character outside [a-z0-9] with a space
    - Collapse whitespace and trim
    - Expand whole-token aliases ("rd" -> "road", "ii" -> "2", "f c t" -> "fct")

    Pure and idempotent: normalize(normalize(s)) == normalize(s).

    Args:
        raw: Free text, possibly empty

    Returns:
        Normalized text (empty string for empty or punctuation-only input)

    Example:
        >>> normalize("  No. 4, Wuse Zone II,  Abuja ")
        'no 4 wuse zone 2 abuja'
    """
    if not raw:
        return ""

    text = fold_diacritics(raw).casefold()
    # casefold() can emit new decomposable characters, fold once more
    text = fold_diacritics(text)

    text = _NON_ALNUM_PATTERN.sub(" ", text).strip()
    if not text:
        return ""

    text = _PHRASE_ALIAS_PATTERN.sub(lambda m: PHRASE_ALIASES[m.group(1)], text)
    text = _TOKEN_ALIAS_PATTERN.sub(lambda m: TOKEN_ALIASES[m.group(1)], text)

    return text
