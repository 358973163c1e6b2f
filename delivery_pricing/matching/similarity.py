"""String similarity used by the fuzzy and suggestion phases."""

from rapidfuzz.distance import JaroWinkler

# Standard Winkler prefix scale. rapidfuzz only applies the prefix boost when
# the Jaro score exceeds 0.7 and caps the common prefix at 4 characters.
PREFIX_WEIGHT = 0.1


def jaro_winkler(left: str, right: str) -> float:
    """Jaro-Winkler similarity in [0, 1]; 0.0 when either side is empty.

    Example:
        >>> round(jaro_winkler("maitamma", "maitama"), 3)
        0.975
    """
    if not left or not right:
        return 0.0
    return JaroWinkler.similarity(left, right, prefix_weight=PREFIX_WEIGHT)
