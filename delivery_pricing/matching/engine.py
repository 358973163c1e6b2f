"""Zone matching engine.

Resolves a free-text address to a delivery zone in three phases, first
success wins:
1. Exact: the longest normalized keyword contained in the normalized address
2. Fuzzy: the best Jaro-Winkler score at or above FUZZY_THRESHOLD
3. No match: the three best-scoring keywords as suggestions
"""

import logging
from typing import Callable, List, Optional, Tuple, Union

from delivery_pricing.logging import get_logger
from delivery_pricing.normalization import normalize
from delivery_pricing.zones import ZoneCatalog, ZoneKeyword

from .models import MatchedBy, MatchResult, NoMatchResult, Suggestion
from .similarity import jaro_winkler

logger = get_logger(__name__, component="matching")

FUZZY_THRESHOLD = 0.88
MAX_SUGGESTIONS = 3
NO_MATCH_MESSAGE = "No matching delivery zone found for the provided address"

Scorer = Callable[[str, str], float]


class ZoneMatcher:
    """Matches addresses against an immutable zone catalog.

    match_address() is a pure function of (normalized address, catalog): it
    performs no I/O and keeps no state between calls, so one instance is
    shared by every request handler.

    Tie-breaks are deterministic. Exact matches prefer the longest keyword,
    fuzzy matches the highest score and then the longest keyword; anything
    still tied goes to the entry that comes first in catalog order.
    """

    def __init__(
        self,
        catalog: ZoneCatalog,
        scorer: Scorer = jaro_winkler,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ZoneMatcher.

        Args:
            catalog: Zone catalog to match against (held by reference)
            scorer: Similarity function returning a score in [0, 1]
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.catalog = catalog
        self.scorer = scorer
        self.logger = logger_instance or logger

    def match_address(self, raw_address: str) -> Union[MatchResult, NoMatchResult]:
        """Resolve an address to a zone, or explain why it could not.

        Args:
            raw_address: Free-text address; may be empty

        Returns:
            MatchResult when a zone matched, otherwise NoMatchResult with
            up to MAX_SUGGESTIONS suggestions
        """
        normalized = normalize(raw_address)

        result = self._exact_match(normalized) or self._fuzzy_match(normalized)
        if result is not None:
            self.logger.debug(
                f"Address matched zone {result.zone_id}",
                extra={
                    "event": "matching.zone.matched",
                    "zone_id": result.zone_id,
                    "matched_by": result.matched_by.value,
                    "matched_keyword": result.matched_keyword,
                    "confidence": result.confidence,
                },
            )
            return result

        suggestions = self._suggest(normalized)
        self.logger.debug(
            "Address did not match any zone",
            extra={
                "event": "matching.zone.no_match",
                "suggestion_count": len(suggestions),
            },
        )
        return NoMatchResult(message=NO_MATCH_MESSAGE, suggestions=suggestions)

    def _exact_match(self, normalized_address: str) -> Optional[MatchResult]:
        """Find the longest keyword contained in the address."""
        best: Optional[ZoneKeyword] = None

        for entry in self.catalog.entries:
            # An empty keyword is a substring of everything
            if not entry.normalized or entry.normalized not in normalized_address:
                continue
            # Strictly longer only: equal lengths keep the earlier entry
            if best is None or len(entry.normalized) > len(best.normalized):
                best = entry

        if best is None:
            return None
        return self._build_result(best, MatchedBy.EXACT, 1.0)

    def _fuzzy_match(self, normalized_address: str) -> Optional[MatchResult]:
        """Find the most similar keyword scoring at least FUZZY_THRESHOLD."""
        best: Optional[ZoneKeyword] = None
        best_score = 0.0

        for entry in self.catalog.entries:
            score = self.scorer(normalized_address, entry.normalized)
            if score < FUZZY_THRESHOLD:
                continue
            if (
                best is None
                or score > best_score
                or (score == best_score and len(entry.normalized) > len(best.normalized))
            ):
                best = entry
                best_score = score

        if best is None:
            return None
        return self._build_result(best, MatchedBy.FUZZY, best_score)

    def _suggest(self, normalized_address: str) -> Tuple[Suggestion, ...]:
        """Rank every keyword by similarity and keep the best few."""
        scored: List[Tuple[float, ZoneKeyword]] = [
            (self.scorer(normalized_address, entry.normalized), entry)
            for entry in self.catalog.entries
        ]

        # sorted() is stable, so catalog order decides remaining ties
        scored = sorted(scored, key=lambda item: (-item[0], -len(item[1].normalized)))

        return tuple(
            Suggestion(
                zone_id=entry.zone.zone_id,
                keyword=entry.keyword,
                price=entry.zone.price,
                confidence=score,
            )
            for score, entry in scored[:MAX_SUGGESTIONS]
        )

    @staticmethod
    def _build_result(entry: ZoneKeyword, matched_by: MatchedBy, confidence: float) -> MatchResult:
        return MatchResult(
            zone_id=entry.zone.zone_id,
            zone_name=entry.zone.name,
            matched_keyword=entry.keyword,
            matched_by=matched_by,
            confidence=confidence,
            price=entry.zone.price,
        )
