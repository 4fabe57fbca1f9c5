"""Decide whether a search hit describes a physical place."""

import logging
from typing import Any, Optional

from place_suggest.etl.lexicon import DEFAULT_LEXICON, Lexicon
from place_suggest.etl.text import normalize_text
from place_suggest.models import NOT_A_PLACE, ClassificationResult, PlaceType

logger = logging.getLogger(__name__)

VETO_CONFIDENCE = 0.1
PATTERN_FLOOR = 0.3
PLACE_THRESHOLD = 0.2


def _has_negative_term(combined: str, lexicon: Lexicon) -> Optional[str]:
    for term in lexicon.negative_terms:
        normalized = normalize_text(term)
        if normalized and normalized in combined:
            return term
    return None


def classify_place(title: Any, snippet: Any, lexicon: Lexicon = DEFAULT_LEXICON) -> ClassificationResult:
    """Classify a title/snippet pair as building, city, landmark, area or not a place.

    A veto term (person, film, company, ...) anywhere in the text wins over any
    amount of place vocabulary. Otherwise each category scores the share of its
    keywords present in the text times its weight; a bare place noun such as
    "tower" or "river" lifts the best score to a floor of 0.3 so short
    snippets are not missed.
    """
    if not title or not snippet or not isinstance(title, str) or not isinstance(snippet, str):
        return NOT_A_PLACE

    combined = f"{normalize_text(title)} {normalize_text(snippet)}"

    veto = _has_negative_term(combined, lexicon)
    if veto:
        logger.debug("Rejected %r as a place: matched negative term %r", title, veto)
        return ClassificationResult(is_place=False, place_type=PlaceType.NONE, confidence=VETO_CONFIDENCE)

    best_confidence = 0.0
    best_type: Optional[PlaceType] = None
    for category in lexicon.categories:
        matches = sum(1 for keyword in category.keywords if normalize_text(keyword) in combined)
        confidence = (matches / len(category.keywords)) * category.weight
        if confidence > best_confidence:
            best_confidence = confidence
            best_type = category.place_type

    has_place_noun = any(pattern.search(combined) for pattern in lexicon.patterns)
    if has_place_noun and best_confidence < PATTERN_FLOOR:
        best_confidence = PATTERN_FLOOR
        best_type = best_type or PlaceType.LANDMARK

    best_confidence = min(max(best_confidence, 0.0), 1.0)
    is_place = best_confidence >= PLACE_THRESHOLD and best_type is not None
    return ClassificationResult(
        is_place=is_place,
        place_type=best_type if is_place else PlaceType.NONE,
        confidence=best_confidence,
    )
