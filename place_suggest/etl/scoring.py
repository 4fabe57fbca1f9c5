"""Confidence scores for how well a search hit matches the user's query."""

import re
from typing import Any, Tuple

from place_suggest.etl.lexicon import DEFAULT_LEXICON, Lexicon
from place_suggest.etl.places import classify_place
from place_suggest.etl.text import normalize_text
from place_suggest.models import ClassificationResult, PlaceType

EXACT_MATCH = 1.0
TITLE_CONTAINS_QUERY = 0.9
QUERY_CONTAINS_TITLE = 0.8
TITLE_WORD_WEIGHT = 0.7
SNIPPET_WORD_WEIGHT = 0.3
MIN_WORD_LENGTH = 3
SHORT_QUERY_LENGTH = 3
SHORT_QUERY_PENALTY = 0.5
PLACE_BOOST_WEIGHT = 0.2

PLACE_TYPE_BONUS = {
    PlaceType.CITY: 0.1,
    PlaceType.BUILDING: 0.05,
    PlaceType.LANDMARK: 0.05,
    PlaceType.AREA: 0.02,
}

_WORD_SPLIT = re.compile(r"\s+")


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _word_overlap(query: str, title: str, snippet: str) -> float:
    query_words = _WORD_SPLIT.split(query)
    title_words = _WORD_SPLIT.split(title)
    total = len(query_words)

    title_matches = 0
    snippet_matches = 0
    for word in query_words:
        if len(word) < MIN_WORD_LENGTH:
            continue
        if any(word in title_word or title_word in word for title_word in title_words):
            title_matches += 1
        if word in snippet:
            snippet_matches += 1

    return (title_matches / total) * TITLE_WORD_WEIGHT + (snippet_matches / total) * SNIPPET_WORD_WEIGHT


def calculate_confidence(query: Any, title: Any, snippet: Any) -> float:
    """Score textual similarity between a query and a search hit in [0, 1].

    Tiers, first match wins: exact title, title contains query, query contains
    title, then weighted word overlap with the title (0.7) and snippet (0.3).
    Queries shorter than three characters are halved.
    """
    normalized_query = normalize_text(query)
    normalized_title = normalize_text(title)
    normalized_snippet = normalize_text(snippet)

    if normalized_title == normalized_query:
        confidence = EXACT_MATCH
    elif normalized_query in normalized_title:
        confidence = TITLE_CONTAINS_QUERY
    elif normalized_title in normalized_query:
        confidence = QUERY_CONTAINS_TITLE
    else:
        confidence = _word_overlap(normalized_query, normalized_title, normalized_snippet)

    raw_query = query if isinstance(query, str) else ""
    if len(raw_query) < SHORT_QUERY_LENGTH:
        confidence *= SHORT_QUERY_PENALTY

    return _clamp(confidence)


def score_candidate(
    query: Any,
    title: Any,
    snippet: Any,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> Tuple[ClassificationResult, float]:
    """Classify a hit and compute its place-aware confidence in one pass."""
    classification = classify_place(title, snippet, lexicon)
    if not classification.is_place:
        return classification, 0.0

    base = calculate_confidence(query, title, snippet)
    place_boost = classification.confidence * PLACE_BOOST_WEIGHT
    type_bonus = PLACE_TYPE_BONUS.get(classification.place_type, 0.0)
    return classification, min(base + place_boost + type_bonus, 1.0)


def calculate_place_confidence(query: Any, title: Any, snippet: Any, lexicon: Lexicon = DEFAULT_LEXICON) -> float:
    """Like ``calculate_confidence`` but zero for anything that is not a place."""
    _, confidence = score_candidate(query, title, snippet, lexicon)
    return confidence
