"""Score, enrich and order search hits into a short suggestion list."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, List, Optional, Sequence, Union

from place_suggest.etl.countries import extract_country
from place_suggest.etl.lexicon import DEFAULT_LEXICON, Lexicon
from place_suggest.etl.scoring import score_candidate
from place_suggest.etl.text import clean_snippet
from place_suggest.models import Enrichment, SearchCandidate, Suggestion

logger = logging.getLogger(__name__)

DEFAULT_RETURN_LIMIT = 3

Enricher = Callable[[str], Union[Enrichment, Dict[str, Optional[str]], None]]


class EnrichmentFailure(RuntimeError):
    """Raised when the enrichment collaborator fails or times out for one title."""

    def __init__(self, title: str, reason: str) -> None:
        super().__init__(f"enrichment failed for {title!r}: {reason}")
        self.title = title
        self.reason = reason


def _collect(title: str, future: Future, timeout: Optional[float]) -> Enrichment:
    # Only called once the batch deadline has passed, so an unfinished call has timed out.
    if not future.done():
        future.cancel()
        raise EnrichmentFailure(title, f"timed out after {timeout}s")
    try:
        result = future.result()
    except Exception as exc:  # noqa: BLE001
        raise EnrichmentFailure(title, str(exc) or exc.__class__.__name__) from exc
    if result is None:
        return Enrichment()
    if isinstance(result, Enrichment):
        return result
    if isinstance(result, dict):
        return Enrichment(
            thumbnail=result.get("thumbnail"),
            country=result.get("country"),
            summary=result.get("summary"),
        )
    raise EnrichmentFailure(title, f"unexpected enrichment result of type {type(result).__name__}")


def _resolve_country(enrichment: Enrichment, snippet: str) -> Optional[str]:
    if enrichment.country:
        return enrichment.country
    return extract_country(enrichment.summary) or extract_country(snippet)


def rank_candidates(
    query: str,
    candidates: Sequence[SearchCandidate],
    return_limit: int = DEFAULT_RETURN_LIMIT,
    enrich: Optional[Enricher] = None,
    *,
    timeout: Optional[float] = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> List[Suggestion]:
    """Build suggestions for ``candidates`` and return the best ``return_limit``.

    ``enrich`` is called once per title, all titles at once on a thread pool
    with one worker per candidate, and the whole batch is awaited for at most
    ``timeout`` seconds. A failing or slow call only costs that candidate its
    thumbnail and country. Ordering is by confidence, highest first, with ties
    kept in input order.
    """
    if return_limit <= 0 or not candidates:
        return []

    cleaned = [clean_snippet(candidate.snippet) for candidate in candidates]
    scores = [score_candidate(query, candidate.title, snippet, lexicon) for candidate, snippet in zip(candidates, cleaned)]

    enrichments: List[Optional[Enrichment]] = [Enrichment()] * len(candidates)
    if enrich is not None:
        executor = ThreadPoolExecutor(max_workers=len(candidates))
        try:
            futures = [executor.submit(enrich, candidate.title) for candidate in candidates]
            wait(futures, timeout=timeout)
            for index, (candidate, future) in enumerate(zip(candidates, futures)):
                try:
                    enrichments[index] = _collect(candidate.title, future, timeout)
                except EnrichmentFailure as exc:
                    logger.warning("%s", exc)
                    enrichments[index] = None
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    suggestions: List[Suggestion] = []
    for candidate, snippet, (classification, confidence), enrichment in zip(candidates, cleaned, scores, enrichments):
        suggestions.append(
            Suggestion(
                title=candidate.title,
                snippet=snippet,
                confidence=confidence,
                place_type=classification.place_type,
                place_confidence=classification.confidence,
                country=_resolve_country(enrichment, snippet) if enrichment is not None else None,
                thumbnail=enrichment.thumbnail if enrichment is not None else None,
                size=candidate.size,
                timestamp=candidate.timestamp,
            )
        )

    ranked = sorted(suggestions, key=lambda suggestion: suggestion.confidence, reverse=True)
    logger.debug("Ranked %d candidates for query=%r, returning %d", len(ranked), query, min(return_limit, len(ranked)))
    return ranked[:return_limit]
