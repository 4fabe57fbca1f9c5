"""Search Wikipedia for a query and return ranked place suggestions."""

import argparse
import json
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from place_suggest.core.config import ConfigError, Settings, get_settings
from place_suggest.core.ranking import rank_candidates
from place_suggest.etl.lexicon import load_lexicon
from place_suggest.models import Suggestion
from place_suggest.vendors import wikipedia

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 100


class InvalidQueryError(ValueError):
    """Raised when a user query is rejected before any upstream call."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


def validate_query(query: Any) -> str:
    if not isinstance(query, str) or not query.strip():
        raise InvalidQueryError("Invalid search query", "INVALID_INPUT")

    clean_query = query.strip()
    if len(clean_query) < MIN_QUERY_LENGTH:
        raise InvalidQueryError(f"Query must be at least {MIN_QUERY_LENGTH} characters long", "QUERY_TOO_SHORT")
    if len(clean_query) > MAX_QUERY_LENGTH:
        raise InvalidQueryError(f"Query must be less than {MAX_QUERY_LENGTH} characters", "QUERY_TOO_LONG")
    return clean_query


def search_suggestions(query: Any, settings: Optional[Settings] = None) -> List[Suggestion]:
    """Validate ``query``, search Wikipedia, then rank and enrich the hits."""
    clean_query = validate_query(query)
    settings = settings or get_settings()

    logger.info("Getting search suggestions for query=%s", clean_query)
    results = wikipedia.search_pages(clean_query, limit=settings.search_limit)
    candidates = wikipedia.parse_search_results(results)
    if not candidates:
        logger.info("No search hits for query=%s", clean_query)
        return []

    suggestions = rank_candidates(
        clean_query,
        candidates,
        return_limit=len(candidates) if settings.places_only else settings.return_limit,
        enrich=wikipedia.summary_enrichment,
        timeout=settings.enrich_timeout,
        lexicon=load_lexicon(settings.lexicon_path),
    )
    if settings.places_only:
        suggestions = [suggestion for suggestion in suggestions if suggestion.confidence > 0]
    suggestions = suggestions[: settings.return_limit]

    logger.info("Found %d suggestions for query=%s", len(suggestions), clean_query)
    return suggestions


def build_response(query: str, suggestions: Sequence[Suggestion]) -> Dict[str, Any]:
    return {
        "success": True,
        "data": {
            "query": query,
            "suggestions": [suggestion.to_dict() for suggestion in suggestions],
            "total_found": len(suggestions),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Suggest Wikipedia places matching a query")
    parser.add_argument("query", help="Place to look up, e.g. 'eiffel tower'")
    parser.add_argument(
        "--limit",
        dest="limit",
        type=int,
        default=None,
        help="Maximum number of suggestions to return",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        if args.limit is not None:
            if args.limit <= 0:
                raise ConfigError("--limit must be positive")
            settings = replace(settings, return_limit=args.limit)
        suggestions = search_suggestions(args.query, settings=settings)
    except (ConfigError, InvalidQueryError) as exc:
        logger.error("Invalid input: %s", exc)
        raise SystemExit(2) from exc
    except Exception as exc:  # pragma: no cover - CLI fallback
        logger.error("Suggestion lookup failed: %s", exc, exc_info=True)
        raise SystemExit(1) from exc

    print(json.dumps(build_response(args.query.strip(), suggestions), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
