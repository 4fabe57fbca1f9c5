"""Client utilities for the Wikipedia search and page summary APIs."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from place_suggest.core.config import get_settings
from place_suggest.etl.countries import extract_country
from place_suggest.models import Enrichment, SearchCandidate

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


class WikipediaError(RuntimeError):
    """Raised when a Wikipedia API call fails."""

    def __init__(self, message: str, code: str = "API_ERROR", status: int = 503) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class WikipediaTimeoutError(WikipediaError):
    def __init__(self, message: str = "Wikipedia API timeout - please try again") -> None:
        super().__init__(message, code="TIMEOUT", status=408)


class WikipediaNotFoundError(WikipediaError):
    def __init__(self, title: str) -> None:
        super().__init__(f'No Wikipedia article found for "{title}"', code="NOT_FOUND", status=404)
        self.title = title


def _get(url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
    settings = get_settings()
    headers = {"User-Agent": settings.wikipedia_user_agent}
    try:
        response = _SESSION.get(url, params=params, headers=headers, timeout=settings.request_timeout)
    except requests.Timeout as exc:
        raise WikipediaTimeoutError() from exc
    except requests.RequestException as exc:
        raise WikipediaError(f"Wikipedia API error: {exc}") from exc
    return response


def _json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        logger.error("Wikipedia returned a non-JSON body: status=%s", response.status_code)
        raise WikipediaError("Wikipedia API error: invalid JSON response") from exc


def search_pages(query: str, limit: int = 10) -> List[Dict[str, Any]]:
    """Run a full-text search and return the raw ``query.search`` entries."""
    if not query or not query.strip():
        raise ValueError("Query must be provided for Wikipedia searches.")

    params = {
        "action": "query",
        "list": "search",
        "srsearch": query.strip(),
        "srlimit": limit,
        "format": "json",
        "utf8": 1,
    }
    response = _get(get_settings().wikipedia_api_url, params=params)
    if response.status_code >= 400:
        logger.error("search_pages failed: status=%s query=%s", response.status_code, query)
        raise WikipediaError(f"Wikipedia API error: HTTP {response.status_code}")

    payload = _json(response)
    if "error" in payload:
        error = payload.get("error") or {}
        logger.error("search_pages failed: code=%s info=%s", error.get("code"), error.get("info"))
        raise WikipediaError(f"Wikipedia API error: {error.get('info') or error.get('code')}")

    results = (payload.get("query") or {}).get("search") or []
    logger.info("Wikipedia search for query=%s returned %d hits", query, len(results))
    return results


def parse_search_results(results: Optional[List[Any]]) -> List[SearchCandidate]:
    """Turn raw search entries into SearchCandidate records, skipping untitled ones."""
    candidates: List[SearchCandidate] = []
    for raw in results or []:
        if not isinstance(raw, dict):
            continue
        title = (raw.get("title") or "").strip()
        if not title:
            continue
        candidates.append(
            SearchCandidate(
                title=title,
                snippet=raw.get("snippet") or "",
                size=_safe_int(raw.get("size")) or 0,
                timestamp=raw.get("timestamp") or "",
                page_id=_safe_int(raw.get("pageid")),
            )
        )
    return candidates


def fetch_summary(title: str) -> Dict[str, Any]:
    """Fetch the REST summary for an article title."""
    if not title or not title.strip():
        raise ValueError("Title must be provided for Wikipedia summaries.")

    url = f"{get_settings().wikipedia_rest_url}/page/summary/{quote(title.strip(), safe='')}"
    response = _get(url)
    if response.status_code == 404:
        raise WikipediaNotFoundError(title)
    if response.status_code >= 400:
        logger.error("fetch_summary failed: status=%s title=%s", response.status_code, title)
        raise WikipediaError(f"Wikipedia API error: HTTP {response.status_code}")

    data = _json(response)
    if not data or not data.get("title"):
        raise WikipediaNotFoundError(title)

    summary = data.get("extract") or ""
    return {
        "name": data["title"],
        "summary": summary,
        "thumbnail": (data.get("thumbnail") or {}).get("source"),
        "url": ((data.get("content_urls") or {}).get("desktop") or {}).get("page"),
        "coordinates": data.get("coordinates"),
        "type": data.get("type"),
        "country": extract_country(summary),
    }


def summary_enrichment(title: str) -> Enrichment:
    """Enrichment collaborator for the ranking step: thumbnail and country per title."""
    summary = fetch_summary(title)
    return Enrichment(
        thumbnail=summary["thumbnail"],
        country=summary["country"],
        summary=summary["summary"] or None,
    )


def _safe_int(value: Any) -> Optional[int]:
    try:
        if value is None:
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
