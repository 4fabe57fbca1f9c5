"""HTTP entrypoint serving place suggestions (Cloud Run friendly)."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict

from flask import Flask, jsonify, request

from place_suggest.core.config import get_settings
from place_suggest.jobs.suggestions import InvalidQueryError, build_response, search_suggestions
from place_suggest.vendors.wikipedia import WikipediaError, WikipediaTimeoutError

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)


def _error(message: str, code: str, status: int) -> Any:
    return jsonify({"success": False, "error": message, "code": code}), status


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; only reads settings, never calls Wikipedia."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "return_limit": settings.return_limit,
                "search_limit": settings.search_limit,
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.get("/search/suggestions")
def suggestions_status() -> Any:
    return jsonify(
        {
            "success": True,
            "message": "Search suggestions service is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "POST": "Get search suggestions for a query",
                "GET": "Service health check",
            },
        }
    )


@app.post("/search/suggestions")
def suggest() -> Any:
    """
    Return ranked place suggestions.
    Required JSON fields: query (2-100 characters)
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    query = payload.get("query")

    try:
        suggestions = search_suggestions(query)
    except InvalidQueryError as exc:
        return _error(str(exc), exc.code, 400)
    except WikipediaTimeoutError as exc:
        logger.warning("Search suggestions timed out for %r: %s", query, exc)
        return _error("Search request timed out - please try again", exc.code, 408)
    except WikipediaError as exc:
        logger.error("Search suggestions failed for %r: %s", query, exc)
        return _error("Wikipedia service temporarily unavailable", "SERVICE_UNAVAILABLE", 503)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Search suggestions failed for %r: %s", query, exc)
        return _error("Internal server error", "INTERNAL_ERROR", 500)

    return jsonify(build_response(query.strip(), suggestions)), 200


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
