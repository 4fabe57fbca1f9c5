"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

FALLBACK_USER_AGENT = "PlaceSuggest/1.0 (contact: example@example.com)"


class ConfigError(RuntimeError):
    """Raised when configuration values are present but unusable."""


@dataclass(frozen=True)
class Settings:
    wikipedia_api_url: str = "https://en.wikipedia.org/w/api.php"
    wikipedia_rest_url: str = "https://en.wikipedia.org/api/rest_v1"
    wikipedia_user_agent: str = FALLBACK_USER_AGENT
    request_timeout: float = 5.0
    return_limit: int = 3
    search_limit: int = 10
    places_only: bool = True
    enrich_timeout: float = 5.0
    lexicon_path: Optional[str] = None
    port: int = 8080


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    defaults = Settings()
    user_agent = os.getenv("WIKIPEDIA_USER_AGENT", "").strip()
    places_only = os.getenv("SUGGESTIONS_PLACES_ONLY", "true").lower() in {"1", "true", "yes"}
    lexicon_path = os.getenv("PLACE_LEXICON_PATH") or None

    if not user_agent:
        logger.warning(
            "WIKIPEDIA_USER_AGENT is not set; using fallback UA. "
            "Wikimedia asks API clients to identify themselves."
        )
        user_agent = FALLBACK_USER_AGENT

    return Settings(
        wikipedia_api_url=os.getenv("WIKIPEDIA_API_URL") or defaults.wikipedia_api_url,
        wikipedia_rest_url=(os.getenv("WIKIPEDIA_REST_URL") or defaults.wikipedia_rest_url).rstrip("/"),
        wikipedia_user_agent=user_agent,
        request_timeout=_positive_float("WIKIPEDIA_TIMEOUT", defaults.request_timeout),
        return_limit=_positive_int("SUGGESTIONS_RETURN_LIMIT", defaults.return_limit),
        search_limit=_positive_int("SUGGESTIONS_SEARCH_LIMIT", defaults.search_limit),
        places_only=places_only,
        enrich_timeout=_positive_float("ENRICH_TIMEOUT", defaults.enrich_timeout),
        lexicon_path=lexicon_path,
        port=_positive_int("PORT", defaults.port),
    )
