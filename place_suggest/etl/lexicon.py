"""Keyword tables that drive place classification.

The built-in tables are English only. Deployments can swap them for a JSON
document (see ``load_lexicon``) without touching the scoring code. The file
may override any subset of::

    {
      "categories": {"city": {"weight": 0.9, "keywords": ["city", "town"]}},
      "negative_terms": ["person", "film"],
      "pattern_groups": [["tower", "bridge"], ["city", "town"]]
    }

Categories missing from the file keep their built-in weight and keywords.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from place_suggest.models import PlaceType

logger = logging.getLogger(__name__)


class LexiconError(ValueError):
    """Raised when a lexicon document cannot be turned into classifier tables."""


@dataclass(frozen=True)
class PlaceCategory:
    place_type: PlaceType
    weight: float
    keywords: Tuple[str, ...]


@dataclass(frozen=True)
class Lexicon:
    categories: Tuple[PlaceCategory, ...]
    negative_terms: Tuple[str, ...]
    pattern_groups: Tuple[Tuple[str, ...], ...]
    patterns: Tuple[re.Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        compiled = tuple(_compile_group(group) for group in self.pattern_groups if group)
        object.__setattr__(self, "patterns", compiled)


def _compile_group(terms: Iterable[str]) -> re.Pattern:
    alternation = "|".join(re.escape(term) for term in terms)
    return re.compile(rf"\b({alternation})\b", re.IGNORECASE)


BUILDING_KEYWORDS = (
    "tower", "building", "palace", "castle", "cathedral", "church", "mosque",
    "temple", "monument", "statue", "bridge", "stadium", "museum", "library",
    "theater", "theatre", "opera", "hotel", "station", "airport", "harbor",
    "harbour", "port", "fort", "fortress", "wall", "gate", "arch", "dome",
    "spire", "skyscraper", "mansion", "villa", "chateau", "basilica", "chapel",
    "synagogue", "shrine", "obelisk", "lighthouse", "windmill", "mill",
    "factory", "warehouse", "market", "bazaar", "plaza", "square", "piazza",
)

CITY_KEYWORDS = (
    "city", "town", "village", "municipality", "metropolis", "capital",
    "borough", "district", "neighborhood", "neighbourhood", "quarter",
    "downtown", "uptown", "suburb", "suburbs", "urban", "metropolitan",
    "municipal", "civic", "downtown",
)

GEOGRAPHIC_FEATURES = (
    "park", "garden", "plaza", "square", "piazza", "boulevard", "avenue",
    "street", "road", "highway", "bridge", "tunnel", "valley", "mountain",
    "hill", "peak", "river", "lake", "bay", "beach", "coast", "shore", "island",
    "peninsula", "desert", "forest", "jungle", "canyon", "gorge", "waterfall",
    "volcano", "crater", "cave", "grotto", "cliff", "plateau", "plain",
    "prairie",
)

LANDMARK_KEYWORDS = ("landmark", "monument", "memorial") + GEOGRAPHIC_FEATURES

AREA_KEYWORDS = (
    "region", "area", "zone", "district", "province", "state", "county",
    "territory", "republic", "kingdom", "empire", "nation", "country",
    "continent", "hemisphere", "peninsula", "archipelago", "island", "islands",
    "coast", "shoreline", "border", "frontier", "boundary", "territory", "colony",
    "settlement", "outpost",
)

# People, roles, events, organizations, abstract concepts and media.
NEGATIVE_TERMS = (
    "person", "people", "human", "man", "woman", "child", "baby", "family", "person",
    "artist", "writer", "author", "poet", "musician", "singer", "actor",
    "actress", "director", "producer", "scientist", "inventor", "philosopher",
    "politician", "president", "king", "queen", "emperor", "empress", "prince",
    "princess", "war", "battle", "conflict", "revolution", "movement",
    "organization", "company", "corporation", "business", "industry",
    "technology", "invention", "discovery", "theory", "concept", "idea",
    "philosophy", "religion", "belief", "culture", "language", "music", "art",
    "literature", "book", "novel", "poem", "song", "movie", "film",
    "television", "radio", "newspaper", "magazine", "website", "software",
    "application", "game", "sport", "team", "player", "coach",
)

DEFAULT_LEXICON = Lexicon(
    categories=(
        PlaceCategory(PlaceType.BUILDING, 0.8, BUILDING_KEYWORDS),
        PlaceCategory(PlaceType.CITY, 0.9, CITY_KEYWORDS),
        PlaceCategory(PlaceType.LANDMARK, 0.7, LANDMARK_KEYWORDS),
        PlaceCategory(PlaceType.AREA, 0.6, AREA_KEYWORDS),
    ),
    negative_terms=NEGATIVE_TERMS,
    pattern_groups=(BUILDING_KEYWORDS, CITY_KEYWORDS, GEOGRAPHIC_FEATURES),
)


def _string_tuple(value: Any, label: str) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) and item.strip() for item in value):
        raise LexiconError(f"{label} must be a list of non-empty strings")
    return tuple(item.strip() for item in value)


def _parse_category(base: PlaceCategory, raw: Any) -> PlaceCategory:
    name = base.place_type.value
    if not isinstance(raw, dict):
        raise LexiconError(f"category {name!r} must be an object")

    weight = base.weight
    if "weight" in raw:
        try:
            weight = float(raw["weight"])
        except (TypeError, ValueError) as exc:
            raise LexiconError(f"category {name!r} has a non-numeric weight") from exc
        if not 0.0 <= weight <= 1.0:
            raise LexiconError(f"category {name!r} weight must be within [0, 1]")

    keywords = base.keywords
    if "keywords" in raw:
        keywords = _string_tuple(raw["keywords"], f"category {name!r} keywords")
        if not keywords:
            raise LexiconError(f"category {name!r} needs at least one keyword")

    return PlaceCategory(base.place_type, weight, keywords)


def lexicon_from_dict(data: Dict[str, Any], base: Lexicon = DEFAULT_LEXICON) -> Lexicon:
    """Overlay a decoded lexicon document on top of ``base``."""
    if not isinstance(data, dict):
        raise LexiconError("lexicon document must be a JSON object")

    overrides = data.get("categories") or {}
    if not isinstance(overrides, dict):
        raise LexiconError("categories must be an object keyed by place type")

    known = {category.place_type.value: category for category in base.categories}
    unknown = sorted(set(overrides) - set(known))
    if unknown:
        raise LexiconError(f"unknown place categories: {', '.join(unknown)}")

    categories = tuple(
        _parse_category(category, overrides[name]) if name in overrides else category
        for name, category in known.items()
    )

    negative_terms = base.negative_terms
    if "negative_terms" in data:
        negative_terms = _string_tuple(data["negative_terms"], "negative_terms")

    pattern_groups = base.pattern_groups
    if "pattern_groups" in data:
        raw_groups = data["pattern_groups"]
        if not isinstance(raw_groups, list):
            raise LexiconError("pattern_groups must be a list of keyword lists")
        pattern_groups = tuple(_string_tuple(group, "pattern group") for group in raw_groups)

    return Lexicon(categories=categories, negative_terms=negative_terms, pattern_groups=pattern_groups)


@lru_cache(maxsize=8)
def load_lexicon(path: Optional[str] = None) -> Lexicon:
    """Load classifier tables from ``path``, or return the built-in tables."""
    if not path:
        return DEFAULT_LEXICON

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise LexiconError(f"unable to read lexicon file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise LexiconError(f"lexicon file {path} is not valid JSON: {exc}") from exc

    lexicon = lexicon_from_dict(data)
    logger.info("Loaded place lexicon from %s", path)
    return lexicon
