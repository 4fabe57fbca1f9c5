"""Core data models shared by the place suggestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class PlaceType(str, Enum):
    BUILDING = "building"
    CITY = "city"
    LANDMARK = "landmark"
    AREA = "area"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class SearchCandidate:
    """Raw full-text search hit as returned by the upstream search."""

    title: str
    snippet: str = ""
    size: int = 0
    timestamp: str = ""
    page_id: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    is_place: bool
    place_type: PlaceType
    confidence: float

    def __post_init__(self) -> None:
        if self.is_place == (self.place_type is PlaceType.NONE):
            raise ValueError("place_type must be NONE exactly when is_place is False")


NOT_A_PLACE = ClassificationResult(is_place=False, place_type=PlaceType.NONE, confidence=0.0)


@dataclass(frozen=True, slots=True)
class Enrichment:
    """Per-title details supplied by an enrichment collaborator."""

    thumbnail: Optional[str] = None
    country: Optional[str] = None
    summary: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Suggestion:
    title: str
    snippet: str
    confidence: float
    place_type: PlaceType
    place_confidence: float
    country: Optional[str] = None
    thumbnail: Optional[str] = None
    size: int = 0
    timestamp: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Render the suggestion in the shape returned by the HTTP API."""
        return {
            "title": self.title,
            "snippet": self.snippet,
            "confidence": self.confidence,
            "placeType": self.place_type.value,
            "placeConfidence": self.place_confidence,
            "country": self.country,
            "thumbnail": self.thumbnail,
            "size": self.size,
            "timestamp": self.timestamp,
        }
