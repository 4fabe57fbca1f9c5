"""Pull a country name out of encyclopedia-style summary prose."""

import re
from typing import Any, Optional

COUNTRY_WHITELIST = (
    "France",
    "Germany",
    "Italy",
    "Spain",
    "United Kingdom",
    "United States",
    "Japan",
    "China",
    "India",
    "Brazil",
    "Canada",
    "Australia",
    "Russia",
    "Mexico",
    "Argentina",
    "Chile",
    "Peru",
    "Colombia",
    "Venezuela",
    "Egypt",
    "South Africa",
    "Nigeria",
    "Kenya",
    "Morocco",
    "Tunisia",
    "Turkey",
    "Greece",
    "Portugal",
    "Netherlands",
    "Belgium",
    "Switzerland",
    "Austria",
    "Poland",
    "Czech Republic",
    "Hungary",
    "Romania",
    "Bulgaria",
    "Sweden",
    "Norway",
    "Denmark",
    "Finland",
    "Iceland",
    "Ireland",
)
_WHITELIST = frozenset(COUNTRY_WHITELIST)

# A run of capitalized words, optionally continued by more comma-separated runs
# ("Paris, France"). The phrase must end on a comma or a period.
_NAME = r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*"
_PHRASE = rf"({_NAME}(?:\s*,\s*{_NAME})*)\s*[,.]"

COUNTRY_PATTERNS = (
    re.compile(rf"\bin\s+{_PHRASE}"),
    re.compile(rf"\bof\s+{_PHRASE}"),
    re.compile(rf"\blocated\s+in\s+{_PHRASE}"),
)


def extract_country(summary: Any) -> Optional[str]:
    """Return the first whitelisted country introduced by "in", "of" or "located in"."""
    if not summary or not isinstance(summary, str):
        return None

    for pattern in COUNTRY_PATTERNS:
        for match in pattern.finditer(summary):
            for part in match.group(1).split(","):
                name = part.strip()
                if name in _WHITELIST:
                    return name
    return None
