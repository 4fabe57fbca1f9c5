"""Text helpers used to compare search hits against user queries."""

import re
import unicodedata
from typing import Any

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_NON_WORD = re.compile(r"[^A-Za-z0-9_\s]")
_TAG = re.compile(r"<[^>]*>")
_ENTITY = re.compile(r"&[a-zA-Z0-9#]+;")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Any) -> str:
    """Lower-case, strip diacritics and punctuation so strings can be compared."""
    if not text or not isinstance(text, str):
        return ""

    decomposed = unicodedata.normalize("NFD", text.lower())
    without_marks = _COMBINING_MARKS.sub("", decomposed)
    return _NON_WORD.sub("", without_marks).strip()


def clean_snippet(snippet: Any) -> str:
    """Strip markup and entities from a search snippet."""
    if not snippet or not isinstance(snippet, str):
        return ""

    text = _TAG.sub("", snippet)
    text = _ENTITY.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()
