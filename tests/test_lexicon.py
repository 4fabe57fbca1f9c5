import json

import pytest

from place_suggest.etl import lexicon
from place_suggest.etl.places import classify_place
from place_suggest.models import PlaceType


@pytest.fixture(autouse=True)
def clear_cache():
    lexicon.load_lexicon.cache_clear()
    yield
    lexicon.load_lexicon.cache_clear()


def test_default_lexicon_category_order_and_weights():
    categories = [(c.place_type, c.weight) for c in lexicon.DEFAULT_LEXICON.categories]
    assert categories == [
        (PlaceType.BUILDING, 0.8),
        (PlaceType.CITY, 0.9),
        (PlaceType.LANDMARK, 0.7),
        (PlaceType.AREA, 0.6),
    ]
    assert len(lexicon.DEFAULT_LEXICON.patterns) == 3


def test_default_keyword_lists_keep_repeated_entries():
    # Repeats count toward both the matched keywords and the list length.
    city = next(c for c in lexicon.DEFAULT_LEXICON.categories if c.place_type is PlaceType.CITY)
    area = next(c for c in lexicon.DEFAULT_LEXICON.categories if c.place_type is PlaceType.AREA)
    assert len(city.keywords) == 20
    assert city.keywords.count("downtown") == 2
    assert len(area.keywords) == 28
    assert area.keywords.count("territory") == 2


def test_load_lexicon_without_path_returns_defaults():
    assert lexicon.load_lexicon(None) is lexicon.DEFAULT_LEXICON


def test_load_lexicon_overrides_from_json(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(
        json.dumps(
            {
                "categories": {"city": {"weight": 0.5, "keywords": ["ciudad", "pueblo"]}},
                "negative_terms": ["pelicula"],
                "pattern_groups": [["torre"]],
            }
        ),
        encoding="utf-8",
    )

    loaded = lexicon.load_lexicon(str(path))

    city = [c for c in loaded.categories if c.place_type is PlaceType.CITY][0]
    assert city.weight == 0.5
    assert city.keywords == ("ciudad", "pueblo")
    building = [c for c in loaded.categories if c.place_type is PlaceType.BUILDING][0]
    assert building.keywords == lexicon.BUILDING_KEYWORDS
    assert loaded.negative_terms == ("pelicula",)

    result = classify_place("Torre Latinoamericana", "una torre en la ciudad", loaded)
    assert result.is_place is True
    assert result.place_type is PlaceType.CITY
    assert classify_place("Torre", "una pelicula", loaded).is_place is False


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"categories": {"planet": {"weight": 0.5}}},
        {"categories": {"city": {"weight": "heavy"}}},
        {"categories": {"city": {"weight": 1.5}}},
        {"categories": {"city": {"keywords": []}}},
        {"negative_terms": "film"},
        {"pattern_groups": [["tower", 3]]},
    ],
)
def test_lexicon_from_dict_rejects_malformed_documents(document):
    with pytest.raises(lexicon.LexiconError):
        lexicon.lexicon_from_dict(document)


def test_load_lexicon_reports_unreadable_files(tmp_path):
    with pytest.raises(lexicon.LexiconError):
        lexicon.load_lexicon(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(lexicon.LexiconError):
        lexicon.load_lexicon(str(broken))
