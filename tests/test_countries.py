import pytest

from place_suggest.etl import countries


def test_extract_country_from_location_hierarchy():
    assert countries.extract_country("The Eiffel Tower is located in Paris, France.") == "France"


def test_extract_country_none_when_no_location():
    assert countries.extract_country("No location mentioned.") is None


@pytest.mark.parametrize("value", [None, "", 12])
def test_extract_country_missing_input(value):
    assert countries.extract_country(value) is None


def test_extract_country_multi_word_name():
    summary = "Big Ben is the nickname for the Great Bell of the clock in the United Kingdom."
    # "the United Kingdom" starts lower-case; only capitalised runs count
    assert countries.extract_country(summary) is None
    assert countries.extract_country("A castle in United Kingdom, near the coast.") == "United Kingdom"


def test_extract_country_is_case_sensitive():
    assert countries.extract_country("A lake in FRANCE.") is None
    assert countries.extract_country("A lake in france.") is None


def test_extract_country_ignores_non_whitelisted_spans():
    assert countries.extract_country("A palace in Westeros, and a keep of Winterfell.") is None


def test_in_pattern_is_checked_before_of_pattern():
    summary = "The capital of Germany, it sits on a river in Austria."
    assert countries.extract_country(summary) == "Austria"


def test_first_match_in_text_order_wins():
    summary = "It lies in Spain, close to a town in Portugal."
    assert countries.extract_country(summary) == "Spain"


def test_whitelist_is_fixed_and_ordered():
    assert countries.COUNTRY_WHITELIST[0] == "France"
    assert countries.COUNTRY_WHITELIST[-1] == "Ireland"
    assert len(countries.COUNTRY_WHITELIST) == len(set(countries.COUNTRY_WHITELIST)) == 43
