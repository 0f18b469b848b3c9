"""
Unit tests for core.matcher - case-insensitive name matching.
"""

import pytest

from core.matcher import find_matches, normalize_name
from core.models import ItemMapping, decode_mappings

pytestmark = pytest.mark.unit


@pytest.fixture
def mappings(mappings_bytes):
    return decode_mappings(mappings_bytes)


class TestFindMatches:

    def test_single_exact_name(self, mappings):
        matches = find_matches("Zulrah's scales", mappings)

        assert [m.id for m in matches] == [12934]

    def test_substring_matches_many(self, mappings):
        matches = find_matches("twisted", mappings)

        assert len(matches) == 23
        assert all("twisted" in m.name.lower() for m in matches)

    @pytest.mark.parametrize("query", ["ZULRAH'S SCALES", "zulrah's scales", "zUlRaH's ScAlEs"])
    def test_case_insensitive(self, mappings, query):
        assert find_matches(query, mappings) == find_matches("Zulrah's scales", mappings)

    def test_partial_word(self, mappings):
        names = [m.name for m in find_matches("bow", mappings)]

        assert names == ["Twisted bow", "Bow string", "Magic shortbow"]

    def test_no_matches_is_empty_list(self, mappings):
        assert find_matches("dragon claws", mappings) == []

    def test_empty_query_matches_everything(self, mappings):
        assert find_matches("", mappings) == mappings

    def test_preserves_input_order(self):
        items = [ItemMapping(3, "Rune axe"), ItemMapping(1, "Bronze axe"), ItemMapping(2, "Iron axe")]

        assert [m.id for m in find_matches("AXE", items)] == [3, 1, 2]

    def test_duplicate_ids_all_returned(self):
        items = [ItemMapping(1, "Coins"), ItemMapping(1, "Coins")]

        assert len(find_matches("coins", items)) == 2

    def test_accepts_any_iterable(self, mappings):
        assert len(find_matches("twisted", iter(mappings))) == 23


class TestNormalizeName:

    def test_lowercases(self):
        assert normalize_name("Twisted Bow") == "twisted bow"
