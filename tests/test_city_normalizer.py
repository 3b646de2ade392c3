"""Tests for suburb → metro normalization and location query parsing."""

from __future__ import annotations

import pytest

from callpad.services.city_normalizer import CityNormalizer, LocationQuery, clean_location_key


@pytest.fixture(scope="module")
def normalizer() -> CityNormalizer:
    return CityNormalizer()


def test_clean_location_key() -> None:
    assert clean_location_key("  Mesa,  AZ. ") == "mesa az"


class TestNormalize:
    @pytest.mark.parametrize(
        "city,metro",
        [
            ("Mesa", "Phoenix"),
            ("mesa az", "Phoenix"),
            ("Mesa, AZ.", "Phoenix"),
            ("mesa arizona", "Phoenix"),
            ("naperville", "Chicago"),
            ("Plano TX", "Dallas"),
            ("glendale az", "Phoenix"),
            ("glendale ca", "Los Angeles"),
        ],
    )
    def test_suburbs(self, normalizer: CityNormalizer, city: str, metro: str) -> None:
        assert normalizer.normalize(city) == metro

    def test_metro_itself_is_not_a_suburb(self, normalizer: CityNormalizer) -> None:
        assert normalizer.normalize("Phoenix") is None
        assert normalizer.resolve_metro("Phoenix") == "Phoenix"

    def test_saint_spelled_out(self, normalizer: CityNormalizer) -> None:
        assert normalizer.resolve_metro("saint louis") == "St Louis"

    @pytest.mark.parametrize("city", ["", "   ", "atlantis", "zzz tx"])
    def test_unknown(self, normalizer: CityNormalizer, city: str) -> None:
        assert normalizer.resolve_metro(city) is None


class TestTypedStateMismatch:
    @pytest.mark.parametrize("city", ["salem or", "Salem, Oregon", "portland me", "Portland, ME", "naperville tx"])
    def test_state_outside_metro_does_not_resolve(self, normalizer: CityNormalizer, city: str) -> None:
        assert normalizer.resolve_metro(city) is None

    @pytest.mark.parametrize(
        "city,metro",
        [
            ("salem ma", "Boston"),
            ("hoboken nj", "New York"),
            ("portland or", "Portland"),
            ("vancouver wa", "Portland"),
            ("kansas city ks", "Kansas City"),
        ],
    )
    def test_state_inside_metro_resolves(self, normalizer: CityNormalizer, city: str, metro: str) -> None:
        assert normalizer.resolve_metro(city) == metro

    def test_no_typed_state_always_in_service(self, normalizer: CityNormalizer) -> None:
        assert normalizer.in_service_state("Boston", None)
        assert not normalizer.in_service_state("Boston", "OR")


class TestStripState:
    def test_abbreviation(self, normalizer: CityNormalizer) -> None:
        assert normalizer.strip_state("mesa az") == ("mesa", "AZ")

    def test_longest_state_name_wins(self, normalizer: CityNormalizer) -> None:
        assert normalizer.strip_state("charleston west virginia") == ("charleston", "WV")

    def test_no_state(self, normalizer: CityNormalizer) -> None:
        assert normalizer.strip_state("mesa") == ("mesa", None)


class TestParseLocationQuery:
    @pytest.mark.parametrize(
        "query,expected",
        [
            ("Mesa, AZ", LocationQuery("Mesa", "AZ")),
            ("mesa az", LocationQuery("mesa", "AZ")),
            ("Mesa, Arizona", LocationQuery("Mesa", "AZ")),
            ("mesa arizona", LocationQuery("mesa", "AZ")),
            ("Springfield", LocationQuery("Springfield")),
        ],
    )
    def test_splits(self, normalizer: CityNormalizer, query: str, expected: LocationQuery) -> None:
        assert normalizer.parse_location_query(query) == expected
