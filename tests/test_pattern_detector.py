"""Tests for the ordered rule cascade in PatternDetector."""

from __future__ import annotations

from datetime import date

import pytest

from callpad.gazetteer import build_gazetteer
from callpad.schemas.detection import DetectedItem, ItemKind
from callpad.services.pattern_detector import PatternDetector, Rule, clean_typo_digits

WEDNESDAY = date(2026, 10, 14)
SATURDAY = date(2026, 10, 17)


# ---------------------------------------------------------------------------
# Rule order
# ---------------------------------------------------------------------------


class TestRuleOrder:
    def test_rule_names_in_priority_order(self, detector: PatternDetector) -> None:
        assert detector.rule_names() == [
            "phone",
            "email",
            "website",
            "zip",
            "city_state",
            "agent",
            "pickup_dropoff",
            "destination",
            "name_marker",
            "two_token_name",
            "first_name",
            "time",
            "absolute_date",
            "relative_date",
            "passengers",
            "hours",
            "event_type",
            "vehicle_type",
            "venue",
            "location_fallback",
        ]

    def test_city_state_beats_two_token_name(self, detector: PatternDetector) -> None:
        item = detector.detect("Mesa AZ", WEDNESDAY)
        assert item.kind == ItemKind.CITY

    def test_pickup_time_beats_time_rule_value(self, detector: PatternDetector) -> None:
        item = detector.detect("5pm pu", WEDNESDAY)
        assert item.kind == ItemKind.TIME
        assert item.value == "5pm"


# ---------------------------------------------------------------------------
# Contact details
# ---------------------------------------------------------------------------


class TestPhone:
    @pytest.mark.parametrize(
        "fragment",
        [
            "6025551234",
            "602-555-1234",
            "(602) 555-1234",
            "602.555.1234",
            "1-602-555-1234",
            "+1 (602) 555-1234",
            "cell 602 555 1234",
        ],
    )
    def test_formats_to_dashed(self, detector: PatternDetector, fragment: str) -> None:
        item = detector.detect(fragment, WEDNESDAY)
        assert item.kind == ItemKind.PHONE
        assert item.value == "602-555-1234"
        assert item.confidence == 0.95

    def test_any_ten_digits(self, detector: PatternDetector) -> None:
        item = detector.detect("0123456789", WEDNESDAY)
        assert item.value == "012-345-6789"

    def test_wrong_length_is_not_phone(self, detector: PatternDetector) -> None:
        assert detector.detect("60255512", WEDNESDAY).kind != ItemKind.PHONE
        assert detector.detect("602555123412", WEDNESDAY).kind != ItemKind.PHONE


class TestEmailAndWebsite:
    def test_email_lowercased(self, detector: PatternDetector) -> None:
        item = detector.detect("Email: John@Example.COM", WEDNESDAY)
        assert item.kind == ItemKind.EMAIL
        assert item.value == "john@example.com"
        assert item.confidence == 0.99

    def test_website(self, detector: PatternDetector) -> None:
        item = detector.detect("partybusquotes.com", WEDNESDAY)
        assert item.kind == ItemKind.WEBSITE
        assert item.value == "partybusquotes.com"

    def test_zip(self, detector: PatternDetector) -> None:
        item = detector.detect("85201", WEDNESDAY)
        assert item.kind == ItemKind.ZIP
        assert item.confidence == 0.95


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


class TestLocations:
    def test_suburb_with_state_normalizes(self, detector: PatternDetector) -> None:
        item = detector.detect("mesa az", WEDNESDAY)
        assert item.kind == ItemKind.CITY
        assert item.normalized_city == "Phoenix"
        assert item.value == "mesa az"

    def test_bare_suburb_normalizes(self, detector: PatternDetector) -> None:
        item = detector.detect("naperville", WEDNESDAY)
        assert item.kind == ItemKind.CITY
        assert item.normalized_city == "Chicago"

    def test_comma_state_keeps_original_text(self, detector: PatternDetector) -> None:
        item = detector.detect("Mesa, AZ", WEDNESDAY)
        assert item.kind == ItemKind.CITY
        assert item.value == "Mesa, AZ"
        assert item.normalized_city == "Phoenix"

    def test_unknown_city_with_state(self, detector: PatternDetector) -> None:
        item = detector.detect("flagstaff az", WEDNESDAY)
        assert item.kind == ItemKind.CITY
        assert item.normalized_city is None
        assert item.confidence == 0.9

    @pytest.mark.parametrize("text", ["salem or", "portland me"])
    def test_typed_state_outside_metro_keeps_no_metro(self, detector: PatternDetector, text: str) -> None:
        item = detector.detect(text, WEDNESDAY)
        assert item.kind == ItemKind.CITY
        assert item.normalized_city is None
        assert item.confidence == 0.9

    def test_metro_city_name_not_read_as_person(self, detector: PatternDetector) -> None:
        item = detector.detect("Austin", WEDNESDAY)
        assert item.kind == ItemKind.CITY
        assert item.normalized_city == "Austin"

    def test_pickup_postfix(self, detector: PatternDetector) -> None:
        item = detector.detect("dallas pu", WEDNESDAY)
        assert item.kind == ItemKind.PICKUP_ADDRESS
        assert item.value == "dallas"
        assert item.normalized_city == "Dallas"

    def test_pickup_strips_typo_digit(self, detector: PatternDetector) -> None:
        item = detector.detect("chicago4 pu", WEDNESDAY)
        assert item.kind == ItemKind.PICKUP_ADDRESS
        assert item.value == "chicago"

    def test_pickup_prefix_with_time(self, detector: PatternDetector) -> None:
        item = detector.detect("pu at 9pm", WEDNESDAY)
        assert item.kind == ItemKind.TIME
        assert item.value == "9pm"

    def test_dropoff_prefix(self, detector: PatternDetector) -> None:
        item = detector.detect("drop off at phoenix sky harbor", WEDNESDAY)
        assert item.kind == ItemKind.DROPOFF_ADDRESS
        assert item.value == "phoenix sky harbor"

    def test_destination(self, detector: PatternDetector) -> None:
        item = detector.detect("going to the phoenician", WEDNESDAY)
        assert item.kind == ItemKind.DESTINATION
        assert item.value == "the phoenician"

    def test_venue_with_city(self, detector: PatternDetector) -> None:
        item = detector.detect("scottsdale marriott", WEDNESDAY)
        assert item.kind == ItemKind.STOP
        assert item.confidence == 0.8
        assert item.normalized_city is None

    def test_street_address(self, detector: PatternDetector) -> None:
        item = detector.detect("123 main st", WEDNESDAY)
        assert item.kind == ItemKind.STOP

    def test_venue_with_pickup_mention(self, detector: PatternDetector) -> None:
        item = detector.detect("pick them up at hotel", WEDNESDAY)
        assert item.kind == ItemKind.PICKUP_ADDRESS


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------


class TestNames:
    def test_agent_from_roster(self, detector: PatternDetector) -> None:
        item = detector.detect("brittany", WEDNESDAY)
        assert item.kind == ItemKind.AGENT
        assert item.value == "Brittany"

    def test_name_marker(self, detector: PatternDetector) -> None:
        item = detector.detect("customer: jane doe", WEDNESDAY)
        assert item.kind == ItemKind.NAME
        assert item.value == "Jane Doe"
        assert item.confidence == 0.95

    def test_two_tokens_known_first_name(self, detector: PatternDetector) -> None:
        item = detector.detect("john smith", WEDNESDAY)
        assert item.kind == ItemKind.NAME
        assert item.value == "John Smith"
        assert item.confidence == 0.9

    def test_two_capitalized_tokens_unknown_first_name(self, detector: PatternDetector) -> None:
        item = detector.detect("Zephyrine Okafor", WEDNESDAY)
        assert item.kind == ItemKind.NAME
        assert item.confidence == 0.75

    def test_vehicle_words_are_not_names(self, detector: PatternDetector) -> None:
        item = detector.detect("Stretch Limo", WEDNESDAY)
        assert item.kind == ItemKind.VEHICLE_TYPE

    def test_single_first_name(self, detector: PatternDetector) -> None:
        item = detector.detect("sarah", WEDNESDAY)
        assert item.kind == ItemKind.NAME
        assert item.value == "Sarah"
        assert item.confidence == 0.8

    def test_injected_roster(self) -> None:
        detector = PatternDetector(gazetteer=build_gazetteer(agent_roster=["zelda"]))
        item = detector.detect("zelda", WEDNESDAY)
        assert item.kind == ItemKind.AGENT


# ---------------------------------------------------------------------------
# Time and dates
# ---------------------------------------------------------------------------


class TestTimeAndDates:
    @pytest.mark.parametrize("fragment,value", [("5pm", "5pm"), ("at 5:30", "5:30"), ("9:30 am", "9:30 am")])
    def test_time(self, detector: PatternDetector, fragment: str, value: str) -> None:
        item = detector.detect(fragment, WEDNESDAY)
        assert item.kind == ItemKind.TIME
        assert item.value == value

    def test_next_friday_from_wednesday(self, detector: PatternDetector) -> None:
        item = detector.detect("next friday", WEDNESDAY)
        assert item.kind == ItemKind.DATE
        assert item.value == "2026-10-16"

    def test_next_friday_from_saturday(self, detector: PatternDetector) -> None:
        assert detector.detect("next friday", SATURDAY).value == "2026-10-30"

    def test_slash_date_rolls_forward(self, detector: PatternDetector) -> None:
        item = detector.detect("4/30", WEDNESDAY)
        assert item.kind == ItemKind.DATE
        assert item.value == "2027-04-30"

    def test_month_name_date(self, detector: PatternDetector) -> None:
        assert detector.detect("december 5th", WEDNESDAY).value == "2026-12-05"

    def test_impossible_date_is_not_a_date(self, detector: PatternDetector) -> None:
        assert detector.detect("feb 30", WEDNESDAY).kind != ItemKind.DATE


# ---------------------------------------------------------------------------
# Counts
# ---------------------------------------------------------------------------


class TestCounts:
    def test_misspelled_people(self, detector: PatternDetector) -> None:
        item = detector.detect("20 poeple", WEDNESDAY)
        assert item.kind == ItemKind.PASSENGERS
        assert item.value == "20"
        assert item.confidence == 0.9

    def test_word_count(self, detector: PatternDetector) -> None:
        assert detector.detect("thirty people", WEDNESDAY).value == "30"

    def test_party_of(self, detector: PatternDetector) -> None:
        item = detector.detect("party of 12", WEDNESDAY)
        assert item.kind == ItemKind.PASSENGERS
        assert item.value == "12"

    def test_bare_two_digit_number_is_guessed_passengers(self, detector: PatternDetector) -> None:
        item = detector.detect("25", WEDNESDAY)
        assert item.kind == ItemKind.PASSENGERS
        assert item.confidence == 0.7

    def test_hours_with_unit(self, detector: PatternDetector) -> None:
        item = detector.detect("4 hours", WEDNESDAY)
        assert item.kind == ItemKind.HOURS
        assert item.value == "4"
        assert item.confidence == 0.85

    def test_fractional_hours(self, detector: PatternDetector) -> None:
        assert detector.detect("2.5 hrs", WEDNESDAY).value == "2.5"

    def test_bare_single_digit_is_low_confidence_hours(self, detector: PatternDetector) -> None:
        item = detector.detect("5", WEDNESDAY)
        assert item.kind == ItemKind.HOURS
        assert item.confidence == 0.6

    def test_more_than_twelve_hours_rejected(self, detector: PatternDetector) -> None:
        item = detector.detect("13 hours", WEDNESDAY)
        assert item.kind != ItemKind.HOURS
        assert item.kind == ItemKind.UNKNOWN


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------


class TestKeywords:
    def test_event(self, detector: PatternDetector) -> None:
        item = detector.detect("wedding", WEDNESDAY)
        assert item.kind == ItemKind.EVENT_TYPE
        assert item.value == "wedding"

    def test_party_bus_is_a_vehicle(self, detector: PatternDetector) -> None:
        item = detector.detect("party bus", WEDNESDAY)
        assert item.kind == ItemKind.VEHICLE_TYPE
        assert item.value == "Party Bus"

    def test_stretch_is_limousine(self, detector: PatternDetector) -> None:
        assert detector.detect("stretch", WEDNESDAY).value == "Limousine"

    def test_bare_venue(self, detector: PatternDetector) -> None:
        item = detector.detect("Marriott", WEDNESDAY)
        assert item.kind == ItemKind.STOP
        assert item.confidence == 0.75


# ---------------------------------------------------------------------------
# Fallthrough and robustness
# ---------------------------------------------------------------------------


class TestFallthrough:
    def test_gibberish_is_unknown(self, detector: PatternDetector) -> None:
        item = detector.detect("qwzx", WEDNESDAY)
        assert item == DetectedItem.unknown("qwzx")
        assert item.confidence == 0.0

    def test_blank_is_unknown(self, detector: PatternDetector) -> None:
        assert detector.detect("   ", WEDNESDAY).is_unknown

    @pytest.mark.parametrize(
        "fragment",
        ["mesa az", "john smith", "5pm pu", "20 poeple", "next friday", "qwzx", "wedding"],
    )
    def test_idempotent(self, detector: PatternDetector, fragment: str) -> None:
        assert detector.detect(fragment, WEDNESDAY) == detector.detect(fragment, WEDNESDAY)

    def test_original_is_preserved(self, detector: PatternDetector) -> None:
        assert detector.detect("naperville", WEDNESDAY).original == "naperville"

    def test_failing_rule_is_skipped(self) -> None:
        detector = PatternDetector()

        def boom(ctx):
            raise RuntimeError("broken rule")

        detector.rules = (Rule("boom", boom), *detector.rules)
        item = detector.detect("wedding", WEDNESDAY)
        assert item.kind == ItemKind.EVENT_TYPE


def test_clean_typo_digits() -> None:
    assert clean_typo_digits("chicago4") == "chicago"
    assert clean_typo_digits("123 main") == "123 main"
