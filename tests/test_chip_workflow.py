"""Tests for the chip state machine and call record application."""

from __future__ import annotations

from datetime import date

import pytest

from callpad.errors import ChipNotFoundError, ChipTransitionError
from callpad.schemas.chip import ChipStatus
from callpad.schemas.detection import DetectedItem, ItemKind
from callpad.services.chip_workflow import KIND_TO_FIELD, ChipSession

WEDNESDAY = date(2026, 10, 14)


def _item(kind: ItemKind, value: str, confidence: float = 0.9, **kwargs) -> DetectedItem:
    return DetectedItem(kind=kind, value=value, confidence=confidence, original=value, **kwargs)


@pytest.fixture
def session() -> ChipSession:
    return ChipSession(threshold=0.8, today=WEDNESDAY)


class TestConfidenceGate:
    def test_high_confidence_auto_populates(self, session: ChipSession) -> None:
        [chip] = session.add_items([_item(ItemKind.CITY, "mesa az", 0.95, normalized_city="Phoenix")])

        assert chip.status == ChipStatus.CONFIRMED
        assert chip.auto_populated is True
        assert session.record.city_or_zip == "Phoenix"

    def test_threshold_is_inclusive(self, session: ChipSession) -> None:
        at, below = session.add_items([
            _item(ItemKind.EVENT_TYPE, "wedding", 0.8),
            _item(ItemKind.NAME, "Zephyrine Okafor", 0.79),
        ])
        assert at.confirmed
        assert not below.confirmed
        assert session.record.caller_name is None

    def test_unknown_never_auto_populates(self) -> None:
        session = ChipSession(threshold=0.0)
        [chip] = session.add_items([DetectedItem.unknown("qwzx")])
        assert chip.status == ChipStatus.PENDING

    def test_default_threshold_from_settings(self) -> None:
        assert ChipSession().threshold == 0.8


class TestTransitions:
    def test_confirm_applies(self, session: ChipSession) -> None:
        [chip] = session.add_items([_item(ItemKind.NAME, "Zephyrine Okafor", 0.75)])
        session.confirm(chip.id)

        assert chip.confirmed
        assert chip.auto_populated is False
        assert session.record.caller_name == "Zephyrine Okafor"

    def test_reject_does_not_apply(self, session: ChipSession) -> None:
        [chip] = session.add_items([_item(ItemKind.NAME, "Zephyrine Okafor", 0.75)])
        session.reject(chip.id)

        assert chip.status == ChipStatus.REJECTED
        assert session.record.caller_name is None

    @pytest.mark.parametrize("action", ["confirm", "reject"])
    def test_terminal_states(self, session: ChipSession, action: str) -> None:
        [chip] = session.add_items([_item(ItemKind.NAME, "Zephyrine Okafor", 0.75)])
        session.reject(chip.id)

        with pytest.raises(ChipTransitionError):
            getattr(session, action)(chip.id)

    def test_missing_chip(self, session: ChipSession) -> None:
        with pytest.raises(ChipNotFoundError):
            session.confirm("nope")

    def test_reclassify_force_confirms(self, session: ChipSession) -> None:
        [chip] = session.add_items([DetectedItem.unknown("Rustler's Rooste")])
        session.reclassify(chip.id, ItemKind.STOP)

        assert chip.confirmed
        assert chip.auto_populated is False
        assert chip.kind == ItemKind.STOP
        assert chip.item.original == "Rustler's Rooste"
        assert session.record.stops == ["Rustler's Rooste"]

    def test_reclassify_city_to_stop_drops_metro(self, session: ChipSession) -> None:
        [chip] = session.add_items([_item(ItemKind.CITY, "tempe marriott", 0.5, normalized_city="Phoenix")])
        session.reclassify(chip.id, ItemKind.STOP)
        assert chip.item.normalized_city is None
        assert session.record.stops == ["tempe marriott"]

    def test_reclassify_to_unknown_is_refused(self, session: ChipSession) -> None:
        [chip] = session.add_items([_item(ItemKind.NAME, "Zephyrine Okafor", 0.75)])
        with pytest.raises(ChipTransitionError):
            session.reclassify(chip.id, ItemKind.UNKNOWN)

    def test_reclassify_confirmed_chip_is_refused(self, session: ChipSession) -> None:
        [chip] = session.add_items([_item(ItemKind.EVENT_TYPE, "wedding")])
        with pytest.raises(ChipTransitionError):
            session.reclassify(chip.id, ItemKind.NAME)

    def test_confirm_all_folds_unknowns_into_notes(self, session: ChipSession) -> None:
        session.add_items([
            _item(ItemKind.NAME, "Zephyrine Okafor", 0.75),
            DetectedItem.unknown("wants champagne"),
            DetectedItem.unknown("call back after 6"),
        ])
        confirmed = session.confirm_all()

        assert len(confirmed) == 3
        assert session.pending() == []
        assert session.record.caller_name == "Zephyrine Okafor"
        assert session.record.trip_notes == "wants champagne\ncall back after 6"

    def test_confirm_all_leaves_rejected_alone(self, session: ChipSession) -> None:
        [chip] = session.add_items([_item(ItemKind.NAME, "Zephyrine Okafor", 0.75)])
        session.reject(chip.id)
        assert session.confirm_all() == []
        assert chip.status == ChipStatus.REJECTED


class TestApply:
    @pytest.mark.parametrize(
        "item,field,expected",
        [
            (_item(ItemKind.DATE, "next friday"), "date", "2026-10-16"),
            (_item(ItemKind.DATE, "2026-12-05"), "date", "2026-12-05"),
            (_item(ItemKind.DATE, "sometime soon"), "date", "sometime soon"),
            (_item(ItemKind.TIME, "5pm"), "pickup_time", "17:00"),
            (_item(ItemKind.TIME, "5"), "pickup_time", "5"),
            (_item(ItemKind.PASSENGERS, "20"), "passengers", 20),
            (_item(ItemKind.HOURS, "2.5"), "hours", 2.5),
            (_item(ItemKind.CITY, "flagstaff az"), "city_or_zip", "flagstaff az"),
            (_item(ItemKind.ZIP, "85201"), "city_or_zip", "85201"),
            (_item(ItemKind.WEBSITE, "partybusquotes.com"), "website_url", "partybusquotes.com"),
            (_item(ItemKind.AGENT, "Brittany"), "agent_name", "Brittany"),
        ],
    )
    def test_field_values(self, session: ChipSession, item: DetectedItem, field: str, expected) -> None:
        session.add_items([item])
        assert getattr(session.record, field) == expected

    def test_last_writer_wins(self, session: ChipSession) -> None:
        session.add_items([_item(ItemKind.PHONE, "602-555-1234"), _item(ItemKind.PHONE, "480-555-0000")])
        assert session.record.phone == "480-555-0000"

    @pytest.mark.parametrize("value", ["in 99999999 days", "in 99999 months"])
    def test_unresolvable_date_keeps_raw_value(self, session: ChipSession, value: str) -> None:
        [chip] = session.add_items([_item(ItemKind.DATE, value, 0.5)])
        session.confirm(chip.id)
        assert session.record.date == value

    def test_reclassify_to_date_with_huge_offset(self, session: ChipSession) -> None:
        [chip] = session.add_items([DetectedItem.unknown("in 99999999 days")])
        session.reclassify(chip.id, ItemKind.DATE)
        assert chip.confirmed
        assert session.record.date == "in 99999999 days"

    def test_stops_append(self, session: ChipSession) -> None:
        session.add_items([_item(ItemKind.STOP, "walmart"), _item(ItemKind.STOP, "topgolf")])
        assert session.record.stops == ["walmart", "topgolf"]

    def test_every_known_kind_has_a_field(self) -> None:
        assert set(KIND_TO_FIELD) == set(ItemKind) - {ItemKind.UNKNOWN}

    def test_record_wire_shape(self, session: ChipSession) -> None:
        session.add_items([_item(ItemKind.NAME, "John Smith"), _item(ItemKind.TIME, "9pm")])
        public = session.record.to_public()
        assert public["callerName"] == "John Smith"
        assert public["pickupTime"] == "21:00"
        assert public["tripNotes"] == ""

    def test_chip_wire_shape(self, session: ChipSession) -> None:
        [chip] = session.add_items([_item(ItemKind.CITY, "mesa az", normalized_city="Phoenix")])
        public = chip.to_public()
        assert public["autoPopulated"] is True
        assert public["status"] == "confirmed"
        assert public["item"]["normalizedCity"] == "Phoenix"
