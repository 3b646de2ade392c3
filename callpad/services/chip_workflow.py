"""
Chip Workflow.

Wraps detected items in reviewable chips and applies confirmed chips to
the structured call record. High-confidence items are auto-confirmed
(auto-populated); everything else waits for the agent to confirm,
reject or reclassify it.

State machine per chip:

    pending ──confirm / auto-confirm / reclassify──▶ confirmed
    pending ──reject──────────────────────────────▶ rejected

Confirmed and rejected are terminal.
"""

from __future__ import annotations

import re
import uuid
from datetime import date
from typing import Iterable

from callpad.config import get_settings
from callpad.errors import ChipNotFoundError, ChipTransitionError
from callpad.logging_config import get_logger
from callpad.schemas.chip import CallRecord, Chip, ChipStatus
from callpad.schemas.detection import DetectedItem, ItemKind
from callpad.services.date_resolver import normalize_date, normalize_time

logger = get_logger(__name__)

# Item kind → CallRecord attribute. ``stop`` appends; unknown has no field.
KIND_TO_FIELD: dict[ItemKind, str] = {
    ItemKind.AGENT: "agent_name",
    ItemKind.NAME: "caller_name",
    ItemKind.PHONE: "phone",
    ItemKind.EMAIL: "email",
    ItemKind.ZIP: "city_or_zip",
    ItemKind.CITY: "city_or_zip",
    ItemKind.PASSENGERS: "passengers",
    ItemKind.HOURS: "hours",
    ItemKind.EVENT_TYPE: "event_type",
    ItemKind.VEHICLE_TYPE: "vehicle_type",
    ItemKind.DATE: "date",
    ItemKind.TIME: "pickup_time",
    ItemKind.PICKUP_ADDRESS: "pickup_address",
    ItemKind.DESTINATION: "destination",
    ItemKind.DROPOFF_ADDRESS: "dropoff_address",
    ItemKind.WEBSITE: "website_url",
    ItemKind.STOP: "stops",
}

_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")


class ChipSession:
    """
    One call's worth of chips plus the record they fill in.

    Usage:
        session = ChipSession()
        session.add_items(response.items)
        session.confirm(chip_id)
        session.record.to_public()
    """

    def __init__(self, threshold: float | None = None, today: date | None = None) -> None:
        self.threshold = get_settings().auto_populate_threshold if threshold is None else threshold
        self._today = today
        self._chips: dict[str, Chip] = {}
        self.record = CallRecord()

    # ── Queries ──────────────────────────────────────────────────

    @property
    def chips(self) -> list[Chip]:
        return list(self._chips.values())

    def pending(self) -> list[Chip]:
        return [chip for chip in self._chips.values() if chip.status == ChipStatus.PENDING]

    def get(self, chip_id: str) -> Chip:
        chip = self._chips.get(chip_id)
        if chip is None:
            raise ChipNotFoundError(chip_id)
        return chip

    # ── Transitions ──────────────────────────────────────────────

    def add_items(self, items: Iterable[DetectedItem]) -> list[Chip]:
        """Create a chip per item; auto-confirm those at or above the threshold."""
        created: list[Chip] = []
        for item in items:
            chip = Chip(id=uuid.uuid4().hex, item=item)
            self._chips[chip.id] = chip
            created.append(chip)

            if not item.is_unknown and item.confidence >= self.threshold:
                chip.status = ChipStatus.CONFIRMED
                chip.auto_populated = True
                self._apply(chip.item)
                logger.info(
                    "chip_auto_confirmed",
                    chip_id=chip.id,
                    kind=item.kind.value,
                    confidence=item.confidence,
                )
        return created

    def confirm(self, chip_id: str) -> Chip:
        chip = self._require_pending(chip_id, "confirm")
        chip.status = ChipStatus.CONFIRMED
        self._apply(chip.item)
        logger.info("chip_confirmed", chip_id=chip_id, kind=chip.kind.value)
        return chip

    def reject(self, chip_id: str) -> Chip:
        chip = self._require_pending(chip_id, "reject")
        chip.status = ChipStatus.REJECTED
        logger.info("chip_rejected", chip_id=chip_id, kind=chip.kind.value)
        return chip

    def reclassify(self, chip_id: str, kind: ItemKind) -> Chip:
        """Replace a pending chip's kind, force-confirm it and apply it."""
        chip = self._require_pending(chip_id, "reclassify")
        if kind == ItemKind.UNKNOWN:
            raise ChipTransitionError(chip_id, chip.status.value, "reclassify to unknown")

        previous = chip.kind
        chip.item = DetectedItem.model_validate({**chip.item.model_dump(), "kind": kind})
        chip.status = ChipStatus.CONFIRMED
        chip.auto_populated = False
        self._apply(chip.item)
        logger.info("chip_reclassified", chip_id=chip_id, from_kind=previous.value, to_kind=kind.value)
        return chip

    def confirm_all(self) -> list[Chip]:
        """
        Confirm every pending chip.

        Recognised chips are applied; unknown chips are folded into the
        trip notes instead so nothing the agent typed is lost.
        """
        confirmed: list[Chip] = []
        for chip in self.pending():
            chip.status = ChipStatus.CONFIRMED
            if chip.item.is_unknown:
                self.record.append_note(chip.item.value)
            else:
                self._apply(chip.item)
            confirmed.append(chip)

        logger.info("chips_confirmed_all", count=len(confirmed))
        return confirmed

    def _require_pending(self, chip_id: str, action: str) -> Chip:
        chip = self.get(chip_id)
        if chip.status != ChipStatus.PENDING:
            raise ChipTransitionError(chip_id, chip.status.value, action)
        return chip

    # ── Apply ────────────────────────────────────────────────────

    def _apply(self, item: DetectedItem) -> None:
        """Write one item into the record. Unknown items are never applied."""
        field = KIND_TO_FIELD.get(item.kind)
        if field is None:
            return

        if item.kind == ItemKind.STOP:
            self.record.stops.append(item.value)
            return

        setattr(self.record, field, self._field_value(item))

    def _field_value(self, item: DetectedItem) -> object:
        value = item.value
        if item.kind == ItemKind.DATE:
            return normalize_date(value, self._today) or value
        if item.kind == ItemKind.TIME:
            return normalize_time(value) or value
        if item.kind == ItemKind.CITY:
            return item.normalized_city or value
        if item.kind == ItemKind.PASSENGERS:
            return int(value) if value.isdigit() else value
        if item.kind == ItemKind.HOURS:
            return _to_number(value)
        return value


def _to_number(value: str) -> float | str:
    if _NUMBER_RE.match(value):
        return float(value)
    return value
