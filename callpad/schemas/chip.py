"""
Data models for the chip review workflow and the structured call record.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from callpad.schemas.detection import DetectedItem, ItemKind


class ChipStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class Chip(BaseModel):
    """A reviewable wrapper around one DetectedItem, owned by a session."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    item: DetectedItem
    status: ChipStatus = ChipStatus.PENDING
    auto_populated: bool = Field(default=False, alias="autoPopulated")

    @property
    def confirmed(self) -> bool:
        return self.status == ChipStatus.CONFIRMED

    @property
    def kind(self) -> ItemKind:
        return self.item.kind

    def to_public(self) -> dict:
        return {
            "id": self.id,
            "item": self.item.to_public(),
            "status": self.status.value,
            "confirmed": self.confirmed,
            "autoPopulated": self.auto_populated,
        }


class CallRecord(BaseModel):
    """Flat structured record for one call, filled in from confirmed chips."""

    model_config = ConfigDict(populate_by_name=True)

    agent_name: Optional[str] = Field(default=None, alias="agentName")
    caller_name: Optional[str] = Field(default=None, alias="callerName")
    phone: Optional[str] = None
    email: Optional[str] = None
    city_or_zip: Optional[str] = Field(default=None, alias="cityOrZip")
    passengers: Optional[Union[int, str]] = None
    hours: Optional[Union[float, str]] = None
    event_type: Optional[str] = Field(default=None, alias="eventType")
    vehicle_type: Optional[str] = Field(default=None, alias="vehicleType")
    date: Optional[str] = None
    pickup_time: Optional[str] = Field(default=None, alias="pickupTime")
    pickup_address: Optional[str] = Field(default=None, alias="pickupAddress")
    destination: Optional[str] = None
    dropoff_address: Optional[str] = Field(default=None, alias="dropoffAddress")
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")
    stops: list[str] = Field(default_factory=list)
    trip_notes: str = Field(default="", alias="tripNotes")

    def append_note(self, text: str) -> None:
        self.trip_notes = f"{self.trip_notes}\n{text}" if self.trip_notes else text

    def to_public(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
