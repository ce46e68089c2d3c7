"""Domain models for live locations, sessions, boosts and geofences."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Outcome(str, Enum):
    """Result of a mutating call that may legitimately have nothing to act on."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"
    UNCHANGED = "unchanged"

    def __bool__(self) -> bool:
        return self is Outcome.APPLIED


class SessionState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class BoostLevel(str, Enum):
    BASIC = "basic"
    PREMIUM = "premium"
    SPOTLIGHT = "spotlight"


class AlertEvent(str, Enum):
    ENTER = "enter"
    EXIT = "exit"


class StoredRecord(BaseModel):
    """Base for records persisted to the durable store (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("*", mode="after")
    @classmethod
    def _assume_utc(cls, value):
        """Timestamps stored without an offset are read as UTC."""
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TruckLocation(StoredRecord):
    """Last broadcast location of a vendor."""

    vendor_id: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    timestamp: datetime
    is_live: bool


class SessionStats(StoredRecord):
    customers_served: Optional[int] = Field(default=None, ge=0)
    revenue: Optional[float] = Field(default=None, ge=0.0)


class LocationHistoryEntry(StoredRecord):
    """A single live session at one spot. Open while ``end_time`` is unset."""

    id: str
    vendor_id: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    customers_served: Optional[int] = None
    revenue: Optional[float] = None
    notes: Optional[str] = None

    @property
    def state(self) -> SessionState:
        return SessionState.OPEN if self.end_time is None else SessionState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN


class FeaturedListing(StoredRecord):
    vendor_id: str
    start_date: datetime
    end_date: datetime
    boost_level: BoostLevel
    impressions: int = 0
    clicks: int = 0

    def is_active(self, now: datetime) -> bool:
        return self.end_date > now


class GeoFenceZone(StoredRecord):
    id: str
    name: str
    latitude: float
    longitude: float
    radius_meters: float = Field(gt=0)
    notify_on_enter: bool = True
    notify_on_exit: bool = False


@dataclass(slots=True)
class Position:
    latitude: float
    longitude: float


@dataclass(slots=True)
class GeoFenceAlert:
    id: str
    zone_id: str
    zone_name: str
    vendor_id: str
    vendor_name: str
    event_type: AlertEvent
    timestamp: datetime


@dataclass(slots=True)
class LocationAnalytics:
    """Performance summary for one coordinate bucket."""

    location_id: str
    address: str
    visit_count: int
    avg_customers: float
    avg_revenue: float
    best_days: List[str] = field(default_factory=list)
    best_time_slot: str = "N/A"
    rating: int = 1
