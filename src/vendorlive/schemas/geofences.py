"""Pydantic models for geofence endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class GeoFenceZoneModel(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    radius_meters: float = Field(..., gt=0)
    notify_on_enter: bool = True
    notify_on_exit: bool = False


class GeoFenceCheckRequest(BaseModel):
    vendor_id: str
    vendor_name: str
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class GeoFenceAlertModel(BaseModel):
    id: str
    zone_id: str
    zone_name: str
    vendor_id: str
    vendor_name: str
    event_type: Literal["enter", "exit"]
    timestamp: datetime


class ZoneSubscriptionResponse(BaseModel):
    zone_id: str
    outcome: str
    subscribed: list[GeoFenceZoneModel]
