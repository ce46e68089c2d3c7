"""Pydantic request/response models for vendor live-status endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class GoLiveRequest(BaseModel):
    vendor_name: str = Field(..., min_length=1, description="Display name used in notifications.")
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    address: Optional[str] = Field(default=None, description="Known address; skips reverse geocoding.")
    permission_granted: bool = Field(default=True, description="Device location permission state.")


class LocationUpdateRequest(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class GoOfflineRequest(BaseModel):
    customers_served: Optional[int] = Field(default=None, ge=0)
    revenue: Optional[float] = Field(default=None, ge=0.0)


class OutcomeResponse(BaseModel):
    vendor_id: Optional[str] = None
    outcome: str


class TruckLocationModel(BaseModel):
    vendor_id: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    timestamp: datetime
    is_live: bool


class GoLiveResponse(BaseModel):
    vendor_id: str
    live: bool
    location: Optional[TruckLocationModel] = None


class HistoryEntryModel(BaseModel):
    id: str
    vendor_id: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    state: str
    start_time: datetime
    end_time: Optional[datetime] = None
    customers_served: Optional[int] = None
    revenue: Optional[float] = None
    notes: Optional[str] = None


class NoteRequest(BaseModel):
    notes: str = Field(..., max_length=2000)


class LocationAnalyticsModel(BaseModel):
    location_id: str
    address: str
    visit_count: int
    avg_customers: float
    avg_revenue: float
    best_days: List[str]
    best_time_slot: str
    rating: int = Field(..., ge=1, le=5)

