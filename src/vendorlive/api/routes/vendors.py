"""Vendor live-status, history and analytics endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...models.domain import LocationHistoryEntry, Position, SessionStats, TruckLocation
from ...schemas.vendors import (
    GoLiveRequest,
    GoLiveResponse,
    GoOfflineRequest,
    HistoryEntryModel,
    LocationAnalyticsModel,
    LocationUpdateRequest,
    NoteRequest,
    OutcomeResponse,
    TruckLocationModel,
)
from ...services.engine import VendorLiveEngine
from ...services.geocoding.provider import ReportedPositionProvider, ReverseGeocoder
from ..deps import get_engine, get_geocoder

router = APIRouter(prefix="/vendors", tags=["vendors"])


def _truck_model(truck: TruckLocation) -> TruckLocationModel:
    return TruckLocationModel(**truck.model_dump())


def _history_model(entry: LocationHistoryEntry) -> HistoryEntryModel:
    return HistoryEntryModel(**entry.model_dump(), state=entry.state.value)


@router.get("/live", response_model=List[TruckLocationModel], status_code=status.HTTP_200_OK)
def list_live_trucks(engine: VendorLiveEngine = Depends(get_engine)) -> List[TruckLocationModel]:
    return [_truck_model(truck) for truck in engine.get_live_trucks()]


@router.post("/{vendor_id}/live", response_model=GoLiveResponse, status_code=status.HTTP_200_OK)
async def go_live(
    vendor_id: str,
    request: GoLiveRequest,
    engine: VendorLiveEngine = Depends(get_engine),
    geocoder: Optional[ReverseGeocoder] = Depends(get_geocoder),
) -> GoLiveResponse:
    provider = ReportedPositionProvider(
        Position(request.latitude, request.longitude),
        permission_granted=request.permission_granted,
        geocoder=geocoder,
        address=request.address,
    )
    live = await engine.go_live(vendor_id, request.vendor_name, provider=provider)
    truck = engine.get_truck_location(vendor_id) if live else None
    return GoLiveResponse(
        vendor_id=vendor_id,
        live=live,
        location=_truck_model(truck) if truck else None,
    )


@router.post("/{vendor_id}/offline", response_model=OutcomeResponse, status_code=status.HTTP_200_OK)
async def go_offline(
    vendor_id: str,
    request: GoOfflineRequest | None = None,
    engine: VendorLiveEngine = Depends(get_engine),
) -> OutcomeResponse:
    stats = SessionStats(**request.model_dump()) if request else None
    outcome = await engine.go_offline(vendor_id, stats)
    return OutcomeResponse(vendor_id=vendor_id, outcome=outcome.value)


@router.post("/{vendor_id}/location", response_model=OutcomeResponse, status_code=status.HTTP_200_OK)
async def update_location(
    vendor_id: str,
    request: LocationUpdateRequest,
    engine: VendorLiveEngine = Depends(get_engine),
) -> OutcomeResponse:
    provider = ReportedPositionProvider(Position(request.latitude, request.longitude))
    outcome = await engine.update_live_location(vendor_id, provider=provider)
    return OutcomeResponse(vendor_id=vendor_id, outcome=outcome.value)


@router.get("/{vendor_id}/location", response_model=TruckLocationModel, status_code=status.HTTP_200_OK)
def get_location(vendor_id: str, engine: VendorLiveEngine = Depends(get_engine)) -> TruckLocationModel:
    truck = engine.get_truck_location(vendor_id)
    if truck is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No location for vendor '{vendor_id}'.")
    return _truck_model(truck)


@router.get("/{vendor_id}/history", response_model=List[HistoryEntryModel], status_code=status.HTTP_200_OK)
def get_history(vendor_id: str, engine: VendorLiveEngine = Depends(get_engine)) -> List[HistoryEntryModel]:
    return [_history_model(entry) for entry in engine.get_location_history(vendor_id)]


@router.put("/history/{entry_id}/notes", response_model=OutcomeResponse, status_code=status.HTTP_200_OK)
async def set_history_note(
    entry_id: str,
    request: NoteRequest,
    engine: VendorLiveEngine = Depends(get_engine),
) -> OutcomeResponse:
    outcome = await engine.add_location_note(entry_id, request.notes)
    return OutcomeResponse(outcome=outcome.value)


@router.get(
    "/{vendor_id}/analytics",
    response_model=List[LocationAnalyticsModel],
    status_code=status.HTTP_200_OK,
)
def get_analytics(
    vendor_id: str,
    limit: int | None = Query(default=None, ge=1, le=100, description="Only return the best N locations."),
    engine: VendorLiveEngine = Depends(get_engine),
) -> List[LocationAnalyticsModel]:
    if limit is None:
        analytics = engine.get_location_analytics(vendor_id)
    else:
        analytics = engine.get_best_locations(vendor_id, limit)
    return [LocationAnalyticsModel(**asdict(item)) for item in analytics]
