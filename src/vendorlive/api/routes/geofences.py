"""Geofence subscription and evaluation endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...models.catalog import POPULAR_ZONES, find_popular_zone
from ...models.domain import GeoFenceZone
from ...schemas.geofences import (
    GeoFenceAlertModel,
    GeoFenceCheckRequest,
    GeoFenceZoneModel,
    ZoneSubscriptionResponse,
)
from ...services.engine import VendorLiveEngine
from ..deps import get_engine

router = APIRouter(prefix="/geofences", tags=["geofences"])


def _zone_model(zone: GeoFenceZone) -> GeoFenceZoneModel:
    return GeoFenceZoneModel(**zone.model_dump())


def _subscription_response(engine: VendorLiveEngine, zone_id: str, outcome: str) -> ZoneSubscriptionResponse:
    return ZoneSubscriptionResponse(
        zone_id=zone_id,
        outcome=outcome,
        subscribed=[_zone_model(zone) for zone in engine.get_subscribed_zones()],
    )


@router.get("/popular", response_model=List[GeoFenceZoneModel], status_code=status.HTTP_200_OK)
def list_popular_zones() -> List[GeoFenceZoneModel]:
    return [_zone_model(zone) for zone in POPULAR_ZONES]


@router.get("/subscriptions", response_model=List[GeoFenceZoneModel], status_code=status.HTTP_200_OK)
def list_subscriptions(engine: VendorLiveEngine = Depends(get_engine)) -> List[GeoFenceZoneModel]:
    return [_zone_model(zone) for zone in engine.get_subscribed_zones()]


@router.post("/subscriptions", response_model=ZoneSubscriptionResponse, status_code=status.HTTP_200_OK)
async def subscribe_zone(
    zone: GeoFenceZoneModel,
    engine: VendorLiveEngine = Depends(get_engine),
) -> ZoneSubscriptionResponse:
    outcome = await engine.subscribe_to_zone(GeoFenceZone(**zone.model_dump()))
    return _subscription_response(engine, zone.id, outcome.value)


@router.post(
    "/subscriptions/popular/{zone_id}",
    response_model=ZoneSubscriptionResponse,
    status_code=status.HTTP_200_OK,
)
async def subscribe_popular_zone(zone_id: str, engine: VendorLiveEngine = Depends(get_engine)) -> ZoneSubscriptionResponse:
    zone = find_popular_zone(zone_id)
    if zone is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown zone '{zone_id}'.")
    outcome = await engine.subscribe_to_zone(zone)
    return _subscription_response(engine, zone_id, outcome.value)


@router.delete("/subscriptions/{zone_id}", response_model=ZoneSubscriptionResponse, status_code=status.HTTP_200_OK)
async def unsubscribe_zone(zone_id: str, engine: VendorLiveEngine = Depends(get_engine)) -> ZoneSubscriptionResponse:
    outcome = await engine.unsubscribe_from_zone(zone_id)
    return _subscription_response(engine, zone_id, outcome.value)


@router.post("/check", response_model=List[GeoFenceAlertModel], status_code=status.HTTP_200_OK)
async def check_geofences(
    request: GeoFenceCheckRequest,
    engine: VendorLiveEngine = Depends(get_engine),
) -> List[GeoFenceAlertModel]:
    alerts = await engine.check_geo_fences(
        request.vendor_id,
        request.vendor_name,
        request.latitude,
        request.longitude,
    )
    return [GeoFenceAlertModel(**{**asdict(alert), "event_type": alert.event_type.value}) for alert in alerts]
