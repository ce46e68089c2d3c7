"""Read-only reference data: boost tiers and popular geofence zones."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .domain import BoostLevel, GeoFenceZone


@dataclass(frozen=True, slots=True)
class BoostTier:
    id: str
    name: str
    price: float
    duration_hours: int
    description: str
    multiplier: float
    features: tuple[str, ...]
    rank: int


BOOST_PRICING: Mapping[BoostLevel, BoostTier] = {
    BoostLevel.BASIC: BoostTier(
        id="boost_basic",
        name="Basic Boost",
        price=4.99,
        duration_hours=24,
        description="Appear higher in search results for 24 hours",
        multiplier=1.5,
        features=("Priority in search", "Badge on listing"),
        rank=1,
    ),
    BoostLevel.PREMIUM: BoostTier(
        id="boost_premium",
        name="Premium Boost",
        price=14.99,
        duration_hours=72,
        description="Maximum visibility for 3 days",
        multiplier=2.5,
        features=("Top of search", "Featured badge", "Push to nearby users", "Analytics"),
        rank=2,
    ),
    BoostLevel.SPOTLIGHT: BoostTier(
        id="boost_spotlight",
        name="Spotlight",
        price=29.99,
        duration_hours=168,
        description="Be the featured truck of the week",
        multiplier=5.0,
        features=(
            "Homepage feature",
            "Spotlight banner",
            "Social media shoutout",
            "Premium analytics",
            "Priority support",
        ),
        rank=3,
    ),
}


def _zone(zone_id: str, name: str, lat: float, lng: float, radius: float) -> GeoFenceZone:
    return GeoFenceZone(
        id=zone_id,
        name=name,
        latitude=lat,
        longitude=lng,
        radius_meters=radius,
        notify_on_enter=True,
        notify_on_exit=False,
    )


POPULAR_ZONES: tuple[GeoFenceZone, ...] = (
    # Miami
    _zone("zone_miami_downtown", "Downtown Miami", 25.7617, -80.1918, 2000),
    _zone("zone_miami_beach", "Miami Beach", 25.7907, -80.1300, 3000),
    _zone("zone_miami_wynwood", "Wynwood", 25.8010, -80.1993, 1500),
    # Orlando
    _zone("zone_orlando_downtown", "Downtown Orlando", 28.5383, -81.3792, 2500),
    _zone("zone_orlando_mills", "Mills 50", 28.5570, -81.3650, 1500),
    # Tampa
    _zone("zone_tampa_downtown", "Downtown Tampa", 27.9506, -82.4572, 2000),
    _zone("zone_tampa_ybor", "Ybor City", 27.9600, -82.4380, 1500),
)


def find_popular_zone(zone_id: str) -> GeoFenceZone | None:
    for zone in POPULAR_ZONES:
        if zone.id == zone_id:
            return zone.model_copy()
    return None
