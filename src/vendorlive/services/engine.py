"""Vendor live-location and engagement engine."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config import settings
from ..models.domain import (
    BoostLevel,
    FeaturedListing,
    GeoFenceAlert,
    GeoFenceZone,
    LocationAnalytics,
    LocationHistoryEntry,
    Outcome,
    SessionStats,
    TruckLocation,
)
from .analytics.aggregator import best_locations, compute_location_analytics
from .boosts.manager import VisibilityBoostManager
from .collaborators import KeyValueStore, NotificationDispatcher, PositionProvider
from .geofence.evaluator import GeoFenceEvaluator
from .history.ledger import LocationHistoryLedger
from .live.registry import LiveStatusRegistry, LiveTrucksListener
from .notifications import geofence_notification, live_notification

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

LIVE_TRUCKS = "live_trucks"
LOCATION_HISTORY = "location_history"
GEOFENCE_ZONES = "geofence_zones"
FEATURED_LISTINGS = "featured_listings"


def storage_keys(prefix: str | None = None) -> dict[str, str]:
    prefix = settings.storage_key_prefix if prefix is None else prefix
    return {name: f"{prefix}{name}" for name in (LIVE_TRUCKS, LOCATION_HISTORY, GEOFENCE_ZONES, FEATURED_LISTINGS)}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VendorLiveEngine:
    """
    Owns the live map, session ledger, boost listings and zone subscriptions.

    Construct one per application, call :meth:`initialize` once to load state,
    then call the operations below from a single event loop. Every mutation is
    followed by a best-effort write of all four collections; write failures are
    logged and the in-memory state stays authoritative.
    """

    def __init__(
        self,
        store: KeyValueStore,
        position_provider: PositionProvider,
        notifier: NotificationDispatcher,
        *,
        clock: Callable[[], datetime] | None = None,
        geofence_debounce: bool | None = None,
        analytics_timezone: str | None = None,
        storage_key_prefix: str | None = None,
    ) -> None:
        self.store = store
        self.position_provider = position_provider
        self.notifier = notifier
        self.analytics_timezone = analytics_timezone or settings.analytics_timezone
        self.keys = storage_keys(storage_key_prefix)
        self._clock = clock or _utcnow
        self._vendor_names: dict[str, str] = {}
        self.initialized = False

        self.registry = LiveStatusRegistry()
        self.ledger = LocationHistoryLedger()
        self.boosts = VisibilityBoostManager()
        debounce = settings.geofence_debounce if geofence_debounce is None else geofence_debounce
        self.geofences = GeoFenceEvaluator(debounce=debounce)

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        trucks, history, zones, listings = await asyncio.gather(
            self._load(LIVE_TRUCKS, TruckLocation),
            self._load(LOCATION_HISTORY, LocationHistoryEntry),
            self._load(GEOFENCE_ZONES, GeoFenceZone),
            self._load(FEATURED_LISTINGS, FeaturedListing),
        )
        self.registry.load(trucks)
        self.ledger.load(history)
        self.geofences.load(zones)
        self.boosts.load(listings)
        self.initialized = True
        logger.info(
            "Vendor engine loaded %d trucks, %d sessions, %d zones, %d listings",
            len(trucks),
            len(history),
            len(zones),
            len(listings),
        )

    async def flush(self) -> bool:
        """Write all collections; returns False if any write failed."""

        payloads = {
            LIVE_TRUCKS: self.registry.dump(),
            LOCATION_HISTORY: self.ledger.dump(),
            GEOFENCE_ZONES: self.geofences.dump(),
            FEATURED_LISTINGS: self.boosts.dump(),
        }
        names = list(payloads)
        results = await asyncio.gather(
            *(self.store.set(self.keys[name], json.dumps(payloads[name])) for name in names),
            return_exceptions=True,
        )
        ok = True
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                ok = False
                logger.error("Failed to persist %s: %s", self.keys[name], result, exc_info=result)
        return ok

    async def _load(self, name: str, model: Type[ModelT]) -> List[ModelT]:
        key = self.keys[name]
        try:
            raw = await self.store.get(key)
        except Exception:
            logger.exception("Failed to read %s from store", key)
            return []
        if not raw:
            return []
        try:
            return TypeAdapter(List[model]).validate_json(raw)
        except ValidationError:
            logger.exception("Discarding unreadable collection %s", key)
            return []

    # ------------------------------------------------------------------
    # live status
    # ------------------------------------------------------------------

    async def go_live(
        self,
        vendor_id: str,
        vendor_name: str,
        provider: Optional[PositionProvider] = None,
    ) -> bool:
        """Broadcast the vendor at its current position.

        Returns False (and changes nothing) when permission is denied or the
        position/address lookup fails.
        """

        provider = provider or self.position_provider
        try:
            if not await provider.request_permission():
                logger.warning("Location permission not granted for vendor %s", vendor_id)
                return False
            position = await provider.get_current_position()
            address = await provider.reverse_geocode(position)
        except Exception:
            logger.exception("Failed to acquire position for vendor %s", vendor_id)
            return False

        now = self._clock()
        self._vendor_names[vendor_id] = vendor_name
        truck = self.registry.mark_live(vendor_id, position, address, now)
        self.ledger.start_session(truck, now)
        await self.flush()

        await self.check_geo_fences(vendor_id, vendor_name, truck.latitude, truck.longitude)
        await self._dispatch(live_notification(vendor_id, vendor_name, truck))
        return True

    async def go_offline(self, vendor_id: str, stats: Optional[SessionStats] = None) -> Outcome:
        outcome = self.registry.mark_offline(vendor_id)
        if not outcome:
            return outcome
        if not self.ledger.end_session(vendor_id, self._clock(), stats):
            logger.info("Vendor %s went offline without an open session", vendor_id)
        await self.flush()
        return Outcome.APPLIED

    async def update_live_location(
        self,
        vendor_id: str,
        provider: Optional[PositionProvider] = None,
    ) -> Outcome:
        if not self.registry.is_live(vendor_id):
            return Outcome.NOT_FOUND

        provider = provider or self.position_provider
        try:
            position = await provider.get_current_position()
        except Exception:
            logger.exception("Failed to update location for vendor %s", vendor_id)
            return Outcome.UNCHANGED

        outcome = self.registry.move(vendor_id, position, self._clock())
        if outcome:
            await self.flush()
            vendor_name = self._vendor_names.get(vendor_id, vendor_id)
            await self.check_geo_fences(vendor_id, vendor_name, position.latitude, position.longitude)
        return outcome

    def get_live_trucks(self) -> list[TruckLocation]:
        return self.registry.live_trucks()

    def is_vendor_live(self, vendor_id: str) -> bool:
        return self.registry.is_live(vendor_id)

    def get_truck_location(self, vendor_id: str) -> Optional[TruckLocation]:
        return self.registry.get(vendor_id)

    def subscribe(self, callback: LiveTrucksListener) -> Callable[[], None]:
        return self.registry.subscribe(callback)

    # ------------------------------------------------------------------
    # history & analytics
    # ------------------------------------------------------------------

    def get_location_history(self, vendor_id: str) -> list[LocationHistoryEntry]:
        return self.ledger.history_for(vendor_id)

    async def add_location_note(self, entry_id: str, notes: str) -> Outcome:
        outcome = self.ledger.add_note(entry_id, notes)
        if outcome:
            await self.flush()
        return outcome

    def get_location_analytics(self, vendor_id: str) -> list[LocationAnalytics]:
        return compute_location_analytics(
            self.ledger.history_for(vendor_id),
            timezone=self.analytics_timezone,
        )

    def get_best_locations(self, vendor_id: str, limit: int = 5) -> list[LocationAnalytics]:
        return best_locations(self.get_location_analytics(vendor_id), limit)

    # ------------------------------------------------------------------
    # boosts
    # ------------------------------------------------------------------

    async def purchase_boost(self, vendor_id: str, level: BoostLevel | str) -> FeaturedListing:
        listing = self.boosts.purchase(vendor_id, level, self._clock())
        await self.flush()
        return listing

    def get_active_boost(self, vendor_id: str) -> Optional[FeaturedListing]:
        return self.boosts.active_boost(vendor_id, self._clock())

    def get_featured_vendors(self) -> list[str]:
        return self.boosts.featured_vendors(self._clock())

    def get_boost_multiplier(self, vendor_id: str) -> float:
        return self.boosts.multiplier(vendor_id, self._clock())

    async def record_impression(self, vendor_id: str) -> Outcome:
        outcome = self.boosts.record_impression(vendor_id)
        if outcome:
            await self.flush()
        return outcome

    async def record_click(self, vendor_id: str) -> Outcome:
        outcome = self.boosts.record_click(vendor_id)
        if outcome:
            await self.flush()
        return outcome

    # ------------------------------------------------------------------
    # geofences
    # ------------------------------------------------------------------

    async def subscribe_to_zone(self, zone: GeoFenceZone) -> Outcome:
        outcome = self.geofences.subscribe(zone)
        if outcome:
            await self.flush()
        return outcome

    async def unsubscribe_from_zone(self, zone_id: str) -> Outcome:
        outcome = self.geofences.unsubscribe(zone_id)
        if outcome:
            await self.flush()
        return outcome

    def get_subscribed_zones(self) -> list[GeoFenceZone]:
        return self.geofences.zones()

    async def check_geo_fences(
        self,
        vendor_id: str,
        vendor_name: str,
        latitude: float,
        longitude: float,
    ) -> list[GeoFenceAlert]:
        alerts = self.geofences.evaluate(vendor_id, vendor_name, latitude, longitude, self._clock())
        for alert in alerts:
            await self._dispatch(geofence_notification(alert))
        return alerts

    async def _dispatch(self, notification: dict) -> None:
        try:
            await self.notifier.schedule_local(
                notification["title"],
                notification["body"],
                notification["data"],
            )
        except Exception:
            logger.exception("Failed to send notification %r", notification["title"])
