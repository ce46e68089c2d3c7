"""Geofence zone subscriptions and proximity evaluation."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Iterable

from ...models.domain import AlertEvent, GeoFenceAlert, GeoFenceZone, Outcome
from ..geospatial import haversine_m


def _new_alert_id() -> str:
    return f"alert_{uuid.uuid4().hex[:16]}"


class GeoFenceEvaluator:
    """
    Keeps the user's zone subscriptions (set semantics by zone id) and tests
    vendor positions against them.

    Without debounce every update inside a zone with ``notify_on_enter``
    yields an enter alert and ``notify_on_exit`` is ignored. With debounce the
    evaluator remembers which zones each vendor is inside, so enter fires once
    per crossing and exit fires on leaving a zone with ``notify_on_exit``.
    Membership memory is in-process only.
    """

    def __init__(self, zones: Iterable[GeoFenceZone] = (), *, debounce: bool = False) -> None:
        self.debounce = debounce
        self._zones: list[GeoFenceZone] = []
        self._inside: dict[str, set[str]] = {}
        self.load(zones)

    def load(self, zones: Iterable[GeoFenceZone]) -> None:
        self._zones = []
        for zone in zones:
            self.subscribe(zone)

    def dump(self) -> list[dict]:
        return [zone.to_storage() for zone in self._zones]

    def subscribe(self, zone: GeoFenceZone) -> Outcome:
        if any(existing.id == zone.id for existing in self._zones):
            return Outcome.UNCHANGED
        self._zones.append(zone)
        return Outcome.APPLIED

    def unsubscribe(self, zone_id: str) -> Outcome:
        remaining = [zone for zone in self._zones if zone.id != zone_id]
        if len(remaining) == len(self._zones):
            return Outcome.NOT_FOUND
        self._zones = remaining
        for zone_ids in self._inside.values():
            zone_ids.discard(zone_id)
        self._inside = {vendor_id: zone_ids for vendor_id, zone_ids in self._inside.items() if zone_ids}
        return Outcome.APPLIED

    def zones(self) -> list[GeoFenceZone]:
        return list(self._zones)

    def evaluate(
        self,
        vendor_id: str,
        vendor_name: str,
        latitude: float,
        longitude: float,
        now: datetime,
    ) -> list[GeoFenceAlert]:
        if not self.debounce:
            return [
                self._alert(zone, vendor_id, vendor_name, AlertEvent.ENTER, now)
                for zone in self._zones
                if zone.notify_on_enter and self._contains(zone, latitude, longitude)
            ]

        alerts: list[GeoFenceAlert] = []
        inside_before = self._inside.setdefault(vendor_id, set())
        for zone in self._zones:
            inside = self._contains(zone, latitude, longitude)
            was_inside = zone.id in inside_before
            if inside and not was_inside:
                inside_before.add(zone.id)
                if zone.notify_on_enter:
                    alerts.append(self._alert(zone, vendor_id, vendor_name, AlertEvent.ENTER, now))
            elif was_inside and not inside:
                inside_before.discard(zone.id)
                if zone.notify_on_exit:
                    alerts.append(self._alert(zone, vendor_id, vendor_name, AlertEvent.EXIT, now))

        if not inside_before:
            del self._inside[vendor_id]
        return alerts

    @staticmethod
    def _contains(zone: GeoFenceZone, latitude: float, longitude: float) -> bool:
        return haversine_m(latitude, longitude, zone.latitude, zone.longitude) <= zone.radius_meters

    @staticmethod
    def _alert(
        zone: GeoFenceZone,
        vendor_id: str,
        vendor_name: str,
        event: AlertEvent,
        now: datetime,
    ) -> GeoFenceAlert:
        return GeoFenceAlert(
            id=_new_alert_id(),
            zone_id=zone.id,
            zone_name=zone.name,
            vendor_id=vendor_id,
            vendor_name=vendor_name,
            event_type=event,
            timestamp=now,
        )
