"""In-memory registry of vendor broadcast locations."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from ...models.domain import Outcome, Position, TruckLocation

logger = logging.getLogger(__name__)

LiveTrucksListener = Callable[[List[TruckLocation]], None]


class LiveStatusRegistry:
    """Keeps one TruckLocation per vendor and notifies listeners on change.

    Records are never removed: going offline only clears ``is_live`` so the
    last known position stays available.
    """

    def __init__(self, trucks: Iterable[TruckLocation] = ()) -> None:
        self._trucks: dict[str, TruckLocation] = {}
        self._listeners: list[LiveTrucksListener] = []
        self.load(trucks)

    def load(self, trucks: Iterable[TruckLocation]) -> None:
        self._trucks = {truck.vendor_id: truck for truck in trucks}

    def dump(self) -> list[dict]:
        return [truck.to_storage() for truck in self._trucks.values()]

    def mark_live(
        self,
        vendor_id: str,
        position: Position,
        address: Optional[str],
        timestamp: datetime,
    ) -> TruckLocation:
        truck = TruckLocation(
            vendor_id=vendor_id,
            latitude=position.latitude,
            longitude=position.longitude,
            address=address,
            timestamp=timestamp,
            is_live=True,
        )
        self._trucks[vendor_id] = truck
        self._notify()
        return truck

    def mark_offline(self, vendor_id: str) -> Outcome:
        truck = self._trucks.get(vendor_id)
        if truck is None:
            return Outcome.NOT_FOUND
        truck.is_live = False
        self._notify()
        return Outcome.APPLIED

    def move(self, vendor_id: str, position: Position, timestamp: datetime) -> Outcome:
        """Refresh coordinates of a live vendor; offline or unknown vendors are left alone."""

        truck = self._trucks.get(vendor_id)
        if truck is None or not truck.is_live:
            return Outcome.NOT_FOUND
        truck.latitude = position.latitude
        truck.longitude = position.longitude
        truck.timestamp = timestamp
        self._notify()
        return Outcome.APPLIED

    def get(self, vendor_id: str) -> Optional[TruckLocation]:
        return self._trucks.get(vendor_id)

    def live_trucks(self) -> list[TruckLocation]:
        return [truck for truck in self._trucks.values() if truck.is_live]

    def is_live(self, vendor_id: str) -> bool:
        truck = self._trucks.get(vendor_id)
        return truck.is_live if truck else False

    def subscribe(self, callback: LiveTrucksListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        trucks = self.live_trucks()
        for callback in list(self._listeners):
            try:
                callback(trucks)
            except Exception:
                logger.exception("Live trucks listener %r failed", callback)
