"""Append-only ledger of vendor live sessions."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Iterable, Optional

from ...models.domain import LocationHistoryEntry, Outcome, SessionStats, TruckLocation

logger = logging.getLogger(__name__)


def _new_entry_id() -> str:
    return f"loc_{uuid.uuid4().hex[:16]}"


class LocationHistoryLedger:
    """Stores open/closed session records; at most one open entry per vendor."""

    def __init__(self, entries: Iterable[LocationHistoryEntry] = ()) -> None:
        self._entries: list[LocationHistoryEntry] = []
        self.load(entries)

    def load(self, entries: Iterable[LocationHistoryEntry]) -> None:
        self._entries = list(entries)

    def dump(self) -> list[dict]:
        return [entry.to_storage() for entry in self._entries]

    def open_session(self, vendor_id: str) -> Optional[LocationHistoryEntry]:
        for entry in self._entries:
            if entry.vendor_id == vendor_id and entry.is_open:
                return entry
        return None

    def start_session(self, location: TruckLocation, started_at: datetime) -> LocationHistoryEntry:
        stale = self.open_session(location.vendor_id)
        if stale is not None:
            # a vendor that goes live twice without going offline keeps one open session
            logger.warning("Closing dangling session %s for vendor %s", stale.id, location.vendor_id)
            stale.end_time = started_at

        entry = LocationHistoryEntry(
            id=_new_entry_id(),
            vendor_id=location.vendor_id,
            latitude=location.latitude,
            longitude=location.longitude,
            address=location.address,
            start_time=started_at,
        )
        self._entries.append(entry)
        return entry

    def end_session(
        self,
        vendor_id: str,
        ended_at: datetime,
        stats: Optional[SessionStats] = None,
    ) -> Outcome:
        entry = self.open_session(vendor_id)
        if entry is None:
            return Outcome.NOT_FOUND
        entry.end_time = ended_at
        entry.customers_served = stats.customers_served if stats else None
        entry.revenue = stats.revenue if stats else None
        return Outcome.APPLIED

    def add_note(self, entry_id: str, notes: str) -> Outcome:
        for entry in self._entries:
            if entry.id == entry_id:
                entry.notes = notes
                return Outcome.APPLIED
        return Outcome.NOT_FOUND

    def history_for(self, vendor_id: str) -> list[LocationHistoryEntry]:
        """Vendor entries, newest first."""

        entries = [entry for entry in self._entries if entry.vendor_id == vendor_id]
        return sorted(entries, key=lambda entry: entry.start_time, reverse=True)

    def __len__(self) -> int:
        return len(self._entries)
