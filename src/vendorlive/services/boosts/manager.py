"""Paid visibility boosts for vendor listings."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional

from ...models.catalog import BOOST_PRICING, BoostTier
from ...models.domain import BoostLevel, FeaturedListing, Outcome


def tier_for(level: BoostLevel | str) -> BoostTier:
    try:
        return BOOST_PRICING[BoostLevel(level)]
    except ValueError as exc:
        raise ValueError(f"Unknown boost level '{level}'.") from exc


class VisibilityBoostManager:
    """Holds featured listings. One listing per vendor; a purchase always starts a fresh window."""

    def __init__(self, listings: Iterable[FeaturedListing] = ()) -> None:
        self._listings: list[FeaturedListing] = []
        self.load(listings)

    def load(self, listings: Iterable[FeaturedListing]) -> None:
        self._listings = list(listings)

    def dump(self) -> list[dict]:
        return [listing.to_storage() for listing in self._listings]

    def purchase(self, vendor_id: str, level: BoostLevel | str, now: datetime) -> FeaturedListing:
        tier = tier_for(level)
        listing = FeaturedListing(
            vendor_id=vendor_id,
            start_date=now,
            end_date=now + timedelta(hours=tier.duration_hours),
            boost_level=BoostLevel(level),
            impressions=0,
            clicks=0,
        )
        self._listings = [item for item in self._listings if item.vendor_id != vendor_id]
        self._listings.append(listing)
        return listing

    def listing_for(self, vendor_id: str) -> Optional[FeaturedListing]:
        """Vendor listing regardless of expiry."""

        for listing in self._listings:
            if listing.vendor_id == vendor_id:
                return listing
        return None

    def active_boost(self, vendor_id: str, now: datetime) -> Optional[FeaturedListing]:
        for listing in self._listings:
            if listing.vendor_id == vendor_id and listing.is_active(now):
                return listing
        return None

    def featured_vendors(self, now: datetime) -> list[str]:
        active = [listing for listing in self._listings if listing.is_active(now)]
        active.sort(key=lambda listing: BOOST_PRICING[listing.boost_level].rank, reverse=True)
        return [listing.vendor_id for listing in active]

    def multiplier(self, vendor_id: str, now: datetime) -> float:
        boost = self.active_boost(vendor_id, now)
        if boost is None:
            return 1.0
        return BOOST_PRICING[boost.boost_level].multiplier

    def record_impression(self, vendor_id: str) -> Outcome:
        listing = self.listing_for(vendor_id)
        if listing is None:
            return Outcome.NOT_FOUND
        listing.impressions += 1
        return Outcome.APPLIED

    def record_click(self, vendor_id: str) -> Outcome:
        listing = self.listing_for(vendor_id)
        if listing is None:
            return Outcome.NOT_FOUND
        listing.clicks += 1
        return Outcome.APPLIED
