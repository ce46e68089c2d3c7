from datetime import datetime, timedelta, timezone

import pytest

from vendorlive.models.domain import BoostLevel, Outcome
from vendorlive.services.boosts.manager import VisibilityBoostManager, tier_for

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def test_purchase_sets_window_from_tier_duration():
    manager = VisibilityBoostManager()

    listing = manager.purchase("v1", "premium", NOW)

    assert listing.boost_level is BoostLevel.PREMIUM
    assert listing.start_date == NOW
    assert listing.end_date == NOW + timedelta(hours=72)
    assert listing.impressions == 0
    assert listing.clicks == 0


def test_purchase_replaces_active_listing():
    manager = VisibilityBoostManager()
    manager.purchase("v1", BoostLevel.SPOTLIGHT, NOW)

    manager.purchase("v1", BoostLevel.BASIC, NOW + timedelta(hours=1))

    listings = [item for item in manager.dump() if item["vendorId"] == "v1"]
    assert len(listings) == 1
    assert listings[0]["boostLevel"] == "basic"


def test_purchase_replaces_expired_listing_and_resets_counters():
    manager = VisibilityBoostManager()
    manager.purchase("v1", BoostLevel.BASIC, NOW)
    manager.record_impression("v1")
    later = NOW + timedelta(days=5)
    assert manager.active_boost("v1", later) is None

    manager.purchase("v1", BoostLevel.PREMIUM, later)

    assert len(manager.dump()) == 1
    active = manager.active_boost("v1", later)
    assert active is not None
    assert active.boost_level is BoostLevel.PREMIUM
    assert active.impressions == 0


def test_active_boost_expires_strictly_at_end_date():
    manager = VisibilityBoostManager()
    listing = manager.purchase("v1", BoostLevel.BASIC, NOW)

    assert manager.active_boost("v1", listing.end_date - timedelta(seconds=1)) is listing
    assert manager.active_boost("v1", listing.end_date) is None


def test_featured_vendors_ranked_by_tier():
    manager = VisibilityBoostManager()
    manager.purchase("basic-1", BoostLevel.BASIC, NOW)
    manager.purchase("spot", BoostLevel.SPOTLIGHT, NOW)
    manager.purchase("prem", BoostLevel.PREMIUM, NOW)
    manager.purchase("basic-2", BoostLevel.BASIC, NOW)

    assert manager.featured_vendors(NOW) == ["spot", "prem", "basic-1", "basic-2"]
    # basic boosts last 24 hours
    assert manager.featured_vendors(NOW + timedelta(hours=30)) == ["spot", "prem"]


def test_multiplier_defaults_to_one():
    manager = VisibilityBoostManager()
    manager.purchase("v1", BoostLevel.SPOTLIGHT, NOW)

    assert manager.multiplier("v1", NOW) == 5.0
    assert manager.multiplier("v2", NOW) == 1.0
    assert manager.multiplier("v1", NOW + timedelta(days=8)) == 1.0


def test_counters_increment_only_with_listing():
    manager = VisibilityBoostManager()
    manager.purchase("v1", BoostLevel.BASIC, NOW)

    assert manager.record_impression("v1") is Outcome.APPLIED
    assert manager.record_impression("v1") is Outcome.APPLIED
    assert manager.record_click("v1") is Outcome.APPLIED
    assert manager.record_click("v2") is Outcome.NOT_FOUND
    assert manager.record_impression("v2") is Outcome.NOT_FOUND

    listing = manager.listing_for("v1")
    assert listing.impressions == 2
    assert listing.clicks == 1
    assert manager.listing_for("v2") is None


def test_unknown_tier_is_rejected():
    with pytest.raises(ValueError):
        tier_for("platinum")
