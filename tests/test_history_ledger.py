from datetime import datetime, timedelta, timezone

from vendorlive.models.domain import Outcome, SessionState, SessionStats, TruckLocation
from vendorlive.services.history.ledger import LocationHistoryLedger

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _truck(vendor_id: str, lat: float = 25.7617, lng: float = -80.1918) -> TruckLocation:
    return TruckLocation(
        vendor_id=vendor_id,
        latitude=lat,
        longitude=lng,
        address="Downtown",
        timestamp=NOW,
        is_live=True,
    )


def test_start_session_opens_entry():
    ledger = LocationHistoryLedger()

    entry = ledger.start_session(_truck("v1"), NOW)

    assert entry.state is SessionState.OPEN
    assert entry.id.startswith("loc_")
    assert ledger.open_session("v1") is entry
    assert entry.address == "Downtown"


def test_start_session_twice_keeps_one_open_entry():
    ledger = LocationHistoryLedger()
    first = ledger.start_session(_truck("v1"), NOW)
    second = ledger.start_session(_truck("v1"), NOW + timedelta(hours=1))

    open_entries = [entry for entry in ledger.history_for("v1") if entry.is_open]
    assert open_entries == [second]
    assert first.state is SessionState.CLOSED
    assert first.end_time == NOW + timedelta(hours=1)


def test_end_session_closes_only_the_vendor_entry():
    ledger = LocationHistoryLedger()
    ledger.start_session(_truck("v1"), NOW)
    other = ledger.start_session(_truck("v2"), NOW)

    outcome = ledger.end_session("v1", NOW + timedelta(hours=3), SessionStats(customers_served=40, revenue=320.0))

    assert outcome is Outcome.APPLIED
    [closed] = ledger.history_for("v1")
    assert closed.end_time == NOW + timedelta(hours=3)
    assert closed.customers_served == 40
    assert closed.revenue == 320.0
    assert other.is_open
    assert other.revenue is None


def test_end_session_without_open_entry_is_noop():
    ledger = LocationHistoryLedger()

    assert ledger.end_session("v1", NOW) is Outcome.NOT_FOUND
    assert len(ledger) == 0


def test_end_session_without_stats_leaves_fields_empty():
    ledger = LocationHistoryLedger()
    ledger.start_session(_truck("v1"), NOW)

    ledger.end_session("v1", NOW + timedelta(hours=1))

    [entry] = ledger.history_for("v1")
    assert entry.customers_served is None
    assert entry.revenue is None


def test_add_note_to_closed_entry():
    ledger = LocationHistoryLedger()
    entry = ledger.start_session(_truck("v1"), NOW)
    ledger.end_session("v1", NOW + timedelta(hours=1))

    assert ledger.add_note(entry.id, "Busy lunch rush") is Outcome.APPLIED
    assert ledger.add_note("loc_missing", "nope") is Outcome.NOT_FOUND
    assert ledger.history_for("v1")[0].notes == "Busy lunch rush"


def test_history_is_newest_first():
    ledger = LocationHistoryLedger()
    for offset in (0, 2, 1):
        ledger.start_session(_truck("v1"), NOW + timedelta(days=offset))
        ledger.end_session("v1", NOW + timedelta(days=offset, hours=2))

    starts = [entry.start_time for entry in ledger.history_for("v1")]

    assert starts == sorted(starts, reverse=True)
