from datetime import datetime, timedelta, timezone

from vendorlive.models.domain import Outcome, Position
from vendorlive.services.live.registry import LiveStatusRegistry

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_mark_live_upserts_single_record():
    registry = LiveStatusRegistry()

    registry.mark_live("v1", Position(25.76, -80.19), "Downtown", NOW)
    registry.mark_live("v1", Position(25.77, -80.18), None, NOW + timedelta(minutes=5))

    trucks = registry.live_trucks()
    assert len(trucks) == 1
    assert trucks[0].latitude == 25.77
    assert trucks[0].address is None
    assert registry.is_live("v1")


def test_mark_offline_keeps_last_known_location():
    registry = LiveStatusRegistry()
    registry.mark_live("v1", Position(25.76, -80.19), "Downtown", NOW)

    assert registry.mark_offline("v1") is Outcome.APPLIED

    assert registry.live_trucks() == []
    assert not registry.is_live("v1")
    truck = registry.get("v1")
    assert truck is not None
    assert truck.is_live is False
    assert truck.address == "Downtown"


def test_mark_offline_unknown_vendor_is_noop():
    registry = LiveStatusRegistry()

    assert registry.mark_offline("ghost") is Outcome.NOT_FOUND
    assert not registry.is_live("ghost")


def test_move_only_applies_to_live_vendors():
    registry = LiveStatusRegistry()
    registry.mark_live("v1", Position(25.76, -80.19), None, NOW)
    registry.mark_offline("v1")

    assert registry.move("v1", Position(1.0, 1.0), NOW) is Outcome.NOT_FOUND
    assert registry.move("ghost", Position(1.0, 1.0), NOW) is Outcome.NOT_FOUND
    assert registry.get("v1").latitude == 25.76

    registry.mark_live("v1", Position(25.76, -80.19), None, NOW)
    later = NOW + timedelta(minutes=10)
    assert registry.move("v1", Position(25.80, -80.20), later) is Outcome.APPLIED
    assert registry.get("v1").latitude == 25.80
    assert registry.get("v1").timestamp == later


def test_listeners_receive_live_trucks_and_can_unsubscribe():
    registry = LiveStatusRegistry()
    received = []
    unsubscribe = registry.subscribe(lambda trucks: received.append([t.vendor_id for t in trucks]))

    registry.mark_live("v1", Position(25.76, -80.19), None, NOW)
    registry.mark_live("v2", Position(27.95, -82.45), None, NOW)
    registry.mark_offline("v1")
    unsubscribe()
    registry.mark_offline("v2")

    assert received == [["v1"], ["v1", "v2"], ["v2"]]


def test_failing_listener_does_not_block_others():
    registry = LiveStatusRegistry()
    received = []

    def broken(trucks):
        raise RuntimeError("boom")

    registry.subscribe(broken)
    registry.subscribe(lambda trucks: received.append(len(trucks)))

    registry.mark_live("v1", Position(25.76, -80.19), None, NOW)

    assert received == [1]
    assert registry.is_live("v1")


def test_dump_and_load_round_trip_uses_camel_case():
    registry = LiveStatusRegistry()
    registry.mark_live("v1", Position(25.76, -80.19), "Downtown", NOW)

    payload = registry.dump()

    assert payload[0]["vendorId"] == "v1"
    assert payload[0]["isLive"] is True
    assert "vendor_id" not in payload[0]
