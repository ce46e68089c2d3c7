import math
from datetime import datetime, timezone

from vendorlive.models.catalog import POPULAR_ZONES, find_popular_zone
from vendorlive.models.domain import AlertEvent, GeoFenceZone, Outcome
from vendorlive.services.geofence.evaluator import GeoFenceEvaluator
from vendorlive.services.geospatial import EARTH_RADIUS_M

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
METERS_PER_DEGREE_LAT = EARTH_RADIUS_M * math.pi / 180


def _zone(zone_id: str = "z1", radius: float = 2000, notify_on_exit: bool = False) -> GeoFenceZone:
    return GeoFenceZone(
        id=zone_id,
        name=f"Zone {zone_id}",
        latitude=25.7617,
        longitude=-80.1918,
        radius_meters=radius,
        notify_on_enter=True,
        notify_on_exit=notify_on_exit,
    )


def _north_of_center(meters: float) -> tuple[float, float]:
    return 25.7617 + meters / METERS_PER_DEGREE_LAT, -80.1918


def test_subscribe_is_idempotent():
    evaluator = GeoFenceEvaluator()

    assert evaluator.subscribe(_zone()) is Outcome.APPLIED
    assert evaluator.subscribe(_zone()) is Outcome.UNCHANGED
    assert [zone.id for zone in evaluator.zones()] == ["z1"]


def test_unsubscribe_twice_matches_once():
    evaluator = GeoFenceEvaluator([_zone("z1"), _zone("z2")])

    assert evaluator.unsubscribe("z1") is Outcome.APPLIED
    after_once = evaluator.dump()
    assert evaluator.unsubscribe("z1") is Outcome.NOT_FOUND

    assert evaluator.dump() == after_once
    assert [zone.id for zone in evaluator.zones()] == ["z2"]


def test_enter_alert_inside_radius_only():
    evaluator = GeoFenceEvaluator([_zone(radius=2000)])

    inside = evaluator.evaluate("v1", "Taco Truck", *_north_of_center(1500), NOW)
    outside = evaluator.evaluate("v1", "Taco Truck", *_north_of_center(2500), NOW)

    assert len(inside) == 1
    alert = inside[0]
    assert alert.event_type is AlertEvent.ENTER
    assert alert.zone_id == "z1"
    assert alert.zone_name == "Zone z1"
    assert alert.vendor_name == "Taco Truck"
    assert alert.timestamp == NOW
    assert outside == []


def test_zone_without_enter_notifications_is_silent():
    zone = _zone()
    zone.notify_on_enter = False
    evaluator = GeoFenceEvaluator([zone])

    assert evaluator.evaluate("v1", "Taco Truck", *_north_of_center(10), NOW) == []


def test_without_debounce_alert_repeats_and_exit_is_ignored():
    evaluator = GeoFenceEvaluator([_zone(notify_on_exit=True)])

    first = evaluator.evaluate("v1", "Taco Truck", *_north_of_center(100), NOW)
    second = evaluator.evaluate("v1", "Taco Truck", *_north_of_center(200), NOW)
    left = evaluator.evaluate("v1", "Taco Truck", *_north_of_center(5000), NOW)

    assert len(first) == 1
    assert len(second) == 1
    assert first[0].id != second[0].id
    assert left == []


def test_debounce_fires_enter_once_and_exit_on_leaving():
    evaluator = GeoFenceEvaluator([_zone(notify_on_exit=True)], debounce=True)

    first = evaluator.evaluate("v1", "Taco Truck", *_north_of_center(100), NOW)
    second = evaluator.evaluate("v1", "Taco Truck", *_north_of_center(200), NOW)
    left = evaluator.evaluate("v1", "Taco Truck", *_north_of_center(5000), NOW)
    back = evaluator.evaluate("v1", "Taco Truck", *_north_of_center(100), NOW)

    assert [alert.event_type for alert in first] == [AlertEvent.ENTER]
    assert second == []
    assert [alert.event_type for alert in left] == [AlertEvent.EXIT]
    assert [alert.event_type for alert in back] == [AlertEvent.ENTER]


def test_debounce_tracks_vendors_separately():
    evaluator = GeoFenceEvaluator([_zone()], debounce=True)

    evaluator.evaluate("v1", "One", *_north_of_center(100), NOW)
    other = evaluator.evaluate("v2", "Two", *_north_of_center(100), NOW)

    assert len(other) == 1
    assert other[0].vendor_id == "v2"


def test_membership_is_only_kept_for_vendors_inside_a_zone():
    plain = GeoFenceEvaluator([_zone()])
    for index in range(50):
        plain.evaluate(f"v{index}", "Truck", *_north_of_center(100), NOW)

    debounced = GeoFenceEvaluator([_zone("z1"), _zone("z2")], debounce=True)
    debounced.evaluate("v1", "One", *_north_of_center(100), NOW)
    debounced.evaluate("v2", "Two", *_north_of_center(5000), NOW)
    debounced.evaluate("v3", "Three", *_north_of_center(100), NOW)
    debounced.evaluate("v3", "Three", *_north_of_center(5000), NOW)

    assert plain._inside == {}
    assert debounced._inside == {"v1": {"z1", "z2"}}

    debounced.unsubscribe("z1")
    debounced.unsubscribe("z2")
    assert debounced._inside == {}


def test_popular_zone_catalog():
    assert len(POPULAR_ZONES) == 7
    wynwood = find_popular_zone("zone_miami_wynwood")
    assert wynwood is not None
    assert wynwood.radius_meters == 1500
    assert find_popular_zone("zone_nowhere") is None
