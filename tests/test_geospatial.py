import pytest

from vendorlive.services.geospatial import coordinate_bucket, haversine_km, haversine_m, within_radius


def test_haversine_zero_distance():
    assert haversine_m(0.0, 0.0, 0.0, 0.0) == 0.0
    assert haversine_m(25.7617, -80.1918, 25.7617, -80.1918) == 0.0


def test_haversine_is_symmetric():
    miami = (25.7617, -80.1918)
    tampa = (27.9506, -82.4572)

    forward = haversine_m(*miami, *tampa)
    backward = haversine_m(*tampa, *miami)

    assert forward == pytest.approx(backward)


def test_one_degree_of_latitude():
    distance = haversine_m(10.0, 20.0, 11.0, 20.0)

    assert distance == pytest.approx(111_200, rel=0.005)
    assert haversine_km(10.0, 20.0, 11.0, 20.0) == pytest.approx(distance / 1000)


def test_within_radius_includes_boundary():
    offset = 0.01
    distance = haversine_m(offset, 0.0, 0.0, 0.0)

    assert within_radius(offset, 0.0, 0.0, 0.0, distance)
    assert not within_radius(offset, 0.0, 0.0, 0.0, distance - 1)


def test_coordinate_bucket_rounds_to_three_decimals():
    assert coordinate_bucket(25.76171, -80.19184) == "25.762,-80.192"
    assert coordinate_bucket(25.76171, -80.19184) == coordinate_bucket(25.76209, -80.19151)
    assert coordinate_bucket(25.7617, -80.1918) != coordinate_bucket(25.7637, -80.1918)
