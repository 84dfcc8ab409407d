import math

import pytest

from app.utils.geo import EARTH_RADIUS_KM, haversine_km


@pytest.mark.parametrize("lat, lon", [
    (0.0, 0.0),
    (-6.2087634, 106.845599),
    (51.5074, -0.1278),
    (89.9999, 179.9999),
    (-90.0, -180.0),
])
def test_same_point_is_zero(lat, lon):
    assert haversine_km(lat, lon, lat, lon) == 0.0


def test_is_symmetric():
    jakarta = (-6.2087634, 106.845599)
    bandung = (-6.917464, 107.619123)
    assert haversine_km(*jakarta, *bandung) == haversine_km(*bandung, *jakarta)


def test_one_degree_of_longitude_on_the_equator():
    assert haversine_km(0, 0, 0, 1) == pytest.approx(EARTH_RADIUS_KM * math.pi / 180, rel=1e-9)


def test_antipodal_points():
    assert haversine_km(0, 0, 0, 180) == pytest.approx(EARTH_RADIUS_KM * math.pi, rel=1e-9)


def test_jakarta_to_bandung():
    assert haversine_km(-6.2087634, 106.845599, -6.917464, 107.619123) == pytest.approx(116.0, abs=2.0)


def test_nearly_identical_points_stay_finite():
    # The cosine sum is within rounding error of 1 here
    distance = haversine_km(-6.2087634, 106.845599, -6.208764, 106.8456)
    assert not math.isnan(distance)
    assert 0 <= distance < 0.001


def test_hundred_metres_north():
    distance = haversine_km(-6.2087634, 106.845599, -6.2078634, 106.845599)
    assert distance == pytest.approx(0.1, abs=0.001)
