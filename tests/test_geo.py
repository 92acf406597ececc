"""Tests for great-circle distance."""
import pytest

from busbuddy.services.geo import distance_km, to_radians

MYSURU = (12.2958, 76.6394)
BENGALURU = (12.9716, 77.5946)

PAIRS = [
    (MYSURU, BENGALURU),
    ((40.7580, -73.9855), (40.7128, -74.0060)),
    ((0.0, 0.0), (0.0, 179.5)),
    ((-33.8688, 151.2093), (51.5074, -0.1278)),
]


class TestDistance:
    @pytest.mark.parametrize("a,b", PAIRS)
    def test_symmetric(self, a, b):
        assert distance_km(a, b) == pytest.approx(distance_km(b, a), rel=1e-12)

    @pytest.mark.parametrize("point", [MYSURU, BENGALURU, (0.0, 0.0), (-45.0, 170.0)])
    def test_identity_is_zero(self, point):
        assert distance_km(point, point) == 0

    def test_mysuru_to_bengaluru(self):
        assert abs(distance_km(MYSURU, BENGALURU) - 129.3) <= 2

    def test_one_degree_of_latitude(self):
        # 6371 km * pi / 180
        assert distance_km((10.0, 20.0), (11.0, 20.0)) == pytest.approx(111.195, abs=0.01)

    def test_to_radians(self):
        assert to_radians(180) == pytest.approx(3.141592653589793)
        assert to_radians(0) == 0
