import pytest

from routing.errors import NoPathFound, ProviderUnavailable
from routing.geo import haversine_m
from routing.models import Leg, Point
from segments.models import Segment


class FakePathProvider:
    """
    Deterministic stand-in for GraphHopper.
    distance = 1.3 x straight line, duration at 18 km/h (5 m/s),
    geometry = origin, midpoint, destination.
    """
    def __init__(self, detour_factor=1.3, speed_mps=5.0):
        self.detour_factor = detour_factor
        self.speed_mps = speed_mps
        self.calls = []
        self.no_path_to = set()  # destination (lat, lon) pairs that have no path
        self.unavailable_to = set()  # destination (lat, lon) pairs where the provider is down

    def route(self, origin, destination, options):
        self.calls.append((origin, destination, options))

        if destination.latlon in self.no_path_to:
            raise NoPathFound(f"No route found between {origin.name or 'A'} and {destination.name or 'B'}")
        if destination.latlon in self.unavailable_to:
            raise ProviderUnavailable("GraphHopper timed out after 20s")

        distance = haversine_m(origin, destination) * self.detour_factor
        midpoint = Point(
            (origin.latitude + destination.latitude) / 2,
            (origin.longitude + destination.longitude) / 2,
        )
        return Leg(
            distance_m=distance,
            duration_s=distance / self.speed_mps,
            geometry=[origin, midpoint, destination],
        )


@pytest.fixture
def fake_provider():
    return FakePathProvider()


@pytest.fixture
def paris_start():
    return Point(48.8566, 2.3522, name="Start")


@pytest.fixture
def make_segment():
    def _make(segment_id, start, end, distance_m=1000.0, cached_geometry=None, name=None):
        name = name or f"Segment {segment_id}"
        return Segment(
            id=segment_id,
            name=name,
            start_point=Point(*start, name=f"{name} - Start"),
            end_point=Point(*end, name=f"{name} - Finish"),
            distance_m=distance_m,
            cached_geometry=cached_geometry,
        )
    return _make
