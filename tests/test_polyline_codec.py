import random

import pytest

from routing.errors import MalformedGeometry
from routing.models import Point
from routing.polyline_codec import decode, encode

# reference example from the polyline algorithm documentation
REFERENCE_ENCODED = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
REFERENCE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


def test_decode_reference_polyline():
    points = decode(REFERENCE_ENCODED)
    assert len(points) == len(REFERENCE_POINTS)
    for point, (lat, lon) in zip(points, REFERENCE_POINTS):
        assert point.latitude == pytest.approx(lat)
        assert point.longitude == pytest.approx(lon)


def test_encode_reference_points():
    assert encode([Point(lat, lon) for lat, lon in REFERENCE_POINTS]) == REFERENCE_ENCODED


def test_round_trip_within_precision():
    rng = random.Random(7)
    points = [Point(rng.uniform(-89, 89), rng.uniform(-179, 179)) for _ in range(50)]

    decoded = decode(encode(points))

    assert len(decoded) == len(points)
    for original, restored in zip(points, decoded):
        assert abs(original.latitude - restored.latitude) <= 1e-5
        assert abs(original.longitude - restored.longitude) <= 1e-5


def test_single_point_round_trip():
    decoded = decode(encode([Point(48.86, 2.35)]))
    assert decoded == [Point(48.86, 2.35)]


@pytest.mark.parametrize("encoded", [
    "",                               # nothing to decode
    "_p~iF",                          # latitude without longitude
    "_p~iF~ps|U_",                    # last value cut mid-chunk
    "_p~iF ~ps|U",                    # space is outside the alphabet
    "_p~iF~ps|Ué",                    # non ascii
])
def test_malformed_input_is_rejected(encoded):
    with pytest.raises(MalformedGeometry):
        decode(encoded)


def test_non_string_input_is_rejected():
    with pytest.raises(MalformedGeometry):
        decode(None)
