import pytest
import requests

from routing import graphhopper_client
from routing.errors import MalformedGeometry, NoPathFound, ProviderUnavailable
from routing.graphhopper_client import GraphHopperClient
from routing.models import Point
from routing.options import OptimizeOptions, TravelProfile
from routing.polyline_codec import encode

ORIGIN = Point(48.8566, 2.3522, name="Start")
DESTINATION = Point(48.86, 2.35, name="Col")


class FakeResponse:
    def __init__(self, payload=None, status_code=200, body_error=None):
        self.payload = payload
        self.status_code = status_code
        self.body_error = body_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.body_error:
            raise self.body_error
        return self.payload


class FakeSession:
    """Records GET calls and replays a canned response (or raises)."""
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append({"url": url, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def graphhopper_path(points, distance=812.4, time_ms=162_480):
    return {"paths": [{"distance": distance, "time": time_ms, "points": points}]}


def make_client(session):
    return GraphHopperClient(api_key="test-key", base_url="https://gh.example/api/1/", session=session)


def test_request_parameters():
    session = FakeSession(FakeResponse(graphhopper_path({"coordinates": [[2.3522, 48.8566], [2.35, 48.86]]})))
    client = make_client(session)
    options = OptimizeOptions(profile=TravelProfile.MOUNTAIN_BIKE, locale="en", elevation_requested=True)

    client.route(ORIGIN, DESTINATION, options)

    sent = session.requests[0]
    assert sent["url"] == "https://gh.example/api/1/route"
    assert sent["timeout"] == graphhopper_client.DEFAULT_TIMEOUT_S
    params = sent["params"]
    assert [value for key, value in params if key == "point"] == ["48.8566,2.3522", "48.86,2.35"]
    as_dict = dict(params)
    assert as_dict["profile"] == "mtb"
    assert as_dict["locale"] == "en"
    assert as_dict["key"] == "test-key"
    assert as_dict["points_encoded"] == "false"
    assert as_dict["elevation"] == "true"
    assert as_dict["instructions"] == "false"


def test_coordinates_are_reordered_to_lat_lon():
    # with elevation GraphHopper adds a third value per coordinate
    coordinates = [[2.3522, 48.8566, 35.0], [2.351, 48.858, 36.2], [2.35, 48.86, 40.1]]
    client = make_client(FakeSession(FakeResponse(graphhopper_path({"coordinates": coordinates}))))

    leg = client.route(ORIGIN, DESTINATION, OptimizeOptions())

    assert leg.geometry == [Point(48.8566, 2.3522), Point(48.858, 2.351), Point(48.86, 2.35)]
    assert leg.distance_m == pytest.approx(812.4)
    assert leg.duration_s == pytest.approx(162.48)
    assert leg.label is None


def test_encoded_points_are_decoded():
    encoded = encode([ORIGIN, DESTINATION])
    client = make_client(FakeSession(FakeResponse(graphhopper_path(encoded))))

    leg = client.route(ORIGIN, DESTINATION, OptimizeOptions(geometry_encoded=True))

    assert leg.geometry == [Point(48.8566, 2.3522), Point(48.86, 2.35)]


def test_empty_paths_mean_no_path():
    client = make_client(FakeSession(FakeResponse({"paths": []})))

    with pytest.raises(NoPathFound) as excinfo:
        client.route(ORIGIN, DESTINATION, OptimizeOptions())

    assert "Start" in excinfo.value.message
    assert excinfo.value.kind == "NoPathFound"


def test_timeout_means_provider_unavailable():
    client = make_client(FakeSession(error=requests.Timeout("read timed out")))

    with pytest.raises(ProviderUnavailable):
        client.route(ORIGIN, DESTINATION, OptimizeOptions())


def test_connection_error_means_provider_unavailable():
    client = make_client(FakeSession(error=requests.ConnectionError("refused")))

    with pytest.raises(ProviderUnavailable):
        client.route(ORIGIN, DESTINATION, OptimizeOptions())


def test_http_error_means_provider_unavailable():
    client = make_client(FakeSession(FakeResponse({"message": "boom"}, status_code=500)))

    with pytest.raises(ProviderUnavailable):
        client.route(ORIGIN, DESTINATION, OptimizeOptions())


def test_unreadable_body_means_provider_unavailable():
    client = make_client(FakeSession(FakeResponse(body_error=ValueError("no json"))))

    with pytest.raises(ProviderUnavailable):
        client.route(ORIGIN, DESTINATION, OptimizeOptions())


def test_broken_encoded_geometry_is_malformed():
    client = make_client(FakeSession(FakeResponse(graphhopper_path("_p~iF"))))

    with pytest.raises(MalformedGeometry):
        client.route(ORIGIN, DESTINATION, OptimizeOptions(geometry_encoded=True))


def test_elevation_asks_for_plain_coordinates_even_when_encoded():
    # GraphHopper's encoded line carries elevation as a third value when it is on
    coordinates = [[2.3522, 48.8566, 35.0], [2.351, 48.858, 36.2], [2.35, 48.86, 40.1]]
    session = FakeSession(FakeResponse(graphhopper_path({"coordinates": coordinates})))
    client = make_client(session)
    options = OptimizeOptions(geometry_encoded=True, elevation_requested=True)

    leg = client.route(ORIGIN, DESTINATION, options)

    as_dict = dict(session.requests[0]["params"])
    assert as_dict["points_encoded"] == "false"
    assert as_dict["elevation"] == "true"
    assert leg.geometry == [Point(48.8566, 2.3522), Point(48.858, 2.351), Point(48.86, 2.35)]


def test_encoded_points_requested_without_elevation():
    session = FakeSession(FakeResponse(graphhopper_path(encode([ORIGIN, DESTINATION]))))

    make_client(session).route(ORIGIN, DESTINATION, OptimizeOptions(geometry_encoded=True))

    assert dict(session.requests[0]["params"])["points_encoded"] == "true"


@pytest.mark.parametrize("message", [
    "Connection between locations not found",
    "Cannot find point 1: 48.86,2.35",
])
def test_unroutable_400_means_no_path(message):
    client = make_client(FakeSession(FakeResponse({"message": message}, status_code=400)))

    with pytest.raises(NoPathFound) as excinfo:
        client.route(ORIGIN, DESTINATION, OptimizeOptions())

    assert message in excinfo.value.message


@pytest.mark.parametrize("response", [
    FakeResponse({"message": "Point 0 is out of bounds"}, status_code=400),
    FakeResponse({"message": "Connection between locations not found"}, status_code=401),
    FakeResponse(body_error=ValueError("no json"), status_code=400),
    FakeResponse(["not", "an", "object"], status_code=400),
])
def test_other_client_errors_mean_provider_unavailable(response):
    client = make_client(FakeSession(response))

    with pytest.raises(ProviderUnavailable):
        client.route(ORIGIN, DESTINATION, OptimizeOptions())


@pytest.mark.parametrize("payload", [[], None, "paths"])
def test_non_object_body_means_provider_unavailable(payload):
    client = make_client(FakeSession(FakeResponse(payload)))

    with pytest.raises(ProviderUnavailable):
        client.route(ORIGIN, DESTINATION, OptimizeOptions())


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(graphhopper_client, "API_KEY", None)

    with pytest.raises(ValueError):
        GraphHopperClient(session=FakeSession())
