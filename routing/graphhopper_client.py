#Purpose: The GraphHopper "adapter/client" (our PathProvider).
#Sole responsibility: talk to GraphHopper /route via HTTP and return a Leg.
#Encapsulates GraphHopper-specific details:
#coordinate formatting (point=lat,lon, repeated)
#geometry decoding (lon,lat coordinate pairs or encoded polyline)
#time in milliseconds -> seconds
#timeouts and error mapping (NoPathFound / ProviderUnavailable), no retries
#It should not contain ordering or assembly rules.

from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, List, Optional, Protocol, Tuple

import requests
from dotenv import load_dotenv

from . import polyline_codec
from .errors import MalformedGeometry, NoPathFound, ProviderUnavailable
from .models import Leg, Point
from .options import OptimizeOptions

# Read GraphHopper settings from environment
# Example in .env:
# GRAPHHOPPER_API_KEY=...
# GRAPHHOPPER_BASE_URL=https://graphhopper.com/api/1
load_dotenv()
API_KEY = os.getenv("GRAPHHOPPER_API_KEY")
BASE_URL = os.getenv("GRAPHHOPPER_BASE_URL", "https://graphhopper.com/api/1")

DEFAULT_TIMEOUT_S = 20

# GraphHopper answers an unroutable pair with HTTP 400 and one of these messages
NO_PATH_MESSAGE = re.compile(r"connection between locations not found|cannot find point", re.IGNORECASE)

logger = logging.getLogger(__name__)


class PathProvider(Protocol):
    """
    Point-to-point path query. Anything with this method can feed the
    RouteAssembler (the GraphHopper client below, or a fake in tests).
    """

    def route(self, origin: Point, destination: Point, options: OptimizeOptions) -> Leg:
        ...


class GraphHopperClient:
    """
    GraphHopper Adapter / Client

    Sole responsibility:
    - Talk to GraphHopper via HTTP
    - Convert internal Point -> 'lat,lon' query params
    - Return normalized Leg objects (meters, seconds, Point geometry)

    """
    def __init__(self,
                 api_key: Optional[str] = None,
                 base_url: Optional[str] = None,
                 timeout: float = DEFAULT_TIMEOUT_S,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key or API_KEY
        self.base_url = (base_url or BASE_URL).rstrip("/")
        self.timeout = timeout #seconds to wait for GraphHopper before giving up
        self.session = session or requests.Session()

        if not self.api_key:
            raise ValueError("GraphHopper API key not set. Please set GRAPHHOPPER_API_KEY in the .env file.")

    #----------------
    # Internal helpers for query building and response parsing
    #----------------
    @staticmethod
    def format_point(point: Point) -> str:
        """Point -> GraphHopper 'lat,lon'"""
        return f"{point.latitude},{point.longitude}"

    def build_params(self, origin: Point, destination: Point,
                     options: OptimizeOptions) -> List[Tuple[str, str]]:
        # list of tuples: GraphHopper wants the `point` key repeated
        return [
            ("point", self.format_point(origin)),
            ("point", self.format_point(destination)),
            ("profile", options.profile.value),
            ("locale", options.locale),
            ("key", self.api_key),
            ("points_encoded", str(self.points_encoded(options)).lower()),
            ("elevation", str(options.elevation_requested).lower()),
            ("instructions", "false"),
        ]

    @staticmethod
    def points_encoded(options: OptimizeOptions) -> bool:
        # with elevation on, the encoded line carries a third value per point
        # that a 2-D polyline decoder would misread; ask for plain coordinates
        return options.geometry_encoded and not options.elevation_requested

    @staticmethod
    def no_path_message(response: Any) -> Optional[str]:
        """GraphHopper's "no path" message for a 400 reply, else None."""
        if response.status_code != 400:
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        message = body.get("message") if isinstance(body, dict) else None
        if isinstance(message, str) and NO_PATH_MESSAGE.search(message):
            return message
        return None

    @staticmethod
    def decode_points(points: Any, geometry_encoded: bool) -> List[Point]:
        """
        GraphHopper returns either
            {"coordinates": [[lon, lat], [lon, lat, ele], ...]}   (points_encoded=false)
        or an encoded polyline string                              (points_encoded=true)
        """
        if geometry_encoded:
            encoded = points if isinstance(points, str) else (points or {}).get("points")
            return polyline_codec.decode(encoded)

        try:
            coordinates = points["coordinates"]
            geometry = [Point(latitude=c[1], longitude=c[0]) for c in coordinates]
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise MalformedGeometry(f"unreadable GraphHopper coordinates: {exc}") from exc

        if not geometry:
            raise MalformedGeometry("GraphHopper returned an empty geometry")
        return geometry

    #----------------
    # Public API
    #----------------
    def route(self, origin: Point, destination: Point, options: OptimizeOptions) -> Leg:
        """
        calls the GraphHopper /route endpoint between two points and
        returns a Leg (no label, the assembler names legs)

        Raises:
            NoPathFound: GraphHopper answered with zero paths, or with a 400
                saying the points cannot be connected
            ProviderUnavailable: timeout, connection error, other HTTP error, bad JSON
            MalformedGeometry: path geometry could not be decoded
        """
        url = f"{self.base_url}/route"
        params = self.build_params(origin, destination, options)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            no_path = self.no_path_message(response)
            if no_path:
                raise NoPathFound(
                    f"No route found between {origin.name or 'A'} and {destination.name or 'B'}: {no_path}"
                )
            response.raise_for_status()
            data: Dict[str, Any] = response.json()
        except requests.Timeout as exc:
            logger.error("GraphHopper timed out after %ss: %s", self.timeout, exc)
            raise ProviderUnavailable(f"GraphHopper timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            # HTTPError, ConnectionError, ...
            logger.error("GraphHopper API error: %s", exc)
            raise ProviderUnavailable(f"GraphHopper request failed: {exc}") from exc
        except ValueError as exc:
            logger.error("GraphHopper returned a non-JSON body: %s", exc)
            raise ProviderUnavailable("GraphHopper returned an unreadable response") from exc

        if not isinstance(data, dict):
            logger.error("GraphHopper returned a non-object body: %r", data)
            raise ProviderUnavailable("GraphHopper returned an unreadable response")

        paths = data.get("paths") or []
        if not paths:
            raise NoPathFound(
                f"No route found between {origin.name or 'A'} and {destination.name or 'B'}"
            )

        path = paths[0] #take the first path (GraphHopper may return alternatives)

        try:
            distance_m = float(path["distance"])
            duration_s = float(path["time"]) / 1000
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("GraphHopper path without distance/time: %s", path)
            raise ProviderUnavailable("GraphHopper path is missing distance or time") from exc

        geometry = self.decode_points(path.get("points"), self.points_encoded(options))

        logger.debug("GraphHopper leg %s -> %s: %.0fm, %.0fs, %d points",
                     self.format_point(origin), self.format_point(destination),
                     distance_m, duration_s, len(geometry))

        #Normalize output to internal format
        return Leg(distance_m=distance_m, duration_s=duration_s, geometry=geometry)
