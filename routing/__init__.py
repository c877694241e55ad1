#Marks routing as a package.
#Re-exports the public API (GraphHopperClient, RouteAssembler, haversine_m,
#the route types and errors) so other modules import from routing without
#knowing internal file names.
#No business logic.

from .assembler import RouteAssembler
from .errors import (
    KomHuntError,
    MalformedGeometry,
    NoPathFound,
    ProviderUnavailable,
    RouteNotFound,
    SegmentsNotFound,
    UnsupportedFormat,
)
from .geo import haversine_m
from .graphhopper_client import GraphHopperClient, PathProvider
from .models import AssembledRoute, Leg, Point
from .options import OptimizeOptions, TravelProfile, default_options

__all__ = [
           "AssembledRoute",
           "GraphHopperClient",
           "KomHuntError",
           "Leg",
           "MalformedGeometry",
           "NoPathFound",
           "OptimizeOptions",
           "PathProvider",
           "Point",
           "ProviderUnavailable",
           "RouteAssembler",
           "RouteNotFound",
           "SegmentsNotFound",
           "TravelProfile",
           "UnsupportedFormat",
           "default_options",
           "haversine_m",
             ]
