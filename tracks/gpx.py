"""
Purpose: Render an AssembledRoute as a GPX 1.1 track document.
What it does:
- metadata: route name + one line summary (km to one decimal, whole minutes)
- one <wpt> per stop except the start (name, type KOM)
- one <trk> with a single <trkseg> holding every point of full_geometry
Coordinates are written with 6 decimals.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from routing.models import AssembledRoute, Point

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
GPX_VERSION = "1.1"
CREATOR = "KOM Hunt Optimizer"
WAYPOINT_TYPE = "KOM"
TRACK_TYPE = "cycling"


def _coord(value: float) -> str:
    return f"{value:.6f}"


def _located(parent: ET.Element, tag: str, point: Point) -> ET.Element:
    return ET.SubElement(parent, tag, {"lat": _coord(point.latitude), "lon": _coord(point.longitude)})


def route_summary(route: AssembledRoute) -> str:
    km = route.total_distance_m / 1000
    # half-up rounding, durations are never negative
    minutes = int(route.total_duration_s / 60 + 0.5)
    return f"Optimized route for KOM hunting - Total: {km:.1f}km, {minutes}min"


def to_track_document(route: AssembledRoute, name: str = "KOM Hunt") -> str:
    gpx = ET.Element("gpx", {"version": GPX_VERSION, "creator": CREATOR, "xmlns": GPX_NAMESPACE})

    metadata = ET.SubElement(gpx, "metadata")
    ET.SubElement(metadata, "name").text = name
    ET.SubElement(metadata, "desc").text = route_summary(route)

    # waypoints[0] is the start point, not a stop worth marking
    for index, point in enumerate(route.waypoints[1:], start=1):
        wpt = _located(gpx, "wpt", point)
        ET.SubElement(wpt, "name").text = point.name or f"WP {index}"
        ET.SubElement(wpt, "type").text = WAYPOINT_TYPE

    trk = ET.SubElement(gpx, "trk")
    ET.SubElement(trk, "name").text = name
    ET.SubElement(trk, "type").text = TRACK_TYPE
    trkseg = ET.SubElement(trk, "trkseg")
    for point in route.full_geometry:
        _located(trkseg, "trkpt", point)

    ET.indent(gpx, space="  ")
    body = ET.tostring(gpx, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
