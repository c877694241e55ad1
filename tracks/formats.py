"""
Purpose: Single entry point for exporting a route as a downloadable file.
What it does:
Maps a format name to a serializer, MIME type and file extension.
gpx and json are supported. tcx is known but not implemented and fails
loudly, like any unknown format.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from routing.errors import UnsupportedFormat
from routing.models import AssembledRoute

from .data_projection import to_data_projection
from .gpx import to_track_document


class TrackFormat(str, Enum):
    GPX = "gpx"
    JSON = "json"
    TCX = "tcx"


@dataclass(frozen=True)
class ExportedFile:
    content: str
    mime_type: str
    filename: str


def safe_filename(name: str, extension: str) -> str:
    """Every character outside [a-zA-Z0-9] becomes '_'."""
    return f"{re.sub(r'[^a-zA-Z0-9]', '_', name)}.{extension}"


def export_track(route: AssembledRoute, name: str, fmt: str) -> ExportedFile:
    """
    Render the route in the requested format. Pure: reads the route, never changes it.

    Raises:
        UnsupportedFormat: tcx (not implemented yet) or any unknown format
    """
    try:
        track_format = fmt if isinstance(fmt, TrackFormat) else TrackFormat(str(fmt).lower())
    except ValueError:
        raise UnsupportedFormat(f"Unsupported format: {fmt!r}. Supported: gpx, json") from None

    if track_format is TrackFormat.GPX:
        return ExportedFile(
            content=to_track_document(route, name),
            mime_type="application/gpx+xml",
            filename=safe_filename(name, "gpx"),
        )

    if track_format is TrackFormat.JSON:
        return ExportedFile(
            content=to_data_projection(route),
            mime_type="application/json",
            filename=safe_filename(name, "json"),
        )

    # TODO: TCX export needs per-trackpoint timestamps, which legs do not carry yet
    raise UnsupportedFormat("TCX format not implemented yet")
