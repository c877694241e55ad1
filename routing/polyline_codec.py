#Purpose: Encoded polyline <-> Point sequences.
#Standard signed-delta, base-32 chunk scheme at 1e-5 degree precision
#(the format Strava segment maps and GraphHopper points_encoded=true use).
#The arithmetic is delegated to the `polyline` package; this module only
#validates input and maps failures to MalformedGeometry.

from __future__ import annotations

from typing import List, Sequence

import polyline

from .errors import MalformedGeometry
from .models import Point

PRECISION = 5

# polyline alphabet: every chunk is a 5-bit value (+0x20 continuation) offset by 63
_MIN_CHAR = 63
_MAX_CHAR = 63 + 0x3F


def decode(encoded: str) -> List[Point]:
    """
    Decode an encoded polyline into points (lat, lon order).

    Raises:
        MalformedGeometry: non-string input, characters outside the polyline
        alphabet, truncated input, or no coordinates at all.
    """
    if not isinstance(encoded, str):
        raise MalformedGeometry(f"encoded polyline must be a string, got {type(encoded).__name__}")
    if not encoded:
        raise MalformedGeometry("encoded polyline is empty")

    for position, char in enumerate(encoded):
        if not _MIN_CHAR <= ord(char) <= _MAX_CHAR:
            raise MalformedGeometry(f"invalid character {char!r} at position {position}")

    # the last chunk of every value has the continuation bit cleared
    if ord(encoded[-1]) - _MIN_CHAR >= 0x20:
        raise MalformedGeometry("truncated polyline: last value is incomplete")

    # one terminal chunk per value, values come in lat/lon pairs
    values = sum(1 for char in encoded if ord(char) - _MIN_CHAR < 0x20)
    if values % 2:
        raise MalformedGeometry("truncated polyline: latitude without longitude")

    try:
        coordinates = polyline.decode(encoded, PRECISION)
    except (IndexError, ValueError) as exc:
        # library-level failure on input that passed the checks above
        raise MalformedGeometry(f"undecodable polyline: {exc}") from exc

    try:
        return [Point(latitude=lat, longitude=lon) for lat, lon in coordinates]
    except ValueError as exc:
        raise MalformedGeometry(f"polyline decodes to an invalid coordinate: {exc}") from exc


def encode(points: Sequence[Point]) -> str:
    """Encode points into a polyline string. Inverse of decode within 1e-5 degrees."""
    return polyline.encode([(p.latitude, p.longitude) for p in points], PRECISION)
