"""
Purpose: Typed failures for the whole KOM hunt pipeline.
What it does:
Every error carries a `kind` (stable string the caller can map to a response)
and a human readable message. Nothing here is retried by the core.
"""

from __future__ import annotations


class KomHuntError(Exception):
    """Base class for every failure surfaced to the caller."""

    kind = "KomHuntError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class SegmentsNotFound(KomHuntError):
    """Some requested segment ids do not resolve in the segment store."""

    kind = "SegmentsNotFound"

    def __init__(self, message: str, missing_ids=()):
        super().__init__(message)
        self.missing_ids = list(missing_ids)


class NoPathFound(KomHuntError):
    """The path provider returned zero viable paths between two points."""

    kind = "NoPathFound"


class ProviderUnavailable(KomHuntError):
    """Transport failure, timeout or unusable response from the path provider."""

    kind = "ProviderUnavailable"


class MalformedGeometry(KomHuntError):
    """An encoded polyline could not be decoded."""

    kind = "MalformedGeometry"


class UnsupportedFormat(KomHuntError):
    """Requested export format is not implemented."""

    kind = "UnsupportedFormat"


class RouteNotFound(KomHuntError):
    """Stored route does not exist or belongs to another owner."""

    kind = "RouteNotFound"
