"""
Track export package.

Public API:
- to_track_document (GPX)
- to_data_projection / route_to_dict (JSON)
- export_track, ExportedFile, TrackFormat
"""

from .data_projection import route_to_dict, to_data_projection
from .formats import ExportedFile, TrackFormat, export_track, safe_filename
from .gpx import to_track_document

__all__ = [
    "ExportedFile",
    "TrackFormat",
    "export_track",
    "route_to_dict",
    "safe_filename",
    "to_data_projection",
    "to_track_document",
]
