"""
Purpose: Central configuration for one optimization call (single source of truth).
What it does:

Stores the tunable knobs of the KOM route assembly:

PROFILE = bike | foot | mtb (forwarded to the path provider)

LOCALE = "fr"

KOM_EFFORT_SPEED_KPH = 30 (assumed speed on segments with cached geometry)

APPROACH_THRESHOLD_M = 50 (no connector leg below this gap)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional


class TravelProfile(str, Enum):
    """Travel modes accepted by the path provider."""
    BIKE = "bike"
    FOOT = "foot"
    MOUNTAIN_BIKE = "mtb"


@dataclass(frozen=True)
class OptimizeOptions:
    """
    Options for RouteAssembler.assemble and the path provider.

    Notes:
    - elevation_requested is forwarded to the provider only, it never
      affects any cost.
    - geometry_encoded only changes how provider geometry is decoded.
    """

    # --- Provider request ---
    profile: TravelProfile = TravelProfile.BIKE
    locale: str = "fr"
    elevation_requested: bool = False
    geometry_encoded: bool = False

    # --- Route shape ---
    return_to_start: bool = False

    # Assumed average speed on a segment when its duration is estimated
    # from cached geometry instead of asking the provider.
    kom_effort_speed_kph: float = 30.0

    # Gap (meters) at or below which we ride straight into the segment
    # without a connector leg.
    approach_threshold_m: float = 50.0

    @property
    def kom_effort_speed_mps(self) -> float:
        return self.kom_effort_speed_kph * 1000 / 3600

    def validate(self) -> None:
        """
        Basic sanity checks. RouteAssembler calls this once per assembly.
        """
        if not isinstance(self.profile, TravelProfile):
            raise ValueError(f"profile must be a TravelProfile, got {self.profile!r}")

        if not self.locale:
            raise ValueError("locale must not be empty")

        if not math.isfinite(self.kom_effort_speed_kph) or self.kom_effort_speed_kph <= 0:
            raise ValueError("kom_effort_speed_kph must be a finite number > 0")

        if not math.isfinite(self.approach_threshold_m) or self.approach_threshold_m < 0:
            raise ValueError("approach_threshold_m must be a finite number >= 0")

    def with_overrides(self, overrides: Optional[Mapping[str, Any]]) -> OptimizeOptions:
        """
        Copy with the given fields replaced. Unknown keys are rejected so a
        typo in a caller's overrides does not silently fall back to defaults.
        """
        if not overrides:
            return self

        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"unknown routing options: {sorted(unknown)}")

        values = dict(overrides)
        if "profile" in values:
            values["profile"] = TravelProfile(values["profile"])
        return replace(self, **values)


def default_options() -> OptimizeOptions:
    """
    Convenience factory for the default options.
    """
    o = OptimizeOptions()
    o.validate()
    return o
