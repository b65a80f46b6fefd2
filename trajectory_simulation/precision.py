"""Distance-dependent precision tiers for hole detection.

Closer putts are judged more strictly: the cup "shrinks" and the ball has to
arrive slower, since short firm putts lip out more often than lag putts.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from utility.config_reader import CONFIG

from .vector import closest_point_on_segment, distance

HOLE_DETECTION_RADIUS = CONFIG.getfloat("Precision", "hole_detection_radius", fallback=0.08)
MAX_HOLE_ENTRY_SPEED = CONFIG.getfloat("Precision", "max_hole_entry_speed", fallback=0.3)
OPTIMAL_HOLE_ENTRY_SPEED = CONFIG.getfloat("Precision", "optimal_hole_entry_speed", fallback=0.15)
HOLE_VISUAL_RADIUS = CONFIG.getfloat("Precision", "hole_visual_radius", fallback=0.12)


class DistanceBand(enum.Enum):
    VERY_CLOSE = "very_close"
    CLOSE = "close"
    MEDIUM = "medium"
    LONG = "long"


# upper bound (feet, inclusive) of each band; LONG is open-ended
BAND_LIMITS_FEET = {
    DistanceBand.VERY_CLOSE: 3.0,
    DistanceBand.CLOSE: 8.0,
    DistanceBand.MEDIUM: 15.0,
}


@dataclass(frozen=True)
class PrecisionSettings:
    band: DistanceBand
    detection_radius: float  # world units
    speed_threshold: float  # world units per step
    precision_multiplier: float


def band_for_distance(distance_feet: float) -> DistanceBand:
    if math.isnan(distance_feet) or distance_feet < 0:
        distance_feet = 0.0
    for band in (DistanceBand.VERY_CLOSE, DistanceBand.CLOSE, DistanceBand.MEDIUM):
        if distance_feet <= BAND_LIMITS_FEET[band]:
            return band
    return DistanceBand.LONG


def settings_for_band(band: DistanceBand) -> PrecisionSettings:
    if band is DistanceBand.VERY_CLOSE:
        radius, speed, multiplier = 0.6, 0.7, 2.0
    elif band is DistanceBand.CLOSE:
        radius, speed, multiplier = 0.8, 0.85, 1.5
    elif band is DistanceBand.MEDIUM:
        radius, speed, multiplier = 1.0, 1.0, 1.0
    elif band is DistanceBand.LONG:
        radius, speed, multiplier = 1.2, 1.2, 0.8
    else:
        raise ValueError(f"Unhandled distance band: {band!r}")
    return PrecisionSettings(
        band=band,
        detection_radius=HOLE_DETECTION_RADIUS * radius,
        speed_threshold=MAX_HOLE_ENTRY_SPEED * speed,
        precision_multiplier=multiplier,
    )


def resolve(remaining_distance_feet: float) -> PrecisionSettings:
    """Precision settings for a putt of ``remaining_distance_feet``.

    Negative or NaN distances degrade to the tap-in band and anything past
    the medium band uses the long band, so every input maps to a tier.
    """
    return settings_for_band(band_for_distance(remaining_distance_feet))


def is_holed(distance_to_hole: float, step_speed: float, precision: PrecisionSettings) -> bool:
    """Shared capture rule for the integrator loop and the result evaluator."""
    return (
        distance_to_hole <= precision.detection_radius
        and step_speed <= precision.speed_threshold
    )


def step_holed(previous, current, hole, precision: PrecisionSettings) -> bool:
    """Capture test for one step of travel.

    Uses the closest approach of the whole step to the cup, so a ball that
    rolls over the cup between two samples is still caught.
    """
    nearest = closest_point_on_segment(previous, current, hole)
    return is_holed(distance(nearest, hole), distance(previous, current), precision)
