"""Conversions between course distances and world (render) space.

Course positions are yards from the tee. World positions are numpy vectors
``(lateral, height, forward)`` where the ball rests at ``BALL_WORLD_Z`` and
travel toward the hole is negative Z. Every component that places something
in world space asks :func:`world_units_per_foot` for the scale, so the hole,
the ball displacement, hazards and re-projected flight paths of one shot all
share it.
"""

from __future__ import annotations

from typing import Iterable, List, NamedTuple

import numpy as np

from .vector import vec3

FEET_PER_YARD = 3.0
BALL_WORLD_Z = 4.0
BALL_WORLD_Y = 0.0

# (max hole distance in feet, world units per foot), ascending
SCALE_BANDS = (
    (10.0, 1.0),
    (25.0, 0.8),
    (50.0, 0.6),
    (100.0, 0.4),
)
FAR_SCALE = 0.25


class VisibilityRange(NamedTuple):
    behind_ball: float  # yards
    ahead_of_ball: float  # yards


DEFAULT_VISIBILITY = VisibilityRange(75.0, 200.0)
HAZARD_VISIBILITY = VisibilityRange(50.0, 150.0)


def world_units_per_foot(hole_distance_feet: float) -> float:
    """Scale factor for a hole ``hole_distance_feet`` away from the ball.

    Shorter holes get a larger scale so the cup stays visible.
    """
    d = abs(hole_distance_feet)
    for max_feet, scale in SCALE_BANDS:
        if d <= max_feet:
            return scale
    return FAR_SCALE


def _scale_for_yards(hole_distance_yards: float) -> float:
    return world_units_per_foot(hole_distance_yards * FEET_PER_YARD)


def feet_to_world(feet: float, hole_distance_yards: float) -> float:
    return feet * _scale_for_yards(hole_distance_yards)


def world_to_feet(world: float, hole_distance_yards: float) -> float:
    return world / _scale_for_yards(hole_distance_yards)


def yards_to_world(yards: float, hole_distance_yards: float) -> float:
    return feet_to_world(yards * FEET_PER_YARD, hole_distance_yards)


def world_to_yards(world: float, hole_distance_yards: float) -> float:
    return world_to_feet(world, hole_distance_yards) / FEET_PER_YARD


def ball_world_position() -> np.ndarray:
    return vec3(0.0, BALL_WORLD_Y, BALL_WORLD_Z)


def course_to_world(
    yards_from_tee: float,
    ball_position_yards: float,
    hole_distance_yards: float,
    lateral_yards: float = 0.0,
    elevation_feet: float = 0.0,
) -> np.ndarray:
    """World position of a course feature, relative to the ball reference."""
    relative_yards = yards_from_tee - ball_position_yards
    return vec3(
        yards_to_world(lateral_yards, hole_distance_yards),
        BALL_WORLD_Y + feet_to_world(elevation_feet, hole_distance_yards),
        BALL_WORLD_Z - yards_to_world(relative_yards, hole_distance_yards),
    )


def world_to_course(
    world_position, ball_position_yards: float, hole_distance_yards: float
) -> tuple[float, float, float]:
    """Inverse of :func:`course_to_world`.

    Returns ``(yards_from_tee, lateral_yards, elevation_feet)``.
    """
    x, y, z = world_position
    relative_yards = world_to_yards(BALL_WORLD_Z - z, hole_distance_yards)
    return (
        ball_position_yards + relative_yards,
        world_to_yards(x, hole_distance_yards),
        world_to_feet(y - BALL_WORLD_Y, hole_distance_yards),
    )


def hole_world_position(remaining_yards: float) -> np.ndarray:
    """Hole center for a ball ``remaining_yards`` short of it."""
    return course_to_world(remaining_yards, 0.0, remaining_yards)


def is_feature_visible(
    feature_yards: float,
    ball_position_yards: float,
    visibility: VisibilityRange = DEFAULT_VISIBILITY,
) -> bool:
    relative_yards = feature_yards - ball_position_yards
    if relative_yards < 0:
        return abs(relative_yards) <= visibility.behind_ball
    return relative_yards <= visibility.ahead_of_ball


def reproject_flight_path(
    points_feet: Iterable, remaining_yards: float
) -> List[np.ndarray]:
    """Map an external flight trajectory into this shot's world space.

    Each point is ``(lateral_ft, height_ft, forward_ft)`` measured from the
    ball, which is the format the swing flight model hands over when a shot
    finishes near the green.
    """
    path = []
    for lateral_ft, height_ft, forward_ft in points_feet:
        path.append(
            vec3(
                feet_to_world(lateral_ft, remaining_yards),
                BALL_WORLD_Y + feet_to_world(height_ft, remaining_yards),
                BALL_WORLD_Z - feet_to_world(forward_ft, remaining_yards),
            )
        )
    return path


def display_distance(world_distance: float, hole_distance_yards: float) -> dict:
    """Convert a world distance to what the UI shows (feet under 10ft, else yards)."""
    feet = world_to_feet(world_distance, hole_distance_yards)
    yards = feet / FEET_PER_YARD
    if feet < 10:
        return {"feet": feet, "yards": yards, "value": round(feet, 1), "unit": "ft"}
    return {"feet": feet, "yards": yards, "value": round(yards, 1), "unit": "yd"}
