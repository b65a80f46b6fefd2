"""Terrain effects on a shot, keyed by absolute course position.

All positions here are course coordinates ``(x, y, z)``: lateral yards,
yards down the hole, elevation in feet. Only ``|y|`` is used for the
elevation lookup so holes authored with negative forward values still work.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from trajectory_simulation.vector import vec3

from .hole import FairwayBend, Hazard, Hole, SlopeRegion, TerrainFeature

logger = logging.getLogger(__name__)

# yards of effective distance per foot of elevation change
ELEVATION_YARDS_PER_FOOT = -2.0

STROKE_DROP_YARDS = 10.0
DISTANCE_DROP_YARDS = 20.0
CARRY_HAZARDS = ("bunker", "water")

ROLL_FACTORS = {
    "hill": 0.8,
    "ridge": 0.7,
    "valley": 1.2,
    "depression": 1.3,
}

# Augusta No.1: carry needed to clear the right fairway bunker
DOGLEG_RIGHT_CARRY_YARDS = 317.0
DOGLEG_AIM_LATERAL_YARDS = 10.0


@dataclass(frozen=True)
class HazardPenalty:
    kind: str  # stroke | distance | replay
    description: str
    drop_position: tuple


@dataclass(frozen=True)
class TerrainEffects:
    elevation_adjustment: float
    slope_effect: tuple
    hazard_penalty: Optional[HazardPenalty]
    carry_required: float
    roll_modifier: float


@dataclass(frozen=True)
class DoglegStrategy:
    aim_point: tuple
    carry_required: float
    risk: str  # low | medium | high
    recommendation: str


def _distance_2d(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def elevation_at(hole: Hole, position: Sequence[float]) -> float:
    """Linearly interpolated elevation (feet) at a course position."""
    distance_from_tee = abs(position[1])
    profile = hole.elevation_profile
    for current, nxt in zip(profile, profile[1:]):
        if current.distance <= distance_from_tee <= nxt.distance:
            span = nxt.distance - current.distance
            if span == 0:
                return current.elevation
            ratio = (distance_from_tee - current.distance) / span
            return current.elevation + (nxt.elevation - current.elevation) * ratio
    return 0.0


def elevation_adjustment(hole: Hole, ball: Sequence[float], target: Sequence[float]) -> float:
    """Yards added to (positive) or taken from (negative) the shot by elevation.

    Uphill plays longer, so a rise in elevation gives a negative adjustment.
    """
    change = elevation_at(hole, target) - elevation_at(hole, ball)
    return change * ELEVATION_YARDS_PER_FOOT


def _in_slope_region(position: Sequence[float], slope: SlopeRegion) -> bool:
    (sx, sy), (ex, ey) = slope.start_point, slope.end_point
    return min(sx, ex) <= position[0] <= max(sx, ex) and min(sy, ey) <= position[1] <= max(sy, ey)


def _slope_vector(slope: SlopeRegion) -> np.ndarray:
    rad = math.radians(slope.direction)
    magnitude = slope.magnitude / 100.0
    return vec3(math.cos(rad) * magnitude, math.sin(rad) * magnitude, 0.0)


def contour_slope_at(hole: Hole, position: Sequence[float]) -> np.ndarray:
    """Micro-slope from the nearest green contour sample."""
    if not hole.contours:
        return vec3()
    nearest = min(hole.contours, key=lambda c: math.hypot(position[0] - c.x, position[1] - c.y))
    return vec3(nearest.slope_x, nearest.slope_y, 0.0)


def slope_effect(hole: Hole, position: Sequence[float]) -> np.ndarray:
    total = vec3()
    for slope in hole.slopes:
        if _in_slope_region(position, slope):
            total += _slope_vector(slope)
    total += contour_slope_at(hole, position)
    return total


def _hazard_contains(hazard: Hazard, position: Sequence[float]) -> bool:
    hx, hy, _ = hazard.position
    return (
        hx - hazard.width / 2 <= position[0] <= hx + hazard.width / 2
        and hy - hazard.length / 2 <= position[1] <= hy + hazard.length / 2
    )


def penalty_drop_position(hazard: Hazard) -> tuple:
    x, y, z = hazard.position
    if hazard.penalty == "stroke":
        return (x, y - STROKE_DROP_YARDS, z)
    if hazard.penalty == "distance":
        return (x, y - DISTANCE_DROP_YARDS, z)
    return hazard.position


def check_hazard(hole: Hole, target: Sequence[float]) -> Optional[HazardPenalty]:
    """Penalty for the first hazard whose footprint contains ``target``."""
    for hazard in hole.hazards:
        if _hazard_contains(hazard, target):
            return HazardPenalty(
                kind=hazard.penalty,
                description=f"Ball landed in {hazard.kind}",
                drop_position=penalty_drop_position(hazard),
            )
    return None


def carry_requirement(hole: Hole, ball: Sequence[float]) -> float:
    """Minimum carry (yards) to clear every bunker and water hazard."""
    max_carry = 0.0
    for hazard in hole.hazards:
        if hazard.kind in CARRY_HAZARDS:
            carry = _distance_2d(ball, hazard.position) + hazard.width / 2
            max_carry = max(max_carry, carry)
    return max_carry


def _near_feature(position: Sequence[float], feature: TerrainFeature) -> bool:
    influence = max(feature.width, feature.length) / 2
    return _distance_2d(position, feature.position) <= influence


def roll_modifier(hole: Hole, position: Sequence[float]) -> float:
    """Multiplicative roll factor; overlapping features compound."""
    modifier = 1.0
    for feature in hole.terrain:
        if _near_feature(position, feature):
            modifier *= ROLL_FACTORS.get(feature.kind, 1.0)
    return modifier


def calculate_terrain_effects(
    hole: Hole,
    ball_position: Sequence[float],
    target_position: Sequence[float],
    shot_distance: float,
) -> TerrainEffects:
    effects = TerrainEffects(
        elevation_adjustment=elevation_adjustment(hole, ball_position, target_position),
        slope_effect=tuple(float(v) for v in slope_effect(hole, target_position)),
        hazard_penalty=check_hazard(hole, target_position),
        carry_required=carry_requirement(hole, ball_position),
        roll_modifier=roll_modifier(hole, target_position),
    )
    logger.debug("Terrain effects for %.0fyd shot on hole %s: %s", shot_distance, hole.id, effects)
    return effects


def _dogleg_sign(bend: FairwayBend) -> float:
    return 1.0 if bend.direction == "right" else -1.0


def _dogleg_risk(bend: FairwayBend, target_distance: float) -> str:
    if target_distance < bend.start:
        return "low"
    if bend.severity == "sharp":
        return "high"
    if bend.severity == "moderate":
        return "medium"
    return "low"


def _dogleg_recommendation(bend: FairwayBend, target_distance: float) -> str:
    if bend.direction == "right":
        if target_distance >= DOGLEG_RIGHT_CARRY_YARDS:
            return "Aggressive line over bunker - high risk, high reward"
        return "Conservative line left of bunker - safer approach"
    return "Shape shot around the dogleg"


def calculate_dogleg_strategy(
    hole: Hole, ball_position: Sequence[float], target_distance: float
) -> DoglegStrategy:
    for bend in hole.bends:
        if bend.start <= target_distance <= bend.end:
            span = bend.end - bend.start
            progress = (target_distance - bend.start) / span if span else 1.0
            aim_degrees = bend.angle * progress * _dogleg_sign(bend)
            lateral = math.sin(math.radians(aim_degrees)) * DOGLEG_AIM_LATERAL_YARDS
            x, y, z = ball_position
            return DoglegStrategy(
                aim_point=(x + lateral, y, z),
                carry_required=DOGLEG_RIGHT_CARRY_YARDS if bend.direction == "right" else 0.0,
                risk=_dogleg_risk(bend, target_distance),
                recommendation=_dogleg_recommendation(bend, target_distance),
            )
    return DoglegStrategy(
        aim_point=(0.0, float(target_distance), 0.0),
        carry_required=0.0,
        risk="low",
        recommendation="Straight shot to target",
    )
