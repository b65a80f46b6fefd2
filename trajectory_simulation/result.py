"""Scoring of a finished putt and pre-shot putting advice."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import List, Sequence

from utility.config_reader import CONFIG

from . import coordinate_system as cs
from .precision import OPTIMAL_HOLE_ENTRY_SPEED, is_holed, step_holed
from .shot_context import ShotContext
from .vector import angle_between_deg, distance

logger = logging.getLogger(__name__)

FRAME_TIME = CONFIG.getfloat("Animation", "frame_time", fallback=0.05)
DISTANCE_WEIGHT = 0.7
SPEED_WEIGHT = 0.3


@dataclass(frozen=True)
class ShotResult:
    success: bool
    accuracy: float  # 0-100
    precision_score: float  # 0-100
    final_position: tuple
    final_position_yards: float
    roll_distance_feet: float
    distance_to_hole: float  # world units
    time_to_hole: float  # seconds
    max_height: float
    speed_at_hole: float  # world units per step
    entry_angle_degrees: float

    def as_dict(self) -> dict:
        return asdict(self)


def precision_score(distance_to_hole: float, final_speed: float, context: ShotContext) -> float:
    if is_holed(distance_to_hole, final_speed, context.precision):
        return 100.0
    radius = context.precision.detection_radius
    # closer bands lose distance credit faster
    falloff = (distance_to_hole / (radius * 2)) * 100.0 * context.precision.precision_multiplier
    distance_score = max(0.0, 100.0 - falloff)
    speed_difference = abs(final_speed - OPTIMAL_HOLE_ENTRY_SPEED)
    speed_score = max(0.0, 100.0 - (speed_difference / OPTIMAL_HOLE_ENTRY_SPEED) * 50.0)
    return distance_score * DISTANCE_WEIGHT + speed_score * SPEED_WEIGHT


def entry_angle(trajectory: Sequence, hole_position) -> float:
    """Angle in degrees between the last movement and the line to the hole."""
    if len(trajectory) < 2:
        return 0.0
    before, last = trajectory[-2], trajectory[-1]
    return angle_between_deg(last - before, hole_position - before)


def evaluate(trajectory: Sequence, context: ShotContext) -> ShotResult:
    """Score a finished trajectory against the context it was simulated in.

    Parameters
    ----------
    trajectory : sequence of np.ndarray
        Points returned by :func:`trajectory_simulation.putting.integrate`.
        Must not be empty.
    context : ShotContext
        The same context used for integration.

    Returns
    -------
    ShotResult
    """
    if len(trajectory) == 0:
        raise ValueError("Cannot evaluate an empty trajectory")

    hole = context.hole_world_position
    final = trajectory[-1]
    distance_to_hole = distance(final, hole)
    if len(trajectory) > 1:
        final_speed = distance(final, trajectory[-2])
        success = step_holed(trajectory[-2], final, hole, context.precision)
    else:
        final_speed = 0.0
        success = is_holed(distance_to_hole, final_speed, context.precision)

    radius = context.precision.detection_radius
    accuracy = max(0.0, 100.0 - (distance_to_hole / (radius * 3)) * 100.0)

    roll_world = distance(trajectory[0], final)
    roll_feet = cs.world_to_feet(roll_world, context.remaining_yards)
    final_yards, _, _ = cs.world_to_course(final, context.ball_position_yards, context.remaining_yards)

    result = ShotResult(
        success=success,
        accuracy=accuracy,
        precision_score=100.0 if success else precision_score(distance_to_hole, final_speed, context),
        final_position=tuple(float(v) for v in final),
        final_position_yards=final_yards,
        roll_distance_feet=roll_feet,
        distance_to_hole=distance_to_hole,
        time_to_hole=len(trajectory) * FRAME_TIME,
        max_height=max(float(p[1]) for p in trajectory),
        speed_at_hole=final_speed,
        entry_angle_degrees=entry_angle(trajectory, hole),
    )
    logger.debug(
        "Shot result: success=%s precision=%.1f distance=%.3f speed=%.3f",
        result.success,
        result.precision_score,
        result.distance_to_hole,
        result.speed_at_hole,
    )
    return result


def putting_difficulty(context: ShotContext) -> dict:
    factors: List[str] = []
    score = 0
    distance_feet = context.remaining_feet
    if distance_feet > 25:
        factors.append("Long distance")
        score += 30
    elif distance_feet > 15:
        factors.append("Medium distance")
        score += 15
    elif distance_feet < 3:
        # short putts are judged more strictly
        factors.append("Very short - precision critical")
        score += 25

    if context.green_speed > 12:
        factors.append("Fast greens")
        score += 20
    elif context.green_speed < 8:
        factors.append("Slow greens")
        score += 10

    if score < 15:
        difficulty = "very_easy"
    elif score < 30:
        difficulty = "easy"
    elif score < 50:
        difficulty = "medium"
    elif score < 70:
        difficulty = "hard"
    else:
        difficulty = "very_hard"
    return {"difficulty": difficulty, "factors": factors, "score": score}


def recommend_putt(context: ShotContext) -> dict:
    """Suggested power and aim with a confidence level and reasons."""
    reasoning: List[str] = []
    distance_feet = context.remaining_feet

    if distance_feet < 5:
        power = 25 + distance_feet * 5
        reasoning.append("Short putt - use gentle power")
    elif distance_feet < 15:
        power = 40 + distance_feet * 2
        reasoning.append("Medium putt - moderate power")
    else:
        power = 60 + min(30, distance_feet)
        reasoning.append("Long putt - firm power needed")

    if context.green_speed > 11:
        power *= 0.85
        reasoning.append("Fast greens - reduce power")
    elif context.green_speed < 9:
        power *= 1.15
        reasoning.append("Slow greens - increase power")

    power = max(15, min(85, power))
    confidence = max(20, 100 - putting_difficulty(context)["score"])
    return {
        "power": round(power),
        "aim": 0.0,
        "confidence": confidence,
        "reasoning": reasoning,
    }
