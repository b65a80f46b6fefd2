"""Rolling-ball trajectory integration on the green.

The integrator is a pure function: it takes an immutable shot context and
the stroke inputs and returns every simulated position, already finished.
Animation of those points is left to the presentation layer.
"""

from __future__ import annotations

import configparser
import logging
import math
from dataclasses import dataclass
from typing import List

import numpy as np

from utility.config_reader import CONFIG

from .precision import is_holed, step_holed
from .shot_context import GameMode, ShotContext
from .vector import distance, horizontal, length, normalized, rotate_about_y, vec3

logger = logging.getLogger(__name__)

# direction used when ball and hole coincide
DEFAULT_FORWARD = vec3(0.0, 0.0, -1.0)


@dataclass(frozen=True)
class PhysicsTunables:
    """Empirical constants for putting physics.

    ``initial_speed_factor`` offsets the distance lost to per-step friction
    so that full power reaches the hole with speed to spare.
    """

    frames_per_second: float = 60.0
    max_steps: int = 180
    friction: float = 0.98  # per step at the reference green speed
    reference_green_speed: float = 10.0
    initial_speed_factor: float = 2.0
    slope_speed_coefficient_putt: float = 0.04
    slope_speed_coefficient_swing: float = 0.08
    min_slope_speed_multiplier: float = 0.3
    max_slope_speed_multiplier: float = 2.5
    lateral_drift_coefficient: float = 0.02
    curve_coefficient: float = 0.12
    slope_decay_coefficient: float = 0.005
    rest_speed: float = 0.05  # world units per second
    boundary_safety_factor: float = 1.5

    @property
    def timestep(self) -> float:
        return 1.0 / self.frames_per_second

    @classmethod
    def from_config(cls, config: configparser.ConfigParser = CONFIG) -> "PhysicsTunables":
        defaults = cls()
        values = {}
        for name, default in defaults.__dict__.items():
            if isinstance(default, int) and not isinstance(default, bool):
                values[name] = config.getint("Physics", name, fallback=default)
            else:
                values[name] = config.getfloat("Physics", name, fallback=default)
        return cls(**values)


DEFAULT_TUNABLES = PhysicsTunables.from_config()


def slope_speed_multiplier(
    slope_up_down: float, game_mode: GameMode, tunables: PhysicsTunables = DEFAULT_TUNABLES
) -> float:
    """Speed multiplier for an up/down slope (positive = uphill = slower)."""
    if game_mode is GameMode.SWING:
        k = tunables.slope_speed_coefficient_swing
    else:
        k = tunables.slope_speed_coefficient_putt
    multiplier = 1.0 - slope_up_down * k
    return max(tunables.min_slope_speed_multiplier, min(tunables.max_slope_speed_multiplier, multiplier))


def friction_for_green(green_speed: float, tunables: PhysicsTunables = DEFAULT_TUNABLES) -> float:
    """Per-step velocity retention; faster greens lose less speed."""
    loss = (1.0 - tunables.friction) * tunables.reference_green_speed / green_speed
    return 1.0 - loss


def _clamp_power(power: float) -> float:
    if math.isnan(power):
        return 0.0
    return max(0.0, min(100.0, float(power)))


def _roll_into_cup(previous: np.ndarray, hole: np.ndarray, step_length: float) -> List[np.ndarray]:
    """Equal steps from ``previous`` to the hole center, none longer than ``step_length``."""
    gap = distance(previous, hole)
    steps = max(1, math.ceil(gap / step_length)) if step_length > 0 else 1
    points = [previous + (hole - previous) * (i / steps) for i in range(1, steps)]
    points.append(hole.copy())
    return points


def integrate(
    context: ShotContext,
    power: float,
    aim_angle_degrees: float = 0.0,
    slope_up_down: float = 0.0,
    slope_left_right: float = 0.0,
    roll_modifier: float = 1.0,
    tunables: PhysicsTunables | None = None,
) -> List[np.ndarray]:
    """Simulate a putt and return the ball positions in world units.

    The first point is always the start position. A holed putt rolls on to
    the hole center without speeding up, so the last point is the cup.
    """
    t = tunables or DEFAULT_TUNABLES
    start = np.array(context.ball_world_position, dtype=float)
    hole = np.array(context.hole_world_position, dtype=float)
    trajectory = [start.copy()]

    start_distance = distance(start, hole)
    if is_holed(start_distance, 0.0, context.precision):
        trajectory.append(hole.copy())
        return trajectory

    to_hole = horizontal(hole - start)
    base_direction = normalized(to_hole) if length(to_hole) > 0 else DEFAULT_FORWARD
    direction = rotate_about_y(base_direction, aim_angle_degrees)

    intended = start_distance * _clamp_power(power) / 100.0
    initial_speed = (
        intended
        * t.initial_speed_factor
        * slope_speed_multiplier(slope_up_down, context.game_mode, t)
        * max(0.0, roll_modifier)
    )
    if initial_speed <= 0:
        return trajectory

    velocity = direction * initial_speed
    velocity[0] += slope_left_right * t.lateral_drift_coefficient

    friction = friction_for_green(context.green_speed, t)
    boundary = max(start_distance, context.green_radius_world) * t.boundary_safety_factor
    dt = t.timestep
    position = start
    holed = False

    for _ in range(t.max_steps):
        speed = length(velocity)
        if speed < t.rest_speed:
            break

        previous = position
        position = position + velocity * dt
        if step_holed(previous, position, hole, context.precision):
            trajectory.extend(_roll_into_cup(previous, hole, distance(previous, position)))
            holed = True
            break
        trajectory.append(position.copy())

        to_cup = distance(position, hole)
        if to_cup > boundary:
            logger.debug("Ball left playable area %.2f units from hole", to_cup)
            break

        velocity = velocity * friction
        if slope_left_right != 0:
            velocity[0] += slope_left_right * t.curve_coefficient * dt
        if slope_up_down != 0:
            velocity = velocity + velocity * (-slope_up_down * t.slope_decay_coefficient) * dt

    logger.debug(
        "Putt power=%.0f aim=%.1f: %d points, holed=%s", power, aim_angle_degrees, len(trajectory), holed
    )
    return trajectory
