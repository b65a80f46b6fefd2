"""Per-shot context assembly and logical/world position consistency checks."""

from __future__ import annotations

import dataclasses
import enum
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from utility.config_reader import CONFIG

from . import coordinate_system as cs
from .precision import HOLE_VISUAL_RADIUS, PrecisionSettings, resolve
from .vector import distance

logger = logging.getLogger(__name__)

MIN_GREEN_SPEED = 6.0
MAX_GREEN_SPEED = 14.0
DEFAULT_GREEN_SPEED = 10.0

DESYNC_EPSILON = CONFIG.getfloat("Validation", "desync_epsilon", fallback=0.1)
SYNC_TOLERANCE_FEET = CONFIG.getfloat("Validation", "sync_tolerance_feet", fallback=0.5)
MAX_PUTTING_YARDS = CONFIG.getfloat("Validation", "max_putting_yards", fallback=50.0)
MIN_GREEN_RADIUS_FEET = CONFIG.getfloat("Physics", "min_green_radius_feet", fallback=20.0)


class GameMode(enum.Enum):
    PUTT = "putt"
    SWING = "swing"


def _frozen(v) -> np.ndarray:
    arr = np.array(v, dtype=float)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class ShotContext:
    ball_position_yards: float
    hole_position_yards: float
    remaining_yards: float
    ball_world_position: np.ndarray
    hole_world_position: np.ndarray
    game_mode: GameMode
    green_speed: float
    precision: PrecisionSettings
    world_units_per_foot: float
    hole_radius: float = HOLE_VISUAL_RADIUS
    green_radius_world: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "ball_world_position", _frozen(self.ball_world_position))
        object.__setattr__(self, "hole_world_position", _frozen(self.hole_world_position))

    @property
    def remaining_feet(self) -> float:
        return self.remaining_yards * cs.FEET_PER_YARD


@dataclass
class ContextValidation:
    valid: bool
    issues: List[str] = field(default_factory=list)
    fixes: List[str] = field(default_factory=list)
    context: Optional[ShotContext] = None
    repaired: bool = False


@dataclass
class PositionDiagnostic:
    remaining_feet: float
    visual_distance: float
    sync_error_feet: float
    valid: bool
    issues: List[str] = field(default_factory=list)


def _clamp_yards(value: float, name: str) -> float:
    if math.isnan(value) or value < 0:
        logger.warning("%s=%r is not a valid course position, using 0", name, value)
        return 0.0
    return float(value)


def build_shot_context(
    ball_position_yards: float,
    hole_position_yards: float,
    game_mode: GameMode | str = GameMode.PUTT,
    green_speed: float = DEFAULT_GREEN_SPEED,
) -> ShotContext:
    """Snapshot everything one shot needs from course-level inputs."""
    ball_yards = _clamp_yards(ball_position_yards, "ball_position_yards")
    hole_yards = _clamp_yards(hole_position_yards, "hole_position_yards")
    remaining_yards = abs(hole_yards - ball_yards)

    clamped_speed = min(MAX_GREEN_SPEED, max(MIN_GREEN_SPEED, float(green_speed)))
    if clamped_speed != green_speed:
        logger.warning("Green speed %r outside stimp range, using %.1f", green_speed, clamped_speed)

    try:
        mode = GameMode(game_mode)
    except ValueError:
        logger.warning("Unknown game mode %r, using putt", game_mode)
        mode = GameMode.PUTT

    scale = cs.world_units_per_foot(remaining_yards * cs.FEET_PER_YARD)
    return ShotContext(
        ball_position_yards=ball_yards,
        hole_position_yards=hole_yards,
        remaining_yards=remaining_yards,
        ball_world_position=cs.ball_world_position(),
        hole_world_position=cs.hole_world_position(remaining_yards),
        game_mode=mode,
        green_speed=clamped_speed,
        precision=resolve(remaining_yards * cs.FEET_PER_YARD),
        world_units_per_foot=scale,
        green_radius_world=MIN_GREEN_RADIUS_FEET * scale,
    )


def validate_shot_context(context: ShotContext) -> ContextValidation:
    """Check a context for desync and implausible values.

    A hole position that disagrees with ``remaining_yards`` is never
    propagated: the returned validation carries a repaired context with the
    hole placed from the shared coordinate system.
    """
    issues: List[str] = []
    fixes: List[str] = []
    repaired = context

    expected_hole = cs.hole_world_position(context.remaining_yards)
    actual_z = float(context.hole_world_position[2])
    if abs(expected_hole[2] - actual_z) > DESYNC_EPSILON:
        issues.append(
            f"Hole position mismatch: expected Z={expected_hole[2]:.2f}, actual Z={actual_z:.2f}"
        )
        fixes.append("Synchronize hole world position with remaining distance")
        logger.warning(
            "Hole world position out of sync (expected Z=%.3f, got %.3f), recomputing",
            expected_hole[2],
            actual_z,
        )
        scale = cs.world_units_per_foot(context.remaining_feet)
        repaired = dataclasses.replace(
            context,
            hole_world_position=expected_hole,
            world_units_per_foot=scale,
            green_radius_world=MIN_GREEN_RADIUS_FEET * scale,
        )

    if context.remaining_yards < 0 or context.ball_position_yards < 0:
        issues.append("Negative remaining distance")
        fixes.append("Recalculate ball and hole positions")

    if context.game_mode is GameMode.PUTT and context.remaining_yards > MAX_PUTTING_YARDS:
        issues.append("Putting distance too long for realistic putting")
        fixes.append("Switch to swing mode or adjust hole position")

    if context.precision.detection_radius > context.hole_radius:
        issues.append("Detection radius larger than visual hole radius")
        fixes.append("Adjust detection radius to be smaller than visual radius")

    return ContextValidation(
        valid=not issues,
        issues=issues,
        fixes=fixes,
        context=repaired,
        repaired=repaired is not context,
    )


def diagnose_positions(
    ball_position_yards: float,
    hole_position_yards: float,
    ball_world_position=None,
    hole_world_position=None,
) -> PositionDiagnostic:
    """Compare logical distance with the rendered ball/hole positions.

    Diagnostic only; it logs and reports but never changes shot outcome.
    """
    remaining_yards = abs(hole_position_yards - ball_position_yards)
    remaining_feet = remaining_yards * cs.FEET_PER_YARD
    ball_world = cs.ball_world_position() if ball_world_position is None else ball_world_position
    hole_world = (
        cs.hole_world_position(remaining_yards) if hole_world_position is None else hole_world_position
    )

    visual_distance = distance(ball_world, hole_world)
    visual_feet = cs.world_to_feet(visual_distance, remaining_yards)
    sync_error = abs(visual_feet - remaining_feet)

    issues = []
    if sync_error >= SYNC_TOLERANCE_FEET:
        issues.append(
            f"Visual distance {visual_feet:.2f}ft differs from logical {remaining_feet:.2f}ft"
        )
    if hole_world[2] > ball_world[2]:
        issues.append("Hole positioned behind ball")

    for issue in issues:
        logger.warning("Position diagnostic: %s", issue)
    logger.debug(
        "Ball %.2fyd, hole %.2fyd, remaining %.2fft, sync error %.3fft",
        ball_position_yards,
        hole_position_yards,
        remaining_feet,
        sync_error,
    )
    return PositionDiagnostic(
        remaining_feet=remaining_feet,
        visual_distance=visual_distance,
        sync_error_feet=sync_error,
        valid=not issues,
        issues=issues,
    )
