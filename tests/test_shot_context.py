import dataclasses

import numpy as np
import pytest

from trajectory_simulation.precision import DistanceBand
from trajectory_simulation.shot_context import (
    GameMode,
    build_shot_context,
    diagnose_positions,
    validate_shot_context,
)
from trajectory_simulation.vector import vec3


def test_build_shot_context():
    ctx = build_shot_context(100.0, 100.0 + 8 / 3)
    assert ctx.remaining_yards == pytest.approx(8 / 3)
    assert ctx.remaining_feet == pytest.approx(8.0)
    assert ctx.world_units_per_foot == 1.0
    np.testing.assert_allclose(ctx.ball_world_position, [0.0, 0.0, 4.0])
    np.testing.assert_allclose(ctx.hole_world_position, [0.0, 0.0, -4.0])
    assert ctx.precision.band is DistanceBand.CLOSE
    assert ctx.game_mode is GameMode.PUTT
    assert ctx.green_radius_world == pytest.approx(20.0)


def test_context_is_immutable():
    ctx = build_shot_context(0.0, 5.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.green_speed = 12.0
    with pytest.raises(ValueError):
        ctx.hole_world_position[2] = 0.0


def test_bad_inputs_are_clamped():
    ctx = build_shot_context(-5.0, 3.0, green_speed=20.0)
    assert ctx.ball_position_yards == 0.0
    assert ctx.remaining_yards == pytest.approx(3.0)
    assert ctx.green_speed == 14.0
    assert build_shot_context(0.0, 3.0, green_speed=2.0).green_speed == 6.0


def test_game_mode_from_string():
    assert build_shot_context(0.0, 3.0, "swing").game_mode is GameMode.SWING
    assert build_shot_context(0.0, 3.0, "chip").game_mode is GameMode.PUTT


def test_validate_clean_context():
    ctx = build_shot_context(0.0, 4.0)
    validation = validate_shot_context(ctx)
    assert validation.valid
    assert not validation.repaired
    assert validation.context is ctx


def test_validate_repairs_desynced_hole():
    ctx = build_shot_context(0.0, 8 / 3)
    broken = dataclasses.replace(ctx, hole_world_position=vec3(0.0, 0.0, -10.0))
    validation = validate_shot_context(broken)
    assert not validation.valid
    assert validation.repaired
    assert any("mismatch" in issue for issue in validation.issues)
    np.testing.assert_allclose(validation.context.hole_world_position, [0.0, 0.0, -4.0])
    assert validate_shot_context(validation.context).valid


def test_long_putt_flagged():
    validation = validate_shot_context(build_shot_context(0.0, 60.0))
    assert not validation.valid
    assert "Putting distance too long for realistic putting" in validation.issues

    swing = validate_shot_context(build_shot_context(0.0, 60.0, GameMode.SWING))
    assert swing.valid


def test_diagnose_positions_in_sync():
    diag = diagnose_positions(0.0, 8 / 3)
    assert diag.valid
    assert diag.remaining_feet == pytest.approx(8.0)
    assert diag.visual_distance == pytest.approx(8.0)
    assert diag.sync_error_feet == pytest.approx(0.0, abs=1e-9)


def test_diagnose_positions_reports_problems():
    diag = diagnose_positions(0.0, 8 / 3, hole_world_position=vec3(0.0, 0.0, -2.0))
    assert not diag.valid
    assert diag.sync_error_feet == pytest.approx(2.0)

    behind = diagnose_positions(0.0, 8 / 3, hole_world_position=vec3(0.0, 0.0, 6.0))
    assert "Hole positioned behind ball" in behind.issues
