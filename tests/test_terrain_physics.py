import json
from pathlib import Path

import pytest

from terrain.hole import hole_from_dict
from terrain.terrain_physics import (
    calculate_dogleg_strategy,
    calculate_terrain_effects,
    carry_requirement,
    check_hazard,
    elevation_at,
    roll_modifier,
    slope_effect,
)

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(scope="module")
def augusta():
    with open(DATA_DIR / "augusta_hole1.json") as f:
        return hole_from_dict(json.load(f))


def test_hole_from_dict(augusta):
    assert augusta.number == 1
    assert augusta.par == 4
    assert augusta.green_speed == 13.0
    assert len(augusta.hazards) == 3
    assert augusta.bends[0].direction == "right"
    assert augusta.pin_positions[0].notes == "Safe pin position away from bunkers"


def test_hole_from_dict_rejects_malformed():
    with pytest.raises(ValueError):
        hole_from_dict({"id": "x", "number": 1})


def test_elevation_interpolation(augusta):
    assert elevation_at(augusta, (0, 0, 0)) == 0.0
    assert elevation_at(augusta, (0, 150, 0)) == pytest.approx(8.5)
    # forward sign is ignored
    assert elevation_at(augusta, (0, -150, 0)) == pytest.approx(8.5)
    assert elevation_at(augusta, (0, 445, 0)) == pytest.approx(25.0)
    assert elevation_at(augusta, (0, 600, 0)) == 0.0


def test_tee_to_green_effects(augusta):
    effects = calculate_terrain_effects(augusta, (0, 0, 0), (0, 445, 25), 445)
    assert effects.elevation_adjustment == pytest.approx(-50.0)
    assert effects.carry_required > 300
    assert effects.hazard_penalty is None


def test_carry_clears_first_bunker(augusta):
    # front bunker sits at (25, -310) and is 15 yards wide
    carry = carry_requirement(augusta, (0, 0, 0))
    assert carry >= 311.0 + 7.5


@pytest.mark.parametrize(
    "target, kind, drop",
    [
        ((25, -310, 18), "stroke", (25.0, -320.0, 18.0)),
        ((-40, -200, 10), "distance", (-40.0, -220.0, 10.0)),
    ],
)
def test_hazard_penalty(augusta, target, kind, drop):
    penalty = check_hazard(augusta, target)
    assert penalty.kind == kind
    assert penalty.drop_position == drop


def test_no_hazard_in_fairway(augusta):
    assert check_hazard(augusta, (0, -250, 15)) is None


def test_roll_modifier_compounds(augusta):
    assert roll_modifier(augusta, (0, -300, 18)) == pytest.approx(0.8)
    assert roll_modifier(augusta, (20, -340, 18)) == pytest.approx(0.8 * 0.7)
    assert roll_modifier(augusta, (0, -50, 0)) == 1.0


def test_green_slope_effect(augusta):
    effect = slope_effect(augusta, (0, -10, 0))
    # uphill + right regions plus the nearest contour at (0, -15)
    assert effect[0] == pytest.approx(0.06)
    assert effect[1] == pytest.approx(0.04 - 4.0)


def test_dogleg_inside_bend(augusta):
    strategy = calculate_dogleg_strategy(augusta, (0, 0, 0), 300)
    assert strategy.aim_point[0] == pytest.approx(0.698, abs=1e-3)
    assert strategy.carry_required == 317
    assert strategy.risk == "low"
    assert strategy.recommendation.startswith("Conservative line left of bunker")


def test_dogleg_aggressive_line(augusta):
    strategy = calculate_dogleg_strategy(augusta, (0, 0, 0), 330)
    assert strategy.recommendation.startswith("Aggressive line over bunker")


def test_dogleg_short_of_bend(augusta):
    strategy = calculate_dogleg_strategy(augusta, (0, 0, 0), 240)
    assert strategy.risk == "low"
    assert strategy.aim_point == (0.0, 240.0, 0.0)
    assert strategy.carry_required == 0.0


@pytest.mark.parametrize(
    "section, field, value",
    [
        ("hazards", "type", "lava"),
        ("hazards", "penalty", "disqualify"),
        ("terrain", "type", "cliff"),
    ],
)
def test_hole_from_dict_rejects_unknown_kinds(section, field, value):
    with open(DATA_DIR / "augusta_hole1.json") as f:
        data = json.load(f)
    data[section][0][field] = value
    with pytest.raises(ValueError, match=value):
        hole_from_dict(data)
