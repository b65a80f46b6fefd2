import math

import pytest

from trajectory_simulation import precision
from trajectory_simulation.precision import DistanceBand, band_for_distance, is_holed, resolve, step_holed
from trajectory_simulation.vector import vec3


@pytest.mark.parametrize(
    "feet, band",
    [
        (0.0, DistanceBand.VERY_CLOSE),
        (3.0, DistanceBand.VERY_CLOSE),
        (3.01, DistanceBand.CLOSE),
        (8.0, DistanceBand.CLOSE),
        (12.0, DistanceBand.MEDIUM),
        (15.0, DistanceBand.MEDIUM),
        (15.5, DistanceBand.LONG),
        (90.0, DistanceBand.LONG),
    ],
)
def test_band_for_distance(feet, band):
    assert band_for_distance(feet) is band


def test_invalid_distances_use_tap_in_band():
    assert band_for_distance(-4.0) is DistanceBand.VERY_CLOSE
    assert band_for_distance(math.nan) is DistanceBand.VERY_CLOSE


def test_settings_values():
    close = resolve(8.0)
    assert close.detection_radius == pytest.approx(precision.HOLE_DETECTION_RADIUS * 0.8)
    assert close.speed_threshold == pytest.approx(precision.MAX_HOLE_ENTRY_SPEED * 0.85)
    assert close.precision_multiplier == 1.5


def test_tolerances_grow_with_distance():
    settings = [resolve(d) for d in (1.0, 5.0, 12.0, 40.0)]
    for shorter, longer in zip(settings, settings[1:]):
        assert shorter.detection_radius <= longer.detection_radius
        assert shorter.speed_threshold <= longer.speed_threshold
        assert shorter.precision_multiplier >= longer.precision_multiplier


def test_detection_radius_never_exceeds_visual_hole():
    for band in DistanceBand:
        assert precision.settings_for_band(band).detection_radius <= precision.HOLE_VISUAL_RADIUS


def test_settings_for_band_rejects_unknown():
    with pytest.raises(ValueError):
        precision.settings_for_band("medium")


def test_is_holed_needs_position_and_speed():
    p = resolve(12.0)
    assert is_holed(p.detection_radius, p.speed_threshold, p)
    assert not is_holed(p.detection_radius + 0.01, 0.0, p)
    assert not is_holed(0.0, p.speed_threshold + 0.01, p)


def test_step_holed_checks_whole_step():
    p = resolve(25.0)
    hole = vec3(0.0, 0.0, -16.0)
    # samples either side of the cup, both outside the detection radius
    before = hole + vec3(0.0, 0.0, 0.15)
    after = hole - vec3(0.0, 0.0, 0.15)
    assert not is_holed(0.15, 0.3, p)
    assert step_holed(before, after, hole, p)
    # same step length passing wide of the cup
    offset = vec3(p.detection_radius + 0.01, 0.0, 0.0)
    assert not step_holed(before + offset, after + offset, hole, p)
    # too fast to drop
    assert not step_holed(hole + vec3(0, 0, 0.2), hole - vec3(0, 0, 0.2), hole, p)
