import numpy as np
import pytest

from trajectory_simulation.vector import (
    angle_between_deg,
    closest_point_on_segment,
    distance,
    dot,
    horizontal,
    length,
    normalized,
    rotate_about_y,
    vec3,
)


def test_vec3_creation():
    v = vec3(1, 2, 3)
    assert isinstance(v, np.ndarray)
    np.testing.assert_array_equal(v, np.array([1.0, 2.0, 3.0]))


def test_length_and_normalized():
    v = vec3(3, 4, 0)
    assert length(v) == 5.0
    n = normalized(v)
    np.testing.assert_allclose(n, v / 5.0)
    np.testing.assert_array_equal(normalized(vec3()), vec3())


def test_distance_and_dot():
    assert distance([0, 0, 4], [0, 0, -4]) == pytest.approx(8.0)
    assert dot(vec3(1, 2, 3), vec3(4, 5, 6)) == pytest.approx(32.0)


def test_horizontal_drops_height():
    v = vec3(1, 5, -2)
    np.testing.assert_array_equal(horizontal(v), vec3(1, 0, -2))
    # input untouched
    assert v[1] == 5


def test_rotate_about_y_positive_is_right():
    forward = vec3(0, 0, -1)
    right = rotate_about_y(forward, 90)
    np.testing.assert_allclose(right, vec3(1, 0, 0), atol=1e-12)
    left = rotate_about_y(forward, -90)
    np.testing.assert_allclose(left, vec3(-1, 0, 0), atol=1e-12)
    assert length(rotate_about_y(forward, 17)) == pytest.approx(1.0)


def test_angle_between():
    assert angle_between_deg(vec3(1, 0, 0), vec3(0, 0, 1)) == pytest.approx(90.0)
    assert angle_between_deg(vec3(1, 0, 0), vec3(2, 0, 0)) == pytest.approx(0.0)
    assert angle_between_deg(vec3(), vec3(1, 0, 0)) == 0.0


def test_closest_point_on_segment():
    a, b = vec3(0, 0, 4), vec3(0, 0, -4)
    np.testing.assert_allclose(closest_point_on_segment(a, b, vec3(1, 0, 0)), vec3(0, 0, 0))
    np.testing.assert_allclose(closest_point_on_segment(a, b, vec3(0, 0, 9)), a)
    np.testing.assert_allclose(closest_point_on_segment(a, b, vec3(0, 0, -9)), b)
    np.testing.assert_allclose(closest_point_on_segment(a, a, vec3(3, 0, 0)), a)
