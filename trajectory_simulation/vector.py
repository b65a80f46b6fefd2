import numpy as np


def vec3(x=0.0, y=0.0, z=0.0):
    return np.array([x, y, z], dtype=float)


def length(v):
    return float(np.linalg.norm(v))


def distance(a, b):
    return length(np.asarray(a, dtype=float) - np.asarray(b, dtype=float))


def normalized(v):
    l = length(v)
    if l == 0:
        return vec3()
    return v / l


def horizontal(v):
    """Drop the height component, keeping lateral (x) and forward (z)."""
    out = np.array(v, dtype=float)
    out[1] = 0.0
    return out


def dot(a, b):
    return float(np.dot(a, b))


def rotate_about_y(v, angle_deg):
    """Rotate ``v`` about the vertical axis.

    Positive angles turn a vector pointing down -Z toward +X, which is how
    aim angles are read (positive = right of the hole).
    """
    rad = np.radians(angle_deg)
    c, s = np.cos(rad), np.sin(rad)
    x, y, z = v
    return vec3(x * c - z * s, y, x * s + z * c)


def angle_between_deg(a, b):
    """Angle between two vectors in degrees, 0 when either has zero length."""
    if length(a) == 0 or length(b) == 0:
        return 0.0
    dot_val = np.clip(dot(normalized(a), normalized(b)), -1.0, 1.0)
    return float(np.degrees(np.arccos(dot_val)))


def closest_point_on_segment(a, b, p):
    """Point on segment ``a``-``b`` nearest to ``p``."""
    a = np.asarray(a, dtype=float)
    seg = np.asarray(b, dtype=float) - a
    seg_len_sq = dot(seg, seg)
    if seg_len_sq == 0:
        return a.copy()
    t = np.clip(dot(np.asarray(p, dtype=float) - a, seg) / seg_len_sq, 0.0, 1.0)
    return a + seg * t
