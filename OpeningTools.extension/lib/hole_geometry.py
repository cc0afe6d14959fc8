# -*- coding: utf-8 -*-
"""Vector helpers on plain (x, y, z) tuples.

Kept free of RevitAPI so hole_core can be tested outside Revit.
Anything with X/Y/Z attributes (DB.XYZ) is accepted as input.
"""
import math


EPS = 1e-9


def to_xyz_tuple(p):
    """Return (x, y, z) tuple from a sequence or object with X/Y/Z."""
    if hasattr(p, 'X') and hasattr(p, 'Y') and hasattr(p, 'Z'):
        return (float(p.X), float(p.Y), float(p.Z))
    try:
        return (float(p[0]), float(p[1]), float(p[2]))
    except Exception:
        raise ValueError('Unsupported point type: {0}'.format(type(p)))


def add(a, b):
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def scale(v, k):
    k = float(k)
    return (v[0] * k, v[1] * k, v[2] * k)


def vector_length(v):
    return math.sqrt(v[0] ** 2 + v[1] ** 2 + v[2] ** 2)


def normalize(v):
    """Unit vector along v, or None for a zero-length vector."""
    ln = vector_length(v)
    if ln < EPS:
        return None
    return (v[0] / ln, v[1] / ln, v[2] / ln)


def point_along(origin, direction, distance):
    """origin + direction * distance."""
    return add(origin, scale(direction, distance))
