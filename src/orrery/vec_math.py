"""Immutable 3-vector helpers (tuple-based counterparts of the SPICE VXXX routines)."""

from __future__ import annotations

import math

Vec3 = tuple[float, float, float]

ORIGIN: Vec3 = (0.0, 0.0, 0.0)


def vdot(a: Vec3, b: Vec3) -> float:
    """Dot product of two 3-vectors."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vnorm(v: Vec3) -> float:
    """Euclidean norm of 3-vector."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def vsub(a: Vec3, b: Vec3) -> Vec3:
    """Vector difference a - b."""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vadd(a: Vec3, b: Vec3) -> Vec3:
    """Vector sum a + b."""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vscl(s: float, v: Vec3) -> Vec3:
    """Scale vector: s * v."""
    return (s * v[0], s * v[1], s * v[2])


def vminus(v: Vec3) -> Vec3:
    """Negated vector."""
    return (-v[0], -v[1], -v[2])


def vhat(v: Vec3) -> Vec3:
    """Unit vector in direction of v; zero vector if v is zero (SPICE VHAT)."""
    n = vnorm(v)
    if n == 0.0:
        return ORIGIN
    return (v[0] / n, v[1] / n, v[2] / n)


def vcrss(a: Vec3, b: Vec3) -> Vec3:
    """Cross product a x b."""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def unit_direction(frm: Vec3, to: Vec3) -> Vec3:
    """Unit vector pointing from ``frm`` to ``to``; zero vector if they coincide."""
    return vhat(vsub(to, frm))


def rotate_x(v: Vec3, angle: float) -> Vec3:
    """Rotate v about the +X axis by ``angle`` radians (right-handed)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return (v[0], c * v[1] - s * v[2], s * v[1] + c * v[2])


def brcktd(x: float, lo: float, hi: float) -> float:
    """Clamp x to [lo, hi]."""
    return max(lo, min(hi, x))
