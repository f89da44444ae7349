"""Adaptive tessellation of a single curve into a polyline."""

from __future__ import annotations

import random
from typing import Protocol, Sequence

import numpy as np

DEFAULT_TOLERANCE = 1e-3
_MIN_SPAN = 1e-8


class Curve(Protocol):
    """The parts of a curve that tessellation relies on."""

    degree: int

    def dehomogenized_control_points(self) -> Sequence[np.ndarray]:
        ...

    def knots_domain(self) -> tuple[float, float]:
        ...

    def point_at(self, t: float) -> np.ndarray:
        ...


class RandomSource(Protocol):
    def random(self) -> float:
        ...


def _as_3d(vector: np.ndarray) -> np.ndarray:
    padded = np.zeros(3)
    padded[: min(len(vector), 3)] = vector[:3]
    return padded


def _three_points_are_flat(
    p1: np.ndarray, p2: np.ndarray, p3: np.ndarray, tolerance: float
) -> bool:
    """True when the triangle spanned by three points is thinner than the tolerance."""
    normal = np.cross(_as_3d(p2 - p1), _as_3d(p3 - p1))
    return float(np.dot(normal, normal)) < tolerance


def _point(curve: Curve, t: float) -> np.ndarray:
    return np.asarray(curve.point_at(t), dtype=float)


def _tessellate_adaptive(
    curve: Curve, start: float, end: float, tolerance: float, rng: RandomSource
) -> list[np.ndarray]:
    p1 = _point(curve, start)
    delta = end - start
    if delta < _MIN_SPAN:
        return [p1]

    p3 = _point(curve, end)
    probe = 0.5 + 0.2 * rng.random()
    p2 = _point(curve, start + delta * probe)

    chord = p1 - p3
    to_probe = p1 - p2
    loops_back = float(np.dot(chord, chord)) < tolerance and float(np.dot(to_probe, to_probe)) > tolerance
    if loops_back or not _three_points_are_flat(p1, p2, p3, tolerance):
        middle = start + delta * 0.5
        left = _tessellate_adaptive(curve, start, middle, tolerance, rng)
        right = _tessellate_adaptive(curve, middle, end, tolerance, rng)
        return left[:-1] + right
    return [p1, p3]


def tessellate_curve(
    curve: Curve, tolerance: float | None = None, rng: RandomSource | None = None
) -> list[np.ndarray]:
    """Tessellate a curve, refining where it bends.

    A linear curve yields its control points. Otherwise the domain is split
    recursively until each piece is flat within ``tolerance`` (1e-3 when not
    given). ``rng`` picks the probe point inside each piece.
    """
    if curve.degree == 1:
        return [np.asarray(p, dtype=float) for p in curve.dehomogenized_control_points()]

    tol = DEFAULT_TOLERANCE if tolerance is None else tolerance
    source = rng if rng is not None else random.Random()
    start, end = curve.knots_domain()
    return _tessellate_adaptive(curve, start, end, tol, source)