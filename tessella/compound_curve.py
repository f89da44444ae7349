"""Tessellation of a chain of curves."""

from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np

from .curve import Curve, tessellate_curve


class CompoundCurve(Protocol):
    """A chain of curve spans, each starting where the previous one ends."""

    spans: Sequence[Curve]

    def is_closed(self) -> bool:
        ...


def tessellate_compound_curve(
    compound: CompoundCurve, tolerance: float | None = None
) -> list[np.ndarray]:
    """Tessellate every span and join them without repeating shared points.

    A closed chain ends with a copy of its first point.
    """
    spans = list(compound.spans)
    if compound.is_closed():
        points = [p for span in spans for p in tessellate_curve(span, tolerance)[:-1]]
        return points + points[:1]

    last = len(spans) - 1
    points: list[np.ndarray] = []
    for i, span in enumerate(spans):
        tess = tessellate_curve(span, tolerance)
        points.extend(tess if i == last else tess[:-1])
    return points