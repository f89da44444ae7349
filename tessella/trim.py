"""Trimming curves to a parameter range."""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar

import numpy as np

EPSILON = float(np.finfo(np.float64).eps)

C = TypeVar("C", bound="SplittableCurve")


class SplittableCurve(Protocol):
    """A curve that can be cut in two at a parameter.

    ``try_split`` raises when the parameter cannot split the curve.
    """

    def try_split(self: C, t: float) -> tuple[C, C]:
        ...

    def knots_domain(self) -> tuple[float, float]:
        ...


class SplittableCompound(Protocol):
    spans: Sequence[SplittableCurve]


def trim_curve_range(curve: C, parameters: tuple[float, float]) -> list[C]:
    """Keep the part of a curve between two parameters.

    When the first parameter is below the second, the piece between them is
    returned. Otherwise the outer pieces are returned, the tail first.
    """
    first, second = parameters
    low, high = min(first, second), max(first, second)
    if first < second:
        _, tail = curve.try_split(low)
        head, _ = tail.try_split(high)
        return [head]
    head, tail = curve.try_split(low)
    _, tail2 = tail.try_split(high)
    return [tail2, head]


def _trim_span(span, low: float, high: float, inside: bool) -> list:
    d0, d1 = span.knots_domain()
    # keep clear of the span's own end points
    has_low = d0 + EPSILON <= low <= d1 - EPSILON
    has_high = d0 + EPSILON <= high <= d1 - EPSILON

    if has_low and has_high:
        if inside:
            return trim_curve_range(span, (low, high))
        head, tail = span.try_split(low)
        _, tail2 = tail.try_split(high)
        return [head, tail2]
    if has_low:
        head, tail = span.try_split(low)
        return [tail] if inside else [head]
    if has_high:
        head, tail = span.try_split(high)
        return [head] if inside else [tail]
    within = low <= d0 <= high
    return [span] if within == inside else []


def trim_compound_curve_range(
    compound: SplittableCompound, parameters: tuple[float, float]
) -> list:
    """Trim every span of a compound curve to a parameter range.

    The ordering of the parameters chooses between the inner and the outer
    part, as in :func:`trim_curve_range`.
    """
    first, second = parameters
    low, high = min(first, second), max(first, second)
    inside = first < second
    return [piece for span in compound.spans for piece in _trim_span(span, low, high, inside)]