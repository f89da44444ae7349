"""Quad-tree node used while adaptively tessellating a surface."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol, Sequence

import numpy as np

from .options import AdaptiveTessellationOptions
from .surface_point import SurfacePoint

EPSILON = float(np.finfo(np.float64).eps)


class SurfaceEvaluator(Protocol):
    """Anything that yields rational derivatives of a surface.

    ``rational_derivatives(u, v, n)[k][l]`` is the derivative taken ``k``
    times in u and ``l`` times in v, in Cartesian coordinates.
    """

    def rational_derivatives(self, u: float, v: float, n: int) -> Sequence[Sequence[np.ndarray]]:
        ...


class DividableDirection(Enum):
    """Direction in which a node can be divided."""

    BOTH = auto()
    VERTICAL = auto()
    HORIZONTAL = auto()
    NONE = auto()


def _differs(a: np.ndarray, b: np.ndarray, tolerance: float) -> bool:
    diff = a - b
    return float(np.dot(diff, diff)) > tolerance


@dataclass
class AdaptiveTessellationNode:
    """A rectangular patch of the parameter domain.

    Corners run counter-clockwise from (u0, v0). Neighbours are stored in
    south, east, north, west order; east and west lie along u, north and
    south along v.
    """

    id: int
    corners: list[SurfacePoint]
    neighbors: list[int | None] = field(default_factory=lambda: [None] * 4)
    children: list[int] = field(default_factory=list)
    mid_points: list[SurfacePoint | None] = field(default_factory=lambda: [None] * 4)
    horizontal: bool = False
    center: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        self.corners = list(self.corners)
        self.neighbors = list(self.neighbors)
        if len(self.corners) != 4:
            raise ValueError("a node needs exactly four corners")
        if len(self.neighbors) != 4:
            raise ValueError("a node needs exactly four neighbour slots")

    def is_leaf(self) -> bool:
        return not self.children

    def center_point(self, surface: SurfaceEvaluator) -> SurfacePoint:
        """Evaluate the surface at the node's centre."""
        return self.evaluate_surface(surface, self.center)

    def evaluate_corners(self, surface: SurfaceEvaluator) -> None:
        """Compute the centre and re-evaluate every corner on the surface."""
        self.center = (self.corners[0].uv + self.corners[2].uv) * 0.5
        self.corners = [self.evaluate_surface(surface, c.uv) for c in self.corners]

    def evaluate_surface(self, surface: SurfaceEvaluator, uv) -> SurfacePoint:
        uv = np.asarray(uv, dtype=float)
        derivs = surface.rational_derivatives(uv[0], uv[1], 1)
        point = np.asarray(derivs[0][0], dtype=float)
        normal = np.cross(np.asarray(derivs[1][0], dtype=float), np.asarray(derivs[0][1], dtype=float))
        degenerate = float(np.dot(normal, normal)) < EPSILON
        if not degenerate:
            normal = normal / np.linalg.norm(normal)
        return SurfacePoint(uv=uv.copy(), point=point, normal=normal, is_normal_degenerated=degenerate)

    def get_edge_corners(
        self, nodes: Sequence[AdaptiveTessellationNode], edge_index: int
    ) -> list[SurfacePoint]:
        """Collect the corners lying along one edge, descending into children."""
        if self.is_leaf():
            if not 0 <= edge_index < 4:
                raise IndexError(f"edge index out of range: {edge_index}")
            return [self.corners[edge_index]]

        first, second = (nodes[c] for c in self.children)
        if self.horizontal:
            if edge_index == 0:
                return first.get_edge_corners(nodes, 0)
            if edge_index == 1:
                return first.get_edge_corners(nodes, 1) + second.get_edge_corners(nodes, 1)
            if edge_index == 2:
                return second.get_edge_corners(nodes, 2)
            if edge_index == 3:
                return second.get_edge_corners(nodes, 3) + first.get_edge_corners(nodes, 3)
        else:
            if edge_index == 0:
                return first.get_edge_corners(nodes, 0) + second.get_edge_corners(nodes, 0)
            if edge_index == 1:
                return second.get_edge_corners(nodes, 1)
            if edge_index == 2:
                return second.get_edge_corners(nodes, 2) + first.get_edge_corners(nodes, 2)
            if edge_index == 3:
                return first.get_edge_corners(nodes, 3)
        return []

    def get_all_corners(
        self, nodes: Sequence[AdaptiveTessellationNode], edge_index: int
    ) -> list[SurfacePoint]:
        """Corner of an edge followed by the neighbour's split points on that edge."""
        base = [self.corners[edge_index]]
        neighbor = self.neighbors[edge_index]
        if neighbor is None:
            return base

        opposite = nodes[neighbor].get_edge_corners(nodes, (edge_index + 2) % 4)
        axis = edge_index % 2
        low = self.corners[0].uv[axis] + EPSILON
        high = self.corners[2].uv[axis] - EPSILON
        inner = [c for c in opposite if low < c.uv[axis] < high]
        return base + inner[::-1]

    def evaluate_mid_point(self, surface: SurfaceEvaluator, index: int) -> SurfacePoint:
        """Evaluate (once) the midpoint of an edge."""
        cached = self.mid_points[index]
        if cached is not None:
            return cached
        cx, cy = self.center
        if index == 0:
            uv = (cx, self.corners[0].uv[1])
        elif index == 1:
            uv = (self.corners[1].uv[0], cy)
        elif index == 2:
            uv = (cx, self.corners[2].uv[1])
        else:
            uv = (self.corners[0].uv[0], cy)
        point = self.evaluate_surface(surface, uv)
        self.mid_points[index] = point
        return point

    def has_bad_normals(self) -> bool:
        return any(c.is_normal_degenerated for c in self.corners)

    def fix_normals(self) -> None:
        """Borrow a neighbouring corner's normal for each degenerate corner."""
        count = len(self.corners)
        for i, corner in enumerate(self.corners):
            if not corner.is_normal_degenerated:
                continue
            after = self.corners[(i + 1) % count]
            before = self.corners[(i + 3) % count]
            source = before if after.is_normal_degenerated else after
            self.corners[i] = dataclasses.replace(corner, normal=source.normal.copy())

    def should_divide(
        self,
        surface: SurfaceEvaluator,
        options: AdaptiveTessellationOptions,
        current_depth: int,
    ) -> DividableDirection:
        """Decide whether, and in which direction, this node should be split."""
        if current_depth < options.min_depth:
            return DividableDirection.BOTH
        if current_depth >= options.max_depth:
            return DividableDirection.NONE
        if self.has_bad_normals():
            self.fix_normals()
            return DividableDirection.NONE

        tol = options.norm_tolerance
        n = [c.normal for c in self.corners]
        vertical = _differs(n[0], n[1], tol) or _differs(n[2], n[3], tol)
        horizontal = _differs(n[1], n[2], tol) or _differs(n[3], n[0], tol)

        if vertical and horizontal:
            return DividableDirection.BOTH
        if vertical:
            return DividableDirection.VERTICAL
        if horizontal:
            return DividableDirection.HORIZONTAL

        center = self.center_point(surface).normal
        if any(_differs(center, normal, tol) for normal in n):
            return DividableDirection.BOTH
        return DividableDirection.NONE