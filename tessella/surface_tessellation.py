"""Mesh data produced by tessellating a surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .node import AdaptiveTessellationNode, SurfaceEvaluator


@dataclass
class SurfaceTessellation:
    """Points, normals, parameter coordinates and triangles of a surface mesh."""

    points: list[np.ndarray] = field(default_factory=list)
    normals: list[np.ndarray] = field(default_factory=list)
    faces: list[tuple[int, int, int]] = field(default_factory=list)
    uvs: list[np.ndarray] = field(default_factory=list)

    @classmethod
    def from_nodes(
        cls, surface: SurfaceEvaluator, nodes: Sequence[AdaptiveTessellationNode]
    ) -> SurfaceTessellation:
        """Triangulate the leaf nodes of a tessellation tree."""
        tess = cls()
        for node in nodes:
            if node.is_leaf():
                tess._triangulate(surface, nodes, node)
        return tess

    def _triangulate(
        self,
        surface: SurfaceEvaluator,
        nodes: Sequence[AdaptiveTessellationNode],
        node: AdaptiveTessellationNode,
    ) -> None:
        if not node.is_leaf():
            for child in node.children:
                self._triangulate(surface, nodes, nodes[child])
            return

        corners = []
        split_id = 0
        for edge in range(4):
            edge_corners = node.get_all_corners(nodes, edge)
            if len(edge_corners) == 2:
                split_id = edge + 1
            corners.extend(edge_corners)

        base = len(self.points)
        ids = list(range(base, base + len(corners)))
        for corner in corners:
            self.points.append(corner.point)
            self.normals.append(corner.normal)
            self.uvs.append(corner.uv)

        count = len(ids)
        if count == 4:
            self.faces.append((ids[0], ids[1], ids[3]))
            self.faces.append((ids[3], ids[1], ids[2]))
        elif count == 5:
            a, b, c, d, e = (ids[(split_id + k) % count] for k in range(5))
            self.faces.append((a, b, c))
            self.faces.append((a, d, e))
            self.faces.append((a, c, d))
        else:
            center = node.center_point(surface)
            self.points.append(center.point)
            self.normals.append(center.normal)
            self.uvs.append(center.uv)
            center_index = len(self.points) - 1
            for prev, cur in zip([ids[-1]] + ids[:-1], ids):
                self.faces.append((center_index, prev, cur))

    def cast(self, dtype) -> SurfaceTessellation:
        """Return a copy whose coordinates use another floating point type."""
        return SurfaceTessellation(
            points=[np.asarray(p).astype(dtype) for p in self.points],
            normals=[np.asarray(n).astype(dtype) for n in self.normals],
            faces=list(self.faces),
            uvs=[np.asarray(uv).astype(dtype) for uv in self.uvs],
        )