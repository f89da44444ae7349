"""Recursive subdivision of tessellation nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .node import AdaptiveTessellationNode, DividableDirection
from .options import AdaptiveTessellationOptions


@dataclass
class AdaptiveTessellationProcessor:
    """Divides nodes of a surface until they are flat enough.

    The surface must provide ``rational_derivatives(u, v, n)`` and a
    ``u_degree`` attribute.
    """

    surface: Any
    nodes: list[AdaptiveTessellationNode] = field(default_factory=list)

    def north(self, index, i, j, divs_u, divs_v) -> AdaptiveTessellationNode | None:
        return None if i == 0 else self.nodes[index - divs_u]

    def south(self, index, i, j, divs_u, divs_v) -> AdaptiveTessellationNode | None:
        return None if i == divs_v - 1 else self.nodes[index + divs_u]

    def east(self, index, i, j, divs_u, divs_v) -> AdaptiveTessellationNode | None:
        return None if j == divs_u - 1 else self.nodes[index + 1]

    def west(self, index, i, j, divs_u, divs_v) -> AdaptiveTessellationNode | None:
        return None if j == 0 else self.nodes[index - 1]

    def divide(self, node_id: int, options: AdaptiveTessellationOptions) -> None:
        """Subdivide a node and its descendants as the options require."""
        horizontal = self.surface.u_degree > 1
        self._iterate(node_id, options, 0, horizontal)

    def _iterate(
        self,
        node_id: int,
        options: AdaptiveTessellationOptions,
        depth: int,
        horizontal: bool,
    ) -> None:
        id0 = len(self.nodes)
        id1 = id0 + 1
        surface = self.surface

        node = self.nodes[node_id]
        node.evaluate_corners(surface)
        direction = node.should_divide(surface, options, depth)
        if direction is DividableDirection.NONE:
            return
        node.horizontal = {
            DividableDirection.BOTH: horizontal,
            DividableDirection.VERTICAL: False,
            DividableDirection.HORIZONTAL: True,
        }[direction]

        c = node.corners
        nb = node.neighbors
        if node.horizontal:
            east_mid = node.evaluate_mid_point(surface, 1)
            west_mid = node.evaluate_mid_point(surface, 3)
            first = AdaptiveTessellationNode(
                id0, [c[0], c[1], east_mid, west_mid], [nb[0], nb[1], id1, nb[3]]
            )
            second = AdaptiveTessellationNode(
                id1, [west_mid, east_mid, c[2], c[3]], [id0, nb[1], nb[2], nb[3]]
            )
        else:
            south_mid = node.evaluate_mid_point(surface, 0)
            north_mid = node.evaluate_mid_point(surface, 2)
            first = AdaptiveTessellationNode(
                id0, [c[0], south_mid, north_mid, c[3]], [nb[0], id1, nb[2], nb[3]]
            )
            second = AdaptiveTessellationNode(
                id1, [south_mid, c[1], c[2], north_mid], [nb[0], nb[1], nb[2], id0]
            )
        node.children = [id0, id1]
        self.nodes.extend((first, second))

        for child in (id0, id1):
            self._iterate(child, options, depth + 1, not horizontal)