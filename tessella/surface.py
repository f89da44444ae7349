"""Tessellation of a surface into a triangle mesh."""

from __future__ import annotations

from typing import Any

import numpy as np

from .node import AdaptiveTessellationNode
from .options import AdaptiveTessellationOptions
from .processor import AdaptiveTessellationProcessor
from .surface_point import SurfacePoint
from .surface_tessellation import SurfaceTessellation


def _parameters(degree: int, knots, control_count: int, min_divs: int, domain) -> list[float]:
    if degree <= 1:
        return [float(k) for k in list(knots)[1:-1]]
    divs = max(min_divs, (control_count - 1) * 2)
    low, high = domain
    step = (high - low) / divs
    return [low + step * i for i in range(divs + 1)]


def _sample(surface: Any, u: float, v: float) -> SurfacePoint:
    derivs = surface.rational_derivatives(u, v, 1)
    normal = np.cross(np.asarray(derivs[1][0], dtype=float), np.asarray(derivs[0][1], dtype=float))
    with np.errstate(divide="ignore", invalid="ignore"):
        normal = normal / np.linalg.norm(normal)
    return SurfacePoint(
        uv=np.array([u, v]),
        point=np.asarray(derivs[0][0], dtype=float),
        normal=normal,
        is_normal_degenerated=False,
    )


def tessellate_surface(
    surface: Any, adaptive_options: AdaptiveTessellationOptions | None = None
) -> SurfaceTessellation:
    """Tessellate a surface into a mesh.

    Without options the surface is sampled on a grid derived from its knots
    or control points; with options each grid cell is further subdivided
    according to the curvature of the surface.

    The surface must provide ``u_degree``, ``v_degree``, ``u_knots``,
    ``v_knots`` and ``control_points`` attributes, ``u_knots_domain()`` and
    ``v_knots_domain()`` methods, and ``rational_derivatives(u, v, n)``.
    """
    is_adaptive = adaptive_options is not None
    options = adaptive_options if is_adaptive else AdaptiveTessellationOptions()

    control_points = surface.control_points
    us = _parameters(
        surface.u_degree,
        surface.u_knots,
        len(control_points),
        options.min_divs_u,
        surface.u_knots_domain() if surface.u_degree > 1 else (0.0, 0.0),
    )
    vs = _parameters(
        surface.v_degree,
        surface.v_knots,
        len(control_points[0]),
        options.min_divs_v,
        surface.v_knots_domain() if surface.v_degree > 1 else (0.0, 0.0),
    )

    grid = [[_sample(surface, u, v) for u in us] for v in vs]

    divs_u = len(us) - 1
    divs_v = len(vs) - 1
    nodes: list[AdaptiveTessellationNode] = []
    for i in range(divs_v):
        iv = divs_v - i
        for j in range(divs_u):
            corners = [grid[iv - 1][j], grid[iv - 1][j + 1], grid[iv][j + 1], grid[iv][j]]
            nodes.append(AdaptiveTessellationNode(len(nodes), corners))

    if is_adaptive:
        processor = AdaptiveTessellationProcessor(surface=surface, nodes=nodes)
        for i in range(divs_v):
            for j in range(divs_u):
                ci = i * divs_u + j
                neighbours = (
                    processor.south(ci, i, j, divs_u, divs_v),
                    processor.east(ci, i, j, divs_u, divs_v),
                    processor.north(ci, i, j, divs_u, divs_v),
                    processor.west(ci, i, j, divs_u, divs_v),
                )
                processor.nodes[ci].neighbors = [None if n is None else n.id for n in neighbours]
                processor.divide(ci, options)
        nodes = processor.nodes

    return SurfaceTessellation.from_nodes(surface, nodes)