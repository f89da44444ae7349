"""Settings that steer adaptive surface tessellation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AdaptiveTessellationOptions:
    """Options for adaptive tessellation of a surface.

    ``norm_tolerance`` bounds the squared distance between two unit normals;
    an edge whose end normals stay within it is considered flat.
    """

    norm_tolerance: float = 2.5e-2
    min_divs_u: int = 1
    min_divs_v: int = 1
    min_depth: int = 0
    max_depth: int = 8