"""Evaluated sample of a surface."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SurfacePoint:
    """A point on a surface with its normal and parameter coordinates."""

    uv: np.ndarray
    point: np.ndarray
    normal: np.ndarray
    is_normal_degenerated: bool = False

    def __post_init__(self) -> None:
        for name in ("uv", "point", "normal"):
            object.__setattr__(self, name, np.asarray(getattr(self, name), dtype=float))
        object.__setattr__(self, "is_normal_degenerated", bool(self.is_normal_degenerated))