"""Adaptive tessellation of NURBS curves and surfaces, and range trimming of curves."""

__version__ = "0.1.0"

__all__ = [
    "compound_curve",
    "curve",
    "node",
    "options",
    "processor",
    "surface",
    "surface_point",
    "surface_tessellation",
    "trim",
]