# tessella

Adaptive tessellation of NURBS geometry into polylines and triangle meshes.

tessella turns parametric curves and surfaces into discrete geometry:

- **Curves** become polylines through `tessellate_curve` in `tessella.curve`. Flat stretches are sampled sparsely and curved stretches densely.
- **Compound curves** are chains of spans. `tessellate_compound_curve` in `tessella.compound_curve` joins the span tessellations without repeating shared end points. For a closed chain, the first point is repeated at the end.
- **Surfaces** are meshed by `tessellate_surface` in `tessella.surface`. The result is a `SurfaceTessellation` with `points`, `normals`, `uvs` and triangle `faces`.
  - Without options, the surface is sampled on a regular grid.
  - With `AdaptiveTessellationOptions`, each grid cell is split further wherever the surface normal changes more than the tolerance allows.
- **Trimming** uses `trim_curve_range` and `trim_compound_curve_range` in `tessella.trim`. They cut curves down to a parameter range.

## What the package does not do

tessella has no NURBS curve or surface types of its own. It does not evaluate, split or build curves and surfaces. You supply the geometry objects, and tessella calls the methods and attributes listed below. There is no command-line tool.

## Installation

```
pip install tessella
```

The only runtime dependency is numpy.

## Surface tessellation

```python
from tessella.options import AdaptiveTessellationOptions
from tessella.surface import tessellate_surface

mesh = tessellate_surface(surface, None)                            # regular grid
mesh = tessellate_surface(surface, AdaptiveTessellationOptions())   # adaptive

print(len(mesh.points), len(mesh.faces))
```

### What the surface must provide

- attributes `u_degree`, `v_degree`, `u_knots`, `v_knots` and `control_points`, where `control_points` is a grid of rows;
- methods `u_knots_domain()` and `v_knots_domain()`;
- a method `rational_derivatives(u, v, n)`. Its entry `[k][l]` is the Cartesian derivative taken `k` times in u and `l` times in v.

### How the parameter grid is built

The grid is built separately in u and in v.

- In a direction of degree 1, the grid uses the knots without the first and the last.
- Otherwise the knot domain is divided evenly into the larger of:
  - `min_divs_u` (or `min_divs_v`);
  - twice the control point count minus one.

### Options

`AdaptiveTessellationOptions` is a dataclass that controls the adaptive subdivision.

| field            | default | meaning                                                          |
|------------------|---------|------------------------------------------------------------------|
| `norm_tolerance` | 0.025   | squared difference between unit normals above which a cell is split |
| `min_divs_u`     | 1       | minimum initial divisions in u (degree above 1 only)             |
| `min_divs_v`     | 1       | minimum initial divisions in v (degree above 1 only)             |
| `min_depth`      | 0       | cells are split in both directions down to this depth            |
| `max_depth`      | 8       | no cell is split below this depth                                |

A cell with a degenerate normal at a corner is not split further. That corner takes its normal from a neighbouring corner.

### Lower-level pieces

- `tessella.node.AdaptiveTessellationNode` is one cell of the subdivision tree. `DividableDirection` records how a cell may be split.
- `tessella.processor.AdaptiveTessellationProcessor` splits cells recursively.
- `SurfaceTessellation.from_nodes(surface, nodes)` triangulates the leaf cells. It takes care that the triangles of neighbouring cells of different sizes meet without cracks.
- `tessella.surface_point.SurfacePoint` holds one evaluated sample: `uv`, `point`, `normal` and `is_normal_degenerated`.

### Converting the result

`SurfaceTessellation.cast(dtype)` returns a copy whose points, normals and uvs use another numpy floating type, for example `numpy.float32`.

## Curve tessellation

```python
import random

from tessella.curve import tessellate_curve
from tessella.compound_curve import tessellate_compound_curve

points = tessellate_curve(curve, 1e-3, random.Random(0))
outline = tessellate_compound_curve(compound)
```

- A curve needs a `degree` attribute and three methods:
  - `dehomogenized_control_points()`;
  - `knots_domain()`;
  - `point_at(t)`.
- A degree-1 curve yields its dehomogenized control points.
- Other curves are halved recursively until every piece is flat within the tolerance. The tolerance defaults to 1e-3.
- The optional `rng` is any object with a `random()` method. It chooses the probe point in each piece, so a seeded generator makes the result reproducible.
- A compound curve needs a `spans` sequence of curves and an `is_closed()` method.

## Trimming

```python
from tessella.trim import trim_curve_range, trim_compound_curve_range

inner = trim_curve_range(curve, (0.2, 0.8))   # [piece between 0.2 and 0.8]
outer = trim_curve_range(curve, (0.8, 0.2))   # [piece after 0.8, piece before 0.2]
```

- Curves must provide `try_split(t)`, returning a `(head, tail)` pair, and `knots_domain()`. Errors raised by `try_split` propagate.
- `trim_compound_curve_range` applies the same rule to every span of `compound.spans`:
  - a span containing a parameter is split there;
  - a span outside the kept range is dropped.
- Both functions return a list of curves.