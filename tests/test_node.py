import numpy as np
import pytest

from tessella.node import AdaptiveTessellationNode, DividableDirection
from tessella.options import AdaptiveTessellationOptions
from tessella.surface_point import SurfacePoint


class Plane:
    u_degree = 1

    def rational_derivatives(self, u, v, n):
        return [
            [np.array([u, v, 0.0]), np.array([0.0, 1.0, 0.0])],
            [np.array([1.0, 0.0, 0.0]), np.zeros(3)],
        ]


class Cylinder:
    u_degree = 2

    def rational_derivatives(self, u, v, n):
        return [
            [np.array([np.cos(u), np.sin(u), v]), np.array([0.0, 0.0, 1.0])],
            [np.array([-np.sin(u), np.cos(u), 0.0]), np.zeros(3)],
        ]


class Pinched:
    u_degree = 2

    def rational_derivatives(self, u, v, n):
        return [
            [np.array([u * u, v, 0.0]), np.array([0.0, 1.0, 0.0])],
            [np.array([2.0 * u, 0.0, 0.0]), np.zeros(3)],
        ]


def _sp(u, v):
    return SurfacePoint(uv=[u, v], point=np.zeros(3), normal=np.zeros(3))


def _node(node_id, u0, v0, u1, v1, neighbors=None):
    corners = [_sp(u0, v0), _sp(u1, v0), _sp(u1, v1), _sp(u0, v1)]
    if neighbors is None:
        return AdaptiveTessellationNode(node_id, corners)
    return AdaptiveTessellationNode(node_id, corners, neighbors)


def test_new_node_is_leaf_without_neighbors():
    node = _node(0, 0, 0, 1, 1)
    assert node.is_leaf()
    assert node.neighbors == [None, None, None, None]
    assert node.mid_points == [None, None, None, None]
    assert node.horizontal is False


def test_wrong_corner_count_is_rejected():
    with pytest.raises(ValueError):
        AdaptiveTessellationNode(0, [_sp(0, 0)])


def test_evaluate_surface_on_plane():
    node = _node(0, 0, 0, 1, 1)
    sp = node.evaluate_surface(Plane(), [0.3, 0.7])
    np.testing.assert_allclose(sp.point, [0.3, 0.7, 0.0])
    np.testing.assert_allclose(sp.normal, [0.0, 0.0, 1.0])
    np.testing.assert_allclose(sp.uv, [0.3, 0.7])
    assert sp.is_normal_degenerated is False


def test_evaluate_surface_normal_is_unit():
    node = _node(0, 0, 0, 1, 1)
    sp = node.evaluate_surface(Cylinder(), [0.4, 0.2])
    assert np.linalg.norm(sp.normal) == pytest.approx(1.0)
    np.testing.assert_allclose(sp.point, [np.cos(0.4), np.sin(0.4), 0.2])


def test_evaluate_surface_flags_degenerate_normal():
    node = _node(0, 0, 0, 1, 1)
    sp = node.evaluate_surface(Pinched(), [0.0, 0.5])
    assert sp.is_normal_degenerated is True


def test_evaluate_corners_sets_center_and_points():
    node = _node(0, 0.2, 0.4, 0.6, 1.0)
    node.evaluate_corners(Plane())
    np.testing.assert_allclose(node.center, (node.corners[0].uv + node.corners[2].uv) / 2)
    for corner in node.corners:
        np.testing.assert_allclose(corner.point[:2], corner.uv)


def test_center_point_evaluates_at_center():
    node = _node(0, 0, 0, 1, 1)
    node.evaluate_corners(Plane())
    center = node.center_point(Plane())
    np.testing.assert_allclose(center.uv, node.center)
    np.testing.assert_allclose(center.point[:2], node.center)


def test_evaluate_mid_point_is_cached():
    node = _node(0, 0, 0, 1, 1)
    node.evaluate_corners(Plane())
    first = node.evaluate_mid_point(Plane(), 0)
    assert first.uv[0] == node.center[0]
    assert first.uv[1] == node.corners[0].uv[1]
    assert node.evaluate_mid_point(Plane(), 0) is first
    west = node.evaluate_mid_point(Plane(), 3)
    assert west.uv[0] == node.corners[0].uv[0]
    assert west.uv[1] == node.center[1]


def test_edge_corners_of_leaf():
    node = _node(0, 0, 0, 1, 1)
    assert node.get_edge_corners([node], 2) == [node.corners[2]]


def _split_north_neighbor():
    a = _node(0, 0, 0, 1, 1, [None, None, 1, None])
    b = _node(1, 0, 1, 1, 2, [0, None, None, None])
    b0 = _node(2, 0, 1, 0.5, 2)
    b1 = _node(3, 0.5, 1, 1, 2)
    b.children = [2, 3]
    b.horizontal = False
    return [a, b, b0, b1]


def test_edge_corners_of_vertically_split_node():
    nodes = _split_north_neighbor()
    south = nodes[1].get_edge_corners(nodes, 0)
    assert [tuple(c.uv) for c in south] == [(0.0, 1.0), (0.5, 1.0)]
    assert nodes[1].get_edge_corners(nodes, 1) == [nodes[3].corners[1]]
    assert nodes[1].get_edge_corners(nodes, 7) == []


def test_all_corners_include_neighbor_split_points():
    nodes = _split_north_neighbor()
    a = nodes[0]
    north = a.get_all_corners(nodes, 2)
    assert [tuple(c.uv) for c in north] == [(1.0, 1.0), (0.5, 1.0)]
    assert a.get_all_corners(nodes, 0) == [a.corners[0]]


def test_fix_normals_borrows_from_neighbors():
    node = _node(0, 0, 0, 1, 1)
    node.corners = [
        SurfacePoint(uv=[0, 0], point=np.zeros(3), normal=np.zeros(3), is_normal_degenerated=True),
        SurfacePoint(uv=[1, 0], point=np.zeros(3), normal=np.zeros(3), is_normal_degenerated=True),
        SurfacePoint(uv=[1, 1], point=np.zeros(3), normal=[0, 1, 0]),
        SurfacePoint(uv=[0, 1], point=np.zeros(3), normal=[1, 0, 0]),
    ]
    assert node.has_bad_normals()
    node.fix_normals()
    np.testing.assert_array_equal(node.corners[0].normal, node.corners[3].normal)
    np.testing.assert_array_equal(node.corners[1].normal, node.corners[2].normal)


def test_should_divide_respects_depth_limits():
    node = _node(0, 0, 0, 1, 1)
    node.evaluate_corners(Plane())
    options = AdaptiveTessellationOptions(min_depth=1, max_depth=3)
    assert node.should_divide(Plane(), options, 0) is DividableDirection.BOTH
    assert node.should_divide(Plane(), options, 3) is DividableDirection.NONE


def test_should_divide_flat_plane_is_none():
    node = _node(0, 0, 0, 1, 1)
    node.evaluate_corners(Plane())
    assert node.should_divide(Plane(), AdaptiveTessellationOptions(), 0) is DividableDirection.NONE


def test_should_divide_curved_in_u_is_vertical():
    node = _node(0, 0, 0, 1, 1)
    node.evaluate_corners(Cylinder())
    assert node.should_divide(Cylinder(), AdaptiveTessellationOptions(), 0) is DividableDirection.VERTICAL


def test_should_divide_degenerate_fixes_and_stops():
    node = _node(0, 0, 0, 1, 1)
    node.evaluate_corners(Pinched())
    assert node.has_bad_normals()
    result = node.should_divide(Pinched(), AdaptiveTessellationOptions(), 0)
    assert result is DividableDirection.NONE
    np.testing.assert_array_equal(node.corners[0].normal, node.corners[1].normal)
    assert np.linalg.norm(node.corners[3].normal) == pytest.approx(1.0)