import numpy as np
import pytest

from halfmesh.hull import convex_hull
from halfmesh.pairs import validate_pairs


def sphere_points(n, seed=0):
    rng = np.random.default_rng(seed)
    points = rng.normal(size=(n, 3))
    return points / np.linalg.norm(points, axis=1)[:, None]


def assert_contains(mesh, points, tol=1e-6):
    for f in mesh:
        assert np.all((points - f.center) @ f.normal <= tol)


@pytest.mark.parametrize('seed', [0, 1, 2])
def test_hull_of_sphere_points(seed):
    points = sphere_points(60, seed)
    mesh = convex_hull(points)

    v, e, f = mesh.size
    assert v - e + f == 2
    assert v == 60

    validate_pairs(mesh)
    mesh.check()
    assert_contains(mesh, points)


def test_hull_skips_interior_points():
    rng = np.random.default_rng(3)
    corners = np.array([[x, y, z] for x in (-1.0, 1.0)
                        for y in (-1.0, 1.0) for z in (-1.0, 1.0)])
    inner = rng.uniform(-0.5, 0.5, size=(30, 3))
    points = np.vstack([inner[:15], corners, inner[15:]])

    mesh = convex_hull(points)

    assert len(mesh.vertices) == 8
    assert mesh.size == (8, 18, 12)
    assert_contains(mesh, points)
    mesh.check()


def test_hull_of_tetrahedron_is_outward():
    points = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0],
                       [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
    mesh = convex_hull(points)
    center = points.mean(axis=0)

    assert mesh.size == (4, 6, 4)

    for f in mesh:
        assert f.directed_distance_to(center) < 0.0


def test_hull_rejects_degenerate_input():
    with pytest.raises(ValueError):
        convex_hull(np.eye(3))

    with pytest.raises(ValueError, match='collinear'):
        convex_hull([[float(i), 0.0, 0.0] for i in range(5)])

    with pytest.raises(ValueError, match='coplanar'):
        convex_hull([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0],
                     [0.0, 1.0, 0.0], [1.0, 1.0, 0.0]])

    with pytest.raises(ValueError):
        convex_hull([1.0, 2.0, 3.0])
