import numpy as np
import pytest

from halfmesh.errors import TopologyError
from halfmesh.pairs import validate_pairs

from conftest import snapshot


def find_edge(mesh, v, w):
    return next(h for h in mesh.halfedges.values()
                if h.origin.id == v and h.target.id == w)


def test_flip_octahedron_edge(octa):
    # Edge between top apex and middle left front corner. The opposite
    # corners of its two triangles are 3 and 4.
    e = find_edge(octa, 1, 2)
    faces = sorted(f.id for f in e.adjacent_faces())

    assert octa.flip_edge(e) is e

    assert {e.origin.id, e.target.id} == {3, 4}
    assert e.pair.origin is e.target
    assert sorted(f.id for f in e.adjacent_faces()) == faces
    assert octa.size == (6, 12, 8)
    assert octa.vertices[1].degree == 3
    assert octa.vertices[2].degree == 3
    assert octa.vertices[3].degree == 5
    assert octa.vertices[4].degree == 5

    validate_pairs(octa)
    octa.check()


def test_flip_updates_face_attributes(octa):
    e = find_edge(octa, 1, 2)
    octa.flip_edge(e)

    for f in e.adjacent_faces():
        corners = [v.point for v in f]
        n = np.cross(corners[1] - corners[0], corners[2] - corners[0])

        assert np.allclose(f.center, np.mean(corners, axis=0))
        assert np.allclose(f.normal, n / np.linalg.norm(n))


def test_flip_twice_restores_edge(octa):
    e = find_edge(octa, 1, 2)
    octa.flip_edge(e)
    octa.flip_edge(e)

    assert {e.origin.id, e.target.id} == {1, 2}
    validate_pairs(octa)
    octa.check()


def test_flip_rejects_existing_diagonal(tetra):
    e = tetra.halfedges[1]
    before = snapshot(tetra)

    with pytest.raises(TopologyError, match='already connected'):
        tetra.flip_edge(e)

    assert snapshot(tetra) == before


def test_split_edge(tetra):
    e = tetra.halfedges[1]
    a, b = e.origin, e.target

    m = tetra.split_edge(e)

    assert tetra.size == (5, 9, 6)
    assert np.allclose(m.point, 0.5 * (a.point + b.point))
    assert m.degree == 4
    assert e.origin is a and e.target is m

    validate_pairs(tetra)
    tetra.check()


def test_split_edge_parameter(octa):
    e = find_edge(octa, 1, 2)
    a, b = e.origin.point.copy(), e.target.point.copy()

    m = octa.split_edge(e, 0.25)

    assert np.allclose(m.point, a + 0.25 * (b - a))
    assert octa.size == (7, 15, 10)

    for f in m.adjacent_faces():
        assert f.directed_distance_to([0.0, 0.0, 0.0]) < 0.0

    validate_pairs(octa)
    octa.check()


@pytest.mark.parametrize('t', [0.0, 1.0, -0.5, 2.0])
def test_split_edge_rejects_bad_parameter(tetra, t):
    before = snapshot(tetra)

    with pytest.raises(ValueError):
        tetra.split_edge(tetra.halfedges[1], t)

    assert snapshot(tetra) == before


def test_split_then_flip(octa):
    m = octa.split_edge(find_edge(octa, 1, 2))

    # The new spoke towards the top apex can be flipped away.
    e = next(h for h in m.adjacent_edges() if h.target.id == 1)
    octa.flip_edge(e)

    validate_pairs(octa)
    octa.check()


def test_split_rejects_degenerate_quadrilateral(tetra):
    # Two triangles glued along their boundary share all three corners.
    tetra.remove_vert(1)
    e = next(iter(tetra.halfedges.values()))
    before = snapshot(tetra)

    with pytest.raises(TopologyError, match='quadrilateral is degenerate'):
        tetra.split_edge(e)

    assert snapshot(tetra) == before
    assert tetra.size == (3, 3, 2)
