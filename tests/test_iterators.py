import numpy as np

import halfmesh.iterators as iterators
from halfmesh.hds import Face
from halfmesh.hds import Halfedge
from halfmesh.hds import Vertex
from halfmesh.ptr import Ptr


def test_vertex_neighborhood_of_tetrahedron(tetra):
    apex = tetra.vertices[1]

    verts = list(apex.adjacent_verts())
    halfs = list(apex.adjacent_edges())
    faces = list(apex.adjacent_faces())

    assert sorted(v.id for v in verts) == [2, 3, 4]
    assert len(halfs) == 3
    assert all(h.origin is apex for h in halfs)
    assert [h.target for h in halfs] == verts
    assert len(faces) == 3
    assert len(set(f.id for f in faces)) == 3
    assert apex.degree == 3


def test_vertex_neighbors_are_distinct_on_octahedron(octa):
    for v in octa.vertices.values():
        ids = [w.id for w in v.adjacent_verts()]
        assert len(ids) == 4
        assert len(set(ids)) == 4
        assert v.id not in ids


def test_vertex_traversal_is_clockwise(tetra, tetra_centroid):
    # Seen from outside, consecutive neighbors in clockwise order span a
    # triangle whose normal points inward.
    for v in tetra.vertices.values():
        p = v.point
        outward = p - tetra_centroid
        verts = list(v.adjacent_verts())

        for a, b in zip(verts, verts[1:] + verts[:1]):
            n = np.cross(a.point - p, b.point - p)
            assert np.dot(n, outward) < 0.0


def test_face_traversal(tetra):
    for f in tetra:
        halfs = list(f.adjacent_edges())

        assert len(halfs) == 3
        assert all(h.face is f for h in halfs)
        assert [h.origin for h in halfs] == list(f.adjacent_verts())
        assert list(f) == list(f.adjacent_verts())
        assert len(f) == 3

        faces = list(f.adjacent_faces())
        assert len(faces) == 3
        assert f not in faces
        assert faces == [h.pair.face for h in halfs]


def test_halfedge_neighborhood(tetra):
    h = tetra.halfedges[1]

    assert list(h.adjacent_verts()) == [h.origin, h.target]
    assert list(h.adjacent_faces()) == [h.face, h.pair.face]

    halfs = list(h.adjacent_edges())
    assert len(halfs) == 6
    assert all(g.origin is h.origin for g in halfs[:3])
    assert all(g.origin is h.target for g in halfs[3:])


def test_module_level_dispatch(tetra):
    v = tetra.vertices[1]
    f = tetra.faces[1]

    assert list(iterators.verts(v)) == list(v.adjacent_verts())
    assert list(iterators.halfs(f)) == list(f.adjacent_edges())
    assert list(iterators.faces(v)) == list(v.adjacent_faces())

    assert len(list(iterators.verts(tetra))) == 4
    assert len(list(iterators.halfs(tetra))) == 12
    assert len(list(iterators.faces(tetra))) == 4
    assert len(list(iterators.edges(tetra))) == 6


def test_to_list_drops_unresolved():
    v = Vertex(1, [0.0, 0.0, 0.0])
    assert iterators.to_list([Ptr.new(v), None, Ptr.empty(), v]) == [v, v]


def test_unlinked_items_yield_nothing():
    v = Vertex(1, [0.0, 0.0, 0.0])
    h = Halfedge(1)
    f = Face(1)

    assert list(v.adjacent_verts()) == []
    assert list(v.adjacent_edges()) == []
    assert list(h.adjacent_verts()) == []
    assert list(h.adjacent_faces()) == []
    assert list(h.adjacent_edges()) == []
    assert list(f.adjacent_edges()) == []
    assert len(f) == 0


def test_broken_loop_ends_traversal(tetra):
    f = tetra.faces[1]
    h = f.edge
    h.next.next = None

    assert len(list(f.adjacent_edges())) == 2


def test_traversal_skips_removed_face(tetra):
    v = tetra.vertices[1]
    f = next(v.adjacent_faces())

    tetra.pop_face(f)

    faces = list(v.adjacent_faces())
    assert len(faces) == 2
    assert f not in faces


def test_halfedge_traversal_is_lazy(tetra):
    h = tetra.halfedges[1]
    halfs = h.adjacent_edges()

    # Links are resolved on the first step, not when the traversal is
    # created.
    tetra.pop_vertex(h.origin)

    assert [g.origin for g in halfs] == [h.target] * 3
