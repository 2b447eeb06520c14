import numpy as np
import pytest

from halfmesh.errors import InvalidReferenceError
from halfmesh.errors import TopologyError
from halfmesh.pairs import validate_pairs
from halfmesh.ptr import Ptr


@pytest.mark.parametrize('fid', [1, 2, 3, 4])
def test_triangulate_tetrahedron_face(tetra, fid):
    face = tetra.faces[fid]
    point = face.center + 0.1 * face.normal

    new_faces = tetra.triangulate_face(point, face)

    assert len(new_faces) == 3
    assert tetra.size == (5, 9, 6)
    assert face.deleted
    assert face not in tetra

    validate_pairs(tetra)
    tetra.check()

    apex = tetra.vertices[5]
    assert np.allclose(apex.point, point)
    assert apex.degree == 3
    assert sorted(f.id for f in apex.adjacent_faces()) == \
        sorted(f.id for f in new_faces)


def test_triangulate_keeps_orientation(tetra, tetra_centroid):
    face = tetra.faces[1]
    new_faces = tetra.triangulate_face(face.center + 0.1 * face.normal, face)

    for f in new_faces:
        assert f.directed_distance_to(tetra_centroid) < 0.0


def test_triangulate_accepts_handle(tetra):
    tetra.triangulate_face([0.0, -0.5, 0.5], Ptr.new(tetra.faces[1]))
    assert tetra.size == (5, 9, 6)


def test_triangulate_rejects_removed_face(tetra):
    face = tetra.faces[1]
    tetra.pop_face(face)

    with pytest.raises(InvalidReferenceError):
        tetra.triangulate_face([0.0, 0.0, 0.0], Ptr.new(face))


def test_triangulate_rejects_non_triangle(tetra):
    face = tetra.faces[1]
    face.edge.next.next = None
    before = snapshot_ids(tetra)

    with pytest.raises(TopologyError):
        tetra.triangulate_face([0.0, 0.0, 0.0], face)

    assert snapshot_ids(tetra) == before


def test_triangulate_twice(octa):
    faces = octa.triangulate_face([0.0, -0.5, 0.6], octa.faces[1])
    octa.triangulate_face(faces[0].center, faces[0])

    assert octa.size == (8, 18, 12)
    validate_pairs(octa)
    octa.check()


def snapshot_ids(mesh):
    return sorted(mesh.vertices), sorted(mesh.halfedges), sorted(mesh.faces)
