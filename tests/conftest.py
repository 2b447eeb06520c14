"""Shared mesh fixtures."""

import numpy as np
import pytest

from halfmesh.hds import Mesh

TETRA_POINTS = [
    [0.0, 0.0, 1.0],
    [-1.0, -1.0, 0.0],
    [1.0, -1.0, 0.0],
    [0.0, 1.0, 0.0],
]

OCTA_POINTS = [
    [0.0, 0.0, 1.0],
    [-1.0, -1.0, 0.0],
    [1.0, -1.0, 0.0],
    [-1.0, 1.0, 0.0],
    [1.0, 1.0, 0.0],
    [0.0, 0.0, -1.0],
]


@pytest.fixture
def tetra():
    return Mesh.from_tetrahedron_pts(*TETRA_POINTS)


@pytest.fixture
def octa():
    return Mesh.from_octahedron_pts(*OCTA_POINTS)


@pytest.fixture
def tetra_centroid():
    return np.mean(np.asarray(TETRA_POINTS), axis=0)


def snapshot(mesh):
    """Ids of all registered items, for no-mutation checks."""
    return (
        sorted(mesh.vertices),
        sorted(mesh.halfedges),
        sorted(mesh.faces),
        {vid: v.edge.id if v.edge is not None else None
         for vid, v in mesh.vertices.items()},
        {hid: (h.origin.id, h.next.id, h.pair.id, h.face.id)
         for hid, h in mesh.halfedges.items()},
    )
