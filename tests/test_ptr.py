import copy

from halfmesh.hds import Mesh
from halfmesh.ptr import Ptr


def test_empty_handle_never_resolves():
    assert Ptr.empty().upgrade() is None
    assert Ptr(None).upgrade() is None
    assert not Ptr.empty().is_valid()
    assert not Ptr.empty()


def test_handle_resolves_registered_item():
    mesh = Mesh()
    v = mesh.add_vertex([1.0, 2.0, 3.0])
    ptr = Ptr.new(v)

    assert ptr.upgrade() is v
    assert ptr.is_valid()
    assert ptr


def test_clone_refers_to_same_item():
    mesh = Mesh()
    v = mesh.add_vertex([0.0, 0.0, 0.0])
    ptr = Ptr.new(v)

    assert ptr.clone().upgrade() is v
    assert copy.copy(ptr).upgrade() is v
    assert Ptr.new(ptr).upgrade() is v


def test_handle_stops_resolving_after_removal():
    mesh = Mesh()
    v = mesh.add_vertex([0.0, 0.0, 0.0])
    ptr = Ptr.new(v)
    clone = ptr.clone()

    mesh.pop_vertex(v)

    # v is still referenced here, but no handle may reach it.
    assert v.deleted
    assert ptr.upgrade() is None
    assert clone.upgrade() is None


def test_merge_upgrade():
    mesh = Mesh()
    v = mesh.add_vertex([0.0, 0.0, 0.0])
    w = mesh.add_vertex([1.0, 0.0, 0.0])

    assert Ptr.merge_upgrade(Ptr.new(v), Ptr.new(w)) == (v, w)
    assert Ptr.merge_upgrade(Ptr.new(v), Ptr.empty()) is None

    mesh.pop_vertex(w)
    assert Ptr.merge_upgrade(Ptr.new(v), Ptr.new(w)) is None


def test_repr():
    mesh = Mesh()
    v = mesh.add_vertex([0.0, 0.0, 0.0])

    assert repr(Ptr.new(v)) == 'Ptr(Vertex(1))'
    assert repr(Ptr.empty()) == 'Ptr(None)'
