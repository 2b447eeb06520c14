# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Combinatorial mesh item neighborhood iterators.

Every traversal is a generator: it is consumed in a single pass and a new
one has to be created to traverse again. Links are re-resolved at each
step. A link that fails to resolve ends the traversal early instead of
raising, so iterating over a partially rewired neighborhood is safe.

Around a vertex, outgoing halfedges are visited in **clockwise** order
(``h -> h.pair.next``). Around a face, boundary halfedges are visited in
**counter-clockwise** order (``h -> h.next``), as determined by the face
orientation.

Note
----
When applied to a :class:`~halfmesh.hds.Mesh` instance, the iterators
:func:`verts`, :func:`halfs` and :func:`faces` visit the items registered
in the respective mesh container.
"""

from halfmesh.ptr import Ptr


def verts(obj):
    """ Vertex iterator.

    The returned iterator traverses adjacent/incident vertices
    of `obj` depending on its type:

    .. table::
       :width: 100%
       :widths: 20, 80

       ================= ================================================
       :class:`Vertex`   ↻ traversal of adjacent vertices
       ----------------- ------------------------------------------------
       :class:`Halfedge` origin, then target
       ----------------- ------------------------------------------------
       :class:`Face`     ↺ traversal of incident vertices
       ----------------- ------------------------------------------------
       :class:`Mesh`     traversal of :attr:`~Mesh.vertices`
       ================= ================================================

    Parameters
    ----------
    obj : Vertex or Halfedge or Face or Mesh
        The base object.

    Yields
    ------
    Vertex
    """
    return obj._viter()


def halfs(obj):
    """ Halfedge iterator.

    .. table::
       :width: 100%
       :widths: 20, 80

       ================= ================================================
       :class:`Vertex`   ↻ traversal of outgoing halfedges
       ----------------- ------------------------------------------------
       :class:`Halfedge` ↻ halfedges around origin, then around target
       ----------------- ------------------------------------------------
       :class:`Face`     ↺ traversal of boundary halfedges
       ----------------- ------------------------------------------------
       :class:`Mesh`     traversal of :attr:`~Mesh.halfedges`
       ================= ================================================

    Parameters
    ----------
    obj : Vertex or Halfedge or Face or Mesh
        The base object.

    Yields
    ------
    Halfedge
    """
    return obj._hiter()


def edges(mesh):
    """ Edge iterator.

    An undirected edge is a pair of oppositely oriented halfedges. This
    iterator yields exactly one of the two halfedge representatives of
    each edge, the one whose origin has the smaller id.

    Parameters
    ----------
    mesh : Mesh
        Mesh instance.

    Yields
    ------
    Halfedge
    """
    return mesh._eiter()


def faces(obj):
    """ Face iterator.

    .. table::
       :width: 100%
       :widths: 20, 80

       ================= ================================================
       :class:`Vertex`   ↻ traversal of incident faces
       ----------------- ------------------------------------------------
       :class:`Halfedge` face, then face of the pair
       ----------------- ------------------------------------------------
       :class:`Face`     ↺ traversal of edge-adjacent faces
       ----------------- ------------------------------------------------
       :class:`Mesh`     traversal of :attr:`~Mesh.faces`
       ================= ================================================

    Parameters
    ----------
    obj : Vertex or Halfedge or Face or Mesh
        The base object.

    Yields
    ------
    Face
    """
    return obj._fiter()


def to_list(items):
    """ Materialize a traversal.

    Handles are upgraded, anything that does not resolve is dropped.

    Parameters
    ----------
    items : iterable of Vertex, Halfedge, Face, Ptr or None
        Items or item handles.

    Returns
    -------
    list
        Resolved mesh items in traversal order.
    """
    result = []

    for item in items:
        if isinstance(item, Ptr):
            item = item.upgrade()

        if item is not None:
            result.append(item)

    return result


def vertex_halfs(ptr):
    """ Outgoing halfedges around a vertex.

    Parameters
    ----------
    ptr : Ptr
        Handle of the anchor halfedge, usually ``vertex.edge_ptr``.

    Yields
    ------
    Halfedge
        Next outgoing halfedge in clockwise order.
    """
    start = ptr.upgrade()

    if start is None:
        return

    h = start

    while True:
        yield h

        pair = h.pair

        if pair is None:
            return

        h = pair.next

        if h is None or h is start:
            return


def vertex_verts(ptr):
    """ Adjacent vertices around a vertex, clockwise.
    """
    for h in vertex_halfs(ptr):
        pair = h.pair

        if pair is None:
            return

        v = pair.origin

        if v is not None:
            yield v


def vertex_faces(ptr):
    """ Incident faces around a vertex, clockwise.
    """
    for h in vertex_halfs(ptr):
        f = h.face

        if f is not None:
            yield f


def face_halfs(ptr):
    """ Boundary halfedges of a face.

    Parameters
    ----------
    ptr : Ptr
        Handle of the anchor halfedge, usually ``face.edge_ptr``.

    Yields
    ------
    Halfedge
        Next halfedge in counter-clockwise order.
    """
    start = ptr.upgrade()

    if start is None:
        return

    h = start

    while True:
        yield h
        h = h.next

        if h is None or h is start:
            return


def face_verts(ptr):
    """ Boundary vertices of a face, counter-clockwise.
    """
    for h in face_halfs(ptr):
        v = h.origin

        if v is not None:
            yield v


def face_faces(ptr):
    """ Edge-adjacent faces of a face, counter-clockwise.

    The face across each boundary halfedge is the face of its pair.
    """
    for h in face_halfs(ptr):
        pair = h.pair

        if pair is None:
            return

        f = pair.face

        if f is not None:
            yield f


def halfedge_verts(halfedge):
    """ Origin and target of a halfedge.

    Yields at most two vertices, fewer if links do not resolve.
    """
    origin = halfedge.origin

    if origin is not None:
        yield origin

    target = halfedge.target

    if target is not None:
        yield target


def halfedge_halfs(halfedge):
    """ Halfedges around the origin, then around the target.

    Both vertex neighborhoods are traversed clockwise. A neighborhood whose
    vertex does not resolve is skipped.
    """
    origin = halfedge.origin

    if origin is not None:
        yield from vertex_halfs(origin.edge_ptr)

    target = halfedge.target

    if target is not None:
        yield from vertex_halfs(target.edge_ptr)


def halfedge_faces(halfedge):
    """ Face to the left, then face to the right of a halfedge.

    The face to the right is the face of the pair halfedge.
    """
    face = halfedge.face

    if face is not None:
        yield face

    face = halfedge.pair_face

    if face is not None:
        yield face
