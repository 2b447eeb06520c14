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

""" Halfedge data structure.

A closed, triangulated 2-manifold surface is described by three tables
owned by a :class:`Mesh` instance:

    - a dictionary of :class:`Vertex` objects,
    - a dictionary of :class:`Halfedge` objects,
    - and a dictionary of :class:`Face` objects,

each keyed by item id. Ids are allocated per item type by the mesh, start
at 1 and are never reused within a mesh.

Items link to each other through :class:`~halfmesh.ptr.Ptr` handles. Link
attributes resolve their handle on access and evaluate to :obj:`None` once
the linked item has been removed from its table.

Note
----
Local edits validate their input completely before they modify anything.
If an exception from :mod:`halfmesh.errors` propagates out of a
:class:`Mesh` method, the mesh has not been changed.
"""

import logging
from numbers import Integral

import numpy as np

import halfmesh.iterators as iterators
import halfmesh.math as vec
import halfmesh.pairs as pairs
from halfmesh.errors import InvalidReferenceError
from halfmesh.errors import MeshError
from halfmesh.errors import NonManifoldError
from halfmesh.errors import TopologyError
from halfmesh.ptr import Ptr

__all__ = ['Mesh', 'Vertex', 'Halfedge', 'Face', 'MeshError',
           'NonManifoldError', 'TopologyError', 'InvalidReferenceError',
           'VISIBILITY_EPSILON']

logger = logging.getLogger(__name__)

VISIBILITY_EPSILON = 1e-7
""" Minimal directed distance for a point to be visible from a face. """


class Mesh:
    """ Mesh kernel.

    The combinatorics of a mesh can be built from a sequence of vertex
    coordinates and a sequence of triangles, or item by item via the
    factory and registration methods.

    Parameters
    ----------
    points : array_like, optional
        Vertex coordinates, one row per vertex.
    triangles : array_like, optional
        Triangle definitions, 0-based indices into `points`.

    Raises
    ------
    ValueError
        If `triangles` is given without `points` or defines a degenerate
        triangle.
    NonManifoldError
        If the triangles do not form a closed 2-manifold.


    A tetrahedron can be set up from explicit index triples:

    >>> points = [[0, 0, 1], [-1, -1, 0], [1, -1, 0], [0, 1, 0]]
    >>> mesh = Mesh(points, [[0, 1, 2], [1, 0, 3], [2, 3, 0], [3, 2, 1]])
    >>> mesh.size
    (4, 6, 4)
    """

    def __init__(self, points=None, triangles=None):
        """ Initialize from vertex and triangle lists.
        """
        if points is None and triangles is not None:
            msg = "triangle definitions require 'points' argument != None"
            raise ValueError(msg)

        # Item tables. The tables are the only owners of mesh items, all
        # links between items are weak.
        self._verts = dict()
        self._halfs = dict()
        self._faces = dict()

        # Id counters, one per item type. The last id handed out.
        self._vid = 0
        self._hid = 0
        self._fid = 0

        if points is not None:
            self._build(points, [] if triangles is None else triangles)

    def __iter__(self):
        """ Face iterator.

        Yields
        ------
        Face
            Next registered face in insertion order.
        """
        return iter(list(self._faces.values()))

    def __contains__(self, item):
        """ Registration test.

        Parameters
        ----------
        item : Vertex or Halfedge or Face or Ptr
            Item to be tested.

        Returns
        -------
        bool
            :obj:`True` if `item` resolves to an item registered in
            this mesh.
        """
        if isinstance(item, Ptr):
            item = item.upgrade()

        table = self._table(item)

        return table is not None and table.get(item.id) is item

    @property
    def vertices(self):
        """ Vertex table.

        Dictionary that maps vertex ids to :class:`Vertex` instances. This
        dictionary should not be modified directly.

        :type: dict[int, Vertex]
        """
        return self._verts

    @property
    def halfedges(self):
        """ Halfedge table.

        Dictionary that maps halfedge ids to :class:`Halfedge` instances.
        This dictionary should not be modified directly.

        :type: dict[int, Halfedge]
        """
        return self._halfs

    @property
    def faces(self):
        """ Face table.

        Dictionary that maps face ids to :class:`Face` instances. This
        dictionary should not be modified directly.

        :type: dict[int, Face]
        """
        return self._faces

    @property
    def size(self):
        """ Mesh size.

        The attribute value :math:`(v, e, f)` holds the number of vertices,
        the number of (undirected) edges, and the number of faces.

        :type: (int, int, int)
        """
        return len(self._verts), len(self._halfs) // 2, len(self._faces)

    @classmethod
    def from_face_vertex_mesh(cls, points, triangles):
        """ Build a mesh from vertex coordinates and triangles.

        Equivalent to ``Mesh(points, triangles)``.

        Parameters
        ----------
        points : array_like
            Vertex coordinates.
        triangles : array_like
            Triangle definitions, 0-based vertex indexing.

        Returns
        -------
        Mesh
        """
        return cls(points, triangles)

    @classmethod
    def from_tetrahedron_pts(cls, p1, p2, p3, p4):
        """ Build a tetrahedron.

        Parameters
        ----------
        p1 : array_like
            Apex.
        p2 : array_like
            Bottom left front corner.
        p3 : array_like
            Bottom right front corner.
        p4 : array_like
            Bottom rear corner.

        Returns
        -------
        Mesh
            Closed mesh with 4 vertices, 12 halfedges and 4 faces.
        """
        mesh = cls()
        v1, v2, v3, v4 = (mesh.make_vertex(p) for p in (p1, p2, p3, p4))

        for tri in ((v1, v2, v3), (v2, v1, v4), (v3, v4, v1), (v4, v3, v2)):
            mesh.add_triangle(mesh.make_triangle(*tri))

        mesh.extend_vertices([v1, v2, v3, v4])
        pairs.connect_pairs(mesh)

        return mesh

    @classmethod
    def from_octahedron_pts(cls, p1, p2, p3, p4, p5, p6):
        """ Build an octahedron.

        Parameters
        ----------
        p1 : array_like
            Top apex.
        p2, p3 : array_like
            Middle left front and middle right front corners.
        p4, p5 : array_like
            Middle left back and middle right back corners.
        p6 : array_like
            Bottom apex.

        Returns
        -------
        Mesh
            Closed mesh with 6 vertices, 24 halfedges and 8 faces.
        """
        mesh = cls()
        v1, v2, v3, v4, v5, v6 = (mesh.make_vertex(p)
                                  for p in (p1, p2, p3, p4, p5, p6))

        for tri in ((v1, v2, v3), (v1, v4, v2), (v1, v3, v5), (v1, v5, v4),
                    (v6, v3, v2), (v6, v2, v4), (v6, v5, v3), (v6, v4, v5)):
            mesh.add_triangle(mesh.make_triangle(*tri))

        mesh.extend_vertices([v1, v2, v3, v4, v5, v6])
        pairs.connect_pairs(mesh)

        return mesh

    def new_vert_id(self):
        """ Allocate a vertex id.

        Returns
        -------
        int
            Fresh vertex id, never handed out before by this mesh.
        """
        self._vid += 1
        return self._vid

    def new_edge_id(self):
        """ Allocate a halfedge id.
        """
        self._hid += 1
        return self._hid

    def new_face_id(self):
        """ Allocate a face id.
        """
        self._fid += 1
        return self._fid

    def make_vertex(self, point, edge=None):
        """ Create a vertex.

        The vertex gets a fresh id but is **not** registered. Use
        :meth:`push_vertex` or :meth:`add_vertex` for that.

        Parameters
        ----------
        point : array_like, shape (3, )
            Vertex coordinates.
        edge : Halfedge or Ptr, optional
            Outgoing halfedge.

        Returns
        -------
        Vertex
        """
        return Vertex(self.new_vert_id(), point, edge)

    def make_halfedge(self, origin=None):
        """ Create an unregistered halfedge.

        Parameters
        ----------
        origin : Vertex or Ptr, optional
            Origin vertex.

        Returns
        -------
        Halfedge
        """
        return Halfedge(self.new_edge_id(), origin)

    def make_face(self, edge=None):
        """ Create an unregistered face.

        Parameters
        ----------
        edge : Halfedge or Ptr, optional
            Boundary halfedge.

        Returns
        -------
        Face
        """
        return Face(self.new_face_id(), edge)

    def make_triangle(self, v1, v2, v3):
        """ Create an isolated triangle.

        Creates three halfedges and one face and links them to form the
        boundary loop ``v1 -> v2 -> v3 -> v1``. Each vertex is pointed at
        its outgoing halfedge of the new loop.

        Parameters
        ----------
        v1, v2, v3 : Vertex or Ptr
            Triangle corners in counter-clockwise order.

        Raises
        ------
        InvalidReferenceError
            If one of the vertex handles does not resolve.

        Returns
        -------
        tuple(Face, Halfedge, Halfedge, Halfedge)
            The new face and its halfedges.

        Note
        ----
        Neither the face nor its halfedges are registered, and the pair
        links of the halfedges are still empty. See :meth:`add_triangle`
        and :func:`~halfmesh.pairs.connect_pairs`.
        """
        corners = [_upgrade(v) for v in (v1, v2, v3)]

        if any(v is None for v in corners):
            raise InvalidReferenceError('triangle vertex does not resolve')

        loop = [self.make_halfedge(v) for v in corners]

        # It does not matter which outgoing halfedge a vertex refers to,
        # as long as the halfedge starts at the vertex.
        for v, h in zip(corners, loop):
            v.edge = h

        for i, h in enumerate(loop):
            h.next = loop[(i + 1) % 3]

        face = self.make_face(loop[0])

        for h in loop:
            h.face = face

        face.compute_attrs()

        return (face, *loop)

    def add_vertex(self, point):
        """ Create and register a new vertex.

        Parameters
        ----------
        point : array_like, shape (3, )
            Vertex coordinates.

        Returns
        -------
        Vertex
            The newly created, isolated vertex.
        """
        return self.push_vertex(self.make_vertex(point))

    def add_triangle(self, triangle):
        """ Register a triangle.

        Parameters
        ----------
        triangle : tuple(Face, Halfedge, Halfedge, Halfedge)
            Value returned by :meth:`make_triangle`.
        """
        face, *loop = triangle

        self.extend_halfedges(loop)
        self.push_face(face)

    def push_vertex(self, vertex):
        """ Register a vertex.

        Parameters
        ----------
        vertex : Vertex
            Vertex created by this mesh.

        Returns
        -------
        Vertex
            The registered vertex.
        """
        self._verts[_registrable(vertex).id] = vertex
        return vertex

    def extend_vertices(self, vertices):
        """ Register several vertices.
        """
        for v in vertices:
            self.push_vertex(v)

    def push_halfedge(self, halfedge):
        """ Register a halfedge.

        Returns
        -------
        Halfedge
            The registered halfedge.
        """
        self._halfs[_registrable(halfedge).id] = halfedge
        return halfedge

    def extend_halfedges(self, halfedges):
        """ Register several halfedges.
        """
        for h in halfedges:
            self.push_halfedge(h)

    def push_face(self, face):
        """ Register a face.

        Face attributes are recomputed before the face is added. Its
        boundary loop has to be complete at this point.

        Raises
        ------
        TopologyError
            If the face is not a triangle.

        Returns
        -------
        Face
            The registered face.
        """
        _registrable(face).compute_attrs()
        self._faces[face.id] = face
        return face

    def extend_faces(self, faces):
        """ Register several faces.
        """
        for f in faces:
            self.push_face(f)

    def pop_vertex(self, vertex):
        """ Remove a vertex.

        The vertex is marked as deleted. Handles that refer to it do not
        resolve anymore.

        Parameters
        ----------
        vertex : Vertex or Ptr or int
            Vertex or vertex id.

        Raises
        ------
        InvalidReferenceError
            If `vertex` is not registered.

        Returns
        -------
        Vertex
            The removed vertex.
        """
        v = self._resolve(vertex, self._verts)
        del self._verts[v.id]
        v._deleted = True

        return v

    def pop_halfedge(self, halfedge):
        """ Remove a halfedge.

        See :meth:`pop_vertex`.
        """
        h = self._resolve(halfedge, self._halfs)
        del self._halfs[h.id]
        h._deleted = True

        return h

    def pop_face(self, face):
        """ Remove a face.

        See :meth:`pop_vertex`.
        """
        f = self._resolve(face, self._faces)
        del self._faces[f.id]
        f._deleted = True

        return f

    def move_vertex(self, vertex, point):
        """ Move a vertex.

        Attributes of all incident faces are recomputed.

        Parameters
        ----------
        vertex : Vertex or Ptr or int
            Vertex to be moved.
        point : array_like, shape (3, )
            New vertex coordinates.
        """
        v = self._resolve(vertex, self._verts)
        v.move_to(point)

        for f in v.adjacent_faces():
            f.compute_attrs()

    def are_faces_adjacent(self, face_l, face_r):
        """ Face adjacency test.

        Parameters
        ----------
        face_l : Face or Ptr
            First face.
        face_r : Face or Ptr
            Second face.

        Returns
        -------
        bool
            :obj:`True` if a boundary halfedge of `face_l` has a pair whose
            face is `face_r`. Handles that do not resolve give
            :obj:`False`.
        """
        face_l = _upgrade(face_l)
        face_r = _upgrade(face_r)

        if face_l is None or face_r is None:
            return False

        return any(h.pair_face is face_r for h in face_l.adjacent_edges())

    def triangulate_face(self, point, face):
        """ Subdivide a triangle.

        Inserts a new vertex at `point` and connects it to the corners of
        `face`, splitting it into three triangles. The original face is
        removed, its boundary halfedges are reused.

        Parameters
        ----------
        point : array_like, shape (3, )
            Location of the new vertex.
        face : Face or Ptr
            Triangle to subdivide.

        Raises
        ------
        InvalidReferenceError
            If `face` does not resolve to a face of this mesh.
        TopologyError
            If `face` is not a triangle.

        Returns
        -------
        list[Face]
            The three new faces.
        """
        face = self._resolve(face, self._faces)
        point = vec.as_point(point)
        loop = list(face.adjacent_edges())

        if len(loop) != 3 or any(h.next is None for h in loop):
            logger.warning('cannot triangulate %r, no triangle', face)
            raise TopologyError(f'{face!r} is not a triangle')

        apex = self.push_vertex(self.make_vertex(point))
        fan = []

        for i, base in enumerate(loop):
            corner = base.origin
            corner.edge = base

            f = self.make_face(base)
            lead = self.make_halfedge(loop[(i + 1) % 3].origin)
            trail = self.make_halfedge(apex)

            base.next = lead
            lead.next = trail
            trail.next = base

            for h in (base, lead, trail):
                h.face = f

            apex.edge = trail
            fan.append((f, lead, trail))

        # The edge leading into the apex in one triangle is the pair of the
        # edge trailing out of it in the next triangle.
        for i, (_, lead, _) in enumerate(fan):
            trail = fan[(i + 1) % 3][2]
            lead.pair = trail
            trail.pair = lead

        self.pop_face(face)

        for f, lead, trail in fan:
            self.extend_halfedges([lead, trail])
            self.push_face(f)

        logger.debug('triangulated %r with apex %r', face, apex)

        return [f for f, _, _ in fan]

    def attach_point_for_faces(self, point, faces):
        """ Replace a patch of faces by a cone over its boundary.

        The faces in `faces` are removed together with all vertices and
        edges that are not incident to any remaining face. The boundary
        of the removed patch, the *horizon*, is connected to a new vertex
        at `point`. This is the basic step of incremental convex hull
        construction, where `faces` are the faces visible from `point`.

        Parameters
        ----------
        point : array_like, shape (3, )
            Location of the new apex vertex.
        faces : iterable of Face or Ptr
            Faces to remove. Handles that do not resolve are ignored.

        Raises
        ------
        NonManifoldError
            If the removed faces have no horizon, or if their horizon
            does not form a single closed loop.

        Returns
        -------
        list[Face]
            The newly created faces in horizon order.

        Note
        ----
        Either the mesh is modified completely or not at all.
        """
        point = vec.as_point(point)
        doomed = dict()

        for f in faces:
            f = _upgrade(f)

            if f is not None and self._faces.get(f.id) is f:
                doomed[f.id] = f

        # Boundary edges of removed faces are either interior to the
        # removed patch or part of its horizon.
        interior = []
        horizon = []

        for f in doomed.values():
            for h in f.adjacent_edges():
                other = h.pair_face

                if other is None or other.id in doomed:
                    interior.append(h)
                else:
                    horizon.append(h)

        removable = dict()

        for f in doomed.values():
            for v in f.adjacent_verts():
                if all(g.id in doomed for g in v.adjacent_faces()):
                    removable[v.id] = v

        if not horizon:
            logger.warning('attach point %s: no horizon edges', point)
            raise NonManifoldError('no horizon edges found')

        # Successor of a horizon edge is the horizon edge leaving its
        # target vertex.
        on_horizon = {h.id for h in horizon}
        successor = dict()

        for h in horizon:
            target = h.target

            if target is None:
                continue

            for g in target.adjacent_edges():
                if g.id in on_horizon:
                    successor[h.id] = g
                    break

        if set(successor) != on_horizon or \
                {g.id for g in successor.values()} != on_horizon:
            logger.warning('attach point %s: malformed horizon', point)
            msg = 'horizon is malformed - it does not form a connected loop'
            raise NonManifoldError(msg)

        loop = [horizon[0]]

        while True:
            h = successor[loop[-1].id]

            if h is loop[0]:
                break

            loop.append(h)

        if len(loop) != len(horizon):
            logger.warning('attach point %s: horizon is not simple', point)
            raise NonManifoldError('horizon forms more than one loop')

        # The horizon is a single closed loop. The mesh can be modified
        # from here on.
        for h in loop:
            h.origin.edge = h

        for f in doomed.values():
            self.pop_face(f)

        for v in removable.values():
            self.pop_vertex(v)

        for h in interior:
            self.pop_halfedge(h)

        apex = self.push_vertex(self.make_vertex(point))
        fan = []

        for i, base in enumerate(loop):
            succ = loop[(i + 1) % len(loop)]

            f = self.make_face(base)
            lead = self.make_halfedge(succ.origin)
            trail = self.make_halfedge(apex)

            base.next = lead
            lead.next = trail
            trail.next = base

            for h in (base, lead, trail):
                h.face = f

            apex.edge = trail
            self.extend_halfedges([lead, trail])
            fan.append(f)

        # Close the fan around the apex.
        for i, base in enumerate(loop):
            succ = loop[(i + 1) % len(loop)]
            lead = base.next
            trail = succ.next_next

            lead.pair = trail
            trail.pair = lead

        self.extend_faces(fan)

        logger.debug('attached %r, removed %d faces, %d vertices, '
                     'created %d faces', apex, len(doomed), len(removable),
                     len(fan))

        return fan

    def remove_vert(self, vertex):
        """ Remove a vertex of degree three.

        The three triangles around `vertex` are replaced by a single
        triangle spanned by its three neighbors. This undoes
        :meth:`triangulate_face`.

        Parameters
        ----------
        vertex : Vertex or Ptr or int
            Vertex to remove.

        Raises
        ------
        InvalidReferenceError
            If `vertex` is not registered.
        TopologyError
            If `vertex` does not have exactly three outgoing halfedges,
            or if one of its incident faces is not a triangle.

        Returns
        -------
        Face
            The new face.
        """
        vertex = self._resolve(vertex, self._verts)
        spokes = list(vertex.adjacent_edges())
        spokes.reverse()

        if len(spokes) != 3:
            logger.warning('cannot remove %r of degree %d',
                           vertex, len(spokes))
            msg = 'vertex must have exactly 3 connecting edges'
            raise TopologyError(msg)

        outer = [h.next for h in spokes]

        for h, o in zip(spokes, outer):
            if h.pair is None or h.face is None or o is None or \
                    o.next_next is not h or o.pair is None:
                logger.warning('cannot remove %r, %r is no triangle',
                               vertex, h.face)
                raise TopologyError('faces around vertex must be triangles')

        for i, o in enumerate(outer):
            if o.target is not outer[(i + 1) % 3].origin:
                raise TopologyError('faces around vertex must be triangles')

        old_faces = [h.face for h in spokes]
        old_halfs = spokes + [h.pair for h in spokes]

        face = self.make_face(outer[0])

        for i, o in enumerate(outer):
            o.face = face
            o.next = outer[(i + 1) % 3]
            o.origin.edge = o

        for h in old_halfs:
            self.pop_halfedge(h)

        for f in old_faces:
            self.pop_face(f)

        self.pop_vertex(vertex)
        self.push_face(face)

        logger.debug('removed %r, replaced by %r', vertex, face)

        return face

    def flip_edge(self, edge):
        """ Flip an edge.

        The two triangles incident to `edge` form a quadrilateral. The
        edge is replaced by the other diagonal of that quadrilateral.
        Both halfedges of the edge and both faces keep their ids.

        Parameters
        ----------
        edge : Halfedge or Ptr or int
            Halfedge of the edge to flip.

        Raises
        ------
        InvalidReferenceError
            If `edge` is not registered.
        TopologyError
            If the edge cannot be flipped.

        Returns
        -------
        Halfedge
            The flipped halfedge.
        """
        e = self._resolve(edge, self._halfs)
        p = e.pair

        if p is None:
            raise TopologyError(f'{e!r} has no pair')

        F, G = e.face, p.face
        en, enn = e.next, e.next_next
        pn, pnn = p.next, p.next_next

        if F is None or G is None or enn is None or pnn is None or \
                enn.next is not e or pnn.next is not p:
            logger.warning('cannot flip %r, faces are no triangles', e)
            raise TopologyError('faces adjacent to edge must be triangles')

        a, b = e.origin, p.origin
        c, d = enn.origin, pnn.origin

        if c is d:
            raise TopologyError('quadrilateral is degenerate')

        if any(w is d for w in c.adjacent_verts()):
            logger.warning('cannot flip %r, edge (%d, %d) exists',
                           e, c.id, d.id)
            msg = f'vertices {c!r} and {d!r} are already connected'
            raise TopologyError(msg)

        e.origin = d
        p.origin = c

        e.next, enn.next, pn.next = enn, pn, e
        p.next, pnn.next, en.next = pnn, en, p

        pn.face = F
        en.face = G
        F.edge = e
        G.edge = p

        a.edge = pn
        b.edge = en

        F.compute_attrs()
        G.compute_attrs()

        logger.debug('flipped %r, now (%d, %d)', e, d.id, c.id)

        return e

    def split_edge(self, edge, t=0.5):
        """ Split an edge.

        Inserts a new vertex on `edge` and splits both incident triangles
        into two.

        Parameters
        ----------
        edge : Halfedge or Ptr or int
            Halfedge of the edge to split.
        t : float, optional
            Edge parameter of the new vertex. The vertex is placed at
            ``origin + t * (target - origin)``.

        Raises
        ------
        ValueError
            If `t` is not in the open interval (0, 1).
        InvalidReferenceError
            If `edge` is not registered.
        TopologyError
            If the faces adjacent to `edge` are not triangles.

        Returns
        -------
        Vertex
            The newly inserted vertex.
        """
        if not 0.0 < t < 1.0:
            raise ValueError(f'edge parameter must be in (0, 1), got {t}')

        e = self._resolve(edge, self._halfs)
        p = e.pair

        if p is None:
            raise TopologyError(f'{e!r} has no pair')

        F, G = e.face, p.face
        en, enn = e.next, e.next_next
        pn, pnn = p.next, p.next_next

        if F is None or G is None or enn is None or pnn is None or \
                enn.next is not e or pnn.next is not p:
            logger.warning('cannot split %r, faces are no triangles', e)
            raise TopologyError('faces adjacent to edge must be triangles')

        a, b = e.origin, p.origin
        c, d = enn.origin, pnn.origin

        if c is d:
            logger.warning('cannot split %r, quadrilateral is degenerate', e)
            raise TopologyError('quadrilateral is degenerate')

        m = self.make_vertex(vec.lerp(a.point, b.point, t))

        e2 = self.make_halfedge(m)
        p2 = self.make_halfedge(m)
        mc = self.make_halfedge(m)
        cm = self.make_halfedge(c)
        md = self.make_halfedge(m)
        dm = self.make_halfedge(d)

        F2 = self.make_face(e2)
        G2 = self.make_face(p2)

        # Triangles (a, m, c) and (m, b, c) to the left of the edge.
        e.next, mc.next, enn.next = mc, enn, e
        e2.next, en.next, cm.next = en, cm, e2

        # Triangles (b, m, d) and (m, a, d) to the right of it.
        p.next, md.next, pnn.next = md, pnn, p
        p2.next, pn.next, dm.next = pn, dm, p2

        mc.face = F
        md.face = G

        for h in (e2, en, cm):
            h.face = F2

        for h in (p2, pn, dm):
            h.face = G2

        for h, g in ((e, p2), (p, e2), (mc, cm), (md, dm)):
            h.pair = g
            g.pair = h

        m.edge = e2
        F.edge = e
        G.edge = p

        self.push_vertex(m)
        self.extend_halfedges([e2, p2, mc, cm, md, dm])
        self.extend_faces([F2, G2])

        F.compute_attrs()
        G.compute_attrs()

        logger.debug('split %r at t=%g, inserted %r', e, t, m)

        return m

    def check(self):
        """ Perform sanity checks.

        Verifies that all links resolve to items registered in this mesh
        and that pair and face loop links are consistent.

        Raises
        ------
        NonManifoldError
            Describing the first violation that was found.
        """
        for vid, v in self._verts.items():
            if v.id != vid:
                raise NonManifoldError(f'{v!r} registered as #{vid}')

            h = v.edge

            if h is not None:
                if h not in self:
                    msg = f'edge of {v!r} is not registered'
                    raise NonManifoldError(msg)

                if h.origin is not v:
                    msg = f'edge of {v!r} does not start at it'
                    raise NonManifoldError(msg)

        for hid, h in self._halfs.items():
            if h.id != hid:
                raise NonManifoldError(f'{h!r} registered as #{hid}')

            for name in ('origin', 'next', 'pair', 'face'):
                item = getattr(h, name)

                if item is None or item not in self:
                    msg = f'{name} of {h!r} does not resolve'
                    raise NonManifoldError(msg)

            if h.pair.pair is not h:
                raise NonManifoldError(f'pair of {h!r} is not involutive')

            if h.pair.origin is not h.target:
                raise NonManifoldError(f'pair of {h!r} has wrong origin')

            if h.next.face is not h.face:
                msg = f'{h!r} and its successor have different faces'
                raise NonManifoldError(msg)

            g = h

            for _ in range(3):
                g = g.next

                if g is None:
                    break

            if g is not h:
                raise NonManifoldError(f'loop of {h!r} is no triangle')

        for fid, f in self._faces.items():
            if f.id != fid:
                raise NonManifoldError(f'{f!r} registered as #{fid}')

            h = f.edge

            if h is None or h not in self:
                msg = f'edge of {f!r} does not resolve'
                raise NonManifoldError(msg)

            if h.face is not f:
                msg = f'edge of {f!r} belongs to another face'
                raise NonManifoldError(msg)

    def _build(self, points, triangles):
        """ Set up vertices and faces from index triples.
        """
        points = np.asarray(points, dtype=float)

        if points.size == 0:
            points = points.reshape(0, 3)

        if points.ndim != 2 or points.shape[1] != 3:
            msg = f'points must have shape (n, 3), got {points.shape}'
            raise ValueError(msg)

        n = len(points)
        checked = []

        # Validate everything before the first item is created.
        for tri in triangles:
            tri = [int(k) for k in tri]

            if len(tri) != 3:
                raise ValueError('face has to have exactly three vertices')

            if len(set(tri)) != 3:
                raise ValueError('face contains duplicate vertices')

            for k in tri:
                if not 0 <= k < n:
                    raise IndexError(f'vertex index {k} out of range')

            checked.append(tri)

        verts = [self.make_vertex(p) for p in points]

        for tri in checked:
            self.add_triangle(self.make_triangle(*(verts[k] for k in tri)))

        self.extend_vertices(verts)

        isolated = sum(1 for v in verts if v.edge is None)

        if isolated:
            logger.warning('mesh has %d isolated vertices', isolated)

        if self._halfs:
            pairs.connect_pairs(self)

    def _resolve(self, item, table):
        """ Look up a registered item.

        Parameters
        ----------
        item : Vertex or Halfedge or Face or Ptr or int
            Item, item handle or item id.
        table : dict
            Item table to look in.

        Raises
        ------
        InvalidReferenceError
            If `item` does not resolve to an item of `table`.
        """
        if isinstance(item, Ptr):
            item = item.upgrade()
        elif isinstance(item, Integral):
            item = table.get(int(item))

        if item is None or item._deleted:
            raise InvalidReferenceError('reference does not resolve')

        if table.get(item.id) is not item:
            raise InvalidReferenceError(f'{item!r} is not registered')

        return item

    def _table(self, item):
        if isinstance(item, Vertex):
            return self._verts
        if isinstance(item, Halfedge):
            return self._halfs
        if isinstance(item, Face):
            return self._faces

        return None

    def _viter(self):
        """ Iterator over registered vertices.
        """
        return iter(list(self._verts.values()))

    def _hiter(self):
        """ Iterator over registered halfedges.
        """
        return iter(list(self._halfs.values()))

    def _eiter(self):
        """ One halfedge per edge.
        """
        return (h for h in list(self._halfs.values())
                if h.origin is not None and h.target is not None
                and h.origin.id < h.target.id)

    def _fiter(self):
        """ Iterator over registered faces.
        """
        return iter(list(self._faces.values()))


def _upgrade(item):
    # Entities pass through, handles are resolved.
    if isinstance(item, Ptr):
        return item.upgrade()

    if item is not None and item._deleted:
        return None

    return item


def _registrable(item):
    if item._deleted:
        raise ValueError(f'{item!r} has been removed from its mesh')

    return item


class Vertex:
    """ Mesh vertex.

    Parameters
    ----------
    id : int
        Vertex id, allocated by the owning mesh.
    point : array_like, shape (3, )
        Vertex coordinates.
    edge : Halfedge or Ptr, optional
        Outgoing halfedge.

    Note
    ----
    Use :meth:`Mesh.make_vertex` or :meth:`Mesh.add_vertex` instead of
    calling the constructor directly.
    """

    def __init__(self, id, point, edge=None):
        self._id = id
        self._point = vec.as_point(point)
        self._edge = Ptr.new(edge)
        self._deleted = False

    def __repr__(self):
        return f'Vertex({self._id})'

    def __str__(self):
        x, y, z = self._point
        return f'Vertex #{self._id} at ({x:g}, {y:g}, {z:g})'

    def __array__(self, dtype=None, copy=None):
        return np.array(self._point, dtype=dtype)

    @property
    def id(self):
        """ Vertex id.

        :type: int
        """
        return self._id

    @property
    def point(self):
        """ Vertex coordinates.

        Assigning new coordinates does **not** update the attributes of
        incident faces, use :meth:`Mesh.move_vertex` for that.

        :type: numpy.ndarray
        """
        return self._point

    @point.setter
    def point(self, value):
        self._point = vec.as_point(value)

    @property
    def edge(self):
        """ Outgoing halfedge.

        :obj:`None` for isolated vertices or if the link does not resolve.

        :type: Halfedge
        """
        return self._edge.upgrade()

    @edge.setter
    def edge(self, value):
        self._edge = Ptr.new(value)

    @property
    def edge_ptr(self):
        """ Handle of the outgoing halfedge.

        :type: Ptr
        """
        return self._edge

    @property
    def deleted(self):
        """ :obj:`True` once the vertex has been removed from its mesh.

        :type: bool
        """
        return self._deleted

    @property
    def degree(self):
        """ Number of outgoing halfedges.

        :type: int
        """
        return sum(1 for _ in self._hiter())

    def move_to(self, point):
        """ Change vertex coordinates.

        Parameters
        ----------
        point : array_like, shape (3, )
            New coordinates.
        """
        self.point = point

    def is_valid(self):
        """ Check the outgoing halfedge link.

        Returns
        -------
        bool
            :obj:`True` if :attr:`edge` resolves.
        """
        return self._edge.is_valid()

    def adjacent_verts(self):
        """ Clockwise traversal of neighboring vertices.
        """
        return self._viter()

    def adjacent_edges(self):
        """ Clockwise traversal of outgoing halfedges.
        """
        return self._hiter()

    def adjacent_faces(self):
        """ Clockwise traversal of incident faces.
        """
        return self._fiter()

    def _viter(self):
        return iterators.vertex_verts(self._edge)

    def _hiter(self):
        return iterators.vertex_halfs(self._edge)

    def _fiter(self):
        return iterators.vertex_faces(self._edge)


class Halfedge:
    """ Directed edge.

    Every halfedge is part of the boundary loop of exactly one face,
    which lies to its left. Its oppositely oriented twin is available as
    :attr:`pair`. The target vertex is not stored, it is the origin of
    :attr:`next`.

    Parameters
    ----------
    id : int
        Halfedge id, allocated by the owning mesh.
    origin : Vertex or Ptr, optional
        Origin vertex.
    """

    def __init__(self, id, origin=None):
        self._id = id
        self._origin = Ptr.new(origin)
        self._next = Ptr.empty()
        self._pair = Ptr.empty()
        self._face = Ptr.empty()
        self._deleted = False

    def __repr__(self):
        return f'Halfedge({self._id})'

    @property
    def id(self):
        """ Halfedge id.

        :type: int
        """
        return self._id

    @property
    def deleted(self):
        """ :obj:`True` once the halfedge has been removed from its mesh.

        :type: bool
        """
        return self._deleted

    @property
    def origin(self):
        """ Origin vertex.

        :type: Vertex
        """
        return self._origin.upgrade()

    @origin.setter
    def origin(self, value):
        self._origin = Ptr.new(value)

    @property
    def origin_ptr(self):
        return self._origin

    @property
    def next(self):
        """ Successor in the boundary loop of :attr:`face`.

        :type: Halfedge
        """
        return self._next.upgrade()

    @next.setter
    def next(self, value):
        self._next = Ptr.new(value)

    @property
    def next_ptr(self):
        return self._next

    @property
    def pair(self):
        """ Oppositely oriented twin halfedge.

        :type: Halfedge
        """
        return self._pair.upgrade()

    @pair.setter
    def pair(self, value):
        self._pair = Ptr.new(value)

    @property
    def pair_ptr(self):
        return self._pair

    @property
    def face(self):
        """ Face to the left of the halfedge.

        :type: Face
        """
        return self._face.upgrade()

    @face.setter
    def face(self, value):
        self._face = Ptr.new(value)

    @property
    def face_ptr(self):
        return self._face

    @property
    def target(self):
        """ Target vertex, the origin of :attr:`next`.

        :type: Vertex
        """
        h = self.next
        return None if h is None else h.origin

    @property
    def next_next(self):
        """ Second successor. In a triangle this is the predecessor.

        :type: Halfedge
        """
        h = self.next
        return None if h is None else h.next

    @property
    def next_pair(self):
        """ Pair of the successor.

        :type: Halfedge
        """
        h = self.next
        return None if h is None else h.pair

    @property
    def pair_face(self):
        """ Face to the right of the halfedge.

        :type: Face
        """
        h = self.pair
        return None if h is None else h.face

    @property
    def vector(self):
        """ Vector pointing from origin to target.

        :type: numpy.ndarray
        """
        return self.target.point - self.origin.point

    @property
    def midpoint(self):
        """ Edge midpoint.

        :type: numpy.ndarray
        """
        return vec.lerp(self.origin.point, self.target.point, 0.5)

    def is_valid(self):
        """ Check the halfedge links.

        Returns
        -------
        bool
            :obj:`True` if :attr:`pair`, :attr:`face`, :attr:`origin` and
            :attr:`next` all resolve.
        """
        return all(ptr.is_valid() for ptr in
                   (self._pair, self._face, self._origin, self._next))

    def adjacent_verts(self):
        """ Origin, then target.
        """
        return self._viter()

    def adjacent_edges(self):
        """ Outgoing halfedges around origin, then around target.
        """
        return self._hiter()

    def adjacent_faces(self):
        """ Face, then face of the pair.
        """
        return self._fiter()

    def _viter(self):
        return iterators.halfedge_verts(self)

    def _hiter(self):
        return iterators.halfedge_halfs(self)

    def _fiter(self):
        return iterators.halfedge_faces(self)


class Face:
    """ Triangular face.

    Parameters
    ----------
    id : int
        Face id, allocated by the owning mesh.
    edge : Halfedge or Ptr, optional
        One of the halfedges of the boundary loop.


    Normal and centroid are cached. They are updated by
    :meth:`compute_attrs`, which every mesh operation calls when the
    boundary of a face or the position of one of its vertices changes.
    """

    def __init__(self, id, edge=None):
        self._id = id
        self._edge = Ptr.new(edge)
        self._normal = np.array([0.0, 0.0, 1.0])
        self._center = np.zeros(3)
        self._deleted = False

    def __repr__(self):
        return f'Face({self._id})'

    def __len__(self):
        """ Number of boundary halfedges.
        """
        return sum(1 for _ in self._hiter())

    def __iter__(self):
        """ Boundary vertex iterator, counter-clockwise.
        """
        return self._viter()

    @property
    def id(self):
        """ Face id.

        :type: int
        """
        return self._id

    @property
    def deleted(self):
        """ :obj:`True` once the face has been removed from its mesh.

        :type: bool
        """
        return self._deleted

    @property
    def edge(self):
        """ Halfedge of the boundary loop.

        :type: Halfedge
        """
        return self._edge.upgrade()

    @edge.setter
    def edge(self, value):
        self._edge = Ptr.new(value)

    @property
    def edge_ptr(self):
        return self._edge

    @property
    def normal(self):
        """ Unit normal vector.

        Oriented according to the right hand rule w.r.t. the boundary
        loop. Valid after :meth:`compute_attrs`.

        :type: numpy.ndarray
        """
        return self._normal

    @property
    def center(self):
        """ Centroid, the mean of the corner positions.

        :type: numpy.ndarray
        """
        return self._center

    def compute_attrs(self):
        """ Update normal and centroid.

        Raises
        ------
        TopologyError
            If the face does not have exactly three vertices.
        """
        corners = [v.point for v in self._viter()]

        if len(corners) != 3:
            raise TopologyError('face should have 3 adjacent vertices')

        p0, p1, p2 = corners

        self._center = vec.centroid(corners)
        self._normal = vec.unit(vec.cross(p1 - p0, p2 - p0))

    def num_vertices(self):
        """ Number of boundary vertices.

        Returns
        -------
        int
        """
        return sum(1 for _ in self._viter())

    def distance_to(self, point):
        """ Euclidean distance between centroid and `point`.

        Returns
        -------
        float
        """
        return vec.norm(vec.as_point(point) - self._center)

    def directed_distance_to(self, point):
        """ Signed distance of `point` to the supporting plane.

        Positive for points in front of the face, i.e., on the side the
        normal points to.

        Returns
        -------
        float
        """
        return vec.dot(vec.as_point(point) - self._center, self._normal)

    def can_see(self, point):
        """ Visibility test.

        Parameters
        ----------
        point : array_like, shape (3, )
            Query point.

        Returns
        -------
        bool
            :obj:`True` if `point` is more than :data:`VISIBILITY_EPSILON`
            in front of the face.
        """
        return self.directed_distance_to(point) > VISIBILITY_EPSILON

    def is_valid(self):
        """ Check the boundary halfedge link.

        Returns
        -------
        bool
        """
        return self._edge.is_valid()

    def adjacent_verts(self):
        """ Counter-clockwise traversal of boundary vertices.
        """
        return self._viter()

    def adjacent_edges(self):
        """ Counter-clockwise traversal of boundary halfedges.
        """
        return self._hiter()

    def adjacent_faces(self):
        """ Counter-clockwise traversal of edge-adjacent faces.
        """
        return self._fiter()

    def _viter(self):
        return iterators.face_verts(self._edge)

    def _hiter(self):
        return iterators.face_halfs(self._edge)

    def _fiter(self):
        return iterators.face_faces(self._edge)
