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

""" Pair link reconstruction.

A freshly assembled mesh consists of face loops (``next``, ``origin`` and
``face`` links) whose halfedges do not know their twins yet. The functions
in this module derive the ``pair`` links from vertex ids and check existing
pair links for consistency.

Both functions only support closed meshes: every halfedge ``(v, w)`` needs
an oppositely oriented halfedge ``(w, v)``.
"""

import logging

from halfmesh.errors import NonManifoldError

logger = logging.getLogger(__name__)


def _key(h):
    # Halfedges are identified by the ids of their origin and target.
    # Returns None if one of them cannot be resolved.
    origin = h.origin
    target = h.target

    if origin is None or target is None:
        return None

    return origin.id, target.id


def _edge_map(mesh):
    edge_map = dict()

    for h in mesh.halfedges.values():
        key = _key(h)

        if key is None:
            raise NonManifoldError('could not hash all mesh edges')

        # Two halfedges with the same endpoints would make the reverse
        # lookup ambiguous.
        if key in edge_map:
            raise NonManifoldError(f'edge {key} is non-manifold')

        edge_map[key] = h

    return edge_map


def connect_pairs(mesh):
    """ Establish pair links.

    Two-pass algorithm. All halfedges are first mapped by their
    ``(origin.id, target.id)`` key. Then each halfedge without a valid
    pair is linked to the halfedge stored under the reverse key, and
    vice versa.

    Parameters
    ----------
    mesh : Mesh
        Mesh with complete face loops.

    Raises
    ------
    NonManifoldError
        If a halfedge has an unresolvable origin or target, or if no
        pair halfedge exists (the mesh is not closed).

    Note
    ----
    Pair links that already resolve are left untouched. Links are only
    written once every halfedge has found its pair, a failure leaves the
    mesh unchanged.
    """
    edge_map = _edge_map(mesh)
    matched = set()
    links = []

    for h in mesh.halfedges.values():
        if h.pair is not None or h.id in matched:
            continue

        v, w = _key(h)
        pair = edge_map.get((w, v))

        if pair is None:
            logger.warning('halfedge (%d, %d) has no pair, mesh is open',
                           v, w)
            raise NonManifoldError('could not find pair edge')

        matched.update((h.id, pair.id))
        links.append((h, pair))

    for h, pair in links:
        h.pair = pair
        pair.pair = h

    logger.debug('connected %d halfedge pairs', len(links))


def validate_pairs(mesh):
    """ Verify pair links.

    Recomputes the key map built by :func:`connect_pairs` and checks that
    each halfedge and the halfedge under its reverse key point at each
    other.

    Parameters
    ----------
    mesh : Mesh
        Mesh to be checked.

    Raises
    ------
    NonManifoldError
        If any pair link disagrees with the reverse lookup.
    """
    edge_map = _edge_map(mesh)

    for (v, w), h in edge_map.items():
        pair = edge_map.get((w, v))

        if pair is None:
            raise NonManifoldError('could not find a pair edge')

        if h.pair is not pair or pair.pair is not h:
            raise NonManifoldError("pairs don't match")
