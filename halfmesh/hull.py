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

""" Incremental convex hull.

The hull of a point cloud is grown one point at a time. Faces of the
current hull that can see a new point are replaced by a cone over their
horizon, see :meth:`~halfmesh.hds.Mesh.attach_point_for_faces`.
"""

import logging

import numpy as np

from halfmesh.hds import Mesh

logger = logging.getLogger(__name__)

TOLERANCE = 1e-10
""" Minimal distance for the initial simplex to count as non-degenerate. """


def _initial_simplex(points):
    """ Indices of four points spanning a tetrahedron of positive volume.

    Extreme points along the x-axis, the point farthest from the line
    through them, and the point farthest from the plane through all
    three.
    """
    i0 = int(np.argmin(points[:, 0]))
    i1 = int(np.argmax(points[:, 0]))

    p0, p1 = points[i0], points[i1]

    dists = np.linalg.norm(np.cross(points - p0, p1 - p0), axis=1)
    i2 = int(np.argmax(dists))

    if dists[i2] < TOLERANCE:
        raise ValueError('points are collinear')

    normal = np.cross(p1 - p0, points[i2] - p0)
    normal /= np.linalg.norm(normal)

    dists = np.abs((points - p0) @ normal)
    i3 = int(np.argmax(dists))

    if dists[i3] < TOLERANCE:
        raise ValueError('points are coplanar')

    return i0, i1, i2, i3


def convex_hull(points):
    """ Convex hull of a point cloud.

    Parameters
    ----------
    points : array_like, shape (n, 3)
        Point coordinates, at least four points that do not lie in a
        common plane.

    Raises
    ------
    ValueError
        If there are less than four points or all points are coplanar.

    Returns
    -------
    Mesh
        Closed triangle mesh with outward oriented faces. Its vertices are
        a subset of `points`, points inside the hull are skipped.


    >>> rng = np.random.default_rng(0)
    >>> mesh = convex_hull(rng.normal(size=(100, 3)))
    >>> v, e, f = mesh.size
    >>> v - e + f
    2
    """
    points = np.asarray(points, dtype=float)

    if points.ndim != 2 or points.shape[1] != 3:
        raise ValueError(f'points must have shape (n, 3), got {points.shape}')

    if len(points) < 4:
        raise ValueError('need at least 4 points for a 3d convex hull')

    simplex = _initial_simplex(points)
    p1, p2, p3, p4 = points[list(simplex)]

    # Faces of a tetrahedron built from (p1, p2, p3, p4) point outward if
    # p4 lies behind the face (p1, p2, p3).
    if np.dot(np.cross(p2 - p1, p3 - p1), p4 - p1) > 0.0:
        p2, p3 = p3, p2

    mesh = Mesh.from_tetrahedron_pts(p1, p2, p3, p4)
    skipped = 0

    for i, p in enumerate(points):
        if i in simplex:
            continue

        visible = [f for f in mesh if f.can_see(p)]

        if not visible:
            skipped += 1
            continue

        mesh.attach_point_for_faces(p, visible)

    logger.debug('convex hull of %d points: %d vertices, %d skipped',
                 len(points), len(mesh.vertices), skipped)

    return mesh
