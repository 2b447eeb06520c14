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

""" Vector helpers for mesh geometry.

Points and vectors are :class:`numpy.ndarray` objects of shape ``(3, )``.
The helpers below avoid the overhead of NumPy's vectorized routines for
single 3-vectors, which dominates when face attributes are recomputed one
face at a time during topological edits.
"""

import math

import numpy as np


def as_point(p):
    """ Convert to a point.

    Parameters
    ----------
    p : array_like, shape (3, )
        Point coordinates.

    Raises
    ------
    ValueError
        If `p` does not hold exactly three coordinates.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Float copy of `p`.
    """
    point = np.array(p, dtype=float)

    if point.shape != (3, ):
        raise ValueError(f'expected 3 coordinates, got shape {point.shape}')

    return point


def cross(u, v):
    """ Cross product of two 3-vectors.

    Parameters
    ----------
    u : array_like, shape (3, )
    v : array_like, shape (3, )

    Returns
    -------
    ~numpy.ndarray, shape (3, )
    """
    return np.array([u[1]*v[2] - u[2]*v[1],
                     u[2]*v[0] - u[0]*v[2],
                     u[0]*v[1] - u[1]*v[0]])


def dot(u, v):
    """ Inner product of two 3-vectors.

    Returns
    -------
    float
    """
    return u[0]*v[0] + u[1]*v[1] + u[2]*v[2]


def norm(u):
    """ Euclidean length of a 3-vector.

    Note
    ----
    Only the first three entries of `u` are taken into account.
    """
    return math.sqrt(u[0]*u[0] + u[1]*u[1] + u[2]*u[2])


def unit(u):
    """ Normalized copy of a 3-vector.

    Parameters
    ----------
    u : array_like, shape (3, )
        Vector of non-zero length.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Unit vector pointing in the direction of `u`. A zero vector
        yields NaN entries; degenerate input is not checked.
    """
    u = np.asarray(u, dtype=float)

    with np.errstate(invalid='ignore', divide='ignore'):
        return u / norm(u)


def centroid(points):
    """ Arithmetic mean of points.

    Parameters
    ----------
    points : sequence of array_like
        At least one point.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
    """
    return sum(np.asarray(p, dtype=float) for p in points) / len(points)


def lerp(p, q, t):
    """ Linear interpolation ``p + t * (q - p)``.
    """
    return p + t * (q - p)
