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

""" Mesh exception types.

Operations that reject their input validate it completely before touching
the mesh. When one of these exceptions propagates, the mesh is left in the
state it had before the call.
"""


class MeshError(Exception):
    """ Mesh exception base class.
    """

    pass


class NonManifoldError(MeshError):
    """ Manifold exception.

    Raised if the mesh (or a part of it an operation relies on) is not a
    closed, consistently paired 2-manifold: open boundaries during pair
    reconstruction, a horizon that does not form a single closed loop, or
    a failed consistency check.
    """

    pass


class TopologyError(MeshError):
    """ Structural precondition failure.

    Raised when a local edit is applied to an item that does not have the
    required shape, e.g. a non-triangular face or a vertex whose valence
    is not three.
    """

    pass


class InvalidReferenceError(MeshError):
    """ Stale reference.

    Raised when an operation is passed a handle or an item that no longer
    refers to an item registered in the mesh.
    """

    pass
