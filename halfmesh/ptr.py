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

""" Weak mesh item references.

Mesh items refer to each other in cycles: a halfedge knows its successor,
its twin and its face, a face knows one of its halfedges, and so on. The
mesh containers are the only owners of mesh items. Every link between items
is stored as a :class:`Ptr`, a nullable weak handle that has to be resolved
explicitly via :meth:`Ptr.upgrade` each time it is followed.

A handle stops resolving as soon as its referent is removed from the mesh,
even if other Python references to the removed item still exist.
"""

import weakref


class Ptr:
    """ Nullable weak reference.

    Parameters
    ----------
    item : Vertex or Halfedge or Face, optional
        Referent. A :obj:`None` value results in a null handle.


    Handles are cheap to copy. A copy refers to the same mesh item:

    >>> p = Ptr.new(face)
    >>> q = p.clone()
    >>> p.upgrade() is q.upgrade()
    True
    """

    __slots__ = ('_ref',)

    def __init__(self, item=None):
        self._ref = None if item is None else weakref.ref(item)

    def __repr__(self):
        item = self.upgrade()

        if item is None:
            return 'Ptr(None)'

        return f'Ptr({item!r})'

    def __bool__(self):
        return self.is_valid()

    def __copy__(self):
        return self.clone()

    @classmethod
    def empty(cls):
        """ Null handle.

        Returns
        -------
        Ptr
            A handle that never resolves.
        """
        return cls()

    @classmethod
    def new(cls, item):
        """ Weak handle to a mesh item.

        Parameters
        ----------
        item : Vertex or Halfedge or Face or Ptr or None
            Referent. Passing a handle returns a copy of it.

        Returns
        -------
        Ptr
            Non-owning handle of `item`.
        """
        if isinstance(item, Ptr):
            return item.clone()

        return cls(item)

    @staticmethod
    def merge_upgrade(a, b):
        """ Upgrade two handles at once.

        Parameters
        ----------
        a : Ptr
            First handle.
        b : Ptr
            Second handle.

        Returns
        -------
        tuple or None
            The pair of referents if both handles resolve, :obj:`None`
            otherwise.
        """
        item_a = a.upgrade()
        item_b = b.upgrade()

        if item_a is None or item_b is None:
            return None

        return item_a, item_b

    def upgrade(self):
        """ Resolve the handle.

        Returns
        -------
        Vertex or Halfedge or Face or None
            The referent, or :obj:`None` if the handle is null, the
            referent was garbage collected, or it has been removed from
            its mesh.
        """
        if self._ref is None:
            return None

        item = self._ref()

        # Removed mesh items are flagged by their mesh. They must not be
        # reachable through stale links.
        if item is None or item._deleted:
            return None

        return item

    def is_valid(self):
        """ Check if the handle currently resolves.

        Returns
        -------
        bool
        """
        return self.upgrade() is not None

    def clone(self):
        """ Copy of the handle.

        Returns
        -------
        Ptr
            Handle to the same referent.
        """
        ptr = Ptr.__new__(Ptr)
        ptr._ref = self._ref
        return ptr
