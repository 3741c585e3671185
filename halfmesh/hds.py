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

An orientable 2-manifold polygon mesh (with or without boundary) is
described by three containers owned by a :class:`Mesh` instance:

    - a list of :class:`Vertex` records,
    - a list of :class:`Halfedge` records,
    - and a list of :class:`Face` records.

Records refer to each other by **index** into these containers. The
properties of a record resolve such an index to the referenced record,
e.g., ``h.next`` looks up ``mesh.halfedges[h._next]``. Vertex coordinates
and colors live in two parallel NumPy arrays held by the mesh.

Note
----
To ease debugging, this module relies on assertions which can slow down
script execution. You can disable assertions by running in optimized mode
via the "-O" command line argument.
"""

from pathlib import Path
from time import perf_counter
from copy import copy

import numpy as np


CWHITERED = '\33[41m'                   # white on red background
CBOLD = '\33[1m'                        # bold text, white on black
CEND = '\33[0m'


class Mesh:
    """ Mesh kernel.

    The combinatorics of a mesh are built from a sequence of vertex
    coordinates and a sequence of consistently oriented face definitions.
    Each face lists 0-based vertex indices in counter-clockwise order
    when viewed from outside the surface.

    Parameters
    ----------
    points : array_like, shape (n, 3), optional
        Vertex coordinates. Copied to a new :obj:`~numpy.ndarray`.
    faces : iterable of sequences of int, optional
        Face definitions, 0-based vertex indexing.
    colors : array_like, shape (n, 3), optional
        Per-vertex colors. White is used if not given.
    name : str, optional
        Name tag.
    quiet : bool, optional
        Suppress console output.

    Raises
    ------
    ValueError
        If a face has less than three or repeated vertices, or if
        array shapes do not agree.
    IndexError
        If a face refers to a vertex that does not exist.
    NonManifoldError
        If a vertex is shared by more than one boundary loop.

    Note
    ----
    Face orientation is not checked. A directed edge that is used by two
    faces indicates inconsistent orientation or non-manifold input. Such
    input is reported on the console but not rejected: the edge is
    paired with whichever face came last.
    """

    def __init__(self, points=None, faces=None, colors=None, *, name=None,
                 quiet=True):
        """ Initialize from vertex and face lists.
        """
        if points is None and faces is not None:
            msg = "face definitions require 'points' argument != None"
            raise ValueError(msg)

        if points is not None:
            self._points = np.array(points, dtype=float)

            # An empty loader result comes as a flat empty list.
            if self._points.size == 0:
                self._points = self._points.reshape(0, 3)
        else:
            self._points = np.empty((0, 3))

        if self._points.ndim != 2 or self._points.shape[1] != 3:
            msg = f'points of shape {self._points.shape} are not 3D'
            raise ValueError(msg)

        if colors is not None:
            self._colors = np.array(colors, dtype=float)

            if self._colors.size == 0:
                self._colors = self._colors.reshape(0, 3)

            if self._colors.shape != self._points.shape:
                msg = (f'number of colors ({len(self._colors)}) != ' +
                       f'number of vertices ({len(self._points)})')
                raise ValueError(msg)
        else:
            self._colors = np.ones_like(self._points)

        # Check all face definitions before any record is created. A
        # construction that fails leaves nothing behind.
        faces = self._validate(faces) if faces is not None else []

        self._verts = [Vertex(i, parent=self)
                       for i in range(len(self._points))]
        self._halfs = []
        self._faces = []

        # Directed edge index. Maps (tail, head) vertex index pairs to
        # halfedge indices, boundary halfedges included.
        self._hmap = dict()

        if not quiet:
            start = perf_counter()

        self._build(faces)

        if not quiet:
            print(f'initialized half edge mesh with {CBOLD}' +
                  f'{len(self._verts)}{CEND} vertices, {CBOLD}' +
                  f'{len(self._halfs)}{CEND} half edges, {CBOLD}' +
                  f'{len(self._faces)}{CEND} faces ' +
                  f'({perf_counter()-start:.3} sec)')

        # Typically one does not expect isolated vertices in a mesh.
        if any(v.isolated for v in self._verts):
            print(f'{CWHITERED}there are isolated vertices{CEND}')

        self.name = name

    def __iter__(self):
        """ Face iterator.

        Yields
        ------
        Face
            Next face in insertion order traversal.
        """
        return iter(self._faces)

    def __copy__(self):
        return self.copy()

    def __bool__(self):
        return True

    @property
    def points(self):
        """ Vertex coordinate array.

        Direct read and write access to vertex coordinates. Changing the
        size of the coordinate array breaks the halfedge data structure.

        :type: ~numpy.ndarray
        """
        return self._points

    @points.setter
    def points(self, value):
        value = np.asarray(value, dtype=float)

        if value.shape != self._points.shape:
            raise ValueError(f'expected shape {self._points.shape}, ' +
                             f'got {value.shape}')

        self._points = value

    @property
    def colors(self):
        """ Vertex color array.

        :type: ~numpy.ndarray
        """
        return self._colors

    @property
    def vertices(self):
        """ Vertex list.

        Read access to the vertex list. This list should not be modified
        directly.

        :type: list[Vertex]
        """
        return self._verts

    @property
    def halfedges(self):
        """ Halfedge list.

        Face halfedges in the order they were created, followed by the
        synthesized boundary halfedges.

        :type: list[Halfedge]
        """
        return self._halfs

    @property
    def faces(self):
        """ Face list.

        This is **not** the list passed as argument `faces` during mesh
        construction but it can be generated easily:

        >>> faces = [[int(v) for v in f] for f in mesh]

        :type: list[Face]
        """
        return self._faces

    @property
    def size(self):
        """ Mesh size.

        The attribute value :math:`(v, e, f)` holds the number of
        vertices, the number of edges, and the number of faces.

        :type: (int, int, int)
        """
        return (len(self._verts), len(self._halfs) // 2, len(self._faces))

    @property
    def name(self):
        """ Name property.

        :type: str or None
        """
        return self._name

    @name.setter
    def name(self, value):
        self._name = value if value is None else Path(value).stem

    def halfedge(self, v, w):
        """ Halfedge lookup.

        Parameters
        ----------
        v : Vertex or int
            Tail vertex.
        w : Vertex or int
            Head vertex.

        Returns
        -------
        Halfedge or None
            The halfedge pointing from `v` to `w` or :obj:`None` if the
            vertices are not adjacent.
        """
        i = self._hmap.get((int(v), int(w)))
        return None if i is None else self._halfs[i]

    def triangle_indices(self):
        """ Triangle fan index array.

        Every face is triangulated by a fan around its first vertex,
        the same triangulation used to compute face areas.

        Returns
        -------
        ~numpy.ndarray, shape (t, 3)
            Vertex index triples, one row per triangle.
        """
        tris = []

        for f in self._faces:
            vs = [v._idx for v in f._viter()]

            for t in range(len(vs) - 2):
                tris.append((vs[0], vs[t + 1], vs[t + 2]))

        return np.array(tris, dtype=int).reshape(-1, 3)

    def edge_indices(self):
        """ Halfedge index array.

        Returns
        -------
        ~numpy.ndarray, shape (h, 2)
            One row ``[head, prev.head]`` per halfedge, boundary
            halfedges included.
        """
        idx = [int(v) for h in self._halfs for v in h.vertices]
        return np.array(idx, dtype=int).reshape(-1, 2)

    def clear(self):
        """ Clear all mesh items.

        Containers are cleared in place.
        """
        self._points = np.empty((0, 3))
        self._colors = np.empty((0, 3))

        self._verts.clear()
        self._halfs.clear()
        self._faces.clear()
        self._hmap.clear()

    def copy(self):
        """ Mesh copy.

        Duplicates coordinates, colors, and connectivity. No record is
        shared between the two meshes.

        Returns
        -------
        Mesh
            Copy of the mesh.
        """
        mesh = Mesh(name=self._name)

        mesh._points = self._points.copy()
        mesh._colors = self._colors.copy()
        mesh._hmap = dict(self._hmap)

        # Records only hold indices, shallow copies just need to be
        # attached to the new parent.
        for src, dst in ((self._verts, mesh._verts),
                         (self._halfs, mesh._halfs),
                         (self._faces, mesh._faces)):
            for item in src:
                item = copy(item)
                item._mesh = mesh
                dst.append(item)

        return mesh

    def _validate(self, faces):
        """ Check face definitions.

        Parameters
        ----------
        faces : iterable of sequences of int
            Face definitions.

        Returns
        -------
        list[list[int]]
            Face definitions as lists of Python integers.
        """
        n = len(self._points)
        result = []

        for k, face in enumerate(faces):
            face = [int(i) for i in face]

            if len(face) < 3:
                raise ValueError(f'face #{k} has less than three vertices')

            if len(set(face)) != len(face):
                raise ValueError(f'face #{k} contains duplicate vertices')

            for i in face:
                if not 0 <= i < n:
                    msg = f'vertex index {i} of face #{k} out of range({n})'
                    raise IndexError(msg)

            result.append(face)

        return result

    def _build(self, faces):
        """ Build halfedge combinatorics.

        Parameters
        ----------
        faces : list[list[int]]
            Validated face definitions.
        """
        duplicates = []

        # Face halfedges. The tail vertex of each new halfedge gets it
        # as outgoing halfedge, the last halfedge of a face becomes the
        # face's halfedge.
        for face in faces:
            f = Face(len(self._faces), parent=self)
            self._faces.append(f)

            n = len(face)
            loop = []

            for k in range(n):
                v = face[k]
                w = face[(k + 1) % n]
                h = self._add_halfedge(w, f._idx)

                if (v, w) in self._hmap:
                    duplicates.append((v, w))

                self._hmap[v, w] = h._idx
                self._verts[v]._halfedge = h._idx
                f._halfedge = h._idx

                loop.append(h)

            # Link the inner edge loop in counter-clockwise order.
            for i in range(n):
                j = (i + 1) % n

                loop[i]._next = loop[j]._idx
                loop[j]._prev = loop[i]._idx

        for v, w in duplicates:
            print(f'{CWHITERED}directed edge ({v}, {w}) used more than ' +
                  f'once{CEND}')

        # Pair opposite halfedges. An edge without opposite halfedge is
        # a boundary edge and gets a synthesized partner without face.
        # Boundary halfedges are indexed by their tail vertex.
        bmap = dict()

        for (v, w), i in list(self._hmap.items()):
            j = self._hmap.get((w, v))

            if j is not None:
                self._halfs[i]._pair = j
                continue

            if w in bmap:
                msg = f'vertex #{w} lies on more than one boundary loop'
                raise NonManifoldError(msg)

            b = self._add_halfedge(v)
            b._pair = i
            self._halfs[i]._pair = b._idx

            bmap[w] = b._idx

        # Link boundary halfedges into closed loops. The successor of a
        # boundary halfedge starts where the halfedge ends.
        for w, i in bmap.items():
            b = self._halfs[i]
            j = bmap.get(b._head)

            if j is None:
                msg = f'boundary loop at vertex #{w} is not closed'
                raise NonManifoldError(msg)

            b._next = j
            self._halfs[j]._prev = i

            self._hmap[w, b._head] = i

    def _add_halfedge(self, head, face=None):
        """ Create and add new halfedge.

        Only the :attr:`~Halfedge.head` and :attr:`~Halfedge.face`
        attributes are set. Pair, successor, and predecessor are
        linked by the caller.

        Parameters
        ----------
        head : int
            Index of the head vertex.
        face : int, optional
            Index of the face to the left, :obj:`None` for a boundary
            halfedge.

        Returns
        -------
        Halfedge
            The newly created halfedge.
        """
        h = Halfedge(len(self._halfs), head, face, parent=self)
        self._halfs.append(h)

        return h

    def _check(self):
        """ Perform sanity checks.
        """
        assert len(self._points) == len(self._verts)
        assert len(self._colors) == len(self._verts)

        for i, v in enumerate(self._verts):
            assert v._idx == i and v._mesh is self
            v._check()

        for i, h in enumerate(self._halfs):
            assert h._idx == i and h._mesh is self
            h._check()

        for i, f in enumerate(self._faces):
            assert f._idx == i and f._mesh is self
            f._check()

        for (v, w), i in self._hmap.items():
            assert self._halfs[i]._head == w
            assert self._halfs[i].tail._idx == v

    def _viter(self):
        return iter(self._verts)

    def _hiter(self):
        return iter(self._halfs)

    def _fiter(self):
        return iter(self._faces)

    def _eiter(self):
        """ Generator expression, one halfedge per edge.
        """
        return (h for h in self._halfs
                if h._pair is None or h._idx < h._pair)


class Vertex:
    """ Vertex record.

    Parameters
    ----------
    index : int
        Vertex index.
    parent : Mesh, optional
        The parent mesh object.

    Note
    ----
    Implementations of the special functions :meth:`~object.__int__` and
    :meth:`~object.__index__` make it possible to use vertex instances as
    list and array indices.
    """

    def __init__(self, index, parent=None):
        self._idx = index
        self._mesh = parent
        self._halfedge = None

    def __repr__(self):
        return f'Vertex({self._idx})'

    def __str__(self):
        return f'v {self._idx} {self.point}'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    @property
    def index(self):
        """ Vertex index.

        :type: int
        """
        return self._idx

    @property
    def point(self):
        """ Vertex coordinates.

        View of a row of the parent mesh's coordinate array. Assigning
        writes to that row.

        :type: ~numpy.ndarray
        """
        return self._mesh._points[self._idx, ...]

    @point.setter
    def point(self, value):
        self._mesh._points[self._idx, ...] = value

    @property
    def color(self):
        """ Vertex color.

        :type: ~numpy.ndarray
        """
        return self._mesh._colors[self._idx, ...]

    @color.setter
    def color(self, value):
        self._mesh._colors[self._idx, ...] = value

    @property
    def halfedge(self):
        """ Outward pointing halfedge.

        A halfedge that starts at the vertex or :obj:`None` for isolated
        vertices.

        :type: Halfedge
        """
        if self._halfedge is None:
            return None

        return self._mesh._halfs[self._halfedge]

    @property
    def degree(self):
        """ Vertex degree.

        The number of adjacent vertices.

        :type: int
        """
        return sum(1 for _ in self._hiter())

    @property
    def boundary(self):
        """ Topological state.

        A vertex is a boundary vertex if one of its outgoing halfedges
        or their pairs is a boundary halfedge.

        :type: bool
        """
        return any(h._face is None or h.pair._face is None
                   for h in self._hiter())

    @property
    def isolated(self):
        """ Topological state.

        A vertex is isolated if it does not belong to any face.

        :type: bool
        """
        return self._halfedge is None

    def _check(self):
        if self._halfedge is not None:
            assert self.halfedge.tail is self
            assert self.halfedge._face is not None

    def _hiter(self):
        """ Outgoing halfedge iterator.
        """
        halfs = self._mesh._halfs
        start = self._halfedge

        if start is None:
            return

        i = start

        while True:
            yield halfs[i]
            i = halfs[halfs[i]._pair]._next

            if i == start:
                return

    def _viter(self):
        """ Adjacent vertex iterator.
        """
        verts = self._mesh._verts

        for h in self._hiter():
            yield verts[h._head]

    def _fiter(self):
        """ Incident face iterator.
        """
        faces = self._mesh._faces

        for h in self._hiter():
            if h._face is not None:
                yield faces[h._face]


class Halfedge:
    """ Halfedge record.

    Halfedges store the indices of their head vertex, the face to their
    left, their successor, predecessor, and pair halfedge. A closed loop
    of successors bounds a face, or a hole in case of boundary
    halfedges.

    Parameters
    ----------
    index : int
        Halfedge index.
    head : int
        Index of the vertex the halfedge points to.
    face : int, optional
        Index of the face to the left, :obj:`None` for a boundary
        halfedge.
    parent : Mesh, optional
        The parent mesh object.
    """

    def __init__(self, index, head, face=None, parent=None):
        self._idx = index
        self._mesh = parent
        self._head = head
        self._face = face

        self._pair = None
        self._next = None
        self._prev = None

    def __repr__(self):
        return f'Halfedge({self._idx})'

    def __str__(self):
        vs = self.vertices

        if vs:
            return f'h {self._idx} ({vs[1]._idx}, {vs[0]._idx})'

        return f'h {self._idx} (?, {self._head})'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    @property
    def index(self):
        """ Halfedge index.

        :type: int
        """
        return self._idx

    @property
    def head(self):
        """ Head vertex.

        The vertex the halfedge points to.

        :type: Vertex
        """
        return self._mesh._verts[self._head]

    @property
    def tail(self):
        """ Tail vertex.

        The head of the predecessor.

        :type: Vertex
        """
        return self._mesh._verts[self._mesh._halfs[self._prev]._head]

    @property
    def vertices(self):
        """ Edge vertices.

        Head and tail vertex, or an empty list if the predecessor has
        not been linked yet.

        :type: list[Vertex]
        """
        if self._prev is None:
            return []

        return [self.head, self.tail]

    @property
    def vector(self):
        """ Halfedge direction vector.

        The vector ``self.head.point - self.tail.point``.

        :type: ~numpy.ndarray
        """
        return self.head.point - self.tail.point

    @property
    def face(self):
        """ Incident face.

        The face to the left of the halfedge or :obj:`None` in case of
        a boundary halfedge.

        :type: Face
        """
        if self._face is None:
            return None

        return self._mesh._faces[self._face]

    @property
    def pair(self):
        """ Opposite halfedge.

        :type: Halfedge
        """
        if self._pair is None:
            return None

        return self._mesh._halfs[self._pair]

    @property
    def next(self):
        """ Successor halfedge.

        :type: Halfedge
        """
        if self._next is None:
            return None

        return self._mesh._halfs[self._next]

    @property
    def prev(self):
        """ Predecessor halfedge.

        :type: Halfedge
        """
        if self._prev is None:
            return None

        return self._mesh._halfs[self._prev]

    @property
    def boundary(self):
        """ Topological state.

        A halfedge is called a boundary halfedge if it has no face.

        :type: bool
        """
        return self._face is None

    def _check(self):
        halfs = self._mesh._halfs

        assert halfs[self._pair]._pair == self._idx
        assert halfs[self._next]._prev == self._idx
        assert halfs[self._prev]._next == self._idx
        assert halfs[self._pair]._head != self._head
        assert halfs[self._next]._face == self._face

        assert not (self._face is None and halfs[self._pair]._face is None)


class Face:
    """ Face record.

    A face is defined by the closed loop of halfedges starting at its
    :attr:`halfedge` attribute.

    Parameters
    ----------
    index : int
        Face index.
    parent : Mesh, optional
        The parent mesh object.


    The vertices of a face are visited in counter-clockwise order,
    starting with the head of :attr:`halfedge`:

    .. code-block:: python
       :linenos:

        for v in f:
            print(v)
    """

    def __init__(self, index, parent=None):
        self._idx = index
        self._mesh = parent
        self._halfedge = None

    def __repr__(self):
        return f'Face({self._idx})'

    def __str__(self):
        return f'f {self._idx} {[int(v) for v in self]}'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __len__(self):
        """ Face valence.

        Returns
        -------
        int
            Number of vertices.
        """
        return sum(1 for _ in self._hiter())

    def __bool__(self):
        return True

    def __array__(self, dtype=None, copy=None):
        """ Vertex coordinate array.

        Returns
        -------
        ~numpy.ndarray, shape (n, 3)
            Coordinates of the face's vertices.
        """
        return np.array([v.point for v in self], dtype=dtype)

    def __contains__(self, item):
        """ Vertex and halfedge containment test.

        Parameters
        ----------
        item : Vertex or Halfedge
            Item to be tested for incidence with the face.

        Returns
        -------
        bool
        """
        return (item in self._viter()) or (item in self._hiter())

    def __iter__(self):
        """ Vertex iterator.

        Yields
        ------
        Vertex
            Next vertex in counter-clockwise traversal.
        """
        return self._viter()

    @property
    def index(self):
        """ Face index.

        :type: int
        """
        return self._idx

    @property
    def halfedge(self):
        """ Incident halfedge.

        :type: Halfedge
        """
        return self._mesh._halfs[self._halfedge]

    @property
    def valence(self):
        """ Face valence.

        Same as ``len(self)``.

        :type: int
        """
        return len(self)

    @property
    def boundary(self):
        """ Topological state.

        A face is a boundary face if one of its edges is a boundary
        edge.

        :type: bool
        """
        return any(h.pair._face is None for h in self._hiter())

    @property
    def barycenter(self):
        """ Face barycenter.

        Arithmetic mean of vertex coordinates.

        :type: ~numpy.ndarray
        """
        return sum(v.point for v in self) / len(self)

    def _check(self):
        assert self._halfedge is not None

        for h in self._hiter():
            assert h._face == self._idx

    def _hiter(self):
        """ Incident halfedge iterator.
        """
        assert self._halfedge is not None

        halfs = self._mesh._halfs
        i = self._halfedge

        while True:
            yield halfs[i]
            i = halfs[i]._next

            if i == self._halfedge:
                return

    def _viter(self):
        """ Incident vertex iterator.
        """
        verts = self._mesh._verts

        for h in self._hiter():
            yield verts[h._head]

    def _fiter(self):
        """ Edge-adjacent face iterator.
        """
        faces = self._mesh._faces

        for h in self._hiter():
            pair = h.pair

            if pair._face is not None:
                yield faces[pair._face]


class NonManifoldError(Exception):
    """ Manifold exception base class.

    Raised if face definitions result in a topological configuration
    that violates the manifold condition.
    """

    pass


class DegenerateGeometryError(Exception):
    """ Degenerate geometry exception.

    Raised if a geometric quantity is not defined, e.g., the normal of
    a face with collinear vertices.
    """

    pass
