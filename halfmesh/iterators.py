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

Adjacent/incident mesh items of a vertex are visited by rotating an
outgoing halfedge ``h`` about its tail via ``h = h.pair.next``. Items of
a face are visited by following successor halfedges, starting at the
face's :attr:`~halfmesh.hds.Face.halfedge`.

Note
----
Vertex neighborhood iterators assume manifold vertices: the outgoing
halfedges of a vertex form a single closed umbrella.
"""


def verts(obj):
    """ Vertex iterator.

    The returned iterator traverses adjacent/incident vertices
    of `obj` depending on its type:

    .. table::
       :width: 100%
       :widths: 20, 80

       =============== ================================================
       :class:`Vertex` heads of outgoing halfedges (adjacent vertices)
       --------------- ------------------------------------------------
       :class:`Face`   heads of face halfedges, starting at the head of
                       :attr:`~Face.halfedge`
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.vertices`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Face or Mesh
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

       =============== ================================================
       :class:`Vertex` outgoing halfedges, boundary halfedges included
       --------------- ------------------------------------------------
       :class:`Face`   halfedges bounding the face
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.halfedges`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.

    Yields
    ------
    Halfedge
    """
    return obj._hiter()


def edges(mesh):
    """ Edge iterator.

    An undirected edge is a pair of oppositely oriented halfedges. This
    iterator yields the representative with the smaller index.

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

       =============== ================================================
       :class:`Vertex` incident faces, boundary halfedges contribute
                       nothing
       --------------- ------------------------------------------------
       :class:`Face`   faces that share an edge
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.faces`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.

    Yields
    ------
    Face
    """
    return obj._fiter()
