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

""" Geometry operators.

In-place modification of vertex coordinates. Every operator evaluates
its input from the current coordinates of **all** vertices first and
writes the new coordinates afterwards, so results do not depend on
vertex order.
"""

import numpy as np

import halfmesh.traits as traits


def inflate_deflate(mesh, factor, normals=None):
    """ Move vertices along their normals.

    Parameters
    ----------
    mesh : Mesh
        Mesh to be modified.
    factor : float
        Multiple of the vertex normal added to each vertex. Positive
        values inflate, negative values deflate the mesh.
    normals : array_like, shape (n, 3), optional
        Vertex normals. Area weighted normals are computed if not given.

    Raises
    ------
    DegenerateGeometryError
        If the normal of a vertex is undefined. The mesh is not
        modified in this case.
    """
    if normals is None:
        normals = traits.vertex_normals(mesh)

    mesh.points += factor * np.asarray(normals)


def laplacian_smooth_sharpen(mesh, smooth=True, factor=1.0):
    r""" Umbrella operator smoothing or sharpening.

    For each vertex :math:`\mathbf{p}` with neighbors :math:`\mathbf{q}_i`
    the mean vector :math:`\mathbf{d} = \frac{1}{k} \sum_i (\mathbf{q}_i -
    \mathbf{p})` is computed from the current coordinates. The vertex is
    then moved to :math:`\mathbf{p} \pm \lambda \mathbf{d}`.

    Parameters
    ----------
    mesh : Mesh
        Mesh to be modified.
    smooth : bool, optional
        Move towards (smooth) or away from (sharpen) the neighbors.
    factor : float, optional
        Step size :math:`\lambda`.

    Note
    ----
    Isolated vertices do not move.
    """
    sign = 1.0 if smooth else -1.0

    pts = mesh.points
    delta = np.zeros_like(pts)

    for v in mesh.vertices:
        nbrs = [int(w) for w in v._viter()]

        if nbrs:
            delta[v] = pts[nbrs].mean(axis=0) - pts[v]

    mesh.points = pts + sign * factor * delta


def warp(mesh):
    r""" Creative per-vertex warp.

    Each vertex :math:`(x, y, z)` is mapped to
    :math:`(x \cos x, y \sin x, z)`. Applying the warp twice flattens
    the mesh considerably.

    Parameters
    ----------
    mesh : Mesh
        Mesh to be modified.
    """
    x, y, z = mesh.points.T

    mesh.points = np.column_stack((x * np.cos(x), y * np.sin(x), z))


def fill_holes(mesh):
    """ Fill boundary loops with triangles (reserved).

    Raises
    ------
    NotImplementedError
        Always.
    """
    raise NotImplementedError('hole filling is not available yet')


def truncate(mesh, factor):
    """ Slice off the tips of all vertices (reserved).

    Parameters
    ----------
    mesh : Mesh
        Mesh to be modified.
    factor : float
        Relative distance along each edge, between 0 and 1.

    Raises
    ------
    NotImplementedError
        Always.
    """
    raise NotImplementedError('truncation is not available yet')


def subdivide_linear(mesh):
    """ Linear subdivision (reserved).

    Raises
    ------
    NotImplementedError
        Always.
    """
    raise NotImplementedError('linear subdivision is not available yet')


def subdivide_loop(mesh):
    """ Loop subdivision (reserved).

    Raises
    ------
    NotImplementedError
        Always.
    """
    raise NotImplementedError('Loop subdivision is not available yet')
