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

""" Geometric mesh traits.

Convenience functions to compute face areas as well as face and vertex
normals of polygon meshes. Polygonal faces are treated as triangle fans
around their first vertex, which is exact for planar convex faces and
an approximation otherwise.
"""

import numpy as np

import halfmesh.linalg as linalg
from halfmesh.hds import DegenerateGeometryError


def face_area(face):
    """ Face area.

    Sum of triangle areas of the fan ``(v[0], v[i+1], v[i+2])`` where
    ``v`` lists the face's vertices in iteration order.

    Parameters
    ----------
    face : Face
        Face of a mesh.

    Raises
    ------
    DegenerateGeometryError
        If the face has less than three vertices.

    Returns
    -------
    float
        Face area.
    """
    pts = [v.point for v in face]

    if len(pts) < 3:
        raise DegenerateGeometryError(f'{face!r} has less than three vertices')

    a = pts[0]

    return sum(linalg.triangle_area(a, pts[i + 1], pts[i + 2])
               for i in range(len(pts) - 2))


def face_areas(mesh):
    """ Face areas.

    Parameters
    ----------
    mesh : Mesh
        Mesh with polygonal faces.

    Returns
    -------
    ~numpy.ndarray
        Array of face areas, indexed by face.
    """
    return np.array([face_area(f) for f in mesh.faces], dtype=float)


def face_normal(face):
    """ Face normal.

    Normalized cross product of the edge vectors ``v[1] - v[0]`` and
    ``v[2] - v[0]`` spanned by the first three vertices of the face.

    Parameters
    ----------
    face : Face
        Face of a mesh.

    Raises
    ------
    DegenerateGeometryError
        If the first three vertices are collinear or coincide.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Unit normal vector.

    Note
    ----
    The face is assumed to be planar. Only its first three vertices
    contribute to the result.
    """
    it = iter(face)
    p = [next(it).point for _ in range(3)]

    vector = linalg.cross(p[1] - p[0], p[2] - p[0])
    length = linalg.norm(vector)

    # Also catches nan coordinates.
    if not length > 0.0:
        raise DegenerateGeometryError(f'normal of {face!r} is undefined')

    return linalg.unit_inplace(vector)


def face_normals(mesh):
    """ Face normals.

    Parameters
    ----------
    mesh : Mesh
        Mesh with polygonal faces.

    Raises
    ------
    DegenerateGeometryError
        If one of the face normals is undefined.

    Returns
    -------
    ~numpy.ndarray, shape (m, 3)
        Unit normal vectors for a mesh with m faces.
    """
    return np.array([face_normal(f) for f in mesh.faces]).reshape(-1, 3)


def vertex_normal(vertex):
    r""" Vertex normal.

    Area weighted average of the normals :math:`\mathbf{n}_f` of all
    faces incident to the vertex,

    .. math::

       \mathbf{n} = \frac{\sum_f A_f \mathbf{n}_f}{\sum_f A_f}

    Faces of zero area do not contribute.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a mesh.

    Raises
    ------
    DegenerateGeometryError
        If the vertex is isolated or the total area of its incident
        faces vanishes.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Averaged normal vector. This vector is **not** normalized, its
        length is less than one unless all incident faces are coplanar.
    """
    normal = np.zeros(3)
    weight = 0.0

    for f in vertex._fiter():
        area = face_area(f)

        if area > 0.0:
            normal += area * face_normal(f)
            weight += area

    if not weight > 0.0:
        raise DegenerateGeometryError(f'normal of {vertex!r} is undefined')

    return normal / weight


def vertex_normals(mesh):
    """ Vertex normals.

    Area weighted vertex normals of all vertices of a mesh, see
    :func:`vertex_normal`. Face normals and areas are computed only
    once.

    Parameters
    ----------
    mesh : Mesh
        A mesh.

    Raises
    ------
    DegenerateGeometryError
        If the normal of a vertex is undefined.

    Returns
    -------
    ~numpy.ndarray, shape (n, 3)
        Normal vectors for a mesh with n vertices.
    """
    areas = face_areas(mesh)
    weighted = np.zeros((len(areas), 3))

    for f in mesh.faces:
        if areas[f] > 0.0:
            weighted[f] = areas[f] * face_normal(f)

    normals = np.zeros_like(mesh.points)

    for v in mesh.vertices:
        incident = [int(f) for f in v._fiter()]
        weight = areas[incident].sum()

        if not weight > 0.0:
            raise DegenerateGeometryError(f'normal of {v!r} is undefined')

        normals[v] = weighted[incident].sum(axis=0) / weight

    return normals
