import math

import numpy as np
import pytest

import halfmesh.linalg as linalg
import halfmesh.traits as traits
from halfmesh.hds import Mesh, DegenerateGeometryError


def test_triangle(triangle):
    f = triangle.faces[0]

    assert traits.face_area(f) == pytest.approx(0.5)
    assert np.allclose(traits.face_normal(f), [0.0, 0.0, 1.0])


def test_quad(quad):
    f = quad.faces[0]

    assert traits.face_area(f) == pytest.approx(1.0)
    assert np.allclose(traits.face_normal(f), [0.0, 0.0, 1.0])


def test_hexagon():
    points = [[math.cos(k * math.pi / 3), math.sin(k * math.pi / 3), 0.0]
              for k in range(6)]
    mesh = Mesh(points, [list(range(6))])

    area = traits.face_area(mesh.faces[0])
    assert area == pytest.approx(1.5 * math.sqrt(3.0))


def test_cube_faces(cube):
    areas = traits.face_areas(cube)
    normals = traits.face_normals(cube)

    assert np.allclose(areas, 1.0)
    assert normals.shape == (6, 3)

    # Consistent counter-clockwise faces yield outward normals.
    for f in cube.faces:
        assert normals[f].dot(f.barycenter) == pytest.approx(0.5)


def test_vertex_normal_cube(cube):
    n = traits.vertex_normal(cube.vertices[0])

    assert np.allclose(n, [-1.0 / 3.0] * 3)
    assert np.allclose(traits.vertex_normal(cube.vertices[6]),
                       [1.0 / 3.0] * 3)


def test_vertex_normal_planar(grid):
    for v in grid.vertices:
        assert np.allclose(traits.vertex_normal(v), [0.0, 0.0, 1.0])


def test_vertex_normal_area_weights():
    # Two triangles sharing the edge (0, 1). The one in the xy-plane
    # has four times the area of the one in the xz-plane.
    points = [[0, 0, 0], [2, 0, 0], [0, 4, 0], [0, 0, -1]]
    mesh = Mesh(points, [[0, 1, 2], [1, 0, 3]])

    n = traits.vertex_normal(mesh.vertices[0])

    assert traits.face_area(mesh.faces[0]) == pytest.approx(4.0)
    assert traits.face_area(mesh.faces[1]) == pytest.approx(1.0)
    assert np.allclose(n, [0.0, -0.2, 0.8])


def test_vertex_normal_zero_area_face():
    # Face 1 is collinear, it shares the edge (0, 1) with face 0.
    points = [[0, 0, 0], [1, 0, 0], [0, 1, 0], [2, 0, 0]]
    mesh = Mesh(points, [[0, 1, 2], [1, 0, 3]])

    assert traits.face_area(mesh.faces[1]) == 0.0

    for v in mesh.vertices[:3]:
        assert np.allclose(traits.vertex_normal(v), [0.0, 0.0, 1.0])

    # Vertex 3 only touches the zero area face.
    with pytest.raises(DegenerateGeometryError):
        traits.vertex_normal(mesh.vertices[3])


def test_vertex_normals(tetrahedron, torus):
    for mesh in (tetrahedron, torus):
        normals = traits.vertex_normals(mesh)

        assert normals.shape == (len(mesh.vertices), 3)

        for v in mesh.vertices:
            assert np.allclose(normals[v], traits.vertex_normal(v))


def test_tetrahedron_normals(tetrahedron):
    # Vertex normals point away from the centroid at the origin.
    for v in tetrahedron.vertices:
        n = traits.vertex_normal(v)
        assert np.allclose(linalg.cross(n, v.point), 0.0)
        assert n.dot(v.point) > 0.0


def test_degenerate_face():
    mesh = Mesh([[0, 0, 0], [1, 1, 1], [2, 2, 2]], [[0, 1, 2]])
    f = mesh.faces[0]

    assert traits.face_area(f) == 0.0

    with pytest.raises(DegenerateGeometryError):
        traits.face_normal(f)

    with pytest.raises(DegenerateGeometryError):
        traits.face_normals(mesh)

    with pytest.raises(DegenerateGeometryError):
        traits.vertex_normal(mesh.vertices[0])

    with pytest.raises(DegenerateGeometryError):
        traits.vertex_normals(mesh)


def test_isolated_vertex_normal():
    mesh = Mesh([[0, 0, 0], [1, 0, 0], [0, 1, 0], [5, 5, 5]], [[0, 1, 2]])

    assert np.allclose(traits.vertex_normal(mesh.vertices[0]), [0, 0, 1])

    with pytest.raises(DegenerateGeometryError, match='Vertex\\(3\\)'):
        traits.vertex_normal(mesh.vertices[3])

    with pytest.raises(DegenerateGeometryError):
        traits.vertex_normals(mesh)


def test_linalg():
    u = np.array([3.0, 0.0, 4.0])

    assert linalg.norm(u) == 5.0
    assert linalg.unit_inplace(u) is u
    assert np.allclose(u, [0.6, 0.0, 0.8])

    assert np.allclose(linalg.cross([1, 0, 0], [0, 1, 0]), [0, 0, 1])
    assert linalg.triangle_area(np.zeros(3), np.array([2.0, 0, 0]),
                                np.array([0, 2.0, 0])) == 2.0
