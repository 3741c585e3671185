import math

import numpy as np
import pytest

from halfmesh.hds import Mesh


@pytest.fixture
def triangle():
    return Mesh([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[0, 1, 2]])


@pytest.fixture
def quad():
    return Mesh([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]],
                [[0, 1, 2, 3]])


@pytest.fixture
def cube():
    points = [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0],
              [0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1]]
    faces = [[0, 3, 2, 1],                  # bottom, z = 0
             [4, 5, 6, 7],                  # top, z = 1
             [0, 1, 5, 4],                  # front, y = 0
             [1, 2, 6, 5],                  # right, x = 1
             [2, 3, 7, 6],                  # back, y = 1
             [3, 0, 4, 7]]                  # left, x = 0

    return Mesh(np.array(points) - 0.5, faces)


@pytest.fixture
def tetrahedron():
    points = [[1, 1, 1], [1, -1, -1], [-1, 1, -1], [-1, -1, 1]]
    faces = [[0, 1, 2], [0, 2, 3], [0, 3, 1], [1, 3, 2]]

    return Mesh(points, faces)


@pytest.fixture
def torus():
    # Quad torus with n x n vertices.
    n, R, r = 6, 2.0, 0.5
    points = []
    faces = []

    for i in range(n):
        u = 2.0 * math.pi * i / n

        for j in range(n):
            w = 2.0 * math.pi * j / n
            points.append([(R + r * math.cos(w)) * math.cos(u),
                           (R + r * math.cos(w)) * math.sin(u),
                           r * math.sin(w)])

    for i in range(n):
        for j in range(n):
            a = i * n + j
            b = ((i + 1) % n) * n + j
            c = ((i + 1) % n) * n + (j + 1) % n
            d = i * n + (j + 1) % n
            faces.append([a, b, c, d])

    return Mesh(points, faces)


@pytest.fixture
def grid():
    # Planar 4 x 4 vertex grid of triangles in the xy-plane.
    n = 4
    points = [[i, j, 0.0] for j in range(n) for i in range(n)]
    faces = []

    for j in range(n - 1):
        for i in range(n - 1):
            a = j * n + i
            faces.append([a, a + 1, a + n + 1])
            faces.append([a, a + n + 1, a + n])

    return Mesh(points, faces)
