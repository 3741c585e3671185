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

""" Basic vector math.

Specialized non-vectorized routines for vectors in 3-space. For single
vectors these beat their vectorized NumPy counterparts.
"""

import math
import numpy as np


def cross(u, v):
    r""" Cross product.

    Alternative to NumPy's vectorized :func:`~numpy.cross` function.

    Parameters
    ----------
    u, v : array_like, shape (3, )
        Vector in :math:`\mathbb{R}^3`.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Cross product of vectors `u` and `v`.
    """
    return np.array([u[1]*v[2] - u[2]*v[1],
                     u[2]*v[0] - u[0]*v[2],
                     u[0]*v[1] - u[1]*v[0]])


def norm(u):
    r""" Length of vector.

    Parameters
    ----------
    u : array_like, shape (3, )
        Vector in :math:`\mathbb{R}^3`.

    Returns
    -------
    float
        Euclidean length of the vector `u`.

    Note
    ----
    The length of the input vector is not checked. Passing vectors with
    more than three entries will produce a **wrong** result without any
    warning.
    """
    return math.sqrt(u[0]*u[0] + u[1]*u[1] + u[2]*u[2])


def unit_inplace(u):
    r""" In-place vector normalization.

    Modifies the input argument!

    Parameters
    ----------
    u : ~numpy.ndarray, shape (3, )
        Vector in :math:`\mathbb{R}^3`.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        The normalized input vector (not a normalized copy).

    Note
    ----
    No error checking (division by zero, input vector shape) is
    performed.
    """
    u /= norm(u)
    return u


def triangle_area(a, b, c):
    r""" Triangle area.

    Area of the triangle spanned by three points,

    .. math::

       A = \frac{1}{2} \| (\mathbf{b} - \mathbf{a}) \times
                          (\mathbf{c} - \mathbf{a}) \|

    Parameters
    ----------
    a, b, c : ~numpy.ndarray, shape (3, )
        Triangle corners.

    Returns
    -------
    float
        Area of the triangle. Zero for collinear points.
    """
    return 0.5 * norm(cross(b - a, c - a))
