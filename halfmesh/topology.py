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

""" Topological mesh analysis.

Boundary loops, Euler characteristic, and genus of halfedge meshes.
"""


def boundary_cycles(mesh):
    """ Boundary loops.

    Every closed loop of boundary halfedges, i.e., halfedges without
    face, is reported once. Loops are listed in the order in which
    their first halfedge appears in :attr:`~halfmesh.hds.Mesh.halfedges`.

    Parameters
    ----------
    mesh : Mesh
        Mesh instance.

    Returns
    -------
    list[list[Halfedge]]
        Boundary loops, each loop in successor order. Empty for
        watertight meshes.
    """
    # Halfedge indices of boundary halfedges already assigned to a loop.
    visited = set()
    cycles = []

    for h in mesh._hiter():
        cycle = []

        while h._face is None and h._idx not in visited:
            visited.add(h._idx)
            cycle.append(h)
            h = h.next

        if cycle:
            cycles.append(cycle)

    return cycles


def is_watertight(mesh):
    """ Watertightness test.

    Parameters
    ----------
    mesh : Mesh
        Mesh instance.

    Returns
    -------
    bool
        :obj:`True` if the mesh has no boundary halfedges.
    """
    return not any(h._face is None for h in mesh._hiter())


def euler_characteristic(mesh):
    r""" Euler characteristic.

    The value :math:`\chi = v - e + f` where the number of edges is half
    the number of halfedges.

    Parameters
    ----------
    mesh : Mesh
        Mesh instance.

    Returns
    -------
    int
        Euler characteristic.
    """
    v, e, f = mesh.size
    return v - e + f


def genus(mesh):
    r""" Surface genus.

    For a closed, connected, orientable surface the genus :math:`g`
    satisfies :math:`\chi = 2 - 2g`.

    Parameters
    ----------
    mesh : Mesh
        Mesh instance.

    Returns
    -------
    int or None
        Genus of a watertight mesh, :obj:`None` if the mesh has a
        boundary.

    Note
    ----
    Connected components are not detected. The result for a mesh with
    more than one component is meaningless.
    """
    if boundary_cycles(mesh):
        return None

    return (2 - euler_characteristic(mesh)) // 2
