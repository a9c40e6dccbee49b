"""
Arbitrary-precision 3x3 rotation matrices.

:class:`Matrix3` stores its entries in the layout of a column-major graphics
matrix: ``data[i]`` holds the i-th column. ``axis_angle`` therefore builds the
Rodrigues matrix for the negated angle (its transpose), and ``apply`` and
``as_quat`` read the entries with transposed indices. Taken together the three
operations describe a right-handed rotation by ``+angle`` about the axis and
agree with ``scipy.spatial.transform.Rotation.from_rotvec(axis * angle)``.
"""

from decimal import Decimal

import numpy as np

from exactorbit.algorithms.core.vector import Vector3
from exactorbit.utils.constants import HALF, SERIES_TERMS
from exactorbit.utils.conversions import to_decimal
from exactorbit.utils import series


class Matrix3:
    """
    3x3 decimal matrix, identity by default.

    Parameters
    ----------
    data : sequence of 3 sequences of 3 scalars, optional
        Entries as ``data[i][j]``. Omitted means identity.
    """

    __hash__ = None

    def __init__(self, data=None):
        if data is None:
            data = [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
        if len(data) != 3 or any(len(row) != 3 for row in data):
            raise ValueError("Matrix3 requires a 3x3 grid of entries")
        self.data = [[to_decimal(value) for value in row] for row in data]

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def axis_angle(cls, axis, angle):
        """
        Rotation matrix about a unit axis.

        Parameters
        ----------
        axis : Vector3
            Unit rotation axis. It is not normalized here.
        angle : Decimal
            Rotation angle in radians.

        Returns
        -------
        Matrix3
            Rodrigues matrix built from ``cos(-angle)`` and ``sin(-angle)``.

        Notes
        -----
        The negated angle matches the rotation sense of the three.js
        ``Matrix4.makeRotationAxis`` / ``Quaternion.setFromRotationMatrix``
        pair this layout comes from. Do not drop it.
        """
        angle = to_decimal(angle)
        c = series.cos(-angle, SERIES_TERMS)
        s = series.sin(-angle, SERIES_TERMS)
        t = 1 - c
        x, y, z = axis.x, axis.y, axis.z
        return cls([
            [t * x * x + c, t * x * y - z * s, t * z * x + y * s],
            [t * x * y + z * s, t * y * y + c, t * y * z - x * s],
            [t * z * x - y * s, t * y * z + x * s, t * z * z + c],
        ])

    def apply(self, vector):
        """Transform ``vector``; entry ``data[j][i]`` weighs input j into output i."""
        m = self.data
        return Vector3(
            m[0][0] * vector.x + m[1][0] * vector.y + m[2][0] * vector.z,
            m[0][1] * vector.x + m[1][1] * vector.y + m[2][1] * vector.z,
            m[0][2] * vector.x + m[1][2] * vector.y + m[2][2] * vector.z,
        )

    def as_quat(self):
        """
        Unit quaternion of this rotation.

        Returns
        -------
        tuple of Decimal
            ``(x, y, z, w)``, scalar last.

        Notes
        -----
        Shepperd's method: with a positive trace the scalar part is taken
        directly from it; otherwise the largest diagonal entry selects which
        vector component to extract first, which keeps the square root away
        from zero.
        """
        m = self.data
        trace = m[0][0] + m[1][1] + m[2][2]

        if trace > 0:
            root = (trace + 1).sqrt()
            w = HALF * root
            scale = HALF / root
            x = (m[1][2] - m[2][1]) * scale
            y = (m[2][0] - m[0][2]) * scale
            z = (m[0][1] - m[1][0]) * scale
            return (x, y, z, w)

        i = 0
        if m[1][1] > m[0][0]:
            i = 1
        if m[2][2] > m[i][i]:
            i = 2
        j = (i + 1) % 3
        k = (i + 2) % 3

        root = (m[i][i] - m[j][j] - m[k][k] + 1).sqrt()
        scale = HALF / root
        out = [Decimal(0)] * 4
        out[i] = HALF * root
        out[3] = (m[j][k] - m[k][j]) * scale
        out[j] = (m[j][i] + m[i][j]) * scale
        out[k] = (m[k][i] + m[i][k]) * scale
        return tuple(out)

    def as_array(self):
        """Entries as a float64 (3, 3) numpy array, same indexing as ``data``."""
        return np.array([[float(value) for value in row] for row in self.data], dtype=np.float64)

    def __eq__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return self.data == other.data

    def __repr__(self):
        rows = ", ".join("[" + ", ".join(f"'{value}'" for value in row) + "]" for row in self.data)
        return f"Matrix3([{rows}])"
