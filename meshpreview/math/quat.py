# meshpreview/math/quat.py
# ---------------------------------------------------------------
# Кватернион поворота (x, y, z, w): ось + угол → матрица 4×4.
# Используется Mat4.rotate для поворота вокруг произвольной оси
# (yaw вокруг up_direction, pitch вокруг правой оси камеры).
# ---------------------------------------------------------------

import numpy as np
from math import sin, cos


class Quat:
    __slots__ = ("x", "y", "z", "w")

    def __init__(self, x=0.0, y=0.0, z=0.0, w=1.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    @staticmethod
    def from_axis_angle_rad(axis, angle_rad):
        """axis – 3‑элементный iterable, угол в радианах. Ось нулевой длины – ошибка."""
        ax = np.asarray(list(axis), dtype=np.float64)
        n = np.linalg.norm(ax)
        if n == 0.0 or not np.isfinite(n):
            raise ValueError(f"Rotation axis must be a finite non-zero vector, got {ax.tolist()}")
        ax = ax / n
        a = angle_rad / 2.0
        s = sin(a)
        return Quat(ax[0] * s, ax[1] * s, ax[2] * s, cos(a))

    def to_mat4(self) -> np.ndarray:
        """4×4 матрица вращения (ndarray float32), единичный кватернион."""
        x, y, z, w = self.x, self.y, self.z, self.w
        xx, yy, zz = x*x, y*y, z*z
        xy, xz, yz = x*y, x*z, y*z
        wx, wy, wz = w*x, w*y, w*z

        m = np.identity(4, dtype=np.float32)
        m[0, 0] = 1 - 2*(yy + zz)
        m[0, 1] = 2*(xy - wz)
        m[0, 2] = 2*(xz + wy)

        m[1, 0] = 2*(xy + wz)
        m[1, 1] = 1 - 2*(xx + zz)
        m[1, 2] = 2*(yz - wx)

        m[2, 0] = 2*(xz - wy)
        m[2, 1] = 2*(yz + wx)
        m[2, 2] = 1 - 2*(xx + yy)

        return m

    def __repr__(self):
        return f"Quat({self.x:.3f}, {self.y:.3f}, {self.z:.3f}, {self.w:.3f})"
