# meshpreview/math/vec4.py
"""
4‑мерный вектор (float32). Однородные координаты точек для Mat4.
"""

import numpy as np

from meshpreview.math.vec3 import Vec3


class Vec4:
    """Короткий и быстрый вектор‑4 (float32)."""

    __slots__ = ("_v",)

    def __init__(self, x: float = 0.0, y: float = 0.0,
                 z: float = 0.0, w: float = 0.0):
        self._v = np.array([x, y, z, w], dtype=np.float32)

    @staticmethod
    def from_vec3(v: Vec3, w: float = 1.0) -> "Vec4":
        """Точка (w=1) или направление (w=0) из Vec3."""
        return Vec4(v.x, v.y, v.z, w)

    # -----------------------------------------------------------------
    # свойства
    # -----------------------------------------------------------------
    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    @property
    def z(self) -> float:
        return float(self._v[2])

    @property
    def w(self) -> float:
        return float(self._v[3])

    # -----------------------------------------------------------------
    # арифметика (операторы возвращают новый объект)
    # -----------------------------------------------------------------
    def __add__(self, other: "Vec4") -> "Vec4":
        return Vec4(*(self._v + other._v))

    def __sub__(self, other: "Vec4") -> "Vec4":
        return Vec4(*(self._v - other._v))

    def __eq__(self, other):
        if not isinstance(other, Vec4):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    __hash__ = None

    # -----------------------------------------------------------------
    # вспомогательные методы
    # -----------------------------------------------------------------
    def xyz(self) -> Vec3:
        """Отбрасываем w (без деления)."""
        return Vec3(*self._v[:3])

    def as_np(self) -> np.ndarray:
        """Копия 4‑компонентного ndarray (float32)."""
        return self._v.copy()

    def __repr__(self) -> str:
        return f"Vec4({self.x:.3f}, {self.y:.3f}, {self.z:.3f}, {self.w:.3f})"
