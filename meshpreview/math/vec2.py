# -*- coding: utf-8 -*-
"""
Двумерный вектор – позиция курсора и смещение указателя (в пикселях).
"""
import numpy as np


class Vec2:
    __slots__ = ("_v",)

    def __init__(self, x=0.0, y=0.0):
        self._v = np.array([x, y], dtype=np.float32)

    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    def __add__(self, other):
        return Vec2(*(self._v + other._v))

    def __sub__(self, other):
        return Vec2(*(self._v - other._v))

    def __eq__(self, other):
        if not isinstance(other, Vec2):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    __hash__ = None

    def is_zero(self) -> bool:
        """True, если за кадр не было смещения указателя."""
        return not np.any(self._v)

    def __repr__(self):
        return f"Vec2({self.x:.3f}, {self.y:.3f})"
