"""
Математический суб‑пакет: Vec2, Vec3, Vec4, Mat4, Quat.
"""

from meshpreview.math.vec2 import Vec2
from meshpreview.math.vec3 import Vec3
from meshpreview.math.vec4 import Vec4
from meshpreview.math.quat import Quat
from meshpreview.math.mat4 import Mat4

__all__ = ["Vec2", "Vec3", "Vec4", "Mat4", "Quat"]
