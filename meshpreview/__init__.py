"""
Mesh Preview – камера и orbit‑навигация для 3‑D просмотрщика.
Отдаёт view/projection матрицы, которые потребляет рендер.
"""

from meshpreview.utils import logger
from meshpreview.math import Vec2, Vec3, Vec4, Mat4, Quat
from meshpreview.scene import (
    Camera, ProjectionType, OrbitController, SceneNavigation, CameraDecodeError,
    camera_to_dict, dict_to_camera, save_camera, load_camera,
)
from meshpreview.session import ViewerSession

__version__ = "1.0.0"

__all__ = [
    "Vec2",
    "Vec3",
    "Vec4",
    "Mat4",
    "Quat",
    "Camera",
    "ProjectionType",
    "OrbitController",
    "SceneNavigation",
    "CameraDecodeError",
    "camera_to_dict",
    "dict_to_camera",
    "save_camera",
    "load_camera",
    "ViewerSession",
]
