"""
Пакет scene – камера, orbit‑навигация и (де)сериализация камеры.
"""

from meshpreview.scene.camera import Camera, ProjectionType
from meshpreview.scene.navigation import OrbitController, SceneNavigation
from meshpreview.scene.camera_io import (
    CameraDecodeError, camera_to_dict, dict_to_camera, save_camera, load_camera
)

__all__ = ["Camera", "ProjectionType", "OrbitController", "SceneNavigation",
           "CameraDecodeError", "camera_to_dict", "dict_to_camera",
           "save_camera", "load_camera"]
