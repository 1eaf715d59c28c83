"""
Orbit‑навигация: смещение указателя + желаемая дистанция → новая позиция камеры.
"""

import math
from typing import Optional

from meshpreview.math.vec2 import Vec2
from meshpreview.math.vec3 import Vec3
from meshpreview.math.vec4 import Vec4
from meshpreview.math.mat4 import Mat4
from meshpreview.scene.camera import Camera, ProjectionType
from meshpreview.utils.config import DEFAULT_CONFIG
from meshpreview.utils.logger import logger

_NAV_DEFAULTS = DEFAULT_CONFIG["navigation"]


class OrbitController:
    """
    Вращение камеры вокруг target по смещению указателя.

    Порядок за кадр:
      1. радиальная привязка: |position| → camera_distance;
      2. нулевое смещение – вращения нет;
      3. yaw вокруг up_direction, затем pitch вокруг правой оси камеры,
         взятой из view‑матрицы ПОСЛЕ yaw;
      4. orthographic_focus_plane = расстояние до начала координат в плоскости XZ.
    """

    def __init__(self, scale: float = _NAV_DEFAULTS["orbit_scale"],
                 snap_tolerance: float = _NAV_DEFAULTS["snap_tolerance"]):
        self.scale = float(scale)
        self.snap_tolerance = float(snap_tolerance)

    def update(self, camera: Camera, pointer_delta: Vec2, camera_distance: float) -> None:
        self.snap_to_distance(camera, camera_distance)

        if not pointer_delta.is_zero():
            self.rotate(camera, pointer_delta)

        p = camera.position
        camera.set_orthographic_focus_plane(math.sqrt(p.x * p.x + p.z * p.z))

    def snap_to_distance(self, camera: Camera, camera_distance: float) -> None:
        position = camera.position
        current = position.length()
        if current == 0.0:
            # направления нет – привязку пропускаем
            return
        if abs(camera_distance - current) > self.snap_tolerance:
            snapped = position * (camera_distance / current)
            if snapped == camera.target:
                logger.debug(f"[Navigation] Snap would put the eye on the target {snapped}, skipped")
                return
            camera.set_position(snapped)

    def rotate(self, camera: Camera, pointer_delta: Vec2) -> None:
        target = camera.target
        if target is None:
            raise ValueError("orbit navigation needs a camera target")

        angle_x = self.scale * pointer_delta.x * (2.0 * math.pi / camera.horizontal_resolution)
        angle_y = self.scale * pointer_delta.y * (math.pi / camera.vertical_resolution)
        pivot = Vec4.from_vec3(target)

        # yaw
        yaw = Mat4.rotate(angle_x, camera.up_direction)
        camera.set_position(self._rotate_about(yaw, camera.position, pivot))

        # pitch – правая ось уже после yaw
        pitch = Mat4.rotate(angle_y, camera.right_vector())
        camera.set_position(self._rotate_about(pitch, camera.position, pivot))

    @staticmethod
    def _rotate_about(rotation: Mat4, point: Vec3, pivot: Vec4) -> Vec3:
        return (rotation @ (Vec4.from_vec3(point) - pivot) + pivot).xyz()


class SceneNavigation:
    """Состояние навигации сцены: камера, дистанция, указатель."""

    def __init__(
        self,
        camera: Optional[Camera] = None,
        orbit: Optional[OrbitController] = None,
        min_camera_distance: float = _NAV_DEFAULTS["min_distance"],
        max_camera_distance: float = _NAV_DEFAULTS["max_distance"],
        zoom_factor: float = _NAV_DEFAULTS["zoom_factor"],
    ):
        min_camera_distance = float(min_camera_distance)
        max_camera_distance = float(max_camera_distance)
        if not 0.0 < min_camera_distance <= max_camera_distance:
            raise ValueError(
                f"camera distance bounds must satisfy 0 < min <= max, "
                f"got min={min_camera_distance}, max={max_camera_distance}"
            )
        if not 0.0 < zoom_factor < 1.0:
            raise ValueError(f"zoom_factor must lie in (0, 1), got {zoom_factor}")

        if camera is None:
            camera = Camera(
                position=Vec3(0.0, 2.0, 4.0),
                orthographic_focus_plane=4.0,
                target=Vec3(0.0, 0.0, 0.0),
                projection=ProjectionType.PERSPECTIVE,
            )
        self.camera = camera
        self.orbit = orbit if orbit is not None else OrbitController()

        self.min_camera_distance = min_camera_distance
        self.max_camera_distance = max_camera_distance
        self.zoom_factor = float(zoom_factor)
        self.camera_distance = camera.position.length()

        self.last_pointer_location: Optional[Vec2] = None
        self.pointer_delta = Vec2()

    @classmethod
    def from_config(cls, cfg) -> "SceneNavigation":
        """Камера и навигация из секций "camera"/"navigation" Config."""
        cam_cfg = cfg.section("camera")
        nav_cfg = cfg.section("navigation")
        camera = Camera(
            vertical_field_of_view=cam_cfg["fov"],
            near_clipping_plane=cam_cfg["near"],
            far_clipping_plane=cam_cfg["far"],
            position=Vec3(0.0, 2.0, 4.0),
            orthographic_focus_plane=4.0,
            target=Vec3(0.0, 0.0, 0.0),
        )
        orbit = OrbitController(nav_cfg["orbit_scale"], nav_cfg["snap_tolerance"])
        return cls(
            camera,
            orbit,
            min_camera_distance=nav_cfg["min_distance"],
            max_camera_distance=nav_cfg["max_distance"],
            zoom_factor=nav_cfg["zoom_factor"],
        )

    # -----------------------------------------------------------------
    #   Команды хоста
    # -----------------------------------------------------------------
    def toggle_projection(self) -> None:
        self.camera.toggle_projection()
        logger.info(f"[Navigation] Projection: {self.camera.projection.value}")

    def set_camera_distance(self, distance: float) -> None:
        distance = float(distance)
        if not math.isfinite(distance):
            raise ValueError(f"camera distance must be finite, got {distance}")
        self.camera_distance = max(self.min_camera_distance,
                                   min(self.max_camera_distance, distance))

    def zoom(self, steps: float) -> None:
        """steps > 0 – приблизить, steps < 0 – отдалить."""
        self.set_camera_distance(self.camera_distance * self.zoom_factor ** steps)

    def sync_distance_from_camera(self) -> None:
        """Взять дистанцию из текущей позиции камеры (после загрузки)."""
        self.camera_distance = self.camera.position.length()

    # -----------------------------------------------------------------
    #   Указатель
    # -----------------------------------------------------------------
    def pointer_pressed(self, x: float, y: float) -> None:
        self.last_pointer_location = Vec2(x, y)

    def pointer_moved(self, x: float, y: float) -> None:
        location = Vec2(x, y)
        if self.last_pointer_location is not None:
            self.pointer_delta = self.pointer_delta + (location - self.last_pointer_location)
        self.last_pointer_location = location

    def pointer_released(self) -> None:
        self.last_pointer_location = None
        self.pointer_delta = Vec2()

    # -----------------------------------------------------------------
    #   Кадр
    # -----------------------------------------------------------------
    def update(self, view_width: float, view_height: float) -> None:
        self.camera.set_resolution(view_width, view_height)
        self.orbit.update(self.camera, self.pointer_delta, self.camera_distance)
        self.pointer_delta = Vec2()
