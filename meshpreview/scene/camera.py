"""
Камера просмотрщика: параметры + лениво пересчитываемые view/projection.

Каждая матрица имеет свой флаг «устарела». Сеттеры сравнивают новое
значение со старым (точное равенство) и взводят только те флаги, от
которых матрица зависит:

    параметр                     view   projection
    ---------------------------  -----  ----------
    resolution                   да     да
    vertical_field_of_view       –      да
    near / far clipping planes   –      да
    orthographic_focus_plane     –      да
    position                     да     да
    rotation                     да     да
    up_direction                 да     –
    target                       да     –
    projection                   –      да
"""

import math
from enum import Enum
from typing import Optional

from meshpreview.math.vec3 import Vec3
from meshpreview.math.mat4 import Mat4
from meshpreview.utils.logger import logger


# нижняя граница focus plane для ортографического бокса
_MIN_ORTHO_FOCUS = 1e-4


class ProjectionType(str, Enum):
    ORTHOGRAPHIC = "orthographic"
    PERSPECTIVE = "perspective"


# ----------------------------------------------------------------------
#   Проверки аргументов (ошибка – до изменения состояния)
# ----------------------------------------------------------------------
def _check_positive(name: str, value) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(f"{name} must be a positive finite number, got {value}")
    return value


def _check_vec3(name: str, value) -> Vec3:
    v = value.copy() if isinstance(value, Vec3) else Vec3.from_iterable(value)
    if not v.is_finite():
        raise ValueError(f"{name} must have finite components, got {v}")
    return v


def _check_clipping(near, far):
    near = _check_positive("near_clipping_plane", near)
    far = _check_positive("far_clipping_plane", far)
    if near >= far:
        raise ValueError(f"near_clipping_plane ({near}) must be less than far_clipping_plane ({far})")
    return near, far


def _check_fov(value) -> float:
    value = _check_positive("vertical_field_of_view", value)
    if value >= 180.0:
        raise ValueError(f"vertical_field_of_view must be below 180 degrees, got {value}")
    return value


def _check_focus_plane(value) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0.0:
        raise ValueError(f"orthographic_focus_plane must be a non-negative finite number, got {value}")
    return value


def _check_up(value) -> Vec3:
    up = _check_vec3("up_direction", value)
    if up.length() == 0.0:
        raise ValueError("up_direction must not be a zero vector")
    return up


class Camera:
    """Камера с ленивым кэшем view/projection матриц."""

    def __init__(
        self,
        horizontal_resolution: float = 1920.0,
        vertical_resolution: float = 1080.0,
        vertical_field_of_view: float = 45.0,
        near_clipping_plane: float = 0.01,
        far_clipping_plane: float = 100.0,
        orthographic_focus_plane: float = 0.0,
        position=None,
        rotation=None,
        up_direction=None,
        target=None,
        projection=ProjectionType.PERSPECTIVE,
    ):
        self._horizontal_resolution = _check_positive("horizontal_resolution", horizontal_resolution)
        self._vertical_resolution = _check_positive("vertical_resolution", vertical_resolution)
        self._vertical_field_of_view = _check_fov(vertical_field_of_view)
        self._near_clipping_plane, self._far_clipping_plane = _check_clipping(
            near_clipping_plane, far_clipping_plane
        )
        self._orthographic_focus_plane = _check_focus_plane(orthographic_focus_plane)
        self._position = _check_vec3("position", position if position is not None else Vec3())
        self._rotation = _check_vec3("rotation", rotation if rotation is not None else Vec3())
        self._up_direction = _check_up(up_direction if up_direction is not None else Vec3(0.0, 1.0, 0.0))
        self._target = None
        if target is not None:
            self._target = self._check_target(target, self._position)
        self._projection = ProjectionType(projection)

        self._view_matrix = Mat4.identity()
        self._projection_matrix = Mat4.identity()
        self._view_matrix_stale = True
        self._projection_matrix_stale = True

        # счётчики пересчётов (инструментирование кэша)
        self.view_matrix_updates = 0
        self.projection_matrix_updates = 0

    @staticmethod
    def _check_target(value, position: Vec3) -> Vec3:
        target = _check_vec3("target", value)
        if target == position:
            raise ValueError(f"target must differ from position, both are {target}")
        return target

    # -----------------------------------------------------------------
    #   Чтение параметров (копии, чтобы обойти сеттеры было нельзя)
    # -----------------------------------------------------------------
    @property
    def horizontal_resolution(self) -> float:
        return self._horizontal_resolution

    @property
    def vertical_resolution(self) -> float:
        return self._vertical_resolution

    @property
    def vertical_field_of_view(self) -> float:
        return self._vertical_field_of_view

    @property
    def near_clipping_plane(self) -> float:
        return self._near_clipping_plane

    @property
    def far_clipping_plane(self) -> float:
        return self._far_clipping_plane

    @property
    def orthographic_focus_plane(self) -> float:
        return self._orthographic_focus_plane

    @property
    def position(self) -> Vec3:
        return self._position.copy()

    @property
    def rotation(self) -> Vec3:
        return self._rotation.copy()

    @property
    def up_direction(self) -> Vec3:
        return self._up_direction.copy()

    @property
    def target(self) -> Optional[Vec3]:
        return None if self._target is None else self._target.copy()

    @property
    def projection(self) -> ProjectionType:
        return self._projection

    @property
    def aspect_ratio(self) -> float:
        return self._horizontal_resolution / self._vertical_resolution

    @property
    def view_matrix_stale(self) -> bool:
        return self._view_matrix_stale

    @property
    def projection_matrix_stale(self) -> bool:
        return self._projection_matrix_stale

    # -----------------------------------------------------------------
    #   Сеттеры
    # -----------------------------------------------------------------
    def set_resolution(self, width: float, height: float) -> None:
        width = _check_positive("horizontal_resolution", width)
        height = _check_positive("vertical_resolution", height)
        if width == self._horizontal_resolution and height == self._vertical_resolution:
            return
        self._horizontal_resolution = width
        self._vertical_resolution = height
        self._view_matrix_stale = True
        self._projection_matrix_stale = True

    def set_vertical_field_of_view(self, fov_deg: float) -> None:
        fov_deg = _check_fov(fov_deg)
        if fov_deg == self._vertical_field_of_view:
            return
        self._vertical_field_of_view = fov_deg
        self._projection_matrix_stale = True

    def set_clipping_planes(self, near: float, far: float) -> None:
        near, far = _check_clipping(near, far)
        if near == self._near_clipping_plane and far == self._far_clipping_plane:
            return
        self._near_clipping_plane = near
        self._far_clipping_plane = far
        self._projection_matrix_stale = True

    def set_near_clipping_plane(self, near: float) -> None:
        self.set_clipping_planes(near, self._far_clipping_plane)

    def set_far_clipping_plane(self, far: float) -> None:
        self.set_clipping_planes(self._near_clipping_plane, far)

    def set_orthographic_focus_plane(self, distance: float) -> None:
        distance = _check_focus_plane(distance)
        if distance == self._orthographic_focus_plane:
            return
        self._orthographic_focus_plane = distance
        self._projection_matrix_stale = True

    def set_position(self, position) -> None:
        position = _check_vec3("position", position)
        if position == self._position:
            return
        if self._target is not None and position == self._target:
            raise ValueError(f"position must differ from target, both are {position}")
        self._position = position
        self._view_matrix_stale = True
        self._projection_matrix_stale = True

    def set_rotation(self, rotation) -> None:
        rotation = _check_vec3("rotation", rotation)
        if rotation == self._rotation:
            return
        self._rotation = rotation
        self._view_matrix_stale = True
        self._projection_matrix_stale = True

    def set_up_direction(self, up) -> None:
        up = _check_up(up)
        if up == self._up_direction:
            return
        self._up_direction = up
        self._view_matrix_stale = True

    def set_target(self, target) -> None:
        """None – free‑look (без look‑at)."""
        if target is not None:
            target = self._check_target(target, self._position)
        if target == self._target:
            return
        self._target = target
        self._view_matrix_stale = True

    def set_projection_mode(self, mode) -> None:
        mode = ProjectionType(mode)
        if mode == self._projection:
            return
        self._projection = mode
        self._projection_matrix_stale = True
        logger.debug(f"[Camera] Projection switched to {mode.value}")

    def toggle_projection(self) -> None:
        if self._projection == ProjectionType.PERSPECTIVE:
            self.set_projection_mode(ProjectionType.ORTHOGRAPHIC)
        else:
            self.set_projection_mode(ProjectionType.PERSPECTIVE)

    def mark_stale(self) -> None:
        """Принудительно пометить обе матрицы устаревшими."""
        self._view_matrix_stale = True
        self._projection_matrix_stale = True

    # свойства‑сеттеры ведут в явные set_*‑методы
    position = position.setter(set_position)
    rotation = rotation.setter(set_rotation)
    up_direction = up_direction.setter(set_up_direction)
    target = target.setter(set_target)
    projection = projection.setter(set_projection_mode)
    vertical_field_of_view = vertical_field_of_view.setter(set_vertical_field_of_view)
    near_clipping_plane = near_clipping_plane.setter(set_near_clipping_plane)
    far_clipping_plane = far_clipping_plane.setter(set_far_clipping_plane)
    orthographic_focus_plane = orthographic_focus_plane.setter(set_orthographic_focus_plane)

    # -----------------------------------------------------------------
    #   Матрицы
    # -----------------------------------------------------------------
    def get_view_matrix(self) -> Mat4:
        if self._view_matrix_stale:
            self._update_view_matrix()
            self._view_matrix_stale = False
            self.view_matrix_updates += 1
        return Mat4(self._view_matrix.m)

    def get_projection_matrix(self) -> Mat4:
        if self._projection_matrix_stale:
            self._update_projection_matrix()
            self._projection_matrix_stale = False
            self.projection_matrix_updates += 1
        return Mat4(self._projection_matrix.m)

    def right_vector(self) -> Vec3:
        """Локальная ось X камеры – первая строка блока вращения view."""
        return Vec3(*self.get_view_matrix().m[0, :3])

    def _update_view_matrix(self) -> None:
        if self._target is not None:
            self._view_matrix = Mat4.look_at(
                self._position.as_np(),
                self._target.as_np(),
                self._up_direction.as_np(),
            )
        else:
            # free‑look: ориентация камеры = Ry·Rx·Rz (градусы), view = Rᵀ·T(-eye)
            r = self._rotation
            orientation = Mat4.from_euler(r.x, r.y, r.z)
            p = self._position
            self._view_matrix = orientation.transpose() @ Mat4.translate(-p.x, -p.y, -p.z)
        logger.debug(f"[Camera] View matrix recomputed (eye={self._position}, target={self._target})")

    def _update_projection_matrix(self) -> None:
        aspect = self.aspect_ratio
        near, far = self._near_clipping_plane, self._far_clipping_plane

        if self._projection == ProjectionType.ORTHOGRAPHIC:
            half_height = self._ortho_focus_distance() * math.tan(
                math.radians(self._vertical_field_of_view) / 2.0
            )
            half_width = half_height * aspect
            self._projection_matrix = Mat4.orthographic(
                -half_width, half_width, -half_height, half_height, near, far
            )
        else:
            self._projection_matrix = Mat4.perspective(
                self._vertical_field_of_view, aspect, near, far
            )
        logger.debug(f"[Camera] Projection matrix recomputed ({self._projection.value}, aspect={aspect:.3f})")

    def _ortho_focus_distance(self) -> float:
        """Focus plane; при нуле (глаз на оси Y) – расстояние глаза до начала координат."""
        focus = self._orthographic_focus_plane
        if focus <= 0.0:
            focus = self._position.length()
            logger.debug(f"[Camera] Zero orthographic focus plane, using eye distance {focus:.4f}")
        return max(focus, _MIN_ORTHO_FOCUS)

    def __repr__(self):
        return (f"Camera(position={self._position}, target={self._target}, "
                f"projection={self._projection.value})")
