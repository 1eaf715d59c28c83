# meshpreview/scene/camera_io.py
"""
(Де)сериализация камеры в/из JSON.
Имена ключей – контракт файла, менять нельзя. Матрицы не сохраняются:
после загрузки обе помечены устаревшими.
"""

import json
import math
from pathlib import Path
from typing import Dict, Any

from meshpreview.math.vec3 import Vec3
from meshpreview.scene.camera import Camera, ProjectionType
from meshpreview.utils.logger import logger

_SCALAR_FIELDS = (
    "horizontalResolution",
    "verticalResolution",
    "verticalFieldOfView",
    "nearClippingPlane",
    "farClippingPlane",
    "orthographicFocusPlane",
)
_VECTOR_FIELDS = ("position", "rotation", "upDirection")


class CameraDecodeError(ValueError):
    """Повреждённые или неполные данные камеры."""


# ----------------------------------------------------------------------
def _vec3_to_list(v: Vec3) -> list[float]:
    return [float(v.x), float(v.y), float(v.z)]


def _read_scalar(data: Dict[str, Any], key: str) -> float:
    if key not in data:
        raise CameraDecodeError(f"missing field '{key}'")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CameraDecodeError(f"field '{key}' must be a number, got {value!r}")
    try:
        value = float(value)
    except OverflowError:
        raise CameraDecodeError(f"field '{key}' is out of float range") from None
    if not math.isfinite(value):
        raise CameraDecodeError(f"field '{key}' must be finite, got {value!r}")
    return value


def _read_vec3(data: Dict[str, Any], key: str) -> Vec3:
    value = data[key]
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise CameraDecodeError(f"field '{key}' must be a list of 3 numbers, got {value!r}")
    for component in value:
        if isinstance(component, bool) or not isinstance(component, (int, float)):
            raise CameraDecodeError(f"field '{key}' must be a list of 3 numbers, got {value!r}")
    try:
        return Vec3(*(float(component) for component in value))
    except OverflowError:
        raise CameraDecodeError(f"field '{key}' is out of float range") from None


# ----------------------------------------------------------------------
def camera_to_dict(camera: Camera) -> Dict[str, Any]:
    """Camera → словарь (для JSON). target без значения не пишется."""
    data = {
        "horizontalResolution": camera.horizontal_resolution,
        "verticalResolution": camera.vertical_resolution,
        "verticalFieldOfView": camera.vertical_field_of_view,
        "nearClippingPlane": camera.near_clipping_plane,
        "farClippingPlane": camera.far_clipping_plane,
        "orthographicFocusPlane": camera.orthographic_focus_plane,
        "position": _vec3_to_list(camera.position),
        "rotation": _vec3_to_list(camera.rotation),
        "upDirection": _vec3_to_list(camera.up_direction),
    }
    if camera.target is not None:
        data["target"] = _vec3_to_list(camera.target)
    data["projection"] = camera.projection.value
    return data


def dict_to_camera(data: Dict[str, Any]) -> Camera:
    """Воссоздаёт Camera из словаря. Любая ошибка – CameraDecodeError."""
    if not isinstance(data, dict):
        raise CameraDecodeError(f"camera record must be an object, got {type(data).__name__}")

    scalars = {key: _read_scalar(data, key) for key in _SCALAR_FIELDS}

    vectors = {}
    for key in _VECTOR_FIELDS:
        if key not in data:
            raise CameraDecodeError(f"missing field '{key}'")
        vectors[key] = _read_vec3(data, key)

    target = None
    if data.get("target") is not None:
        target = _read_vec3(data, "target")

    if "projection" not in data:
        raise CameraDecodeError("missing field 'projection'")
    try:
        projection = ProjectionType(data["projection"])
    except ValueError:
        raise CameraDecodeError(
            f"field 'projection' must be 'orthographic' or 'perspective', got {data['projection']!r}"
        ) from None

    try:
        camera = Camera(
            horizontal_resolution=scalars["horizontalResolution"],
            vertical_resolution=scalars["verticalResolution"],
            vertical_field_of_view=scalars["verticalFieldOfView"],
            near_clipping_plane=scalars["nearClippingPlane"],
            far_clipping_plane=scalars["farClippingPlane"],
            orthographic_focus_plane=scalars["orthographicFocusPlane"],
            position=vectors["position"],
            rotation=vectors["rotation"],
            up_direction=vectors["upDirection"],
            target=target,
            projection=projection,
        )
    except ValueError as exc:
        raise CameraDecodeError(f"invalid camera record: {exc}") from exc

    camera.mark_stale()
    return camera


# ----------------------------------------------------------------------
def save_camera(camera: Camera, path: Path) -> None:
    """Записывает камеру в JSON‑файл."""
    with Path(path).open("w", encoding="utf-8") as f:
        json.dump(camera_to_dict(camera), f, indent=2, ensure_ascii=False)
    logger.info(f"[CameraIO] Camera saved to {path}")


def load_camera(path: Path) -> Camera:
    """Читает камеру из JSON‑файла."""
    with Path(path).open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CameraDecodeError(f"{path}: not valid UTF-8 JSON ({exc})") from exc
    camera = dict_to_camera(raw)
    logger.info(f"[CameraIO] Camera loaded from {path}")
    return camera
