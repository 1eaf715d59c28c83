# meshpreview/session.py
# -*- coding: utf-8 -*-
"""
Сессия просмотрщика.

* Держит конфиг, навигацию (камера + orbit) и, если передано окно,
  GLFW‑ввод.
* frame() – один кадр: обновить навигацию и отдать view/projection.
* shutdown() – явное завершение вместо глобального уведомления.
"""
from pathlib import Path
from typing import Callable, Optional

from meshpreview.core.input import InputManager
from meshpreview.math.mat4 import Mat4
from meshpreview.scene.camera import Camera
from meshpreview.scene.camera_io import save_camera, load_camera
from meshpreview.scene.navigation import SceneNavigation
from meshpreview.utils import logger, Config, Profiler


class ViewerSession:
    """Сессия: одна камера на всё время жизни."""

    def __init__(
        self,
        config: Optional[Config] = None,
        navigation: Optional[SceneNavigation] = None,
        window=None,
    ):
        self.cfg = config if config is not None else Config()
        self.navigation = navigation if navigation is not None else SceneNavigation.from_config(self.cfg)

        win_cfg = self.cfg["window"]
        self.viewport = (win_cfg.get("width", 1280), win_cfg.get("height", 720))

        self.input = InputManager(window, self.navigation) if window is not None else None
        self._shutdown_hooks: list[Callable[[], None]] = []
        self.closed = False
        logger.info("[Session] Started.")

    @property
    def camera(self) -> Camera:
        return self.navigation.camera

    # -----------------------------------------------------------------
    def resize(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport size must be positive, got {width}x{height}")
        self.viewport = (width, height)

    def toggle_projection(self) -> None:
        self.navigation.toggle_projection()

    def frame(self) -> tuple[Mat4, Mat4]:
        """Один кадр: навигация → (view, projection)."""
        self._ensure_open()
        if self.input is not None and self.input.viewport is not None:
            self.viewport = self.input.viewport
        with Profiler("navigation.update"):
            self.navigation.update(*self.viewport)
        return self.camera.get_view_matrix(), self.camera.get_projection_matrix()

    # -----------------------------------------------------------------
    def save_camera(self, path: Path) -> None:
        save_camera(self.camera, path)

    def load_camera(self, path: Path) -> Camera:
        camera = load_camera(path)
        self.navigation.camera = camera
        self.navigation.sync_distance_from_camera()
        self.navigation.pointer_released()
        return camera

    # -----------------------------------------------------------------
    def add_shutdown_hook(self, hook: Callable[[], None]) -> None:
        self._shutdown_hooks.append(hook)

    def shutdown(self) -> None:
        """Повторный вызов ничего не делает."""
        if self.closed:
            return
        self.closed = True
        if self.input is not None:
            self.input.detach()
            self.input = None
        hooks, self._shutdown_hooks = self._shutdown_hooks, []
        for hook in hooks:
            hook()
        logger.info("[Session] Shut down.")

    def _ensure_open(self) -> None:
        if self.closed:
            raise RuntimeError("ViewerSession is shut down")
