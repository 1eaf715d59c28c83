# -*- coding: utf-8 -*-
"""
conftest.py – общие фикстуры: чистый Config в tmp‑каталоге, камеры,
мок GLFW‑callback‑ов (окно не создаётся).
"""

import glfw
import pytest

from meshpreview.math import Vec3
from meshpreview.scene import Camera
from meshpreview.utils.config import Config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """config.json пишется во временный каталог, синглтон сбрасывается."""
    monkeypatch.chdir(tmp_path)
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def camera() -> Camera:
    """Камера на оси Z, смотрит в начало координат."""
    return Camera(
        horizontal_resolution=800,
        vertical_resolution=600,
        position=Vec3(0.0, 0.0, 5.0),
        target=Vec3(0.0, 0.0, 0.0),
        orthographic_focus_plane=5.0,
    )


class FakeGLFW:
    """Запоминает зарегистрированные callback‑и по имени."""

    def __init__(self):
        self.callbacks = {}
        self.cursor = (0.0, 0.0)

    def register(self, name):
        def _set(window, cb):
            self.callbacks[name] = cb
        return _set

    def fire(self, name, *args):
        self.callbacks[name]("window", *args)


@pytest.fixture
def fake_glfw(monkeypatch) -> FakeGLFW:
    fake = FakeGLFW()
    for name in ("cursor_pos", "mouse_button", "scroll", "framebuffer_size"):
        monkeypatch.setattr(glfw, f"set_{name}_callback", fake.register(name))
    monkeypatch.setattr(glfw, "get_cursor_pos", lambda win: fake.cursor)
    return fake
