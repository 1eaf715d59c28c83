"""
Скрывает GLFW‑callback‑механику: курсор, кнопки мыши, колесо, resize.
События сразу передаются в SceneNavigation.
"""

import glfw

from meshpreview.utils.logger import logger


class InputManager:
    """Скрывает GLFW‑callback‑механику."""
    def __init__(self, window, navigation):
        self.window = window
        self.navigation = navigation
        self.viewport = None
        self._setup_callbacks()

    def _setup_callbacks(self):
        glfw.set_cursor_pos_callback(self.window, self._mouse_move_cb)
        glfw.set_mouse_button_callback(self.window, self._mouse_button_cb)
        glfw.set_scroll_callback(self.window, self._mouse_scroll_cb)
        glfw.set_framebuffer_size_callback(self.window, self._resize_cb)

    def _mouse_button_cb(self, win, button, action, mods):
        if button != glfw.MOUSE_BUTTON_LEFT:
            return
        if action == glfw.PRESS:
            x, y = glfw.get_cursor_pos(win)
            self.navigation.pointer_pressed(x, y)
        elif action == glfw.RELEASE:
            self.navigation.pointer_released()

    def _mouse_move_cb(self, win, xpos, ypos):
        # вращаем только пока зажата кнопка
        if self.navigation.last_pointer_location is not None:
            self.navigation.pointer_moved(xpos, ypos)

    def _mouse_scroll_cb(self, win, xoff, yoff):
        self.navigation.zoom(yoff)

    def _resize_cb(self, win, w, h):
        # свёрнутое окно присылает 0×0
        if w > 0 and h > 0:
            self.viewport = (w, h)

    def detach(self):
        glfw.set_cursor_pos_callback(self.window, None)
        glfw.set_mouse_button_callback(self.window, None)
        glfw.set_scroll_callback(self.window, None)
        glfw.set_framebuffer_size_callback(self.window, None)
        logger.debug("[Input] Callbacks detached.")
