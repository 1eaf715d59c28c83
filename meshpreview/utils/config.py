"""
Простой загрузчик/сохранитель конфигурации в формате JSON.
Если файл не найден – создаётся файл с настройками по‑умолчанию.
"""

import copy
import json
from pathlib import Path
from meshpreview.utils.logger import logger

DEFAULT_CONFIG = {
    "window": {"width": 1280, "height": 720, "title": "Mesh Preview"},
    "camera": {"fov": 45.0, "near": 0.01, "far": 100.0},
    "navigation": {
        "orbit_scale": 4.0,
        "snap_tolerance": 1e-4,
        "min_distance": 0.1,
        "max_distance": 100.0,
        "zoom_factor": 0.9,
    },
}


class Config:
    """Singleton‑подобный объект конфигурации."""
    _instance = None

    def __new__(cls, path: str = "config.json"):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.path = Path(path)
            cls._instance._load()
        return cls._instance

    @classmethod
    def reset(cls):
        """Забыть загруженный экземпляр (следующий Config() перечитает файл)."""
        cls._instance = None

    def _load(self):
        if self.path.is_file():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    self.data = json.load(f)
                logger.info("[Config] Loaded configuration.")
            except (OSError, json.JSONDecodeError) as exc:
                logger.error(f"[Config] Failed to read config: {exc}")
                self.data = copy.deepcopy(DEFAULT_CONFIG)
                self.save()
        else:
            logger.info("[Config] No config file – creating default.")
            self.data = copy.deepcopy(DEFAULT_CONFIG)
            self.save()

    def save(self):
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
            logger.info("[Config] Configuration saved.")
        except OSError as exc:
            logger.error(f"[Config] Unable to save config: {exc}")

    def __getitem__(self, key):
        return self.data.get(key, DEFAULT_CONFIG.get(key))

    def __setitem__(self, key, value):
        self.data[key] = value
        self.save()

    def get(self, key, default=None):
        return self.data.get(key, default)

    def section(self, key) -> dict:
        """Секция с подставленными значениями по‑умолчанию для отсутствующих ключей."""
        merged = dict(DEFAULT_CONFIG.get(key, {}))
        value = self.data.get(key)
        if isinstance(value, dict):
            merged.update(value)
        return merged
