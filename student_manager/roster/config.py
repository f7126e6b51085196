# roster/config.py
"""Настройки приложения из переменных окружения (и файла .env, если он есть)."""
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .io_utils import DEFAULT_SLOT

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings:
    """Настройки хранилища, экспорта и логирования.

    Переменные окружения:
        ROSTER_DATA_DIR: каталог со слотами хранилища (по умолчанию data)
        ROSTER_STORAGE_SLOT: имя слота со списком студентов (studentGroup)
        ROSTER_EXPORT_DIR: каталог для текстовых отчетов (exports)
        LOG_LEVEL: уровень логирования (INFO)
        LOG_FILE: путь к файлу лога; если не задан, лог пишется только в консоль
    """

    def __init__(self, env_file: Optional[str] = None):
        load_dotenv(env_file)

        self._data_dir = Path(os.getenv("ROSTER_DATA_DIR", "data"))
        self._storage_slot = os.getenv("ROSTER_STORAGE_SLOT", DEFAULT_SLOT)
        self._export_dir = Path(os.getenv("ROSTER_EXPORT_DIR", "exports"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("LOG_FILE") or None

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def storage_slot(self) -> str:
        return self._storage_slot

    @property
    def export_dir(self) -> Path:
        return self._export_dir

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def log_level_value(self) -> int:
        """Уровень логирования в виде числа для logging."""
        return getattr(logging, self._log_level)

    @property
    def log_file(self) -> Optional[str]:
        return self._log_file

    def validate(self) -> bool:
        """Проверяет значения настроек. При ошибке бросает ValueError со списком проблем."""
        errors = []

        if not self._storage_slot.strip():
            errors.append("ROSTER_STORAGE_SLOT не может быть пустым")
        if self._log_level not in LOG_LEVELS:
            errors.append(f"LOG_LEVEL должен быть одним из {', '.join(LOG_LEVELS)}, получено: {self._log_level}")

        if errors:
            raise ValueError("Некорректные настройки:\n" + "\n".join(f"  - {e}" for e in errors))
        return True
