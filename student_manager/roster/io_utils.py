# roster/io_utils.py
"""Модуль для операций ввода/вывода: слот хранилища со списком студентов и текстовый отчет."""
import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .errors import DataValidationError, FileProcessingError, StorageError
from .models import Record, format_grade

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "studentGroup"

REPORT_RULE = "=" * 26
REPORT_CLOSING_RULE = "=" * 53


class Storage:
    """Именованные слоты со строковыми значениями (аналог localStorage браузера)."""

    def get_item(self, key: str) -> Optional[str]:
        """Возвращает содержимое слота или None, если слот пуст."""
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        """Полностью перезаписывает слот. При ошибке бросает StorageError."""
        raise NotImplementedError


class MemoryStorage(Storage):
    """Хранилище в памяти процесса. Используется в тестах и для временных сессий."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileStorage(Storage):
    """Каждый слот хранится в отдельном файле <directory>/<key>.json."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (IOError, UnicodeDecodeError) as e:
            raise StorageError(f"Не удалось прочитать файл {path}: {e}")

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_path = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Пишем во временный файл и подменяем им слот: файл никогда не остается записанным наполовину
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                file.write(value)
            os.replace(tmp_path, path)
        except IOError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(f"Ошибка записи в файл {path}: {e}")
        logger.debug("Слот '%s' сохранен в %s", key, path)


def serialize_records(records: Sequence[Record]) -> str:
    """Сериализует весь список студентов в JSON-массив."""
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2)


def deserialize_records(text: str) -> List[Record]:
    """Восстанавливает список студентов из JSON-массива."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageError(f"Хранилище содержит некорректный JSON: {e}")

    if not isinstance(data, list):
        raise StorageError("Хранилище должно содержать JSON-массив записей.")

    try:
        return [Record.from_dict(item) for item in data]
    except DataValidationError as e:
        raise StorageError(str(e))


def format_record_block(number: int, record: Record) -> str:
    """Один пронумерованный блок отчета."""
    grades_str = ", ".join(format_grade(g) for g in record.grades)
    return (
        f"{REPORT_RULE}{number}{REPORT_RULE}\n"
        f"ПІБ: {record.last_name} {record.first_name} {record.middle_name}\n"
        f"Номер телефону: {record.phone}\n"
        f"Електрона пошта: {record.email}\n"
        f"Дата народження: {record.birth_date}\n"
        f"Група: {record.group}\n"
        f"Місце проживання: {record.address}\n"
        f"Форма навчання: {record.education_type}\n"
        f"Середньо статистична оцінка: {record.average_grade:.2f}\n"
        f"Оцінки студента: {grades_str}\n"
        f"{REPORT_CLOSING_RULE}\n\n"
    )


def format_report(records: Sequence[Record]) -> str:
    """Формирует текстовый отчет: по одному блоку на студента, нумерация с 1."""
    return "".join(format_record_block(i, r) for i, r in enumerate(records, start=1))


def report_filename(now: Optional[datetime] = None) -> str:
    """Имя файла отчета с датой и временем, например Список_студентів_19-10-2026_14-05.txt."""
    now = now or datetime.now()
    return f"Список_студентів_{now:%d-%m-%Y}_{now:%H-%M}.txt"


def write_report(directory: Union[str, Path], records: Sequence[Record],
                 now: Optional[datetime] = None) -> Path:
    """Сохраняет отчет в каталог и возвращает путь к созданному файлу."""
    if not records:
        raise DataValidationError("Немає студентів для завантаження!")

    path = Path(directory) / report_filename(now)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, mode='w', encoding='utf-8', newline='') as file:
            file.write(format_report(records))
    except IOError as e:
        raise FileProcessingError(f"Ошибка экспорта в файл {path}: {e}")

    logger.info("Отчет по %d студентам сохранен в %s", len(records), path)
    return path
