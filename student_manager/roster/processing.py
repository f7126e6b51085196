# roster/processing.py
"""Модуль для обработки данных: поиск и сортировка списка студентов."""
from datetime import date
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Union

from .models import Record, TEXT_FIELDS, resolve_field

SEARCHABLE_FIELDS = TEXT_FIELDS
SORTABLE_FIELDS = TEXT_FIELDS + ("average_grade",)
NAME_PAIR = ("last_name", "first_name")

SortFields = Union[str, Sequence[str]]


class SortDirection(str, Enum):
    """Направление сортировки."""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Union[str, "SortDirection"]) -> "SortDirection":
        """Принимает 'asc'/'ascending' и 'desc'/'descending' в любом регистре."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ("asc", "ascending"):
            return cls.ASC
        if text in ("desc", "descending"):
            return cls.DESC
        raise ValueError(f"Неверное направление сортировки: '{value}'. Доступно: 'asc', 'desc'.")


def search_records(records: Iterable[Record], term: Optional[str]) -> List[Record]:
    """Возвращает записи, в текстовых полях которых встречается term (без учета регистра).

    Оценки и средний балл в поиске не участвуют. Пустой term возвращает все записи.
    """
    if not term:
        return list(records)

    needle = term.lower()
    return [
        r for r in records
        if any(needle in getattr(r, field).lower() for field in SEARCHABLE_FIELDS)
    ]


def resolve_sort_fields(fields: SortFields) -> List[str]:
    """Определяет, по каким атрибутам сортировать.

    Пара фамилия + имя дает составной ключ. Любой другой список сводится
    к первому полю.
    """
    names = [fields] if isinstance(fields, str) else list(fields)

    resolved = []
    for name in names:
        attr = resolve_field(name)
        if attr not in SORTABLE_FIELDS:
            raise ValueError(f"Неверное поле для сортировки: '{name}'.")
        resolved.append(attr)

    if len(resolved) == 2 and set(resolved) == set(NAME_PAIR):
        return list(NAME_PAIR)
    return resolved[:1]


def _birth_date_key(value: str):
    # Нераспознанные даты идут раньше всех корректных
    try:
        return (1, date.fromisoformat(value))
    except ValueError:
        return (0, date.min)


def _field_key(field: str) -> Callable[[Record], object]:
    if field == "average_grade":
        return lambda r: float(r.average_grade)
    if field == "birth_date":
        return lambda r: _birth_date_key(r.birth_date)
    return lambda r: str(getattr(r, field)).lower()


def sort_records(records: Iterable[Record], fields: SortFields,
                 direction: Union[str, SortDirection] = SortDirection.ASC) -> List[Record]:
    """Возвращает новый отсортированный список; исходная последовательность не меняется.

    Сортировка стабильная в обоих направлениях: записи с равными ключами
    сохраняют исходный порядок.
    """
    reverse = SortDirection.parse(direction) is SortDirection.DESC
    keys = [_field_key(field) for field in resolve_sort_fields(fields)]
    if not keys:
        return list(records)
    return sorted(records, key=lambda r: tuple(key(r) for key in keys), reverse=reverse)
