# roster/state.py
"""Состояние приложения: выбранная сортировка, строка поиска и редактируемый студент.

Интерфейс не хранит глобальных переменных: все, что нужно для отображения
списка, находится в AppState, а Roster передается ему снаружи.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from .io_utils import format_report, write_report
from .models import Record, resolve_field
from .processing import NAME_PAIR, SORTABLE_FIELDS, SortDirection, sort_records
from .roster import Roster
from .validation import build_patch, create_record

logger = logging.getLogger(__name__)


class AppState:
    """Текущее состояние интерфейса поверх одного Roster."""

    def __init__(self, roster: Roster):
        self.roster = roster
        self.selected_sort_fields: List[str] = []
        self.sort_direction: Optional[SortDirection] = None
        self.search_term: Optional[str] = None
        self.editing_id: Any = None
        self.last_save_ok = True

    # --- Сортировка ---

    def toggle_sort_field(self, field: str) -> List[str]:
        """Выбор поля сортировки.

        Фамилию и имя можно выбрать одновременно, повторный выбор снимает поле.
        Любое другое поле заменяет весь текущий выбор.
        """
        name = resolve_field(field)
        if name not in SORTABLE_FIELDS:
            raise ValueError(f"Неверное поле для сортировки: '{field}'.")

        if name in NAME_PAIR:
            if name in self.selected_sort_fields:
                self.selected_sort_fields.remove(name)
            elif any(f in NAME_PAIR for f in self.selected_sort_fields):
                self.selected_sort_fields.append(name)
            else:
                self.selected_sort_fields = [name]
        else:
            self.selected_sort_fields = [name]
        return list(self.selected_sort_fields)

    def set_sort_direction(self, direction: Union[str, SortDirection]) -> None:
        self.sort_direction = SortDirection.parse(direction)

    def clear_sorting(self) -> None:
        self.selected_sort_fields = []
        self.sort_direction = None

    @property
    def sort_ready(self) -> bool:
        return bool(self.selected_sort_fields) and self.sort_direction is not None

    def effective_sort_fields(self) -> List[str]:
        """Фамилия + имя, если выбраны обе; иначе первое выбранное поле."""
        if all(f in self.selected_sort_fields for f in NAME_PAIR):
            return list(NAME_PAIR)
        return self.selected_sort_fields[:1]

    # --- Поиск ---

    def apply_search(self, term: str) -> None:
        term = (term or "").strip()
        if not term:
            raise ValueError("Введіть текст для пошуку!")
        self.search_term = term

    def reset_search(self) -> None:
        self.search_term = None

    def visible_records(self) -> List[Record]:
        """Записи для отображения: сначала поиск, затем сортировка найденного."""
        records = self.roster.search(self.search_term)
        if self.sort_ready:
            records = sort_records(records, self.effective_sort_fields(), self.sort_direction)
        return records

    # --- Изменение списка ---

    def add_record(self, fields: Mapping[str, Any]) -> Record:
        """Проверяет и добавляет студента, после чего список сортируется по имени."""
        record = create_record(self.roster, fields)
        self.last_save_ok = self.roster.add(record)

        self.selected_sort_fields = ["first_name"]
        self.sort_direction = SortDirection.ASC
        return record

    def start_edit(self, record_id: Any) -> Optional[Record]:
        record = self.roster.get(record_id)
        self.editing_id = record.id if record is not None else None
        return record

    def cancel_edit(self) -> None:
        self.editing_id = None

    def save_edit(self, fields: Mapping[str, Any]) -> bool:
        """Проверяет поля и применяет их к редактируемой записи."""
        if self.editing_id is None:
            raise ValueError("Не вибрано студента для редагування.")

        patch = build_patch(self.roster, self.editing_id, fields)
        self.last_save_ok = self.roster.update(self.editing_id, patch)
        self.editing_id = None
        return self.last_save_ok

    def delete_record(self, record_id: Any) -> bool:
        if record_id == self.editing_id:
            self.editing_id = None
        self.last_save_ok = self.roster.delete(record_id)
        return self.last_save_ok

    # --- Экспорт ---

    def export_report(self) -> str:
        return format_report(self.visible_records())

    def export_to(self, directory: Union[str, Path], now: Optional[datetime] = None) -> Path:
        return write_report(directory, self.visible_records(), now)
