# roster/roster.py
"""Модуль с классом Roster: упорядоченный список студентов и его сохранение."""
import logging
from typing import Any, Iterator, List, Optional, Union

from .errors import StorageError
from .io_utils import DEFAULT_SLOT, Storage, deserialize_records, serialize_records
from .logger import mask_email
from .models import Record, RecordPatch
from .processing import SortDirection, SortFields, search_records, sort_records
from .validation import normalize_phone

logger = logging.getLogger(__name__)


class Roster:
    """Список студентов группы.

    Порядок добавления считается каноническим: поиск и сортировка возвращают
    новые списки и его не меняют. Список загружается из слота хранилища при
    создании и целиком сохраняется после каждого изменения.
    """

    def __init__(self, storage: Storage, slot: str = DEFAULT_SLOT):
        self.storage = storage
        self.slot = slot
        self._records: List[Record] = []
        self.load()

    def load(self) -> None:
        """Перечитывает список из хранилища. Поврежденные данные -> StorageError."""
        data = self.storage.get_item(self.slot)
        self._records = deserialize_records(data) if data else []
        logger.info("Загружено %d студентов из слота '%s'", len(self._records), self.slot)

    def save(self) -> bool:
        """Сохраняет весь список. Возвращает False, если запись не удалась."""
        try:
            self.storage.set_item(self.slot, serialize_records(self._records))
        except StorageError as e:
            logger.error("Не удалось сохранить список студентов: %s", e)
            return False
        return True

    def add(self, record: Record) -> bool:
        """Добавляет запись в конец списка. Проверка данных здесь не выполняется."""
        self._records.append(record)
        logger.info("Добавлен студент %s (%s)", record.id, mask_email(record.email))
        return self.save()

    def delete(self, record_id: Any) -> bool:
        """Удаляет запись по id. Отсутствующий id не считается ошибкой."""
        before = len(self._records)
        self._records = [r for r in self._records if r.id != record_id]
        if len(self._records) == before:
            logger.debug("Студент %s не найден, удалять нечего", record_id)
        return self.save()

    def update(self, record_id: Any, patch: RecordPatch) -> bool:
        """Переносит в запись поля из patch. Если id не найден, ничего не происходит.

        Словарь от формы сначала превращается в патч через RecordPatch.from_dict:
        неизвестные ключи отсекаются там, до изменения списка.
        """
        record = self.get(record_id)
        if record is None:
            logger.debug("Студент %s не найден, обновление пропущено", record_id)
            return False

        patch.apply_to(record)
        logger.info("Обновлен студент %s: %s", record_id, ", ".join(patch.present_fields()))
        return self.save()

    def get(self, record_id: Any) -> Optional[Record]:
        return next((r for r in self._records if r.id == record_id), None)

    def get_all(self) -> List[Record]:
        """Все записи в каноническом порядке."""
        return list(self._records)

    def search(self, term: Optional[str]) -> List[Record]:
        return search_records(self._records, term)

    def sort(self, fields: SortFields,
             direction: Union[str, SortDirection] = SortDirection.ASC) -> List[Record]:
        return sort_records(self._records, fields, direction)

    def is_email_unique(self, email: str, exclude_id: Any = None) -> bool:
        """Email уникален, если его нет ни у одной записи, кроме exclude_id (без учета регистра)."""
        email = email.lower()
        return not any(
            r.email.lower() == email and r.id != exclude_id
            for r in self._records
        )

    def is_phone_unique(self, phone: str, exclude_id: Any = None) -> bool:
        """Телефоны сравниваются без пробелов, дефисов и скобок."""
        phone = normalize_phone(phone)
        return not any(
            normalize_phone(r.phone) == phone and r.id != exclude_id
            for r in self._records
        )

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def __contains__(self, record_id: Any) -> bool:
        return self.get(record_id) is not None
