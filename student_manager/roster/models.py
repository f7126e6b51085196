# roster/models.py
"""Модуль, определяющий основные модели данных: Record (студент) и RecordPatch."""
import uuid
from decimal import ROUND_HALF_UP, Decimal
from dataclasses import dataclass, fields as dataclass_fields
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .errors import DataValidationError

BUDGET = "Бюджет"
CONTRACT = "Контракт"
EDUCATION_TYPES = (BUDGET, CONTRACT)
DEFAULT_EDUCATION_TYPE = BUDGET

# Атрибут записи -> ключ в сохраненном JSON.
JSON_KEYS: Dict[str, str] = {
    "id": "id",
    "last_name": "lastName",
    "first_name": "firstName",
    "middle_name": "middleName",
    "phone": "phone",
    "email": "email",
    "birth_date": "birthDate",
    "group": "group",
    "address": "address",
    "education_type": "educationType",
    "grades": "grades",
    "average_grade": "averageGrade",
}
ATTRIBUTE_NAMES: Dict[str, str] = {key: attr for attr, key in JSON_KEYS.items()}

TEXT_FIELDS = (
    "last_name",
    "first_name",
    "middle_name",
    "phone",
    "email",
    "birth_date",
    "group",
    "address",
    "education_type",
)


def resolve_field(name: str) -> Optional[str]:
    """Приводит имя поля (snake_case или camelCase из JSON) к имени атрибута Record."""
    if name in JSON_KEYS:
        return name
    return ATTRIBUTE_NAMES.get(name)


def calculate_average(grades: Sequence[float]) -> float:
    """Средний балл, округленный до двух знаков. Возвращает 0.0, если оценок нет.

    Половина округляется вверх по точному двоичному значению: 99.625 -> 99.63.
    """
    if not grades:
        return 0.0
    mean = Decimal(sum(grades) / len(grades))
    return float(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_grade(grade: float) -> str:
    """85.0 -> '85', 85.5 -> '85.5'."""
    value = float(grade)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class Record:
    """Представляет студента: личные данные, форма обучения и оценки."""

    def __init__(self, last_name: str, first_name: str, middle_name: str,
                 phone: str, email: str, birth_date: str, group: str,
                 address: str, education_type: str, grades: Sequence[float],
                 record_id: Any = None):
        self._id = record_id if record_id is not None else uuid.uuid4().hex
        self.last_name = last_name
        self.first_name = first_name
        self.middle_name = middle_name
        self.phone = phone
        self.email = email
        self.birth_date = birth_date
        self.group = group
        self.address = address
        self.education_type = education_type
        self.grades = grades

    @property
    def id(self) -> Any:
        return self._id

    @property
    def grades(self) -> List[float]:
        return self._grades

    @grades.setter
    def grades(self, value: Sequence[float]):
        # Средний балл всегда пересчитывается вместе с оценками
        self._grades = list(value)
        self._average_grade = calculate_average(self._grades)

    @property
    def average_grade(self) -> float:
        return self._average_grade

    @property
    def full_name(self) -> str:
        return f"{self.last_name} {self.first_name} {self.middle_name}"

    def to_dict(self) -> Dict[str, Any]:
        """Преобразует запись в словарь с ключами в формате хранилища."""
        data = {JSON_KEYS[name]: getattr(self, name) for name in TEXT_FIELDS}
        data["id"] = self.id
        data["grades"] = [int(g) if float(g).is_integer() else g for g in self.grades]
        data["averageGrade"] = f"{self.average_grade:.2f}"
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Record":
        """Восстанавливает запись из хранилища.

        Сохраненный averageGrade игнорируется: средний балл всегда считается
        заново по оценкам. Отсутствующие address и educationType заменяются
        значениями по умолчанию.
        """
        try:
            grades = _require_grades(data)
            return cls(
                last_name=_require_text(data, "lastName"),
                first_name=_require_text(data, "firstName"),
                middle_name=_require_text(data, "middleName"),
                phone=_require_text(data, "phone"),
                email=_require_text(data, "email"),
                birth_date=_require_text(data, "birthDate"),
                group=_require_text(data, "group"),
                address=data.get("address") or "",
                education_type=data.get("educationType") or DEFAULT_EDUCATION_TYPE,
                grades=grades,
                record_id=data["id"],
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DataValidationError(f"Поврежденная запись студента {data!r}: {e}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        """Возвращает строковое представление объекта для отладки."""
        return (f"Record(id={self.id!r}, name='{self.last_name} {self.first_name}', "
                f"average={self.average_grade:.2f})")

    def __str__(self) -> str:
        """Возвращает удобное для пользователя строковое представление объекта."""
        grades_str = ", ".join(format_grade(g) for g in self.grades)
        return (f"{self.full_name:<35} | Група: {self.group:<8} | "
                f"Середній бал: {self.average_grade:<6.2f} | Оцінки: [{grades_str}]")


def _require_text(data: Mapping[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"поле '{key}' должно быть строкой, получено {value!r}")
    return value


def _require_grades(data: Mapping[str, Any]) -> List[float]:
    value = data.get("grades")
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"поле 'grades' должно быть списком, получено {value!r}")

    grades = []
    for grade in value:
        if isinstance(grade, bool) or not isinstance(grade, (int, float)):
            raise TypeError(f"оценка {grade!r} должна быть числом")
        if not 0 <= grade <= 100:
            raise ValueError(f"оценка {grade} вне диапазона 0-100")
        grades.append(float(grade))
    return grades


@dataclass
class RecordPatch:
    """Изменения для существующей записи. None означает "поле не меняется"."""
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    birth_date: Optional[str] = None
    group: Optional[str] = None
    address: Optional[str] = None
    education_type: Optional[str] = None
    grades: Optional[List[float]] = None

    def present_fields(self) -> List[str]:
        return [f.name for f in dataclass_fields(self) if getattr(self, f.name) is not None]

    def apply_to(self, record: Record) -> Record:
        """Переносит заданные поля в запись; оценки пересчитывают средний балл."""
        for name in self.present_fields():
            setattr(record, name, getattr(self, name))
        return record

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RecordPatch":
        """Создает патч из словаря с ключами в snake_case или camelCase."""
        values = {}
        for key, value in data.items():
            name = resolve_field(key)
            if name is None or name in ("id", "average_grade"):
                raise ValueError(f"Поле '{key}' нельзя изменить.")
            values[name] = value
        return cls(**values)
