# roster/validation.py
"""Модуль проверки данных формы: email, телефон, оценки и сборка записи студента."""
import re
from typing import TYPE_CHECKING, Any, Dict, List, Mapping

from .errors import (
    DuplicateEmailError,
    DuplicatePhoneError,
    GradesFailure,
    InvalidFormatError,
    InvalidGradesError,
    MissingFieldError,
)
from .models import TEXT_FIELDS, Record, RecordPatch, resolve_field

if TYPE_CHECKING:
    from .roster import Roster

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# +380XXXXXXXXX, 380XXXXXXXXX, 80XXXXXXXXX или 0XXXXXXXXX
PHONE_RE = re.compile(r"\+?3?8?0[0-9]{9}")
# Десятичная запись числа только из ASCII-цифр; Infinity дает ошибку диапазона, а не формата
GRADE_TOKEN_RE = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|Infinity)")
PHONE_NOISE_RE = re.compile(r"[\s\-()]")

GRADES_FIELD = "grades"


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.fullmatch(email))


def normalize_phone(phone: str) -> str:
    """Убирает из номера пробелы, дефисы и скобки."""
    return PHONE_NOISE_RE.sub("", phone)


def validate_phone(phone: str) -> bool:
    return bool(PHONE_RE.fullmatch(normalize_phone(phone)))


def parse_grades(grades_str: str) -> List[float]:
    """Разбирает строку оценок, разделенных пробелами.

    Каждая оценка должна быть числом от 0 до 100. Возвращает оценки в порядке ввода.
    При ошибке бросает InvalidGradesError с причиной в атрибуте failure.
    """
    tokens = grades_str.split()
    if not tokens:
        raise InvalidGradesError(GradesFailure.EMPTY)

    grades = []
    for token in tokens:
        if not GRADE_TOKEN_RE.fullmatch(token):
            raise InvalidGradesError(GradesFailure.NON_NUMERIC, token)
        grade = float(token)
        if grade < 0 or grade > 100:
            raise InvalidGradesError(GradesFailure.OUT_OF_RANGE, token)
        grades.append(grade)
    return grades


def normalize_fields(fields: Mapping[str, Any]) -> Dict[str, str]:
    """Приводит ключи формы к именам атрибутов и обрезает пробелы по краям значений."""
    normalized = {name: "" for name in TEXT_FIELDS + (GRADES_FIELD,)}
    for key, value in fields.items():
        name = resolve_field(key)
        if name in normalized:
            normalized[name] = "" if value is None else str(value).strip()
    return normalized


def validate_required(fields: Mapping[str, str]) -> None:
    missing = [name for name in TEXT_FIELDS if not fields.get(name)]
    if missing:
        raise MissingFieldError(missing)


def _check_fields(roster: "Roster", fields: Mapping[str, Any], exclude_id: Any = None) -> Dict[str, Any]:
    values = normalize_fields(fields)

    # Порядок проверок повторяет форму: сначала пустые поля, затем формат, уникальность и оценки
    validate_required(values)
    if not values[GRADES_FIELD]:
        raise InvalidGradesError(GradesFailure.EMPTY)

    if not validate_email(values["email"]):
        raise InvalidFormatError("email", "Введіть коректну електронну пошту!")
    if not validate_phone(values["phone"]):
        raise InvalidFormatError(
            "phone", "Введіть коректний номер телефону (наприклад: +380XXXXXXXXX)!")

    if not roster.is_email_unique(values["email"], exclude_id):
        raise DuplicateEmailError(values["email"])
    if not roster.is_phone_unique(values["phone"], exclude_id):
        raise DuplicatePhoneError(values["phone"])

    result: Dict[str, Any] = {name: values[name] for name in TEXT_FIELDS}
    result[GRADES_FIELD] = parse_grades(values[GRADES_FIELD])
    return result


def create_record(roster: "Roster", fields: Mapping[str, Any]) -> Record:
    """Проверяет поля формы и создает новую запись. Запись в roster не добавляется."""
    return Record(**_check_fields(roster, fields))


def build_patch(roster: "Roster", record_id: Any, fields: Mapping[str, Any]) -> RecordPatch:
    """Проверяет поля формы редактирования; уникальность проверяется без учета самой записи."""
    return RecordPatch(**_check_fields(roster, fields, exclude_id=record_id))
