# roster/errors.py
"""Модуль для определения пользовательских исключений приложения."""
from enum import Enum
from typing import Iterable, Optional


class ValidationReason(str, Enum):
    """Причина, по которой введенные данные не прошли проверку."""
    MISSING_FIELD = "missing_field"
    INVALID_FORMAT = "invalid_format"
    DUPLICATE_EMAIL = "duplicate_email"
    DUPLICATE_PHONE = "duplicate_phone"
    INVALID_GRADES = "invalid_grades"


class GradesFailure(str, Enum):
    """Конкретная причина ошибки в строке оценок."""
    EMPTY = "empty"
    NON_NUMERIC = "non_numeric"
    OUT_OF_RANGE = "out_of_range"


class RosterAppError(Exception):
    """Базовый класс для всех исключений в этом приложении."""
    pass


class DataValidationError(RosterAppError):
    """Исключение, связанное с некорректными данными (в форме или хранилище)."""
    reason: Optional[ValidationReason] = None


class MissingFieldError(DataValidationError):
    """Одно или несколько обязательных полей не заполнены."""
    reason = ValidationReason.MISSING_FIELD

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__("Будь ласка, заповніть всі поля!")


class InvalidFormatError(DataValidationError):
    """Email или телефон не соответствуют ожидаемому формату."""
    reason = ValidationReason.INVALID_FORMAT

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class DuplicateEmailError(DataValidationError):
    """Студент с таким email уже есть в списке."""
    reason = ValidationReason.DUPLICATE_EMAIL

    def __init__(self, email: str):
        self.email = email
        super().__init__("Студент з такою електронною поштою вже існує!")


class DuplicatePhoneError(DataValidationError):
    """Студент с таким номером телефона уже есть в списке."""
    reason = ValidationReason.DUPLICATE_PHONE

    def __init__(self, phone: str):
        self.phone = phone
        super().__init__("Студент з таким номером телефону вже існує!")


class InvalidGradesError(DataValidationError):
    """Строка оценок пустая, содержит не числа или числа вне диапазона 0-100."""
    reason = ValidationReason.INVALID_GRADES

    MESSAGES = {
        GradesFailure.EMPTY: "Введіть оцінки",
        GradesFailure.NON_NUMERIC: "Оцінки повинні бути числами",
        GradesFailure.OUT_OF_RANGE: "Оцінки повинні бути від 0 до 100",
    }

    def __init__(self, failure: GradesFailure, token: Optional[str] = None):
        self.failure = failure
        self.token = token
        super().__init__(self.MESSAGES[failure])


class FileProcessingError(RosterAppError):
    """Исключение, связанное с ошибками файловых операций (экспорт отчета)."""
    pass


class StorageError(RosterAppError):
    """Хранилище недоступно или содержит поврежденные данные."""
    pass
