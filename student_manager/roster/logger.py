# roster/logger.py
"""Настройка логирования.

В логах не должно оставаться персональных данных студентов, поэтому
email-адреса в сообщениях маскируются фильтром.
"""
import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

EMAIL_IN_TEXT_RE = re.compile(r"([^\s@'\"(]+)@([^\s@'\")]+)")


def mask_email(email: str) -> str:
    """Маскирует email для логов.

    >>> mask_email("ivan@example.com")
    'i***@example.com'
    >>> mask_email("invalid")
    '***'
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.split("@", 1)
    masked_local = local[0] + "***" if local else "***"
    return f"{masked_local}@{domain}"


class EmailMaskingFilter(logging.Filter):
    """Заменяет email-адреса в тексте сообщения на замаскированные."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = EMAIL_IN_TEXT_RE.sub(lambda m: mask_email(m.group(0)), message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logger(name: str = "roster", level: Union[int, str] = logging.INFO,
                 log_file: Optional[str] = None) -> logging.Logger:
    """Настраивает логгер приложения: консоль и, при необходимости, файл с ротацией."""
    logger = logging.getLogger(name)

    # Повторный вызов не должен дублировать обработчики
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    masking = EmailMaskingFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(masking)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(masking)
        logger.addHandler(file_handler)

    return logger
