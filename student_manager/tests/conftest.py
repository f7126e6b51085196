# tests/conftest.py
import pytest
from typing import List
from roster.io_utils import MemoryStorage
from roster.models import Record
from roster.roster import Roster


def make_record(last_name="Шевченко", first_name="Тарас", middle_name="Григорович",
                phone="+380501234567", email="taras@example.com", birth_date="2004-03-09",
                group="КН-21", address="Київ", education_type="Бюджет",
                grades=(80, 90, 100), record_id=None) -> Record:
    return Record(last_name, first_name, middle_name, phone, email, birth_date,
                  group, address, education_type, list(grades), record_id=record_id)


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def roster(memory_storage) -> Roster:
    return Roster(memory_storage)


@pytest.fixture
def sample_records() -> List[Record]:
    """Фикстура, предоставляющая тестовый набор студентов."""
    return [
        make_record("Smith", "Bob", phone="+380501111111", email="bob@example.com",
                    birth_date="2003-05-20", group="KN-21", grades=[70, 80]),
        make_record("Smith", "Ann", phone="+380502222222", email="ann@example.com",
                    birth_date="2001-12-01", group="KN-22", education_type="Контракт",
                    grades=[9.5]),
        make_record("Adams", "Zoe", phone="+380503333333", email="zoe@example.com",
                    birth_date="2002-07-15", group="KN-21", grades=[80]),
    ]


@pytest.fixture
def filled_roster(roster, sample_records) -> Roster:
    for record in sample_records:
        roster.add(record)
    return roster


@pytest.fixture
def valid_fields() -> dict:
    """Поля формы добавления в том виде, в котором их вводит пользователь."""
    return {
        "last_name": " Коваленко ",
        "first_name": "Олена",
        "middle_name": "Петрівна",
        "phone": "+380 (67) 123-45-67",
        "email": "olena@example.com",
        "birth_date": "2005-01-31",
        "group": "ІПЗ-11",
        "address": "Львів",
        "education_type": "Контракт",
        "grades": "85 90.5 100",
    }
