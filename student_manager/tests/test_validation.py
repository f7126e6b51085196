# tests/test_validation.py
import pytest
from roster.errors import (
    DataValidationError,
    DuplicateEmailError,
    DuplicatePhoneError,
    GradesFailure,
    InvalidFormatError,
    InvalidGradesError,
    MissingFieldError,
    ValidationReason,
)
from roster.validation import (
    build_patch,
    create_record,
    normalize_phone,
    parse_grades,
    validate_email,
    validate_phone,
)


@pytest.mark.parametrize("email", ["a@b.com", "ivan.petrenko@ukr.net", "x@mail.co.uk"])
def test_valid_emails(email):
    assert validate_email(email)


@pytest.mark.parametrize("email", ["", "ab.com", "a@b", "a b@c.com", "a@@b.com", "a@b .com",
                                   "a@b.com\n", "\na@b.com"])
def test_invalid_emails(email):
    assert not validate_email(email)


@pytest.mark.parametrize("phone", [
    "+380501234567",
    "380501234567",
    "0501234567",
    "+380 (50) 123-4567",
    "050 123 45 67",
])
def test_valid_phones(phone):
    assert validate_phone(phone)


@pytest.mark.parametrize("phone", ["", "12345", "+381501234567", "+3805012345678", "+38050123456a",
                                   "+38050123456٧"])
def test_invalid_phones(phone):
    assert not validate_phone(phone)


def test_normalize_phone():
    assert normalize_phone("+380 (50) 123-4567") == "+380501234567"


def test_parse_grades_keeps_input_order():
    assert parse_grades("  90 85.5   100 0 ") == [90.0, 85.5, 100.0, 0.0]


@pytest.mark.parametrize("text, failure", [
    ("", GradesFailure.EMPTY),
    ("   ", GradesFailure.EMPTY),
    ("85 abc 90", GradesFailure.NON_NUMERIC),
    ("85 nan", GradesFailure.NON_NUMERIC),
    ("85 150", GradesFailure.OUT_OF_RANGE),
    ("-1", GradesFailure.OUT_OF_RANGE),
    ("inf", GradesFailure.NON_NUMERIC),
    ("85 1_0", GradesFailure.NON_NUMERIC),
    ("85 ８５", GradesFailure.NON_NUMERIC),
    ("85 0x10", GradesFailure.NON_NUMERIC),
    ("Infinity", GradesFailure.OUT_OF_RANGE),
    ("1e3", GradesFailure.OUT_OF_RANGE),
])
def test_parse_grades_failures(text, failure):
    with pytest.raises(InvalidGradesError) as exc_info:
        parse_grades(text)
    assert exc_info.value.failure == failure
    assert exc_info.value.reason == ValidationReason.INVALID_GRADES


def test_grade_failures_have_distinct_messages():
    messages = set()
    for text in ("", "abc", "101"):
        with pytest.raises(InvalidGradesError) as exc_info:
            parse_grades(text)
        messages.add(str(exc_info.value))
    assert len(messages) == 3


def test_create_record_trims_and_parses(roster, valid_fields):
    record = create_record(roster, valid_fields)
    assert record.last_name == "Коваленко"
    assert record.grades == [85.0, 90.5, 100.0]
    assert record.average_grade == 91.83
    # create_record только строит запись, в список она не попадает
    assert len(roster) == 0


def test_create_record_accepts_camel_case_keys(roster, valid_fields):
    fields = dict(valid_fields)
    fields["lastName"] = fields.pop("last_name")
    fields["educationType"] = fields.pop("education_type")
    record = create_record(roster, fields)
    assert record.last_name == "Коваленко"
    assert record.education_type == "Контракт"


def test_missing_fields_are_listed(roster, valid_fields):
    valid_fields["middle_name"] = "  "
    del valid_fields["address"]
    with pytest.raises(MissingFieldError) as exc_info:
        create_record(roster, valid_fields)
    assert exc_info.value.fields == ["middle_name", "address"]
    assert exc_info.value.reason == ValidationReason.MISSING_FIELD


def test_empty_grades_string(roster, valid_fields):
    valid_fields["grades"] = ""
    with pytest.raises(InvalidGradesError) as exc_info:
        create_record(roster, valid_fields)
    assert exc_info.value.failure == GradesFailure.EMPTY


@pytest.mark.parametrize("field, value", [("email", "not-an-email"), ("phone", "12345")])
def test_invalid_format(roster, valid_fields, field, value):
    valid_fields[field] = value
    with pytest.raises(InvalidFormatError) as exc_info:
        create_record(roster, valid_fields)
    assert exc_info.value.field == field


def test_duplicates_are_rejected(roster, valid_fields):
    roster.add(create_record(roster, valid_fields))

    other = dict(valid_fields, phone="+380991112233", email="OLENA@example.com")
    with pytest.raises(DuplicateEmailError):
        create_record(roster, other)

    other = dict(valid_fields, phone="+380671234567", email="another@example.com")
    with pytest.raises(DuplicatePhoneError):
        create_record(roster, other)


def test_all_failures_share_a_base_class(roster, valid_fields):
    valid_fields["grades"] = "85 abc"
    with pytest.raises(DataValidationError):
        create_record(roster, valid_fields)


def test_build_patch_ignores_the_edited_record(roster, valid_fields):
    record = create_record(roster, valid_fields)
    roster.add(record)

    patch = build_patch(roster, record.id, dict(valid_fields, group="ІПЗ-21", grades="60"))
    assert patch.group == "ІПЗ-21"
    assert patch.grades == [60.0]
    assert patch.email == "olena@example.com"


def test_build_patch_checks_uniqueness_against_others(roster, valid_fields):
    first = create_record(roster, valid_fields)
    roster.add(first)
    second = create_record(roster, dict(valid_fields, phone="+380931234567", email="b@example.com"))
    roster.add(second)

    with pytest.raises(DuplicateEmailError):
        build_patch(roster, second.id, dict(valid_fields, phone="+380931234567"))
