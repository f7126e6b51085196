# tests/test_processing.py
import pytest
from roster.processing import SortDirection, resolve_sort_fields, search_records, sort_records
from conftest import make_record


def names(records):
    return [f"{r.last_name}/{r.first_name}" for r in records]


def test_sort_by_last_and_first_name(sample_records):
    result = sort_records(sample_records, ["lastName", "firstName"], "ascending")
    assert names(result) == ["Adams/Zoe", "Smith/Ann", "Smith/Bob"]


def test_sort_by_name_pair_descending(sample_records):
    result = sort_records(sample_records, ["last_name", "first_name"], SortDirection.DESC)
    assert names(result) == ["Smith/Bob", "Smith/Ann", "Adams/Zoe"]


def test_sort_does_not_touch_input(sample_records):
    before = list(sample_records)
    sort_records(sample_records, "last_name")
    assert sample_records == before


def test_sort_by_average_is_numeric(sample_records):
    # 75.0, 9.5, 80.0 -> строкой "9.5" оказалась бы больше "80.0"
    result = sort_records(sample_records, "averageGrade", "descending")
    assert [r.average_grade for r in result] == [80.0, 75.0, 9.5]


def test_sort_by_birth_date_is_chronological(sample_records):
    result = sort_records(sample_records, "birth_date", "asc")
    assert [r.birth_date for r in result] == ["2001-12-01", "2002-07-15", "2003-05-20"]


def test_invalid_birth_dates_go_first():
    records = [make_record(birth_date="2001-01-01"), make_record(birth_date="невідомо")]
    result = sort_records(records, "birth_date")
    assert [r.birth_date for r in result] == ["невідомо", "2001-01-01"]


def test_text_sort_is_case_insensitive():
    records = [make_record(group="b"), make_record(group="A"), make_record(group="a2")]
    result = sort_records(records, "group")
    assert [r.group for r in result] == ["A", "a2", "b"]


def test_sort_is_stable_in_both_directions():
    records = [make_record(group="X", first_name=str(i)) for i in range(5)]
    for direction in ("asc", "desc"):
        result = sort_records(records, "group", direction)
        assert [r.first_name for r in result] == ["0", "1", "2", "3", "4"]


def test_other_field_lists_sort_by_first_field_only(sample_records):
    assert resolve_sort_fields(["group", "last_name"]) == ["group"]
    assert resolve_sort_fields(["last_name", "first_name", "group"]) == ["last_name"]
    assert resolve_sort_fields(["firstName", "lastName"]) == ["last_name", "first_name"]

    result = sort_records(sample_records, ["group", "last_name"])
    # внутри группы KN-21 сохраняется исходный порядок: Smith/Bob раньше Adams/Zoe
    assert names(result) == ["Smith/Bob", "Adams/Zoe", "Smith/Ann"]


def test_empty_field_list_keeps_order(sample_records):
    assert sort_records(sample_records, []) == sample_records


def test_unknown_sort_field_or_direction():
    with pytest.raises(ValueError):
        sort_records([], "grades")
    with pytest.raises(ValueError):
        sort_records([], "group", "sideways")


def test_search_is_case_insensitive_substring(sample_records):
    assert names(search_records(sample_records, "SMI")) == ["Smith/Bob", "Smith/Ann"]
    assert names(search_records(sample_records, "zoe@")) == ["Adams/Zoe"]
    assert names(search_records(sample_records, "kn-22")) == ["Smith/Ann"]


def test_search_matches_education_type():
    records = [make_record(education_type="Budget"), make_record(education_type="Contract")]
    assert search_records(records, "budget") == [records[0]]


def test_search_ignores_grades_and_average():
    record = make_record(grades=[77], phone="+380501234560", birth_date="2000-01-01")
    assert search_records([record], "77") == []


@pytest.mark.parametrize("term", ["", None])
def test_empty_search_returns_everything(sample_records, term):
    assert search_records(sample_records, term) == sample_records
