import pytest
from sqlalchemy.exc import IntegrityError

from person_api.persons.models import PersonPayload
from person_api.persons.repositories import _contains_pattern, _is_email_violation
from person_api.persons.utils import as_int, as_text, is_valid_date, is_valid_email, validate_person_payload
from tests.conftest import person_data


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-15", True),
        ("2024-02-29", True),
        ("2023-02-29", False),
        ("2024-02-30", False),
        ("2024-13-01", False),
        ("2024-1-5", False),
        ("15/01/2024", False),
        ("2024-01-15T00:00", False),
        ("2024-01-15\n", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_date(value, expected):
    assert is_valid_date(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("john.doe@example.com", True),
        ("John+Tag_1@Mail.Example.ORG", True),
        ("john@example", False),
        ("john@example.c", False),
        ("john doe@example.com", False),
        ("john@example.com\n", False),
        ("@example.com", False),
        ("   ", False),
        (None, False),
    ],
)
def test_is_valid_email(value, expected):
    assert is_valid_email(value) is expected


def test_validate_person_payload_accepts_valid_data():
    assert validate_person_payload(PersonPayload(**person_data())) is None


def test_validate_person_payload_first_failure_wins():
    payload = PersonPayload(**person_data(name="", age=-1, email="bad"))
    assert validate_person_payload(payload) == "Name is required"


def test_validate_person_payload_missing_body():
    assert validate_person_payload(None) == "Person data is required"


def test_validate_person_payload_optional_fields():
    payload = PersonPayload(name="A", age=1, nom="B", prenom="C", email="a@b.io")
    assert validate_person_payload(payload) is None


def test_contains_pattern_escapes_wildcards():
    assert _contains_pattern("a_b%c") == "%a\\_b\\%c%"


@pytest.mark.parametrize(
    "driver_message, expected",
    [
        ("UNIQUE constraint failed: persons.email", True),
        ("UNIQUE constraint failed: index 'uq_persons_email_lower'", True),
        ('duplicate key value violates unique constraint "persons_email_key"', True),
        ('duplicate key value violates unique constraint "uq_persons_email_lower"', True),
        ("NOT NULL constraint failed: persons.email", False),
        ("NOT NULL constraint failed: persons.nom", False),
    ],
)
def test_is_email_violation(driver_message, expected):
    error = IntegrityError("INSERT INTO persons", {}, Exception(driver_message))
    assert _is_email_violation(error) is expected


@pytest.mark.parametrize(
    "value, expected",
    [(41, 41), ("41", 41), (41.9, 41), (None, None), (-3, -3)],
)
def test_as_int(value, expected):
    assert as_int(value) == expected


@pytest.mark.parametrize("value", ["abc", "", True, [1], {"n": 1}])
def test_as_int_rejects(value):
    with pytest.raises(ValueError):
        as_int(value)


@pytest.mark.parametrize(
    "value, expected",
    [(" Paul ", "Paul"), (601020304, "601020304"), (False, "false"), (None, None)],
)
def test_as_text(value, expected):
    assert as_text(value) == expected
