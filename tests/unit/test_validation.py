import pytest

from contact_manager.db.schemas import CountryAddRequest, PersonAddRequest
from contact_manager.exceptions import ValidationError
from contact_manager.utils.validation import (
    is_valid_email,
    person_request_errors,
    validate_country_request,
    validate_person_request,
)


@pytest.mark.parametrize("value,expected", [
    ("person@example.com", True),
    ("first.last@sub.domain.org", True),
    ("no-at-sign.com", False),
    ("two@@example.com", False),
    ("spaces in@example.com", False),
    ("", False),
    (None, False),
])
def test_is_valid_email(value, expected):
    assert is_valid_email(value) is expected


def test_person_request_errors_lists_every_violation():
    errors = person_request_errors(PersonAddRequest(person_name="  ", email=None, tin="SHORT"))
    assert errors == [
        "Person Name can't be blank.",
        "Email can't be blank.",
        "TIN should be exactly 8 characters.",
    ]


def test_person_request_rejects_malformed_email():
    errors = person_request_errors(PersonAddRequest(person_name="Ann", email="ann.example.com"))
    assert errors == ["Email should be valid."]


def test_person_request_length_limits():
    errors = person_request_errors(PersonAddRequest(
        person_name="x" * 41,
        email="a@b.co",
        address="y" * 201,
    ))
    assert "Person Name can't exceed 40 characters." in errors
    assert "Address can't exceed 200 characters." in errors


def test_validate_person_request_none():
    with pytest.raises(ValidationError) as excinfo:
        validate_person_request(None)
    assert excinfo.value.errors == ["Person request can't be empty."]


def test_validate_person_request_valid_passes():
    validate_person_request(PersonAddRequest(person_name="Ann", email="ann@example.com"))


def test_validation_error_message_joins_errors():
    error = ValidationError(["one", "two"])
    assert error.errors == ["one", "two"]
    assert str(error) == "one\ntwo"


@pytest.mark.parametrize("request_obj,message", [
    (None, "Country request can't be empty."),
    (CountryAddRequest(country_name=None), "Country Name can't be blank."),
    (CountryAddRequest(country_name="   "), "Country Name can't be blank."),
    (CountryAddRequest(country_name="z" * 101), "Country Name can't exceed 100 characters."),
])
def test_validate_country_request_rejects(request_obj, message):
    with pytest.raises(ValidationError) as excinfo:
        validate_country_request(request_obj)
    assert excinfo.value.errors == [message]
