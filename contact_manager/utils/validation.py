"""
Request validation for person and country writes.

Collects every violation before raising so forms can show the full list.
"""

from __future__ import annotations

import re
from typing import List

from contact_manager.exceptions import ValidationError

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PERSON_NAME_MAX_LENGTH = 40
EMAIL_MAX_LENGTH = 40
ADDRESS_MAX_LENGTH = 200
COUNTRY_NAME_MAX_LENGTH = 100
TIN_LENGTH = 8


def is_valid_email(value: str | None) -> bool:
    return bool(value) and _EMAIL_PATTERN.match(value) is not None


def person_request_errors(request) -> List[str]:
    """Return the validation messages for a person add/update request."""
    errors: List[str] = []

    person_name = (request.person_name or "").strip()
    if not person_name:
        errors.append("Person Name can't be blank.")
    elif len(person_name) > PERSON_NAME_MAX_LENGTH:
        errors.append(f"Person Name can't exceed {PERSON_NAME_MAX_LENGTH} characters.")

    email = (request.email or "").strip()
    if not email:
        errors.append("Email can't be blank.")
    elif not is_valid_email(email):
        errors.append("Email should be valid.")
    elif len(email) > EMAIL_MAX_LENGTH:
        errors.append(f"Email can't exceed {EMAIL_MAX_LENGTH} characters.")

    if request.address and len(request.address) > ADDRESS_MAX_LENGTH:
        errors.append(f"Address can't exceed {ADDRESS_MAX_LENGTH} characters.")

    if request.tin is not None and len(request.tin) != TIN_LENGTH:
        errors.append(f"TIN should be exactly {TIN_LENGTH} characters.")

    return errors


def validate_person_request(request) -> None:
    if request is None:
        raise ValidationError("Person request can't be empty.")
    errors = person_request_errors(request)
    if errors:
        raise ValidationError(errors)


def validate_country_request(request) -> None:
    if request is None:
        raise ValidationError("Country request can't be empty.")
    country_name = (request.country_name or "").strip()
    if not country_name:
        raise ValidationError("Country Name can't be blank.")
    if len(country_name) > COUNTRY_NAME_MAX_LENGTH:
        raise ValidationError(f"Country Name can't exceed {COUNTRY_NAME_MAX_LENGTH} characters.")
