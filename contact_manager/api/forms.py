"""
HTML form binding for the person create/edit screens.

Browsers post every field as a string; this module turns the raw values
into add/update requests and reports unparseable input as validation
messages alongside the service's own checks.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from fastapi import Form

from contact_manager.db import schemas
from contact_manager.exceptions import ValidationError
from contact_manager.utils.validation import person_request_errors


@dataclass
class PersonForm:
    person_name: str = ""
    email: str = ""
    date_of_birth: str = ""
    gender: str = ""
    country_id: str = ""
    address: str = ""
    receive_news_letters: bool = False

    def _parse(self) -> Tuple[dict, List[str]]:
        errors: List[str] = []
        dob: Optional[date] = None
        if self.date_of_birth.strip():
            try:
                dob = date.fromisoformat(self.date_of_birth.strip())
            except ValueError:
                errors.append("Date of Birth should be a valid date.")
        gender = None
        if self.gender.strip():
            gender = schemas.GenderOptions.parse(self.gender)
            if gender is None:
                errors.append("Please select a valid gender.")
        country_id: Optional[uuid.UUID] = None
        if self.country_id.strip():
            try:
                country_id = uuid.UUID(self.country_id.strip())
            except ValueError:
                errors.append("Please select a valid country.")
        values = {
            "person_name": self.person_name.strip() or None,
            "email": self.email.strip() or None,
            "date_of_birth": dob,
            "gender": gender,
            "country_id": country_id,
            "address": self.address.strip() or None,
            "receive_news_letters": self.receive_news_letters,
        }
        return values, errors

    def to_add_request(self) -> schemas.PersonAddRequest:
        values, errors = self._parse()
        request = schemas.PersonAddRequest(**values)
        errors.extend(person_request_errors(request))
        if errors:
            raise ValidationError(errors)
        return request

    def to_update_request(self, person_id: uuid.UUID) -> schemas.PersonUpdateRequest:
        values, errors = self._parse()
        request = schemas.PersonUpdateRequest(person_id=person_id, **values)
        errors.extend(person_request_errors(request))
        if errors:
            raise ValidationError(errors)
        return request


def person_form(
    person_name: str = Form(default=""),
    email: str = Form(default=""),
    date_of_birth: str = Form(default=""),
    gender: str = Form(default=""),
    country_id: str = Form(default=""),
    address: str = Form(default=""),
    receive_news_letters: bool = Form(default=False),
) -> PersonForm:
    return PersonForm(
        person_name=person_name,
        email=email,
        date_of_birth=date_of_birth,
        gender=gender,
        country_id=country_id,
        address=address,
        receive_news_letters=receive_news_letters,
    )


def person_form_from_response(person: schemas.PersonResponse) -> PersonForm:
    """Pre-fill the edit form from a stored person."""
    return PersonForm(
        person_name=person.person_name or "",
        email=person.email or "",
        date_of_birth=person.date_of_birth.isoformat() if person.date_of_birth else "",
        gender=person.gender or "",
        country_id=str(person.country_id) if person.country_id else "",
        address=person.address or "",
        receive_news_letters=person.receive_news_letters,
    )
