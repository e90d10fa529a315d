import uuid
from datetime import date
from enum import Enum
from pydantic import BaseModel, ConfigDict


class GenderOptions(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str | None) -> "GenderOptions | None":
        """Case-insensitive lookup; unknown or empty values yield None."""
        if not value:
            return None
        for option in cls:
            if option.value.lower() == value.strip().lower():
                return option
        return None


class SortOrderOptions(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class PersonAddRequest(BaseModel):
    # Required fields are validated by the service so that callers get the
    # full list of messages instead of a parse failure.
    person_name: str | None = None
    email: str | None = None
    date_of_birth: date | None = None
    gender: GenderOptions | None = None
    country_id: uuid.UUID | None = None
    address: str | None = None
    receive_news_letters: bool = False
    tin: str | None = None


class PersonUpdateRequest(PersonAddRequest):
    person_id: uuid.UUID


# Derived fields that do not take part in identity
_EQUALITY_EXCLUDED_FIELDS = {"age", "country_name"}


class PersonResponse(BaseModel):
    person_id: uuid.UUID
    person_name: str | None = None
    email: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    country_id: uuid.UUID | None = None
    country_name: str | None = None
    address: str | None = None
    receive_news_letters: bool = False
    tin: str | None = None
    age: float | None = None
    model_config = ConfigDict(from_attributes=True)

    def __eq__(self, other):
        if not isinstance(other, PersonResponse):
            return NotImplemented
        return (
            self.model_dump(exclude=_EQUALITY_EXCLUDED_FIELDS)
            == other.model_dump(exclude=_EQUALITY_EXCLUDED_FIELDS)
        )

    def to_person_update_request(self) -> PersonUpdateRequest:
        return PersonUpdateRequest(
            person_id=self.person_id,
            person_name=self.person_name,
            email=self.email,
            date_of_birth=self.date_of_birth,
            gender=GenderOptions.parse(self.gender),
            country_id=self.country_id,
            address=self.address,
            receive_news_letters=self.receive_news_letters,
            tin=self.tin,
        )
