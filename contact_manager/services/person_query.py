"""
Person query pipeline: projection, filtering and sorting.

All functions are pure over their inputs. Filter and sort fields are closed
enumerations; a name outside the enumeration parses to ``NONE``, which leaves
the input untouched.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
import uuid

from contact_manager.db.schemas import PersonResponse, SortOrderOptions
from contact_manager.utils.dates import compute_age, format_day_month_year

CountryResolver = Callable[[uuid.UUID], Optional[str]]


class PersonFilterField(str, Enum):
    NONE = ""
    PERSON_NAME = "person_name"
    EMAIL = "email"
    DATE_OF_BIRTH = "date_of_birth"
    GENDER = "gender"
    # Matches against the resolved country name, not the id.
    COUNTRY_ID = "country_id"
    ADDRESS = "address"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PersonFilterField":
        try:
            return cls(value or "")
        except ValueError:
            return cls.NONE


class PersonSortField(str, Enum):
    NONE = ""
    PERSON_NAME = "person_name"
    EMAIL = "email"
    DATE_OF_BIRTH = "date_of_birth"
    AGE = "age"
    GENDER = "gender"
    COUNTRY_NAME = "country_name"
    ADDRESS = "address"
    RECEIVE_NEWS_LETTERS = "receive_news_letters"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PersonSortField":
        try:
            return cls(value or "")
        except ValueError:
            return cls.NONE


# Labels shown in the search dropdown, in display order
FILTER_FIELD_LABELS: Dict[PersonFilterField, str] = {
    PersonFilterField.PERSON_NAME: "Person Name",
    PersonFilterField.EMAIL: "Email",
    PersonFilterField.DATE_OF_BIRTH: "Date of Birth",
    PersonFilterField.GENDER: "Gender",
    PersonFilterField.COUNTRY_ID: "Country",
    PersonFilterField.ADDRESS: "Address",
}


def to_person_response(
    person: Any,
    *,
    now: Optional[datetime] = None,
    country_resolver: Optional[CountryResolver] = None,
) -> PersonResponse:
    """Project an ORM person row into a PersonResponse.

    The country name comes from ``country_resolver`` when given, otherwise
    from the row's loaded ``country`` relationship. An unknown country id
    yields ``country_name=None``.
    """
    country_name = None
    if person.country_id is not None:
        if country_resolver is not None:
            country_name = country_resolver(person.country_id)
        else:
            country = getattr(person, "country", None)
            country_name = country.country_name if country is not None else None
    return PersonResponse(
        person_id=person.person_id,
        person_name=person.person_name,
        email=person.email,
        date_of_birth=person.date_of_birth,
        gender=person.gender,
        country_id=person.country_id,
        country_name=country_name,
        address=person.address,
        receive_news_letters=bool(person.receive_news_letters),
        tin=getattr(person, "tin", None),
        age=compute_age(person.date_of_birth, now),
    )


def _contains(value: str, text: str) -> bool:
    return text.casefold() in value.casefold()


def _starts_with(value: str, text: str) -> bool:
    return value.casefold().startswith(text.casefold())


_FILTERS: Dict[PersonFilterField, Tuple[Callable[[PersonResponse], Optional[str]], Callable[[str, str], bool]]] = {
    PersonFilterField.PERSON_NAME: (lambda p: p.person_name, _contains),
    PersonFilterField.EMAIL: (lambda p: p.email, _contains),
    PersonFilterField.DATE_OF_BIRTH: (lambda p: format_day_month_year(p.date_of_birth), _contains),
    PersonFilterField.GENDER: (lambda p: p.gender, _starts_with),
    PersonFilterField.COUNTRY_ID: (lambda p: p.country_name, _contains),
    PersonFilterField.ADDRESS: (lambda p: p.address, _contains),
}


def filter_persons(
    persons: Iterable[PersonResponse],
    search_by: Optional[str],
    search_string: Optional[str],
) -> List[PersonResponse]:
    """Keep persons whose ``search_by`` field matches ``search_string``.

    Records with an empty value for the field are kept. Relative order is
    preserved.
    """
    persons = list(persons)
    if not search_by or not search_string:
        return persons
    field = PersonFilterField.parse(search_by)
    if field is PersonFilterField.NONE:
        return persons
    accessor, matches = _FILTERS[field]
    kept = []
    for person in persons:
        value = accessor(person)
        if not value or matches(value, search_string):
            kept.append(person)
    return kept


def _ignore_case(value: Optional[str]) -> Optional[str]:
    # Ordinal ignore-case: compare upper-cased code points
    return value.upper() if value is not None else None


_SORT_KEYS: Dict[PersonSortField, Callable[[PersonResponse], Any]] = {
    PersonSortField.PERSON_NAME: lambda p: _ignore_case(p.person_name),
    PersonSortField.EMAIL: lambda p: _ignore_case(p.email),
    PersonSortField.DATE_OF_BIRTH: lambda p: p.date_of_birth,
    PersonSortField.AGE: lambda p: p.age,
    PersonSortField.GENDER: lambda p: _ignore_case(p.gender),
    PersonSortField.COUNTRY_NAME: lambda p: _ignore_case(p.country_name),
    PersonSortField.ADDRESS: lambda p: _ignore_case(p.address),
    PersonSortField.RECEIVE_NEWS_LETTERS: lambda p: p.receive_news_letters,
}


def parse_sort_order(sort_order) -> SortOrderOptions:
    """Read ``DESC`` in any letter case as descending; anything else is ascending."""
    if isinstance(sort_order, SortOrderOptions):
        return sort_order
    if sort_order and str(sort_order).strip().upper() == SortOrderOptions.DESC.value:
        return SortOrderOptions.DESC
    return SortOrderOptions.ASC


def sort_persons(
    persons: Iterable[PersonResponse],
    sort_by: Optional[str],
    sort_order: SortOrderOptions | str | None = SortOrderOptions.ASC,
) -> List[PersonResponse]:
    """Stable sort on ``sort_by``; missing values sort first ascending, last descending."""
    persons = list(persons)
    field = PersonSortField.parse(sort_by)
    if field is PersonSortField.NONE:
        return persons
    accessor = _SORT_KEYS[field]

    def key(person: PersonResponse):
        value = accessor(person)
        if value is None:
            return (0,)
        return (1, value)

    descending = parse_sort_order(sort_order) is SortOrderOptions.DESC
    return sorted(persons, key=key, reverse=descending)
