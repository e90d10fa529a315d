"""
Pydantic request/response schemas for countries and persons.
"""

from .countries import CountryAddRequest, CountryResponse
from .persons import (
    GenderOptions,
    SortOrderOptions,
    PersonAddRequest,
    PersonUpdateRequest,
    PersonResponse,
)

__all__ = [
    # Countries
    "CountryAddRequest",
    "CountryResponse",
    # Persons
    "GenderOptions",
    "SortOrderOptions",
    "PersonAddRequest",
    "PersonUpdateRequest",
    "PersonResponse",
]
