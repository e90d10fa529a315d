"""Business logic services package with public service helpers."""

from .countries_service import CountriesService
from .persons_service import PersonsService

__all__ = [
    "CountriesService",
    "PersonsService",
]
