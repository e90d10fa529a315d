"""
SQLAlchemy models for the contact catalog.

Exposes `Base`, `now_utc`, and the ORM classes.
"""

from .base import Base, now_utc  # re-export

from .countries import Country, country_name_key
from .persons import Person, DEFAULT_TIN

__all__ = [
    "Base",
    "now_utc",
    "Country",
    "country_name_key",
    "Person",
    "DEFAULT_TIN",
]
