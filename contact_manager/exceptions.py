"""
Domain errors raised by the contact services.

The web layer maps each subclass to a status code (JSON routes) or renders
the message back into the page (HTML routes).
"""
from __future__ import annotations

from typing import Iterable, List


class ContactManagerError(Exception):
    """Base class for rejected contact operations."""


class ValidationError(ContactManagerError):
    """Required-field or format violation on create/update."""

    def __init__(self, errors: Iterable[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__("\n".join(self.errors))


class DuplicateError(ContactManagerError):
    """Uniqueness violation (country names)."""


class NotFoundError(ContactManagerError):
    """Update target does not exist."""


class FormatError(ContactManagerError):
    """Uploaded file could not be read as a workbook."""
