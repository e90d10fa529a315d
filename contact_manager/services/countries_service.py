"""
Country catalog service: add, lookup, listing and Excel import.
"""

import io
import logging
import uuid
from typing import List, Optional
from openpyxl import load_workbook
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contact_manager.db import schemas
from contact_manager.db.repositories import countries as countries_repo
from contact_manager.exceptions import DuplicateError, FormatError
from contact_manager.utils.validation import validate_country_request

logger = logging.getLogger(__name__)

IMPORT_SHEET_NAME = "Countries"
DUPLICATE_COUNTRY_MESSAGE = "Country with the same name already exists."


class CountriesService:
    """Service class for country catalog operations."""

    def __init__(self, db: Session):
        self.db = db

    def add_country(self, request: Optional[schemas.CountryAddRequest]) -> schemas.CountryResponse:
        validate_country_request(request)
        country_name = request.country_name.strip()
        if countries_repo.get_country_by_name(self.db, country_name) is not None:
            raise DuplicateError(DUPLICATE_COUNTRY_MESSAGE)
        try:
            country = countries_repo.create_country(self.db, country_name)
        except IntegrityError as error:
            raise DuplicateError(DUPLICATE_COUNTRY_MESSAGE) from error
        logger.info("country_added: id=%s name=%s", country.country_id, country.country_name)
        return schemas.CountryResponse.model_validate(country)

    def get_all_countries(self) -> List[schemas.CountryResponse]:
        return [schemas.CountryResponse.model_validate(c) for c in countries_repo.get_countries(self.db)]

    def get_country_by_country_id(self, country_id: Optional[uuid.UUID]) -> Optional[schemas.CountryResponse]:
        if country_id is None:
            return None
        country = countries_repo.get_country(self.db, country_id)
        if country is None:
            return None
        return schemas.CountryResponse.model_validate(country)

    def upload_countries_from_excel_file(self, data: bytes) -> int:
        """Import country names from column A (row 2 onward); return how many were new.

        Reads the ``Countries`` sheet, or the active sheet when the workbook
        has no sheet by that name.
        """
        try:
            workbook = load_workbook(filename=io.BytesIO(data), read_only=True, data_only=True)
        except Exception as error:
            raise FormatError(f"Unsupported or corrupted Excel file: {error}") from error

        try:
            if IMPORT_SHEET_NAME in workbook.sheetnames:
                worksheet = workbook[IMPORT_SHEET_NAME]
            else:
                worksheet = workbook.active
            if worksheet is None:
                raise FormatError("Workbook contains no worksheet.")
            names = [
                str(row[0]).strip()
                for row in worksheet.iter_rows(min_row=2, max_col=1, values_only=True)
                if row and row[0] is not None and str(row[0]).strip()
            ]
        finally:
            workbook.close()

        inserted = 0
        for country_name in names:
            if countries_repo.get_country_by_name(self.db, country_name) is not None:
                continue
            try:
                countries_repo.create_country(self.db, country_name)
            except IntegrityError:
                logger.info("countries_upload_duplicate: name=%s", country_name)
                continue
            inserted += 1
        logger.info("countries_uploaded: rows=%d inserted=%d", len(names), inserted)
        return inserted
