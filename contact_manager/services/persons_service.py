"""
Person record service.

Wraps the person repository with validation, projection into
PersonResponse, the filter/sort pipeline and the export formats.
"""

import io
import logging
import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from contact_manager.db import schemas
from contact_manager.db.repositories import persons as persons_repo
from contact_manager.exceptions import NotFoundError
from contact_manager.services import export_service
from contact_manager.services.person_query import filter_persons, sort_persons, to_person_response
from contact_manager.utils.validation import validate_person_request

logger = logging.getLogger(__name__)


class PersonsService:
    """Service class for person CRUD, querying and export."""

    def __init__(self, db: Session):
        self.db = db

    def add_person(self, request: Optional[schemas.PersonAddRequest]) -> schemas.PersonResponse:
        validate_person_request(request)
        person = persons_repo.create_person(self.db, request)
        logger.info("person_added: id=%s", person.person_id)
        return to_person_response(person)

    def get_all_persons(self) -> List[schemas.PersonResponse]:
        now = datetime.now()
        return [to_person_response(p, now=now) for p in persons_repo.get_persons(self.db)]

    def get_person_by_person_id(self, person_id: Optional[uuid.UUID]) -> Optional[schemas.PersonResponse]:
        if person_id is None:
            return None
        person = persons_repo.get_person(self.db, person_id)
        if person is None:
            return None
        return to_person_response(person)

    def get_filtered_persons(self, search_by: Optional[str], search_string: Optional[str]) -> List[schemas.PersonResponse]:
        logger.debug("persons_filter: search_by=%s search_string=%s", search_by, search_string)
        return filter_persons(self.get_all_persons(), search_by, search_string)

    def get_sorted_persons(
        self,
        persons: List[schemas.PersonResponse],
        sort_by: Optional[str],
        sort_order=schemas.SortOrderOptions.ASC,
    ) -> List[schemas.PersonResponse]:
        logger.debug("persons_sort: sort_by=%s sort_order=%s", sort_by, sort_order)
        return sort_persons(persons, sort_by, sort_order)

    def update_person(self, request: Optional[schemas.PersonUpdateRequest]) -> schemas.PersonResponse:
        validate_person_request(request)
        person = persons_repo.update_person(self.db, request.person_id, request)
        if person is None:
            raise NotFoundError(f"Person with person_id {request.person_id} not found")
        logger.info("person_updated: id=%s", person.person_id)
        return to_person_response(person)

    def delete_person(self, person_id: Optional[uuid.UUID]) -> bool:
        deleted = persons_repo.delete_person(self.db, person_id)
        if deleted:
            logger.info("person_deleted: id=%s", person_id)
        return deleted

    def get_persons_csv(self, persons: Optional[List[schemas.PersonResponse]] = None) -> io.BytesIO:
        if persons is None:
            persons = self.get_all_persons()
        return export_service.persons_to_csv(persons)

    def get_persons_excel(self, persons: Optional[List[schemas.PersonResponse]] = None) -> io.BytesIO:
        if persons is None:
            persons = self.get_all_persons()
        return export_service.persons_to_excel(persons)

    def get_persons_pdf(self, persons: Optional[List[schemas.PersonResponse]] = None) -> io.BytesIO:
        if persons is None:
            persons = self.get_all_persons()
        return export_service.persons_to_pdf(persons)
