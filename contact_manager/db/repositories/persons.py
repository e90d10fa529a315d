"""
Person repository functions.

Implements create/read/update/delete for persons. Reads eager-load the
referenced country so projections can resolve its name without extra
queries.
"""
from __future__ import annotations

import uuid
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from contact_manager.db import models, schemas

# Fields copied from add/update requests onto the ORM row
_MUTABLE_FIELDS = (
    "person_name",
    "email",
    "date_of_birth",
    "gender",
    "country_id",
    "address",
    "receive_news_letters",
    "tin",
)


def _column_values(person: schemas.PersonAddRequest, default_tin: Optional[str] = models.DEFAULT_TIN) -> dict:
    values = {field: getattr(person, field) for field in _MUTABLE_FIELDS}
    if person.gender is not None:
        values["gender"] = person.gender.value
    if values["tin"] is None:
        values["tin"] = default_tin
    return values


def create_person(db: Session, person: schemas.PersonAddRequest, *, person_id: Optional[uuid.UUID] = None):
    db_person = models.Person(**_column_values(person))
    if person_id is not None:
        db_person.person_id = person_id
    try:
        db.add(db_person)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return get_person(db, db_person.person_id)


def get_person(db: Session, person_id: uuid.UUID):
    return (
        db.query(models.Person)
        .options(joinedload(models.Person.country))
        .filter(models.Person.person_id == person_id)
        .first()
    )


def get_persons(db: Session) -> List[models.Person]:
    """List persons in insertion order with their country loaded."""
    return (
        db.query(models.Person)
        .options(joinedload(models.Person.country))
        .order_by(models.Person.created_seq, models.Person.created_at)
        .all()
    )


def update_person(db: Session, person_id: uuid.UUID, person: schemas.PersonAddRequest):
    """Overwrite every mutable field; returns None when the person does not exist."""
    db_person = db.query(models.Person).filter(models.Person.person_id == person_id).first()
    if db_person is None:
        return None
    try:
        for key, value in _column_values(person, default_tin=db_person.tin).items():
            setattr(db_person, key, value)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return get_person(db, person_id)


def delete_person(db: Session, person_id: uuid.UUID) -> bool:
    if person_id is None:
        return False
    try:
        deleted = (
            db.query(models.Person)
            .filter(models.Person.person_id == person_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return deleted > 0
