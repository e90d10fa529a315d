"""
Country repository functions.

Implements create/read for the country catalog; names are matched through
the stored casefolded key, so comparison does not depend on the database's
own case folding.
"""
from __future__ import annotations

import uuid
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contact_manager.db import models


def create_country(db: Session, country_name: str, *, country_id: Optional[uuid.UUID] = None):
    """Insert a country; an IntegrityError means the name key is already taken."""
    db_country = models.Country(
        country_name=country_name,
        country_name_key=models.country_name_key(country_name),
    )
    if country_id is not None:
        db_country.country_id = country_id
    try:
        db.add(db_country)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(db_country)
    return db_country


def get_country(db: Session, country_id: uuid.UUID):
    return db.query(models.Country).filter(models.Country.country_id == country_id).first()


def get_country_by_name(db: Session, country_name: str):
    return (
        db.query(models.Country)
        .filter(models.Country.country_name_key == models.country_name_key(country_name))
        .first()
    )


def get_countries(db: Session) -> List[models.Country]:
    """List countries in insertion order."""
    return (
        db.query(models.Country)
        .order_by(models.Country.created_seq, models.Country.created_at)
        .all()
    )
