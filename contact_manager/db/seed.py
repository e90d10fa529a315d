"""
Seed data loading for the country catalog and person records.

Seed files are JSON arrays stored under ``contact_manager/seed``. Rows keep
their ids so persons can reference seeded countries; rows whose id (or, for
countries, whose name) already exists are skipped, so loading is repeatable.
"""
from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import List, Tuple
from sqlalchemy.orm import Session

from contact_manager.db import schemas
from contact_manager.db.repositories import countries as countries_repo
from contact_manager.db.repositories import persons as persons_repo

logger = logging.getLogger(__name__)

SEED_DIR = Path(__file__).resolve().parent.parent / "seed"
COUNTRIES_FILE = SEED_DIR / "countries.json"
PERSONS_FILE = SEED_DIR / "persons.json"


def _read_json(path: Path) -> List[dict]:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def seed_countries(db: Session, path: Path = COUNTRIES_FILE) -> int:
    inserted = 0
    for row in _read_json(path):
        country_id = uuid.UUID(row["country_id"])
        if countries_repo.get_country(db, country_id) is not None:
            continue
        if countries_repo.get_country_by_name(db, row["country_name"]) is not None:
            continue
        countries_repo.create_country(db, row["country_name"], country_id=country_id)
        inserted += 1
    logger.info("seed_countries: file=%s inserted=%d", path.name, inserted)
    return inserted


def seed_persons(db: Session, path: Path = PERSONS_FILE) -> int:
    inserted = 0
    for row in _read_json(path):
        person_id = uuid.UUID(row.pop("person_id"))
        if persons_repo.get_person(db, person_id) is not None:
            continue
        persons_repo.create_person(db, schemas.PersonAddRequest(**row), person_id=person_id)
        inserted += 1
    logger.info("seed_persons: file=%s inserted=%d", path.name, inserted)
    return inserted


def seed_all(db: Session, countries_path: Path = COUNTRIES_FILE, persons_path: Path = PERSONS_FILE) -> Tuple[int, int]:
    """Load countries first, then persons; returns the inserted counts."""
    return seed_countries(db, countries_path), seed_persons(db, persons_path)
