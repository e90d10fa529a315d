import uuid
from sqlalchemy import Column, String, DateTime, Index, Integer
from .base import Base, now_utc, next_insert_seq
from ..types import GUID


def country_name_key(country_name: str) -> str:
    """Case-insensitive identity of a country name."""
    return country_name.strip().casefold()


class Country(Base):
    __tablename__ = 'countries'
    country_id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    country_name = Column(String(100), nullable=False)
    # casefold() of the stripped name; holds the uniqueness rule
    country_name_key = Column(String(200), nullable=False)
    created_seq = Column(Integer, nullable=False, default=next_insert_seq(lambda: Country.created_seq))
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)

    __table_args__ = (
        Index('uq_countries_country_name_key', 'country_name_key', unique=True),
        Index('idx_countries_created_at', 'created_at', 'created_seq'),
    )
