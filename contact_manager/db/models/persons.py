import uuid
from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, Index, Integer, String
from sqlalchemy.orm import relationship
from .base import Base, now_utc, next_insert_seq
from ..types import GUID

DEFAULT_TIN = 'ABC12345'


class Person(Base):
    __tablename__ = 'persons'
    person_id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    person_name = Column(String(40), nullable=False)
    email = Column(String(40), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String(10), nullable=True)
    # No foreign key: a person may reference a country id the catalog does not hold.
    country_id = Column(GUID(), nullable=True)
    address = Column(String(200), nullable=True)
    receive_news_letters = Column(Boolean, nullable=False, default=False)
    tin = Column('tax_identification_number', String(8), nullable=True, default=DEFAULT_TIN)
    created_seq = Column(Integer, nullable=False, default=next_insert_seq(lambda: Person.created_seq))
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)

    country = relationship(
        "Country",
        primaryjoin="foreign(Person.country_id) == Country.country_id",
        viewonly=True,
    )

    __table_args__ = (
        CheckConstraint('length(tax_identification_number) = 8', name='chk_persons_tin'),
        Index('idx_persons_country_id', 'country_id'),
        Index('idx_persons_created_at', 'created_at', 'created_seq'),
    )
