"""create countries and persons tables

Revision ID: 4e2a9c1d7b30
Revises:
Create Date: 2025-10-06 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from contact_manager.db.types import GUID


# revision identifiers, used by Alembic.
revision: str = '4e2a9c1d7b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'countries',
        sa.Column('country_id', GUID(), nullable=False),
        sa.Column('country_name', sa.String(length=100), nullable=False),
        sa.Column('country_name_key', sa.String(length=200), nullable=False),
        sa.Column('created_seq', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('country_id')
    )
    op.create_index('uq_countries_country_name_key', 'countries', ['country_name_key'], unique=True)
    op.create_index('idx_countries_created_at', 'countries', ['created_at', 'created_seq'], unique=False)

    op.create_table(
        'persons',
        sa.Column('person_id', GUID(), nullable=False),
        sa.Column('person_name', sa.String(length=40), nullable=False),
        sa.Column('email', sa.String(length=40), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=10), nullable=True),
        sa.Column('country_id', GUID(), nullable=True),
        sa.Column('address', sa.String(length=200), nullable=True),
        sa.Column('receive_news_letters', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('tax_identification_number', sa.String(length=8), nullable=True, server_default='ABC12345'),
        sa.Column('created_seq', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('length(tax_identification_number) = 8', name='chk_persons_tin'),
        sa.PrimaryKeyConstraint('person_id')
    )
    op.create_index('idx_persons_country_id', 'persons', ['country_id'], unique=False)
    op.create_index('idx_persons_created_at', 'persons', ['created_at', 'created_seq'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_persons_created_at', table_name='persons')
    op.drop_index('idx_persons_country_id', table_name='persons')
    op.drop_table('persons')
    op.drop_index('idx_countries_created_at', table_name='countries')
    op.drop_index('uq_countries_country_name_key', table_name='countries')
    op.drop_table('countries')
