"""
Shared SQLAlchemy base and helpers.
"""
from sqlalchemy import func, select
from sqlalchemy.orm import declarative_base
from datetime import datetime, UTC


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


def next_insert_seq(column_getter):
    """Build a column default yielding ``max(column) + 1`` at insert time.

    Gives rows a portable insertion counter that breaks ties between equal
    ``created_at`` values. Rows are inserted one per flush by the repositories.
    """
    def _default(context):
        column = column_getter()
        return context.connection.scalar(select(func.coalesce(func.max(column), 0) + 1))
    return _default


Base = declarative_base()
