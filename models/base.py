# models/base.py
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Matches the constraint names used in alembic/versions
NAMING_CONVENTION = {
     "ix": "ix_%(table_name)s_%(column_0_name)s",
     "uq": "uq_%(table_name)s_%(column_0_name)s",
     "fk": "fk_%(table_name)s_%(column_0_name)s",
}


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Every model names its own table; constraint names follow NAMING_CONVENTION.
     """
     metadata = MetaData(naming_convention=NAMING_CONVENTION)


def enum_values(enum_cls) -> list[str]:
     """Persist enum *values* (e.g. "paid_in_full") rather than member names."""
     return [member.value for member in enum_cls]
