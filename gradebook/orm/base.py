"""
gradebook/orm/base.py
Declarative base for the gradebook tables

Timestamps are stored as naive UTC. Constraint names follow one convention so
that the unique/check constraints declared on the models are stable across
SQLite and server databases.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, MetaData
from sqlalchemy.orm import declarative_base

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))


def utcnow_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(Base):
    """
    Abstract base: integer primary key plus creation time.

    Grading rows (assessments, submissions) are never updated in place.
    """
    __abstract__ = True

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        index=True
    )

    created_at = Column(
        DateTime,
        default=utcnow_naive,
        nullable=False,
        comment="UTC time the row was created"
    )


class UpdatableMixin:
    """For rows an admin can edit after creation (course metadata, enrollment status)."""

    updated_at = Column(
        DateTime,
        default=utcnow_naive,
        onupdate=utcnow_naive,
        nullable=False,
        comment="UTC time the row was last changed"
    )
