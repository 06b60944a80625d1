"""
SQLite database configuration and ORM models.

The whole persisted state is a flat namespace of string keys, each holding
one JSON document, stored in a single table.
"""

from functools import lru_cache
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from rhythm.core.config import get_settings
from rhythm.utils.datetime_utils import now_utc


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class KeyValueORM(Base):
    """One persisted key and its JSON-encoded value."""

    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc)


# ===========================================
# Database Session Management
# ===========================================


@lru_cache()
def _engine_for(url: str, echo: bool) -> Engine:
    return create_engine(url, echo=echo, future=True)


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Get the (cached) engine for a database URL."""
    settings = get_settings()
    return _engine_for(database_url or settings.DATABASE_URL, settings.DEBUG)


def get_session_factory(database_url: Optional[str] = None) -> sessionmaker:
    """Get session factory."""
    engine = get_engine(database_url)
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


def init_db(database_url: Optional[str] = None) -> None:
    """Initialize database tables."""
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
