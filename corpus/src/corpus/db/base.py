"""Catalog foundation: declarative base class, engine and session factories."""

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Base class for all catalog ORM models."""


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, **kwargs: object) -> Engine:
    """Create a SQLAlchemy engine for the catalog.

    SQLite connections get foreign key enforcement so tag rows cascade
    with their guide.
    """
    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a sessionmaker bound to the given engine.

    ``expire_on_commit=False`` keeps guides readable after the indexer
    commits and the Flask request serialises them.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_catalog(engine: Engine) -> None:
    """Create catalog tables that do not exist yet."""
    Base.metadata.create_all(engine)
