"""Catalog layer: models, repositories, engine/session utilities."""

from corpus.db.base import Base, create_db_engine, create_session_factory, init_catalog
from corpus.db.models import Guide, GuideTag
from corpus.db.repositories import GuideRepository

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_catalog",
    "Guide",
    "GuideTag",
    "GuideRepository",
]
