"""WSGI entry point for gunicorn.

Usage:
    gunicorn guide_api.wsgi:app --bind 0.0.0.0:8000
"""
from corpus.config import CatalogConfig
from corpus.db.base import create_db_engine, create_session_factory, init_catalog

from guide_api.app import create_app

_catalog_config = CatalogConfig()
_engine = create_db_engine(_catalog_config.url, pool_pre_ping=True)
init_catalog(_engine)
app = create_app(create_session_factory(_engine))
