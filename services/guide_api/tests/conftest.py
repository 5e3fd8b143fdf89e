"""Fixtures for guide_api tests."""

from collections.abc import Callable, Generator
from unittest.mock import MagicMock

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from corpus.db.base import create_db_engine, init_catalog
from corpus.db.repositories import GuideRepository
from corpus.documents.parser import parse_document

from guide_api.app import create_app
from guide_api.config import GuideApiConfig


def make_guide_text(
    title: str,
    area: str,
    difficulty: str = "beginner",
    tags: tuple[str, ...] = (),
    description: str = "A guide.",
    body: str = "# Body\n",
    object_types: tuple[str, ...] = ("Codeunit",),
    variable_types: tuple[str, ...] = (),
) -> str:
    tag_list = ", ".join(tags)
    type_list = ", ".join(object_types)
    variable_list = ", ".join(variable_types)
    return (
        "---\n"
        f"title: {title}\n"
        f"description: {description}\n"
        f"area: {area}\n"
        f"difficulty: {difficulty}\n"
        f"object_types: [{type_list}]\n"
        f"variable_types: [{variable_list}]\n"
        f"tags: [{tag_list}]\n"
        "---\n"
        f"{body}"
    )


@pytest.fixture(scope="session")
def db_engine() -> Engine:
    """Create a single in-memory SQLite catalog for the test session."""
    engine = create_db_engine("sqlite:///:memory:")
    init_catalog(engine)
    return engine


@pytest.fixture()
def db_session(db_engine: Engine) -> Generator[Session, None, None]:
    """Transactional session that rolls back after each test."""
    connection = db_engine.connect()
    transaction = connection.begin()
    session = Session(bind=connection)

    yield session

    session.close()
    if transaction.is_active:
        transaction.rollback()
    connection.close()


def _factory_for(session: object) -> MagicMock:
    factory = MagicMock(spec=sessionmaker)
    ctx = MagicMock()
    ctx.__enter__ = MagicMock(return_value=session)
    ctx.__exit__ = MagicMock(return_value=False)
    factory.return_value = ctx
    return factory


@pytest.fixture()
def session_factory(db_session: Session) -> sessionmaker[Session]:
    """Session factory that always returns the test session.

    Routes and the indexer use ``with session_factory() as session:``;
    this routes them to the transactional test session.
    """
    return _factory_for(db_session)


@pytest.fixture()
def seed_guides(db_session: Session) -> None:
    """Index four guides across two areas."""
    repo = GuideRepository(db_session)
    guides = [
        ("areas/testing/cleanup.md", make_guide_text(
            "Test Cleanup", "testing", tags=("testing", "cleanup"),
            description="Remove prefixed records after each test.",
        )),
        ("areas/testing/prefix.md", make_guide_text(
            "Test Data Prefixing", "testing", "intermediate", tags=("testing",),
            body="# Prefix\n\nUse a prefix so cleanup finds records.\n",
        )),
        ("areas/integration/retry.md", make_guide_text(
            "Webhook Retry", "integration", "advanced", tags=("http", "retry"),
            description="Exponential backoff for outbound webhooks.",
        )),
        ("areas/integration/sync.md", make_guide_text(
            "API Synchronization", "integration", "advanced", tags=("http", "jobs"),
            body="# Sync\n\nFailed sync jobs retry on the next run.\n",
        )),
    ]
    for path, text in guides:
        repo.upsert(parse_document(path, text))
    db_session.flush()


@pytest.fixture()
def app(session_factory: sessionmaker[Session]) -> Flask:
    app = create_app(session_factory, GuideApiConfig(max_page_size=50))
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def broken_session() -> MagicMock:
    """A session whose every query fails as if the database were down."""
    session = MagicMock(spec=Session)
    error = OperationalError("SELECT 1", {}, Exception("connection refused"))
    session.execute.side_effect = error
    session.scalars.side_effect = error
    session.scalar.side_effect = error
    session.get.side_effect = error
    return session


@pytest.fixture()
def broken_client(broken_session: MagicMock) -> FlaskClient:
    app = create_app(_factory_for(broken_session))
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture()
def guide_text() -> Callable[..., str]:
    return make_guide_text
