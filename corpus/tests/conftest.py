"""Shared fixtures for corpus tests: on-disk guides and an in-memory catalog."""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import yaml
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from corpus.db.base import create_db_engine, init_catalog

GuideWriter = Callable[..., Path]


def render_guide(front_matter: dict[str, Any] | None, body: str) -> str:
    if front_matter is None:
        return body
    header = yaml.safe_dump(front_matter, sort_keys=False)
    return f"---\n{header}---\n{body}"


def default_front_matter(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "title": "Event Subscriber Patterns",
        "description": "How to subscribe to integration events.",
        "area": "events",
        "difficulty": "intermediate",
        "object_types": ["Codeunit"],
        "variable_types": ["Record"],
        "tags": ["events", "subscribers"],
    }
    data.update(overrides)
    return data


@pytest.fixture()
def corpus_root(tmp_path: Path) -> Path:
    root = tmp_path / "guides"
    root.mkdir()
    return root


@pytest.fixture()
def write_guide(corpus_root: Path) -> GuideWriter:
    """Write a guide under the corpus root and return its path."""

    def _write(
        relative: str,
        body: str = "# Heading\n\nSome prose.\n",
        front_matter: dict[str, Any] | None = None,
        **overrides: Any,
    ) -> Path:
        if front_matter is None:
            front_matter = default_front_matter(**overrides)
        path = corpus_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_guide(front_matter, body), encoding="utf-8")
        return path

    return _write


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
