"""Integration fixtures: a sample corpus on disk, a file-backed catalog and
a real HTTP server for the guide API.
"""

import threading
from collections.abc import Generator
from pathlib import Path

import httpx
import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker
from werkzeug.serving import make_server

from corpus.db.base import create_db_engine, create_session_factory, init_catalog

from guide_api.app import create_app

from tests.integration.helpers import write_sample_corpus

pytestmark = pytest.mark.integration


@pytest.fixture()
def sample_root(tmp_path: Path) -> Path:
    return write_sample_corpus(tmp_path / "guides")


@pytest.fixture()
def db_engine(tmp_path: Path) -> Generator[Engine, None, None]:
    engine = create_db_engine(
        f"sqlite:///{tmp_path / 'catalog.db'}",
        connect_args={"check_same_thread": False},
    )
    init_catalog(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(db_engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(db_engine)


@pytest.fixture()
def http_client(
    session_factory: sessionmaker[Session],
) -> Generator[httpx.Client, None, None]:
    """Run the guide API on an ephemeral port in a background thread."""
    app = create_app(session_factory)
    server = make_server("127.0.0.1", 0, app)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    with httpx.Client(base_url=f"http://127.0.0.1:{server.server_port}", timeout=10.0) as client:
        yield client

    server.shutdown()
    thread.join(timeout=5)
