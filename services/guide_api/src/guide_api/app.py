import logging

from flask import Flask
from sqlalchemy.orm import Session, sessionmaker

from guide_api.config import GuideApiConfig
from guide_api.log import setup_logging
from guide_api.routes import bp

logger = logging.getLogger(__name__)


def create_app(
    session_factory: sessionmaker[Session],
    config: GuideApiConfig | None = None,
) -> Flask:
    """Flask application factory.

    Args:
        session_factory: Catalog session factory (file-backed or in-memory
            SQLite for tests).
        config: API settings; read from the environment when omitted.
    """
    config = config or GuideApiConfig()
    setup_logging(config.log_level)

    app = Flask(__name__)
    app.config["MAX_PAGE_SIZE"] = config.max_page_size
    app.json.sort_keys = False
    app.extensions["catalog_sessions"] = session_factory

    app.register_blueprint(bp)

    logger.info("Guide API initialized")
    return app
