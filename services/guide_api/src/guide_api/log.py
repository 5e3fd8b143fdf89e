"""Logging setup for guide_api (delegates to corpus)."""

from corpus.log import JsonFormatter, setup_logging as _setup

__all__ = ["JsonFormatter", "setup_logging"]


def setup_logging(level: str = "INFO") -> None:
    _setup(level, suppress=["werkzeug", "sqlalchemy.engine"])
