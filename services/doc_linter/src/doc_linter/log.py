"""Logging setup for doc_linter (delegates to corpus)."""

import sys

from corpus.log import JsonFormatter, setup_logging as _setup

__all__ = ["JsonFormatter", "setup_logging"]


def setup_logging(level: str = "WARNING") -> None:
    _setup(level, suppress=["markdown_it"], stream=sys.stderr)
