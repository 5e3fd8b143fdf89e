"""Logging setup for site_builder (delegates to corpus)."""

import sys

from corpus.log import JsonFormatter, setup_logging as _setup

__all__ = ["JsonFormatter", "setup_logging"]


def setup_logging(level: str = "INFO") -> None:
    _setup(level, suppress=["markdown_it"], stream=sys.stderr)
