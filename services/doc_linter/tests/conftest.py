"""Fixtures for doc_linter tests: a throwaway corpus on disk."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from corpus.loader import Corpus, load_corpus


@pytest.fixture()
def corpus_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture()
def write_guide(corpus_root: Path) -> Callable[..., Path]:
    """Write a guide with valid default front matter; keyword args override it."""

    def _write(relative: str, body: str = "# Guide\n\nText.\n", **overrides: Any) -> Path:
        front_matter: dict[str, Any] = {
            "title": _title_from_path(relative),
            "description": "A guide.",
            "area": relative.split("/")[1] if relative.startswith("areas/") else "general",
            "difficulty": "beginner",
            "object_types": ["Codeunit"],
            "tags": ["al"],
        }
        front_matter.update(overrides)
        path = corpus_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        header = yaml.safe_dump(front_matter, sort_keys=False)
        path.write_text(f"---\n{header}---\n{body}", encoding="utf-8")
        return path

    return _write


def _title_from_path(relative: str) -> str:
    return Path(relative).stem.replace("-", " ").title()


@pytest.fixture()
def load(corpus_root: Path) -> Callable[[], Corpus]:
    return lambda: load_corpus(corpus_root)
