"""Fixtures for site_builder tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml


@pytest.fixture()
def corpus_root(tmp_path: Path) -> Path:
    root = tmp_path / "guides"
    root.mkdir()
    return root


@pytest.fixture()
def write_guide(corpus_root: Path) -> Callable[..., Path]:
    def _write(relative: str, body: str = "# Guide\n", **overrides: Any) -> Path:
        front_matter: dict[str, Any] = {
            "title": "Guide",
            "description": "A guide.",
            "area": "testing",
            "difficulty": "beginner",
            "tags": [],
        }
        front_matter.update(overrides)
        path = corpus_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        header = yaml.safe_dump(front_matter, sort_keys=False)
        path.write_text(f"---\n{header}---\n{body}", encoding="utf-8")
        return path

    return _write
