"""YAML front matter extraction and validation."""

from typing import Any

import yaml
from pydantic import ValidationError

from corpus.documents.model import FrontMatter
from corpus.errors import FrontMatterError

_OPEN = "---"
_CLOSE = frozenset({"---", "..."})
_BOM = "\ufeff"


def split_front_matter(text: str) -> tuple[dict[str, Any], str, int]:
    """Split a guide into its front matter mapping and Markdown body.

    Returns ``(data, body, body_line_offset)`` where ``body_line_offset`` is
    the number of file lines that precede the body.

    Raises FrontMatterError if the block is missing, unterminated, not valid
    YAML, or not a mapping.
    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _OPEN:
        raise FrontMatterError("File does not start with a '---' front matter block", 1)

    end = None
    for index in range(1, len(lines)):
        if lines[index].rstrip() in _CLOSE:
            end = index
            break
    if end is None:
        raise FrontMatterError("Front matter block is not terminated", 1)

    raw = "".join(lines[1:end])
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 2 if mark is not None else None
        problem = getattr(exc, "problem", None) or str(exc)
        raise FrontMatterError(f"Invalid YAML: {problem}", line) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}", 2
        )

    return data, "".join(lines[end + 1:]), end + 1


def parse_front_matter(data: dict[str, Any]) -> FrontMatter:
    """Validate a raw front matter mapping.

    Raises FrontMatterError listing every invalid field.
    """
    try:
        return FrontMatter.model_validate(data)
    except ValidationError as exc:
        problems = []
        for error in exc.errors(include_url=False):
            field = ".".join(str(part) for part in error["loc"]) or "front matter"
            problems.append(f"{field}: {error['msg']}")
        raise FrontMatterError("; ".join(problems)) from exc
