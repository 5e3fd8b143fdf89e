import posixpath
import re
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from corpus.enums import Difficulty, LoadErrorKind

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
_RELATED_HEADINGS = frozenset({"related topics", "related"})


def is_internal_target(target: str) -> bool:
    """True for relative links into the repository (no scheme, anchor or root)."""
    target = target.strip()
    if not target or target.startswith(("#", "/")):
        return False
    return _SCHEME_RE.match(target) is None


def split_target(target: str) -> tuple[str, str]:
    """Split a link target into its path and its ``?query#fragment`` suffix."""
    target = target.strip()
    match = re.search(r"[#?]", target)
    if match is None:
        return target, ""
    return target[: match.start()], target[match.start():]


def resolve_target(doc_path: str, target: str) -> str | None:
    """Resolve an internal link target to a corpus-relative path.

    Returns None if the target escapes the corpus root.
    """
    path = unquote(split_target(target)[0])
    resolved = posixpath.normpath(posixpath.join(posixpath.dirname(doc_path), path))
    if resolved == ".." or resolved.startswith("../"):
        return None
    return resolved


def _as_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


class FrontMatter(BaseModel):
    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    area: str = Field(min_length=1)
    difficulty: Difficulty
    object_types: list[str] = Field(default_factory=list)
    variable_types: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @field_validator("area")
    @classmethod
    def _normalise_area(cls, value: str) -> str:
        return value.lower()

    @field_validator("difficulty", mode="before")
    @classmethod
    def _lower_difficulty(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("object_types", "variable_types", "tags", mode="before")
    @classmethod
    def _wrap_scalar(cls, value: Any) -> Any:
        return _as_list(value)

    @field_validator("object_types", "variable_types")
    @classmethod
    def _strip_items(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item.strip()]

    @field_validator("tags")
    @classmethod
    def _normalise_tags(cls, value: list[str]) -> list[str]:
        seen: dict[str, None] = {}
        for tag in value:
            tag = tag.strip().lower()
            if tag:
                seen.setdefault(tag, None)
        return list(seen)


class Heading(BaseModel):
    level: int
    text: str
    line: int


class CodeBlock(BaseModel):
    language: str
    info: str
    content: str
    line: int


class Link(BaseModel):
    target: str
    text: str
    line: int
    section: str | None = None

    @property
    def is_internal(self) -> bool:
        return is_internal_target(self.target)

    @property
    def path_part(self) -> str:
        return split_target(self.target)[0]

    @property
    def in_related_section(self) -> bool:
        return (
            self.section is not None
            and self.section.strip().lower() in _RELATED_HEADINGS
        )


class Document(BaseModel):
    """A single parsed guide: front matter plus the pieces of its body."""

    path: str
    front_matter: FrontMatter
    body: str
    body_line_offset: int = 0
    headings: list[Heading] = Field(default_factory=list)
    code_blocks: list[CodeBlock] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)
    content_hash: str

    @property
    def slug(self) -> str:
        return str(PurePosixPath(self.path).with_suffix(""))

    @property
    def title(self) -> str:
        return self.front_matter.title

    @property
    def area(self) -> str:
        return self.front_matter.area

    @property
    def related_links(self) -> list[Link]:
        return [link for link in self.links if link.in_related_section]


class LoadError(BaseModel):
    path: str
    message: str
    line: int | None = None
    kind: LoadErrorKind = LoadErrorKind.FRONT_MATTER
