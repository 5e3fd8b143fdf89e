"""Corpus discovery and loading.

Every guide is parsed on its own. A broken file becomes a LoadError and
never stops the rest of the corpus from loading.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath

from corpus.documents.model import Document, LoadError
from corpus.documents.parser import parse_document
from corpus.enums import LoadErrorKind
from corpus.errors import CorpusNotFoundError, FrontMatterError

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "**/*.md"


class Corpus:
    """An in-memory view of every guide under a root directory."""

    def __init__(
        self,
        root: Path,
        documents: Iterable[Document],
        errors: Iterable[LoadError] = (),
    ) -> None:
        self.root = root
        self.documents = sorted(documents, key=lambda d: d.path)
        self.errors = sorted(errors, key=lambda e: e.path)
        self._by_slug = {d.slug: d for d in self.documents}

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    @property
    def paths(self) -> set[str]:
        """Relative paths of every Markdown file seen, loaded or not."""
        return {d.path for d in self.documents} | {e.path for e in self.errors}

    def get(self, slug_or_path: str) -> Document | None:
        slug = slug_or_path.strip("/")
        if slug.endswith(".md"):
            slug = slug[: -len(".md")]
        return self._by_slug.get(slug)

    def areas(self) -> dict[str, int]:
        counts = Counter(d.area for d in self.documents)
        return dict(sorted(counts.items()))

    def tags(self) -> dict[str, int]:
        counts = Counter(tag for d in self.documents for tag in d.front_matter.tags)
        return dict(sorted(counts.items()))

    def filter(
        self,
        *,
        area: str | None = None,
        tag: str | None = None,
        difficulty: str | None = None,
        object_type: str | None = None,
    ) -> list[Document]:
        """Return documents matching every given criterion (case-insensitive)."""
        result = []
        for doc in self.documents:
            fm = doc.front_matter
            if area is not None and fm.area != area.lower():
                continue
            if tag is not None and tag.lower() not in fm.tags:
                continue
            if difficulty is not None and fm.difficulty != difficulty.lower():
                continue
            if object_type is not None and object_type.lower() not in {
                o.lower() for o in fm.object_types
            }:
                continue
            result.append(doc)
        return result


def is_excluded(relative_path: str, exclude: Sequence[str]) -> bool:
    path = PurePosixPath(relative_path)
    return any(path.match(glob) or fnmatch(relative_path, glob) for glob in exclude)


def discover(
    root: Path, pattern: str = DEFAULT_PATTERN, exclude: Sequence[str] = ()
) -> list[Path]:
    """List Markdown files under root in sorted order.

    Hidden directories (``.git``, ``.github``) and excluded globs are skipped.
    """
    found = []
    for path in sorted(root.glob(pattern)):
        if not path.is_file():
            continue
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if is_excluded(relative.as_posix(), exclude):
            continue
        found.append(path)
    return found


def load_document(root: Path, path: Path) -> Document | LoadError:
    relative = path.relative_to(root).as_posix()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        return LoadError(
            path=relative,
            message=f"File is not valid UTF-8: {exc.reason}",
            kind=LoadErrorKind.ENCODING,
        )
    except OSError as exc:
        return LoadError(
            path=relative,
            message=f"Cannot read file: {exc.strerror or exc}",
            kind=LoadErrorKind.READ,
        )

    try:
        return parse_document(relative, text)
    except FrontMatterError as exc:
        return LoadError(path=relative, message=exc.message, line=exc.line)


def load_corpus(
    root: str | Path,
    pattern: str = DEFAULT_PATTERN,
    exclude: Sequence[str] = (),
) -> Corpus:
    """Load every guide under root.

    Raises CorpusNotFoundError if root is not a directory.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise CorpusNotFoundError(f"Corpus root does not exist: {root}")

    documents: list[Document] = []
    errors: list[LoadError] = []

    for path in discover(root, pattern, exclude):
        result = load_document(root, path)
        if isinstance(result, LoadError):
            logger.warning(
                "Guide failed to load",
                extra={"path": result.path, "kind": result.kind, "reason": result.message},
            )
            errors.append(result)
        else:
            documents.append(result)

    logger.info(
        "Corpus loaded",
        extra={
            "root": str(root),
            "documents": len(documents),
            "errors": len(errors),
        },
    )
    return Corpus(root, documents, errors)
