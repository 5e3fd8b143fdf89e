"""Static site generation for a guide corpus."""

import hashlib
import json
import logging
import re
import shutil
from collections import defaultdict
from pathlib import Path, PurePosixPath
from typing import Any

from pydantic import BaseModel

from corpus.documents.model import Document, resolve_target
from corpus.loader import Corpus

from site_builder.renderer import render_markdown, render_page

logger = logging.getLogger(__name__)

_TAG_FILE_RE = re.compile(r"[^a-z0-9]+")
_HASHED_STEM_RE = re.compile(r"-[0-9a-f]{8}$")

# Guides and their linked files live under GUIDES_DIR so no guide path can
# collide with the index, tag pages or the search index.
GUIDES_DIR = "guides"
TAGS_DIR = "tags"
SEARCH_INDEX_FILE = "search-index.json"


class BuildResult(BaseModel):
    output_dir: Path
    pages_written: int
    skipped: list[str]
    assets_copied: int = 0


def page_path(doc: Document) -> str:
    return f"{GUIDES_DIR}/{doc.slug}.html"


def tag_file(tag: str) -> str:
    """File name for a tag page.

    A tag that is not already a plain ``a-z0-9`` slug gets a short hash of
    the tag appended, so "event driven", "event-driven" and "c#" vs "c"
    each get their own page.
    """
    stem = _TAG_FILE_RE.sub("-", tag.lower()).strip("-")
    if stem != tag or _HASHED_STEM_RE.search(stem):
        digest = hashlib.sha256(tag.encode("utf-8")).hexdigest()[:8]
        stem = f"{stem or 'tag'}-{digest}"
    return f"{stem}.html"


def relative_root(output_path: str) -> str:
    """Prefix that leads from a page back to the site root."""
    depth = len(PurePosixPath(output_path).parts) - 1
    return "../" * depth


class SiteBuilder:
    """Renders every loaded guide plus index, tag pages and a search index.

    The ``guides/`` and ``tags/`` directories are owned by the builder and
    are cleared before each build so pages of deleted guides do not linger.
    Non-Markdown files that guides link to (AL samples, images) are copied
    next to the rendered pages.
    """

    def __init__(
        self,
        corpus: Corpus,
        output_dir: str | Path,
        site_title: str = "AL Development Guides",
    ) -> None:
        self._corpus = corpus
        self._output_dir = Path(output_dir)
        self._site_title = site_title

    def build(self) -> BuildResult:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        for owned in (GUIDES_DIR, TAGS_DIR):
            shutil.rmtree(self._output_dir / owned, ignore_errors=True)
        pages = 0

        for error in self._corpus.errors:
            logger.warning(
                "Skipping guide that failed to load",
                extra={"path": error.path, "reason": error.message},
            )

        for doc in self._corpus:
            self._write(page_path(doc), self._render_guide(doc))
            pages += 1

        self._write("index.html", self._render_index())
        pages += 1

        for tag in self._corpus.tags():
            self._write(f"{TAGS_DIR}/{tag_file(tag)}", self._render_tag(tag))
            pages += 1

        self._write(SEARCH_INDEX_FILE, json.dumps(self._search_index(), indent=2))
        assets = self._copy_linked_files()

        logger.info(
            "Site built",
            extra={
                "output_dir": str(self._output_dir),
                "pages": pages,
                "assets": assets,
                "skipped": len(self._corpus.errors),
            },
        )
        return BuildResult(
            output_dir=self._output_dir,
            pages_written=pages,
            assets_copied=assets,
            skipped=[e.path for e in self._corpus.errors],
        )

    def _write(self, relative: str, content: str) -> None:
        target = self._output_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def _copy_linked_files(self) -> int:
        """Copy non-Markdown link targets into the guides tree."""
        copied: set[str] = set()
        for doc in self._corpus:
            for link in doc.links:
                if not link.is_internal or link.path_part.endswith(".md"):
                    continue
                resolved = resolve_target(doc.path, link.target)
                if resolved is None or resolved in copied:
                    continue
                source = self._corpus.root / resolved
                target = self._output_dir / GUIDES_DIR / resolved
                # Never replace a rendered page.
                if not source.is_file() or target.exists():
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, target)
                copied.add(resolved)
        return len(copied)

    def _render_guide(self, doc: Document) -> str:
        fm = doc.front_matter
        output = page_path(doc)
        return render_page(
            "guide.html",
            site_title=self._site_title,
            root=relative_root(output),
            guide={
                "title": fm.title,
                "description": fm.description,
                "area": fm.area,
                "difficulty": str(fm.difficulty),
                "object_types": fm.object_types,
                "variable_types": fm.variable_types,
                "tags": [{"name": t, "file": tag_file(t)} for t in fm.tags],
            },
            content=render_markdown(doc.body),
        )

    def _entry(self, doc: Document, root: str = "") -> dict[str, Any]:
        fm = doc.front_matter
        return {
            "title": fm.title,
            "description": fm.description,
            "area": fm.area,
            "difficulty": str(fm.difficulty),
            "url": f"{root}{page_path(doc)}",
        }

    def _render_index(self) -> str:
        areas: defaultdict[str, list[dict[str, Any]]] = defaultdict(list)
        for doc in sorted(self._corpus, key=lambda d: (d.area, d.title.lower())):
            areas[doc.area].append(self._entry(doc))

        return render_page(
            "index.html",
            site_title=self._site_title,
            root="",
            guide_count=len(self._corpus),
            areas=dict(areas),
            tags=[
                {"name": tag, "file": tag_file(tag), "count": count}
                for tag, count in self._corpus.tags().items()
            ],
        )

    def _render_tag(self, tag: str) -> str:
        root = relative_root(f"tags/{tag_file(tag)}")
        docs = sorted(self._corpus.filter(tag=tag), key=lambda d: d.title.lower())
        return render_page(
            "tag.html",
            site_title=self._site_title,
            root=root,
            tag=tag,
            entries=[self._entry(doc, root) for doc in docs],
        )

    def _search_index(self) -> list[dict[str, Any]]:
        return [
            {
                "slug": doc.slug,
                "title": doc.title,
                "description": doc.front_matter.description,
                "area": doc.area,
                "difficulty": str(doc.front_matter.difficulty),
                "tags": doc.front_matter.tags,
                "url": page_path(doc),
            }
            for doc in self._corpus
        ]
