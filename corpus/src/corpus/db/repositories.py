"""Catalog data access with constructor-injected sessions."""

from collections.abc import Iterable, Sequence

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.orm import Session

from corpus.db.models import Guide, GuideTag
from corpus.documents.model import Document
from corpus.search import search_text


class GuideRepository:
    """Data access for the guides and guide_tags tables."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_slug(self, slug: str) -> Guide | None:
        """Fetch a guide by primary key."""
        return self._session.get(Guide, slug)

    def get_content_hashes(self) -> dict[str, str]:
        """Map every indexed slug to its content hash.

        Used by the indexer to skip unchanged guides in one query.
        """
        stmt = select(Guide.slug, Guide.content_hash)
        return {slug: digest for slug, digest in self._session.execute(stmt)}

    def upsert(self, document: Document) -> Guide:
        """Insert or refresh a guide from a parsed document."""
        fm = document.front_matter
        guide = self.get_by_slug(document.slug)
        if guide is None:
            guide = Guide(slug=document.slug)
            self._session.add(guide)

        guide.path = document.path
        guide.title = fm.title
        guide.description = fm.description
        guide.area = fm.area
        guide.difficulty = fm.difficulty
        guide.object_types = list(fm.object_types)
        guide.variable_types = list(fm.variable_types)
        guide.body = document.body
        guide.search_text = search_text(
            title=fm.title,
            description=fm.description,
            body=document.body,
            types=[*fm.object_types, *fm.variable_types],
        )
        guide.content_hash = document.content_hash

        # Reuse existing tag rows so an unchanged tag keeps its primary key.
        existing = {t.tag: t for t in guide.tags}
        tags = []
        for position, name in enumerate(fm.tags):
            tag = existing.get(name) or GuideTag(tag=name)
            tag.position = position
            tags.append(tag)
        guide.tags = tags

        self._session.flush()
        return guide

    def delete_slugs(self, slugs: Iterable[str]) -> int:
        """Delete guides by slug. Returns how many existed."""
        deleted = 0
        for slug in slugs:
            guide = self.get_by_slug(slug)
            if guide is not None:
                self._session.delete(guide)
                deleted += 1
        self._session.flush()
        return deleted

    def list_guides(
        self,
        *,
        area: str | None = None,
        tag: str | None = None,
        difficulty: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Guide]:
        """List guides ordered by area then title."""
        stmt = (
            select(Guide)
            .where(*self._filters(area, tag, difficulty))
            .order_by(Guide.area, Guide.title, Guide.slug)
            .limit(limit)
            .offset(offset)
        )
        return list(self._session.scalars(stmt).all())

    def count_guides(
        self,
        *,
        area: str | None = None,
        tag: str | None = None,
        difficulty: str | None = None,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(Guide)
            .where(*self._filters(area, tag, difficulty))
        )
        return int(self._session.scalar(stmt) or 0)

    def search_candidates(
        self,
        terms: Sequence[str],
        *,
        area: str | None = None,
        tag: str | None = None,
        difficulty: str | None = None,
    ) -> list[Guide]:
        """Guides matching at least one term, before ranking.

        Terms are matched as substrings of the stored lower-cased
        search text; area and tags match exactly.
        """
        if not terms:
            return []

        matches: list[ColumnElement[bool]] = []
        for term in terms:
            term = term.lower()
            matches.extend([
                Guide.search_text.contains(term, autoescape=True),
                Guide.area == term,
                Guide.tags.any(GuideTag.tag == term),
            ])

        stmt = (
            select(Guide)
            .where(or_(*matches), *self._filters(area, tag, difficulty))
            .order_by(Guide.slug)
        )
        return list(self._session.scalars(stmt).all())

    def area_counts(self) -> dict[str, int]:
        stmt = (
            select(Guide.area, func.count())
            .group_by(Guide.area)
            .order_by(Guide.area)
        )
        return {area: count for area, count in self._session.execute(stmt)}

    def tag_counts(self) -> dict[str, int]:
        stmt = (
            select(GuideTag.tag, func.count())
            .group_by(GuideTag.tag)
            .order_by(GuideTag.tag)
        )
        return {tag: count for tag, count in self._session.execute(stmt)}

    @staticmethod
    def _filters(
        area: str | None, tag: str | None, difficulty: str | None
    ) -> list[ColumnElement[bool]]:
        filters: list[ColumnElement[bool]] = []
        if area is not None:
            filters.append(Guide.area == area.lower())
        if tag is not None:
            filters.append(Guide.tags.any(GuideTag.tag == tag.lower()))
        if difficulty is not None:
            filters.append(Guide.difficulty == difficulty.lower())
        return filters
