"""Keyword scoring for retrieving guides by topic or tag."""

import re
from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from corpus.documents.model import Document

_TERM_RE = re.compile(r"[\w\-]+")

TITLE_WEIGHT = 5
TAG_WEIGHT = 4
AREA_WEIGHT = 3
TYPE_WEIGHT = 2
DESCRIPTION_WEIGHT = 2
BODY_WEIGHT = 1


class SearchHit(BaseModel):
    slug: str
    path: str
    title: str
    area: str
    score: int


def tokenize(query: str) -> list[str]:
    """Lower-cased, de-duplicated search terms in query order."""
    seen: dict[str, None] = {}
    for term in _TERM_RE.findall(query.lower()):
        seen.setdefault(term, None)
    return list(seen)


def search_text(
    *, title: str, description: str, body: str, types: Iterable[str] = ()
) -> str:
    """Lower-cased text that terms are matched against as substrings.

    The catalog stores this so its SQL prefilter agrees with
    ``score_fields`` on non-ASCII text.
    """
    return "\n".join([title, description, *types, body]).lower()


def score_fields(
    terms: Sequence[str],
    *,
    title: str,
    description: str,
    area: str,
    tags: Iterable[str],
    types: Iterable[str] = (),
    body: str = "",
) -> int:
    """Score one guide's fields against already tokenized terms.

    Tags and types must match a term exactly; title, description and body
    match on substring.
    """
    title = title.lower()
    description = description.lower()
    body = body.lower()
    tag_set = {t.lower() for t in tags}
    type_set = {t.lower() for t in types}

    score = 0
    for term in terms:
        if term in title:
            score += TITLE_WEIGHT
        if term in tag_set:
            score += TAG_WEIGHT
        if term == area.lower():
            score += AREA_WEIGHT
        if term in type_set:
            score += TYPE_WEIGHT
        if term in description:
            score += DESCRIPTION_WEIGHT
        if body and term in body:
            score += BODY_WEIGHT
    return score


def score_document(terms: Sequence[str], doc: Document) -> int:
    fm = doc.front_matter
    return score_fields(
        terms,
        title=fm.title,
        description=fm.description,
        area=fm.area,
        tags=fm.tags,
        types=[*fm.object_types, *fm.variable_types],
        body=doc.body,
    )


def search(
    documents: Iterable[Document], query: str, limit: int = 20
) -> list[SearchHit]:
    """Rank documents against a free-text query, best first."""
    terms = tokenize(query)
    if not terms:
        return []

    hits = []
    for doc in documents:
        score = score_document(terms, doc)
        if score > 0:
            hits.append(
                SearchHit(
                    slug=doc.slug,
                    path=doc.path,
                    title=doc.title,
                    area=doc.area,
                    score=score,
                )
            )

    hits.sort(key=lambda h: (-h.score, h.title.lower(), h.path))
    return hits[:limit]
