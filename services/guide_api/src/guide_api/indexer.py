"""Catalog indexer: mirrors a loaded corpus into the SQL catalog."""

import logging

from pydantic import BaseModel
from sqlalchemy.orm import Session, sessionmaker

from corpus.db.repositories import GuideRepository
from corpus.loader import Corpus

logger = logging.getLogger(__name__)


class SyncResult(BaseModel):
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    removed: int = 0


class CatalogIndexer:
    """Synchronises the catalog with a corpus in a single transaction."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def sync(self, corpus: Corpus) -> SyncResult:
        """Insert new guides, refresh changed ones and drop deleted ones.

        Guides whose content hash is unchanged are skipped. A guide that
        exists on disk but failed to load keeps its last indexed version.
        """
        result = SyncResult()
        loaded = {doc.slug for doc in corpus}
        failed = {doc_slug(error.path) for error in corpus.errors}

        with self._session_factory() as session:
            repo = GuideRepository(session)
            known = repo.get_content_hashes()

            for doc in corpus:
                previous = known.get(doc.slug)
                if previous == doc.content_hash:
                    result.unchanged += 1
                    continue
                repo.upsert(doc)
                if previous is None:
                    result.created += 1
                else:
                    result.updated += 1

            stale = sorted(set(known) - loaded - failed)
            result.removed = repo.delete_slugs(stale)

            session.commit()

        if failed & set(known):
            logger.warning(
                "Kept previous catalog entries for guides that failed to load",
                extra={"slugs": sorted(failed & set(known))},
            )
        logger.info(
            "Catalog synchronised",
            extra={f"guides_{key}": value for key, value in result.model_dump().items()},
        )
        return result


def doc_slug(path: str) -> str:
    return path[: -len(".md")] if path.endswith(".md") else path
