import logging
from typing import Any

from flask import Blueprint, Response, current_app, jsonify, request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from corpus.db.models import Guide
from corpus.db.repositories import GuideRepository
from corpus.enums import ALL_DIFFICULTIES
from corpus.search import score_fields, tokenize

logger = logging.getLogger(__name__)

bp = Blueprint("guides", __name__)

DEFAULT_PAGE_SIZE = 20


class _QueryError(Exception):
    def __init__(self, message: str, status: int = 400, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.extra = extra


def _error(message: str, status: int, **extra: Any) -> tuple[Response, int]:
    body: dict[str, Any] = {"error": message}
    body.update(extra)
    return jsonify(body), status


def _session() -> Session:
    factory: sessionmaker[Session] = current_app.extensions["catalog_sessions"]
    return factory()


def _int_arg(name: str, default: int, minimum: int, maximum: int | None = None) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise _QueryError(f"'{name}' must be an integer") from None
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f">= {minimum}" if maximum is None else f"between {minimum} and {maximum}"
        raise _QueryError(f"'{name}' must be {bounds}")
    return value


def _filters() -> dict[str, str | None]:
    difficulty = request.args.get("difficulty") or None
    if difficulty is not None and difficulty.lower() not in ALL_DIFFICULTIES:
        raise _QueryError(
            "Unknown difficulty",
            422,
            difficulty=difficulty,
            supported=sorted(ALL_DIFFICULTIES),
        )
    return {
        "area": request.args.get("area") or None,
        "tag": request.args.get("tag") or None,
        "difficulty": difficulty,
    }


def _summary(guide: Guide) -> dict[str, Any]:
    return {
        "slug": guide.slug,
        "title": guide.title,
        "description": guide.description,
        "area": guide.area,
        "difficulty": guide.difficulty,
        "tags": guide.tag_names,
    }


def _detail(guide: Guide) -> dict[str, Any]:
    detail = _summary(guide)
    detail.update({
        "path": guide.path,
        "object_types": guide.object_types,
        "variable_types": guide.variable_types,
        "content_hash": guide.content_hash,
        "body": guide.body,
        "indexed_at": guide.indexed_at.isoformat() if guide.indexed_at else None,
        "updated_at": guide.updated_at.isoformat() if guide.updated_at else None,
    })
    return detail


@bp.errorhandler(_QueryError)
def _query_error(exc: _QueryError) -> tuple[Response, int]:
    return _error(exc.message, exc.status, **exc.extra)


@bp.errorhandler(SQLAlchemyError)
def _catalog_error(_exc: SQLAlchemyError) -> tuple[Response, int]:
    logger.exception("Catalog query failed", extra={"endpoint": request.endpoint})
    return _error("Catalog unavailable", 503)


@bp.get("/guides")
def list_guides() -> tuple[Response, int]:
    filters = _filters()
    limit = _int_arg(
        "limit", DEFAULT_PAGE_SIZE, 1, current_app.config["MAX_PAGE_SIZE"]
    )
    offset = _int_arg("offset", 0, 0)

    with _session() as session:
        repo = GuideRepository(session)
        guides = repo.list_guides(limit=limit, offset=offset, **filters)
        total = repo.count_guides(**filters)
        items = [_summary(g) for g in guides]

    return jsonify({
        "items": items,
        "total": total,
        "limit": limit,
        "offset": offset,
    }), 200


@bp.get("/guides/<path:slug>")
def get_guide(slug: str) -> tuple[Response, int]:
    slug = slug.removesuffix(".md")
    with _session() as session:
        guide = GuideRepository(session).get_by_slug(slug)
        if guide is None:
            return _error("Guide not found", 404, slug=slug)
        detail = _detail(guide)

    return jsonify(detail), 200


@bp.get("/search")
def search_guides() -> tuple[Response, int]:
    query = request.args.get("q", "")
    terms = tokenize(query)
    if not terms:
        return _error("Query parameter 'q' is required", 400)

    filters = _filters()
    limit = _int_arg(
        "limit", DEFAULT_PAGE_SIZE, 1, current_app.config["MAX_PAGE_SIZE"]
    )

    with _session() as session:
        candidates = GuideRepository(session).search_candidates(terms, **filters)
        scored = []
        for guide in candidates:
            score = score_fields(
                terms,
                title=guide.title,
                description=guide.description,
                area=guide.area,
                tags=guide.tag_names,
                types=[*guide.object_types, *guide.variable_types],
                body=guide.body,
            )
            if score > 0:
                scored.append((score, guide))
        scored.sort(key=lambda s: (-s[0], s[1].title.lower(), s[1].path))
        hits = [{**_summary(guide), "score": score} for score, guide in scored]

    logger.info(
        "Search served",
        extra={"query": query, "terms": terms, "hits": len(hits)},
    )
    return jsonify({"query": query, "items": hits[:limit], "total": len(hits)}), 200


@bp.get("/areas")
def list_areas() -> tuple[Response, int]:
    with _session() as session:
        counts = GuideRepository(session).area_counts()
    return jsonify({
        "items": [{"area": area, "count": count} for area, count in counts.items()]
    }), 200


@bp.get("/tags")
def list_tags() -> tuple[Response, int]:
    with _session() as session:
        counts = GuideRepository(session).tag_counts()
    return jsonify({
        "items": [{"tag": tag, "count": count} for tag, count in counts.items()]
    }), 200


@bp.get("/health")
def health() -> tuple[Response, int]:
    try:
        with _session() as session:
            session.execute(text("SELECT 1"))
        catalog_ok = True
    except SQLAlchemyError:
        logger.exception("Catalog health check failed")
        catalog_ok = False

    status = "healthy" if catalog_ok else "unhealthy"
    code = 200 if catalog_ok else 503

    return jsonify({
        "status": status,
        "checks": {"catalog": "ok" if catalog_ok else "unreachable"},
    }), code
