"""Entry point: python -m guide_api {index,serve}.

``index`` mirrors a corpus into the catalog; ``serve`` runs the dev server.
"""

import argparse
import sys
from collections.abc import Sequence

from corpus.config import CatalogConfig, CorpusConfig
from corpus.db.base import create_db_engine, create_session_factory, init_catalog
from corpus.errors import CorpusNotFoundError
from corpus.loader import load_corpus

from guide_api.app import create_app
from guide_api.config import GuideApiConfig
from guide_api.indexer import CatalogIndexer
from guide_api.log import setup_logging


def _index(root: str, catalog_config: CatalogConfig, corpus_config: CorpusConfig) -> int:
    try:
        corpus = load_corpus(
            root, pattern=corpus_config.pattern, exclude=corpus_config.exclude
        )
    except CorpusNotFoundError as exc:
        print(f"guide_api: {exc}", file=sys.stderr)
        return 2

    engine = create_db_engine(catalog_config.url, echo=catalog_config.echo)
    try:
        init_catalog(engine)
        result = CatalogIndexer(create_session_factory(engine)).sync(corpus)
    finally:
        engine.dispose()

    print(
        f"created={result.created} updated={result.updated} "
        f"unchanged={result.unchanged} removed={result.removed} "
        f"failed={len(corpus.errors)}"
    )
    return 0


def _serve(config: GuideApiConfig, catalog_config: CatalogConfig) -> int:
    engine = create_db_engine(
        catalog_config.url, echo=catalog_config.echo, pool_pre_ping=True
    )
    init_catalog(engine)
    app = create_app(create_session_factory(engine), config)
    app.run(host=config.host, port=config.port)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    config = GuideApiConfig()
    catalog_config = CatalogConfig()
    corpus_config = CorpusConfig()
    setup_logging(config.log_level)

    parser = argparse.ArgumentParser(prog="guide_api", description="Guide catalog API")
    commands = parser.add_subparsers(dest="command", required=True)

    index = commands.add_parser("index", help="Load a corpus into the catalog")
    index.add_argument("root", nargs="?", default=corpus_config.root)

    commands.add_parser("serve", help="Run the development server")

    args = parser.parse_args(argv)
    if args.command == "index":
        return _index(args.root, catalog_config, corpus_config)
    return _serve(config, catalog_config)


if __name__ == "__main__":
    sys.exit(main())
