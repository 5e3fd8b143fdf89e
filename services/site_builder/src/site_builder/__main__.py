"""Entry point: python -m site_builder [ROOT] [--out DIR]."""

import argparse
import logging
import sys
from collections.abc import Sequence

from corpus.config import CorpusConfig
from corpus.errors import CorpusNotFoundError
from corpus.loader import load_corpus

from site_builder.builder import SiteBuilder
from site_builder.config import SiteBuilderConfig
from site_builder.log import setup_logging

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    config = SiteBuilderConfig()
    corpus_config = CorpusConfig()
    setup_logging(config.log_level)

    parser = argparse.ArgumentParser(
        prog="site_builder", description="Render a guide corpus to static HTML"
    )
    parser.add_argument("root", nargs="?", default=corpus_config.root)
    parser.add_argument("--out", default=config.output_dir, help="Output directory")
    parser.add_argument("--title", default=config.site_title, help="Site title")
    args = parser.parse_args(argv)

    try:
        corpus = load_corpus(
            args.root, pattern=corpus_config.pattern, exclude=corpus_config.exclude
        )
    except CorpusNotFoundError as exc:
        print(f"site_builder: {exc}", file=sys.stderr)
        return 2

    result = SiteBuilder(corpus, args.out, site_title=args.title).build()
    print(
        f"Wrote {result.pages_written} pages to {result.output_dir}"
        + (f" ({len(result.skipped)} guides skipped)" if result.skipped else "")
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
