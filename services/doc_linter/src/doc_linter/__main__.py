"""Entry point: python -m doc_linter [ROOT].

Exit codes: 0 clean, 1 findings fail the run, 2 usage or corpus errors.
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from corpus.config import CorpusConfig
from corpus.errors import CorpusNotFoundError
from corpus.loader import load_corpus

from doc_linter.checks import CHECKS
from doc_linter.config import LinterConfig
from doc_linter.log import setup_logging
from doc_linter.report import FORMATTERS, build_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _parser(linter_config: LinterConfig, corpus_config: CorpusConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doc_linter",
        description="Check a guide corpus for documentation hygiene problems",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=corpus_config.root,
        help=f"Corpus root directory (default: {corpus_config.root})",
    )
    parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default=linter_config.format,
        help="Report format",
    )
    parser.add_argument(
        "--rule",
        action="append",
        dest="rules",
        metavar="ID",
        help=f"Run only this rule; repeatable. One of: {', '.join(CHECKS)}",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Extra glob of files to skip; repeatable",
    )
    parser.add_argument(
        "--fail-on-warning",
        action=argparse.BooleanOptionalAction,
        default=linter_config.fail_on_warning,
        help="Exit non-zero when only warnings are found (default: %(default)s)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    linter_config = LinterConfig()
    corpus_config = CorpusConfig()
    setup_logging(linter_config.log_level)

    args = _parser(linter_config, corpus_config).parse_args(argv)

    try:
        corpus = load_corpus(
            args.root,
            pattern=corpus_config.pattern,
            exclude=[*corpus_config.exclude, *args.exclude],
        )
        report = build_report(corpus, args.rules)
    except CorpusNotFoundError as exc:
        print(f"doc_linter: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except ValueError as exc:
        print(f"doc_linter: {exc}", file=sys.stderr)
        return EXIT_USAGE

    print(FORMATTERS[args.format](report))

    logger.info(
        "Lint finished",
        extra={
            "files_checked": report.files_checked,
            "errors": report.error_count,
            "warnings": report.warning_count,
        },
    )
    return EXIT_FAILED if report.failed(args.fail_on_warning) else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
