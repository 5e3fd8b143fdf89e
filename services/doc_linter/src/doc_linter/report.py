"""Lint report assembly and output formatting."""

from collections.abc import Iterable

from corpus.loader import Corpus

from doc_linter.checks import run_checks
from doc_linter.findings import LintReport


def build_report(corpus: Corpus, rules: Iterable[str] | None = None) -> LintReport:
    return LintReport(
        findings=run_checks(corpus, rules),
        files_checked=len(corpus.paths),
    )


def format_text(report: LintReport) -> str:
    """One ``path:line: severity [rule] message`` line per finding plus a summary."""
    lines = []
    for finding in report.findings:
        location = finding.path if finding.line is None else f"{finding.path}:{finding.line}"
        lines.append(
            f"{location}: {finding.severity} [{finding.rule}] {finding.message}"
        )
    lines.append(
        f"{report.files_checked} files checked: "
        f"{report.error_count} error(s), {report.warning_count} warning(s)"
    )
    return "\n".join(lines)


def format_json(report: LintReport) -> str:
    return report.model_dump_json(indent=2)


FORMATTERS = {
    "text": format_text,
    "json": format_json,
}
