"""Documentation hygiene checks.

Each check takes a loaded Corpus and returns findings. Checks never
modify the corpus and never depend on each other.
"""

import re
from collections import defaultdict
from collections.abc import Callable, Iterable
from pathlib import PurePosixPath

from corpus.documents.model import Document, resolve_target
from corpus.enums import ALL_OBJECT_TYPES, Severity
from corpus.loader import Corpus

from doc_linter.findings import Finding

Check = Callable[[Corpus], list[Finding]]

_WHITESPACE_RE = re.compile(r"\s+")


def check_front_matter(corpus: Corpus) -> list[Finding]:
    """Every Markdown file must carry valid front matter."""
    return [
        Finding(
            rule="front-matter",
            severity=Severity.ERROR,
            path=error.path,
            line=error.line,
            message=error.message,
        )
        for error in corpus.errors
    ]


def check_fence_language(corpus: Corpus) -> list[Finding]:
    """Every fenced code block must declare a language."""
    findings = []
    for doc in corpus:
        for block in doc.code_blocks:
            if not block.language:
                findings.append(
                    Finding(
                        rule="fence-language",
                        severity=Severity.ERROR,
                        path=doc.path,
                        line=block.line,
                        message="Fenced code block has no language tag",
                    )
                )
    return findings


def check_broken_links(corpus: Corpus) -> list[Finding]:
    """Internal links must point at files that exist in the repository."""
    findings = []
    for doc in corpus:
        for link in doc.links:
            if not link.is_internal or not link.path_part:
                continue
            resolved = resolve_target(doc.path, link.target)
            if resolved is not None and (corpus.root / resolved).is_file():
                continue

            if link.in_related_section:
                message = f"Related topic '{link.target}' does not exist"
            elif resolved is None:
                message = f"Link '{link.target}' points outside the repository"
            else:
                message = f"Link '{link.target}' does not resolve to a file"
            findings.append(
                Finding(
                    rule="broken-link",
                    severity=Severity.ERROR,
                    path=doc.path,
                    line=link.line,
                    message=message,
                )
            )
    return findings


def normalise_title(title: str) -> str:
    return _WHITESPACE_RE.sub(" ", title).strip().casefold()


def check_duplicate_titles(corpus: Corpus) -> list[Finding]:
    """No two guides may share a title within the same area."""
    groups: defaultdict[tuple[str, str], list[Document]] = defaultdict(list)
    for doc in corpus:
        groups[(doc.area, normalise_title(doc.title))].append(doc)

    findings = []
    for (area, _), docs in groups.items():
        if len(docs) < 2:
            continue
        for doc in docs:
            others = ", ".join(d.path for d in docs if d is not doc)
            findings.append(
                Finding(
                    rule="duplicate-title",
                    severity=Severity.ERROR,
                    path=doc.path,
                    message=(
                        f"Title '{doc.title}' is also used in area '{area}' by {others}"
                    ),
                )
            )
    return findings


def check_area_directory(corpus: Corpus) -> list[Finding]:
    """Guides under areas/<name>/ should declare area: <name>."""
    findings = []
    for doc in corpus:
        parts = PurePosixPath(doc.path).parts
        if len(parts) < 3 or parts[0] != "areas":
            continue
        expected = parts[1].lower()
        if doc.area != expected:
            findings.append(
                Finding(
                    rule="area-directory",
                    severity=Severity.WARNING,
                    path=doc.path,
                    message=(
                        f"Front matter area '{doc.area}' does not match "
                        f"directory '{expected}'"
                    ),
                )
            )
    return findings


def check_object_types(corpus: Corpus) -> list[Finding]:
    """Declared object_types should be known AL object kinds."""
    findings = []
    for doc in corpus:
        for object_type in doc.front_matter.object_types:
            if object_type.lower() not in ALL_OBJECT_TYPES:
                findings.append(
                    Finding(
                        rule="unknown-object-type",
                        severity=Severity.WARNING,
                        path=doc.path,
                        message=f"Unknown object type '{object_type}'",
                    )
                )
    return findings


def check_empty_code_blocks(corpus: Corpus) -> list[Finding]:
    findings = []
    for doc in corpus:
        for block in doc.code_blocks:
            if not block.content.strip():
                findings.append(
                    Finding(
                        rule="empty-code-block",
                        severity=Severity.WARNING,
                        path=doc.path,
                        line=block.line,
                        message="Fenced code block is empty",
                    )
                )
    return findings


CHECKS: dict[str, Check] = {
    "front-matter": check_front_matter,
    "fence-language": check_fence_language,
    "broken-link": check_broken_links,
    "duplicate-title": check_duplicate_titles,
    "area-directory": check_area_directory,
    "unknown-object-type": check_object_types,
    "empty-code-block": check_empty_code_blocks,
}


def run_checks(corpus: Corpus, rules: Iterable[str] | None = None) -> list[Finding]:
    """Run the selected checks (all by default) and return sorted findings.

    Raises ValueError for unknown rule ids.
    """
    selected = list(CHECKS) if rules is None else list(dict.fromkeys(rules))
    unknown = [rule for rule in selected if rule not in CHECKS]
    if unknown:
        raise ValueError(
            f"Unknown rule(s): {', '.join(unknown)}. "
            f"Available: {', '.join(CHECKS)}"
        )

    findings: list[Finding] = []
    for rule in selected:
        findings.extend(CHECKS[rule](corpus))
    return sorted(findings, key=Finding.sort_key)
