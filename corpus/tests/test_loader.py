"""Tests for corpus discovery and loading."""

from pathlib import Path

import pytest

from corpus.enums import LoadErrorKind
from corpus.errors import CorpusNotFoundError
from corpus.loader import discover, is_excluded, load_corpus


class TestDiscover:
    def test_sorted_and_recursive(self, corpus_root: Path, write_guide) -> None:
        write_guide("areas/testing/b.md")
        write_guide("areas/events/a.md")
        write_guide("top.md")

        found = [p.relative_to(corpus_root).as_posix() for p in discover(corpus_root)]
        assert found == ["areas/events/a.md", "areas/testing/b.md", "top.md"]

    def test_skips_hidden_and_excluded(self, corpus_root: Path, write_guide) -> None:
        write_guide("areas/events/a.md")
        write_guide(".github/template.md")
        write_guide("README.md")
        write_guide("drafts/wip.md")

        found = [
            p.relative_to(corpus_root).as_posix()
            for p in discover(corpus_root, exclude=["README.md", "drafts/*"])
        ]
        assert found == ["areas/events/a.md"]


class TestIsExcluded:
    def test_file_name_matches_at_any_depth(self) -> None:
        assert is_excluded("areas/testing/README.md", ["README.md"])

    def test_directory_glob(self) -> None:
        assert is_excluded("drafts/deep/wip.md", ["drafts/*"])

    def test_no_match(self) -> None:
        assert not is_excluded("areas/testing/cleanup.md", ["README.md"])


class TestLoadCorpus:
    def test_loads_documents(self, corpus_root: Path, write_guide) -> None:
        write_guide("areas/events/a.md", title="A")
        write_guide("areas/testing/b.md", title="B", area="testing")

        corpus = load_corpus(corpus_root)

        assert len(corpus) == 2
        assert [d.path for d in corpus] == ["areas/events/a.md", "areas/testing/b.md"]
        assert corpus.errors == []

    def test_broken_file_does_not_stop_loading(
        self, corpus_root: Path, write_guide
    ) -> None:
        write_guide("good.md")
        (corpus_root / "bad.md").write_text("# no front matter\n", encoding="utf-8")

        corpus = load_corpus(corpus_root)

        assert [d.path for d in corpus] == ["good.md"]
        assert len(corpus.errors) == 1
        error = corpus.errors[0]
        assert error.path == "bad.md"
        assert error.kind == LoadErrorKind.FRONT_MATTER
        assert error.line == 1

    def test_invalid_utf8_is_load_error(self, corpus_root: Path) -> None:
        (corpus_root / "latin1.md").write_bytes(b"---\ntitle: caf\xe9\n---\n")

        corpus = load_corpus(corpus_root)

        assert len(corpus) == 0
        assert corpus.errors[0].kind == LoadErrorKind.ENCODING

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CorpusNotFoundError):
            load_corpus(tmp_path / "nope")

    def test_paths_include_failed_files(self, corpus_root: Path, write_guide) -> None:
        write_guide("good.md")
        (corpus_root / "bad.md").write_text("nothing\n", encoding="utf-8")

        corpus = load_corpus(corpus_root)
        assert corpus.paths == {"good.md", "bad.md"}

    def test_hashes_are_stable(self, corpus_root: Path, write_guide) -> None:
        write_guide("a.md")
        first = load_corpus(corpus_root).documents[0].content_hash
        second = load_corpus(corpus_root).documents[0].content_hash
        assert first == second


class TestCorpusQueries:
    @pytest.fixture()
    def corpus(self, corpus_root: Path, write_guide):
        write_guide(
            "areas/testing/cleanup.md",
            title="Test Cleanup",
            area="testing",
            difficulty="beginner",
            tags=["testing", "cleanup"],
            object_types=["Codeunit"],
        )
        write_guide(
            "areas/testing/prefix.md",
            title="Test Data Prefixing",
            area="testing",
            difficulty="intermediate",
            tags=["testing"],
            object_types=["Table"],
        )
        write_guide(
            "areas/integration/sync.md",
            title="API Sync",
            area="integration",
            difficulty="advanced",
            tags=["http"],
        )
        return load_corpus(corpus_root)

    def test_get_by_slug_or_path(self, corpus) -> None:
        assert corpus.get("areas/testing/cleanup").title == "Test Cleanup"
        assert corpus.get("areas/testing/cleanup.md").title == "Test Cleanup"
        assert corpus.get("/areas/testing/cleanup").title == "Test Cleanup"
        assert corpus.get("missing") is None

    def test_areas(self, corpus) -> None:
        assert corpus.areas() == {"integration": 1, "testing": 2}

    def test_tags(self, corpus) -> None:
        assert corpus.tags() == {"cleanup": 1, "http": 1, "testing": 2}

    def test_filter_by_area_and_difficulty(self, corpus) -> None:
        docs = corpus.filter(area="Testing", difficulty="BEGINNER")
        assert [d.title for d in docs] == ["Test Cleanup"]

    def test_filter_by_tag(self, corpus) -> None:
        assert [d.title for d in corpus.filter(tag="http")] == ["API Sync"]

    def test_filter_by_object_type_case_insensitive(self, corpus) -> None:
        assert [d.title for d in corpus.filter(object_type="table")] == [
            "Test Data Prefixing"
        ]
