from __future__ import annotations

from pathlib import Path

import pytest

from agentrules.core.exceptions import DuplicateRuleError, RepositoryLoadError
from agentrules.core.rules import RuleDocument, RuleRepository, RuleScope
from helpers.trees import write_rules

pytestmark = pytest.mark.fast


def _scenario_a(root: Path) -> RuleRepository:
    write_rules(
        root,
        {"coding-style": "global style\n", "testing": "global testing\n"},
        {"rust": {"coding-style": "rust style\n"}},
    )
    return RuleRepository.load(root)


class TestLoad:
    def test_indexes_global_and_language_documents(self, tmp_path: Path) -> None:
        repo = _scenario_a(tmp_path / "rules")

        assert len(repo) == 3
        assert repo.topics() == ["coding-style", "testing"]
        assert repo.languages() == ["rust"]

        doc = repo.get("coding-style", "rust")
        assert doc is not None
        assert doc.scope is RuleScope.LANGUAGE
        assert doc.language == "rust"
        assert doc.content == "rust style\n"
        assert doc.source == tmp_path / "rules" / "languages" / "rust" / "coding-style.md"

    def test_topic_is_file_name_without_extension(self, tmp_path: Path) -> None:
        root = tmp_path / "rules"
        root.mkdir()
        (root / "hooks.txt").write_text("hooks", encoding="utf-8")

        repo = RuleRepository.load(root)

        assert repo.get("hooks") is not None

    def test_language_directory_names_are_lowercased(self, tmp_path: Path) -> None:
        write_rules(tmp_path / "rules", language_rules={"Rust": {"testing": "x"}})

        repo = RuleRepository.load(tmp_path / "rules")

        assert repo.languages() == ["rust"]
        assert repo.get("testing", "RUST") is not None

    def test_skips_dotfiles_and_ignored_names(self, tmp_path: Path) -> None:
        root = write_rules(tmp_path / "rules", {"security": "s"})
        (root / "README.md").write_text("about these rules", encoding="utf-8")
        (root / ".DS_Store").write_text("", encoding="utf-8")
        (root / ".cache").mkdir()

        repo = RuleRepository.load(root)

        assert repo.topics() == ["security"]

    def test_content_is_kept_verbatim(self, tmp_path: Path) -> None:
        content = "# Style\n\n  - keep {{ braces }} and <tags>\n\n"
        write_rules(tmp_path / "rules", {"coding-style": content})

        repo = RuleRepository.load(tmp_path / "rules")

        assert repo.get("coding-style").content == content

    def test_empty_directory_loads_empty_repository(self, tmp_path: Path) -> None:
        (tmp_path / "rules").mkdir()

        repo = RuleRepository.load(tmp_path / "rules")

        assert len(repo) == 0
        assert repo.resolve("rust", ["coding-style"]) == ()


class TestLoadErrors:
    def test_duplicate_global_topic_with_different_extensions(self, tmp_path: Path) -> None:
        root = tmp_path / "rules"
        root.mkdir()
        (root / "coding-style.md").write_text("a", encoding="utf-8")
        (root / "coding-style.txt").write_text("b", encoding="utf-8")

        with pytest.raises(DuplicateRuleError) as excinfo:
            RuleRepository.load(root)

        err = excinfo.value
        assert err.topic == "coding-style"
        assert err.language is None
        assert sorted(Path(s).name for s in err.sources) == ["coding-style.md", "coding-style.txt"]

    def test_duplicate_language_topic(self, tmp_path: Path) -> None:
        lang_dir = tmp_path / "rules" / "languages" / "go"
        lang_dir.mkdir(parents=True)
        (lang_dir / "testing.md").write_text("a", encoding="utf-8")
        (lang_dir / "testing.rst").write_text("b", encoding="utf-8")

        with pytest.raises(DuplicateRuleError) as excinfo:
            RuleRepository.load(tmp_path / "rules")

        assert excinfo.value.language == "go"
        assert excinfo.value.to_json_error()["code"] == "DuplicateRuleError"

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(RepositoryLoadError):
            RuleRepository.load(tmp_path / "nope")

    def test_root_is_a_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rules"
        path.write_text("not a dir", encoding="utf-8")

        with pytest.raises(RepositoryLoadError):
            RuleRepository.load(path)

    def test_unexpected_top_level_directory(self, tmp_path: Path) -> None:
        root = write_rules(tmp_path / "rules", {"testing": "t"})
        (root / "typescript").mkdir()

        with pytest.raises(RepositoryLoadError, match="Unexpected directory"):
            RuleRepository.load(root)

    def test_file_directly_under_languages(self, tmp_path: Path) -> None:
        root = write_rules(tmp_path / "rules", language_rules={"rust": {"testing": "t"}})
        (root / "languages" / "testing.md").write_text("stray", encoding="utf-8")

        with pytest.raises(RepositoryLoadError, match="language directory"):
            RuleRepository.load(root)

    def test_nested_directory_under_language(self, tmp_path: Path) -> None:
        root = write_rules(tmp_path / "rules", language_rules={"rust": {"testing": "t"}})
        (root / "languages" / "rust" / "extra").mkdir()

        with pytest.raises(RepositoryLoadError, match="Nested directories"):
            RuleRepository.load(root)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        root = tmp_path / "rules"
        root.mkdir()
        (root / "testing.md").write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(RepositoryLoadError):
            RuleRepository.load(root)

    def test_custom_languages_dir(self, tmp_path: Path) -> None:
        root = tmp_path / "rules"
        (root / "lang" / "go").mkdir(parents=True)
        (root / "lang" / "go" / "testing.md").write_text("go", encoding="utf-8")

        repo = RuleRepository.load(root, languages_dir="lang")

        assert repo.get("testing", "go") is not None


class TestResolve:
    def test_language_document_overrides_global(self, tmp_path: Path) -> None:
        repo = _scenario_a(tmp_path / "rules")

        result = repo.resolve("rust", ["coding-style"])

        assert [(d.topic, d.language) for d in result] == [("coding-style", "rust")]

    def test_falls_back_to_global_without_override(self, tmp_path: Path) -> None:
        repo = _scenario_a(tmp_path / "rules")

        result = repo.resolve("python", ["coding-style", "patterns"])

        assert [(d.topic, d.language) for d in result] == [("coding-style", None)]

    def test_topics_with_no_document_are_omitted(self, tmp_path: Path) -> None:
        repo = _scenario_a(tmp_path / "rules")

        result = repo.resolve("rust", ["coding-style", "patterns"])

        assert [d.content for d in result] == ["rust style\n"]

    def test_preserves_requested_topic_order(self, tmp_path: Path) -> None:
        repo = _scenario_a(tmp_path / "rules")

        forward = repo.resolve("rust", ["coding-style", "testing"])
        backward = repo.resolve("rust", ["testing", "coding-style"])

        assert [d.topic for d in forward] == ["coding-style", "testing"]
        assert [d.topic for d in backward] == ["testing", "coding-style"]

    def test_without_language_only_global_documents(self, tmp_path: Path) -> None:
        repo = _scenario_a(tmp_path / "rules")

        for language in (None, "", "   "):
            result = repo.resolve(language, ["coding-style", "testing"])
            assert all(d.scope is RuleScope.GLOBAL for d in result)
            assert [d.topic for d in result] == ["coding-style", "testing"]

    def test_language_lookup_is_case_insensitive(self, tmp_path: Path) -> None:
        repo = _scenario_a(tmp_path / "rules")

        result = repo.resolve("Rust", ["coding-style"])

        assert result[0].language == "rust"

    def test_repeated_topics_are_emitted_once(self, tmp_path: Path) -> None:
        repo = _scenario_a(tmp_path / "rules")

        result = repo.resolve(None, ["testing", "coding-style", "testing"])

        assert [d.topic for d in result] == ["testing", "coding-style"]

    def test_language_only_document_without_global(self, tmp_path: Path) -> None:
        write_rules(tmp_path / "rules", language_rules={"go": {"patterns": "go patterns"}})
        repo = RuleRepository.load(tmp_path / "rules")

        assert [d.content for d in repo.resolve("go", ["patterns"])] == ["go patterns"]
        assert repo.resolve("rust", ["patterns"]) == ()

    def test_get_is_exact_lookup(self, tmp_path: Path) -> None:
        repo = _scenario_a(tmp_path / "rules")

        assert repo.get("testing", "rust") is None
        assert repo.get("testing") is not None


class TestFromDocuments:
    def test_rejects_duplicate_keys(self) -> None:
        docs = [
            RuleDocument.global_rule("testing", "a"),
            RuleDocument.global_rule("testing", "b"),
        ]

        with pytest.raises(DuplicateRuleError):
            RuleRepository.from_documents(docs)

    def test_same_topic_different_scopes_is_not_a_duplicate(self) -> None:
        repo = RuleRepository.from_documents([
            RuleDocument.global_rule("testing", "a"),
            RuleDocument.language_rule("testing", "rust", "b"),
            RuleDocument.language_rule("testing", "go", "c"),
        ])

        assert len(repo) == 3

    def test_documents_are_ordered_global_first(self) -> None:
        repo = RuleRepository.from_documents([
            RuleDocument.language_rule("testing", "rust", "b"),
            RuleDocument.global_rule("security", "s"),
            RuleDocument.global_rule("testing", "a"),
        ])

        assert [(d.topic, d.language) for d in repo.documents()] == [
            ("security", None),
            ("testing", None),
            ("testing", "rust"),
        ]

    def test_repository_is_read_only(self) -> None:
        repo = RuleRepository.from_documents([RuleDocument.global_rule("testing", "a")])

        with pytest.raises(TypeError):
            repo._documents[("x", None)] = RuleDocument.global_rule("x", "y")  # type: ignore[index]


class TestRuleDocument:
    def test_language_rule_requires_language(self) -> None:
        with pytest.raises(ValueError):
            RuleDocument(topic="testing", scope=RuleScope.LANGUAGE, content="x")

    def test_global_rule_rejects_language(self) -> None:
        with pytest.raises(ValueError):
            RuleDocument(topic="testing", scope=RuleScope.GLOBAL, content="x", language="rust")

    def test_precedence(self) -> None:
        assert RuleDocument.language_rule("t", "rust", "x").precedence > RuleDocument.global_rule("t", "x").precedence

    def test_documents_are_frozen(self) -> None:
        doc = RuleDocument.global_rule("testing", "x")

        with pytest.raises(AttributeError):
            doc.content = "changed"  # type: ignore[misc]
