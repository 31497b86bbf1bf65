from __future__ import annotations

from pathlib import Path

import pytest

from agentrules.core.config.manager import coerce_env_value
from agentrules.core.utils.io import iter_yaml_files
from agentrules.core.utils.merge import deep_merge, merge_arrays
from agentrules.core.utils.text import parse_frontmatter

pytestmark = pytest.mark.fast


class TestMerge:
    def test_nested_mappings_merge_without_mutation(self) -> None:
        base = {"paths": {"rules_dir": "rules", "agents_dir": "agents"}}
        override = {"paths": {"rules_dir": ".claude/rules"}}

        merged = deep_merge(base, override)

        assert merged == {"paths": {"rules_dir": ".claude/rules", "agents_dir": "agents"}}
        assert base["paths"]["rules_dir"] == "rules"

    @pytest.mark.parametrize(
        ("override", "expected"),
        [
            (["qa"], ["qa"]),
            (["+", "pytest"], ["test", "tdd", "pytest"]),
            (["=", "qa"], ["qa"]),
            ([], ["test", "tdd"]),
        ],
    )
    def test_list_markers(self, override, expected) -> None:
        assert merge_arrays(["test", "tdd"], override) == expected

    def test_marker_without_lower_layer_is_dropped(self) -> None:
        assert deep_merge({}, {"ignore": ["+", "NOTES.md"]}) == {"ignore": ["NOTES.md"]}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        (" FALSE ", False),
        ("42", 42),
        ("-1.5", -1.5),
        ('["a", "b"]', ["a", "b"]),
        ("[not json", "[not json"),
        (" DEBUG ", "DEBUG"),
    ],
)
def test_coerce_env_value(raw: str, expected) -> None:
    assert coerce_env_value(raw) == expected


def test_iter_yaml_files_prefers_yaml_suffix(tmp_path: Path) -> None:
    for name in ("b.yml", "b.yaml", "a.yml", ".hidden.yaml", "notes.txt"):
        (tmp_path / name).write_text("{}", encoding="utf-8")

    assert [p.name for p in iter_yaml_files(tmp_path)] == ["a.yml", "b.yaml"]
    assert iter_yaml_files(tmp_path / "missing") == []


class TestFrontmatter:
    def test_header_and_body(self) -> None:
        doc = parse_frontmatter("---\nname: planner\ntools: [Read]\n---\n\n# Planner\n")

        assert doc.frontmatter == {"name": "planner", "tools": ["Read"]}
        assert doc.content.strip() == "# Planner"

    def test_no_header(self) -> None:
        doc = parse_frontmatter("# Just markdown\n")

        assert doc.frontmatter == {}
        assert doc.content == "# Just markdown\n"

    def test_bom_and_crlf(self) -> None:
        doc = parse_frontmatter("\ufeff---\r\nname: x\r\n---\r\nbody")

        assert doc.frontmatter == {"name": "x"}
        assert doc.content == "body"

    def test_non_mapping_header(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            parse_frontmatter("---\n- a\n---\n")
