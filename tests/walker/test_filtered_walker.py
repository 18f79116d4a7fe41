"""Tests for FilteredWalker in files mode."""

import os
from pathlib import Path

import pytest

from ignorewalk.types import WalkResult
from ignorewalk.walker.filtered_walker import FilteredWalker


def test_no_rules_lists_every_visible_file(make_tree, listing):
    root = make_tree(
        {
            "a.txt": "a",
            "b.log": "b",
            ".hidden": "h",
            "sub/c.txt": "c",
            "sub/deeper/d.txt": "d",
            "empty/": "",
        }
    )
    assert listing(FilteredWalker(), root) == ["a.txt", "b.log", "sub/c.txt", "sub/deeper/d.txt"]


def test_results_are_files(make_tree):
    root = make_tree({"a.txt": "a"})
    results = list(FilteredWalker().walk(root))
    assert results == [WalkResult(root / "a.txt", False)]


def test_files_come_before_subdirectories_and_children_are_sorted(make_tree, listing):
    root = make_tree({"b/x.txt": "", "a/x.txt": "", "z.txt": "", "c.txt": ""})
    assert listing(FilteredWalker(), root) == ["c.txt", "z.txt", "a/x.txt", "b/x.txt"]


def test_rule_file_excludes_matching_files(make_tree, listing):
    root = make_tree({".gitignore": "*.log\n", "a.txt": "", "b.log": "", "sub/c.log": "", "sub/d.txt": ""})
    walker = FilteredWalker(ignore_file_name=".gitignore")
    assert listing(walker, root) == ["a.txt", "sub/d.txt"]


def test_without_rule_file_name_rule_files_are_plain_files(make_tree, listing):
    root = make_tree({"rules": "*.log\n", "b.log": ""})
    assert listing(FilteredWalker(), root) == ["b.log", "rules"]


def test_rule_files_are_not_listed_by_default(make_tree, listing):
    root = make_tree({"rules": "*.log\n", "a.txt": "", "sub/rules": "", "sub/b.txt": ""})
    walker = FilteredWalker(ignore_file_name="rules")
    assert listing(walker, root) == ["a.txt", "sub/b.txt"]


def test_include_ignore_files(make_tree, listing):
    root = make_tree({"rules": "*.log\n", "a.txt": "", "b.log": "", "sub/rules": "*.txt\n", "sub/c.txt": ""})
    walker = FilteredWalker(ignore_file_name="rules", include_ignore_files=True)
    assert listing(walker, root) == ["a.txt", "rules", "sub/rules"]


def test_rule_file_can_exclude_itself(make_tree, listing):
    root = make_tree({"rules": "rules\n", "a.txt": ""})
    walker = FilteredWalker(ignore_file_name="rules", include_ignore_files=True)
    assert listing(walker, root) == ["a.txt"]


def test_later_negation_overrides_earlier_exclusion(make_tree, listing):
    root = make_tree({"rules": "*.log\n!keep.log\n", "a.log": "", "keep.log": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["keep.log"]


def test_later_exclusion_overrides_earlier_negation(make_tree, listing):
    root = make_tree({"rules": "!keep.log\n*.log\n", "a.log": "", "keep.log": "", "a.txt": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["a.txt"]


def test_directory_only_rule_never_excludes_a_file(make_tree, listing):
    root = make_tree({"rules": "build/\n", "build": "a file named build", "sub/build/out.o": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["build"]


def test_excluded_directory_is_not_listed(make_tree, listing):
    root = make_tree({"rules": "a/\n", "a/x.txt": "", "a/deep/y.txt": "", "b.txt": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["b.txt"]


def test_negated_rule_reincludes_file_in_excluded_directory(make_tree, listing):
    root = make_tree({"rules": "a/\n!a/x.txt\n", "a/x.txt": "", "a/y.txt": "", "a/sub/x.txt": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["a/x.txt"]


def test_unanchored_negation_reincludes_at_any_depth(make_tree, listing):
    root = make_tree({"rules": "a/\n!x.txt\n", "a/x.txt": "", "a/y.txt": "", "a/sub/x.txt": "", "a/sub/y.txt": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["a/x.txt", "a/sub/x.txt"]


def test_negated_rule_below_the_exclusion_cannot_reinclude(make_tree, listing):
    root = make_tree({"rules": "!a/x.txt\na/\n", "a/x.txt": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == []


def test_rule_files_inside_excluded_directories_are_not_read(make_tree, listing):
    root = make_tree({"rules": "a/\n!a/keep.txt\n", "a/rules": "!*\n", "a/keep.txt": "", "a/other.txt": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["a/keep.txt"]


def test_rules_only_apply_inside_their_directory(make_tree, listing):
    root = make_tree(
        {
            "a/rules": "*.txt\n",
            "a/x.txt": "",
            "a/deep/y.txt": "",
            "b/x.txt": "",
            "x.txt": "",
        }
    )
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["x.txt", "b/x.txt"]


def test_deeper_rules_outrank_ancestor_rules(make_tree, listing):
    root = make_tree(
        {
            "rules": "*.txt\n",
            "keep.txt": "",
            "sub/rules": "!keep.txt\n",
            "sub/keep.txt": "",
            "sub/other.txt": "",
        }
    )
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["sub/keep.txt"]


def test_anchored_rule_only_matches_below_declaring_directory(make_tree, listing):
    root = make_tree({"rules": "/build\n", "build/out.o": "", "src/build/gen.c": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["src/build/gen.c"]


def test_sibling_rules_do_not_leak(make_tree, listing):
    root = make_tree(
        {
            "a/rules": "*.log\n",
            "a/one.log": "",
            "b/two.log": "",
            "c/three.log": "",
        }
    )
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["b/two.log", "c/three.log"]


def test_explicit_patterns(make_tree, listing):
    root = make_tree({"a.log": "", "b.txt": "", "sub/c.log": ""})
    walker = FilteredWalker(ignore_patterns=["*.log"])
    assert listing(walker, root) == ["b.txt"]


def test_explicit_patterns_rank_below_root_rule_file(make_tree, listing):
    root = make_tree({"rules": "!a.log\n", "a.log": "", "b.log": ""})
    walker = FilteredWalker(ignore_file_name="rules", ignore_patterns=["*.log"])
    assert listing(walker, root) == ["a.log"]


def test_explicit_patterns_apply_to_every_root(make_tree, tmp_path):
    first = make_tree({"a.log": "", "a.txt": ""})
    second = tmp_path / "second"
    second.mkdir()
    (second / "b.log").write_text("")
    (second / "b.txt").write_text("")

    walker = FilteredWalker(ignore_patterns=["*.log"])
    results = [result.path for result in walker.walk_many([first, second])]
    assert results == [first / "a.txt", second / "b.txt"]


def test_depth_zero_lists_only_root_files(make_tree, listing):
    root = make_tree({"a.txt": "", "sub/b.txt": "", "sub/deeper/c.txt": ""})
    assert listing(FilteredWalker(depth=0), root) == ["a.txt"]


def test_depth_limits_descent(make_tree, listing):
    root = make_tree({"a.txt": "", "sub/b.txt": "", "sub/deeper/c.txt": "", "sub/deeper/most/d.txt": ""})
    assert listing(FilteredWalker(depth=1), root) == ["a.txt", "sub/b.txt"]
    assert listing(FilteredWalker(depth=2), root) == ["a.txt", "sub/b.txt", "sub/deeper/c.txt"]


def test_negative_depth_is_rejected():
    with pytest.raises(ValueError, match="depth must be non-negative"):
        FilteredWalker(depth=-1)


@pytest.mark.parametrize(
    "options,expected",
    [
        ({}, ["visible.txt", "sub/file.txt"]),
        ({"hidden": True}, [".env", "sub/.secret"]),
        ({"force": True}, [".env", "visible.txt", ".config/settings", "sub/.secret", "sub/file.txt"]),
        ({"force": True, "hidden": True}, [".env", "visible.txt", ".config/settings", "sub/.secret", "sub/file.txt"]),
    ],
)
def test_hidden_selection(make_tree, listing, options, expected):
    root = make_tree(
        {
            ".env": "",
            ".config/settings": "",
            "visible.txt": "",
            "sub/.secret": "",
            "sub/file.txt": "",
        }
    )
    assert listing(FilteredWalker(**options), root) == expected


def test_walk_is_idempotent(make_tree, listing):
    root = make_tree({"rules": "*.o\n!keep.o\nbuild/\n", "a.o": "", "keep.o": "", "build/x": "", "src/y.c": ""})
    walker = FilteredWalker(ignore_file_name="rules")
    assert listing(walker, root) == listing(walker, root)


def test_walk_is_lazy(make_tree):
    root = make_tree({"a.txt": "", "b.txt": "", "sub/c.txt": ""})
    results = FilteredWalker().walk(root)
    assert next(results).path == root / "a.txt"


def test_relative_root_keeps_its_form(make_tree, monkeypatch):
    root = make_tree({"rules": "*.log\n", "a.txt": "", "b.log": "", "sub/c.txt": ""})
    monkeypatch.chdir(root.parent)

    walker = FilteredWalker(ignore_file_name="rules")
    results = [result.path for result in walker.walk("project")]

    assert results == [Path("project/a.txt"), Path("project/sub/c.txt")]


def test_dot_root(make_tree, monkeypatch):
    root = make_tree({"a.txt": "", "sub/b.txt": ""})
    monkeypatch.chdir(root)

    results = [result.path for result in FilteredWalker().walk(".")]

    assert results == [Path("a.txt"), Path("sub/b.txt")]


def test_relative_root_with_deep_tree(make_tree, monkeypatch):
    root = make_tree({"sub/deeper/a.txt": "", "sub/b.txt": ""})
    monkeypatch.chdir(root.parent)

    results = [result.path for result in FilteredWalker().walk("project")]

    assert results == [Path("project/sub/b.txt"), Path("project/sub/deeper/a.txt")]
    assert not any(path.is_absolute() for path in results)


@pytest.mark.skipif(os.name == "nt", reason="form feed is not allowed in Windows file names")
def test_form_feed_in_rule_names_one_file(make_tree, listing):
    root = make_tree({"rules": "a\x0cb\n", "a": "", "a\x0cb": "", "c": ""})
    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["a", "c"]


def test_root_with_regex_characters(tmp_path, listing):
    root = tmp_path / "odd.dir+(1)"
    (root / "sub").mkdir(parents=True)
    (root / "rules").write_text("*.log\n")
    (root / "a.log").write_text("")
    (root / "sub" / "b.txt").write_text("")

    assert listing(FilteredWalker(ignore_file_name="rules"), root) == ["sub/b.txt"]


class TestFileRoot:
    def test_kept_file_is_reported(self, make_tree):
        root = make_tree({"a.txt": ""})
        results = list(FilteredWalker(ignore_patterns=["*.log"]).walk(root / "a.txt"))
        assert results == [WalkResult(root / "a.txt", False)]

    def test_excluded_file_is_not_reported(self, make_tree):
        root = make_tree({"a.log": ""})
        assert list(FilteredWalker(ignore_patterns=["*.log"]).walk(root / "a.log")) == []

    def test_excluded_file_with_ignored(self, make_tree):
        root = make_tree({"a.log": "", "a.txt": ""})
        walker = FilteredWalker(ignore_patterns=["*.log"], ignored=True)
        assert [r.path for r in walker.walk(root / "a.log")] == [root / "a.log"]
        assert list(walker.walk(root / "a.txt")) == []

    def test_patterns_are_anchored_at_containing_directory(self, make_tree):
        root = make_tree({"sub/a.log": ""})
        walker = FilteredWalker(ignore_patterns=["/a.log"])
        assert list(walker.walk(root / "sub" / "a.log")) == []

    def test_rule_file_root_is_skipped(self, make_tree):
        root = make_tree({"rules": "*.log\n"})
        assert list(FilteredWalker(ignore_file_name="rules").walk(root / "rules")) == []
        walker = FilteredWalker(ignore_file_name="rules", include_ignore_files=True)
        assert [r.path for r in walker.walk(root / "rules")] == [root / "rules"]

    def test_rule_file_next_to_file_root_is_not_read(self, make_tree):
        root = make_tree({"rules": "*.log\n", "a.log": ""})
        results = list(FilteredWalker(ignore_file_name="rules").walk(root / "a.log"))
        assert [r.path for r in results] == [root / "a.log"]

    def test_hidden_file_root(self, make_tree):
        root = make_tree({".env": ""})
        assert list(FilteredWalker().walk(root / ".env")) == []
        assert len(list(FilteredWalker(force=True).walk(root / ".env"))) == 1

    def test_relative_file_root(self, make_tree, monkeypatch):
        root = make_tree({"a.txt": ""})
        monkeypatch.chdir(root)
        assert [r.path for r in FilteredWalker().walk("a.txt")] == [Path("a.txt")]


def test_os_path_like_and_string_roots_agree(make_tree):
    root = make_tree({"a.txt": "", "sub/b.txt": ""})
    walker = FilteredWalker()
    assert list(walker.walk(root)) == list(walker.walk(os.fspath(root)))
