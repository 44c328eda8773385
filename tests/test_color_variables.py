from __future__ import annotations

import pytest

from color_literal_highlighter.highlighting.color.logic import MatcherConfig, make_matcher
from color_literal_highlighter.highlighting.color.variables import (
    Alias,
    SassVariables,
    import_candidates,
    resolve_alias,
)

"""
Tests: color/variables/sass.py

Goals:
- Declarations, aliases and comments of the buffer's own lines
- Import resolution (partials, extensions, multi-line directives) through a fake filesystem
- Watch lifecycle: registered on import, cancelled on prune / close, re-read on change
"""

MAIN = "/proj/styles/main.scss"


@pytest.fixture
def matcher():
    return make_matcher(MatcherConfig.from_options({"sass": True, "css": True}))


@pytest.fixture
def sass(fake_fs, matcher):
    changes = []
    sv = SassVariables(fake_fs, matcher, on_change=lambda: changes.append(1))
    sv.changes = changes  # type: ignore[attr-defined]
    yield sv
    sv.close()


# ──────────────────────────────────────────────────────────────────────────────
# Pure helpers
# ──────────────────────────────────────────────────────────────────────────────

def test_import_candidates():
    assert import_candidates(MAIN, "base/colors") == [
        "/proj/styles/base/colors.scss",
        "/proj/styles/base/_colors.scss",
        "/proj/styles/base/colors.sass",
        "/proj/styles/base/_colors.sass",
    ]
    assert import_candidates(MAIN, "../theme.scss") == ["/proj/theme.scss", "/proj/_theme.scss"]
    assert import_candidates(MAIN, "dir/") == []


def test_resolve_alias_is_bounded():
    merged = {"a": Alias("b"), "b": Alias("c"), "c": "112233", "x": Alias("y"), "y": Alias("x")}
    assert resolve_alias("a", merged, len(merged)) == "112233"
    assert resolve_alias("x", merged, len(merged)) is None
    assert resolve_alias("missing", merged, len(merged)) is None
    assert resolve_alias("a", merged, 1) is None


# ──────────────────────────────────────────────────────────────────────────────
# Buffer declarations
# ──────────────────────────────────────────────────────────────────────────────

def test_alias_chain_and_removal(sass):
    sass.update(MAIN, ["$a: $b;", "$b: #112233;"])
    assert sass.resolve("a") == "112233"
    assert sass.resolve("$b") == "112233"

    sass.update(MAIN, ["$a: $b;"])
    assert sass.resolve("a") is None
    assert "a" not in sass.definitions


def test_circular_aliases_stay_unresolved(sass):
    sass.update(MAIN, ["$a: $b;", "$b: $a;", "$c: red;"])
    assert dict(sass.definitions) == {"c": "ff0000"}


def test_several_declarations_per_line_and_comments(sass):
    sass.update(MAIN, ["$x: red; $y: #abc; // $z: blue;", "/* $w: #fff; */ $v: rgb(1,2,3) !default;"])
    assert dict(sass.definitions) == {"x": "ff0000", "y": "aabbcc", "v": "010203"}


def test_undecodable_values_are_ignored(sass):
    sass.update(MAIN, ["$size: 12px;", "$mix: darken($x, 10%);", "$ok: $size;"])
    assert dict(sass.definitions) == {}


def test_later_line_wins(sass):
    sass.update(MAIN, ["$a: #111;", "$a: #222;"])
    assert sass.resolve("a") == "222222"


def test_partial_update_keeps_other_lines(sass):
    sass.update(MAIN, ["$a: #111;", "$b: #222;", "$c: #333;"])
    sass.update(MAIN, ["$b: #444;"], line_start=1, line_end=2)
    assert dict(sass.definitions) == {"a": "111111", "b": "444444", "c": "333333"}


def test_definitions_snapshot_is_replaced_not_mutated(sass):
    sass.update(MAIN, ["$a: #111;"])
    before = sass.definitions
    sass.update(MAIN, ["$a: #222;"])
    assert before["a"] == "111111"
    assert sass.definitions["a"] == "222222"
    with pytest.raises(TypeError):
        sass.definitions["a"] = "000000"  # type: ignore[index]


def test_buffer_without_path(fake_fs, matcher):
    sv = SassVariables(fake_fs, matcher)
    sv.update(None, ["$a: #123;"])
    assert sv.resolve("a") == "112233"


# ──────────────────────────────────────────────────────────────────────────────
# Imports
# ──────────────────────────────────────────────────────────────────────────────

def test_import_partial(sass, fake_fs):
    fake_fs.write("/proj/styles/_vars.scss", ["$brand: #ff0000;"])
    sass.update(MAIN, ['@import "vars";', "$accent: $brand;"])

    assert sass.resolve("accent") == "ff0000"
    assert sass.imports_of(MAIN) == {"/proj/styles/_vars.scss": 1.0}
    assert sass.watched_paths == {"/proj/styles/_vars.scss"}


def test_importer_overrides_import(sass, fake_fs):
    fake_fs.write("/proj/styles/_vars.scss", ["$brand: #ff0000;"])
    sass.update(MAIN, ["@use 'vars';", "$brand: #00ff00;"])
    assert sass.resolve("brand") == "00ff00"


def test_multiline_import_list(sass, fake_fs):
    fake_fs.write("/proj/styles/a.scss", ["$a: #aaa;"])
    fake_fs.write("/proj/styles/_b.sass", ["$b: #bbb;"])
    sass.update(MAIN, ["@import", '  "a",', '  "b";', '"c";'])
    assert dict(sass.definitions) == {"a": "aaaaaa", "b": "bbbbbb"}


def test_transitive_imports(sass, fake_fs):
    fake_fs.write("/proj/styles/_theme.scss", ['@import "base/colors";', "$primary: $blue;"])
    fake_fs.write("/proj/styles/base/_colors.scss", ["$blue: #0000ff;"])
    sass.update(MAIN, ['@import "theme";'])
    assert sass.resolve("primary") == "0000ff"
    assert sass.watched_paths == {"/proj/styles/_theme.scss", "/proj/styles/base/_colors.scss"}


def test_unchanged_imports_are_not_reread(sass, fake_fs):
    fake_fs.write("/proj/styles/_vars.scss", ["$brand: #ff0000;"])
    sass.update(MAIN, ['@import "vars";'])
    sass.update(MAIN, ['@import "vars";', "$x: #000;"])
    assert fake_fs.reads.count("/proj/styles/_vars.scss") == 1


def test_removing_import_cancels_watch_and_drops_declarations(sass, fake_fs):
    fake_fs.write("/proj/styles/_vars.scss", ["$brand: #ff0000;"])
    sass.update(MAIN, ['@import "vars";'])
    watch = fake_fs.active_watches()["/proj/styles/_vars.scss"]

    sass.update(MAIN, ["$other: #fff;"])
    assert watch.cancelled
    assert sass.resolve("brand") is None
    assert sass.watched_paths == frozenset()
    assert "/proj/styles/_vars.scss" not in sass.files


def test_mutual_imports_are_swept_together(sass, fake_fs):
    fake_fs.write("/proj/styles/_a.scss", ['@import "b";', "$a: #aaa;"])
    fake_fs.write("/proj/styles/_b.scss", ['@import "a";', "$b: #bbb;"])
    sass.update(MAIN, ['@import "a";'])
    assert dict(sass.definitions) == {"a": "aaaaaa", "b": "bbbbbb"}

    sass.update(MAIN, [])
    assert fake_fs.active_watches() == {}
    assert sass.files == {"/proj/styles/main.scss"}
    assert dict(sass.definitions) == {}


def test_unreadable_import_is_torn_down(sass, fake_fs):
    fake_fs.write("/proj/styles/_vars.scss", ["$brand: #ff0000;"])
    fake_fs.unreadable.add("/proj/styles/_vars.scss")
    sass.update(MAIN, ['@import "vars";', "$x: $brand;"])
    assert sass.resolve("x") is None
    assert fake_fs.active_watches() == {}


# ──────────────────────────────────────────────────────────────────────────────
# Watches
# ──────────────────────────────────────────────────────────────────────────────

def test_watch_callback_reloads_changed_file(sass, fake_fs):
    fake_fs.write("/proj/styles/_vars.scss", ["$brand: #ff0000;"])
    sass.update(MAIN, ['@import "vars";', "$accent: $brand;"])

    fake_fs.write("/proj/styles/_vars.scss", ["$brand: #0000ff;"])
    fake_fs.fire("/proj/styles/_vars.scss")

    assert sass.resolve("accent") == "0000ff"
    assert sass.changes == [1]
    assert sass.imports_of(MAIN) == {"/proj/styles/_vars.scss": 2.0}


def test_import_back_into_buffer_file_keeps_buffer_lines(sass, fake_fs):
    fake_fs.write(MAIN, ["$x: #111111;"])
    fake_fs.write("/proj/styles/_a.scss", ['@import "main";', "$a: #aaaaaa;"])
    sass.update(MAIN, ["$x: #222222;", '@import "a";'])
    assert sass.resolve("x") == "222222"

    fake_fs.write("/proj/styles/_a.scss", ['@import "main";', "$a: #bbbbbb;"])
    fake_fs.fire("/proj/styles/_a.scss")

    assert sass.resolve("x") == "222222"
    assert sass.resolve("a") == "bbbbbb"
    assert set(fake_fs.active_watches()) == {"/proj/styles/_a.scss"}
    assert MAIN not in fake_fs.reads
    assert sass.imports_of(MAIN) == {"/proj/styles/_a.scss": 2.0}


def test_watch_callback_for_deleted_file(sass, fake_fs):
    fake_fs.write("/proj/styles/_vars.scss", ["$brand: #ff0000;"])
    sass.update(MAIN, ['@import "vars";'])

    fake_fs.delete("/proj/styles/_vars.scss")
    fake_fs.fire("/proj/styles/_vars.scss")

    assert sass.resolve("brand") is None
    assert fake_fs.active_watches() == {}
    assert sass.changes == [1]


def test_close_cancels_everything(sass, fake_fs):
    fake_fs.write("/proj/styles/_vars.scss", ["$brand: #ff0000;"])
    sass.update(MAIN, ['@import "vars";'])
    sass.close()
    assert fake_fs.active_watches() == {}
    assert dict(sass.definitions) == {}
    assert sass.imports_of(MAIN) == {}
