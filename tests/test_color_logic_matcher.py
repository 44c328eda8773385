from __future__ import annotations

import logging

import pytest

from color_literal_highlighter.highlighting.color.logic import (
    PREFIX_PARSERS,
    Matcher,
    MatcherConfig,
    clear_matcher_cache,
    load_default_options,
    make_matcher,
)
from color_literal_highlighter.highlighting.color.types import ColorMatch

"""
Tests: color/logic/matcher.py

Goals:
- Options → MatcherConfig resolution ('css' / 'css_fn' shorthands, validation)
- Compiled matchers are cached by config value and invalidated explicitly
- Scan order at each column and greedy, non-overlapping left-to-right matching
"""


@pytest.fixture(autouse=True)
def _fresh_matchers():
    clear_matcher_cache()
    yield
    clear_matcher_cache()


def _scan(options, line, **kw):
    matcher = make_matcher(MatcherConfig.from_options(options))
    assert matcher is not None
    return [(m.start, m.end, m.rgb_hex) for m in matcher.scan(line, **kw)]


# ──────────────────────────────────────────────────────────────────────────────
# Options
# ──────────────────────────────────────────────────────────────────────────────

def test_defaults_come_from_data_file():
    opts = load_default_options()
    assert opts["RGB"] is True and opts["names"] is True
    cfg = MatcherConfig.from_options()
    assert cfg == MatcherConfig(names=True, hex_lengths=frozenset({3, 6}))
    assert cfg.prefixes == ()


def test_load_default_options_returns_fresh_dicts():
    load_default_options()["RGB"] = False
    assert load_default_options()["RGB"] is True


def test_css_enables_everything_but_argb():
    cfg = MatcherConfig.from_options({"css": True, "names": False})
    assert cfg.names is True
    assert cfg.hex_lengths == frozenset({3, 6, 8})
    assert cfg.rgb_fn and cfg.hsl_fn
    assert not cfg.argb
    assert cfg.prefixes == ("rgb", "rgba", "hsl", "hsla")


def test_css_fn_and_argb():
    cfg = MatcherConfig.from_options({"css_fn": True, "AARRGGBB": True})
    assert cfg.prefixes == ("0x", "rgb", "rgba", "hsl", "hsla")


def test_without_defaults():
    cfg = MatcherConfig.from_options({"RRGGBB": True}, defaults=False)
    assert cfg.hex_lengths == frozenset({6})
    assert cfg.names is False


@pytest.mark.parametrize(
    "tailwind, names, external",
    [(None, False, False), (False, False, False), (True, True, False),
     ("normal", True, False), ("lsp", False, True), ("both", True, True)],
)
def test_tailwind_modes(tailwind, names, external):
    cfg = MatcherConfig.from_options({"tailwind": tailwind})
    assert cfg.tailwind_names is names
    assert cfg.tailwind_external is external


def test_sass_option_shapes():
    assert MatcherConfig.from_options({"sass": {"enable": True}}).sass
    assert MatcherConfig.from_options({"sass": True}).sass
    assert not MatcherConfig.from_options({"sass": {"enable": False}}).sass


@pytest.mark.parametrize("options", [{"tailwind": "bogus"}, {"RGB": "yes"}, {"sass": "on"}])
def test_invalid_options_raise(options):
    with pytest.raises(ValueError):
        MatcherConfig.from_options(options)


def test_unknown_options_warn(caplog):
    with caplog.at_level(logging.WARNING):
        MatcherConfig.from_options({"mode": "background", "shiny": True})
    assert "shiny" in caplog.text
    assert "mode" not in caplog.text


# ──────────────────────────────────────────────────────────────────────────────
# Compilation & cache
# ──────────────────────────────────────────────────────────────────────────────

def test_nothing_enabled_gives_no_matcher():
    assert make_matcher(MatcherConfig(names=False, hex_lengths=frozenset())) is None


def test_matcher_cached_by_value():
    a = make_matcher(MatcherConfig.from_options({"css": True}))
    b = make_matcher(MatcherConfig.from_options({"css": True}))
    assert a is b
    clear_matcher_cache()
    assert make_matcher(MatcherConfig.from_options({"css": True})) is not a


def test_dispatch_and_trie_follow_config():
    m = Matcher(MatcherConfig.from_options({"AARRGGBB": True, "rgb_fn": True}))
    assert set(m.dispatch) == {"0x", "rgb", "rgba"}
    assert m.dispatch["0x"] is PREFIX_PARSERS["0x"]
    assert set(m.prefixes) == {"0x", "rgb", "rgba"}
    assert "Matcher(" in repr(m)


# ──────────────────────────────────────────────────────────────────────────────
# Scanning
# ──────────────────────────────────────────────────────────────────────────────

def test_default_scan():
    assert _scan(None, "color: #fff; background: red;") == [(7, 11, "ffffff"), (25, 28, "ff0000")]


def test_names_inside_words_are_skipped():
    assert _scan(None, "redundant blueberry tan-line") == []


def test_adjacent_literals_do_not_overlap():
    assert _scan(None, "#fff #000") == [(0, 4, "ffffff"), (5, 9, "000000")]
    # a literal glued to the previous one is not a match start
    assert _scan(None, "#fff#000") == [(0, 4, "ffffff")]


def test_functional_notations():
    line = "a: rgba(0,0,0,1); b: hsl(0,100%,50%); c: rgb(256,0,0)"
    assert _scan({"css": True}, line) == [(3, 16, "000000"), (21, 36, "ff0000")]


def test_argb_literal():
    assert _scan({"AARRGGBB": True}, "Color(0x80FF0000)") == [(6, 16, "800000")]


def test_tailwind_names():
    assert _scan({"tailwind": "normal"}, 'class="bg-blue-500 text-white"') == [
        (7, 18, "3b82f6"),
        (19, 29, "ffffff"),
    ]


def test_host_named_colors_replace_css_names():
    cfg = MatcherConfig.from_options(named_colors={"brand": "#123456"})
    matcher = make_matcher(cfg)
    assert [m.rgb_hex for m in matcher.scan("brand red")] == ["123456"]


def test_sass_variables_need_a_table():
    options = {"sass": True}
    line = "color: $primary;"
    assert _scan(options, line) == []
    assert _scan(options, line, variables={"primary": "112233"}) == [(7, 15, "112233")]


def test_scan_lines_yields_only_lines_with_matches():
    matcher = make_matcher(MatcherConfig.from_options())
    got = list(matcher.scan_lines(["a", "#fff", "", "red"], line_start=10))
    assert got == [
        (11, [ColorMatch(0, 4, "ffffff")]),
        (13, [ColorMatch(0, 3, "ff0000")]),
    ]


def test_color_match_helpers():
    m = ColorMatch(3, 10, "ff0080")
    assert m.length == 7
    assert m.rgb == (255, 0, 128)
