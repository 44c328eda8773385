from __future__ import annotations

import pytest

from color_literal_highlighter.highlighting.general.viewport import ViewportTracker, next_range


# ──────────────────────────────────────────────────────────────────────────────
# next_range (pure)
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "previous, new, expected",
    [
        (None, (10, 60), (10, 60)),  # first render
        ((0, 50), (0, 80), (0, 80)),  # near edge unchanged
        ((0, 50), (20, 50), (20, 50)),  # far edge unchanged
        ((0, 50), (30, 80), (50, 80)),  # scrolled down
        ((30, 80), (20, 70), (20, 30)),  # scrolled up
        ((0, 50), (500, 550), (500, 550)),  # long jump down
        ((500, 550), (0, 50), (0, 50)),  # long jump up
    ],
)
def test_next_range(previous, new, expected):
    assert next_range(previous, new) == expected


def test_inverted_range_is_rejected():
    with pytest.raises(ValueError):
        next_range(None, (10, 5))


# ──────────────────────────────────────────────────────────────────────────────
# ViewportTracker
# ──────────────────────────────────────────────────────────────────────────────

def test_tracker_remembers_previous_window():
    t = ViewportTracker()
    assert t.update((0, 50)) == (0, 50)
    assert t.previous == (0, 50)
    assert t.update((30, 80)) == (50, 80)
    assert t.update((25, 75)) == (25, 30)


def test_reset_forces_full_window():
    t = ViewportTracker()
    t.update((0, 50))
    t.reset()
    assert t.previous is None
    assert t.update((30, 80)) == (30, 80)
