"""
log.py.

Does: Topic-gated debug logger controlled by COLORIZER_DEBUG_TOPICS (comma-sep or 'all').
Returns: Forwards enabled lines to the `color_literal_highlighter` logging tree.
Used by: Scanning, variable resolution, and the watch callbacks.
"""

from __future__ import annotations

import logging
import os

__all__ = ["debug", "reload_topics", "topic_enabled"]

_LOGGER_ROOT = "color_literal_highlighter"


def _load_topics() -> set[str]:
    raw = os.getenv("COLORIZER_DEBUG_TOPICS", "")
    return {t.strip().lower() for t in raw.split(",") if t.strip()}


_DEBUG_TOPICS = _load_topics()


def reload_topics() -> None:
    """Does: Reload topics from environment variable COLORIZER_DEBUG_TOPICS."""
    global _DEBUG_TOPICS
    _DEBUG_TOPICS = _load_topics()


def topic_enabled(topic: str) -> bool:
    """Does: Tell whether a topic is switched on ('all' enables every topic)."""
    topic_key = topic.lower().strip()
    return "all" in _DEBUG_TOPICS or topic_key in _DEBUG_TOPICS


def debug(msg: str, *args: object, topic: str = "scan", level: int = logging.DEBUG) -> None:
    """Does: Log `msg % args` under `<root>.<topic>` when the topic is enabled."""
    if not topic_enabled(topic):
        return
    logging.getLogger(f"{_LOGGER_ROOT}.{topic.lower().strip()}").log(level, msg, *args)
