# color_literal_highlighter/highlighting/general/utils/__init__.py
"""

Does: Provide data-file loading and topic-gated debug logging for the highlighting stack.
Returns: Public API via load_config/clear_config_cache and debug/reload_topics.
Used by: Vocabulary loaders, matcher options, Sass variables, tests.
"""

from __future__ import annotations

from .load_config import (
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
    DataDirNotFound,
    clear_config_cache,
    load_config,
    temp_data_dir,
)
from .log import (
    debug,
    reload_topics,
    topic_enabled,
)

__all__ = [
    # Config loading
    "load_config",
    "clear_config_cache",
    "temp_data_dir",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
    # Logging helpers
    "debug",
    "reload_topics",
    "topic_enabled",
]
