"""Build formatter components from application settings."""

from typing import Optional

from .config import Settings, settings as default_settings
from .files import DirectorySerializer, IgnoreRulesCache, PathReader
from .placeholders import PlaceholderFormatter


def create_formatter(config: Optional[Settings] = None) -> PlaceholderFormatter:
    """
    Create a formatter whose directory serializer honours configured ignores.

    Args:
        config: Settings to use (module settings if not provided)

    Returns:
        A new PlaceholderFormatter
    """
    config = config or default_settings
    ignore_cache = IgnoreRulesCache(
        extra_patterns=config.extra_ignore_patterns,
        extra_directories=config.extra_ignore_directories,
    )
    reader = PathReader(DirectorySerializer(ignore_cache))
    return PlaceholderFormatter(reader=reader)
