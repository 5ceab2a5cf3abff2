"""Filesystem access for file:/content: directives.

Paths are confined to a caller-supplied root directory; directories are
serialized with ignore rules applied.
"""

from .paths import PathError, PathResolutionError, resolve_path
from .ignore import IgnoreRules, IgnoreRulesCache, is_binary_file
from .serializer import DirectorySerializer
from .reader import PathReader, format_path_error

__all__ = [
    "PathError",
    "PathResolutionError",
    "resolve_path",
    "IgnoreRules",
    "IgnoreRulesCache",
    "is_binary_file",
    "DirectorySerializer",
    "PathReader",
    "format_path_error",
]
