"""Safe resolution of file directive paths against a root directory."""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class PathError(str, Enum):
    """Failure class for a file directive path."""

    NO_ROOT = "no_root"
    TRAVERSAL = "traversal"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    UNSUPPORTED_TYPE = "unsupported_type"
    OTHER = "other"


class PathResolutionError(Exception):
    """Exception raised when a path cannot be resolved or read."""

    def __init__(self, kind: PathError, path: str, message: Optional[str] = None):
        self.kind = kind
        self.path = path
        super().__init__(message or f"{kind.value}: {path}")


def resolve_path(given: str, root: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve a possibly relative path against a root directory.

    Absolute paths are returned unchanged. Relative paths must stay inside
    the root once ".." segments and symlinks are resolved.

    Args:
        given: Path text from a file directive
        root: Root directory for relative paths

    Returns:
        Absolute path

    Raises:
        PathResolutionError: NO_ROOT if a relative path has no root,
            TRAVERSAL if it escapes the root, OTHER if it cannot be resolved
    """
    trimmed = given.strip()
    logger.debug(f"Resolving path '{trimmed}' (root: {root or 'not set'})")

    if os.path.isabs(trimmed):
        return Path(trimmed)

    if not root:
        raise PathResolutionError(
            PathError.NO_ROOT,
            trimmed,
            f"Root directory not configured for relative path: {trimmed}",
        )

    try:
        root_path = Path(root).resolve()
        resolved = (root_path / trimmed).resolve()
    except (ValueError, RuntimeError, OSError) as e:
        # Embedded NUL bytes, symlink loops
        logger.debug(f"Cannot resolve '{trimmed}': {e}")
        raise PathResolutionError(PathError.OTHER, trimmed)

    if resolved != root_path and root_path not in resolved.parents:
        raise PathResolutionError(
            PathError.TRAVERSAL,
            trimmed,
            f"Path traversal detected for: {trimmed}",
        )

    logger.debug(f"Resolved relative path '{trimmed}' => '{resolved}'")
    return resolved
