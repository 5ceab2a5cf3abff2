"""Read file directive targets into text blocks with inline error markers."""

import logging
from pathlib import Path
from typing import Optional, Union

from .paths import PathError, PathResolutionError, resolve_path
from .serializer import DirectorySerializer

logger = logging.getLogger(__name__)


class PathReader:
    """Turn a directive path into text."""

    def __init__(self, serializer: Optional[DirectorySerializer] = None):
        self.serializer = serializer or DirectorySerializer()

    def read(
        self,
        body: str,
        root: Optional[Union[str, Path]] = None,
        with_header: bool = True,
    ) -> str:
        """
        Read a file or directory for a file:/content: directive.

        Args:
            body: Path text from the directive
            root: Root directory for relative paths
            with_header: Prefix "File: "/"Directory: " headers (file:) or
                return raw content (content:)

        Returns:
            The file content or serialized directory

        Raises:
            PathResolutionError: If the path is rejected or cannot be read
        """
        target = body.strip()
        path = resolve_path(target, root)

        try:
            if path.is_file():
                content = path.read_text(encoding="utf-8", errors="replace")
                return f"File: {target}\n{content}\n\n" if with_header else content

            if path.is_dir():
                content = self.serializer.serialize(path)
                return f"Directory: {target}/\n{content}" if with_header else content

            if not path.exists():
                raise FileNotFoundError(str(path))
        except FileNotFoundError:
            raise PathResolutionError(PathError.NOT_FOUND, target)
        except PermissionError:
            raise PathResolutionError(PathError.PERMISSION_DENIED, target)
        except ValueError as e:
            logger.debug(f"Invalid path '{target}': {e}")
            raise PathResolutionError(PathError.OTHER, target)
        except OSError as e:
            logger.debug(f"Error accessing '{path}': {e}")
            raise PathResolutionError(PathError.OTHER, target)

        raise PathResolutionError(PathError.UNSUPPORTED_TYPE, target)

    def read_block(
        self,
        body: str,
        root: Optional[Union[str, Path]] = None,
        with_header: bool = True,
    ) -> str:
        """
        Read like read(), rendering failures as an inline error marker.

        A single bad path never aborts formatting of the rest of a template.
        """
        try:
            return self.read(body, root, with_header)
        except PathResolutionError as e:
            logger.warning(f"Could not read '{e.path}': {e}")
            return format_path_error(e)


def format_path_error(error: PathResolutionError) -> str:
    """Render a path failure as the inline text that replaces the token."""
    if error.kind in (PathError.NO_ROOT, PathError.TRAVERSAL):
        return f"[Error: {error}]"
    if error.kind == PathError.NOT_FOUND:
        return f"[Path not found: {error.path}]"
    if error.kind == PathError.PERMISSION_DENIED:
        return f"[Permission denied: {error.path}]"
    if error.kind == PathError.UNSUPPORTED_TYPE:
        return f"[Unsupported path type: {error.path}]"
    return f"[Error accessing path: {error.path}]"
