"""Serialize a directory tree into a text blob."""

import logging
from pathlib import Path
from typing import Optional, Union

from .ignore import IgnoreRules, IgnoreRulesCache, is_binary_file

logger = logging.getLogger(__name__)


class DirectorySerializer:
    """Render a directory depth-first as "File:"/"Directory:" blocks.

    Output format:
        Directory: <rel>/\\n
        File: <rel>\\n<content>\\n\\n
        File: <rel> (content ignored)\\n\\n
    """

    def __init__(self, ignore_cache: Optional[IgnoreRulesCache] = None):
        self.ignore_cache = ignore_cache or IgnoreRulesCache()

    def serialize(self, directory: Union[str, Path]) -> str:
        """
        Serialize a directory.

        Symbolic links inside the tree are skipped, so the output never
        leaves the directory and never loops.

        Args:
            directory: Absolute path of the directory

        Returns:
            Concatenated entry blocks, entries sorted by name
        """
        base = Path(directory)
        layers = [(base, self.ignore_cache.get(base))]
        chunks: list[str] = []
        self._serialize_into(base, base, layers, chunks)
        return "".join(chunks)

    def _serialize_into(
        self,
        base: Path,
        current: Path,
        layers: list[tuple[Path, IgnoreRules]],
        chunks: list[str],
    ):
        try:
            entries = sorted(current.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning(f"Error reading directory {current}: {e}")
            relative = current.relative_to(base).as_posix()
            chunks.append(f"Error reading directory: {relative}\n\n")
            return

        for entry in entries:
            relative = entry.relative_to(base).as_posix()
            try:
                if entry.is_symlink():
                    logger.debug(f"Skipping symbolic link {entry}")
                    continue

                is_dir = entry.is_dir()
                if self._is_ignored(entry, is_dir, layers):
                    if not is_dir:
                        chunks.append(f"File: {relative} (content ignored)\n\n")
                    continue

                if is_dir:
                    chunks.append(f"Directory: {relative}/\n")
                    nested = self.ignore_cache.get_nested(entry)
                    entry_layers = [*layers, (entry, nested)] if len(nested) else layers
                    self._serialize_into(base, entry, entry_layers, chunks)
                elif is_binary_file(entry):
                    chunks.append(f"File: {relative} (content ignored)\n\n")
                else:
                    content = entry.read_text(encoding="utf-8", errors="replace")
                    chunks.append(f"File: {relative}\n{content}\n\n")
            except OSError as e:
                logger.warning(f"Could not read item {entry}: {e}")
                chunks.append(f"File: {relative} (content ignored)\n\n")

    @staticmethod
    def _is_ignored(entry: Path, is_dir: bool, layers: list[tuple[Path, IgnoreRules]]) -> bool:
        """Apply each .gitignore layer relative to its own directory; deeper layers win."""
        ignored = False
        for directory, rules in layers:
            verdict = rules.match(entry.relative_to(directory).as_posix(), is_dir=is_dir)
            if verdict is not None:
                ignored = verdict
        return ignored
