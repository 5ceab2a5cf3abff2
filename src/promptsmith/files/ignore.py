"""Ignore rules for directory serialization.

Combines built-in patterns for dependency folders, build output and editor
noise with the lines of every ``.gitignore`` found from the serialized
directory upward. Patterns use gitignore-like shell globs matched with
``fnmatch``.
"""

import fnmatch
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_IGNORED_DIRECTORIES = (
    "node_modules",
    ".git",
    "dist",
    "build",
    "coverage",
    "tmp",
    "logs",
    ".cache",
    ".vscode",
    ".idea",
    "__pycache__",
    "bower_components",
    "jspm_packages",
    "*.xcodeproj",
    "*.xcworkspace",
)

DEFAULT_IGNORED_FILES = (
    ".DS_Store",
    "*.log",
    ".env",
    ".env.local",
    "*.pyc",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    ".npmrc",
    ".yarnrc",
    ".#*",
)

BINARY_EXTENSIONS = frozenset(
    {
        ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".webp", ".ico", ".svg",
        ".mp3", ".wav", ".flac", ".mp4", ".avi", ".mkv", ".mov", ".wmv",
        ".exe", ".dll", ".bin", ".iso", ".dmg", ".pkg",
        ".zip", ".rar", ".tar", ".gz", ".7z", ".bz2",
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
        ".tiktoken", ".db", ".sqlite",
    }
)


def is_binary_file(file_path: Union[str, Path]) -> bool:
    """Check if a file extension indicates binary or media content."""
    return Path(file_path).suffix.lower() in BINARY_EXTENSIONS


class IgnoreRules:
    """An ordered list of ignore patterns. Later patterns win; "!" negates."""

    def __init__(self, patterns: Iterable[str] = ()):
        self._rules: list[tuple[str, bool]] = []
        self.add(patterns)

    def add(self, patterns: Iterable[str]):
        for raw in patterns:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            negated = line.startswith("!")
            if negated:
                line = line[1:]
            if line:
                self._rules.append((line, negated))

    def __len__(self) -> int:
        return len(self._rules)

    def is_ignored(self, relative_path: str, is_dir: bool = False) -> bool:
        """
        Check a path relative to the directory the rules belong to.

        Args:
            relative_path: "/"-separated path relative to that directory
            is_dir: Whether the path itself is a directory

        Returns:
            True if the last matching rule ignores the path
        """
        return self.match(relative_path, is_dir) is True

    def match(self, relative_path: str, is_dir: bool = False) -> Optional[bool]:
        """
        Like is_ignored, but distinguish "no rule matched" from "re-included".

        Returns:
            True (ignored), False (re-included by a "!" rule) or None
        """
        parts = [part for part in relative_path.replace("\\", "/").split("/") if part]
        if not parts:
            return None

        verdict = None
        for pattern, negated in self._rules:
            if self._matches(pattern, parts, is_dir):
                verdict = not negated
        return verdict

    @classmethod
    def _matches(cls, pattern: str, parts: list[str], is_dir: bool) -> bool:
        dir_only = pattern.endswith("/")
        pattern = pattern.rstrip("/")
        # A slash before the end anchors the pattern to the rules' directory
        anchored = "/" in pattern
        segments = [segment for segment in pattern.split("/") if segment]
        if not segments:
            return False

        # A pattern that matches a directory also matches everything below it
        for end in range(len(parts), 0, -1):
            candidate_is_dir = end < len(parts) or is_dir
            if dir_only and not candidate_is_dir:
                continue
            candidate = parts[:end]
            if anchored:
                if cls._match_segments(segments, candidate):
                    return True
            elif fnmatch.fnmatchcase(candidate[-1], segments[0]):
                return True
        return False

    @classmethod
    def _match_segments(cls, segments: list[str], parts: list[str]) -> bool:
        """Match path parts one segment at a time; "**" spans any number of parts."""
        if not segments:
            return not parts
        head = segments[0]
        if head == "**":
            if len(segments) == 1:
                # Trailing "**" matches everything inside, not the directory itself
                return len(parts) > 0
            return any(
                cls._match_segments(segments[1:], parts[index:])
                for index in range(len(parts) + 1)
            )
        if not parts:
            return False
        return fnmatch.fnmatchcase(parts[0], head) and cls._match_segments(segments[1:], parts[1:])


def default_patterns(
    extra_patterns: Iterable[str] = (),
    extra_directories: Iterable[str] = (),
) -> list[str]:
    """Built-in patterns; each directory name also matches its contents."""
    patterns: list[str] = []
    for directory in (*DEFAULT_IGNORED_DIRECTORIES, *extra_directories):
        patterns.append(directory)
        patterns.append(f"{directory}/")
    patterns.extend(DEFAULT_IGNORED_FILES)
    patterns.extend(extra_patterns)
    return patterns


def find_gitignore_files(directory: Union[str, Path]) -> list[Path]:
    """Find .gitignore files from the filesystem root down to a directory."""
    found = []
    current = Path(directory).resolve()
    for candidate_dir in (current, *current.parents):
        gitignore = candidate_dir / ".gitignore"
        if gitignore.is_file():
            found.append(gitignore)
    found.reverse()
    return found


class IgnoreRulesCache:
    """Per-directory cache of IgnoreRules with explicit invalidation."""

    def __init__(
        self,
        extra_patterns: Iterable[str] = (),
        extra_directories: Iterable[str] = (),
    ):
        self._base_patterns = default_patterns(extra_patterns, extra_directories)
        self._cache: dict[Path, IgnoreRules] = {}
        self._nested: dict[Path, IgnoreRules] = {}

    def get(self, directory: Union[str, Path]) -> IgnoreRules:
        """
        Get ignore rules for a directory, reading .gitignore files once.

        Args:
            directory: Directory being serialized

        Returns:
            IgnoreRules combining built-in and .gitignore patterns
        """
        key = Path(directory).resolve()
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        rules = IgnoreRules(self._base_patterns)
        for gitignore in find_gitignore_files(key):
            _add_gitignore(rules, gitignore)

        self._cache[key] = rules
        return rules

    def get_nested(self, directory: Union[str, Path]) -> IgnoreRules:
        """
        Get the rules of a directory's own .gitignore, for a directory inside
        the tree being serialized. Patterns are relative to that directory.

        Returns:
            IgnoreRules, empty if the directory has no readable .gitignore
        """
        key = Path(directory).resolve()
        cached = self._nested.get(key)
        if cached is not None:
            return cached

        rules = IgnoreRules()
        gitignore = key / ".gitignore"
        if gitignore.is_file():
            _add_gitignore(rules, gitignore)

        self._nested[key] = rules
        return rules

    def invalidate(self, directory: Optional[Union[str, Path]] = None):
        """Drop cached rules for one directory, or all of them."""
        if directory is None:
            self._cache.clear()
            self._nested.clear()
        else:
            key = Path(directory).resolve()
            self._cache.pop(key, None)
            self._nested.pop(key, None)

    def clear(self):
        self.invalidate()

    def __len__(self) -> int:
        return len(self._cache) + len(self._nested)


def _add_gitignore(rules: IgnoreRules, gitignore: Path):
    try:
        rules.add(gitignore.read_text(encoding="utf-8").splitlines())
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Failed to read .gitignore at {gitignore}: {e}")
