"""Two-phase placeholder formatter.

1. Recursive phase: property references and chains that start with one are
   resolved repeatedly, since a property value may itself contain tokens.
   Stops at a fixpoint or after MAX_RESOLUTION_PASSES passes.
2. Final pass: standard placeholders, option/file/content directives and the
   remaining chains are resolved exactly once, left to right.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

from ..files import PathReader, PathResolutionError
from .models import Directive, FormatResult, PlaceholderKey, Segment, Token
from .parser import TokenScanner
from .syntax import (
    DEFAULT_KEY_TABLE,
    FILE_SELECTION_MARKER,
    MAX_EXPANDED_LENGTH,
    MAX_RESOLUTION_PASSES,
    TOKEN_PATTERN,
    KeyTable,
    escape_braces,
    unescape_braces,
)
from .values import build_effective_map, option_value, property_value

logger = logging.getLogger(__name__)

FILE_DIRECTIVES = (Directive.FILE, Directive.CONTENT)


@dataclass
class _Resolution:
    """State for one format call."""

    values: Mapping[str, Any]
    effective: dict[PlaceholderKey, str]
    root_dir: Optional[Union[str, Path]]
    resolve_files: bool


class PlaceholderFormatter:
    """Replace {{...}} placeholders in templates."""

    def __init__(
        self,
        key_table: KeyTable = DEFAULT_KEY_TABLE,
        reader: Optional[PathReader] = None,
        max_passes: int = MAX_RESOLUTION_PASSES,
        max_length: int = MAX_EXPANDED_LENGTH,
    ):
        """
        Initialize the formatter.

        Args:
            key_table: Standard keys and aliases
            reader: Reader for file:/content: directives (created if not provided)
            max_passes: Cap on recursive resolution passes
            max_length: Cap on text length produced by recursive expansion
        """
        if max_passes < 1:
            raise ValueError("max_passes must be at least 1")
        if max_length < 1:
            raise ValueError("max_length must be at least 1")
        self.key_table = key_table
        self.scanner = TokenScanner(key_table)
        self.reader = reader or PathReader()
        self.max_passes = max_passes
        self.max_length = max_length

    def format(
        self,
        text: str,
        values: Optional[Mapping[str, Any]] = None,
        root_dir: Optional[Union[str, Path]] = None,
        resolve_files: bool = False,
    ) -> str:
        """
        Format a template.

        Args:
            text: Template containing placeholders
            values: Standard placeholder values plus any extra properties
            root_dir: Root directory for relative file:/content: paths
            resolve_files: Read file:/content: targets; when False they stay literal

        Returns:
            The formatted text. Placeholders without a usable value are left
            exactly as written.
        """
        return self.format_detailed(text, values, root_dir, resolve_files).resolved

    def format_detailed(
        self,
        text: str,
        values: Optional[Mapping[str, Any]] = None,
        root_dir: Optional[Union[str, Path]] = None,
        resolve_files: bool = False,
    ) -> FormatResult:
        """Format a template and report passes, warnings and unresolved tokens."""
        if not text:
            return FormatResult(original=text or "", resolved=text or "")

        values = values if values is not None else {}
        call = _Resolution(
            values=values,
            effective=build_effective_map(values, self.key_table),
            root_dir=root_dir,
            resolve_files=resolve_files,
        )

        current, passes, stabilized, truncated = self._resolve_recursive(text, call)

        warnings = []
        if truncated:
            message = (
                f"Placeholder expansion would exceed {self.max_length} characters, "
                "stopped before the pass that grew past it"
            )
            logger.warning(message)
            warnings.append(message)
        elif not stabilized:
            message = (
                f"Maximum placeholder recursion depth ({self.max_passes}) exceeded, "
                "some placeholders may not be fully resolved"
            )
            logger.warning(message)
            warnings.append(message)

        unresolved: list[str] = []
        current = self._splice(
            current,
            lambda token: self._evaluate_chain(token.segments, call, allow_io=resolve_files),
            unresolved,
        )

        return FormatResult(
            original=text,
            resolved=unescape_braces(current),
            passes=passes,
            stabilized=stabilized,
            unresolved=unresolved,
            warnings=warnings,
        )

    def _resolve_recursive(self, text: str, call: _Resolution) -> tuple[str, int, bool, bool]:
        """
        Resolve property-path tokens until the text stops changing.

        A pass whose output would be longer than max_length is discarded and
        the phase ends, so self-duplicating values cannot grow the text
        without bound.

        Returns:
            (text, passes run, whether a fixpoint was reached, whether the
            length cap stopped the phase)
        """
        current = text
        for passes in range(1, self.max_passes + 1):
            updated = self._splice(current, lambda token: self._resolve_recursive_token(token, call))
            if updated == current:
                return current, passes, True, False
            if len(updated) > self.max_length and len(updated) > len(current):
                return current, passes, False, True
            current = updated
        return current, self.max_passes, False, False

    def _resolve_recursive_token(self, token: Token, call: _Resolution) -> Optional[str]:
        if not self.scanner.is_recursive(token):
            return None
        # File reads wait for the final pass so each runs once
        return self._evaluate_chain(token.segments, call, allow_io=False)

    def _splice(
        self,
        text: str,
        resolve: Callable[[Token], Optional[str]],
        unresolved: Optional[list[str]] = None,
    ) -> str:
        """Rebuild text, replacing each token that resolves to a value."""
        tokens = self.scanner.scan(text)
        if not tokens:
            return text

        parts = []
        cursor = 0
        for token in tokens:
            parts.append(text[cursor : token.start_pos])
            replacement = resolve(token)
            if replacement is None:
                parts.append(token.syntax)
                if unresolved is not None:
                    unresolved.append(token.syntax)
            else:
                parts.append(replacement)
            cursor = token.end_pos
        parts.append(text[cursor:])
        return "".join(parts)

    def _evaluate_chain(
        self,
        segments: list[Segment],
        call: _Resolution,
        allow_io: bool,
    ) -> Optional[str]:
        """
        Return the first usable value in a fallback chain.

        Reaching a file:/content: segment while I/O is not allowed stops the
        chain, so the token stays verbatim and later segments never jump
        ahead of it.

        Returns:
            The winning value, or None if the token should stay literal
        """
        single = len(segments) == 1

        for segment in segments:
            if segment.directive in FILE_DIRECTIVES:
                if not allow_io:
                    return None
                value = self._read_segment(segment, call, inline_errors=single)
            elif segment.directive == Directive.OPTION:
                value = option_value(call.values, segment.reference)
            else:
                key = self.key_table.resolve_key(segment.reference)
                if key is not None:
                    value = self._standard_value(key, call, allow_io)
                else:
                    value = property_value(call.values, segment.reference)

            if value is not None:
                return value

        return None

    def _standard_value(
        self,
        key: PlaceholderKey,
        call: _Resolution,
        allow_io: bool,
    ) -> Optional[str]:
        value = call.effective.get(key)
        if value is None or not value.startswith(FILE_SELECTION_MARKER):
            return value

        # A file picked in a file browser arrives as marker + "{{file:<path>}}"
        selected = value[len(FILE_SELECTION_MARKER) :].strip()
        match = TOKEN_PATTERN.fullmatch(selected)
        if match and match.group(1) == Directive.FILE.value and allow_io:
            return self._read_segment(
                Segment(directive=Directive.FILE, reference=match.group(2).strip()),
                call,
                inline_errors=True,
            )
        return selected or None

    def _read_segment(
        self,
        segment: Segment,
        call: _Resolution,
        inline_errors: bool,
    ) -> Optional[str]:
        with_header = segment.directive == Directive.FILE
        if inline_errors:
            return escape_braces(
                self.reader.read_block(segment.reference, call.root_dir, with_header)
            )

        try:
            return escape_braces(self.reader.read(segment.reference, call.root_dir, with_header))
        except PathResolutionError as e:
            logger.debug(f"Skipping unreadable fallback '{segment.reference}': {e}")
            return None


def format_placeholders(
    text: str,
    values: Optional[Mapping[str, Any]] = None,
    root_dir: Optional[Union[str, Path]] = None,
    resolve_files: bool = False,
) -> str:
    """Format a template with a default PlaceholderFormatter."""
    return PlaceholderFormatter().format(text, values, root_dir, resolve_files)
