"""Report which placeholders a template would consume, without any I/O.

Used by UI layers to decide which hint icons to show and which options
still need a choice.
"""

from typing import Any, Mapping, Optional

from .models import Directive, PlaceholderKey, PlaceholderUsage, Segment
from .parser import TokenScanner
from .syntax import DEFAULT_KEY_TABLE, KeyTable
from .values import build_effective_map, has_option_choices

FILE_DIRECTIVES = (Directive.FILE, Directive.CONTENT)


class UsageInspector:
    """Inspect templates for the placeholders they would use."""

    def __init__(self, key_table: KeyTable = DEFAULT_KEY_TABLE):
        self.key_table = key_table
        self.scanner = TokenScanner(key_table)

    def used_keys(
        self,
        text: str,
        standard_values: Optional[Mapping[str, Any]] = None,
    ) -> set[PlaceholderKey]:
        """
        Find the standard keys that would win their fallback chains.

        file:/content: tokens are skipped entirely, as are property and
        directive-qualified segments. Clipboard is read lazily by callers,
        so it wins whenever a chain reaches it.

        Args:
            text: Template to inspect
            standard_values: Values for standard placeholders

        Returns:
            Set of PlaceholderKey
        """
        used: set[PlaceholderKey] = set()
        if not text:
            return used

        effective = build_effective_map(standard_values or {}, self.key_table)

        for token in self.scanner.scan(text):
            if token.directive in FILE_DIRECTIVES:
                continue
            for segment in token.segments:
                if segment.directive is not None:
                    continue
                key = self.key_table.resolve_key(segment.reference)
                if key is None:
                    continue
                if key in effective or key == PlaceholderKey.CLIPBOARD:
                    used.add(key)
                    break

        return used

    def used_option_keys(
        self,
        text: str,
        values: Optional[Mapping[str, Any]] = None,
    ) -> list[str]:
        """
        Find option paths that would be consulted.

        An option segment in a chain is reached only when every standard
        segment before it is empty. Only options holding a non-empty list or
        mapping of choices are reported.

        Returns:
            Option paths, deduplicated in first-seen order
        """
        found: list[str] = []
        if not text:
            return found

        values = values or {}
        effective = build_effective_map(values, self.key_table)

        for token in self.scanner.scan(text):
            if token.directive in FILE_DIRECTIVES:
                continue
            segments = token.segments
            for index, segment in enumerate(segments):
                if segment.directive != Directive.OPTION:
                    continue
                if any(self._has_standard_value(prev, effective) for prev in segments[:index]):
                    break
                if has_option_choices(values, segment.reference) and segment.reference not in found:
                    found.append(segment.reference)
                break

        return found

    def has_file_directives(self, text: str) -> bool:
        return any(
            segment.directive in FILE_DIRECTIVES
            for token in self.scanner.scan(text or "")
            for segment in token.segments
        )

    def inspect(self, text: str, values: Optional[Mapping[str, Any]] = None) -> PlaceholderUsage:
        """Collect keys, option paths and file usage in one report."""
        keys = self.used_keys(text, values)
        return PlaceholderUsage(
            keys=[key for key in PlaceholderKey if key in keys],
            option_keys=self.used_option_keys(text, values),
            uses_files=self.has_file_directives(text),
        )

    def _has_standard_value(self, segment: Segment, effective: dict[PlaceholderKey, str]) -> bool:
        if segment.directive is not None:
            return False
        key = self.key_table.resolve_key(segment.reference)
        return key is not None and key in effective
