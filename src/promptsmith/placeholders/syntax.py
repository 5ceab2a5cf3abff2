"""Placeholder syntax definitions, patterns and the key/alias table."""

import re
from typing import Mapping, Optional, Pattern

from .models import PlaceholderKey

# {{body}}, {{file:path}}, {{option:path}}, {{content:path}}
# The first "}}" after "{{" always closes the token.
TOKEN_PATTERN: Pattern = re.compile(r"\{\{(?:(file|option|content):)?([^}]+)\}\}")

# Directive qualifier on a single chain segment (e.g., "option:tone")
SEGMENT_DIRECTIVE_PATTERN: Pattern = re.compile(r"^(file|option|content):(.+)$", re.DOTALL)

# "|" separates chain segments unless escaped as "\|"
CHAIN_SEPARATOR_PATTERN: Pattern = re.compile(r"(?<!\\)\|")

# Protected opening braces inside retrieved file content
ESCAPED_OPEN = "\\{\\{"
ESCAPED_OPEN_PATTERN: Pattern = re.compile(r"\\\{\\\{")

# Prefix a selection value carries when it names a file picked in a file browser
FILE_SELECTION_MARKER = "__IS_FINDER_SELECTION__"

# Upper bound on recursive resolution passes
MAX_RESOLUTION_PASSES = 10

# Upper bound on text length produced by the recursive phase
MAX_EXPANDED_LENGTH = 1_000_000

DEFAULT_ALIASES: dict[PlaceholderKey, str] = {
    PlaceholderKey.INPUT: "i",
    PlaceholderKey.SELECTION: "s",
    PlaceholderKey.CLIPBOARD: "c",
    PlaceholderKey.NOW: "n",
    PlaceholderKey.PROMPT_TITLES: "pt",
}


class KeyTable:
    """Maps canonical placeholder names and their short aliases to keys.

    Instances are read-only once built.
    """

    def __init__(self, aliases: Optional[Mapping[PlaceholderKey, str]] = None):
        """
        Build the table.

        Args:
            aliases: Mapping of key to alias (defaults to DEFAULT_ALIASES)

        Raises:
            ValueError: If an alias collides with a key name or another alias
        """
        aliases = DEFAULT_ALIASES if aliases is None else aliases
        self._keys: dict[str, PlaceholderKey] = {key.value: key for key in PlaceholderKey}
        self._aliases: dict[str, PlaceholderKey] = {}

        for key, alias in aliases.items():
            if alias in self._keys:
                raise ValueError(f"Alias '{alias}' collides with placeholder key '{alias}'")
            if alias in self._aliases:
                raise ValueError(
                    f"Alias '{alias}' is already used by '{self._aliases[alias].value}'"
                )
            self._aliases[alias] = PlaceholderKey(key)

    def resolve_key(self, token: str) -> Optional[PlaceholderKey]:
        """
        Resolve an alias or key name to a PlaceholderKey.

        Args:
            token: Trimmed reference text (e.g., "i" or "input")

        Returns:
            The matching key, or None if token is not a standard placeholder
        """
        if token in self._aliases:
            return self._aliases[token]
        return self._keys.get(token)

    def key_named(self, name: str) -> Optional[PlaceholderKey]:
        """Return the key whose canonical name is name; aliases do not count."""
        return self._keys.get(name)

    def is_standard(self, path: str) -> bool:
        return self.resolve_key(path) is not None

    def alias_for(self, key: PlaceholderKey) -> Optional[str]:
        for alias, target in self._aliases.items():
            if target == key:
                return alias
        return None

    @property
    def aliases(self) -> dict[str, PlaceholderKey]:
        return dict(self._aliases)


DEFAULT_KEY_TABLE = KeyTable()


def escape_braces(content: str) -> str:
    """Protect every "{{" in retrieved content from being scanned as a token."""
    return content.replace("{{", ESCAPED_OPEN)


def unescape_braces(text: str) -> str:
    return ESCAPED_OPEN_PATTERN.sub("{{", text)


def is_non_blank(value: object) -> bool:
    """True only for a string with at least one non-whitespace character."""
    return isinstance(value, str) and value.strip() != ""
