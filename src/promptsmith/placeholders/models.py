"""Data models for the placeholder formatting system."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class PlaceholderKey(str, Enum):
    """Standard context placeholder."""

    INPUT = "input"  # Text typed by the user
    SELECTION = "selection"  # Currently selected text
    CLIPBOARD = "clipboard"
    CURRENT_APP = "currentApp"  # Frontmost application name
    ALL_APP = "allApp"  # Names of all running applications
    BROWSER_CONTENT = "browserContent"
    NOW = "now"  # Current date and time
    PROMPT_TITLES = "promptTitles"  # Indented list of prompt titles


class Directive(str, Enum):
    """Directive prefix that changes how a token is resolved."""

    FILE = "file"  # {{file:path}} - File or directory contents with header
    OPTION = "option"  # {{option:path}} - First entry of an option list
    CONTENT = "content"  # {{content:path}} - Raw file or directory contents


class Segment(BaseModel):
    """One element of a fallback chain."""

    reference: str  # Key, alias, property path or directive target
    directive: Optional[Directive] = None


class Token(BaseModel):
    """A {{...}} occurrence in a template."""

    syntax: str  # Exact matched text (e.g., "{{file:notes.md}}")
    directive: Optional[Directive] = None
    body: str  # Text after the directive prefix, untrimmed
    segments: list[Segment] = Field(default_factory=list)
    start_pos: int = 0  # Position in template where token starts
    end_pos: int = 0  # Position in template where token ends

    @property
    def is_chain(self) -> bool:
        return len(self.segments) > 1


class FormatResult(BaseModel):
    """Result of formatting a template."""

    original: str  # Template as given
    resolved: str  # Template with placeholders replaced
    passes: int = 0  # Recursive resolution passes that ran
    stabilized: bool = True  # False if the pass or length cap was hit before a fixpoint
    unresolved: list[str] = Field(default_factory=list)  # Tokens left verbatim
    warnings: list[str] = Field(default_factory=list)


class PlaceholderUsage(BaseModel):
    """Which placeholders a template would consume."""

    keys: list[PlaceholderKey] = Field(default_factory=list)
    option_keys: list[str] = Field(default_factory=list)
    uses_files: bool = False
