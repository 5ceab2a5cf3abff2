"""Placeholder formatting system for prompt templates.

This module resolves {{...}} placeholders in prompt templates: standard
context values (input, selection, clipboard, ...) with short aliases,
fallback chains ({{selection|clipboard}}), property paths
({{items.0.name}}) and file:/content:/option: directives.
"""

from .models import (
    Directive,
    FormatResult,
    PlaceholderKey,
    PlaceholderUsage,
    Segment,
    Token,
)
from .syntax import DEFAULT_KEY_TABLE, MAX_RESOLUTION_PASSES, KeyTable
from .parser import TokenScanner
from .values import build_effective_map, get_property_by_path
from .formatter import PlaceholderFormatter, format_placeholders
from .usage import UsageInspector
from .composer import build_prompt_content, generate_placeholders

__all__ = [
    "Directive",
    "FormatResult",
    "PlaceholderKey",
    "PlaceholderUsage",
    "Segment",
    "Token",
    "DEFAULT_KEY_TABLE",
    "MAX_RESOLUTION_PASSES",
    "KeyTable",
    "TokenScanner",
    "build_effective_map",
    "get_property_by_path",
    "PlaceholderFormatter",
    "format_placeholders",
    "UsageInspector",
    "build_prompt_content",
    "generate_placeholders",
]
