"""Compose full prompt text from a prompt definition and context values."""

from pathlib import Path
from typing import Any, Literal, Mapping, Optional, Union

from .formatter import PlaceholderFormatter


def generate_placeholders(keys_list: Optional[str], position: Literal["prefix", "suffix"]) -> str:
    """
    Turn a comma-separated key list into placeholder lines.

    Args:
        keys_list: e.g. "input, clipboard"
        position: "prefix" adds a trailing newline, "suffix" a leading one

    Returns:
        Newline-joined "{{key}}" tokens, or "" if no keys are given
    """
    keys: list[str] = []
    for key in (keys_list or "").split(","):
        key = key.strip()
        if key and key not in keys:
            keys.append(key)

    placeholders = "\n".join(f"{{{{{key}}}}}" for key in keys)
    if not placeholders:
        return ""
    return f"{placeholders}\n" if position == "prefix" else f"\n{placeholders}"


def build_prompt_content(
    prompt: Mapping[str, Any],
    replacements: Optional[Mapping[str, Any]] = None,
    root_dir: Optional[Union[str, Path]] = None,
    formatter: Optional[PlaceholderFormatter] = None,
) -> str:
    """
    Build the final text of a prompt.

    The prompt's "prefix" and "suffix" key lists wrap its "content"; the
    result is formatted against the prompt's own properties overlaid by the
    replacements, with file directives resolved.

    Args:
        prompt: Prompt definition (content, prefix, suffix and any properties)
        replacements: Context values such as input, selection and clipboard
        root_dir: Root directory for relative file paths
        formatter: Formatter to use (a default one if not provided)

    Returns:
        The formatted prompt text
    """
    template = (
        generate_placeholders(prompt.get("prefix"), "prefix")
        + (prompt.get("content") or "")
        + generate_placeholders(prompt.get("suffix"), "suffix")
    )
    merged = {**prompt, **(replacements or {})}
    formatter = formatter or PlaceholderFormatter()
    return formatter.format(template, merged, root_dir, resolve_files=True)
