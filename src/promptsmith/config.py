"""Configuration management for promptsmith."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_list(name: str, default: Optional[list[str]] = None) -> list[str]:
    """Parse a comma-separated list from an environment variable."""
    raw = os.getenv(name)
    if raw:
        items = [item.strip() for item in raw.split(",") if item.strip()]
        if items:
            return items
    return list(default or [])


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    return _parse_list("CORS_ALLOW_ORIGINS", ["*"])


def _parse_root_dir() -> Optional[Path]:
    root = os.getenv("PROMPTSMITH_ROOT_DIR")
    return Path(root).expanduser() if root else None


class Settings(BaseModel):
    """Application settings."""

    # Root directory for relative file:/content: paths (unset disables them)
    root_dir: Optional[Path] = _parse_root_dir()

    # Read file:/content: targets by default (CLI and API can override)
    resolve_files: bool = os.getenv("PROMPTSMITH_RESOLVE_FILES", "false").lower() == "true"

    # Extra ignore patterns for directory serialization
    extra_ignore_patterns: list[str] = _parse_list("PROMPTSMITH_EXTRA_IGNORE_PATTERNS")
    extra_ignore_directories: list[str] = _parse_list("PROMPTSMITH_EXTRA_IGNORE_DIRECTORIES")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()


settings = Settings()
