"""API routes for promptsmith."""

from typing import TYPE_CHECKING, Any, Optional
from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from ..placeholders import UsageInspector

if TYPE_CHECKING:
    from ..placeholders import PlaceholderFormatter

router = APIRouter()

# Global formatter instance
_formatter: Optional["PlaceholderFormatter"] = None


def get_formatter() -> "PlaceholderFormatter":
    """Get the global formatter instance."""
    global _formatter
    if _formatter is None:
        from ..factory import create_formatter

        _formatter = create_formatter()
    return _formatter


class FormatRequest(BaseModel):
    """Request to format a template."""

    template: str
    values: dict[str, Any] = Field(default_factory=dict)
    root_dir: Optional[str] = None  # Falls back to PROMPTSMITH_ROOT_DIR
    resolve_files: Optional[bool] = None  # Falls back to PROMPTSMITH_RESOLVE_FILES


class UsageRequest(BaseModel):
    """Request to inspect which placeholders a template uses."""

    template: str
    values: dict[str, Any] = Field(default_factory=dict)


class ScanRequest(BaseModel):
    """Request to list the tokens in a template."""

    template: str


# Health check


@router.get("/health")
async def health_check():
    """Health check endpoint with diagnostics."""
    from ..config import settings

    config = {
        "root_dir_configured": settings.root_dir is not None,
        "resolve_files": settings.resolve_files,
        "extra_ignore_patterns": len(settings.extra_ignore_patterns),
    }

    return {
        "status": "ok",
        "service": "promptsmith",
        "config": config,
    }


# Placeholder endpoints


@router.post("/placeholders/format")
def format_template(request: FormatRequest):
    """
    Format a template.

    Returns:
    - Formatted text
    - Tokens left unresolved
    - Warnings (e.g., recursion cap reached)
    """
    from ..config import settings

    root_dir = request.root_dir or settings.root_dir
    resolve_files = (
        settings.resolve_files if request.resolve_files is None else request.resolve_files
    )

    result = get_formatter().format_detailed(
        request.template,
        request.values,
        root_dir=root_dir,
        resolve_files=resolve_files,
    )
    return {
        "resolved": result.resolved,
        "unresolved": result.unresolved,
        "passes": result.passes,
        "stabilized": result.stabilized,
        "warnings": result.warnings,
    }


@router.post("/placeholders/usage")
async def placeholder_usage(request: UsageRequest):
    """
    Report the placeholders a template would consume.

    Does not read files.
    """
    usage = UsageInspector().inspect(request.template, request.values)
    return {
        "keys": [key.value for key in usage.keys],
        "option_keys": usage.option_keys,
        "uses_files": usage.uses_files,
    }


@router.post("/placeholders/scan")
async def scan_template(request: ScanRequest):
    """List the placeholder tokens in a template, in order."""
    from ..placeholders import TokenScanner

    if not request.template.strip():
        raise HTTPException(status_code=400, detail="Template must not be empty")

    scanner = TokenScanner()
    return {
        "tokens": [
            {
                "syntax": token.syntax,
                "directive": token.directive.value if token.directive else None,
                "segments": [
                    {
                        "reference": segment.reference,
                        "directive": segment.directive.value if segment.directive else None,
                    }
                    for segment in token.segments
                ],
                "recursive": scanner.is_recursive(token),
                "start_pos": token.start_pos,
                "end_pos": token.end_pos,
            }
            for token in scanner.scan(request.template)
        ]
    }
