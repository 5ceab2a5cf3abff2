"""Command-line interface for promptsmith."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import uvicorn

from .config import settings


def main(argv: Optional[list[str]] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="promptsmith - Placeholder formatting for prompt templates"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Format command
    format_parser = subparsers.add_parser("format", help="Format a template file")
    format_parser.add_argument("template", help="Template file ('-' for stdin)")
    format_parser.add_argument(
        "--values", "-v", help="JSON file with placeholder values and properties"
    )
    format_parser.add_argument(
        "--root", "-r", help="Root directory for relative file paths"
    )
    format_parser.add_argument(
        "--resolve-files",
        action="store_true",
        default=settings.resolve_files,
        help="Read file:/content: targets instead of leaving them literal",
    )

    # Keys command
    keys_parser = subparsers.add_parser(
        "keys", help="List the standard placeholders a template would use"
    )
    keys_parser.add_argument("template", help="Template file ('-' for stdin)")
    keys_parser.add_argument("--values", "-v", help="JSON file with placeholder values")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "format":
            run_format(args.template, args.values, args.root, args.resolve_files)
        elif args.command == "keys":
            run_keys(args.template, args.values)
        elif args.command == "serve":
            run_server(args.host, args.port, args.reload)
        else:
            parser.print_help()
            sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def run_format(
    template_path: str,
    values_path: Optional[str],
    root: Optional[str],
    resolve_files: bool,
):
    """Format a template and print the result."""
    from .factory import create_formatter

    template = _read_template(template_path)
    values = _load_values(values_path)
    root_dir = root or settings.root_dir

    formatter = create_formatter()
    sys.stdout.write(formatter.format(template, values, root_dir, resolve_files))


def run_keys(template_path: str, values_path: Optional[str]):
    """Print the standard placeholders a template would use, one per line."""
    from .placeholders import UsageInspector

    usage = UsageInspector().inspect(_read_template(template_path), _load_values(values_path))
    for key in usage.keys:
        print(key.value)
    for option in usage.option_keys:
        print(f"option:{option}")


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "promptsmith.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def _read_template(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _load_values(path: Optional[str]) -> dict[str, Any]:
    """Load a JSON object of values; a missing path means no values."""
    if not path:
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"Values file {path} must contain a JSON object")
    return data


if __name__ == "__main__":
    main()
