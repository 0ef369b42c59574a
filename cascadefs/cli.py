"""Command-line access to the cascading filesystem.

Builds a kernel from the given roots and prints lookups as JSON, which is
handy for checking which root wins for a given file.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from cascadefs.cache_store import FileCacheStore
from cascadefs.errors import KernelError
from cascadefs.kernel import Kernel
from cascadefs.load_settings import load_settings


def _to_json(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {key: _to_json(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(val) for val in value]
    return value


def _parse_module(value: str) -> tuple[str, Path]:
    namespace, sep, path = value.partition("=")
    if not sep or not namespace or not path:
        msg = f"expected NAMESPACE=PATH, got '{value}'"
        raise argparse.ArgumentTypeError(msg)
    return namespace, Path(path)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    ap = argparse.ArgumentParser(
        prog="cascadefs",
        description="Resolve files across application, system and module roots.",
    )
    ap.add_argument(
        "--app",
        type=Path,
        default=Path("application"),
        help="Application root (default: ./application)",
    )
    ap.add_argument(
        "--system",
        type=Path,
        default=Path("system"),
        help="System root (default: ./system)",
    )
    ap.add_argument(
        "--module",
        dest="modules",
        action="append",
        type=_parse_module,
        default=[],
        metavar="NAMESPACE=PATH",
        help="Register a module root; repeat to add several",
    )
    ap.add_argument(
        "--settings",
        help="Path to a YAML settings file",
    )
    ap.add_argument(
        "--cache-dir",
        type=Path,
        help="Persist the file path cache in this directory",
    )
    ap.add_argument(
        "--discover",
        action="store_true",
        help="Run module discovery from the vendor package manifest",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("paths", help="Print the search roots in precedence order")

    find = sub.add_parser("find", help="Find a file in the cascading filesystem")
    find.add_argument("directory", help="Logical directory, e.g. views or config")
    find.add_argument("file", help="File name without extension")
    find.add_argument("--ext", help="Extension to search for ('' for none)")
    find.add_argument(
        "--array", action="store_true", help="Return every match, not just the first"
    )

    lst = sub.add_parser("list", help="List files under a directory across roots")
    lst.add_argument("directory", nargs="?", help="Logical directory (default: all)")
    lst.add_argument(
        "--ext", action="append", help="Only list files with this extension"
    )

    msg = sub.add_parser("message", help="Print merged messages of a file")
    msg.add_argument("file", help="Message file id, e.g. validation")
    msg.add_argument("path", nargs="?", help="Dotted key path inside the file")

    return ap


def run(args: argparse.Namespace) -> Any:
    """Execute a parsed command and return its JSON-ready result."""
    settings = load_settings(args.settings)
    if args.cache_dir:
        settings["caching"] = True
    settings["modules"] = {**settings.get("modules", {}), **dict(args.modules)}

    store = FileCacheStore(args.cache_dir) if args.cache_dir else None
    kernel = Kernel(args.app.resolve(), args.system.resolve(), store=store)
    try:
        kernel.init(settings, discover_modules=args.discover)
        if args.command == "paths":
            result: Any = kernel.paths()
        elif args.command == "find":
            result = kernel.find_file(args.directory, args.file, args.ext, args.array)
        elif args.command == "list":
            result = kernel.list_files(args.directory, ext=args.ext)
        else:
            result = kernel.message(args.file, args.path)
        kernel.shutdown()
    finally:
        kernel.deinit()
    return _to_json(result)


def main() -> int:
    """Run the command-line interface."""
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        result = run(args)
    except KernelError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0 if result is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
