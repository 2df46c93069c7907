"""aboutlibs CLI — list the libraries bundled into an application.

Usage::

    aboutlibs catalog.json app.json [options]

Options::

    --exclude NAME        Defined name to exclude (repeatable)
    --internal NAME       Catalog library to include by name (repeatable)
    --no-auto-detect      Skip auto-detection of installed libraries
    --no-cache            Ignore the cached detection result
    --no-sort             Keep resolution order instead of sorting by name
    --version-code N      Application version code for the detection cache
    --cache-file PATH     Detection cache file (default: ~/.aboutlibs/...)
    --modifications FILE  JSON file of per-library field overrides
    --search TERM         Only show libraries matching TERM
    --json-output         Print the result as JSON
    --verbose / -v        Enable verbose logging
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from aboutlibs.config import LibsConfig
from aboutlibs.detection import ImportDetector, JsonFileDetectionCache
from aboutlibs.entity import Library
from aboutlibs.keys import filter_define_keys
from aboutlibs.libs import Libs, find
from aboutlibs.resources import JsonResourceProvider, ResourceError


def _load_modifications(path: Path) -> dict[str, dict[str, str]]:
    """Read a ``{library_key: {field: value}}`` JSON file."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ResourceError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise ResourceError(f"Could not read {path}: {exc}") from exc

    if not isinstance(raw, dict) or not all(isinstance(v, dict) for v in raw.values()):
        raise ResourceError(f"Modifications file {path} must map library keys to objects")

    return {
        key: {name: str(value) for name, value in fields.items()}
        for key, fields in raw.items()
    }


def _format_library(library: Library) -> str:
    """One display line per library."""
    parts = [library.library_name or library.defined_name]
    if library.library_version:
        parts.append(library.library_version)
    line = " ".join(parts)
    if library.author:
        line = f"{line} by {library.author}"
    if library.license and library.license.license_name:
        line = f"{line} ({library.license.license_name})"
    return line


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="aboutlibs",
        description=(
            "aboutlibs — list the libraries bundled into an application.\n\n"
            "Reads library and license definitions from JSON resource files "
            "and prints the resolved library list."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "resource_files",
        nargs="+",
        type=Path,
        help="JSON resource files; later files override earlier ones",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="NAME",
        help="Defined name of a library to exclude (repeatable)",
    )
    parser.add_argument(
        "--internal",
        action="append",
        default=[],
        metavar="NAME",
        help="Catalog library to include by name (repeatable; needs --exclude)",
    )
    parser.add_argument(
        "--no-auto-detect",
        action="store_true",
        default=False,
        help="Skip auto-detection of installed libraries",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        default=False,
        help="Ignore the cached detection result",
    )
    parser.add_argument(
        "--no-sort",
        action="store_true",
        default=False,
        help="Keep resolution order instead of sorting by library name",
    )
    parser.add_argument(
        "--version-code",
        type=int,
        default=None,
        help="Application version code the detection cache is keyed by",
    )
    parser.add_argument(
        "--cache-file",
        type=Path,
        default=None,
        help="Detection cache file (default: $ABOUTLIBS_CACHE_DIR or ~/.aboutlibs)",
    )
    parser.add_argument(
        "--modifications",
        type=Path,
        default=None,
        help="JSON file of per-library field overrides",
    )
    parser.add_argument(
        "--search",
        default=None,
        metavar="TERM",
        help="Only show libraries whose name or defined name contains TERM",
    )
    parser.add_argument(
        "--json-output",
        action="store_true",
        default=False,
        help="Print the result as JSON",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Enable verbose logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.  Returns exit code (0=success, 1=failure)."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        resources = JsonResourceProvider(args.resource_files)
        modifications = (
            _load_modifications(args.modifications) if args.modifications else {}
        )
    except ResourceError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    version_code = args.version_code
    libs = Libs(
        resources,
        filter_define_keys(resources.keys()),
        detector=ImportDetector(),
        cache=JsonFileDetectionCache(args.cache_file),
        version_provider=lambda: version_code,
    )

    config = LibsConfig(
        internal_libraries=args.internal,
        exclude_libraries=args.exclude,
        auto_detect=not args.no_auto_detect,
        check_cached_detection=not args.no_cache,
        sort=not args.no_sort,
        modifications=modifications,
    )
    libraries = libs.prepare(config)

    if args.search is not None:
        libraries = find(libraries, args.search)

    if args.json_output:
        print(json.dumps([dataclasses.asdict(lib) for lib in libraries], indent=2))
    else:
        if not libraries:
            print("No libraries found.")
        for library in libraries:
            print(_format_library(library))

    return 0
