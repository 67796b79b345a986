"""CLI entry point for resolving a mapper manifest.

Usage:
    python -m mapresolve.manifest car_mapper.json --implicit-severity warning
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from mapresolve.manifest import build_report, load_manifest
from mapresolve.resolution.diagnostics import Severity
from mapresolve.resolution.exceptions import ResolutionError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Resolve the user mappings of a mapper manifest and print a JSON report.",
        prog="python -m mapresolve.manifest",
    )
    parser.add_argument("manifest", help="Path to the mapper manifest (JSON)")
    parser.add_argument(
        "--no-auto-user-mappings",
        action="store_true",
        help="Only consider methods carrying the explicit user mapping marker",
    )
    parser.add_argument(
        "--implicit-severity",
        choices=[it.value for it in Severity],
        default=None,
        help="Severity for pairs with several user mappings and no default",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        manifest = load_manifest(args.manifest)
    except (OSError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    overrides: dict[str, object] = {}
    if args.no_auto_user_mappings:
        overrides["auto_user_mappings"] = False
    if args.implicit_severity is not None:
        overrides["ambiguous_implicit_severity"] = Severity(args.implicit_severity)
    settings = manifest.settings.model_copy(update=overrides)

    try:
        report = build_report(manifest, settings)
    except ResolutionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(report.model_dump_json(indent=2))
    return 1 if report.has_errors else 0


if __name__ == "__main__":
    sys.exit(main())
