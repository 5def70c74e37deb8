#!/usr/bin/env python3
"""List the URLs livecheck would probe for formulae and casks.

Usage:
    livecheck-urls packages.json                  # Packages from a JSON file
    livecheck-urls --formula wget --cask firefox  # Packages from the Homebrew API
    livecheck-urls packages.json --raw            # Skip URL canonicalization
    livecheck-urls packages.json --json           # Emit status records as JSON
"""

import argparse
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from tabulate import tabulate

from livecheck.livecheck import (
    livecheck_url_to_string,
    package_name,
    status_hash,
    urls_to_check,
)
from livecheck.models import PackageDescriptor
from livecheck.sources import HomebrewAPIClient, load_descriptors


def plan_package(
    package: PackageDescriptor, full_name: bool = False, preprocess: bool = True
) -> dict[str, Any]:
    """Work out what livecheck would do for one package.

    Args:
        package: Formula or cask.
        full_name: Report tap-qualified names.
        preprocess: Canonicalize URLs for version-control probing.

    Returns:
        Status record; successful records carry the URLs under "urls".
    """
    livecheck = package.livecheck

    if livecheck is not None and livecheck.skip:
        return status_hash(
            package, "skipped", [livecheck.skip_msg or "Skipped"], full_name=full_name
        )

    if livecheck is not None and livecheck.url is not None:
        if livecheck_url_to_string(livecheck.url, package) is None:
            return status_hash(
                package,
                "error",
                ["Unable to resolve the livecheck URL"],
                full_name=full_name,
            )

    urls = urls_to_check(package, preprocess=preprocess)
    if not urls:
        return status_hash(
            package, "error", ["No URLs available to check"], full_name=full_name
        )

    record = status_hash(package, "ok", full_name=full_name)
    record["urls"] = urls
    return record


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="List the URLs livecheck would probe for packages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s packages.json                  # Packages from a JSON file
    %(prog)s --formula wget --cask firefox  # Packages from the Homebrew API
    %(prog)s packages.json --json           # Machine-readable output
        """,
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="JSON files of formula/cask records",
    )
    parser.add_argument(
        "--formula",
        nargs="+",
        default=[],
        help="Formulae to fetch from the Homebrew API",
    )
    parser.add_argument(
        "--cask",
        nargs="+",
        default=[],
        help="Casks to fetch from the Homebrew API",
    )
    parser.add_argument(
        "--full-name",
        action="store_true",
        help="Show tap-qualified names",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Report URLs as declared, without canonicalization",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print status records as JSON",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=8,
        help="Number of packages processed in parallel (default: 8)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    packages: list[PackageDescriptor] = []
    errors: list[str] = []

    for filepath in args.files:
        loaded, load_errors = load_descriptors(filepath)
        packages.extend(loaded)
        errors.extend(load_errors)

    if args.formula or args.cask:
        client = HomebrewAPIClient()
        count = len(args.formula) + len(args.cask)
        print(
            f"Fetching {count} packages from {client.api_domain}...", file=sys.stderr
        )
        for name in args.formula:
            formula = client.fetch_formula(name)
            if formula:
                packages.append(formula)
        for token in args.cask:
            cask = client.fetch_cask(token)
            if cask:
                packages.append(cask)
        errors.extend(client.errors)

    if not packages:
        print("No packages to check")
        for error in errors:
            print(f"  - {error}")
        return 1

    def run_plan(package: PackageDescriptor) -> dict[str, Any]:
        return plan_package(package, full_name=args.full_name, preprocess=not args.raw)

    with ThreadPoolExecutor(max_workers=max(1, args.workers)) as executor:
        results = list(executor.map(run_plan, packages))

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        rows = []
        for package, result in zip(packages, results):
            detail = result.get("urls") or result.get("messages") or []
            rows.append(
                [
                    package_name(package, full_name=args.full_name),
                    package.kind,
                    result["status"],
                    "\n".join(detail),
                ]
            )
        print(tabulate(rows, headers=["Package", "Kind", "Status", "URLs"]))

    failed = [r for r in results if r["status"] == "error"]

    # Print summary
    print(f"\n{'='*60}", file=sys.stderr)
    print("SUMMARY", file=sys.stderr)
    print(f"{'='*60}", file=sys.stderr)
    print(f"  {len(results)} packages, {len(failed)} without a URL to check", file=sys.stderr)
    for error in errors:
        print(f"    - {error}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
