"""Command line entrypoint that writes the prototype kit version report."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .core import run_report
from .errors import ReportError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON settings file (defaults to $KIT_REPORT_CONFIG)",
    )
    parser.add_argument("--org", dest="organization", default=None, help="GitHub organisation")
    parser.add_argument(
        "--output",
        dest="output_path",
        type=Path,
        default=None,
        help="Where to write the HTML report (default: index.html)",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Number of repositories inspected in parallel",
    )
    parser.add_argument(
        "--no-committers",
        dest="include_committers",
        action="store_const",
        const=False,
        default=None,
        help="Skip the last committer lookup for each repository",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(
            args.config,
            organization=args.organization,
            output_path=args.output_path,
            max_workers=args.max_workers,
            include_committers=args.include_committers,
        )
        result = run_report(config)
    except ReportError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: Failed to write report: {exc}", file=sys.stderr)
        return 1

    for group in result.groups:
        print(
            f"{group.package.title}: latest {group.latest}, "
            f"{len(group.entries)} repositories "
            f"({group.totals['uptodate']} up to date, {group.totals['outdated']} outdated)"
        )
    print(f"Report written to {result.output_path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
