#!/usr/bin/env python3
"""Local CLI entrypoint to build the report outside of the scheduled workflow.

Usage:
  GH_TOKEN=... python scripts/check_versions.py [--org nhsbsa] [--output index.html]

This calls the same run_report used by the ``prototype-kit-report`` console script.
"""

from __future__ import annotations

from prototype_kit_report.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
