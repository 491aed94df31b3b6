"""prototype-kit-report core package.

This package checks which prototype kit versions an organisation's
repositories declare and renders the results as a static HTML report.
"""

__all__ = [
    "core",
]
