"""Static HTML rendering for the prototype kit version report."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from html import escape
from pathlib import Path
from typing import Any

from .models import ReportGroup

STYLESHEET = """
body { font-family: sans-serif; padding: 2em; }
table { border-collapse: collapse; width: 100%; margin-bottom: 2em; }
th, td { border: 1px solid #ccc; padding: 0.5em; text-align: left; }
th { background: #eee; }
.uptodate { background-color: #d4edda; }
.slightly-outdated { background-color: #fff3cd; }
.outdated { background-color: #f8d7da; }
.unknown { background-color: #e2e3e5; }
.last-updated { margin-top: 1em; font-style: italic; color: #555; }
""".strip()


def _esc(value: Any) -> str:
    return escape("" if value is None else str(value))


def format_report_date(value: date) -> str:
    """Return the date as en-GB long form, e.g. ``19 October 2026``."""
    return f"{value.day} {value:%B %Y}"


def render_group(group: ReportGroup, organization: str) -> list[str]:
    """Return the HTML lines for one group; empty groups render nothing."""
    if not group.entries:
        return []

    lines = [
        f"<h2>{_esc(group.package.title)}</h2>",
        f"<p>Latest version: <strong>{_esc(group.latest)}</strong></p>",
        "<table>",
        "<thead>",
        "<tr><th>Repository</th><th>Version</th><th>Status</th></tr>",
        "</thead>",
        "<tbody>",
    ]
    for entry in group.entries:
        name = entry.repository.name
        link = entry.repository.html_url or f"https://github.com/{organization}/{name}"
        cell = [f'<a href="{_esc(link)}">{_esc(name)}</a>']
        if entry.companion_version:
            cell.append(f"<br/><small>Frontend: {_esc(entry.companion_version)}</small>")
        if entry.last_committer:
            cell.append(f"<br/><small>Last Committer: {_esc(entry.last_committer)}</small>")

        lines.append(f'<tr class="{entry.classification.css_class}">')
        lines.append(f"<td>{''.join(cell)}</td>")
        lines.append(f"<td>{_esc(entry.display_version)}</td>")
        lines.append(f"<td>{_esc(entry.classification.label)}</td>")
        lines.append("</tr>")
    lines.extend(["</tbody>", "</table>"])
    return lines


def render_report(
    groups: Iterable[ReportGroup], organization: str, generated_on: date
) -> str:
    """Return the complete HTML document for the report."""
    title = f"{organization.upper()} Prototype Kit Version Report"

    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="UTF-8" />',
        "<title>Prototype Kit Version Report</title>",
        f"<style>\n{STYLESHEET}\n</style>",
        "</head>",
        "<body>",
        f"<h1>{_esc(title)}</h1>",
    ]
    for group in groups:
        lines.extend(render_group(group, organization))
    lines.append(
        f'<p class="last-updated">Last Updated: {format_report_date(generated_on)}</p>'
    )
    lines.extend(["</body>", "</html>"])

    return "\n".join(lines) + "\n"


def write_report(path: Path, html: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path
