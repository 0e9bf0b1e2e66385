"""Find rendered pages in the built output directory."""

from __future__ import annotations

from pathlib import Path

# Directory basenames never treated as published pages.
_DEFAULT_EXCLUDES = frozenset(
    {
        ".git",
        "assets",
        "node_modules",
        "playwright-report",
        "visual-results",
    }
)

_DEFAULT_IGNORE_FILES = frozenset({"404.html"})


def discover_html_files(
    site_dir: Path,
    *,
    exclude: list[str] | None = None,
    ignore_files: frozenset[str] = _DEFAULT_IGNORE_FILES,
) -> list[Path]:
    """Recursively find ``*.html`` pages under *site_dir*.

    Parameters
    ----------
    site_dir:
        The generator's output directory (``_site``).
    exclude:
        Directory basenames to skip.  Merged with built-in defaults.

    Returns
    -------
    Sorted list of absolute ``Path`` objects; empty if *site_dir* is missing.
    """
    if not site_dir.is_dir():
        return []
    skip = _DEFAULT_EXCLUDES | set(exclude or [])

    results: list[Path] = []
    for p in site_dir.rglob("*.html"):
        rel_parts = p.relative_to(site_dir).parts
        if any(part in skip or part.startswith(".") for part in rel_parts[:-1]):
            continue
        if p.name in ignore_files or not p.is_file():
            continue
        results.append(p.resolve())

    return sorted(set(results))
