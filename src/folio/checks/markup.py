"""Markup sanity check: catch broken inline scripts before deploying."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from folio.core.config import MarkupPageSpec
from folio.model import CheckType, Severity
from folio.model.finding import Finding, assign_ids, make_finding
from folio.utils.pages import FrontMatterError, load_page

_logger = logging.getLogger(__name__)

_RUNAWAY_MARKERS = ('"""', "'''")


def brace_surplus_lines(script: str) -> list[int]:
    """1-based script lines opening more than one brace beyond those closed.

    Comment-only and blank lines are skipped; a single surplus brace is a
    normal block opener.
    """
    flagged: list[int] = []
    for idx, line in enumerate(script.split("\n"), start=1):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("//") or trimmed.startswith("/*"):
            continue
        if trimmed.count("{") > trimmed.count("}") + 1:
            flagged.append(idx)
    return flagged


class MarkupCheck:
    """Parse each page, sanity-check inline scripts, require key elements."""

    id: str = "markup"
    version: str = "1.0.0"

    def __init__(self, pages: Iterable[MarkupPageSpec] = ()):
        self.pages = tuple(pages)

    def run(self, root: Path) -> list[Finding]:
        findings: list[Finding] = []
        for spec in self.pages:
            findings.extend(self._check_page(root, spec))
        return assign_ids(findings, "mk")

    def _check_page(self, root: Path, spec: MarkupPageSpec) -> list[Finding]:
        findings: list[Finding] = []

        def add(severity: Severity, rule_id: str, message: str, *, line: int = 0, symbol: str = "") -> None:
            findings.append(
                make_finding(CheckType.MARKUP, severity, rule_id, message, spec.path, line=line, symbol=symbol)
            )

        try:
            page = load_page(root, spec.path)
        except FileNotFoundError:
            add(Severity.ERROR, "MARKUP-PAGE-001", f"File not found: {spec.path}")
            return findings
        except FrontMatterError as e:
            add(Severity.ERROR, "MARKUP-FRONT-MATTER-001", f"Error parsing {spec.path}: {e}")
            return findings

        if "function" in page.raw and "}" not in page.raw:
            add(Severity.ERROR, "MARKUP-CLOSE-BRACE-001", f"Possible missing closing brace in {spec.path}")

        script_count = 0
        for script in page.soup.find_all("script"):
            code = script.string or ""
            if not code.strip():
                continue
            script_count += 1
            start = page.line_of(script)

            for idx in brace_surplus_lines(code):
                # The script's first line shares its line with the <script> tag.
                line = start + idx - 1 if start else 0
                add(
                    Severity.WARNING,
                    "MARKUP-BRACE-LINE-001",
                    f"Line {idx}: Possible brace mismatch",
                    line=line,
                    symbol=str(idx),
                )

            if any(marker in code for marker in _RUNAWAY_MARKERS):
                add(Severity.ERROR, "MARKUP-RUNAWAY-STRING-001", "Possible runaway string in script", line=start)

        findings.append(
            make_finding(
                CheckType.MARKUP,
                Severity.INFO,
                "MARKUP-SCRIPTS-001",
                f"Found {script_count} non-empty script tag(s)",
                spec.path,
                metadata={"scripts": script_count},
            )
        )

        for element_id in spec.required_elements:
            if page.soup.find(id=element_id) is None:
                add(
                    Severity.ERROR,
                    "MARKUP-ELEMENT-001",
                    f"Missing required element: #{element_id}",
                    symbol=element_id,
                )
            else:
                _logger.debug("%s: found #%s", spec.path, element_id)

        return findings
