"""The interactive generator widgets must be wired up.

For each configured page this verifies the DOM targets, the JavaScript
entry points, a click listener per button, basic balance of the inline
script, and Bootstrap button styling.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from folio.core.config import GeneratorPageSpec
from folio.model import CheckType, Severity
from folio.model.finding import Finding, assign_ids, make_finding
from folio.utils.pages import FrontMatterError, Page, load_page

_logger = logging.getLogger(__name__)


def function_pattern(name: str) -> re.Pattern[str]:
    """``function name(`` or ``const name =`` or ``let name =``."""
    n = re.escape(name)
    return re.compile(rf"function\s+{n}\s*\(|const\s+{n}\s*=|let\s+{n}\s*=")


def listener_patterns(button_id: str) -> tuple[re.Pattern[str], ...]:
    """DOM ``addEventListener('click'`` and jQuery ``.on('click'`` / ``.click(``."""
    b = re.escape(button_id)
    return (
        re.compile(rf"getElementById\(['\"]{b}['\"]\).*addEventListener\(['\"]click['\"]", re.DOTALL),
        re.compile(rf"\(['\"]#{b}['\"]\).*\.on\(['\"]click['\"]", re.DOTALL),
        re.compile(rf"\(['\"]#{b}['\"]\).*\.click\(", re.DOTALL),
    )


def is_iife(script: str) -> bool:
    if "})();" not in script and "})()" not in script:
        return False
    return "(function()" in script or "(function ()" in script or "(() =>" in script


def has_bootstrap_button_class(tag) -> bool:
    classes = tag.get("class") or []
    return "btn" in classes and any(c.startswith("btn-") for c in classes)


def first_inline_script(page: Page):
    """The first ``<script>`` without ``src`` that holds JavaScript."""
    for script in page.soup.find_all("script"):
        if script.get("src"):
            continue
        kind = (script.get("type") or "text/javascript").lower()
        if "json" in kind:
            continue
        return script
    return None


class GeneratorPageCheck:
    """Structural checks for the name and prompt generator pages."""

    id: str = "generator_pages"
    version: str = "1.0.0"

    def __init__(self, pages: Iterable[GeneratorPageSpec] = ()):
        self.pages = tuple(pages)

    def run(self, root: Path) -> list[Finding]:
        findings: list[Finding] = []
        for spec in self.pages:
            findings.extend(self._check_page(root, spec))
        return assign_ids(findings, "gen")

    def _check_page(self, root: Path, spec: GeneratorPageSpec) -> list[Finding]:
        label = spec.name or spec.path
        findings: list[Finding] = []

        def add(severity: Severity, rule_id: str, message: str, *, line: int = 0, symbol: str = "") -> None:
            findings.append(
                make_finding(
                    CheckType.GENERATOR,
                    severity,
                    rule_id,
                    f"{label}: {message}",
                    spec.path,
                    line=line,
                    symbol=symbol,
                )
            )

        try:
            page = load_page(root, spec.path)
        except FileNotFoundError:
            add(Severity.ERROR, "GEN-PAGE-001", f"File not found: {spec.path}")
            return findings
        except FrontMatterError as e:
            add(Severity.ERROR, "GEN-FRONT-MATTER-001", str(e))
            return findings

        html = page.source.body

        for element_id in spec.elements:
            if page.soup.find(id=element_id) is None:
                add(Severity.ERROR, "GEN-ELEMENT-001", f"Missing element: #{element_id}", symbol=element_id)
            else:
                _logger.debug("%s: found element #%s", label, element_id)

        for name in spec.functions:
            if function_pattern(name).search(html):
                _logger.debug("%s: found function %s", label, name)
            else:
                add(Severity.ERROR, "GEN-FUNCTION-001", f"Missing function: {name}", symbol=name)

        for button_id in spec.buttons:
            if any(p.search(html) for p in listener_patterns(button_id)):
                _logger.debug("%s: event listener attached to #%s", label, button_id)
            else:
                add(Severity.ERROR, "GEN-LISTENER-001", f"No event listener for #{button_id}", symbol=button_id)

        script = first_inline_script(page)
        if script is None:
            add(Severity.ERROR, "GEN-SCRIPT-001", "No script tag found")
        else:
            code = script.string or ""
            line = page.line_of(script)
            opened, closed = code.count("{"), code.count("}")
            if opened != closed:
                add(
                    Severity.ERROR,
                    "GEN-BRACES-001",
                    f"Braces unbalanced: {opened} opening, {closed} closing",
                    line=line,
                )
            opened, closed = code.count("("), code.count(")")
            if opened != closed:
                add(
                    Severity.ERROR,
                    "GEN-PARENS-001",
                    f"Parentheses unbalanced: {opened} opening, {closed} closing",
                    line=line,
                )
            if not is_iife(code):
                add(
                    Severity.WARNING,
                    "GEN-IIFE-001",
                    "JavaScript not wrapped in IIFE (may cause global namespace pollution)",
                    line=line,
                )

        for button_id in spec.buttons:
            tag = page.soup.find(id=button_id)
            if tag is not None and has_bootstrap_button_class(tag):
                continue
            add(
                Severity.ERROR,
                "GEN-BUTTON-CLASS-001",
                f"#{button_id} missing Bootstrap button class",
                line=page.line_of(tag) if tag is not None else 0,
                symbol=button_id,
            )

        return findings
