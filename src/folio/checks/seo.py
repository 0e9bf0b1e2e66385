"""SEO check — meta tags, social cards, structured data and alt text.

Runs on the head template (a partial, so no ``<html lang>`` requirement)
and, when the site has been built, on every rendered page.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from folio.core.discover import discover_html_files
from folio.model import CheckType, Severity
from folio.model.finding import Finding, assign_ids, make_finding
from folio.utils.pages import FrontMatterError, Page, load_page

_logger = logging.getLogger(__name__)

# (selector, rule_id, severity, message) for presence-only tag checks.
_PRESENCE_RULES: tuple[tuple[str, str, Severity, str], ...] = (
    ('meta[name="viewport"]', "SEO-VIEWPORT-001", Severity.ERROR, "Viewport meta tag missing"),
    ('meta[property="og:image"]', "SEO-OG-IMAGE-001", Severity.WARNING, "Open Graph image missing"),
    ('link[rel="canonical"]', "SEO-CANONICAL-001", Severity.ERROR, "Canonical URL missing"),
    ('meta[name="theme-color"]', "SEO-THEME-COLOR-001", Severity.WARNING, "Theme color meta tag missing"),
    ('link[rel="manifest"]', "SEO-MANIFEST-LINK-001", Severity.WARNING, "Web manifest link missing"),
    (
        'link[rel="icon"], link[rel="shortcut icon"]',
        "SEO-FAVICON-001",
        Severity.WARNING,
        "Favicon missing",
    ),
    ('link[rel="apple-touch-icon"]', "SEO-APPLE-ICON-001", Severity.WARNING, "Apple touch icon missing"),
)

# All of a group must be present, otherwise one error for the group.
_GROUP_RULES: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (
        ('meta[property="og:title"]', 'meta[property="og:description"]', 'meta[property="og:url"]'),
        "SEO-OG-001",
        "Missing some Open Graph tags",
    ),
    (
        ('meta[name="twitter:card"]', 'meta[name="twitter:title"]', 'meta[name="twitter:description"]'),
        "SEO-TWITTER-001",
        "Missing some Twitter Card tags",
    ),
)


class SeoCheck:
    """Meta-tag compliance for the head template and rendered pages."""

    id: str = "seo"
    version: str = "1.0.0"

    def __init__(self, head_template: str | None = "_includes/head.html", site_dir: str | None = "_site"):
        self.head_template = head_template
        self.site_dir = site_dir

    def run(self, root: Path) -> list[Finding]:
        findings: list[Finding] = []

        if self.head_template:
            findings.extend(self._check_file(root, self.head_template, complete_doc=False))

        if self.site_dir:
            site = root / self.site_dir
            if not site.is_dir():
                findings.append(
                    make_finding(
                        CheckType.SEO,
                        Severity.WARNING,
                        "SEO-SITE-001",
                        f"Site not built: {self.site_dir}/ does not exist; rendered pages not checked",
                        self.site_dir,
                    )
                )
            else:
                for path in discover_html_files(site):
                    rel = path.relative_to(root.resolve()).as_posix()
                    findings.extend(self._check_file(root, rel, complete_doc=True))

        return assign_ids(findings, "seo")

    # ── per page ────────────────────────────────────────────────────

    def _check_file(self, root: Path, rel: str, *, complete_doc: bool) -> list[Finding]:
        try:
            page = load_page(root, rel)
        except FileNotFoundError:
            return [make_finding(CheckType.SEO, Severity.ERROR, "SEO-PAGE-001", f"File not found: {rel}", rel)]
        except FrontMatterError as e:
            return [make_finding(CheckType.SEO, Severity.ERROR, "SEO-FRONT-MATTER-001", str(e), rel)]
        return check_page(page, complete_doc=complete_doc)


def check_page(page: Page, *, complete_doc: bool = False) -> list[Finding]:
    """Run every SEO rule against a loaded page."""
    soup = page.soup
    rel = page.rel
    findings: list[Finding] = []

    def add(severity: Severity, rule_id: str, message: str, *, line: int = 0, symbol: str = "", **meta) -> None:
        findings.append(
            make_finding(CheckType.SEO, severity, rule_id, message, rel, line=line, symbol=symbol, metadata=meta)
        )

    meta_desc = soup.select_one('meta[name="description"]')
    if meta_desc is None or not (meta_desc.get("content") or "").strip():
        add(Severity.WARNING, "SEO-META-DESC-001", "Meta description missing or empty")

    for selectors, rule_id, message in _GROUP_RULES:
        missing = [s for s in selectors if soup.select_one(s) is None]
        if missing:
            add(Severity.ERROR, rule_id, message, missing=missing)

    for selector, rule_id, severity, message in _PRESENCE_RULES:
        if soup.select_one(selector) is None:
            add(severity, rule_id, message)
        else:
            _logger.debug("%s: found %s", rel, selector)

    title = soup.find("title")
    if title is None or not title.get_text(strip=True):
        add(Severity.ERROR, "SEO-TITLE-001", "Title tag missing or empty")

    structured = soup.select_one('script[type="application/ld+json"]')
    if structured is None:
        add(Severity.WARNING, "SEO-JSONLD-001", "Structured data (JSON-LD) missing")
    else:
        try:
            json.loads(structured.string or "")
        except ValueError as e:
            add(
                Severity.ERROR,
                "SEO-JSONLD-002",
                f"Structured data has invalid JSON syntax: {e}",
                line=page.line_of(structured),
            )

    images = soup.find_all("img")
    if not images:
        add(Severity.INFO, "SEO-NO-IMAGES-001", "No images found in this file")
    for img in images:
        alt = img.get("alt")
        if alt is None or not alt.strip():
            src = img.get("src") or "unknown"
            add(
                Severity.ERROR,
                "SEO-IMG-ALT-001",
                f"Image missing alt text: {src}",
                line=page.line_of(img),
                symbol=src,
                src=src,
            )

    if complete_doc:
        html = soup.find("html")
        if html is None or not html.get("lang"):
            add(Severity.ERROR, "SEO-LANG-001", "HTML lang attribute missing")

    return findings
