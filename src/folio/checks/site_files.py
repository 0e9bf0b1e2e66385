"""Site-root files: presence, web-app manifest fields, robots.txt directives."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from folio.model import CheckType, Severity
from folio.model.finding import Finding, assign_ids, make_finding

_logger = logging.getLogger(__name__)

MANIFEST_REQUIRED_FIELDS = ("name", "short_name", "start_url", "display")


class RequiredFilesCheck:
    """Every configured file must exist relative to the site root."""

    id: str = "required_files"
    version: str = "1.0.0"

    def __init__(self, paths: Iterable[str] = ("robots.txt", "manifest.json")):
        self.paths = tuple(paths)

    def run(self, root: Path) -> list[Finding]:
        findings: list[Finding] = []
        for rel in self.paths:
            if (root / rel).is_file():
                _logger.debug("%s exists", rel)
                continue
            findings.append(
                make_finding(
                    CheckType.FILES,
                    Severity.ERROR,
                    "FILE-MISSING-001",
                    f"{rel} not found",
                    rel,
                    symbol=rel,
                )
            )
        return assign_ids(findings, "fs")


class ManifestCheck:
    """Validates ``manifest.json``; absence is RequiredFilesCheck's concern."""

    id: str = "manifest"
    version: str = "1.0.0"

    def __init__(self, path: str = "manifest.json"):
        self.path = path

    def run(self, root: Path) -> list[Finding]:
        target = root / self.path
        if not target.is_file():
            _logger.debug("%s absent; manifest content not checked", self.path)
            return []

        findings: list[Finding] = []

        def add(severity: Severity, rule_id: str, message: str, symbol: str = "") -> None:
            findings.append(
                make_finding(CheckType.MANIFEST, severity, rule_id, message, self.path, symbol=symbol)
            )

        try:
            manifest = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            add(Severity.ERROR, "MANIFEST-INVALID-001", f"Error parsing {self.path}: {e}")
            return assign_ids(findings, "mf")
        if not isinstance(manifest, dict):
            add(Severity.ERROR, "MANIFEST-INVALID-001", f"{self.path} must contain a JSON object")
            return assign_ids(findings, "mf")

        for key in MANIFEST_REQUIRED_FIELDS:
            if manifest.get(key):
                _logger.debug("Manifest has %s", key)
            else:
                add(Severity.ERROR, "MANIFEST-FIELD-001", f"Manifest missing {key}", key)

        icons = manifest.get("icons")
        if not (isinstance(icons, list) and icons):
            add(Severity.WARNING, "MANIFEST-ICONS-001", "Manifest missing icons", "icons")
        if not manifest.get("theme_color"):
            add(Severity.WARNING, "MANIFEST-THEME-001", "Manifest missing theme_color", "theme_color")

        return assign_ids(findings, "mf")


class RobotsCheck:
    """robots.txt must point crawlers at the sitemap."""

    id: str = "robots"
    version: str = "1.0.0"

    def __init__(self, path: str = "robots.txt"):
        self.path = path

    def run(self, root: Path) -> list[Finding]:
        target = root / self.path
        if not target.is_file():
            _logger.debug("%s absent; robots content not checked", self.path)
            return []

        content = target.read_text(encoding="utf-8", errors="replace")
        findings: list[Finding] = []
        if "Sitemap:" not in content:
            findings.append(
                make_finding(
                    CheckType.ROBOTS,
                    Severity.ERROR,
                    "ROBOTS-SITEMAP-001",
                    "robots.txt missing Sitemap directive",
                    self.path,
                )
            )
        # No User-agent line means "allow all", which is fine.
        if "User-agent:" not in content:
            findings.append(
                make_finding(
                    CheckType.ROBOTS,
                    Severity.INFO,
                    "ROBOTS-AGENT-001",
                    "robots.txt has no User-agent directive (defaults to allowing all crawlers)",
                    self.path,
                )
            )
        return assign_ids(findings, "rb")
