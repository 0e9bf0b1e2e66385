"""CheckReport — the immutable, schema-aligned verification artifact."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from folio import __version__
from folio.model import Severity
from folio.model.finding import Finding


@dataclass(frozen=True, slots=True)
class CheckSummary:
    """Per-check bookkeeping: what ran and how many findings it produced."""

    check_id: str
    version: str
    findings: int
    crashed: bool = False


@dataclass(slots=True)
class CheckReport:
    """Assembled verification result matching ``check_report.schema.json``.

    Constructed by ``core.runner`` (and ``visual.harness``) after every
    check has finished.
    """

    # ── run metadata ────────────────────────────────────────────────
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
    )
    tool_version: str = __version__
    suite: str = "check"          # check | visual
    root: str = ""

    config: dict = field(default_factory=dict)

    # ── results ─────────────────────────────────────────────────────
    findings: list[Finding] = field(default_factory=list)
    checks: list[CheckSummary] = field(default_factory=list)

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.findings if f.severity == severity)

    @property
    def status(self) -> str:
        if self.count(Severity.ERROR):
            return "fail"
        if self.count(Severity.WARNING):
            return "warn"
        return "pass"

    @property
    def worst_severity(self) -> str | None:
        for sev in (Severity.ERROR, Severity.WARNING, Severity.INFO):
            if self.count(sev):
                return sev.value
        return None

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Produce the full report JSON matching the schema."""
        severity_counts: dict[str, int] = {s.value: 0 for s in Severity}
        check_counts: dict[str, int] = {}
        for f in self.findings:
            severity_counts[f.severity.value] += 1
            check_counts[f.check.value] = check_counts.get(f.check.value, 0) + 1

        return {
            "schema_version": "check_report_v1",
            "run": {
                "run_id": self.run_id,
                "created_at": self.created_at,
                "tool_version": self.tool_version,
                "suite": self.suite,
                "root": self.root,
                "config": self.config,
            },
            "summary": {
                "status": self.status,
                "counts": {
                    "findings_total": len(self.findings),
                    "by_severity": severity_counts,
                    "by_check": check_counts,
                },
            },
            "checks": [
                {
                    "check_id": c.check_id,
                    "version": c.version,
                    "findings": c.findings,
                    "crashed": c.crashed,
                }
                for c in self.checks
            ],
            "findings": [f.to_dict() for f in self.findings],
        }
