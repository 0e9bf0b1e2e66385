"""Finding — the normalized output for a single check result."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

from . import CheckType, Severity


@dataclass(frozen=True, slots=True)
class Location:
    """Where a finding points: a site-relative path and an optional line."""

    path: str
    line: int = 0


@dataclass(frozen=True, slots=True)
class Finding:
    """Immutable, schema-aligned check finding.

    Corresponds to ``findings[]`` in ``check_report.schema.json``.
    """

    finding_id: str
    check: CheckType
    severity: Severity
    rule_id: str
    message: str
    location: Location
    fingerprint: str
    metadata: dict = field(default_factory=dict)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        d: dict = {
            "finding_id": self.finding_id,
            "check": self.check.value,
            "severity": self.severity.value,
            "rule_id": self.rule_id,
            "message": self.message,
            "location": {
                "path": self.location.path,
                "line": self.location.line,
            },
            "fingerprint": self.fingerprint,
        }
        if self.metadata:
            d["metadata"] = dict(self.metadata)
        return d


def make_fingerprint(
    rule_id: str,
    rel_path: str,
    symbol: str,
    detail: str,
) -> str:
    """Deterministic fingerprint: sha256(rule|path|symbol|detail)."""
    rel_path = rel_path.replace("\\", "/")
    payload = "|".join([rule_id, rel_path, symbol, detail.strip()])
    return "sha256:" + hashlib.sha256(payload.encode()).hexdigest()


def make_finding(
    check: CheckType,
    severity: Severity,
    rule_id: str,
    message: str,
    rel_path: str,
    *,
    line: int = 0,
    symbol: str = "",
    metadata: dict | None = None,
) -> Finding:
    """Build a finding with its fingerprint; ``finding_id`` is assigned later."""
    return Finding(
        finding_id="",
        check=check,
        severity=severity,
        rule_id=rule_id,
        message=message,
        location=Location(path=rel_path, line=line),
        fingerprint=make_fingerprint(rule_id, rel_path, symbol, message),
        metadata=dict(metadata or {}),
    )


def assign_ids(findings: list[Finding], prefix: str) -> list[Finding]:
    """Assign stable finding IDs (fingerprint-based) in place."""
    for i, f in enumerate(findings):
        object.__setattr__(f, "finding_id", f"{prefix}_{f.fingerprint[7:15]}_{i:04d}")
    return findings
