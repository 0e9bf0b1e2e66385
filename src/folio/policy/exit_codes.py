"""Exit-code policy — severity-based CI exit-code contract.

Philosophy:
  - Hard checks (``error``) fail the build
  - Soft checks (``warning``) are logged, exit stays 0 unless strict
  - Unknown severities are fail-safe (treated as ``error``)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from folio.utils.exit_codes import ExitCode

Severity = Literal["NONE", "INFO", "WARNING", "ERROR"]


@dataclass(frozen=True)
class ExitCodePolicy:
    """Minimum severity that fails the run."""

    ok: int = ExitCode.SUCCESS
    fail: int = ExitCode.VIOLATION
    fail_at: Severity = "ERROR"


DEFAULT_POLICY = ExitCodePolicy()

# ``--strict``: warnings fail the build too.
STRICT_POLICY = ExitCodePolicy(fail_at="WARNING")


_SEV_RANK: dict[Severity, int] = {
    "NONE": 0,
    "INFO": 1,
    "WARNING": 2,
    "ERROR": 3,
}


def _normalize_severity(value: str | None) -> Severity:
    """Normalize a raw severity string; unknown values become ``ERROR``."""
    if not value:
        return "NONE"
    v = value.strip().upper()
    if v in _SEV_RANK:
        return v  # type: ignore[return-value]
    return "ERROR"


def exit_code_for_worst_severity(
    worst_severity: str | None,
    *,
    policy: ExitCodePolicy = DEFAULT_POLICY,
) -> int:
    """Compute the CI exit code from a worst-severity string.

    Monotonic: a worse severity never produces a lower exit code.
    """
    if _SEV_RANK[_normalize_severity(worst_severity)] >= _SEV_RANK[policy.fail_at]:
        return policy.fail
    return policy.ok
