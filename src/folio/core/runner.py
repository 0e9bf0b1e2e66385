"""Runner — orchestrates checks, collects findings, builds a CheckReport."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from folio.contracts.load import validate_instance
from folio.core.config import SuiteConfig
from folio.model import CheckType, Severity
from folio.model.finding import Finding, assign_ids, make_finding
from folio.model.report import CheckReport, CheckSummary
from folio.utils.determinism import deterministic_run_id, deterministic_timestamp
from folio.utils.json_norm import stable_json_dumps

if TYPE_CHECKING:
    from folio.checks import Check

_logger = logging.getLogger(__name__)


def default_checks(config: SuiteConfig) -> list[Check]:
    """The check set ``folio check`` runs, built from *config*."""
    from folio.checks.generator_pages import GeneratorPageCheck
    from folio.checks.images import ImageAltCheck
    from folio.checks.markup import MarkupCheck
    from folio.checks.seo import SeoCheck
    from folio.checks.site_files import ManifestCheck, RequiredFilesCheck, RobotsCheck

    return [
        RequiredFilesCheck(config.required_files),
        SeoCheck(head_template=config.head_template, site_dir=config.site_dir),
        ImageAltCheck(config.image_pages),
        ManifestCheck(config.manifest_path),
        RobotsCheck(config.robots_path),
        GeneratorPageCheck(config.generator_pages),
        MarkupCheck(config.markup_pages),
    ]


def _crash_finding(check_id: str, exc: BaseException) -> Finding:
    return make_finding(
        CheckType.RUNNER,
        Severity.ERROR,
        "CHECK-CRASH-001",
        f"Check '{check_id}' raised {type(exc).__name__}: {exc}",
        "",
        symbol=check_id,
        metadata={"check_id": check_id},
    )


def run_checks(
    root: Path,
    checks: list[Check],
    *,
    config: SuiteConfig | None = None,
    out_path: Path | None = None,
    ci_mode: bool = False,
) -> CheckReport:
    """Execute all *checks* against *root* and assemble a ``CheckReport``.

    A check that raises is logged and recorded as an ``error`` finding;
    the remaining checks still run.
    """
    all_findings: list[Finding] = []
    summaries: list[CheckSummary] = []

    for check in checks:
        check_id = getattr(check, "id", type(check).__name__)
        version = getattr(check, "version", "0")
        try:
            results = check.run(root)
        except Exception as exc:
            _logger.exception("Check '%s' raised an exception", check_id)
            crash = assign_ids([_crash_finding(check_id, exc)], "run")
            all_findings.extend(crash)
            summaries.append(CheckSummary(check_id, version, findings=1, crashed=True))
            continue

        for f in results:
            if f.severity == Severity.ERROR:
                _logger.error("[%s] %s:%s %s", check_id, f.location.path, f.location.line, f.message)
            elif f.severity == Severity.WARNING:
                _logger.warning("[%s] %s:%s %s", check_id, f.location.path, f.location.line, f.message)
            else:
                _logger.info("[%s] %s", check_id, f.message)
        all_findings.extend(results)
        summaries.append(CheckSummary(check_id, version, findings=len(results)))

    report = CheckReport(
        suite="check",
        root=root.as_posix(),
        config=(config or SuiteConfig()).to_dict(),
        findings=all_findings,
        checks=summaries,
    )
    if ci_mode:
        report.run_id = deterministic_run_id(root.as_posix(), "check")
        report.created_at = deterministic_timestamp(ci_mode=True)

    # ── validate output against schema, then optionally persist ──────
    report_dict = report.to_dict()
    validate_instance(report_dict, "check_report.schema.json")

    if out_path is not None:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(stable_json_dumps(report_dict), encoding="utf-8")
    return report
