"""
folio.api
=========

Programmatic entrypoints, free of argparse and terminal output.

Usage::

    from folio.api import run_checks, generate_name, resort_page

    report = run_checks("site/", ci_mode=True)
    names = generate_name(count=3, seed=7)
    html, items = resort_page("site/_pages/books.html", "length")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

from folio.contracts.load import validate_file, validate_instance
from folio.core.config import SuiteConfig
from folio.core.runner import default_checks
from folio.core.runner import run_checks as _run_checks
from folio.generators.names import WuxiaNameGenerator
from folio.generators.pools import load_pools
from folio.generators.prompts import PromptGenerator
from folio.model import SortKey
from folio.model.report import CheckReport
from folio.model.work_item import WorkItem
from folio.timeline.dom import DEFAULT_CONTAINER, resort_html
from folio.utils.determinism import (
    deterministic_run_id,
    deterministic_timestamp,
    make_rng,
)
from folio.utils.json_norm import stable_json_dumps

__all__ = [
    "generate_name",
    "generate_prompt",
    "load_config",
    "resort_page",
    "run_checks",
    "run_visual",
    "validate_file",
    "validate_instance",
]


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def load_config(root: Path, config_path: Optional[str | Path] = None) -> SuiteConfig:
    """Explicit config file if given, else ``folio.yaml`` under *root*, else defaults."""
    if config_path is not None:
        return SuiteConfig.from_yaml(_to_path(config_path))
    return SuiteConfig.discover(root)


# ── verification ────────────────────────────────────────────────────


def run_checks(
    root: str | Path,
    *,
    config_path: Optional[str | Path] = None,
    out_path: Optional[str | Path] = None,
    ci_mode: bool = False,
    checks: Optional[list[Any]] = None,
) -> CheckReport:
    """Run the build-verification suite against a site source tree.

    Raises
    ------
    FileNotFoundError
        If *root* does not exist.
    ConfigError
        If the config file is malformed.
    """
    root_p = _to_path(root).resolve()
    if not root_p.is_dir():
        raise FileNotFoundError(f"run_checks: root does not exist: {root_p}")
    config = load_config(root_p, config_path)
    return _run_checks(
        root_p,
        checks if checks is not None else default_checks(config),
        config=config,
        out_path=_to_path(out_path) if out_path is not None else None,
        ci_mode=ci_mode,
    )


def run_visual(
    root: str | Path,
    *,
    config_path: Optional[str | Path] = None,
    update: bool = False,
    browsers: Optional[Iterable[str]] = None,
    out_path: Optional[str | Path] = None,
    ci_mode: bool = False,
) -> CheckReport:
    """Screenshot every route in every profile and compare with baselines.

    Raises ``SiteNotBuiltError`` when the built site directory is missing.
    """
    from folio.visual.harness import VisualRegressionRunner, build_visual_report

    root_p = _to_path(root).resolve()
    if not root_p.is_dir():
        raise FileNotFoundError(f"run_visual: root does not exist: {root_p}")
    config = load_config(root_p, config_path)
    runner = VisualRegressionRunner(config, update=update, browsers=browsers)
    findings = runner.run(root_p)
    report = build_visual_report(root_p, config, findings, runner)
    if ci_mode:
        report.run_id = deterministic_run_id(root_p.as_posix(), "visual")
        report.created_at = deterministic_timestamp(ci_mode=True)

    report_dict = report.to_dict()
    validate_instance(report_dict, "check_report.schema.json")
    if out_path is not None:
        out = _to_path(out_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(stable_json_dumps(report_dict), encoding="utf-8")
    return report


# ── generators ──────────────────────────────────────────────────────


def generate_name(
    *,
    include_zi: bool = True,
    include_epithet: bool = False,
    count: int = 1,
    seed: Optional[int] = None,
    pools_path: Optional[str | Path] = None,
    ci_mode: bool = False,
) -> list[str]:
    """Generate *count* wuxia names."""
    rng = make_rng(seed, ci_mode=ci_mode)
    if pools_path is not None:
        gen = WuxiaNameGenerator(load_pools(_to_path(pools_path)), rng=rng)
    else:
        gen = WuxiaNameGenerator.bundled(rng=rng)
    return [
        gen.generate(include_zi=include_zi, include_epithet=include_epithet)
        for _ in range(count)
    ]


def generate_prompt(
    *,
    shuffle: bool = False,
    include_twist: bool = False,
    count: int = 1,
    seed: Optional[int] = None,
    pools_path: Optional[str | Path] = None,
    ci_mode: bool = False,
) -> list[str]:
    """Generate *count* writing prompts."""
    rng = make_rng(seed, ci_mode=ci_mode)
    if pools_path is not None:
        gen = PromptGenerator(load_pools(_to_path(pools_path)), rng=rng)
    else:
        gen = PromptGenerator.bundled(rng=rng)
    return [gen.generate(shuffle=shuffle, include_twist=include_twist) for _ in range(count)]


# ── timeline ────────────────────────────────────────────────────────


def resort_page(
    path: str | Path,
    key: SortKey | str,
    *,
    descending: bool = True,
    selector: str = DEFAULT_CONTAINER,
) -> tuple[str, list[WorkItem] | None]:
    """Re-sort the work list in a page file.

    Returns the new page text and the items in their new order; the items
    are ``None`` (and the text unchanged) when *selector* matches nothing.
    """
    text = _to_path(path).read_text(encoding="utf-8")
    return resort_html(text, SortKey(key), selector=selector, descending=descending)
