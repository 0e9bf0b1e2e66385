"""CLI entry-point for folio.

Usage:
    python -m folio check [ROOT] [--config FILE] [--json] [--out FILE] [--strict] [--ci]
    python -m folio visual [ROOT] [--config FILE] [--update] [--browser NAME ...] [--json] [--ci]
    python -m folio sort PAGE --by {date,length,color} [--ascending] [--container SEL]
                         [--out FILE | --in-place] [--json]
    python -m folio name [--no-zi] [--epithet] [--count N] [--seed N] [--pools FILE] [--copy] [--ci]
    python -m folio prompt [--shuffle] [--twist] [--count N] [--seed N] [--pools FILE] [--copy] [--ci]
    python -m folio validate <instance.json> <schema_name>
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import jsonschema
from rich.console import Console
from rich.table import Table

from folio import __version__
from folio.api import (
    generate_name as _api_generate_name,
    generate_prompt as _api_generate_prompt,
    resort_page as _api_resort_page,
    run_checks as _api_run_checks,
    run_visual as _api_run_visual,
    validate_file as _api_validate_file,
)
from folio.clipboard import copy_to_clipboard
from folio.core.config import ConfigError
from folio.generators.pools import PoolConfigError
from folio.model import SortKey
from folio.model.report import CheckReport
from folio.policy.exit_codes import (
    DEFAULT_POLICY,
    STRICT_POLICY,
    exit_code_for_worst_severity,
)
from folio.utils.determinism import env_requires_ci_mode
from folio.utils.exit_codes import ExitCode
from folio.utils.json_norm import stable_json_dumps

_logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_SEVERITY_STYLE = {"error": "bold red", "warning": "yellow", "info": "cyan"}


def _require_ci_flag(ci_mode: bool, *, what: str) -> int | None:
    """If CI env is active but --ci was not passed, emit an error and return ExitCode.ERROR."""
    if env_requires_ci_mode() and not ci_mode:
        print(
            f"error: CI environment requires deterministic mode for {what}. "
            f"Re-run with --ci/--deterministic.",
            file=sys.stderr,
        )
        return ExitCode.ERROR
    return None


def _print_report(report: CheckReport) -> None:
    """Pretty-print findings and totals to stderr."""
    console = Console(stderr=True)
    if report.findings:
        table = Table(title=f"folio {report.suite}")
        for header in ("Severity", "Rule", "Location", "Message"):
            table.add_column(header)
        for f in report.findings:
            loc = f.location.path or "-"
            if f.location.line:
                loc = f"{loc}:{f.location.line}"
            sev = f.severity.value
            table.add_row(
                f"[{_SEVERITY_STYLE[sev]}]{sev}[/]",
                f.rule_id,
                loc,
                f.message,
            )
        console.print(table)

    counts = ", ".join(
        f"{sev}={report.count(sev)}"
        for sev in sorted({f.severity for f in report.findings}, key=lambda s: s.value)
    )
    console.print(
        f"status: [bold]{report.status}[/]  findings: {len(report.findings)}"
        + (f"  ({counts})" if counts else "")
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="folio",
        description="Widget logic and build verification for an author website.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log at DEBUG level.",
    )
    sub = p.add_subparsers(dest="command")

    def add_ci(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--ci",
            "--deterministic",
            dest="ci_mode",
            action="store_true",
            default=False,
            help="Enable deterministic output (fixed ids, timestamps, seeds).",
        )

    # ── check ───────────────────────────────────────────────────────
    check_p = sub.add_parser("check", help="Run the build-verification checks.")
    check_p.add_argument("root", nargs="?", type=Path, default=Path("."), help="Site source root.")
    check_p.add_argument("--config", type=Path, default=None, help="Path to folio.yaml.")
    check_p.add_argument(
        "--json", dest="json_out", action="store_true", default=False,
        help="Print the report JSON to stdout.",
    )
    check_p.add_argument("--out", type=Path, default=None, help="Write the report JSON to this file.")
    check_p.add_argument(
        "--strict", action="store_true", default=False,
        help="Fail on warnings as well as errors.",
    )
    add_ci(check_p)

    # ── visual ──────────────────────────────────────────────────────
    vis_p = sub.add_parser("visual", help="Screenshot routes and compare with baselines.")
    vis_p.add_argument("root", nargs="?", type=Path, default=Path("."), help="Site source root.")
    vis_p.add_argument("--config", type=Path, default=None, help="Path to folio.yaml.")
    vis_p.add_argument(
        "--update", action="store_true", default=False,
        help="Rewrite baselines from the current screenshots.",
    )
    vis_p.add_argument(
        "--browser", dest="browsers", action="append", default=None,
        choices=("chromium", "firefox", "webkit"),
        help="Limit to this engine (repeatable).",
    )
    vis_p.add_argument(
        "--json", dest="json_out", action="store_true", default=False,
        help="Print the report JSON to stdout.",
    )
    vis_p.add_argument("--out", type=Path, default=None, help="Write the report JSON to this file.")
    add_ci(vis_p)

    # ── sort ────────────────────────────────────────────────────────
    sort_p = sub.add_parser("sort", help="Re-sort the work list in a page.")
    sort_p.add_argument("page", type=Path, help="Page file containing the list.")
    sort_p.add_argument(
        "--by", required=True, choices=[k.value for k in SortKey],
        help="Sort key (color is legacy).",
    )
    sort_p.add_argument(
        "--ascending", action="store_true", default=False,
        help="Oldest/shortest first instead of newest/longest first.",
    )
    sort_p.add_argument(
        "--container", default="#works",
        help="CSS selector of the list container (default: #works).",
    )
    dest = sort_p.add_mutually_exclusive_group()
    dest.add_argument("--out", type=Path, default=None, help="Write the re-sorted page here.")
    dest.add_argument(
        "--in-place", dest="in_place", action="store_true", default=False,
        help="Rewrite PAGE.",
    )
    sort_p.add_argument(
        "--json", dest="json_out", action="store_true", default=False,
        help="Print the sorted items as JSON instead of the page.",
    )

    # ── name ────────────────────────────────────────────────────────
    name_p = sub.add_parser("name", help="Generate wuxia names.")
    name_p.add_argument(
        "--no-zi", dest="include_zi", action="store_false", default=True,
        help="Omit the courtesy name.",
    )
    name_p.add_argument(
        "--epithet", dest="include_epithet", action="store_true", default=False,
        help="Append an epithet.",
    )

    # ── prompt ──────────────────────────────────────────────────────
    prompt_p = sub.add_parser("prompt", help="Generate writing prompts.")
    prompt_p.add_argument(
        "--shuffle", action="store_true", default=False,
        help="Shuffle the order of the prompt's sentences.",
    )
    prompt_p.add_argument(
        "--twist", dest="include_twist", action="store_true", default=False,
        help="Add a twist sentence.",
    )

    for gen_p in (name_p, prompt_p):
        gen_p.add_argument("--count", type=int, default=1, help="How many to generate.")
        gen_p.add_argument("--seed", type=int, default=None, help="Seed the random generator.")
        gen_p.add_argument("--pools", type=Path, default=None, help="YAML fragment-pool file.")
        gen_p.add_argument(
            "--copy", action="store_true", default=False,
            help="Copy the (last) result to the clipboard.",
        )
        add_ci(gen_p)

    # ── validate ────────────────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a JSON instance against a bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")
    val_p.add_argument("schema_name", help="Schema filename, e.g. check_report.schema.json")

    return p


# ── handlers ────────────────────────────────────────────────────────


def _emit_report(report: CheckReport, args: argparse.Namespace) -> None:
    if args.json_out:
        sys.stdout.write(stable_json_dumps(report.to_dict()))
    _print_report(report)


def _handle_check(args: argparse.Namespace) -> int:
    rc = _require_ci_flag(args.ci_mode, what="check")
    if rc is not None:
        return rc
    report = _api_run_checks(
        args.root,
        config_path=args.config,
        out_path=args.out,
        ci_mode=args.ci_mode,
    )
    _emit_report(report, args)
    policy = STRICT_POLICY if args.strict else DEFAULT_POLICY
    return exit_code_for_worst_severity(report.worst_severity, policy=policy)


def _handle_visual(args: argparse.Namespace) -> int:
    rc = _require_ci_flag(args.ci_mode, what="visual")
    if rc is not None:
        return rc
    report = _api_run_visual(
        args.root,
        config_path=args.config,
        update=args.update,
        browsers=args.browsers,
        out_path=args.out,
        ci_mode=args.ci_mode,
    )
    _emit_report(report, args)
    return exit_code_for_worst_severity(report.worst_severity)


def _handle_sort(args: argparse.Namespace) -> int:
    html, items = _api_resort_page(
        args.page,
        args.by,
        descending=not args.ascending,
        selector=args.container,
    )
    if items is None:
        print(f"warning: no element matches {args.container!r} in {args.page}", file=sys.stderr)
        return ExitCode.SUCCESS

    if args.in_place:
        args.page.write_text(html, encoding="utf-8")
    elif args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(html, encoding="utf-8")

    if args.json_out:
        sys.stdout.write(stable_json_dumps({"sort_key": args.by, "items": items}))
    elif not args.in_place and args.out is None:
        sys.stdout.write(html)
    return ExitCode.SUCCESS


def _handle_generate(args: argparse.Namespace) -> int:
    if args.count < 1:
        print("error: --count must be at least 1", file=sys.stderr)
        return ExitCode.ERROR
    common = dict(count=args.count, seed=args.seed, pools_path=args.pools, ci_mode=args.ci_mode)
    if args.command == "name":
        results = _api_generate_name(
            include_zi=args.include_zi,
            include_epithet=args.include_epithet,
            **common,
        )
    else:
        results = _api_generate_prompt(
            shuffle=args.shuffle,
            include_twist=args.include_twist,
            **common,
        )
    for text in results:
        print(text)
    if args.copy and copy_to_clipboard(results[-1]):
        print("Copied to clipboard.", file=sys.stderr)
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    try:
        _api_validate_file(Path(args.instance), args.schema_name)
    except jsonschema.exceptions.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


_HANDLERS = {
    "check": _handle_check,
    "visual": _handle_visual,
    "sort": _handle_sort,
    "name": _handle_generate,
    "prompt": _handle_generate,
    "validate": _handle_validate,
}


def main(argv: list[str] | None = None) -> int:
    """Entry-point; returns an exit code (0 = ok, 1 = violation, 2 = error)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    handler = _HANDLERS.get(args.command)
    if handler is None:
        parser.print_help(sys.stderr)
        return ExitCode.ERROR

    try:
        return int(handler(args))
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
    except (ConfigError, PoolConfigError, ValueError) as e:
        # SiteNotBuiltError is a ConfigError
        print(f"error: {e}", file=sys.stderr)
    except jsonschema.exceptions.ValidationError as e:
        _logger.error("Report failed its own schema: %s", e.message)
    return ExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
