"""CI-guard enforcement: check must be run with --ci under CI=true."""
from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURE_SITE = REPO_ROOT / "tests" / "fixtures" / "site"


def _env(**extra: str) -> dict[str, str]:
    env = os.environ.copy()
    env.pop("CI", None)
    env.pop("FOLIO_DETERMINISTIC", None)
    env["PYTHONPATH"] = str(REPO_ROOT / "src")
    env.update(extra)
    return env


def test_ci_env_requires_ci_flag_for_check() -> None:
    p = subprocess.run(
        [sys.executable, "-m", "folio", "check", str(FIXTURE_SITE)],
        env=_env(CI="true"),
        capture_output=True,
        text=True,
    )
    assert p.returncode == 2
    assert p.stderr.strip() == (
        "error: CI environment requires deterministic mode for check. "
        "Re-run with --ci/--deterministic."
    )


def test_ci_flag_satisfies_guard() -> None:
    p = subprocess.run(
        [sys.executable, "-m", "folio", "check", str(FIXTURE_SITE), "--ci"],
        env=_env(FOLIO_DETERMINISTIC="1"),
        capture_output=True,
        text=True,
    )
    assert p.returncode == 0, p.stderr
