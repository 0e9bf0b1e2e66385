"""Shared utilities for folio."""

from folio.utils.determinism import (
    FIXED_SEED,
    FIXED_TIMESTAMP,
    deterministic_run_id,
    deterministic_timestamp,
    make_rng,
)
from folio.utils.exit_codes import ExitCode

__all__ = [
    "ExitCode",
    "FIXED_SEED",
    "FIXED_TIMESTAMP",
    "deterministic_run_id",
    "deterministic_timestamp",
    "make_rng",
]
