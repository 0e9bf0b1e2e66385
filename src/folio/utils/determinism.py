"""Determinism utilities for CI-reproducible output.

When --ci / --deterministic mode is enabled:
- Timestamps are fixed to a known epoch
- Run IDs are derived from the checked root and suite name
- Random generators are seeded with a fixed value
"""

from __future__ import annotations

import hashlib
import os
import random
from datetime import datetime, timezone

# Fixed timestamp for CI mode (ISO 8601 with timezone)
FIXED_TIMESTAMP = "2000-01-01T00:00:00+00:00"

# Fixed seed for the fragment generators
FIXED_SEED = 42


def env_requires_ci_mode() -> bool:
    """Return True when the environment signals deterministic mode is required."""
    if os.getenv("FOLIO_DETERMINISTIC") == "1":
        return True
    return os.getenv("CI", "").lower() in ("1", "true", "yes", "on")


def make_rng(seed: int | None = None, *, ci_mode: bool = False) -> random.Random:
    """Return a private ``random.Random``.

    An explicit *seed* wins; otherwise CI mode uses ``FIXED_SEED`` and
    normal runs use system entropy.
    """
    if seed is not None:
        return random.Random(seed)
    if ci_mode:
        return random.Random(FIXED_SEED)
    return random.Random()


def deterministic_timestamp(ci_mode: bool = False) -> str:
    """Current UTC time in ISO 8601, or ``FIXED_TIMESTAMP`` in CI mode."""
    if ci_mode:
        return FIXED_TIMESTAMP
    return datetime.now(timezone.utc).isoformat()


def deterministic_run_id(*parts: str) -> str:
    """Stable run id derived from *parts* (root path, suite name, ...)."""
    digest = hashlib.sha256("|".join(parts).encode()).hexdigest()
    return f"{digest[:8]}-{digest[8:12]}-{digest[12:16]}-{digest[16:20]}-{digest[20:32]}"
