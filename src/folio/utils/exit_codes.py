"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — no hard check failed (warnings may have been logged)
  1   Violation — at least one hard check failed, or a visual diff
  2   Error — usage error, missing path, bad config, site not built
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
