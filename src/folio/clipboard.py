"""Copy generated text to the system clipboard.

Uses whichever platform clipboard command is on ``PATH``.  Failure is never
fatal: the caller already has the text and prints it.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys

_logger = logging.getLogger(__name__)

# (executable, extra args), tried in order
_COMMANDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("pbcopy", ()),
    ("wl-copy", ()),
    ("xclip", ("-selection", "clipboard")),
    ("xsel", ("--clipboard", "--input")),
    ("clip", ()),
)


def clipboard_command() -> list[str] | None:
    """Return the argv of the first available clipboard command, or None."""
    for exe, args in _COMMANDS:
        path = shutil.which(exe)
        if path:
            return [path, *args]
    return None


def copy_to_clipboard(text: str) -> bool:
    """Copy ``text``; return True on success, False (with a warning) otherwise."""
    argv = clipboard_command()
    if argv is None:
        _logger.warning("No clipboard command available on %s; text not copied", sys.platform)
        return False
    try:
        subprocess.run(argv, input=text, text=True, check=True, timeout=5)
    except (OSError, subprocess.SubprocessError) as e:
        _logger.warning("Copy to clipboard failed: %s", e)
        return False
    _logger.debug("Copied %d characters with %s", len(text), argv[0])
    return True
