"""folio — widget logic and build verification for an author website."""

__all__ = [
    "__version__",
    "run_checks",
    "run_visual",
    "generate_name",
    "generate_prompt",
    "resort_page",
    "validate_instance",
]
__version__ = "0.3.0"

# Programmatic entrypoints, see folio/api.py.
from folio.api import (  # noqa: E402, F401
    generate_name,
    generate_prompt,
    resort_page,
    run_checks,
    run_visual,
    validate_instance,
)
