"""Works timeline: sort by date, length or (legacy) color."""

from folio.timeline.sorter import (
    KEY_EXTRACTORS,
    color_key,
    date_key,
    length_key,
    resort,
    visibility_for,
)

__all__ = [
    "KEY_EXTRACTORS",
    "color_key",
    "date_key",
    "length_key",
    "resort",
    "visibility_for",
]
