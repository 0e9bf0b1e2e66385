"""WorkItem: one entry in the works timeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WorkItem:
    """Immutable display record built from static markup.

    ``sort_date`` is an ISO-like token (``YYYY-MM-DD``) so plain string
    comparison orders it chronologically.
    """

    sort_date: str = ""
    word_count: int = 0
    color_tag: str = ""
    title: str = ""

    def to_dict(self) -> dict:
        return {
            "sort_date": self.sort_date,
            "word_count": self.word_count,
            "color_tag": self.color_tag,
            "title": self.title,
        }
