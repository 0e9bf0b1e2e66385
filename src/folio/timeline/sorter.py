"""Works-timeline ordering: pure key extractors and a stable re-sort.

The active key is always passed in explicitly; nothing here keeps state
between calls.
"""

from __future__ import annotations

from typing import Callable, Iterable, Union

from folio.model import SortKey
from folio.model.work_item import WorkItem

Comparable = Union[str, int]


def date_key(item: WorkItem) -> str:
    return item.sort_date


def length_key(item: WorkItem) -> int:
    return item.word_count


def color_key(item: WorkItem) -> str:
    # Legacy: orders hex-like ids as plain strings.
    return item.color_tag


KEY_EXTRACTORS: dict[SortKey, Callable[[WorkItem], Comparable]] = {
    SortKey.DATE: date_key,
    SortKey.LENGTH: length_key,
    SortKey.COLOR: color_key,
}

# Label classes whose visibility depends on the active key.
AUX_LABELS: dict[SortKey, str] = {
    SortKey.LENGTH: "sort-words",
    SortKey.COLOR: "sort-color",
}


def resort(
    items: Iterable[WorkItem],
    key: SortKey,
    *,
    descending: bool = True,
) -> list[WorkItem]:
    """Return *items* ordered by *key*.

    Stable in both directions: items with equal keys keep their input
    order.  Empty input gives an empty list.
    """
    return sorted(items, key=KEY_EXTRACTORS[SortKey(key)], reverse=descending)


def visibility_for(key: SortKey) -> dict[str, bool]:
    """Map each auxiliary label class to whether it shows under *key*.

    Word counts only make sense while sorting by length, color swatches
    only while sorting by color.
    """
    key = SortKey(key)
    return {label: k == key for k, label in AUX_LABELS.items()}
