"""Apply a timeline re-sort to a rendered HTML tree.

Work items are the direct child elements of a container that carry
``data-date``, ``data-words`` or ``data-color``.  Re-sorting moves those
elements in place and toggles the ``hidden`` attribute on key-dependent
labels.  A missing container is logged and left alone.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from folio.model import SortKey
from folio.model.work_item import WorkItem
from folio.timeline.sorter import KEY_EXTRACTORS, visibility_for
from folio.utils.pages import parse_html, split_front_matter

_logger = logging.getLogger(__name__)

DEFAULT_CONTAINER = "#works"

_ITEM_ATTRS = ("data-date", "data-words", "data-color")


def _is_item(node) -> bool:
    return isinstance(node, Tag) and any(node.has_attr(a) for a in _ITEM_ATTRS)


def item_from_tag(tag: Tag) -> WorkItem:
    """Build a ``WorkItem`` from an element's data attributes."""
    raw_words = (tag.get("data-words") or "").replace(",", "").strip()
    try:
        words = int(raw_words)
    except ValueError:
        _logger.debug("non-numeric data-words %r; counted as 0", raw_words)
        words = 0
    title = tag.get("data-title") or tag.get_text(" ", strip=True)
    return WorkItem(
        sort_date=(tag.get("data-date") or "").strip(),
        word_count=words,
        color_tag=(tag.get("data-color") or "").strip(),
        title=title,
    )


def item_tags(container: Tag) -> list[Tag]:
    return [child for child in container.children if _is_item(child)]


def items_from_container(container: Tag) -> list[WorkItem]:
    return [item_from_tag(tag) for tag in item_tags(container)]


def apply_visibility(container: Tag, key: SortKey) -> None:
    """Show or hide every key-dependent label inside *container*."""
    for label, shown in visibility_for(key).items():
        for tag in container.select(f".{label}"):
            if shown:
                if tag.has_attr("hidden"):
                    del tag["hidden"]
            else:
                tag["hidden"] = ""


def resort_container(
    soup: BeautifulSoup,
    selector: str,
    key: SortKey,
    *,
    descending: bool = True,
) -> list[WorkItem] | None:
    """Re-order the item children of ``soup.select_one(selector)`` in place.

    Returns the items in their new order, or ``None`` when the container
    is not in the document.
    """
    container = soup.select_one(selector)
    if container is None:
        _logger.warning("sort target %r not found; nothing re-sorted", selector)
        return None

    extract = KEY_EXTRACTORS[SortKey(key)]
    tags = item_tags(container)
    pairs = sorted(
        ((item_from_tag(tag), tag) for tag in tags),
        key=lambda pair: extract(pair[0]),
        reverse=descending,
    )

    # Sorted items fill the slots the items held; other children stay put.
    markers = []
    for tag in tags:
        marker = soup.new_tag("folio-slot")
        tag.replace_with(marker)
        markers.append(marker)
    for marker, (_, tag) in zip(markers, pairs):
        marker.replace_with(tag)

    apply_visibility(container, key)
    return [item for item, _ in pairs]


def resort_html(
    text: str,
    key: SortKey,
    *,
    selector: str = DEFAULT_CONTAINER,
    descending: bool = True,
) -> tuple[str, list[WorkItem] | None]:
    """Re-sort a page's markup; Jekyll front matter is kept verbatim."""
    source = split_front_matter(text)
    soup = parse_html(source.body)
    items = resort_container(soup, selector, key, descending=descending)
    if items is None:
        return text, None
    return source.front_matter + str(soup), items
