"""Tests for applying a re-sort to page markup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from folio.api import resort_page
from folio.model import SortKey
from folio.timeline.dom import item_from_tag, resort_container, resort_html
from folio.utils.pages import parse_html

FIXTURE_SITE = Path(__file__).resolve().parent / "fixtures" / "site"

WORKS = """<ul id="works">
<li data-date="2018-05-01" data-words="12,000" data-title="Plum Rain"><span class="sort-words" hidden>12,000</span></li>
<li data-date="2022-11-20" data-words="80000" data-title="Iron Lotus"><span class="sort-words" hidden>80,000</span></li>
<li data-date="2020-01-01" data-words="n/a" data-title="Fragments"><span class="sort-words" hidden>?</span></li>
</ul>"""


def _titles(soup) -> list[str]:
    return [li["data-title"] for li in soup.select("#works > li")]


class TestItemFromTag:
    def test_reads_data_attributes(self):
        soup = parse_html(WORKS)
        item = item_from_tag(soup.select_one("li"))
        assert item.sort_date == "2018-05-01"
        assert item.word_count == 12000
        assert item.title == "Plum Rain"

    def test_non_numeric_words_count_as_zero(self):
        soup = parse_html(WORKS)
        item = item_from_tag(soup.select("li")[2])
        assert item.word_count == 0

    def test_title_falls_back_to_text(self):
        soup = parse_html('<div data-date="2020-01-01"> Moon Gate </div>')
        assert item_from_tag(soup.div).title == "Moon Gate"


class TestResortContainer:
    def test_reorders_children_by_date(self):
        soup = parse_html(WORKS)
        items = resort_container(soup, "#works", SortKey.DATE)
        assert [i.title for i in items] == ["Iron Lotus", "Fragments", "Plum Rain"]
        assert _titles(soup) == ["Iron Lotus", "Fragments", "Plum Rain"]

    def test_reorders_children_by_length_ascending(self):
        soup = parse_html(WORKS)
        resort_container(soup, "#works", SortKey.LENGTH, descending=False)
        assert _titles(soup) == ["Fragments", "Plum Rain", "Iron Lotus"]

    def test_length_sort_shows_word_labels(self):
        soup = parse_html(WORKS)
        resort_container(soup, "#works", SortKey.LENGTH)
        assert all(not span.has_attr("hidden") for span in soup.select(".sort-words"))

    def test_date_sort_hides_word_labels(self):
        soup = parse_html(WORKS.replace(" hidden", ""))
        resort_container(soup, "#works", SortKey.DATE)
        assert all(span.has_attr("hidden") for span in soup.select(".sort-words"))

    def test_missing_container_is_a_logged_noop(self, caplog):
        soup = parse_html(WORKS)
        before = str(soup)
        with caplog.at_level(logging.WARNING, logger="folio.timeline.dom"):
            assert resort_container(soup, "#timeline", SortKey.DATE) is None
        assert str(soup) == before
        assert "#timeline" in caplog.text

    def test_empty_container(self):
        soup = parse_html('<div id="works"></div>')
        assert resort_container(soup, "#works", SortKey.DATE) == []


class TestResortHtml:
    def test_front_matter_is_kept_verbatim(self):
        text = "---\ntitle: Books\npermalink: /books/\n---\n" + WORKS
        out, items = resort_html(text, SortKey.DATE)
        assert out.startswith("---\ntitle: Books\npermalink: /books/\n---")
        assert items is not None and items[0].title == "Iron Lotus"

    def test_missing_container_returns_text_unchanged(self):
        text = "<p>no list here</p>"
        out, items = resort_html(text, SortKey.DATE)
        assert out == text
        assert items is None

    def test_resort_page_on_fixture(self):
        _, items = resort_page(FIXTURE_SITE / "_pages" / "books.html", "length")
        assert [i.title for i in items] == ["The River Sect", "Bamboo and Ash", "Lantern Night"]


WORKS_WITH_FOOTER = """<ul id="works">
<li data-date="2019-01-01" data-title="A">A</li>
<li data-date="2020-09-10" data-title="B">B</li>
<li data-date="2018-06-19" data-title="C">C</li>
<li class="more">All works</li>
</ul>"""


class TestResortKeepsLayout:
    def test_trailing_non_item_child_stays_last(self):
        soup = parse_html(WORKS_WITH_FOOTER)
        resort_container(soup, "#works", SortKey.DATE)
        children = [li.get_text(strip=True) for li in soup.select("#works > li")]
        assert children == ["B", "A", "C", "All works"]

    def test_whitespace_between_items_is_kept(self):
        out, _ = resort_html(WORKS_WITH_FOOTER, SortKey.DATE)
        assert '<li data-date="2020-09-10" data-title="B">B</li>\n<li data-date="2019-01-01"' in out
        assert "folio-slot" not in out

    @pytest.mark.parametrize("first", list(SortKey))
    @pytest.mark.parametrize("second", list(SortKey))
    def test_switching_keys_keeps_every_item(self, first: SortKey, second: SortKey):
        soup = parse_html(WORKS)
        resort_container(soup, "#works", first)
        items = resort_container(soup, "#works", second)
        assert sorted(i.title for i in items) == ["Fragments", "Iron Lotus", "Plum Rain"]
        assert sorted(_titles(soup)) == ["Fragments", "Iron Lotus", "Plum Rain"]
        assert len(soup.select("#works > li")) == 3

    @pytest.mark.parametrize("key", list(SortKey))
    def test_resorting_twice_is_a_noop(self, key: SortKey):
        once, _ = resort_html(WORKS, key)
        twice, _ = resort_html(once, key)
        assert twice == once
