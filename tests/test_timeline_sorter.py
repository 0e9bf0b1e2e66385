"""Tests for the pure timeline ordering functions."""

from __future__ import annotations

import pytest

from folio.model import SortKey
from folio.model.work_item import WorkItem
from folio.timeline import resort, visibility_for
from folio.timeline.sorter import color_key, date_key, length_key


def _item(title: str, date: str = "", words: int = 0, color: str = "") -> WorkItem:
    return WorkItem(sort_date=date, word_count=words, color_tag=color, title=title)


class TestKeyExtractors:
    def test_date_key_is_raw_token(self):
        assert date_key(_item("a", date="2021-03-04")) == "2021-03-04"

    def test_length_key_is_word_count(self):
        assert length_key(_item("a", words=1200)) == 1200

    def test_color_key_is_raw_tag(self):
        assert color_key(_item("a", color="#ff0000")) == "#ff0000"


class TestResort:
    """Ordering, direction and stability."""

    def test_date_descending_newest_first(self):
        items = [
            _item("old", date="2015-01-01"),
            _item("new", date="2023-06-01"),
            _item("mid", date="2019-12-31"),
        ]
        out = resort(items, SortKey.DATE)
        assert [i.title for i in out] == ["new", "mid", "old"]

    def test_date_ascending_oldest_first(self):
        items = [_item("b", date="2020-02-02"), _item("a", date="2010-01-01")]
        out = resort(items, SortKey.DATE, descending=False)
        assert [i.title for i in out] == ["a", "b"]

    def test_length_descending_longest_first(self):
        items = [_item("short", words=900), _item("novel", words=95000), _item("novella", words=30000)]
        out = resort(items, SortKey.LENGTH)
        assert [i.title for i in out] == ["novel", "novella", "short"]

    def test_length_is_numeric_not_lexical(self):
        items = [_item("nine", words=9), _item("ten", words=10)]
        assert [i.title for i in resort(items, SortKey.LENGTH)] == ["ten", "nine"]

    @pytest.mark.parametrize("descending", [True, False])
    def test_ties_keep_input_order(self, descending: bool):
        items = [
            _item("first", words=500),
            _item("second", words=500),
            _item("third", words=500),
        ]
        out = resort(items, SortKey.LENGTH, descending=descending)
        assert [i.title for i in out] == ["first", "second", "third"]

    def test_color_is_plain_string_order(self):
        items = [_item("a", color="#0a0a0a"), _item("b", color="#ff0000"), _item("c", color="#1b1b1b")]
        out = resort(items, SortKey.COLOR, descending=False)
        assert [i.title for i in out] == ["a", "c", "b"]

    def test_empty_input(self):
        assert resort([], SortKey.DATE) == []

    def test_accepts_key_value_string(self):
        items = [_item("a", words=1), _item("b", words=2)]
        assert [i.title for i in resort(items, "length")] == ["b", "a"]

    def test_does_not_mutate_input(self):
        items = [_item("a", words=1), _item("b", words=2)]
        resort(items, SortKey.LENGTH)
        assert [i.title for i in items] == ["a", "b"]


class TestVisibility:
    def test_length_shows_word_counts_only(self):
        assert visibility_for(SortKey.LENGTH) == {"sort-words": True, "sort-color": False}

    def test_color_shows_swatches_only(self):
        assert visibility_for(SortKey.COLOR) == {"sort-words": False, "sort-color": True}

    def test_date_hides_all_labels(self):
        assert visibility_for(SortKey.DATE) == {"sort-words": False, "sort-color": False}


SAMPLE = [
    _item("Plum Rain", date="2018-05-01", words=12000, color="#aa3300"),
    _item("Iron Lotus", date="2022-11-20", words=80000, color="#0033aa"),
    _item("Fragments", date="2020-01-01", words=0, color="#33aa00"),
    _item("Moon Gate", date="2020-01-01", words=12000, color="#0033aa"),
]


class TestResortProperties:
    """Idempotence, item preservation and the reference orderings."""

    @pytest.mark.parametrize("key", list(SortKey))
    @pytest.mark.parametrize("descending", [True, False])
    def test_sorting_sorted_output_is_a_noop(self, key: SortKey, descending: bool):
        once = resort(SAMPLE, key, descending=descending)
        assert resort(once, key, descending=descending) == once

    @pytest.mark.parametrize("first", list(SortKey))
    @pytest.mark.parametrize("second", list(SortKey))
    def test_switching_keys_keeps_every_item(self, first: SortKey, second: SortKey):
        out = resort(resort(SAMPLE, first), second)
        assert len(out) == len(SAMPLE)
        assert sorted(i.title for i in out) == sorted(i.title for i in SAMPLE)

    def test_word_counts_descending(self):
        items = [_item(str(n), words=n) for n in (170, 1200, 90)]
        assert [i.word_count for i in resort(items, SortKey.LENGTH)] == [1200, 170, 90]

    def test_dates_descending(self):
        items = [_item(d, date=d) for d in ("2019-01-01", "2020-09-10", "2018-06-19")]
        assert [i.sort_date for i in resort(items, SortKey.DATE)] == [
            "2020-09-10",
            "2019-01-01",
            "2018-06-19",
        ]
