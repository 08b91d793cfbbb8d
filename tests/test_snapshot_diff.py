"""Tests for snapshot assembly and the diff engine."""

from datetime import datetime, timezone

from newsflow.models.schemas import Feed, Item
from newsflow.services.diff import diff
from newsflow.services.snapshot import assemble

RUN_AT = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
LABEL = "TradingView News Flow - crypto"


def _item(n: int) -> Item:
    return Item(
        id=f"https://example.com/news/{n}",
        title=f"Headline {n}",
        link=f"https://example.com/news/{n}",
        source="Reuters",
        published_at="2026-10-19T10:00:00.000Z",
    )


def _feed(ids: list[int]) -> Feed:
    return Feed(updated_at="2026-10-18T12:00:00.000Z", source=LABEL, items=[_item(n) for n in ids])


class TestAssemble:
    def test_caps_to_max_items_from_the_front(self) -> None:
        feed = assemble([_item(n) for n in range(10)], RUN_AT, 4, LABEL)
        assert [it.id for it in feed.items] == [_item(n).id for n in range(4)]

    def test_fewer_items_than_cap(self) -> None:
        feed = assemble([_item(1), _item(2)], RUN_AT, 40, LABEL)
        assert len(feed.items) == 2

    def test_zero_cap(self) -> None:
        assert assemble([_item(1)], RUN_AT, 0, LABEL).items == []

    def test_metadata(self) -> None:
        feed = assemble([], RUN_AT, 40, LABEL)
        assert feed.updated_at == "2026-10-19T12:00:00.000Z"
        assert feed.source == LABEL
        assert feed.items == []

    def test_does_not_reorder(self) -> None:
        feed = assemble([_item(3), _item(1), _item(2)], RUN_AT, 40, LABEL)
        assert [it.title for it in feed.items] == ["Headline 3", "Headline 1", "Headline 2"]


class TestDiff:
    def test_missing_baseline_reports_everything(self) -> None:
        current = _feed([1, 2, 3])
        delta = diff(current, None)
        assert delta.new_items == current.items
        assert delta.updated_at == current.updated_at

    def test_only_unseen_ids_are_new(self) -> None:
        delta = diff(_feed([5, 4, 3, 2]), _feed([3, 2, 1]))
        assert [it.id for it in delta.new_items] == [_item(5).id, _item(4).id]

    def test_order_follows_current_feed(self) -> None:
        delta = diff(_feed([9, 2, 7, 1, 8]), _feed([2, 1]))
        assert [it.title for it in delta.new_items] == ["Headline 9", "Headline 7", "Headline 8"]

    def test_matches_set_definition(self) -> None:
        cases = [([], []), ([1], []), ([], [1]), ([1, 2, 3], [1, 2, 3]), ([4, 1, 6], [6, 7])]
        for cur_ids, prev_ids in cases:
            current, previous = _feed(cur_ids), _feed(prev_ids)
            known = {p.id for p in previous.items}
            expected = [i for i in current.items if i.id not in known]
            assert diff(current, previous).new_items == expected

    def test_nothing_new(self) -> None:
        assert diff(_feed([1, 2]), _feed([2, 1, 0])).new_items == []

    def test_empty_current_feed(self) -> None:
        assert diff(_feed([]), None).new_items == []
