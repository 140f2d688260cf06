from datetime import date

import pytest

from errors import DuplicateIdError
from events import Category, Event, EventIndex, sample_events


def make_event(event_id, day, title="行事", category=Category.OTHER):
    return Event(id=event_id, title=title, date=day, category=category)


class TestEventIndex:
    def test_events_on_preserves_insertion_order(self, index):
        e1 = index.add(make_event("e1", date(2026, 5, 10), "一"))
        e2 = index.add(make_event("e2", date(2026, 5, 10), "二"))

        assert index.events_on(date(2026, 5, 10)) == [e1, e2]

    def test_events_on_other_day_is_empty(self, index):
        index.add(make_event("e1", date(2026, 5, 10)))

        assert index.events_on(date(2026, 5, 11)) == []
        assert index.events_on(date(1, 1, 1)) == []

    def test_duplicate_id_rejected_and_index_unchanged(self, index):
        index.add(make_event("e1", date(2026, 5, 10)))

        with pytest.raises(DuplicateIdError) as excinfo:
            index.add(make_event("e1", date(2026, 6, 1)))

        assert excinfo.value.event_id == "e1"
        assert len(index) == 1
        assert index.events_on(date(2026, 6, 1)) == []

    def test_get_and_contains(self, index):
        event = index.add(make_event("e1", date(2026, 5, 10)))

        assert index.get("e1") is event
        assert index.get("missing") is None
        assert "e1" in index
        assert list(index) == [event]

    def test_events_between_orders_by_date_then_insertion(self, index):
        late = index.add(make_event("late", date(2026, 5, 20)))
        early_a = index.add(make_event("a", date(2026, 5, 1)))
        early_b = index.add(make_event("b", date(2026, 5, 1)))
        index.add(make_event("outside", date(2026, 6, 1)))

        assert index.events_between(date(2026, 5, 1), date(2026, 5, 31)) == [early_a, early_b, late]

    def test_events_between_wide_range(self, index):
        a = index.add(make_event("a", date(2026, 5, 1)))
        b = index.add(make_event("b", date(2027, 1, 1)))

        assert index.events_between(date(1, 1, 1), date(9999, 12, 31)) == [a, b]

    def test_events_between_reversed_range_is_empty(self, index):
        index.add(make_event("a", date(2026, 5, 1)))

        assert index.events_between(date(2026, 5, 2), date(2026, 5, 1)) == []


class TestEvent:
    def test_as_dict(self):
        event = Event(
            id="x", title="体育祭", date=date(2026, 5, 10),
            category=Category.SPORT, location="校庭",
        )

        assert event.as_dict() == {
            "id": "x",
            "title": "体育祭",
            "date": "2026-05-10",
            "category": "sport",
            "location": "校庭",
            "description": None,
        }

    def test_category_values(self):
        assert [c.value for c in Category] == ["academic", "sport", "holiday", "exam", "other"]


def test_sample_events_are_relative_to_today():
    today = date(2026, 4, 15)
    events = sample_events(today)

    assert [e.id for e in events] == ["1", "2", "3", "4"]
    assert [e.date for e in events] == [
        date(2026, 4, 1), date(2026, 4, 20), date(2026, 4, 25), date(2026, 4, 30),
    ]
    assert events[0].category is Category.ACADEMIC
    assert events[3].title == "遠足"


def test_events_between_short_range_in_busy_index(index):
    for day in range(1, 21):
        index.add(make_event(f"d{day}", date(2026, 5, day)))

    found = index.events_between(date(2026, 5, 3), date(2026, 5, 5))

    assert [e.id for e in found] == ["d3", "d4", "d5"]
