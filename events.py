import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterator, Optional

from errors import DuplicateIdError

logger = logging.getLogger(__name__)


class Category(str, Enum):
    ACADEMIC = "academic"
    SPORT = "sport"
    HOLIDAY = "holiday"
    EXAM = "exam"
    OTHER = "other"


@dataclass(frozen=True)
class Event:
    # 日付のみ. 時刻は持たない (すべて終日扱い)
    id: str
    title: str
    date: date
    category: Category
    location: Optional[str] = None
    description: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "category": self.category.value,
            "location": self.location,
            "description": self.description,
        }


class EventIndex:
    """
    行事をメモリ上に保持する
    日付 -> id のリストで索引を作っておき, 日付での検索は全件走査しない
    """

    def __init__(self):
        self._events: dict[str, Event] = {}
        self._by_date: dict[date, list[str]] = {}

    def add(self, event: Event) -> Event:
        if event.id in self._events:
            raise DuplicateIdError(event.id)
        self._events[event.id] = event
        self._by_date.setdefault(event.date, []).append(event.id)
        logger.debug("indexed event %s on %s", event.id, event.date.isoformat())
        return event

    def get(self, event_id: str) -> Optional[Event]:
        return self._events.get(event_id)

    def events_on(self, day: date) -> list[Event]:
        # 追加順のまま返す
        return [self._events[i] for i in self._by_date.get(day, [])]

    def events_between(self, start: date, end: date) -> list[Event]:
        """start から end まで (両端を含む). 日付順, 同じ日なら追加順"""
        if start > end:
            return []
        result: list[Event] = []
        if (end - start).days < len(self._by_date):
            day = start
            while True:
                result.extend(self.events_on(day))
                if day == end:
                    break
                day += timedelta(days=1)
            return result
        for day in sorted(d for d in self._by_date if start <= d <= end):
            result.extend(self.events_on(day))
        return result

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events.values())

    def __len__(self) -> int:
        return len(self._events)


def sample_events(today: date) -> list[Event]:
    """起動時に入れておく見本の行事"""
    return [
        Event(id="1", title="始業式", date=today.replace(day=1), category=Category.ACADEMIC),
        Event(id="2", title="避難訓練", date=today + timedelta(days=5), category=Category.OTHER),
        Event(id="3", title="中間試験", date=today + timedelta(days=10), category=Category.EXAM),
        Event(id="4", title="遠足", date=today + timedelta(days=15), category=Category.SPORT),
    ]
