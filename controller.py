import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, NamedTuple

from events import Event, EventIndex
from grid import SUNDAY, build_grid, chunk_weeks

logger = logging.getLogger(__name__)

_MIN_MONTH_ORDINAL = date.min.year * 12
_MAX_MONTH_ORDINAL = date.max.year * 12 + 11


class ViewedMonth(NamedTuple):
    year: int
    month: int

    @classmethod
    def of(cls, d: date) -> "ViewedMonth":
        return cls(d.year, d.month)

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def shifted(self, delta: int) -> "ViewedMonth":
        # 表せる範囲 (1 年 1 月 ~ 9999 年 12 月) に収める
        ordinal = self.year * 12 + (self.month - 1) + delta
        ordinal = max(_MIN_MONTH_ORDINAL, min(_MAX_MONTH_ORDINAL, ordinal))
        year, month0 = divmod(ordinal, 12)
        return ViewedMonth(year, month0 + 1)


@dataclass(frozen=True)
class GridCell:
    date: date
    in_viewed_month: bool
    is_today: bool
    is_selected: bool
    events: tuple[Event, ...] = ()


@dataclass(frozen=True)
class RenderModel:
    header: ViewedMonth
    cells: list[GridCell]
    sidebar_events: list[Event]
    selected_day: date
    today: date
    weeks: list[list[GridCell]] = field(default_factory=list)


class CalendarController:
    """
    表示中の月と選択中の日を持つ
    この 2 つは独立していて, 月を移動しても選択は動かないし逆も同じ
    """

    def __init__(
        self,
        index: EventIndex,
        today: Callable[[], date] = date.today,
        week_starts_on: int = SUNDAY,
    ):
        self.index = index
        self.week_starts_on = week_starts_on
        self._today = today
        now = today()
        self._viewed_month = ViewedMonth.of(now)
        self._selected_day = now

    @property
    def viewed_month(self) -> ViewedMonth:
        return self._viewed_month

    @property
    def selected_day(self) -> date:
        return self._selected_day

    def advance_month(self, delta: int) -> ViewedMonth:
        self._viewed_month = self._viewed_month.shifted(delta)
        logger.debug("viewed month -> %d-%02d", *self._viewed_month)
        return self._viewed_month

    def show_month(self, year: int, month: int) -> ViewedMonth:
        """指定の月へ移動. 範囲外の値は無視して現在の月のまま"""
        if 1 <= month <= 12 and date.min.year <= year <= date.max.year:
            self._viewed_month = ViewedMonth(year, month)
        return self._viewed_month

    def select_day(self, day: date) -> None:
        self._selected_day = day
        logger.debug("selected day -> %s", day.isoformat())

    def go_today(self) -> ViewedMonth:
        now = self._today()
        self._selected_day = now
        self._viewed_month = ViewedMonth.of(now)
        return self._viewed_month

    def render_model(self) -> RenderModel:
        # 今日の判定は毎回時計から取り直す
        today = self._today()
        month = self._viewed_month
        cells = [
            GridCell(
                date=d,
                in_viewed_month=(d.year, d.month) == month,
                is_today=d == today,
                is_selected=d == self._selected_day,
                events=tuple(self.index.events_on(d)),
            )
            for d in build_grid(month.first_day(), self.week_starts_on)
        ]
        return RenderModel(
            header=month,
            cells=cells,
            sidebar_events=self.index.events_on(self._selected_day),
            selected_day=self._selected_day,
            today=today,
            weeks=chunk_weeks(cells),
        )
