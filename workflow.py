import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from controller import CalendarController
from errors import DuplicateIdError, ValidationError
from events import Category, Event

logger = logging.getLogger(__name__)

# uuid ならまず衝突しない. 差し替えた id 生成が壊れていたときの歯止め
MAX_ID_ATTEMPTS = 16


class Phase(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


def _new_event_id() -> str:
    return uuid.uuid4().hex


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class EventDraft:
    title: str = ""
    category: Union[Category, str] = Category.ACADEMIC
    location: Optional[str] = None
    description: Optional[str] = None

    def validated(self) -> "EventDraft":
        """前後の空白を落とし, カテゴリを列挙型にそろえたものを返す"""
        title = (self.title or "").strip()
        if not title:
            raise ValidationError("title", "行事名を入力してください")
        try:
            category = Category(self.category)
        except ValueError:
            raise ValidationError("category", f"不明なカテゴリー: {self.category}") from None
        return EventDraft(
            title=title,
            category=category,
            location=_blank_to_none(self.location),
            description=_blank_to_none(self.description),
        )


class EventCreationWorkflow:
    """
    行事追加フォームの状態
    Closed -> Open -> (保存 / キャンセル) -> Closed
    保存先の日付は controller の選択中の日
    """

    def __init__(
        self,
        controller: CalendarController,
        id_factory: Callable[[], str] = _new_event_id,
    ):
        self.controller = controller
        self._id_factory = id_factory
        self.phase = Phase.CLOSED
        self.draft: Optional[EventDraft] = None

    @property
    def is_open(self) -> bool:
        return self.phase is Phase.OPEN

    def open(self) -> Phase:
        self.phase = Phase.OPEN
        self.draft = EventDraft()
        logger.debug("creation form opened")
        return self.phase

    def cancel(self) -> Phase:
        self._close()
        logger.debug("creation form cancelled")
        return self.phase

    def submit(
        self,
        title: str,
        category: Union[Category, str],
        location: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        """
        入力を検証して行事を追加し, 新しい id を返す
        検証に失敗した場合も何も書き込まずにフォームは閉じる
        """
        self.draft = EventDraft(title, category, location, description)
        try:
            draft = self.draft.validated()
        finally:
            self._close()

        day = self.controller.selected_day
        for _ in range(MAX_ID_ATTEMPTS):
            event = Event(
                id=self._id_factory(),
                title=draft.title,
                date=day,
                category=draft.category,
                location=draft.location,
                description=draft.description,
            )
            try:
                self.controller.index.add(event)
            except DuplicateIdError:
                logger.warning("event id %s collided, regenerating", event.id)
                continue
            logger.info("created event %s (%s) on %s", event.id, event.title, day.isoformat())
            return event.id
        raise DuplicateIdError(event.id)

    def _close(self) -> None:
        self.phase = Phase.CLOSED
        self.draft = None
