class CalendarError(Exception):
    """カレンダー本体で発生する例外の基底"""


class DuplicateIdError(CalendarError):
    def __init__(self, event_id: str):
        super().__init__(f"event id already exists: {event_id!r}")
        self.event_id = event_id


class ValidationError(CalendarError):
    """
    行事追加フォームの入力が不正
    field には問題のあった入力欄の名前が入る
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message
