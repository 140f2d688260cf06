import calendar
from datetime import date, timedelta

# 0: 日曜 ... 6: 土曜 (calendar モジュールの firstweekday とは番号が違うので注意)
SUNDAY = 0
SATURDAY = 6


def weekday_index(d: date) -> int:
    """日曜を 0 とした曜日番号"""
    return (d.weekday() + 1) % 7


def month_bounds(reference_date: date) -> tuple[date, date]:
    """reference_date を含む月の初日と末日"""
    first = reference_date.replace(day=1)
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def build_grid(reference_date: date, week_starts_on: int = SUNDAY) -> list[date]:
    """
    月表示に並べる日付を先頭から順に返す
    前後の月の日付で埋めて, 必ず 7 の倍数になる
    date.min / date.max をはみ出す埋め草だけは切り捨てる
    """
    if not SUNDAY <= week_starts_on <= SATURDAY:
        raise ValueError(f"week_starts_on must be 0..6, got {week_starts_on}")

    first, last = month_bounds(reference_date)
    leading = (weekday_index(first) - week_starts_on) % 7
    trailing = (week_starts_on + 6 - weekday_index(last)) % 7

    # 端の月では範囲外に出ないように詰める
    leading = min(leading, (first - date.min).days)
    trailing = min(trailing, (date.max - last).days)

    start = first - timedelta(days=leading)
    total = (last - start).days + 1 + trailing
    return [start + timedelta(days=i) for i in range(total)]


def chunk_weeks(days: list) -> list[list]:
    """7 件ずつの行に分ける. テンプレートで週ごとに描画するため"""
    return [days[i:i + 7] for i in range(0, len(days), 7)]
