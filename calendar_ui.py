"""
画面表示用の文字列まわり
曜日や月の見出し, カテゴリーの表示名と色, 説明文の Markdown 変換
"""
from datetime import date

import bleach
from markdown import markdown

from events import Category
from grid import SUNDAY

WEEKDAY_LABELS = ["日", "月", "火", "水", "木", "金", "土"]

CATEGORY_LABELS = {
    Category.ACADEMIC: "学考・行事",
    Category.SPORT: "運動",
    Category.HOLIDAY: "祝日・休日",
    Category.EXAM: "試験",
    Category.OTHER: "その他",
}

CATEGORY_COLORS = {
    Category.ACADEMIC: "#3b82f6",
    Category.SPORT: "#f97316",
    Category.HOLIDAY: "#22c55e",
    Category.EXAM: "#ef4444",
    Category.OTHER: "#a855f7",
}

# セルに出す行事の数. 残りは +N で表示
CELL_PREVIEW_LIMIT = 2


def weekday_headers(week_starts_on: int = SUNDAY) -> list[str]:
    return WEEKDAY_LABELS[week_starts_on:] + WEEKDAY_LABELS[:week_starts_on]


def month_label(year: int, month: int) -> str:
    return f"{year}年 {month}月"


def sidebar_date_label(d: date) -> str:
    # 例: 5月 10日 (日曜日)
    return f"{d.month}月 {d.day}日 ({WEEKDAY_LABELS[(d.weekday() + 1) % 7]}曜日)"


def form_date_label(d: date) -> str:
    return f"{d.year}年 {d.month}月 {d.day}日"


def cell_preview(events) -> tuple[list, int]:
    """セルに載せる行事と, 載りきらなかった件数"""
    events = list(events)
    return events[:CELL_PREVIEW_LIMIT], max(0, len(events) - CELL_PREVIEW_LIMIT)


# サニタイジング
# 説明文は利用者の入力なので <img> や <script> は通さない

ALLOWED_TAGS = bleach.sanitizer.ALLOWED_TAGS.union({
    "p", "br", "pre", "code", "blockquote",
    "ul", "ol", "li",
    "strong", "em", "del",
    "table", "thead", "tbody", "tr", "th", "td", "a",
    "div", "span"
})
ALLOWED_ATTRS = {
    "a": ["href", "title", "rel"],
    "code": ["class"],
    "span": ["class"],
    "div": ["class"]
}
ALLOWED_PROTOCOLS = ["http", "https", "mailto"]


def sanitize_html(html: str) -> str:
    cleaned = bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRS,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )
    return bleach.linkify(cleaned)


def render_description(text) -> str:
    if not text:
        return ""
    raw_html = markdown(
        text,
        extensions=[
            "sane_lists",
            "tables",
            "pymdownx.tilde",
            "pymdownx.tasklist",
        ],
    )
    return sanitize_html(raw_html)
