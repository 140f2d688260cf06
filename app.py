import os
from dotenv import load_dotenv

from datetime import date, datetime

from flask import Flask, render_template, redirect, url_for, request, flash, abort, jsonify

from zoneinfo import ZoneInfo

import calendar_ui
from controller import CalendarController
from errors import ValidationError
from events import Category, EventIndex, sample_events
from grid import SATURDAY, SUNDAY
from workflow import EventCreationWorkflow


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _week_starts_on(value) -> int:
    week_starts_on = int(value)
    if not SUNDAY <= week_starts_on <= SATURDAY:
        raise ValueError(f"WEEK_STARTS_ON must be 0..6, got {value!r}")
    return week_starts_on


load_dotenv()

app = Flask(__name__)
app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev")
app.config["CALENDAR_TZ"] = os.getenv("CALENDAR_TZ", "Asia/Tokyo")
app.config["WEEK_STARTS_ON"] = os.getenv("WEEK_STARTS_ON", "0")
app.config["SEED_SAMPLE_EVENTS"] = _env_flag("SEED_SAMPLE_EVENTS", "true")
app.config["REPORT_EMPTY_TITLE"] = _env_flag("REPORT_EMPTY_TITLE", "false")


def init_calendar(flask_app: Flask) -> None:
    """
    カレンダーの状態を作り直す. 状態はプロセス内だけで, 再起動で消える
    設定を変えたあとにもう一度呼べば反映される
    """
    tz = ZoneInfo(flask_app.config["CALENDAR_TZ"])

    # 「今日」は設定したタイムゾーンでの日付. 呼ぶたびに時計を見る
    def local_today() -> date:
        return datetime.now(tz).date()

    index = EventIndex()
    if flask_app.config["SEED_SAMPLE_EVENTS"]:
        for event in sample_events(local_today()):
            index.add(event)

    controller = CalendarController(
        index,
        today=local_today,
        week_starts_on=_week_starts_on(flask_app.config["WEEK_STARTS_ON"]),
    )
    flask_app.extensions["school_calendar"] = {
        "controller": controller,
        "workflow": EventCreationWorkflow(controller),
    }
    flask_app.logger.debug("calendar state initialised (%d events)", len(index))


def get_controller() -> CalendarController:
    return app.extensions["school_calendar"]["controller"]


def get_workflow() -> EventCreationWorkflow:
    return app.extensions["school_calendar"]["workflow"]


init_calendar(app)

app.jinja_env.filters["description_html"] = calendar_ui.render_description


def _parse_date_or_404(date_str: str) -> date:
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        abort(404)


def _render_calendar():
    controller = get_controller()
    model = controller.render_model()
    return render_template(
        "index.html",
        model=model,
        ui=calendar_ui,
        categories=list(Category),
        weekday_headers=calendar_ui.weekday_headers(controller.week_starts_on),
        form_open=get_workflow().is_open,
    )

# 月表示

@app.route("/")
def index():
    year = request.args.get("year", type=int)
    month = request.args.get("month", type=int)

    # 不正な年月は無視して今の表示のまま
    if year and month:
        get_controller().show_month(year, month)

    return _render_calendar()

# 月の移動

@app.route("/prev", methods=["POST"])
def prev_month():
    get_controller().advance_month(-1)
    return redirect(url_for("index"))

@app.route("/next", methods=["POST"])
def next_month():
    get_controller().advance_month(1)
    return redirect(url_for("index"))

@app.route("/today", methods=["POST"])
def go_today():
    get_controller().go_today()
    return redirect(url_for("index"))

# 日の選択. 表示中の月の外でもよい (グリッドは動かさない)

@app.route("/day/<date_str>", methods=["POST"])
def select_day(date_str: str):
    get_controller().select_day(_parse_date_or_404(date_str))
    return redirect(url_for("index"))

# 行事の追加

@app.route("/new", methods=["GET", "POST"])
def new_event():
    workflow = get_workflow()
    if request.method == "POST":
        try:
            workflow.submit(
                title=request.form.get("title", ""),
                category=request.form.get("category", Category.OTHER.value),
                location=request.form.get("location"),
                description=request.form.get("description"),
            )
        except ValidationError as e:
            # 行事名が空なら何もせず閉じる. 設定によってはメッセージを出す
            app.logger.debug("event submission rejected: %s", e)
            if app.config["REPORT_EMPTY_TITLE"]:
                flash(e.message)
        return redirect(url_for("index"))

    workflow.open()
    return _render_calendar()

@app.route("/new/cancel", methods=["POST"])
def cancel_new_event():
    get_workflow().cancel()
    return redirect(url_for("index"))

# 表示用データを JSON で

@app.route("/api/month")
def month_json():
    model = get_controller().render_model()
    return jsonify({
        "header": {
            "year": model.header.year,
            "month": model.header.month,
            "label": calendar_ui.month_label(*model.header),
        },
        "today": model.today.isoformat(),
        "selected_day": model.selected_day.isoformat(),
        "cells": [
            {
                "date": cell.date.isoformat(),
                "in_viewed_month": cell.in_viewed_month,
                "is_today": cell.is_today,
                "is_selected": cell.is_selected,
                "events": [e.as_dict() for e in cell.events],
            }
            for cell in model.cells
        ],
        "sidebar_events": [e.as_dict() for e in model.sidebar_events],
        "workflow_phase": get_workflow().phase.value,
    })


if __name__ == "__main__":
    app.run(debug=True)
