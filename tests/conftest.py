"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from controller import CalendarController
from events import EventIndex
from workflow import EventCreationWorkflow


class FakeClock:
    """Settable stand-in for the wall clock."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock():
    return FakeClock(date(2026, 4, 15))


@pytest.fixture
def index():
    return EventIndex()


@pytest.fixture
def controller(index, clock):
    return CalendarController(index, today=clock)


@pytest.fixture
def workflow(controller):
    return EventCreationWorkflow(controller)


@pytest.fixture
def flask_app():
    """Web app with fresh, unseeded calendar state."""
    from app import app, init_calendar

    app.config.update(TESTING=True, SEED_SAMPLE_EVENTS=False, REPORT_EMPTY_TITLE=False)
    init_calendar(app)
    yield app
    app.config.update(SEED_SAMPLE_EVENTS=True, REPORT_EMPTY_TITLE=False, WEEK_STARTS_ON="0")
    init_calendar(app)


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()
