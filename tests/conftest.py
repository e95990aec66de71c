from datetime import date, datetime, timezone

import pytest

import share
from widget_state import WidgetState


class FakeBrowser:
    """Stands in for the visitor's browser: answers every script with ``result``."""

    def __init__(self, result="copied"):
        self.result = result
        self.calls = []

    def __call__(self, expression, key):
        self.calls.append((key, expression))
        return self.result

    @property
    def keys(self):
        return [key for key, _ in self.calls]


@pytest.fixture
def now():
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def birth():
    return date(2000, 1, 1)


@pytest.fixture
def shown_state(birth):
    state = WidgetState()
    state.enter_birth_date(birth)
    state.reveal()
    return state


@pytest.fixture
def browser(monkeypatch):
    fake = FakeBrowser()
    monkeypatch.setattr(share, "_js_eval", fake)
    return fake
