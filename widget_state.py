"""Per-session view state and the transitions that mutate it.

Every field has exactly one writer: the URL load, the birth date input,
the Calcular button, the share actions or the countdown tick. A share
request is opened by a click and closed once the browser reports back.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from impact_dates import DurationBreakdown, age_at_impact, age_breakdown, parse_shared_date, time_until_impact

STATE_KEY = "widget"


@dataclass(frozen=True)
class BrowserRequest:
    """Script waiting to run in the visitor's browser.

    ``key`` is unique per click so the browser runs the script again even when
    the same text is shared twice in a row.
    """
    kind: str  # "clipboard" or "share"
    key: str
    expression: str


@dataclass
class WidgetState:
    birth_date: Optional[date] = None
    show_card: bool = False
    age_breakdown: Optional[DurationBreakdown] = None
    countdown: Optional[DurationBreakdown] = None
    copied_until: Optional[datetime] = None
    query_loaded: bool = False
    pending_request: Optional[BrowserRequest] = None

    # --- URL load ---
    def load_query(self, raw: Optional[str]) -> bool:
        """Apply the ``date`` query parameter once per session."""
        if self.query_loaded:
            return False
        self.query_loaded = True
        parsed = parse_shared_date(raw)
        if parsed is None:
            return False
        self.enter_birth_date(parsed)
        self.show_card = True
        return True

    # --- input change ---
    def enter_birth_date(self, value: Optional[date]) -> None:
        self.birth_date = value
        self.age_breakdown = age_breakdown(value)

    # --- Calcular ---
    def reveal(self) -> None:
        self.show_card = True

    @property
    def age(self) -> Optional[int]:
        return age_at_impact(self.birth_date)

    # --- ticker ---
    def tick(self, now: Optional[datetime] = None) -> DurationBreakdown:
        self.countdown = time_until_impact(now)
        return self.countdown

    # --- share requests ---
    def open_request(self, request: BrowserRequest) -> None:
        self.pending_request = request

    def close_request(self) -> Optional[BrowserRequest]:
        request, self.pending_request = self.pending_request, None
        return request

    # --- clipboard notice ---
    def notify_copied(self, now: Optional[datetime] = None, seconds: int = 3) -> None:
        now = now or datetime.now(timezone.utc)
        self.copied_until = now + timedelta(seconds=seconds)

    def copied_visible(self, now: Optional[datetime] = None) -> bool:
        if self.copied_until is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now < self.copied_until


def get_state(session) -> WidgetState:
    """Fetch (or create) the state object stored in ``st.session_state``."""
    session.setdefault(STATE_KEY, WidgetState())
    return session[STATE_KEY]
