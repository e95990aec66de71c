# Date math for the 2024 YR4 impact countdown: shared-date codec,
# age at impact and calendar duration breakdowns.

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

# ----------------------------- Constants --------------------------
TARGET_DATE = date(2032, 12, 22)
IMPACT_MOMENT = datetime(TARGET_DATE.year, TARGET_DATE.month, TARGET_DATE.day, tzinfo=timezone.utc)

SHARED_DATE_FORMAT = "%d-%m-%Y"  # dd-MM-yyyy
_SHARED_DATE_RE = re.compile(r"^\d{2}-\d{2}-\d{4}$")

MONTHS_ES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

Moment = Union[date, datetime]


@dataclass(frozen=True)
class DurationBreakdown:
    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def from_relativedelta(cls, delta: relativedelta) -> "DurationBreakdown":
        return cls(
            years=delta.years, months=delta.months, days=delta.days,
            hours=delta.hours, minutes=delta.minutes, seconds=delta.seconds,
        )

    def is_zero(self) -> bool:
        return self == DurationBreakdown()


# ------------------------- Shared date codec ----------------------
def parse_shared_date(raw: Optional[str]) -> Optional[date]:
    """Decode a ``date`` query parameter (dd-MM-yyyy).

    Returns None for a missing, malformed or impossible date; the problem is
    logged and never raised to the page.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        logger.warning("Empty date in URL, ignoring")
        return None
    if not _SHARED_DATE_RE.match(text):
        logger.warning("Invalid date format in URL: %r", raw)
        return None
    try:
        return datetime.strptime(text, SHARED_DATE_FORMAT).date()
    except ValueError as err:
        logger.warning("Invalid date in URL: %r (%s)", raw, err)
        return None


def format_shared_date(value: date) -> str:
    # strftime does not zero-pad years below 1000 on every platform
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def format_impact_date(value: date = TARGET_DATE) -> str:
    """``22 diciembre, 2032``"""
    return f"{value.day:02d} {MONTHS_ES[value.month - 1]}, {value.year}"


# ------------------------- Age & durations ------------------------
def _as_moment(value: Moment) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    raise TypeError(f"expected date or datetime, got {type(value).__name__}")


def duration_between(start: Moment, end: Moment) -> DurationBreakdown:
    """Calendar decomposition of ``end - start``.

    Each larger unit is taken out before the next one, so month and year
    lengths are respected. When ``end`` is not after ``start`` the result is
    all zeros.
    """
    start_m, end_m = _as_moment(start), _as_moment(end)
    if end_m <= start_m:
        return DurationBreakdown()
    return DurationBreakdown.from_relativedelta(relativedelta(end_m, start_m))


def age_at_impact(birth: Optional[date]) -> Optional[int]:
    """Completed years between ``birth`` and TARGET_DATE (None without a birth date).

    A 29 February birth reaches its anniversary on 28 February in common years.
    TARGET_DATE is 22 December, so the impact age is not affected.
    """
    if birth is None:
        return None
    return duration_between(birth, TARGET_DATE).years


def age_breakdown(birth: Optional[date]) -> Optional[DurationBreakdown]:
    if birth is None:
        return None
    return duration_between(birth, TARGET_DATE)


def time_until_impact(now: Optional[datetime] = None) -> DurationBreakdown:
    # Once the impact moment has passed the countdown stays at zero.
    now = now or datetime.now(timezone.utc)
    return duration_between(now, IMPACT_MOMENT)
