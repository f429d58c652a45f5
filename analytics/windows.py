"""
analytics/windows.py
--------------------
Time-window derivation and chart bucketing.

Every function takes ``now`` explicitly. Weeks start on Sunday and all
comparisons use local naive datetimes, inclusive at both ends.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from dateutil.relativedelta import relativedelta

from models.transaction import Transaction

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
YEARLY = "yearly"

CHART_PERIODS = (DAILY, WEEKLY, MONTHLY, YEARLY)
COMPARISON_PERIODS = (DAILY, WEEKLY, MONTHLY)

DAY_SEGMENTS = ("Morning", "Afternoon", "Evening", "Night")
WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
WEEK_LABELS = ("Week 1", "Week 2", "Week 3", "Week 4")

_ONE_DAY = timedelta(days=1)
_TICK = timedelta(microseconds=1)


@dataclass(frozen=True)
class TimeWindow:
    """An interval of local time, inclusive at both ends."""
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def to_dict(self) -> dict:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass(frozen=True)
class Bucket:
    """One labelled segment of a chart."""
    label: str
    value: float = 0.0

    def to_dict(self) -> dict:
        return {"name": self.label, "value": self.value}


# ── Calendar helpers ──────────────────────────────────────

def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def weekday_index(moment: datetime) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return (moment.weekday() + 1) % 7


def start_of_week(moment: datetime) -> datetime:
    """Most recent Sunday at 00:00."""
    return start_of_day(moment) - timedelta(days=weekday_index(moment))


def start_of_month(moment: datetime) -> datetime:
    return start_of_day(moment).replace(day=1)


def day_segment_index(hour: int) -> int:
    """Morning [5,12), Afternoon [12,17), Evening [17,22), Night otherwise."""
    if 5 <= hour < 12:
        return 0
    if 12 <= hour < 17:
        return 1
    if 17 <= hour < 22:
        return 2
    return 3


def _require(period: str, allowed: tuple) -> None:
    if period not in allowed:
        raise ValueError(f"Unknown period '{period}'. Expected one of: {', '.join(allowed)}")


# ── Windows ───────────────────────────────────────────────

def period_window(period: str, now: datetime, full: bool = False) -> TimeWindow:
    """
    The current period, from its first instant up to ``now``.

    Args:
        period: 'daily', 'weekly' or 'monthly'.
        now: Reference time.
        full: End at the last instant of the period instead of at ``now``.
    """
    _require(period, COMPARISON_PERIODS)
    if period == DAILY:
        start = start_of_day(now)
        last = end_of_day(now)
    elif period == WEEKLY:
        start = start_of_week(now)
        last = end_of_day(start + 6 * _ONE_DAY)
    else:
        start = start_of_month(now)
        last = start + relativedelta(months=1) - _TICK
    return TimeWindow(start, last if full else now)


def previous_window(period: str, now: datetime) -> TimeWindow:
    """
    The period immediately before the current one, used for comparisons.

    Daily: yesterday. Weekly: the previous Sunday-to-Saturday week.
    Monthly: the whole previous calendar month.
    """
    current_start = period_window(period, now).start
    if period == DAILY:
        start = current_start - _ONE_DAY
    elif period == WEEKLY:
        start = current_start - 7 * _ONE_DAY
    else:
        start = current_start - relativedelta(months=1)
    return TimeWindow(start, current_start - _TICK)


def chart_window(period: str, now: datetime) -> TimeWindow:
    """
    The span covered by the expense-analysis chart for a period.

    Daily and weekly cover the whole current day/week; monthly is the last
    28 days; yearly starts on the first day of the month 11 months back.
    """
    _require(period, CHART_PERIODS)
    if period == DAILY:
        return TimeWindow(start_of_day(now), end_of_day(now))
    if period == WEEKLY:
        start = start_of_week(now)
        return TimeWindow(start, end_of_day(start + 6 * _ONE_DAY))
    if period == MONTHLY:
        return TimeWindow(start_of_day(now - 28 * _ONE_DAY), now)
    return TimeWindow(start_of_month(now) - relativedelta(months=11), now)


# ── Bucketing ─────────────────────────────────────────────

def bucket_labels(period: str) -> tuple:
    _require(period, CHART_PERIODS)
    return {
        DAILY: DAY_SEGMENTS,
        WEEKLY: WEEKDAY_LABELS,
        MONTHLY: WEEK_LABELS,
        YEARLY: MONTH_LABELS,
    }[period]


def _bucket_index(period: str, moment: datetime, now: datetime) -> int:
    if period == DAILY:
        return day_segment_index(moment.hour)
    if period == WEEKLY:
        return weekday_index(moment)
    if period == MONTHLY:
        days_diff = (now - moment) // _ONE_DAY
        return min(3, days_diff // 7)
    # Indexed by calendar month, not by offset from the window start
    return moment.month - 1


def expense_buckets(transactions: Iterable[Transaction], period: str, now: datetime) -> list[Bucket]:
    """
    Sum expenses inside the chart window into the period's buckets.

    Monthly buckets are ordered oldest week first; yearly buckets follow
    calendar order Jan..Dec.
    """
    labels = bucket_labels(period)
    window = chart_window(period, now)
    values = [0.0] * len(labels)

    for t in transactions:
        if not t.is_expense() or not window.contains(t.date):
            continue
        values[_bucket_index(period, t.date, now)] += t.amount

    if period == MONTHLY:
        values.reverse()

    return [Bucket(label, value) for label, value in zip(labels, values)]
