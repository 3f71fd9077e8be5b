"""Temporal evaluator — date facts relative to one injected ``now``.

Nothing here reads the wall clock. Callers pass the same ``now`` to every
function in a scoring pass so the pass is internally consistent.
"""

from __future__ import annotations

import math
from datetime import datetime, time, timedelta

from backend.utils.time import ensure_utc

_SECONDS_PER_HOUR = 3600.0


def is_overdue(due: datetime, now: datetime) -> bool:
    return ensure_utc(due) < ensure_utc(now)


def is_expiring_soon(date: datetime, now: datetime, window_days: int = 30) -> bool:
    """True when ``date`` falls in ``[now, now + window_days)``."""
    date = ensure_utc(date)
    now = ensure_utc(now)
    return now <= date < now + timedelta(days=window_days)


def elapsed_fraction(start: datetime, deadline: datetime, now: datetime) -> float:
    """Elapsed share of ``start -> deadline`` as a 0-100 percentage.

    A deadline at or before its start counts as fully elapsed.
    """
    start = ensure_utc(start)
    deadline = ensure_utc(deadline)
    now = ensure_utc(now)

    total = (deadline - start).total_seconds()
    if total <= 0:
        return 100.0
    elapsed = (now - start).total_seconds()
    return max(0.0, min(1.0, elapsed / total)) * 100.0


def hours_until(target: datetime, now: datetime) -> float:
    return (ensure_utc(target) - ensure_utc(now)).total_seconds() / _SECONDS_PER_HOUR


def days_until(target: datetime, now: datetime) -> int:
    """Whole days until ``target``; negative once it has passed."""
    return math.floor(hours_until(target, now) / 24.0)


def _start_of_day(moment: datetime) -> datetime:
    moment = ensure_utc(moment)
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def is_due_today(due: datetime, now: datetime) -> bool:
    """Due later on the same UTC calendar day as ``now``."""
    due = ensure_utc(due)
    now = ensure_utc(now)
    return due >= now and due.date() == now.date()


def is_due_this_week(due: datetime, now: datetime) -> bool:
    """Due after today and no later than the Sunday closing ``now``'s ISO week."""
    due = ensure_utc(due)
    tomorrow = _start_of_day(now) + timedelta(days=1)
    next_monday = _start_of_day(now) + timedelta(days=7 - ensure_utc(now).weekday())
    return tomorrow <= due < next_monday


def is_due_this_month(due: datetime, now: datetime) -> bool:
    due = ensure_utc(due)
    now = ensure_utc(now)
    return due >= now and (due.year, due.month) == (now.year, now.month)
