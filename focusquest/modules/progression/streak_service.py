"""Consecutive-day focus streak tracking."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from focusquest.domain.models.progression import FocusStreak


def advance_streak(streak: FocusStreak, today: date) -> FocusStreak:
    """
    Record a visit on `today`.

    - Same day as the last visit: unchanged.
    - The day after the last visit: streak + 1.
    - Later than that, or the very first visit: streak restarts at 1.

    Visits dated before the last recorded visit are ignored.
    """
    last = streak.last_visit_date

    if last is not None and today <= last:
        return streak

    if last is not None and (today - last).days == 1:
        current = streak.current_streak + 1
    else:
        current = 1

    return replace(
        streak,
        current_streak=current,
        longest_streak=max(streak.longest_streak, current),
        last_visit_date=today,
        total_visits=streak.total_visits + 1,
    )
