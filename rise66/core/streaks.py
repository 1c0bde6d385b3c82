from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union


@dataclass(frozen=True)
class CompletionRecord:
    """One day of a habit (or of the whole program)."""

    log_date: date
    completed: bool
    actual_value: Optional[str] = None


@dataclass(frozen=True)
class StreakState:
    current_streak: int = 0
    best_streak: int = 0

    def advance(self, current_streak: int) -> "StreakState":
        """Next state after a recompute; best streak only ever grows."""
        return StreakState(
            current_streak=current_streak,
            best_streak=update_best_streak(current_streak, self.best_streak),
        )


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def compute_current_streak(history: Iterable, reference_date: Union[date, datetime]) -> int:
    """
    Count consecutive completed days ending at ``reference_date``.

    ``history`` holds objects with ``log_date`` and ``completed`` attributes
    (``CompletionRecord`` or the ``HabitCompletion`` table rows), at most one
    per date. The walk starts on the reference date itself: if that day has
    no completed record the streak is 0, even when yesterday was completed.
    Records after the reference date are ignored.
    """
    completed_days = {_as_date(r.log_date) for r in history if r.completed}
    if not completed_days:
        return 0

    streak = 0
    expected_date = _as_date(reference_date)
    while expected_date in completed_days:
        streak += 1
        expected_date -= timedelta(days=1)
    return streak


def update_best_streak(current: int, previous_best: int) -> int:
    return max(current, previous_best)
