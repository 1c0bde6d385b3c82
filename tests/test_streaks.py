from datetime import date, datetime, timedelta

from rise66.core.streaks import (
    CompletionRecord,
    StreakState,
    compute_current_streak,
    update_best_streak,
)
from rise66.models.habit import HabitCompletion

TODAY = date(2026, 3, 15)


def _days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


def test_empty_history():
    assert compute_current_streak([], TODAY) == 0


def test_only_incomplete_records():
    history = [CompletionRecord(_days_ago(i), False) for i in range(3)]
    assert compute_current_streak(history, TODAY) == 0


def test_missing_today_breaks_streak():
    history = [
        CompletionRecord(_days_ago(1), True),
        CompletionRecord(_days_ago(2), True),
    ]
    assert compute_current_streak(history, TODAY) == 0


def test_streak_stops_at_first_gap():
    history = [
        CompletionRecord(_days_ago(0), True),
        CompletionRecord(_days_ago(1), True),
        CompletionRecord(_days_ago(2), True),
        CompletionRecord(_days_ago(4), True),
        CompletionRecord(_days_ago(5), True),
    ]
    assert compute_current_streak(history, TODAY) == 3


def test_incomplete_day_breaks_streak():
    history = [
        CompletionRecord(_days_ago(0), True),
        CompletionRecord(_days_ago(1), False, actual_value="1.0 KM"),
        CompletionRecord(_days_ago(2), True),
    ]
    assert compute_current_streak(history, TODAY) == 1


def test_order_of_history_does_not_matter():
    history = [CompletionRecord(_days_ago(i), True) for i in (2, 0, 1)]
    assert compute_current_streak(history, TODAY) == 3


def test_reference_datetime_is_truncated_to_date():
    history = [CompletionRecord(_days_ago(i), True) for i in range(2)]
    assert compute_current_streak(history, datetime(2026, 3, 15, 23, 59)) == 2


def test_records_after_reference_date_are_ignored():
    history = [CompletionRecord(TODAY + timedelta(days=1), True), CompletionRecord(TODAY, True)]
    assert compute_current_streak(history, TODAY) == 1


def test_accepts_completion_rows():
    history = [
        HabitCompletion(user_id="u1", habit_id=1, log_date=_days_ago(i), completed=True)
        for i in range(4)
    ]
    assert compute_current_streak(history, TODAY) == 4


def test_update_best_streak():
    assert update_best_streak(5, 8) == 8
    assert update_best_streak(9, 8) == 9
    assert update_best_streak(0, 0) == 0


def test_best_streak_is_a_watermark():
    state = StreakState()
    seen = []
    for current in [1, 2, 3, 0, 1, 5, 2, 0]:
        state = state.advance(current)
        assert state.current_streak == current
        assert state.best_streak >= state.current_streak
        seen.append(state.best_streak)
    assert seen == sorted(seen)
    assert state.best_streak == 5
