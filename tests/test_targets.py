import re

import pytest

from rise66.core.habits import HabitKind
from rise66.core.targets import TARGET_RULES, compute_target, program_week


def _difficulty(kind: HabitKind, target: str) -> float:
    """Numeric difficulty of a target; larger means harder."""
    if kind == HabitKind.WAKEUP:
        hour, minute = re.match(r"(\d+):(\d\d) AM", target).groups()
        return -(int(hour) * 60 + int(minute))
    if kind == HabitKind.SOCIAL_MEDIA:
        m = re.match(r"(\d+)h (\d+)m", target)
        minutes = int(m.group(1)) * 60 + int(m.group(2)) if m else int(target.split()[0])
        return -minutes
    return float(re.match(r"[\d.]+", target).group(0))


def test_every_kind_has_a_rule():
    assert set(TARGET_RULES) == set(HabitKind)


def test_program_week():
    assert program_week(1) == 1
    assert program_week(7) == 1
    assert program_week(8) == 2
    assert program_week(66) == 10


@pytest.mark.parametrize(
    "kind, day, expected",
    [
        (HabitKind.RUNNING, 1, "2.0 KM"),
        (HabitKind.RUNNING, 8, "2.5 KM"),
        (HabitKind.RUNNING, 71, "6.0 KM"),
        (HabitKind.PUSHUPS, 1, "10 reps"),
        (HabitKind.PUSHUPS, 3, "10 reps"),
        (HabitKind.PUSHUPS, 4, "15 reps"),
        (HabitKind.PUSHUPS, 7, "20 reps"),
        (HabitKind.WAKEUP, 1, "7:30 AM"),
        (HabitKind.WAKEUP, 14, "7:30 AM"),
        (HabitKind.WAKEUP, 15, "7:00 AM"),
        (HabitKind.WAKEUP, 29, "7:00 AM"),
        (HabitKind.WAKEUP, 43, "6:00 AM"),
        (HabitKind.WAKEUP, 57, "5:00 AM"),
        (HabitKind.WAKEUP, 71, "5:00 AM"),
        (HabitKind.WORKOUT, 1, "30 mins"),
        (HabitKind.WORKOUT, 15, "45 mins"),
        (HabitKind.WORKOUT, 57, "90 mins"),
        (HabitKind.WORKOUT, 71, "90 mins"),
        (HabitKind.MEDITATION, 1, "5 mins"),
        (HabitKind.MEDITATION, 15, "7.5 mins"),
        (HabitKind.MEDITATION, 29, "10 mins"),
        (HabitKind.MEDITATION, 85, "20 mins"),
        (HabitKind.MEDITATION, 99, "20 mins"),
        (HabitKind.WATER, 1, "2.00L"),
        (HabitKind.WATER, 22, "2.25L"),
        (HabitKind.WATER, 85, "3.00L"),
        (HabitKind.WATER, 106, "3.00L"),
        (HabitKind.SOCIAL_MEDIA, 1, "1h 30m"),
        (HabitKind.SOCIAL_MEDIA, 15, "1h 15m"),
        (HabitKind.SOCIAL_MEDIA, 29, "1h 0m"),
        (HabitKind.SOCIAL_MEDIA, 43, "45 mins"),
        (HabitKind.SOCIAL_MEDIA, 71, "15 mins"),
        (HabitKind.SOCIAL_MEDIA, 85, "10 mins"),
        (HabitKind.SOCIAL_MEDIA, 200, "10 mins"),
        (HabitKind.SITUPS, 1, "10 reps"),
        (HabitKind.SITUPS, 8, "15 reps"),
        (HabitKind.SITUPS, 66, "55 reps"),
    ],
)
def test_compute_target(kind, day, expected):
    assert compute_target(kind, day) == expected


def test_reading_is_constant():
    assert {compute_target(HabitKind.READING, day) for day in range(1, 120)} == {"10 pages"}


def test_accepts_stored_habit_names():
    assert compute_target("running", 8) == "2.5 KM"
    assert compute_target("socialmedia", 1) == "1h 30m"


def test_unknown_kind_falls_back():
    assert compute_target("yoga", 10) == "Complete"
    assert compute_target("", 1) == "Complete"


def test_day_below_one_is_treated_as_day_one():
    for kind in HabitKind:
        assert compute_target(kind, 0) == compute_target(kind, 1)
        assert compute_target(kind, -5) == compute_target(kind, 1)


def test_deterministic():
    for kind in HabitKind:
        for day in (1, 13, 66, 100):
            assert compute_target(kind, day) == compute_target(kind, day)


@pytest.mark.parametrize("kind", [k for k in HabitKind if k != HabitKind.READING])
def test_difficulty_never_decreases(kind):
    values = [_difficulty(kind, compute_target(kind, day)) for day in range(1, 150)]
    assert values == sorted(values)
