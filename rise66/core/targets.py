"""
Progressive difficulty targets.

Every habit gets harder as the program advances. The rule for each kind is a
pure function of the program day (or the program week, ``ceil(day / 7)``),
clipped at a fixed floor or ceiling, and rendered as the string shown to the
user.
"""
from __future__ import annotations
import math
from typing import Callable, Dict, Union

from .habits import HabitKind

FALLBACK_TARGET = "Complete"


def program_week(day: int) -> int:
    return math.ceil(day / 7)


def _number(value: float) -> str:
    # 5.0 -> "5", 7.5 -> "7.5"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _wakeup(day: int, week: int) -> str:
    # Start at 7:30 AM, move earlier every 2 weeks, never before 5 AM
    base_hour = 7
    minute = max(0, 30 - ((week - 1) // 2) * 30)
    if minute == 0 and week > 4:
        hour = base_hour - (week - 5) // 2
    else:
        hour = base_hour
    return f"{max(5, hour)}:{minute:02d} AM"


def _running(day: int, week: int) -> str:
    distance = min(6.0, 2.0 + (week - 1) * 0.5)
    return f"{distance:.1f} KM"


def _workout(day: int, week: int) -> str:
    duration = min(90, 30 + ((week - 1) // 2) * 15)
    return f"{duration} mins"


def _pushups(day: int, week: int) -> str:
    # steps every 3 days, not weeks
    reps = 10 + ((day - 1) // 3) * 5
    return f"{reps} reps"


def _meditation(day: int, week: int) -> str:
    duration = min(20.0, 5 + ((week - 1) // 2) * 2.5)
    return f"{_number(duration)} mins"


def _water(day: int, week: int) -> str:
    liters = min(3.0, 2.0 + ((week - 1) // 3) * 0.25)
    return f"{liters:.2f}L"


def _social_media(day: int, week: int) -> str:
    limit = max(10, 90 - ((week - 1) // 2) * 15)
    hours, mins = divmod(limit, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins} mins"


def _reading(day: int, week: int) -> str:
    return "10 pages"


def _situps(day: int, week: int) -> str:
    reps = 10 + (week - 1) * 5
    return f"{reps} reps"


TARGET_RULES: Dict[HabitKind, Callable[[int, int], str]] = {
    HabitKind.WAKEUP: _wakeup,
    HabitKind.RUNNING: _running,
    HabitKind.WORKOUT: _workout,
    HabitKind.PUSHUPS: _pushups,
    HabitKind.MEDITATION: _meditation,
    HabitKind.WATER: _water,
    HabitKind.SOCIAL_MEDIA: _social_media,
    HabitKind.READING: _reading,
    HabitKind.SITUPS: _situps,
}


def compute_target(kind: Union[HabitKind, str], day: int) -> str:
    """
    Return the display target for ``kind`` on program ``day``.

    Days below 1 are treated as day 1. Days past the end of the program keep
    following the same formulas. Unknown habit names get ``"Complete"``.
    """
    if not isinstance(kind, HabitKind):
        kind = HabitKind.parse(kind)
    rule = TARGET_RULES.get(kind) if kind is not None else None
    if rule is None:
        return FALLBACK_TARGET

    day = max(1, int(day))
    return rule(day, program_week(day))
