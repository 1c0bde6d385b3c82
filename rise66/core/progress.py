from __future__ import annotations
import math
from collections import Counter
from datetime import date
from typing import Iterable, List

from .streaks import CompletionRecord

TOTAL_DAYS = 66


def elapsed_program_day(start_date: date, today: date, total_days: int = TOTAL_DAYS) -> int:
    """1-based program day for ``today``, clamped to the program length."""
    day = (today - start_date).days + 1
    return min(max(day, 1), total_days)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def completion_percentage(completions: Iterable, total_habits: int) -> int:
    if total_habits == 0:
        return 0
    completed_count = sum(1 for c in completions if c.completed)
    return _round_half_up(completed_count / total_habits * 100)


def habit_progress_percentage(streak: int, total_days: int = TOTAL_DAYS) -> float:
    if streak <= 0:
        return 0.0
    return min(100.0, streak / total_days * 100)


def streak_emoji(streak: int) -> str:
    if streak >= 30:
        return "🔥"
    if streak >= 21:
        return "⚡"
    if streak >= 14:
        return "💪"
    if streak >= 7:
        return "🌟"
    if streak >= 3:
        return "✨"
    return "💎"


def motivational_message(completed_count: int, total_count: int) -> str:
    if total_count <= 0:
        return "Just getting started! Let's build some momentum! 🚀"

    percentage = completed_count / total_count * 100
    if percentage == 100:
        return "Perfect day! You're unstoppable! 🏆"
    if percentage >= 80:
        return "Amazing progress! Keep crushing it! 🔥"
    if percentage >= 60:
        return "Great momentum! You're doing awesome! 💪"
    if percentage >= 40:
        return "Good start! Keep building that streak! ⭐"
    if percentage >= 20:
        return "Every step counts! You've got this! 💎"
    return "Just getting started! Let's build some momentum! 🚀"


def program_day_records(completions: Iterable, threshold: int) -> List[CompletionRecord]:
    """
    Collapse per-habit completions into one record per calendar day.

    A day is complete for the program when at least ``threshold`` habits were
    completed on it. Records come back newest first.
    """
    per_day: Counter = Counter()
    seen_days = set()
    for c in completions:
        seen_days.add(c.log_date)
        if c.completed:
            per_day[c.log_date] += 1

    return [
        CompletionRecord(log_date=d, completed=per_day[d] >= threshold)
        for d in sorted(seen_days, reverse=True)
    ]
