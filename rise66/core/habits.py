from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class HabitKind(str, Enum):
    """The nine habits of the program. Values are the stored habit names."""

    WAKEUP = "wakeup"
    RUNNING = "running"
    WORKOUT = "workout"
    PUSHUPS = "pushups"
    MEDITATION = "meditation"
    WATER = "water"
    SOCIAL_MEDIA = "socialmedia"
    READING = "reading"
    SITUPS = "situps"

    @classmethod
    def parse(cls, name: str) -> Optional["HabitKind"]:
        try:
            return cls(name)
        except ValueError:
            return None


class Mood(str, Enum):
    AMAZING = "amazing"
    GREAT = "great"
    OKAY = "okay"
    MEH = "meh"
    TERRIBLE = "terrible"


@dataclass(frozen=True)
class HabitTemplate:
    kind: HabitKind
    display_name: str
    emoji: str
    unit: str  # time, distance, duration, reps, volume, limit, pages


DEFAULT_HABITS: List[HabitTemplate] = [
    HabitTemplate(HabitKind.WAKEUP, "Wake Up Early", "🛏️", "time"),
    HabitTemplate(HabitKind.RUNNING, "Morning Run", "🏃‍♂️", "distance"),
    HabitTemplate(HabitKind.WORKOUT, "Strength Training", "💪", "duration"),
    HabitTemplate(HabitKind.PUSHUPS, "Push-ups", "🔥", "reps"),
    HabitTemplate(HabitKind.MEDITATION, "Mindfulness", "🧘", "duration"),
    HabitTemplate(HabitKind.WATER, "Hydration", "💧", "volume"),
    HabitTemplate(HabitKind.SOCIAL_MEDIA, "Digital Detox", "📵", "limit"),
    HabitTemplate(HabitKind.READING, "Daily Reading", "📚", "pages"),
    HabitTemplate(HabitKind.SITUPS, "Core Training", "🔁", "reps"),
]
