"""
Texts shown when no AI provider answers. Users see these directly, so both
the "no key configured" and the "every provider failed" paths read them from
here.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AIFallbacks:
    affirmation: str
    journal_prompts: Tuple[str, ...]
    sentiment: str
    insights: Tuple[str, str]
    encouragement: str


FALLBACKS = AIFallbacks(
    affirmation=(
        "You're building incredible momentum with your habits. Every small step you take today "
        "is shaping the powerful, disciplined person you're becoming. Trust the process and "
        "celebrate your consistency! 🌟"
    ),
    journal_prompts=(
        "What are you grateful for today?",
        "What challenged you the most today?",
        "What's your focus for tomorrow?",
    ),
    sentiment="neutral",
    insights=(
        "You're showing great self-awareness in your reflection.",
        "Your commitment to growth is inspiring.",
    ),
    encouragement="Keep up the great work on your journey!",
)

SENTIMENTS = ("positive", "neutral", "negative")
