"""
Affirmations, journal prompts and journal analysis.

Requests go to Together AI first and to Hugging Face inference second; a
provider is only tried when its key is configured. Callers never see an AI
error: when no provider produces text the fixed texts in ``fallbacks`` are
returned instead.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import re

import httpx
from loguru import logger

from ..config import settings
from .client import get_async_client
from ..core.progress import TOTAL_DAYS
from .fallbacks import FALLBACKS, SENTIMENTS

_NUMBERED_LINE = re.compile(r"^\d+\.")


class AIUnavailableError(RuntimeError):
    """No provider is configured or every provider failed."""


async def _call_together(messages: List[Dict[str, str]], max_tokens: int) -> str:
    client = get_async_client()
    response = await client.chat.completions.create(
        model=settings.TOGETHER_MODEL_ID,
        messages=messages,
        max_tokens=max_tokens,
        temperature=0.7,
    )
    if not response or not response.choices:
        raise ValueError("Empty response from API")
    return response.choices[0].message.content or ""


async def _call_huggingface(
    messages: List[Dict[str, str]],
    max_tokens: int,
    http_client: Optional[httpx.AsyncClient] = None,
) -> str:
    prompt = "\n\n".join(m["content"] for m in messages)
    payload = {
        "inputs": prompt,
        "parameters": {
            "max_new_tokens": max_tokens,
            "temperature": 0.7,
            "return_full_text": False,
        },
    }
    headers = {"Authorization": f"Bearer {settings.HUGGINGFACE_API_KEY}"}

    client = http_client or httpx.AsyncClient(timeout=settings.AI_TIMEOUT_SECONDS)
    attempts = settings.AI_MAX_RETRIES + 1
    last_error: Optional[Exception] = None
    try:
        for attempt in range(1, attempts + 1):
            try:
                resp = await client.post(settings.HF_API_URL, json=payload, headers=headers)
                resp.raise_for_status()
                data = resp.json()
                return data[0].get("generated_text") or ""
            except (httpx.HTTPError, ValueError, LookupError, TypeError, AttributeError) as e:
                last_error = e
                logger.warning("Hugging Face attempt {}/{} failed: {}", attempt, attempts, e)
        raise last_error
    finally:
        if http_client is None:
            await client.aclose()


async def call_llama(
    messages: List[Dict[str, str]],
    max_tokens: int = 150,
    http_client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Return the first non-empty completion from the provider chain."""
    if settings.TOGETHER_API_KEY:
        try:
            content = await _call_together(messages, max_tokens)
            if content:
                return content
            logger.warning("Together AI returned an empty completion")
        except Exception as e:
            logger.exception("Together AI error: {}", e)

    if settings.HUGGINGFACE_API_KEY:
        try:
            content = await _call_huggingface(messages, max_tokens, http_client)
            if content:
                return content
            logger.warning("Hugging Face returned an empty completion")
        except Exception as e:
            logger.exception("Hugging Face API error: {}", e)

    raise AIUnavailableError("No AI API keys configured or all APIs failed")


async def generate_daily_affirmation(
    mood: str,
    completed_habits: int,
    total_habits: int,
    current_streak: int,
) -> str:
    prompt = (
        f"Generate a personalized daily affirmation for someone working on a {TOTAL_DAYS}-day habit reset journey.\n\n"
        "Context:\n"
        f"- Current mood: {mood}\n"
        f"- Habits completed today: {completed_habits}/{total_habits}\n"
        f"- Current streak: {current_streak} days\n\n"
        "The affirmation should be:\n"
        "- Encouraging and motivational\n"
        "- Specific to their current progress\n"
        "- Between 2-3 sentences\n"
        "- Focused on growth mindset and consistency\n"
        "- Include relevant emoji\n\n"
        "Respond with just the affirmation text."
    )
    try:
        content = await call_llama([{"role": "user", "content": prompt}], 150)
        return content.strip() or FALLBACKS.affirmation
    except Exception as e:
        logger.warning("Falling back to default affirmation: {}", e)
        return FALLBACKS.affirmation


def parse_journal_prompts(content: str) -> Optional[List[str]]:
    """Three prompts from one-per-line model output, or None if there are fewer."""
    prompts = [
        line.strip()
        for line in content.split("\n")
        if line.strip() and not _NUMBERED_LINE.match(line.strip())
    ][:3]
    return prompts if len(prompts) >= 3 else None


async def generate_journal_prompts(mood: str, current_day: int) -> List[str]:
    prompt = (
        f"Generate 3 personalized journal prompts for someone on day {current_day} of their "
        f"{TOTAL_DAYS}-day habit journey. Their current mood is: {mood}. Each prompt should be "
        "insightful and help them reflect on their progress.\n\n"
        "Respond with exactly 3 prompts, one per line, no numbering or formatting. Example:\n"
        + "\n".join(FALLBACKS.journal_prompts)
    )
    try:
        content = await call_llama([{"role": "user", "content": prompt}], 200)
        prompts = parse_journal_prompts(content)
        if prompts:
            return prompts
        logger.warning("Model returned fewer than 3 journal prompts; using defaults")
    except Exception as e:
        logger.warning("Falling back to default journal prompts: {}", e)
    return list(FALLBACKS.journal_prompts)


def _field(lines: List[str], label: str) -> Optional[str]:
    for line in lines:
        if line.startswith(label):
            return line[len(label):].strip() or None
    return None


def parse_journal_analysis(response: str) -> Dict[str, Any]:
    lines = [line.strip() for line in response.split("\n")]

    sentiment = (_field(lines, "Sentiment:") or FALLBACKS.sentiment).lower()
    insight1 = _field(lines, "Insight 1:") or FALLBACKS.insights[0]
    insight2 = _field(lines, "Insight 2:") or FALLBACKS.insights[1]
    encouragement = _field(lines, "Encouragement:") or FALLBACKS.encouragement

    return {
        "sentiment": sentiment if sentiment in SENTIMENTS else FALLBACKS.sentiment,
        "insights": [insight1, insight2],
        "encouragement": encouragement,
    }


def default_journal_analysis() -> Dict[str, Any]:
    return {
        "sentiment": FALLBACKS.sentiment,
        "insights": list(FALLBACKS.insights),
        "encouragement": FALLBACKS.encouragement,
    }


async def analyze_journal_entry(content: str) -> Dict[str, Any]:
    prompt = (
        f'Analyze this journal entry and provide insights: "{content}"\n\n'
        "Please analyze the sentiment (positive/neutral/negative), provide 2 insights about the "
        "person's mindset or progress, and give an encouraging message.\n\n"
        "Respond in this format:\n"
        "Sentiment: [positive/neutral/negative]\n"
        "Insight 1: [insight about their mindset]\n"
        "Insight 2: [insight about their progress]\n"
        "Encouragement: [encouraging message]"
    )
    try:
        response = await call_llama([{"role": "user", "content": prompt}], 300)
        return parse_journal_analysis(response)
    except Exception as e:
        logger.warning("Falling back to default journal analysis: {}", e)
        return default_journal_analysis()
