# File: rise66/llm/client.py

from typing import Optional
from openai import AsyncOpenAI
from ..config import settings

_client: Optional[AsyncOpenAI] = None

def get_openai_client() -> AsyncOpenAI:
    """Together AI speaks the OpenAI chat-completions protocol."""
    return AsyncOpenAI(
        base_url=settings.TOGETHER_BASE_URL,
        api_key=settings.TOGETHER_API_KEY,
        timeout=settings.AI_TIMEOUT_SECONDS,
        max_retries=settings.AI_MAX_RETRIES,
    )

def get_async_client() -> AsyncOpenAI:
    # Built lazily: AsyncOpenAI refuses to construct without an api key
    global _client
    if _client is None:
        _client = get_openai_client()
    return _client
