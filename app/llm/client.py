"""LLM client factory for the text-generation collaborators."""

import logging
from typing import Any

from openai import AsyncOpenAI

from app.core.config import Settings

logger = logging.getLogger(__name__)


def create_llm_client(settings: Settings) -> Any:
    """
    Create an async OpenAI-compatible client.

    The default base URL points at Groq's OpenAI-compatible endpoint; any
    provider speaking the same API can be configured instead.

    Args:
        settings: Application settings

    Returns:
        AsyncOpenAI client instance
    """
    if not settings.LLM_API_KEY:
        logger.warning("LLM_API_KEY not set. Assistant calls will fail until it is configured.")

    logger.debug("Creating LLM client for %s", settings.LLM_BASE_URL)
    return AsyncOpenAI(api_key=settings.LLM_API_KEY or "unset", base_url=settings.LLM_BASE_URL,
                       timeout=settings.LLM_TIMEOUT_SECONDS, )
