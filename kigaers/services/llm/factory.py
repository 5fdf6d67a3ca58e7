from functools import lru_cache

from kigaers.config import get_settings
from kigaers.services.llm.client import LLMClient


@lru_cache(maxsize=1)
def make_llm_client() -> LLMClient:
    """
    Create and return a singleton LLM client instance.

    Returns:
        LLMClient: Configured OpenAI-compatible client
    """
    settings = get_settings()
    return LLMClient(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        timeout=settings.llm_timeout,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
