import logging
import traceback
from typing import Any, Dict, Optional

from openai import APIConnectionError, APITimeoutError, OpenAI, OpenAIError

from kigaers.exceptions import GenerationError, LLMConnectionError, LLMTimeoutError

logger = logging.getLogger(__name__)


class LLMClient:
    """Client for an OpenAI-compatible chat completion endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        timeout: float = 120.0,
        temperature: float = 0.4,
        max_tokens: int = 2048,
        client: Optional[OpenAI] = None,
    ):
        self.client = client or OpenAI(api_key=api_key or "missing", base_url=base_url, timeout=timeout)
        self.default_model = model
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens

    def health_check(self) -> Dict[str, Any]:
        """Check if the LLM endpoint is reachable."""
        try:
            models = self.client.models.list()
            logger.info(f"LLM endpoint reachable, {len(models.data)} models found.")
            return {
                "status": "healthy",
                "message": "LLM endpoint reachable",
                "model_count": len(models.data),
            }
        except APITimeoutError as e:
            logger.error(f"[LLM ERROR] Timeout after {self.timeout}s: {e}")
            raise LLMTimeoutError(f"LLM service timeout: {e}") from e
        except APIConnectionError as e:
            logger.error(
                f"[LLM ERROR] Connection failed.\n"
                f"Base URL: {self.client.base_url}\n"
                f"Details: {e}\n"
                f"Traceback:\n{traceback.format_exc()}"
            )
            raise LLMConnectionError(f"Cannot connect to LLM service: {e}") from e
        except OpenAIError as e:
            raise GenerationError(f"Health check failed: {e}") from e

    def generate(self, prompt: str, model: Optional[str] = None, **kwargs) -> str:
        """Run a single-turn completion and return the text.

        :raises GenerationError: on API failure or when the model returns nothing
        """
        model = model or self.default_model
        logger.info(f"Sending request to LLM: model={model}, prompt_chars={len(prompt)}")
        try:
            completion = self.client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=kwargs.get("temperature", self.temperature),
                top_p=kwargs.get("top_p", 0.9),
                max_tokens=kwargs.get("max_tokens", self.max_tokens),
            )
        except APITimeoutError as e:
            raise LLMTimeoutError(f"LLM request timeout: {e}") from e
        except APIConnectionError as e:
            raise LLMConnectionError(f"Cannot connect to LLM: {e}") from e
        except OpenAIError as e:
            raise GenerationError(f"LLM API error: {e}") from e

        if not completion.choices:
            raise GenerationError("LLM returned no choices")
        text = (completion.choices[0].message.content or "").strip()
        if not text:
            raise GenerationError("LLM returned an empty response")
        logger.debug(f"LLM response (first 100 chars): {text[:100]}")
        return text
