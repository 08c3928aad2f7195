"""Groq LLM client wrapper."""

import json
import re
import time
from typing import Any, Dict, List, Optional

from groq import Groq
from groq import APIConnectionError, RateLimitError, InternalServerError

from shopassist.config.settings import settings
from shopassist.config.logging_config import get_logger

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?|```$")


class GroqClient:
    """Wrapper for Groq LLM client with retry logic."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize Groq client."""
        api_key = api_key or settings.groq_api_key
        if not api_key:
            raise RuntimeError("GROQ_API_KEY is not configured")

        try:
            self.client = Groq(api_key=api_key)
            self.model = model or settings.groq_model
            logger.info(f"Groq client initialized with model: {self.model}")
        except Exception as e:
            logger.error(f"Failed to initialize Groq client: {str(e)}")
            raise

    def chat_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0,
        max_retries: int = 3,
        sleep_seconds: int = 3,
        model: Optional[str] = None,
    ) -> str:
        """
        Call Groq chat completion API with retry logic.

        Args:
            messages: List of message dictionaries with 'role' and 'content'
            temperature: Sampling temperature (0-1)
            max_retries: Maximum number of retry attempts
            sleep_seconds: Seconds to wait between retries
            model: Override for the configured model

        Returns:
            Response content as string

        Raises:
            RuntimeError: If all retries fail
        """
        last_error = None

        for attempt in range(1, max_retries + 1):
            try:
                response = self.client.chat.completions.create(
                    model=model or self.model,
                    temperature=temperature,
                    messages=messages
                )

                return (response.choices[0].message.content or "").strip()

            except (APIConnectionError, RateLimitError, InternalServerError) as e:
                last_error = e
                logger.warning(f"[Retry {attempt}/{max_retries}] Groq error: {e}")

                if attempt < max_retries:
                    time.sleep(sleep_seconds)

            except Exception as e:
                logger.error(f"Unexpected error in Groq chat completion: {e}")
                raise RuntimeError(f"Unexpected error: {e}") from e

        raise RuntimeError(
            f"Groq API failed after {max_retries} attempts: {last_error}"
        )

    def extract_json(
        self,
        system_prompt: str,
        user_query: str,
        max_retries: int = 3,
        model: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Extract structured JSON from LLM response.

        Markdown code fences around the JSON are tolerated.

        Raises:
            ValueError: If JSON parsing fails
            RuntimeError: If API call fails
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_query}
        ]

        raw_response = self.chat_completion(
            messages, temperature=0, max_retries=max_retries, model=model
        )
        cleaned = _CODE_FENCE.sub("", raw_response.strip()).strip()

        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON returned from Groq: {raw_response}")
            raise ValueError(f"Invalid JSON returned:\n{raw_response}") from e


def get_groq_client() -> Optional[GroqClient]:
    """
    Get Groq client instance.

    Returns:
        GroqClient instance, or None when no API key is configured
    """
    if not settings.groq_api_key:
        logger.warning("GROQ_API_KEY not set; LLM features will use fallbacks")
        return None
    return GroqClient()
