"""Thin wrapper around the Google Gemini text-generation API.

Sends a single prompt as one user content part and returns the text of the
first part of the first candidate. One attempt per call: a failed request is
reported to the caller as ``GenerationError`` and nothing is retried.
"""

import asyncio
from typing import Optional

from google import genai
from google.genai import types

from src.services.errors import GenerationError, ResponseFormatError
from src.utils.config import config
from src.utils.logger import logger


class GeminiClient:
    """Send prompts to a Gemini model and return the reply text."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[genai.Client] = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key. Default: config.GEMINI_API_KEY (validated).
            model: Model id. Default: config.GEMINI_MODEL.
            client: Pre-built SDK client, mainly for tests.

        Raises:
            ValueError: If configuration is invalid and no client was supplied.
        """
        self.model = model or config.GEMINI_MODEL

        if client is not None:
            self._client = client
            return

        if api_key is None:
            config.validate()
            api_key = config.GEMINI_API_KEY
        if not api_key:
            raise ValueError("GEMINI_API_KEY is required")

        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=config.REQUEST_TIMEOUT_S * 1000),
        )

    def _generation_config(self) -> Optional[types.GenerateContentConfig]:
        if config.TEMPERATURE is None and config.MAX_OUTPUT_TOKENS is None:
            return None
        return types.GenerateContentConfig(
            temperature=config.TEMPERATURE,
            max_output_tokens=config.MAX_OUTPUT_TOKENS,
        )

    async def generate_text(self, prompt: str) -> str:
        """Send one prompt and return the reply text.

        Args:
            prompt: Complete prompt text, sent verbatim.

        Returns:
            Text of the first part of the first candidate.

        Raises:
            GenerationError: If the API call fails.
            ResponseFormatError: If the reply carries no candidate text.
        """
        contents = [types.Content(role="user", parts=[types.Part(text=prompt)])]

        logger.debug(f"Calling {self.model} with a {len(prompt)} char prompt")
        try:
            # The SDK call is synchronous; keep the event loop free while it runs
            response = await asyncio.to_thread(
                self._client.models.generate_content,
                model=self.model,
                contents=contents,
                config=self._generation_config(),
            )
        except Exception as e:
            logger.error(f"Gemini API call failed: {e}")
            raise GenerationError(cause=e) from e

        return extract_candidate_text(response)


def extract_candidate_text(response) -> str:
    """Return ``candidates[0].content.parts[0].text`` from a Gemini response.

    Raises:
        ResponseFormatError: If any step of that path is missing or the text is not a string.
    """
    try:
        text = response.candidates[0].content.parts[0].text
    except (AttributeError, IndexError, TypeError) as e:
        logger.warning(f"Gemini response has no candidate text: {e}")
        raise ResponseFormatError() from e

    if not isinstance(text, str):
        logger.warning("Gemini response candidate text is empty")
        raise ResponseFormatError()
    return text
