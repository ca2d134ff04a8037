"""Follow-up questions about a selected recipe.

Every question is sent as a fresh prompt that names the recipe; no earlier
turns are included, so the model sees each question on its own.
"""

from typing import Optional

from src.prompts.prompts import build_chat_prompt
from src.services.errors import GenerationError, SpiceRouteError
from src.services.gemini import GeminiClient
from src.utils.logger import logger


async def chat_about_recipe(
    message: str,
    recipe_name: str,
    client: Optional[GeminiClient] = None,
) -> str:
    """Answer one question about ``recipe_name``.

    Raises:
        GenerationError: "Failed to get AI response" on any failure, including a reply without text.
    """
    logger.info(f"Recipe chat question ({len(message)} chars)", extra={"recipe_name": recipe_name})
    try:
        client = client or GeminiClient()
        return await client.generate_text(build_chat_prompt(message, recipe_name))
    except (SpiceRouteError, ValueError) as e:
        logger.error(f"Chat error: {e}", extra={"recipe_name": recipe_name})
        raise GenerationError("Failed to get AI response", cause=e) from e
