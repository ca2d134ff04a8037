"""Recipe search: prompt the model and recover recipe records from its reply.

The model is asked for JSON but replies in free text, often wrapping the JSON
in prose or markdown fences. Parsing is lenient:

1. Find the first JSON array-or-object literal in the text (leftmost match,
   greedy, the array form tried first at each position).
2. ``json.loads`` it. An object becomes a one-element list; an array is used
   as-is.
3. Each object becomes a ``RecipeDetails`` with missing fields defaulted.

Anything that fails steps 1-2 is reported as ``ResponseFormatError``.
"""

import json
import re
from typing import List, Optional

from src.models.models import RecipeDetails, SearchType
from src.prompts.prompts import build_search_prompt
from src.services.errors import GenerationError, ResponseFormatError
from src.services.gemini import GeminiClient
from src.utils.logger import logger


JSON_LITERAL_PATTERN = re.compile(r"\[[\s\S]*\]|\{[\s\S]*\}")


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard JSON constant: {name}")


def extract_json_literal(text: str) -> Optional[str]:
    """Return the first JSON array-or-object literal in ``text``, or None."""
    match = JSON_LITERAL_PATTERN.search(text or "")
    return match.group(0) if match else None


def parse_recipe_text(text: str) -> List[RecipeDetails]:
    """Parse model reply text into recipe records.

    Args:
        text: Raw reply text (may include prose or code fences around the JSON).

    Returns:
        Recipe records in reply order. Array entries that are not JSON objects are skipped.

    Raises:
        ResponseFormatError: If no JSON literal is found, it does not parse,
            or it parses to something other than an object or array.
    """
    literal = extract_json_literal(text)
    if literal is None:
        logger.warning("No JSON literal found in model reply")
        logger.debug(f"Unparseable reply: {text!r}")
        raise ResponseFormatError(text=text)

    try:
        data = json.loads(literal, parse_constant=_reject_constant)
    except (json.JSONDecodeError, RecursionError, ValueError) as e:
        logger.warning(f"Invalid JSON in model reply: {e}")
        logger.debug(f"Unparseable literal: {literal!r}")
        raise ResponseFormatError(text=text) from e

    items = data if isinstance(data, list) else [data]

    recipes: List[RecipeDetails] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(f"Skipping recipe entry {idx + 1}: expected an object, got {type(item).__name__}")
            continue
        recipes.append(RecipeDetails.model_validate(item))

    return recipes


async def generate_recipes(
    search_term: str,
    search_type: SearchType,
    client: Optional[GeminiClient] = None,
) -> List[RecipeDetails]:
    """Ask the model for recipes matching an ingredient list or a recipe name.

    Args:
        search_term: Comma-separated ingredients or a recipe name.
        search_type: How ``search_term`` is interpreted.
        client: Model client. Default: a new ``GeminiClient`` from configuration.

    Returns:
        Parsed recipe records (possibly empty if the model returned an empty array).

    Raises:
        GenerationError: "Failed to generate recipe" when the model call fails.
        ResponseFormatError: "Failed to parse recipe data" when the reply is unusable.
    """
    search_type = SearchType(search_type)
    client = client or GeminiClient()
    prompt = build_search_prompt(search_term, search_type)

    logger.info(
        f"Generating recipes for {search_type.value} search: {search_term}",
        extra={"search_type": search_type.value},
    )
    try:
        text = await client.generate_text(prompt)
    except GenerationError as e:
        raise GenerationError("Failed to generate recipe", cause=e.cause) from e
    except ResponseFormatError as e:
        raise ResponseFormatError("Failed to parse recipe data") from e

    recipes = parse_recipe_text(text)
    logger.info(f"Model returned {len(recipes)} recipe(s)", extra={"search_type": search_type.value})
    return recipes
