"""Prompt templates for recipe search and recipe chat.

Each template interpolates exactly one user-supplied string (the ingredient
list, the recipe name, or the chat question alongside the recipe name it is
scoped to). Prompts are plain text sent verbatim to the model, so the same
input always produces the same prompt.
"""

from typing import Optional

from src.models.models import SearchType
from src.utils.config import config


INGREDIENTS_PROMPT_TEMPLATE = """Create {count} possible recipe suggestions using these ingredients: {ingredients}.
For each recipe, provide a brief summary and required additional ingredients.

Format the response EXACTLY as this JSON array with {count} recipes:
[
  {{
    "idMeal": "1",
    "strMeal": "[Recipe name]",
    "strCategory": "[Category]",
    "strArea": "[Cuisine style]",
    "strDescription": "[Brief 2-3 sentence description]",
    "strMealThumb": "{thumbnail}",
    "additionalIngredients": "[List of additional ingredients needed]",
    "strInstructions": "",
    "strTags": "",
    "strYoutube": ""
  }}
]"""

RECIPE_PROMPT_TEMPLATE = """Create {count} detailed recipes for: {recipe_name}.
Include precise measurements and clear instructions.

Format the response EXACTLY as this JSON structure:
{{
  "idMeal": "1",
  "strMeal": "[Recipe name]",
  "strCategory": "[Category]",
  "strArea": "[Cuisine style]",
  "strInstructions": "[Detailed step-by-step numbered instructions]",
  "strMealThumb": "{thumbnail}",
  "Ingredients": "[List of all ingredients needed with measurement]",
  "strTags": "Healthy,Easy,Quick",
  "strYoutube": "",
  "strDescription": "[Brief description]"
}}"""

CHAT_PROMPT_TEMPLATE = """You are a helpful cooking assistant. The user is asking about the recipe: {recipe_name}.
Only answer questions related to cooking, ingredients, techniques, or variations of this specific recipe.
If the question is not related to this recipe or cooking, politely redirect them to ask about the recipe.

User question: {message}"""


def build_search_prompt(
    search_term: str,
    search_type: SearchType,
    suggestions: Optional[int] = None,
    thumbnail_url: Optional[str] = None,
) -> str:
    """Build the recipe search prompt for an ingredient list or a recipe name.

    Args:
        search_term: Comma-separated ingredients or a recipe name, inserted as-is.
        search_type: Which template to use.
        suggestions: Number of recipes to ask for. Default: config.RECIPE_SUGGESTIONS.
        thumbnail_url: Image URL the model is told to echo. Default: config.DEFAULT_THUMBNAIL_URL.

    Returns:
        The prompt text.
    """
    count = suggestions if suggestions is not None else config.RECIPE_SUGGESTIONS
    thumbnail = thumbnail_url or config.DEFAULT_THUMBNAIL_URL

    if SearchType(search_type) == SearchType.INGREDIENTS:
        return INGREDIENTS_PROMPT_TEMPLATE.format(count=count, ingredients=search_term, thumbnail=thumbnail)
    return RECIPE_PROMPT_TEMPLATE.format(count=count, recipe_name=search_term, thumbnail=thumbnail)


def build_chat_prompt(message: str, recipe_name: str) -> str:
    """Build a standalone follow-up prompt scoped to one recipe."""
    return CHAT_PROMPT_TEMPLATE.format(recipe_name=recipe_name, message=message)
