"""Data models for the Spice Route recipe finder.

Defines Pydantic models for recipe records returned by the language model,
the recipe chat transcript, and the newsletter form. Recipe records are
deliberately lenient: any JSON object the model returns becomes a record,
with missing or oddly-typed fields coerced to strings instead of rejected.
"""

import json
from enum import Enum
from typing import Annotated, Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.utils.config import config


class SearchType(str, Enum):
    """How the search term is interpreted."""

    INGREDIENTS = "ingredients"
    RECIPE = "recipe"


def _coerce_text(value: Any, joiner: str = ", ") -> str:
    """Flatten a JSON value into display text."""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return joiner.join(_coerce_text(item, joiner) for item in value if item is not None)
    return json.dumps(value)


class RecipeDetails(BaseModel):
    """Domain model for one recipe record returned by the model.

    Field aliases follow the JSON keys requested in the search prompts
    (``strMeal``, ``strCategory``, ...). Either the alias or the attribute
    name is accepted on input; ``model_dump(by_alias=True)`` gives the wire shape.
    Keys the model adds on its own are preserved as extra fields.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Annotated[str, Field("", alias="idMeal", description="Identifier assigned by the model")]
    name: Annotated[str, Field("", alias="strMeal", description="Recipe name")]
    category: Annotated[str, Field("", alias="strCategory", description="Meal category, e.g. Dessert")]
    area: Annotated[str, Field("", alias="strArea", description="Cuisine style")]
    description: Annotated[str, Field("", alias="strDescription", description="Short summary")]
    thumbnail: Annotated[
        str,
        Field(
            default_factory=lambda: config.DEFAULT_THUMBNAIL_URL,
            alias="strMealThumb",
            description="Image URL",
        ),
    ]
    additional_ingredients: Annotated[
        str,
        Field("", alias="additionalIngredients", description="Ingredients needed beyond the user's list"),
    ]
    ingredients: Annotated[str, Field("", alias="Ingredients", description="Full ingredient list with measurements")]
    instructions: Annotated[str, Field("", alias="strInstructions", description="Newline-separated steps")]
    tags: Annotated[str, Field("", alias="strTags", description="Comma-separated tags")]
    youtube: Annotated[str, Field("", alias="strYoutube", description="Optional video link")]

    @field_validator("*", mode="before")
    @classmethod
    def coerce_loose_values(cls, value: Any, info: ValidationInfo) -> Any:
        """Turn nulls into defaults and non-string JSON values into text."""
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        joiner = "\n" if info.field_name == "instructions" else ", "
        return _coerce_text(value, joiner)

    @property
    def tag_list(self) -> List[str]:
        """Tags split on commas, trimmed, empties dropped."""
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]

    @property
    def youtube_id(self) -> str:
        """Video id taken from the ``v=`` query parameter, or empty."""
        parts = self.youtube.split("v=")
        return parts[1] if len(parts) > 1 else ""

    @property
    def instruction_steps(self) -> List[str]:
        """Non-blank instruction lines in order."""
        return [line for line in self.instructions.split("\n") if line.strip()]

    @property
    def card_thumbnail(self) -> str:
        return self.thumbnail or config.CARD_FALLBACK_THUMBNAIL_URL


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One entry in a recipe chat transcript."""

    role: ChatRole
    content: str


class NewsletterSignup(BaseModel):
    """Newsletter form input. Only validated, never stored."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: Annotated[
        str,
        Field(
            min_length=3,
            max_length=254,
            pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
            description="Subscriber e-mail address",
        ),
    ]
