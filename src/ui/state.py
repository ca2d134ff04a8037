"""Page state for the recipe finder, independent of the web framework.

``SearchState`` holds the search form, the result cards and the selected
recipe. ``RecipeChat`` holds the follow-up transcript for one recipe. The
Streamlit app keeps one instance of each in its session; the CLI uses them
directly.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from src.models.models import ChatMessage, ChatRole, RecipeDetails, SearchType
from src.services.chat import chat_about_recipe
from src.services.errors import SpiceRouteError
from src.services.gemini import GeminiClient
from src.services.recipes import generate_recipes
from src.utils.logger import logger


CHAT_ERROR_REPLY = "Sorry, I had trouble processing your question. Please try again."

# Footer quick links: label -> recipe-name query
CATEGORY_QUERIES = {
    "Breakfast": "breakfast recipes",
    "Main Course": "main course recipes",
    "Desserts": "dessert recipes",
    "Beverages": "beverage recipes",
}


class SearchState(BaseModel):
    """Search form, results and selection."""

    search_type: SearchType = SearchType.INGREDIENTS
    search_term: str = ""
    ingredients: List[str] = Field(default_factory=list)
    recipe_options: List[RecipeDetails] = Field(default_factory=list)
    selected_index: Optional[int] = None
    loading: bool = False
    error: str = ""

    def add_ingredient(self) -> None:
        """Move the trimmed search term into the ingredient list."""
        term = self.search_term.strip()
        if term:
            self.ingredients.append(term)
            self.search_term = ""

    def remove_ingredient(self, index: int) -> None:
        if 0 <= index < len(self.ingredients):
            del self.ingredients[index]

    def switch_search_type(self, search_type: SearchType) -> None:
        """Change mode and drop state that belongs to the other mode."""
        self.search_type = SearchType(search_type)
        self.selected_index = None
        self.recipe_options = []
        if self.search_type == SearchType.INGREDIENTS:
            self.search_term = ""
        else:
            self.ingredients = []

    def can_search(self) -> bool:
        if self.loading:
            return False
        if self.search_type == SearchType.INGREDIENTS:
            return len(self.ingredients) > 0
        return bool(self.search_term)

    async def search(self, query: Optional[str] = None, client: Optional[GeminiClient] = None) -> None:
        """Run a recipe search and store the results or the error message.

        Args:
            query: Term to search instead of the current search term.
            client: Model client passed through to the service.
        """
        term = query or self.search_term
        if not term and not self.ingredients:
            return

        self.loading = True
        self.error = ""
        try:
            if self.search_type == SearchType.INGREDIENTS:
                search_string = ", ".join(self.ingredients)
            else:
                search_string = term
            self.recipe_options = await generate_recipes(search_string, self.search_type, client=client)
            self.selected_index = None
        except (SpiceRouteError, ValueError) as e:
            logger.warning(f"Recipe search failed: {e}")
            self.error = str(e) or "Failed to generate recipe"
        finally:
            self.loading = False

    async def search_category(self, label: str, client: Optional[GeminiClient] = None) -> None:
        """Search a footer category by switching to recipe-name mode."""
        query = CATEGORY_QUERIES.get(label, label)
        self.switch_search_type(SearchType.RECIPE)
        self.search_term = query
        await self.search(query, client=client)

    def select(self, index: int) -> None:
        if 0 <= index < len(self.recipe_options):
            self.selected_index = index

    def close_recipe(self) -> None:
        self.selected_index = None

    @property
    def selected_recipe(self) -> Optional[RecipeDetails]:
        if self.selected_index is None or self.selected_index >= len(self.recipe_options):
            return None
        return self.recipe_options[self.selected_index]


class RecipeChat(BaseModel):
    """Follow-up chat transcript for one recipe."""

    recipe_name: str
    messages: List[ChatMessage] = Field(default_factory=list)
    sending: bool = False

    async def send(self, text: str, client: Optional[GeminiClient] = None) -> None:
        """Send one question and append both sides of the exchange.

        Blank questions, and questions sent while a reply is pending, are ignored.
        A failed call appends an apology instead of raising.
        """
        message = text.strip()
        if not message or self.sending:
            return

        self.sending = True
        self.messages.append(ChatMessage(role=ChatRole.USER, content=message))
        try:
            reply = await chat_about_recipe(message, self.recipe_name, client=client)
            self.messages.append(ChatMessage(role=ChatRole.ASSISTANT, content=reply))
        except SpiceRouteError:
            self.messages.append(ChatMessage(role=ChatRole.ASSISTANT, content=CHAT_ERROR_REPLY))
        finally:
            self.sending = False
