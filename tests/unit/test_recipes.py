"""Unit tests for recipe search and reply parsing.

Tests cover:
- Locating the JSON literal inside free text
- Turning objects/arrays into recipe records
- Malformed replies reported as ResponseFormatError
- generate_recipes end to end against a stub client
"""

import pytest

from src.models.models import SearchType
from src.services.errors import GenerationError, ResponseFormatError
from src.services.recipes import extract_json_literal, generate_recipes, parse_recipe_text


class TestExtractJsonLiteral:
    """Test pattern-based JSON extraction."""

    def test_bare_array(self):
        assert extract_json_literal('[{"a": 1}]') == '[{"a": 1}]'

    def test_object_with_surrounding_prose(self):
        text = 'Sure! Here you go:\n{"strMeal": "Soup"}\nHope that helps.'
        assert extract_json_literal(text) == '{"strMeal": "Soup"}'

    def test_strips_markdown_fence(self):
        text = '```json\n[{"strMeal": "Soup"}]\n```'
        assert extract_json_literal(text) == '[{"strMeal": "Soup"}]'

    def test_greedy_to_last_closing_bracket(self):
        text = '[1] and later [2]'
        assert extract_json_literal(text) == '[1] and later [2]'

    def test_leftmost_opening_wins(self):
        """An object that starts before any array is matched as an object."""
        text = '{"strMeal": "Soup", "strTags": ["a"]}'
        assert extract_json_literal(text) == text

    def test_array_preferred_at_same_position_only(self):
        text = 'note {x} then [1, 2]'
        assert extract_json_literal(text) == "{x}"

    def test_spans_newlines(self):
        text = "[\n  {\n    \"strMeal\": \"Soup\"\n  }\n]"
        assert extract_json_literal(text) == text

    def test_no_literal(self):
        assert extract_json_literal("I cannot help with that.") is None

    def test_unbalanced(self):
        assert extract_json_literal('{"strMeal": "Soup"') is None

    def test_empty_text(self):
        assert extract_json_literal("") is None
        assert extract_json_literal(None) is None


class TestParseRecipeText:
    """Test conversion of reply text into recipe records."""

    def test_array_reply(self, array_reply):
        recipes = parse_recipe_text(array_reply)

        assert [r.name for r in recipes] == ["Garlic Chicken Fried Rice", "Chicken Congee"]
        assert recipes[0].additional_ingredients == "soy sauce, spring onions"

    def test_partial_record_is_defaulted(self, array_reply):
        recipes = parse_recipe_text(array_reply)

        congee = recipes[1]
        assert congee.instructions == ""
        assert congee.tag_list == []
        assert congee.thumbnail  # default thumbnail filled in

    def test_object_reply_becomes_single_item_list(self, object_reply):
        recipes = parse_recipe_text(object_reply)

        assert len(recipes) == 1
        lasagna = recipes[0]
        assert lasagna.name == "Classic Lasagna"
        assert lasagna.instruction_steps == [
            "1. Make the ragu.",
            "2. Layer pasta and sauce.",
            "3. Bake 45 minutes.",
        ]
        assert lasagna.tag_list == ["Comfort", "Baked"]
        assert lasagna.youtube_id == "abc123"

    def test_empty_array(self):
        assert parse_recipe_text("[]") == []

    def test_non_object_entries_are_skipped(self):
        recipes = parse_recipe_text('[{"strMeal": "Soup"}, "just a string", 42, null]')
        assert [r.name for r in recipes] == ["Soup"]

    def test_no_json_raises(self):
        with pytest.raises(ResponseFormatError) as exc:
            parse_recipe_text("Sorry, I can only talk about cooking.")

        assert str(exc.value) == "Failed to parse recipe data"
        assert exc.value.text == "Sorry, I can only talk about cooking."

    def test_invalid_json_raises(self):
        with pytest.raises(ResponseFormatError):
            parse_recipe_text('{"strMeal": "Soup",}')

    def test_deeply_nested_reply_raises(self):
        text = "[" * 100000 + "]" * 100000

        with pytest.raises(ResponseFormatError) as exc:
            parse_recipe_text(text)

        assert str(exc.value) == "Failed to parse recipe data"

    @pytest.mark.parametrize("literal", ["[NaN]", '{"strMeal": Infinity}', "[-Infinity]"])
    def test_non_standard_constants_raise(self, literal):
        with pytest.raises(ResponseFormatError):
            parse_recipe_text(literal)

    def test_multiple_objects_without_array_raise(self):
        """Greedy matching joins separate objects into one invalid literal."""
        with pytest.raises(ResponseFormatError):
            parse_recipe_text('{"strMeal": "A"}\n{"strMeal": "B"}')


class TestGenerateRecipes:
    """Test the search entry point against a stub model client."""

    @pytest.mark.asyncio
    async def test_ingredient_search(self, stub_client, array_reply):
        client = stub_client(array_reply)

        recipes = await generate_recipes("chicken, rice", SearchType.INGREDIENTS, client=client)

        assert len(recipes) == 2
        assert "using these ingredients: chicken, rice." in client.prompts[0]

    @pytest.mark.asyncio
    async def test_recipe_search_wraps_object(self, stub_client, object_reply):
        client = stub_client(object_reply)

        recipes = await generate_recipes("lasagna", SearchType.RECIPE, client=client)

        assert [r.name for r in recipes] == ["Classic Lasagna"]
        assert "detailed recipes for: lasagna." in client.prompts[0]

    @pytest.mark.asyncio
    async def test_accepts_string_search_type(self, stub_client, object_reply):
        recipes = await generate_recipes("lasagna", "recipe", client=stub_client(object_reply))
        assert len(recipes) == 1

    @pytest.mark.asyncio
    async def test_call_failure(self, stub_client):
        client = stub_client(GenerationError("Failed to get AI response", cause=ConnectionError("down")))

        with pytest.raises(GenerationError) as exc:
            await generate_recipes("eggs", SearchType.INGREDIENTS, client=client)

        assert str(exc.value) == "Failed to generate recipe"
        assert isinstance(exc.value.cause, ConnectionError)

    @pytest.mark.asyncio
    async def test_reply_without_text(self, stub_client):
        client = stub_client(ResponseFormatError("no candidates"))

        with pytest.raises(ResponseFormatError) as exc:
            await generate_recipes("eggs", SearchType.INGREDIENTS, client=client)

        assert str(exc.value) == "Failed to parse recipe data"

    @pytest.mark.asyncio
    async def test_unparseable_reply(self, stub_client):
        with pytest.raises(ResponseFormatError, match="Failed to parse recipe data"):
            await generate_recipes("eggs", SearchType.INGREDIENTS, client=stub_client("no json here"))
