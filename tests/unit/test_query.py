"""Unit tests for the command line query runner."""

from unittest.mock import patch

import pytest

import query
from src.models.models import SearchType
from src.services.errors import GenerationError


class TestRunQuery:

    @pytest.mark.asyncio
    async def test_ingredient_search_prints_results(self, stub_client, array_reply):
        client = stub_client(array_reply)

        with patch("query.GeminiClient", return_value=client):
            exit_code = await query.run_query(["chicken", "rice"], SearchType.INGREDIENTS)

        assert exit_code == 0
        assert "using these ingredients: chicken, rice." in client.prompts[0]

    @pytest.mark.asyncio
    async def test_recipe_terms_are_joined(self, stub_client, object_reply):
        client = stub_client(object_reply)

        with patch("query.GeminiClient", return_value=client):
            exit_code = await query.run_query(["beef", "lasagna"], SearchType.RECIPE, debug=True)

        assert exit_code == 0
        assert "detailed recipes for: beef lasagna." in client.prompts[0]

    @pytest.mark.asyncio
    async def test_failure_exit_code(self, stub_client):
        with patch("query.GeminiClient", return_value=stub_client(GenerationError())):
            exit_code = await query.run_query(["eggs"], SearchType.INGREDIENTS)

        assert exit_code == 1

    @pytest.mark.asyncio
    async def test_follow_up_question(self, stub_client, array_reply):
        client = stub_client(array_reply, "Use day-old rice.")

        with patch("query.GeminiClient", return_value=client):
            exit_code = await query.run_query(
                ["chicken", "rice"], SearchType.INGREDIENTS, question="Any tips?", pick=2
            )

        assert exit_code == 0
        assert "asking about the recipe: Chicken Congee." in client.prompts[1]

    @pytest.mark.asyncio
    async def test_pick_out_of_range(self, stub_client, object_reply):
        client = stub_client(object_reply)

        with patch("query.GeminiClient", return_value=client):
            exit_code = await query.run_query(["lasagna"], SearchType.RECIPE, question="Hi?", pick=4)

        assert exit_code == 1
        assert len(client.prompts) == 1
