"""Shared pytest fixtures.

Provides a placeholder API key so configuration validation passes, and a
stub model client so no test reaches the network.
"""

import os
from typing import List, Optional, Union

import pytest


def pytest_configure(config):
    """Make sure a (fake) API key is present before modules are imported."""
    os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")


class StubClient:
    """Stand-in for GeminiClient that replays canned replies.

    Each entry of ``replies`` is returned (str) or raised (Exception) in turn;
    every prompt received is recorded in ``prompts``.
    """

    def __init__(self, replies: Optional[List[Union[str, Exception]]] = None) -> None:
        self.replies = list(replies or [])
        self.prompts: List[str] = []

    async def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def stub_client():
    """Factory fixture: ``stub_client("reply", GenerationError())``."""

    def _make(*replies):
        return StubClient(list(replies))

    return _make


SAMPLE_ARRAY_REPLY = """Here are some ideas:

```json
[
  {
    "idMeal": "1",
    "strMeal": "Garlic Chicken Fried Rice",
    "strCategory": "Main Course",
    "strArea": "Chinese",
    "strDescription": "Wok-tossed rice with chicken and garlic.",
    "strMealThumb": "https://example.com/rice.jpg",
    "additionalIngredients": "soy sauce, spring onions",
    "strInstructions": "",
    "strTags": "",
    "strYoutube": ""
  },
  {
    "idMeal": "2",
    "strMeal": "Chicken Congee",
    "strCategory": "Breakfast",
    "strArea": "Chinese",
    "strDescription": "Slow-cooked rice porridge."
  }
]
```
Enjoy!"""


SAMPLE_OBJECT_REPLY = """{
  "idMeal": "1",
  "strMeal": "Classic Lasagna",
  "strCategory": "Main Course",
  "strArea": "Italian",
  "strInstructions": "1. Make the ragu.\\n\\n2. Layer pasta and sauce.\\n3. Bake 45 minutes.",
  "strMealThumb": "https://example.com/lasagna.jpg",
  "Ingredients": "500g beef mince, 12 lasagna sheets, 500ml bechamel",
  "strTags": "Comfort, Baked,,",
  "strYoutube": "https://www.youtube.com/watch?v=abc123",
  "strDescription": "Layered pasta bake."
}"""


@pytest.fixture
def array_reply() -> str:
    return SAMPLE_ARRAY_REPLY


@pytest.fixture
def object_reply() -> str:
    return SAMPLE_OBJECT_REPLY
