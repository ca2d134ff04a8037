#!/usr/bin/env python3
"""Ad hoc query runner for the Spice Route recipe finder.

Run searches directly from the terminal without starting the web app.

Usage:
    python query.py chicken rice garlic                 # Search by ingredients
    python query.py --recipe "Chicken tikka masala"     # Search by recipe name
    python query.py --debug chicken rice                # Also print parsed records as JSON
    python query.py --recipe --ask "Can I use tofu?" lasagna          # Ask about the first result
    python query.py --ask "How spicy is it?" --pick 2 chicken rice    # Ask about the second result

Features:
- Same prompts and parsing as the web app
- Recipe cards rendered with rich
- Debug mode to display the parsed records with their wire field names
- One follow-up question about a chosen result
"""

import asyncio
import sys
from typing import List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from src.models.models import RecipeDetails, SearchType
from src.services.gemini import GeminiClient
from src.ui.state import RecipeChat, SearchState
from src.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--debug] [--recipe] [--ask QUESTION] [--pick N] <terms...>'


def render_recipe(recipe: RecipeDetails, number: int) -> None:
    """Print one recipe card."""
    lines = [f"*{recipe.category} • {recipe.area}*"]
    if recipe.description:
        lines.append(recipe.description)
    if recipe.additional_ingredients:
        lines.append(f"**Additional ingredients needed:** {recipe.additional_ingredients}")
    if recipe.ingredients:
        lines.append(f"**Ingredients:** {recipe.ingredients}")
    if recipe.instruction_steps:
        lines.append("**Instructions:**\n\n" + "\n".join(f"- {step}" for step in recipe.instruction_steps))
    if recipe.tag_list:
        lines.append("Tags: " + ", ".join(recipe.tag_list))
    if recipe.youtube_id:
        lines.append(f"Video: {recipe.youtube}")

    console.print(Panel(Markdown("\n\n".join(lines)), title=f"{number}. {recipe.name}", title_align="left"))


async def run_query(
    terms: List[str],
    search_type: SearchType,
    debug: bool = False,
    question: Optional[str] = None,
    pick: int = 1,
) -> int:
    """Execute one search (and optional follow-up question) and print the results.

    Args:
        terms: Ingredients (ingredient mode) or the words of a recipe name.
        search_type: How the terms are interpreted.
        debug: If True, print parsed records as JSON.
        question: Optional follow-up question about one result.
        pick: 1-based index of the result the question is about.

    Returns:
        Process exit code.
    """
    client = GeminiClient()
    state = SearchState()
    state.switch_search_type(search_type)

    if search_type == SearchType.INGREDIENTS:
        for term in terms:
            state.search_term = term
            state.add_ingredient()
    else:
        state.search_term = " ".join(terms)

    logger.info(f"Running {search_type.value} search...")
    with console.status("Cooking up recipes..."):
        await state.search(client=client)

    if state.error:
        console.print(f"[red]✗ {state.error}[/red]")
        return 1

    if not state.recipe_options:
        console.print("[yellow]No recipes returned[/yellow]")
        return 0

    if debug:
        console.print("[bold cyan]Debug Mode: Parsed Records[/bold cyan]")
        console.print_json(data=[r.model_dump(by_alias=True) for r in state.recipe_options])
        console.print()

    for number, recipe in enumerate(state.recipe_options, start=1):
        render_recipe(recipe, number)

    if question:
        state.select(pick - 1)
        recipe = state.selected_recipe
        if recipe is None:
            console.print(f"[red]✗ No recipe number {pick} (got {len(state.recipe_options)})[/red]")
            return 1

        chat = RecipeChat(recipe_name=recipe.name)
        with console.status(f"Asking about {recipe.name}..."):
            await chat.send(question, client=client)
        console.print()
        console.print(f"[bold]Q:[/bold] {question}")
        console.print(Markdown(chat.messages[-1].content))

    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print("  python query.py chicken rice garlic")
        print('  python query.py --recipe "Chicken tikka masala"')
        print('  python query.py --recipe --ask "Can I make it ahead?" lasagna')
        sys.exit(1)

    debug_mode = False
    search_type = SearchType.INGREDIENTS
    question = None
    pick = 1
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        flag = sys.argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
        elif flag == "--recipe":
            search_type = SearchType.RECIPE
            argv_start += 1
        elif flag in ("--ask", "--pick"):
            argv_start += 1
            if argv_start >= len(sys.argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            value = sys.argv[argv_start]
            argv_start += 1
            if flag == "--ask":
                question = value
            else:
                try:
                    pick = int(value)
                except ValueError:
                    print(f"Error: --pick expects a number, got: {value}")
                    sys.exit(1)
        else:
            print(f"Unknown flag: {flag}")
            sys.exit(1)

    if argv_start >= len(sys.argv):
        print("Error: No search terms provided")
        print(USAGE)
        sys.exit(1)

    try:
        exit_code = asyncio.run(
            run_query(sys.argv[argv_start:], search_type, debug=debug_mode, question=question, pick=pick)
        )
    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        sys.exit(1)

    sys.exit(exit_code)
