"""Spice Route - recipe discovery web app.

Browser UI for the recipe finder:
- Search by a list of ingredients or by recipe name
- Recipe cards generated by Gemini from the search
- Recipe detail dialog with a follow-up chat scoped to that recipe
- Footer category shortcuts and newsletter form

Run with: streamlit run app.py
"""

import asyncio

import streamlit as st
from pydantic import ValidationError

from src.models.models import ChatRole, NewsletterSignup, RecipeDetails, SearchType
from src.services.gemini import GeminiClient
from src.ui.state import CATEGORY_QUERIES, RecipeChat, SearchState
from src.utils.config import config
from src.utils.logger import logger


SEARCH_LABELS = {
    SearchType.INGREDIENTS: "🔍 Search by Ingredients",
    SearchType.RECIPE: "📖 Search by Recipe Name",
}


st.set_page_config(page_title=config.APP_TITLE, page_icon="👨‍🍳", layout="wide")


@st.cache_resource
def get_client() -> GeminiClient:
    """One model client per server process."""
    logger.info(f"Creating Gemini client for model {config.GEMINI_MODEL}")
    return GeminiClient()


def get_state() -> SearchState:
    if "search" not in st.session_state:
        st.session_state["search"] = SearchState()
    return st.session_state["search"]


# ============================================================================
# Widget callbacks (run before the script re-executes)
# ============================================================================


def on_mode_change() -> None:
    get_state().switch_search_type(st.session_state["search_mode"])


def on_remove_ingredient(index: int) -> None:
    get_state().remove_ingredient(index)


def on_generate() -> None:
    st.session_state["pending_search"] = None


def on_category(label: str) -> None:
    state = get_state()
    state.switch_search_type(SearchType.RECIPE)
    state.search_term = CATEGORY_QUERIES[label]
    st.session_state["search_mode"] = SearchType.RECIPE
    st.session_state["recipe_name_input"] = state.search_term
    st.session_state["pending_category"] = label


def on_open_recipe(index: int) -> None:
    state = get_state()
    state.select(index)
    recipe = state.selected_recipe
    if recipe is not None:
        st.session_state["chat"] = RecipeChat(recipe_name=recipe.name)
        st.session_state["open_dialog"] = True


# ============================================================================
# Page sections
# ============================================================================


def render_header() -> None:
    st.title(f"👨‍🍳 {config.APP_TITLE}")
    st.caption("Discover recipes by ingredients or name")


def render_search_form(state: SearchState) -> None:
    st.session_state.setdefault("search_mode", state.search_type)
    st.radio(
        "Search mode",
        options=list(SEARCH_LABELS),
        format_func=SEARCH_LABELS.get,
        key="search_mode",
        horizontal=True,
        label_visibility="collapsed",
        on_change=on_mode_change,
    )

    if state.search_type == SearchType.RECIPE:
        # Enter in the name field submits the form, same as the button
        st.session_state.setdefault("recipe_name_input", state.search_term)
        with st.form("recipe_form", border=False):
            term = st.text_input("Recipe name", placeholder="Enter recipe name", key="recipe_name_input")
            submitted = st.form_submit_button(
                "Generate Recipe", type="primary", disabled=state.loading, width="stretch", key="recipe_submit"
            )
        if submitted:
            state.search_term = term
            st.session_state["pending_search"] = term
        return

    # Enter in the ingredient field adds it, same as the Add button
    with st.form("ingredient_form", clear_on_submit=True, border=False):
        col_input, col_add = st.columns([5, 1], vertical_alignment="bottom")
        with col_input:
            term = st.text_input("Ingredient", placeholder="Enter an ingredient", key="ingredient_input")
        with col_add:
            added = st.form_submit_button("Add", width="stretch", key="add_ingredient")
    if added:
        state.search_term = term
        state.add_ingredient()

    if state.ingredients:
        chip_cols = st.columns(min(len(state.ingredients), 6))
        for idx, ingredient in enumerate(state.ingredients):
            with chip_cols[idx % len(chip_cols)]:
                st.button(f"✕ {ingredient}", key=f"chip_{idx}", on_click=on_remove_ingredient, args=(idx,))

    st.button(
        "Generate Recipe",
        key="generate",
        type="primary",
        on_click=on_generate,
        disabled=not state.can_search(),
        width="stretch",
    )


def run_pending_search(state: SearchState) -> None:
    category = st.session_state.pop("pending_category", None)
    has_pending = "pending_search" in st.session_state
    query = st.session_state.pop("pending_search", None)
    if category is None and not has_pending:
        return

    with st.spinner("Cooking up recipes..."):
        if category is not None:
            asyncio.run(state.search_category(category, client=get_client()))
        else:
            asyncio.run(state.search(query, client=get_client()))


def render_recipe_card(recipe: RecipeDetails, index: int) -> None:
    with st.container(border=True):
        st.image(recipe.card_thumbnail, width="stretch")
        st.subheader(recipe.name)
        st.caption(f"{recipe.category} • {recipe.area}")
        if recipe.description:
            st.write(recipe.description)
        if recipe.additional_ingredients:
            st.caption("Additional ingredients needed:")
            st.write(recipe.additional_ingredients)
        st.button("View recipe", key=f"open_{index}", on_click=on_open_recipe, args=(index,))


def render_results(state: SearchState) -> None:
    if state.error:
        st.error(state.error)

    if not state.recipe_options:
        return

    columns = st.columns(3)
    for idx, recipe in enumerate(state.recipe_options):
        with columns[idx % 3]:
            render_recipe_card(recipe, idx)


def render_chat(chat: RecipeChat) -> None:
    st.markdown("### Ask About This Recipe")
    transcript = st.container(height=260)
    with transcript:
        if not chat.messages:
            st.caption("Ask questions about the recipe, cooking techniques, or possible variations!")
        for message in chat.messages:
            with st.chat_message("user" if message.role == ChatRole.USER else "assistant"):
                st.write(message.content)

    with st.form("recipe_chat", clear_on_submit=True):
        col_text, col_send = st.columns([5, 1], vertical_alignment="bottom")
        with col_text:
            question = st.text_input("Question", placeholder="Ask about this recipe...", label_visibility="collapsed")
        with col_send:
            sent = st.form_submit_button("Send", width="stretch")

    if sent and question.strip():
        with st.spinner("Thinking..."):
            asyncio.run(chat.send(question, client=get_client()))
        st.rerun(scope="fragment")


@st.dialog("Recipe", width="large")
def show_recipe_dialog() -> None:
    state = get_state()
    recipe = state.selected_recipe
    if recipe is None:
        return

    st.header(recipe.name)
    col_left, col_right = st.columns(2)
    with col_left:
        st.image(recipe.thumbnail or config.DEFAULT_THUMBNAIL_URL, width="stretch")
        badges = [recipe.category, recipe.area, *recipe.tag_list]
        st.markdown(" ".join(f"`{badge}`" for badge in badges if badge))
        if recipe.youtube_id:
            st.link_button("▶️ Watch Recipe Video", recipe.youtube)
    with col_right:
        st.markdown("### Description")
        st.write(recipe.description)
        if recipe.additional_ingredients:
            st.markdown("### Additional Ingredients Needed")
            st.write(recipe.additional_ingredients)
        if recipe.ingredients:
            st.markdown("### Ingredients")
            st.write(recipe.ingredients)

    st.markdown("### Instructions")
    for step in recipe.instruction_steps:
        st.write(step)

    chat = st.session_state.get("chat")
    if chat is None or chat.recipe_name != recipe.name:
        chat = st.session_state["chat"] = RecipeChat(recipe_name=recipe.name)
    render_chat(chat)

    if st.button("Close"):
        state.close_recipe()
        st.rerun()


def render_footer() -> None:
    st.divider()
    col_about, col_categories, col_newsletter = st.columns(3)
    with col_about:
        st.markdown(f"**👨‍🍳 {config.APP_TITLE}**")
        st.caption("Discover delicious recipes from around the world with our ingredient-based recipe finder.")
    with col_categories:
        st.markdown("**Categories**")
        for label in CATEGORY_QUERIES:
            st.button(label, key=f"category_{label}", on_click=on_category, args=(label,))
    with col_newsletter:
        st.markdown("**Subscribe to our newsletter**")
        with st.form("newsletter", clear_on_submit=True):
            email = st.text_input(
                "Email", placeholder="Enter your email", label_visibility="collapsed", key="newsletter_email"
            )
            if st.form_submit_button("Subscribe", key="newsletter_submit"):
                try:
                    NewsletterSignup(email=email)
                except ValidationError:
                    st.error("Please enter a valid email address.")
                else:
                    st.toast("Thank you for subscribing!")


def main() -> None:
    render_header()

    try:
        config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        st.error(f"🚨 {e}")
        st.caption("Set GEMINI_API_KEY in your environment or .env file and reload the page.")
        st.stop()

    state = get_state()
    render_search_form(state)
    run_pending_search(state)
    render_results(state)

    if st.session_state.pop("open_dialog", False):
        show_recipe_dialog()

    render_footer()


main()
