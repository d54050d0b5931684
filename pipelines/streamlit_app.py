import asyncio
from urllib.parse import urlparse
from urllib.request import url2pathname

import streamlit as st

from fridge_hack.agents import CookingSession
from fridge_hack.config import load_settings
from fridge_hack.generation_client import GenerationClient
from fridge_hack.orchestrator import RecipeOrchestrator
from fridge_hack.schema import OrchestratorState

st.set_page_config(page_title="Fridge Hack", page_icon="🍳")

# One orchestrator per browser session
if "orchestrator" not in st.session_state:
    st.session_state.orchestrator = RecipeOrchestrator(GenerationClient(load_settings()))
if "cooking_session" not in st.session_state:
    st.session_state.cooking_session = None

orchestrator: RecipeOrchestrator = st.session_state.orchestrator


def commit_ingredient_input() -> None:
    orchestrator.add_ingredients(st.session_state.ingredient_input)
    st.session_state.ingredient_input = ""


def open_recipe(choice: int) -> None:
    st.session_state.cooking_session = orchestrator.select_recipe(choice)


def close_recipe() -> None:
    st.session_state.cooking_session = None


def render_recipe_cards(state: OrchestratorState, with_buttons: bool = False) -> None:
    for idx, recipe in enumerate(state.recipes, 1):
        st.subheader(f"{idx}. {recipe.name}")
        if recipe.image_url:
            st.image(recipe.image_url, use_container_width=True)
        else:
            st.caption("🖼️ กำลังสร้างรูปภาพ...")
        st.write(recipe.description)
        st.markdown("**วัตถุดิบ:** " + ", ".join(recipe.ingredients))
        if with_buttons:
            st.button("👨‍🍳 เริ่มทำอาหาร", key=f"open-{idx}", on_click=open_recipe, args=(idx,))


async def submit_and_stream(placeholder) -> None:
    def redraw(state: OrchestratorState) -> None:
        with placeholder.container():
            render_recipe_cards(state)

    orchestrator.on_change = redraw
    try:
        await orchestrator.submit()
        await orchestrator.wait_for_images()
    finally:
        orchestrator.on_change = None


def render_cooking_view(session: CookingSession) -> None:
    recipe = session.recipe
    st.button("← กลับไปหน้าค้นหา", on_click=close_recipe)
    st.title(recipe.name)
    if recipe.image_url:
        st.image(recipe.image_url, use_container_width=True)
    st.write(recipe.description)

    st.header("🛒 วัตถุดิบ")
    st.progress(session.progress_percent, text=f"เตรียมของไปแล้ว {session.progress_percent}%")
    for idx, item in enumerate(recipe.ingredients):
        st.checkbox(
            item,
            value=session.is_checked(idx),
            key=f"ingredient-{idx}",
            on_change=session.toggle_ingredient,
            args=(idx,),
        )

    st.header("👨‍🍳 วิธีทำทีละขั้นตอนแบบละเอียด")
    for step_no, step in enumerate(recipe.instructions, 1):
        st.markdown(f"**{step_no}.** {step}")

    st.header("🎬 วิดีโอ")
    if session.state.video_url:
        st.video(url2pathname(urlparse(session.state.video_url).path))
    elif st.button("สร้างวิดีโอขั้นตอนการทำ", disabled=session.state.is_video_loading):
        progress = st.empty()

        def show_progress(state) -> None:
            if state.progress_message:
                progress.info(f"⏳ {state.progress_message}")

        session.on_change = show_progress
        asyncio.run(session.generate_video())
        session.on_change = None
        st.rerun()

    if session.state.alert_message:
        st.error(session.state.alert_message)


cooking_session = st.session_state.cooking_session
if cooking_session is not None:
    render_cooking_view(cooking_session)
else:
    st.title("🍳 Fridge Hack")
    st.write("เว็บไซต์แนะนำเมนูอาหารจากของที่เหลือใช้")

    st.text_input(
        "🛒 ใส่วัตถุดิบของคุณที่นี่:",
        key="ingredient_input",
        placeholder="เพิ่มวัตถุดิบ...",
        on_change=commit_ingredient_input,
        help="กด Enter หรือใส่ลูกน้ำ (,) เพื่อเพิ่มวัตถุดิบ",
    )
    chips = st.columns(max(len(orchestrator.state.ingredients), 1))
    for idx, ingredient in enumerate(orchestrator.state.ingredients):
        chips[idx].button(f"✕ {ingredient}", key=f"chip-{idx}-{ingredient}", on_click=orchestrator.remove_ingredient, args=(idx,))

    submitted = st.button("✨ สร้างเมนูแนะนำพร้อมรูปภาพ", use_container_width=True)
    recipes_placeholder = st.empty()

    if submitted:
        with st.spinner("เชฟ AI กำลังเขียนเมนูพิเศษให้คุณ..."):
            asyncio.run(submit_and_stream(recipes_placeholder))

    if orchestrator.state.error:
        st.error(orchestrator.state.error)
    elif orchestrator.state.recipes:
        with recipes_placeholder.container():
            render_recipe_cards(orchestrator.state, with_buttons=True)
