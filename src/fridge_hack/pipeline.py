from typing import Callable, List, Optional

from langgraph.graph import END, StateGraph
from pydantic import BaseModel

from fridge_hack.agents import InterfaceAgent
from fridge_hack.orchestrator import RecipeOrchestrator
from fridge_hack.schema import Recipe


class PipelineState(BaseModel):
    ingredients: List[str]
    user_choice: Optional[int] = None
    recipes: List[Recipe] = []
    error: Optional[str] = None
    selected_recipe: Optional[Recipe] = None


def build_pipeline(
    orchestrator: RecipeOrchestrator,
    choose: Optional[Callable[[List[Recipe]], int]] = None,
):
    """generate_recipes -> select_recipe, stopping early when generation fails."""

    async def generate_recipes_node(state: PipelineState) -> dict:
        for ingredient in state.ingredients:
            orchestrator.add_ingredient(ingredient)
        await orchestrator.submit()
        await orchestrator.wait_for_images()
        return {"recipes": list(orchestrator.state.recipes), "error": orchestrator.state.error}

    def select_recipe_node(state: PipelineState) -> dict:
        user_choice = state.user_choice
        if user_choice is None:
            if choose is None:
                return {}
            user_choice = choose(state.recipes)
        selected = InterfaceAgent(user_choice).invoke(state.recipes)
        return {"user_choice": user_choice, "selected_recipe": selected}

    def route_after_generate(state: PipelineState) -> str:
        if state.error or not state.recipes:
            return END
        return "select_recipe"

    graph = StateGraph(state_schema=PipelineState)
    graph.add_node("generate_recipes", generate_recipes_node)
    graph.add_node("select_recipe", select_recipe_node)
    graph.set_entry_point("generate_recipes")
    graph.add_conditional_edges("generate_recipes", route_after_generate)
    graph.set_finish_point("select_recipe")
    return graph.compile()
