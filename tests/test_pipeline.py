import asyncio

from fridge_hack import messages
from fridge_hack.config import Settings
from fridge_hack.errors import RecipeGenerationError
from fridge_hack.orchestrator import RecipeOrchestrator
from fridge_hack.pipeline import build_pipeline

from conftest import StubKeySelector, make_recipes


class InstantClient:
    def __init__(self, recipe_error=None):
        self.settings = Settings(api_key="secret")
        self.recipe_error = recipe_error

    async def request_recipes(self, ingredients):
        if self.recipe_error is not None:
            raise self.recipe_error
        return make_recipes(3)

    async def request_image(self, prompt):
        return f"data:image/png;base64,{prompt}"


def run_pipeline(client, **state):
    orchestrator = RecipeOrchestrator(client, key_selector=StubKeySelector())
    choose = state.pop("choose", None)
    pipeline = build_pipeline(orchestrator, choose=choose)
    return orchestrator, asyncio.run(pipeline.ainvoke(state))


def test_generates_then_selects():
    orchestrator, result = run_pipeline(InstantClient(), ingredients=["egg", "milk"], user_choice=2)

    assert result["error"] is None
    assert len(result["recipes"]) == 3
    assert all(recipe.image_url for recipe in result["recipes"])
    assert result["selected_recipe"].name == "Recipe 1"
    assert list(orchestrator.state.ingredients) == ["egg", "milk"]


def test_choice_callback_is_used_when_no_choice_given():
    offered = []

    def choose(recipes):
        offered.append(len(recipes))
        return 3

    _, result = run_pipeline(InstantClient(), ingredients=["egg"], choose=choose)

    assert offered == [3]
    assert result["user_choice"] == 3
    assert result["selected_recipe"].name == "Recipe 2"


def test_stops_after_generation_failure():
    error = RecipeGenerationError("failed", user_message=messages.RECIPE_GENERATION_FAILED)
    _, result = run_pipeline(InstantClient(recipe_error=error), ingredients=["egg"], user_choice=1)

    assert result["error"] == messages.RECIPE_GENERATION_FAILED
    assert result["recipes"] == []
    assert result.get("selected_recipe") is None


def test_stops_when_no_ingredients():
    _, result = run_pipeline(InstantClient(), ingredients=["  "], user_choice=1)

    assert result["error"] == messages.EMPTY_INGREDIENTS
    assert result.get("selected_recipe") is None
