import asyncio
import json

import pytest
from langchain_core.exceptions import OutputParserException
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from fridge_hack.agents import RecipeAgent
from fridge_hack.schema import RECIPE_RESPONSE_SCHEMA

from conftest import batch_json, recipe_dict


def test_parses_recipe_batch():
    agent = RecipeAgent(FakeListChatModel(responses=[batch_json(3)]))
    recipes = asyncio.run(agent.ainvoke(["egg", "milk"]))

    assert len(recipes) == 3
    first = recipes[0]
    assert first.name == "Recipe 0"
    assert first.ingredients == ["egg", "milk"]
    assert first.image_prompt == "plated dish 0"
    assert first.video_prompt == "cooking dish 0"
    assert first.image_url is None
    assert first.video_url is None


def test_accepts_fenced_json():
    agent = RecipeAgent(FakeListChatModel(responses=[f"```json\n{batch_json(2)}\n```"]))
    assert len(agent.invoke(["egg"])) == 2


def test_missing_required_field_rejects_the_batch():
    broken = recipe_dict(1)
    del broken["videoPrompt"]
    payload = json.dumps({"recipes": [recipe_dict(0), broken]})
    agent = RecipeAgent(FakeListChatModel(responses=[payload]))

    with pytest.raises(OutputParserException):
        agent.invoke(["egg"])


def test_prompt_embeds_ingredients_and_count():
    agent = RecipeAgent(FakeListChatModel(responses=[batch_json(5)]), recipe_count=5)
    text = agent.prompt.format(ingredients="egg, milk")

    assert "egg, milk" in text
    assert "5 เมนู" in text
    assert "recipeName" in text
    assert "imageUrl" not in text


def test_urls_in_model_output_are_ignored():
    item = dict(recipe_dict(0), imageUrl="https://model.example/made-up.jpg", videoUrl="https://model.example/v.mp4")
    agent = RecipeAgent(FakeListChatModel(responses=[json.dumps({"recipes": [item]})]))

    recipe = agent.invoke(["egg"])[0]

    assert recipe.image_url is None
    assert recipe.video_url is None
    patched = recipe.with_image("data:image/png;base64,real")
    assert patched.image_url == "data:image/png;base64,real"
    assert patched.model_dump(by_alias=True)["imageUrl"] == "data:image/png;base64,real"


def test_response_schema_requires_every_recipe_field():
    item_schema = RECIPE_RESPONSE_SCHEMA["properties"]["recipes"]["items"]

    assert item_schema["required"] == [
        "recipeName", "description", "ingredients", "instructions", "imagePrompt", "videoPrompt",
    ]
    assert set(item_schema["properties"]) == set(item_schema["required"])
