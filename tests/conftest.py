import json
from types import SimpleNamespace

import pytest

from fridge_hack.config import Settings
from fridge_hack.schema import Recipe


def recipe_dict(i: int) -> dict:
    return {
        "recipeName": f"Recipe {i}",
        "description": f"Tasty dish number {i}",
        "ingredients": ["egg", "milk"],
        "instructions": ["Whisk the egg with the milk", "Cook gently"],
        "imagePrompt": f"plated dish {i}",
        "videoPrompt": f"cooking dish {i}",
    }


def make_recipes(count: int = 3):
    return [Recipe.model_validate(recipe_dict(i)) for i in range(count)]


def batch_json(count: int = 3) -> str:
    return json.dumps({"recipes": [recipe_dict(i) for i in range(count)]})


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class StatusError(Exception):
    """Stands in for an SDK error exposing an HTTP status code."""

    def __init__(self, code: int, status: str = None):
        super().__init__(f"{code} {status or ''}".strip())
        self.code = code
        self.status = status


class StubKeySelector:
    def __init__(self, has_key: bool = True):
        self.has_key = has_key
        self.opened = 0

    async def has_selected_api_key(self) -> bool:
        return self.has_key

    async def open_select_key(self) -> None:
        self.opened += 1


def fake_genai_client(models=None, operations=None):
    return SimpleNamespace(aio=SimpleNamespace(models=models, operations=operations))


@pytest.fixture
def settings():
    return Settings(api_key="secret")


@pytest.fixture
def sleeps():
    return SleepRecorder()
