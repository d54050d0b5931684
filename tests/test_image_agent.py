import asyncio
import base64

import pytest
from google.genai import types

from fridge_hack.agents import ImageAgent
from fridge_hack.agents.image_agent import first_inline_image
from fridge_hack.errors import MalformedResponseError

from conftest import fake_genai_client


def image_response(*parts):
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
    )


class StubModels:
    def __init__(self, response):
        self.response = response
        self.calls = []

    async def generate_content(self, model, contents):
        self.calls.append((model, contents))
        return self.response


def test_first_inline_image_skips_text_parts():
    response = image_response(
        types.Part(text="Here is your dish"),
        types.Part(inline_data=types.Blob(data=b"first", mime_type="image/png")),
        types.Part(inline_data=types.Blob(data=b"second", mime_type="image/png")),
    )
    expected = base64.b64encode(b"first").decode("ascii")
    assert first_inline_image(response) == f"data:image/png;base64,{expected}"


def test_first_inline_image_none_without_candidates():
    assert first_inline_image(types.GenerateContentResponse(candidates=[])) is None


def test_agent_embellishes_prompt():
    models = StubModels(image_response(types.Part(inline_data=types.Blob(data=b"img", mime_type="image/png"))))
    agent = ImageAgent(fake_genai_client(models=models), model_name="image-model")

    url = asyncio.run(agent.ainvoke("pad thai"))

    assert url.startswith("data:image/png;base64,")
    model, contents = models.calls[0]
    assert model == "image-model"
    assert contents == (
        "A high-quality, professional food photography of pad thai, "
        "studio lighting, appetizing, cinematic."
    )


def test_agent_raises_when_no_image_returned():
    models = StubModels(image_response(types.Part(text="no image today")))
    agent = ImageAgent(fake_genai_client(models=models))

    with pytest.raises(MalformedResponseError):
        asyncio.run(agent.ainvoke("pad thai"))
