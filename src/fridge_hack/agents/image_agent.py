import base64
from typing import Any, Optional

from fridge_hack import messages
from fridge_hack.errors import MalformedResponseError


def first_inline_image(response: Any) -> Optional[str]:
    """Return the first inline image of a generate_content response as a data URL."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is None or inline_data.data is None:
                continue
            data = inline_data.data
            if isinstance(data, bytes):
                data = base64.b64encode(data).decode("ascii")
            return f"data:image/png;base64,{data}"
    return None


class ImageAgent:
    def __init__(self, client: Any, model_name: str = "gemini-2.5-flash-image"):
        self.client = client
        self.model_name = model_name

    async def ainvoke(self, prompt: str) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=messages.IMAGE_PROMPT.format(prompt=prompt),
        )
        image_url = first_inline_image(response)
        if image_url is None:
            raise MalformedResponseError("Image data not found")
        return image_url
