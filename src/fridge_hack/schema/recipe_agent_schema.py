from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.json_schema import SkipJsonSchema

# Fields filled in later by image/video generation, never by the text model
GENERATED_URL_KEYS = ("imageUrl", "videoUrl", "image_url", "video_url")

_REQUIRED_RECIPE_FIELDS = ["recipeName", "description", "ingredients", "instructions", "imagePrompt", "videoPrompt"]

# Structured-output schema sent with the text request (OpenAPI subset, no $refs)
RECIPE_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "recipes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "recipeName": {"type": "string"},
                    "description": {"type": "string"},
                    "ingredients": {"type": "array", "items": {"type": "string"}},
                    "instructions": {"type": "array", "items": {"type": "string"}},
                    "imagePrompt": {"type": "string", "description": "Prompt for generating a food photo"},
                    "videoPrompt": {"type": "string", "description": "Prompt for generating a cooking video"},
                },
                "required": _REQUIRED_RECIPE_FIELDS,
            },
        }
    },
    "required": ["recipes"],
}


class Recipe(BaseModel):
    """A generated recipe.

    Only ``image_url`` and ``video_url`` ever change after creation, and each
    goes from ``None`` to a value at most once (see ``with_image``/``with_video``).
    Their camelCase names are used for output only.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(alias="recipeName")
    description: str
    ingredients: List[str]
    instructions: List[str]
    image_prompt: str = Field(alias="imagePrompt", description="Prompt for generating a food photo")
    video_prompt: str = Field(alias="videoPrompt", description="Prompt for generating a cooking video")
    image_url: SkipJsonSchema[Optional[str]] = Field(default=None, serialization_alias="imageUrl")
    video_url: SkipJsonSchema[Optional[str]] = Field(default=None, serialization_alias="videoUrl")

    def with_image(self, image_url: str) -> "Recipe":
        if self.image_url is not None:
            return self
        return self.model_copy(update={"image_url": image_url})

    def with_video(self, video_url: str) -> "Recipe":
        if self.video_url is not None:
            return self
        return self.model_copy(update={"video_url": video_url})


class RecipeBatch(BaseModel):
    recipes: List[Recipe]

    @field_validator("recipes", mode="before")
    @classmethod
    def drop_generated_urls(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [
            {key: item for key, item in raw.items() if key not in GENERATED_URL_KEYS}
            if isinstance(raw, dict) else raw
            for raw in value
        ]
