from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .ingredient_schema import IngredientList
from .recipe_agent_schema import Recipe


class SubmitStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ImagePatch(BaseModel):
    cycle: int
    index: int
    image_url: str


class OrchestratorState(BaseModel):
    ingredients: IngredientList = Field(default_factory=IngredientList)
    status: SubmitStatus = SubmitStatus.IDLE
    recipes: List[Recipe] = []
    error: Optional[str] = None
    cycle: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status == SubmitStatus.LOADING
