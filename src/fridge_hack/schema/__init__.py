from .recipe_agent_schema import RECIPE_RESPONSE_SCHEMA, Recipe, RecipeBatch
from .ingredient_schema import IngredientList
from .orchestrator_schema import ImagePatch, OrchestratorState, SubmitStatus
__all__ = [
    "RECIPE_RESPONSE_SCHEMA",
    "Recipe",
    "RecipeBatch",
    "IngredientList",
    "ImagePatch",
    "OrchestratorState",
    "SubmitStatus",
]
