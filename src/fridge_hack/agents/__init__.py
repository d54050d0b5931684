from .recipe_agent import RecipeAgent
from .image_agent import ImageAgent
from .video_agent import VideoAgent
from .interface_agent import InterfaceAgent
from .cooking_agent import CookingSession, CookingSessionState, EnvKeySelector, KeySelector
__all__ = [
    "RecipeAgent",
    "ImageAgent",
    "VideoAgent",
    "InterfaceAgent",
    "CookingSession",
    "CookingSessionState",
    "EnvKeySelector",
    "KeySelector",
]
