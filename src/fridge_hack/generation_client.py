import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import httpx
from google import genai
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from fridge_hack import messages
from fridge_hack.agents.image_agent import ImageAgent
from fridge_hack.agents.recipe_agent import RecipeAgent
from fridge_hack.agents.video_agent import ProgressCallback, VideoAgent
from fridge_hack.config import Settings
from fridge_hack.errors import (
    ConfigurationError,
    ErrorKind,
    FridgeHackError,
    RecipeGenerationError,
    VideoGenerationError,
    classify_remote_error,
)
from fridge_hack.schema import RECIPE_RESPONSE_SCHEMA, Recipe

logger = logging.getLogger(__name__)


class GenerationClient:
    """
    Front door to the three remote generation calls.

    Each agent makes a single attempt; the retry and fallback policy lives here
    so every caller sees either a typed result or a ``FridgeHackError``.
    The remote SDK clients are built lazily so a missing API key surfaces as a
    ``ConfigurationError`` at call time rather than at construction. Anything
    built here is tied to the key it was built with and rebuilt once
    ``settings.api_key`` changes (for example after the user picks another key).
    Injected clients and agents are kept as given.
    """

    def __init__(
        self,
        settings: Settings,
        llm: Optional[BaseChatModel] = None,
        genai_client: Any = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        recipe_agent: Optional[RecipeAgent] = None,
        image_agent: Optional[ImageAgent] = None,
        video_agent: Optional[VideoAgent] = None,
    ):
        self.settings = settings
        self.sleep = sleep
        self._llm = llm
        self._http_client = http_client
        self._injected_genai_client = genai_client
        self._injected_recipe_agent = recipe_agent
        self._injected_image_agent = image_agent
        self._injected_video_agent = video_agent
        self._built_for_key: Optional[str] = None
        self._built: Dict[str, Any] = {}

    def _require_api_key(self) -> str:
        if not self.settings.api_key:
            raise ConfigurationError(
                "GOOGLE_API_KEY is not configured",
                user_message=messages.MISSING_API_KEY,
            )
        return self.settings.api_key

    def _cached(self, name: str, build: Callable[[], Any]) -> Any:
        api_key = self._require_api_key()
        if api_key != self._built_for_key:
            if self._built_for_key is not None:
                logger.info("API key changed, rebuilding remote clients")
            self._built.clear()
            self._built_for_key = api_key
        if name not in self._built:
            self._built[name] = build()
        return self._built[name]

    @property
    def genai_client(self) -> Any:
        if self._injected_genai_client is not None:
            return self._injected_genai_client
        return self._cached("genai_client", lambda: genai.Client(api_key=self.settings.api_key))

    def _build_recipe_agent(self) -> RecipeAgent:
        llm = self._llm or ChatGoogleGenerativeAI(
            model=self.settings.text_model,
            google_api_key=self.settings.api_key,
            response_mime_type="application/json",
            response_schema=RECIPE_RESPONSE_SCHEMA,
        )
        return RecipeAgent(llm, recipe_count=self.settings.recipe_count)

    @property
    def recipe_agent(self) -> RecipeAgent:
        if self._injected_recipe_agent is not None:
            return self._injected_recipe_agent
        return self._cached("recipe_agent", self._build_recipe_agent)

    @property
    def image_agent(self) -> ImageAgent:
        if self._injected_image_agent is not None:
            return self._injected_image_agent
        return self._cached(
            "image_agent",
            lambda: ImageAgent(self.genai_client, model_name=self.settings.image_model),
        )

    def _build_video_agent(self) -> VideoAgent:
        return VideoAgent(
            self.genai_client,
            api_key=self.settings.api_key,
            model_name=self.settings.video_model,
            resolution=self.settings.video_resolution,
            aspect_ratio=self.settings.video_aspect_ratio,
            poll_interval=self.settings.video_poll_interval,
            max_polls=self.settings.video_max_polls,
            output_dir=self.settings.video_output_dir,
            http_client=self._http_client,
            sleep=self.sleep,
        )

    @property
    def video_agent(self) -> VideoAgent:
        if self._injected_video_agent is not None:
            return self._injected_video_agent
        return self._cached("video_agent", self._build_video_agent)

    async def request_recipes(self, ingredients: Sequence[str]) -> List[Recipe]:
        if not ingredients:
            raise ValueError("At least one ingredient is required")
        self._require_api_key()

        attempts = self.settings.max_recipe_attempts
        last_error: Optional[FridgeHackError] = None
        for attempt in range(1, attempts + 1):
            try:
                recipes = await self.recipe_agent.ainvoke(list(ingredients))
            except Exception as exc:
                last_error = classify_remote_error(exc)
                if last_error.kind == ErrorKind.CONFIGURATION:
                    raise last_error from exc
                logger.warning(
                    "Recipe generation attempt %s/%s failed: %s", attempt, attempts, last_error
                )
                if attempt < attempts:
                    await self.sleep(2 ** attempt)
                continue
            logger.info("Generated %s recipes on attempt %s", len(recipes), attempt)
            return recipes

        raise RecipeGenerationError(
            f"Recipe generation failed after {attempts} attempts",
            user_message=messages.RECIPE_GENERATION_FAILED,
        ) from last_error

    async def request_image(self, prompt: str) -> str:
        """Generate a food photo; any failure resolves to the fallback image."""
        retries = 0
        while True:
            try:
                return await self.image_agent.ainvoke(prompt)
            except Exception as exc:
                error = classify_remote_error(exc)
                if error.kind == ErrorKind.RATE_LIMITED and retries < self.settings.max_image_retries:
                    retries += 1
                    delay = 2 ** retries * 2
                    logger.warning("Image generation rate limited, retrying in %ss", delay)
                    await self.sleep(delay)
                    continue
                logger.error("Image generation error, using fallback image: %s", error)
                return self.settings.fallback_image_url

    async def request_video(self, prompt: str, on_progress: Optional[ProgressCallback] = None) -> str:
        self._require_api_key()
        progress = on_progress or (lambda message: None)
        try:
            return await self.video_agent.ainvoke(prompt, progress)
        except VideoGenerationError:
            raise
        except Exception as exc:
            error = classify_remote_error(exc)
            raise VideoGenerationError(str(error), kind=error.kind) from exc
