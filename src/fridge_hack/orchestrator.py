import asyncio
import logging
from typing import Callable, List, Optional, Set

from fridge_hack import messages
from fridge_hack.agents import CookingSession, EnvKeySelector, InterfaceAgent, KeySelector
from fridge_hack.errors import FridgeHackError
from fridge_hack.generation_client import GenerationClient
from fridge_hack.schema import ImagePatch, OrchestratorState, Recipe, SubmitStatus

logger = logging.getLogger(__name__)


def apply_image_patch(recipes: List[Recipe], patch: ImagePatch) -> bool:
    """Merge one image completion into ``recipes`` in place.

    Only ``recipes[patch.index]`` is touched. Out of range indices and recipes
    that already carry an image are left alone. Returns whether anything changed.
    """
    if not 0 <= patch.index < len(recipes):
        return False
    current = recipes[patch.index]
    patched = current.with_image(patch.image_url)
    if patched is current:
        return False
    recipes[patch.index] = patched
    return True


class RecipeOrchestrator:
    """
    Drives one submit cycle: Idle -> Loading -> Succeeded | Failed.

    After a batch is published every recipe gets its own image request. The
    requests run concurrently and report through a queue of ``ImagePatch``
    events drained by a single reducer task, so completions may arrive in any
    order. Events from an earlier cycle are dropped.
    """

    def __init__(
        self,
        client: GenerationClient,
        key_selector: Optional[KeySelector] = None,
        on_change: Optional[Callable[[OrchestratorState], None]] = None,
    ):
        self.client = client
        self.key_selector = key_selector or EnvKeySelector(client.settings)
        self.on_change = on_change
        self.state = OrchestratorState()
        self._background: Set[asyncio.Task] = set()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.state)

    # Ingredient chips

    def add_ingredient(self, ingredient: str) -> bool:
        added = self.state.ingredients.add(ingredient)
        if added:
            self._notify()
        return added

    def add_ingredients(self, text: str) -> List[str]:
        added = self.state.ingredients.add_many(text)
        if added:
            self._notify()
        return added

    def remove_ingredient(self, index: int) -> None:
        self.state.ingredients.remove(index)
        self._notify()

    # Submit cycle

    async def submit(self) -> SubmitStatus:
        if self.state.is_loading:
            logger.info("Submit ignored, a request is already in flight")
            return self.state.status

        if len(self.state.ingredients) == 0:
            self.state.error = messages.EMPTY_INGREDIENTS
            self._notify()
            return self.state.status

        self.state.cycle += 1
        self.state.status = SubmitStatus.LOADING
        self.state.error = None
        self.state.recipes = []

        try:
            self._notify()
            recipes = await self.client.request_recipes(list(self.state.ingredients))
            self.state.recipes = list(recipes)
            self.state.status = SubmitStatus.SUCCEEDED
        except FridgeHackError as exc:
            logger.error("Recipe generation failed: %s", exc)
            self.state.status = SubmitStatus.FAILED
            self.state.error = exc.user_message
        finally:
            # Never leave the cycle stuck in Loading, or later submits are ignored
            if self.state.status == SubmitStatus.LOADING:
                logger.warning("Submit cycle %s was interrupted", self.state.cycle)
                self.state.status = SubmitStatus.FAILED

        if self.state.status == SubmitStatus.SUCCEEDED:
            self._start_image_requests(self.state.cycle, self.state.recipes)
        self._notify()
        return self.state.status

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    def _start_image_requests(self, cycle: int, recipes: List[Recipe]) -> None:
        queue: asyncio.Queue = asyncio.Queue()
        for index, recipe in enumerate(recipes):
            self._spawn(self._request_image(queue, cycle, index, recipe))
        self._spawn(self._consume_patches(queue, len(recipes)))

    async def _request_image(self, queue: asyncio.Queue, cycle: int, index: int, recipe: Recipe) -> None:
        patch: Optional[ImagePatch] = None
        try:
            image_url = await self.client.request_image(recipe.image_prompt)
            patch = ImagePatch(cycle=cycle, index=index, image_url=image_url)
        except Exception:
            logger.exception("Image generation failed for recipe %s", index)
        finally:
            await queue.put(patch)

    async def _consume_patches(self, queue: asyncio.Queue, expected: int) -> None:
        for _ in range(expected):
            patch = await queue.get()
            if patch is not None:
                self.apply_image_patch(patch)

    def apply_image_patch(self, patch: ImagePatch) -> bool:
        if patch.cycle != self.state.cycle:
            logger.debug("Dropping image for stale cycle %s", patch.cycle)
            return False
        changed = apply_image_patch(self.state.recipes, patch)
        if changed:
            self._notify()
        return changed

    async def wait_for_images(self) -> None:
        while self._background:
            await asyncio.gather(*list(self._background))

    # Cooking mode

    def _apply_video(self, cycle: int, index: int, video_url: str) -> None:
        if cycle != self.state.cycle or not 0 <= index < len(self.state.recipes):
            logger.debug("Dropping video for a recipe that is no longer shown")
            return
        self.state.recipes[index] = self.state.recipes[index].with_video(video_url)
        self._notify()

    def select_recipe(self, choice: int) -> CookingSession:
        recipe = InterfaceAgent(choice).invoke(self.state.recipes)
        cycle, index = self.state.cycle, choice - 1
        return CookingSession(
            recipe,
            self.client,
            self.key_selector,
            on_video_ready=lambda video_url: self._apply_video(cycle, index, video_url),
        )
