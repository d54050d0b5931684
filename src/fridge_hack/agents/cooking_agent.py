import logging
import math
import os
from typing import Callable, Optional, Protocol, Set

from dotenv import load_dotenv
from pydantic import BaseModel

from fridge_hack import messages
from fridge_hack.config import Settings
from fridge_hack.errors import ErrorKind, FridgeHackError
from fridge_hack.schema import Recipe

logger = logging.getLogger(__name__)


class CookingSessionState(BaseModel):
    recipe: Recipe
    checked_ingredients: Set[int] = set()
    video_url: Optional[str] = None
    is_video_loading: bool = False
    progress_message: str = ""
    alert_message: Optional[str] = None


class KeySelector(Protocol):
    async def has_selected_api_key(self) -> bool: ...

    async def open_select_key(self) -> None: ...


class EnvKeySelector:
    """Key selection backed by the environment / .env file.

    "Opening the dialog" re-reads the environment so a key exported after
    start-up is picked up by the shared settings.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    async def has_selected_api_key(self) -> bool:
        return bool(self.settings.api_key)

    async def open_select_key(self) -> None:
        load_dotenv(override=True)
        api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", "")
        if api_key:
            self.settings.api_key = api_key
        else:
            logger.warning("No API key selected; set GOOGLE_API_KEY to a key with billing enabled")


def progress_percent(checked: int, total: int) -> int:
    if total == 0:
        return 0
    # round half up
    return math.floor(checked / total * 100 + 0.5)


class CookingSession:
    """Interactive state for one selected recipe: checklist and on-demand video."""

    def __init__(
        self,
        recipe: Recipe,
        client,
        key_selector: KeySelector,
        on_video_ready: Optional[Callable[[str], None]] = None,
        on_change: Optional[Callable[[CookingSessionState], None]] = None,
    ):
        self.client = client
        self.key_selector = key_selector
        self.on_video_ready = on_video_ready
        self.on_change = on_change
        self.state = CookingSessionState(recipe=recipe, video_url=recipe.video_url)

    @property
    def recipe(self) -> Recipe:
        return self.state.recipe

    @property
    def progress_percent(self) -> int:
        return progress_percent(len(self.state.checked_ingredients), len(self.recipe.ingredients))

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.state)

    def toggle_ingredient(self, index: int) -> None:
        checked = self.state.checked_ingredients
        if index in checked:
            checked.discard(index)
        else:
            checked.add(index)
        self._notify()

    def is_checked(self, index: int) -> bool:
        return index in self.state.checked_ingredients

    def _on_progress(self, message: str) -> None:
        self.state.progress_message = message
        self._notify()

    def dismiss_alert(self) -> None:
        self.state.alert_message = None
        self._notify()

    async def generate_video(self) -> Optional[str]:
        if self.state.is_video_loading:
            return None

        if not await self.key_selector.has_selected_api_key():
            await self.key_selector.open_select_key()
            # Proceed without re-checking: the selection may still be pending.

        self.state.is_video_loading = True
        self.state.alert_message = None
        self._notify()

        video_url: Optional[str] = None
        try:
            video_url = await self.client.request_video(self.recipe.video_prompt, self._on_progress)
            self.state.video_url = video_url
        except FridgeHackError as exc:
            logger.error("Video generation failed for %r: %s", self.recipe.name, exc)
            if exc.kind == ErrorKind.NOT_FOUND:
                self.state.alert_message = messages.VIDEO_BILLING_KEY_REQUIRED
                await self.key_selector.open_select_key()
            else:
                self.state.alert_message = messages.VIDEO_UNAVAILABLE
        finally:
            self.state.is_video_loading = False
            self._notify()

        if video_url is not None and self.on_video_ready is not None:
            self.on_video_ready(video_url)
        return video_url
