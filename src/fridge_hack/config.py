import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_FALLBACK_IMAGE_URL = (
    "https://images.unsplash.com/photo-1495195129352-aed325a55b65"
    "?q=80&w=1000&auto=format&fit=crop"
)


class Settings(BaseModel):
    """Runtime configuration handed to the generation client.

    An empty ``api_key`` is allowed here; the client raises
    ``ConfigurationError`` when a remote call is attempted without one.
    """

    api_key: str = ""
    text_model: str = "gemini-3-flash-preview"
    image_model: str = "gemini-2.5-flash-image"
    video_model: str = "veo-3.1-fast-generate-preview"

    recipe_count: int = 3
    max_recipe_attempts: int = 3
    max_image_retries: int = 3

    video_resolution: str = "720p"
    video_aspect_ratio: str = "16:9"
    video_poll_interval: float = 10.0
    video_max_polls: Optional[int] = None  # None polls until the operation is done
    video_output_dir: str = "output/videos"

    fallback_image_url: str = DEFAULT_FALLBACK_IMAGE_URL


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    return int(value)


def load_settings() -> Settings:
    load_dotenv()
    defaults = Settings()
    return Settings(
        api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", ""),
        text_model=os.getenv("FRIDGE_HACK_TEXT_MODEL", defaults.text_model),
        image_model=os.getenv("FRIDGE_HACK_IMAGE_MODEL", defaults.image_model),
        video_model=os.getenv("FRIDGE_HACK_VIDEO_MODEL", defaults.video_model),
        recipe_count=int(os.getenv("FRIDGE_HACK_RECIPE_COUNT", defaults.recipe_count)),
        video_poll_interval=float(
            os.getenv("FRIDGE_HACK_VIDEO_POLL_INTERVAL", defaults.video_poll_interval)
        ),
        video_max_polls=_optional_int(os.getenv("FRIDGE_HACK_VIDEO_MAX_POLLS")),
        video_output_dir=os.getenv("FRIDGE_HACK_VIDEO_DIR", defaults.video_output_dir),
        fallback_image_url=os.getenv(
            "FRIDGE_HACK_FALLBACK_IMAGE_URL", defaults.fallback_image_url
        ),
    )
