import asyncio
import logging
import uuid
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import httpx
from google.genai import types

from fridge_hack import messages
from fridge_hack.errors import VideoGenerationError, kind_from_operation_error

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


def video_uri(operation: Any) -> Optional[str]:
    response = getattr(operation, "response", None)
    videos = getattr(response, "generated_videos", None) or []
    if not videos or videos[0].video is None:
        return None
    return videos[0].video.uri


class VideoAgent:
    """Runs one Veo job to completion and downloads the result."""

    def __init__(
        self,
        client: Any,
        api_key: str,
        model_name: str = "veo-3.1-fast-generate-preview",
        resolution: str = "720p",
        aspect_ratio: str = "16:9",
        poll_interval: float = 10.0,
        max_polls: Optional[int] = None,
        output_dir: str = "output/videos",
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client
        self.api_key = api_key
        self.model_name = model_name
        self.resolution = resolution
        self.aspect_ratio = aspect_ratio
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self.output_dir = Path(output_dir)
        self.http_client = http_client
        self.sleep = sleep

    async def _wait_until_done(self, operation: Any, on_progress: ProgressCallback) -> Any:
        polls = 0
        while not operation.done:
            if self.max_polls is not None and polls >= self.max_polls:
                raise VideoGenerationError(f"Video generation did not finish after {polls} polls")
            on_progress(messages.VIDEO_PROGRESS_PHRASES[polls % len(messages.VIDEO_PROGRESS_PHRASES)])
            polls += 1
            await self.sleep(self.poll_interval)
            operation = await self.client.aio.operations.get(operation)
        logger.info("Video operation finished after %s polls", polls)
        return operation

    async def _download(self, uri: str) -> bytes:
        params = {"key": self.api_key}
        if self.http_client is not None:
            response = await self.http_client.get(uri, params=params)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as http_client:
                response = await http_client.get(uri, params=params)
        response.raise_for_status()
        return response.content

    def _save(self, content: bytes) -> Path:
        # Saved videos are kept; output_dir is never pruned
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"{uuid.uuid4().hex}.mp4"
        path.write_bytes(content)
        return path

    async def ainvoke(self, prompt: str, on_progress: ProgressCallback) -> str:
        on_progress(messages.VIDEO_PREPARING)
        operation = await self.client.aio.models.generate_videos(
            model=self.model_name,
            prompt=messages.VIDEO_PROMPT.format(prompt=prompt),
            config=types.GenerateVideosConfig(
                number_of_videos=1,
                resolution=self.resolution,
                aspect_ratio=self.aspect_ratio,
            ),
        )

        operation = await self._wait_until_done(operation, on_progress)

        if getattr(operation, "error", None):
            raise VideoGenerationError(
                f"Video operation failed: {operation.error}",
                kind=kind_from_operation_error(operation.error),
            )

        uri = video_uri(operation)
        if not uri:
            raise VideoGenerationError("Video generation failed")

        content = await self._download(uri)
        path = await asyncio.to_thread(self._save, content)
        logger.info("Saved generated video to %s (%s bytes)", path, len(content))
        return path.resolve().as_uri()
