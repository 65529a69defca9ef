"""Docker Engine API async client implementation."""

import json
import logging
from typing import AsyncIterator, List, Optional, Type

import aiohttp

from ..exceptions import (
    DaemonConnectionError,
    DaemonError,
    ListError,
    PullError,
    SaveError,
    TagError,
)
from ..models import ImageSummary
from ..utils.reference import parse_repository_tag
from .session import create_session
from .types import DaemonConfig

logger = logging.getLogger(__name__)

EXPORT_CHUNK_SIZE = 64 * 1024


async def _error_message(resp: aiohttp.ClientResponse) -> str:
    """Extract the daemon's error message from a failed response."""
    body = await resp.text()
    try:
        return json.loads(body).get("message", body)
    except (json.JSONDecodeError, AttributeError):
        return body.strip() or f"HTTP {resp.status}"


async def _raise_for_status(
    resp: aiohttp.ClientResponse, error_cls: Type[DaemonError], context: str
) -> None:
    if resp.status >= 400:
        message = await _error_message(resp)
        raise error_cls(f"{context}: {message}")


class ImageExportStream:
    """Tar stream of saved images, as returned by ``GET /images/get``."""

    def __init__(self, response: aiohttp.ClientResponse) -> None:
        self._response = response
        self.closed = False

    async def iter_chunks(
        self, chunk_size: int = EXPORT_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        """Yield raw tar data as it arrives from the daemon.

        Raises:
            SaveError: If the transfer breaks off
        """
        try:
            async for chunk in self._response.content.iter_chunked(chunk_size):
                yield chunk
        except aiohttp.ClientError as e:
            raise SaveError(f"Error reading image export stream: {e}") from e

    async def close(self) -> None:
        if not self.closed:
            self._response.close()
            self.closed = True


class DaemonClient:
    """Async client for the subset of the Docker Engine API satchel needs."""

    def __init__(self, config: Optional[DaemonConfig] = None) -> None:
        """Initialize the daemon client.

        Args:
            config: Connection settings (default: read from the environment)
        """
        self.config = config or DaemonConfig.from_env()
        self.base_url = self.config.base_url
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "DaemonClient":
        """Enter async context manager."""
        if not self.session:
            self.session = await create_session(self.config)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the client session."""
        if self.session and not self.session.closed:
            await self.session.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def ping(self) -> bool:
        """Check that the daemon answers.

        Raises:
            DaemonConnectionError: If the daemon cannot be reached
        """
        try:
            async with self.session.get(self._url("/_ping")) as resp:
                return resp.status == 200
        except aiohttp.ClientError as e:
            raise DaemonConnectionError(
                f"Cannot connect to the Docker daemon at {self.config.host}: {e}"
            ) from e

    async def pull_image(self, image_name: str) -> None:
        """Pull an image and wait for the pull to finish.

        The daemon reports progress as a stream of JSON objects and signals
        failures inside that stream, so the whole body is consumed.

        Args:
            image_name: Fully-qualified image reference

        Raises:
            PullError: If the daemon rejects or fails the pull
            DaemonConnectionError: If the daemon cannot be reached
        """
        repository, tag = parse_repository_tag(image_name)
        context = f"Error pulling image {image_name}"
        try:
            async with self.session.post(
                self._url("/images/create"),
                params={"fromImage": repository, "tag": tag},
            ) as resp:
                await _raise_for_status(resp, PullError, context)
                async for line in resp.content:
                    if not line.strip():
                        continue
                    try:
                        event = json.loads(line)
                    except json.JSONDecodeError:
                        continue
                    if event.get("error"):
                        raise PullError(f"{context}: {event['error']}")
                    if event.get("status"):
                        logger.debug("%s: %s", image_name, event["status"])
        except aiohttp.ClientConnectionError as e:
            raise DaemonConnectionError(f"{context}: {e}") from e
        except aiohttp.ClientError as e:
            raise PullError(f"{context}: {e}") from e

    async def tag_image(self, source: str, target: str) -> None:
        """Tag an existing local image with a new name.

        Args:
            source: Existing image reference
            target: New ``repository:tag`` reference

        Raises:
            TagError: If the daemon cannot tag the image
        """
        repository, tag = parse_repository_tag(target)
        context = f"Error tagging image {source} -> {target}"
        try:
            async with self.session.post(
                self._url(f"/images/{source}/tag"),
                params={"repo": repository, "tag": tag},
            ) as resp:
                await _raise_for_status(resp, TagError, context)
        except aiohttp.ClientConnectionError as e:
            raise DaemonConnectionError(f"{context}: {e}") from e
        except aiohttp.ClientError as e:
            raise TagError(f"{context}: {e}") from e

    async def list_images(self) -> List[ImageSummary]:
        """List the images known to the daemon.

        Returns:
            Image summaries in daemon order

        Raises:
            ListError: If the list cannot be fetched
        """
        context = "Error getting Docker image list"
        try:
            async with self.session.get(self._url("/images/json")) as resp:
                await _raise_for_status(resp, ListError, context)
                data = await resp.json()
        except aiohttp.ClientConnectionError as e:
            raise DaemonConnectionError(f"{context}: {e}") from e
        except (aiohttp.ClientError, json.JSONDecodeError) as e:
            raise ListError(f"{context}: {e}") from e

        if not isinstance(data, list):
            raise ListError(f"{context}: unexpected response {data!r}")
        return [ImageSummary.from_api(entry) for entry in data]

    async def save_images(self, image_ids: List[str]) -> ImageExportStream:
        """Open one export stream covering all the given images.

        The caller owns the returned stream and must close it.

        Args:
            image_ids: IDs of the images to export

        Raises:
            SaveError: If the daemon refuses the export
        """
        context = "Error saving images"
        try:
            resp = await self.session.get(
                self._url("/images/get"),
                params=[("names", image_id) for image_id in image_ids],
            )
        except aiohttp.ClientConnectionError as e:
            raise DaemonConnectionError(f"{context}: {e}") from e
        except aiohttp.ClientError as e:
            raise SaveError(f"{context}: {e}") from e

        try:
            await _raise_for_status(resp, SaveError, context)
        except BaseException:
            resp.close()
            raise
        return ImageExportStream(resp)
