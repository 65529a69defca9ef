"""Pull, tag, save and script stages of a satchel run."""

import logging
from pathlib import Path
from typing import Callable, List

from .archive import archive_images
from .core.daemon_client import DaemonClient
from .exceptions import DaemonConnectionError
from .manifest import load_manifest
from .models import Image, PipelineConfig
from .resolver import filter_images, find_image_ids
from .script import write_load_script

logger = logging.getLogger(__name__)


async def pull_images(
    client: DaemonClient, images: List[Image], include_public: bool
) -> None:
    """Pull every selected image by its fully-qualified name."""
    for image in filter_images(images, include_public):
        logger.info("Pulling image %s", image.image_name)
        await client.pull_image(image.image_name)


async def tag_images(
    client: DaemonClient, images: List[Image], include_public: bool
) -> None:
    """Retag every selected image with its registry-less local name."""
    for image in filter_images(images, include_public):
        src = image.image_name
        dest = image.local_name
        logger.info("Tagging image %s -> %s", src, dest)
        await client.tag_image(src, dest)


async def save_images(
    client: DaemonClient,
    images: List[Image],
    output_path: Path,
    include_public: bool,
) -> int:
    """Export the matching root images into a compressed archive.

    Returns:
        Number of compressed bytes written
    """
    summaries = await client.list_images()
    image_ids = find_image_ids(images, summaries, include_public)
    if not image_ids:
        logger.warning("No local images matched the manifest")

    stream = await client.save_images(image_ids)

    logger.info("Writing images to %s", output_path)
    return await archive_images(stream, output_path)


async def run_pipeline(
    config: PipelineConfig,
    client_factory: Callable[[], DaemonClient] = DaemonClient,
) -> None:
    """Run a full satchel pass: load, pull, tag, save, write script.

    The manifest is checked before any daemon connection is made. The first
    error raised by any stage ends the run.

    Args:
        config: Run settings
        client_factory: Builds the daemon client (default reads the environment)
    """
    manifest = load_manifest(config.input_file, strict=config.strict)

    async with client_factory() as client:
        if not await client.ping():
            raise DaemonConnectionError("Docker daemon did not answer ping")

        await pull_images(client, manifest.images, config.include_public)
        await tag_images(client, manifest.images, config.include_public)
        await save_images(
            client, manifest.images, config.output_file, config.include_public
        )

    await write_load_script(
        config.script_path, str(config.output_file), manifest.images
    )
