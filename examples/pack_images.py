"""Example of driving satchel from Python instead of the CLI."""

import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, "src")

from satchel import PipelineConfig, SatchelError, load_manifest, run_pipeline

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """Pack the images from examples/satchel.toml, public ones included."""
    manifest_path = Path("examples/satchel.toml")

    manifest = load_manifest(manifest_path)
    for image in manifest.images:
        logger.info(f"{image.image_name} -> {image.local_name} (public={image.public})")

    config = PipelineConfig(
        input_file=manifest_path,
        output_file=Path("example-images.tgz"),
        include_public=True,
    )

    try:
        await run_pipeline(config)
        logger.info(f"Run ./{config.script_path} <registry> on the destination host")
    except SatchelError as e:
        logger.error(f"satchel failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
