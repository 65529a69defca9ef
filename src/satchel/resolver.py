"""Resolve manifest images to the daemon image IDs that get archived."""

import logging
from typing import Iterable, List

from .models import Image, ImageSummary

logger = logging.getLogger(__name__)


def is_selected(image: Image, include_public: bool) -> bool:
    """True when the image takes part in pull, tag and save."""
    return include_public or not image.public


def filter_images(images: Iterable[Image], include_public: bool) -> List[Image]:
    """Drop public images unless they were explicitly requested."""
    return [image for image in images if is_selected(image, include_public)]


def contains_tag(tag: str, tags: Iterable[str]) -> bool:
    return any(search_tag == tag for search_tag in tags)


def find_image_ids(
    images: List[Image],
    summaries: List[ImageSummary],
    include_public: bool,
) -> List[str]:
    """Find the root image IDs that match the manifest.

    Summaries are scanned in daemon order and each one contributes at most
    one ID, so the result follows summary order and holds no duplicates.

    Args:
        images: Manifest images
        summaries: Image summaries reported by the daemon
        include_public: Whether public images are part of the set

    Returns:
        Image IDs to export
    """
    selected = filter_images(images, include_public)
    image_ids: List[str] = []

    for summary in summaries:
        if not summary.is_root or summary.id in image_ids:
            continue
        for image in selected:
            if contains_tag(image.local_name, summary.repo_tags):
                image_ids.append(summary.id)
                break

    matched_tags = {tag for s in summaries if s.id in image_ids for tag in s.repo_tags}
    for image in selected:
        if image.local_name not in matched_tags:
            logger.debug("No root image found for %s", image.local_name)

    return image_ids
