"""Manifest loading from TOML files."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from .exceptions import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestValidationError,
)
from .models import DEFAULT_TAG, Image, Manifest

logger = logging.getLogger(__name__)

# Expected type of each field inside an [[image]] table
IMAGE_FIELDS = {
    "registry": str,
    "repository": str,
    "tag": str,
    "public": bool,
}


def validate_input(path: Path) -> None:
    """Check that the manifest file exists.

    Raises:
        ManifestNotFoundError: If the path does not exist
    """
    if not Path(path).exists():
        raise ManifestNotFoundError(f"Input file '{path}' not found")


def parse_image_entry(entry: Any, index: int) -> Image:
    """Convert one ``[[image]]`` table into an Image record.

    Args:
        entry: Parsed TOML table
        index: Position of the entry in the manifest, for error messages

    Returns:
        Image with the tag defaulted to "latest" when absent or empty

    Raises:
        ManifestParseError: If the entry is not a table or a field has the wrong type
    """
    if not isinstance(entry, dict):
        raise ManifestParseError(f"Image entry #{index} must be a table")

    for name, expected in IMAGE_FIELDS.items():
        if name in entry and not isinstance(entry[name], expected):
            raise ManifestParseError(
                f"Image entry #{index}: field '{name}' must be {expected.__name__}"
            )

    return Image(
        registry=entry.get("registry", ""),
        repository=entry.get("repository", ""),
        tag=entry.get("tag", "") or DEFAULT_TAG,
        public=entry.get("public", False),
    )


def check_strict(manifest: Manifest) -> None:
    """Reject empty repositories and duplicate local names."""
    seen: set[str] = set()
    for index, image in enumerate(manifest.images):
        if not image.repository:
            raise ManifestValidationError(f"Image entry #{index} has no repository")
        if image.local_name in seen:
            raise ManifestValidationError(
                f"Image entry #{index} duplicates {image.local_name}"
            )
        seen.add(image.local_name)


def load_manifest(path: Path, strict: bool = False) -> Manifest:
    """Load the image manifest from a TOML file.

    Args:
        path: Path to the manifest file
        strict: Reject empty repositories and duplicate entries

    Returns:
        Manifest with images in declaration order

    Raises:
        ManifestNotFoundError: If the file does not exist
        ManifestParseError: If the file is not valid TOML or has bad field types
        ManifestValidationError: If strict checks fail
    """
    validate_input(path)

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(f"Error loading file {path}: {e}") from e
    except OSError as e:
        raise ManifestParseError(f"Error reading file {path}: {e}") from e

    entries = data.get("image", [])
    if not isinstance(entries, list):
        raise ManifestParseError(f"'image' in {path} must be an array of tables")

    manifest = Manifest(
        images=[parse_image_entry(entry, i) for i, entry in enumerate(entries)]
    )
    if strict:
        check_strict(manifest)

    logger.debug("Loaded %d images from %s", len(manifest.images), path)
    return manifest
