"""satchel - pack container images from a manifest into a portable archive."""

__version__ = "0.1.0"

from .archive import archive_images
from .core.daemon_client import DaemonClient, ImageExportStream
from .core.types import DaemonConfig
from .exceptions import (
    ArchiveError,
    DaemonConnectionError,
    DaemonError,
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
    PullError,
    SatchelError,
    ScriptError,
    TagError,
)
from .manifest import load_manifest
from .models import Image, ImageSummary, Manifest, PipelineConfig
from .pipeline import pull_images, run_pipeline, save_images, tag_images
from .resolver import filter_images, find_image_ids
from .script import render_load_script, write_load_script

__all__ = [
    "DaemonClient",
    "DaemonConfig",
    "ImageExportStream",
    "Image",
    "ImageSummary",
    "Manifest",
    "PipelineConfig",
    "load_manifest",
    "filter_images",
    "find_image_ids",
    "pull_images",
    "tag_images",
    "save_images",
    "archive_images",
    "render_load_script",
    "write_load_script",
    "run_pipeline",
    "SatchelError",
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "DaemonError",
    "DaemonConnectionError",
    "PullError",
    "TagError",
    "ArchiveError",
    "ScriptError",
]
