"""Container daemon access."""

from .daemon_client import DaemonClient, ImageExportStream
from .types import DaemonConfig

__all__ = ["DaemonClient", "DaemonConfig", "ImageExportStream"]
