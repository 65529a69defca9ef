"""Data models for manifests and daemon image summaries."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

DEFAULT_TAG = "latest"
DEFAULT_INPUT_FILE = "satchel.toml"
DEFAULT_OUTPUT_FILE = "satchel-images.tgz"
LOAD_SCRIPT_NAME = "load-images.sh"


@dataclass
class Image:
    """One image entry declared in the manifest."""

    repository: str
    registry: str = ""
    tag: str = DEFAULT_TAG
    public: bool = False

    @property
    def image_name(self) -> str:
        """Fully-qualified name used to pull from the source registry."""
        registry = f"{self.registry}/" if self.registry else ""
        return f"{registry}{self.repository}:{self.tag}"

    @property
    def local_name(self) -> str:
        """Name without registry, used for local retagging and the load script."""
        return f"{self.repository}:{self.tag}"


@dataclass
class Manifest:
    """Ordered list of images loaded from a manifest file."""

    images: List[Image] = field(default_factory=list)


@dataclass
class ImageSummary:
    """Image summary as reported by the daemon's image list."""

    id: str
    parent_id: str = ""
    repo_tags: List[str] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent_id == ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ImageSummary":
        """Build a summary from one entry of ``GET /images/json``."""
        return cls(
            id=data.get("Id", ""),
            parent_id=data.get("ParentId", "") or "",
            # RepoTags is null for dangling images
            repo_tags=list(data.get("RepoTags") or []),
        )


@dataclass(frozen=True)
class PipelineConfig:
    """Settings for one satchel run, built once from command line flags."""

    input_file: Path = Path(DEFAULT_INPUT_FILE)
    output_file: Path = Path(DEFAULT_OUTPUT_FILE)
    include_public: bool = False
    strict: bool = False
    script_path: Path = Path(LOAD_SCRIPT_NAME)
