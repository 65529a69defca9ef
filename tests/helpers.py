"""Test doubles for the container daemon."""

import json
from pathlib import Path

from aiohttp import web

from satchel.exceptions import PullError, SaveError, TagError
from satchel.models import ImageSummary

SAMPLE_MANIFEST = """\
[[image]]
repository = "java"
tag = "8"
public = true

[[image]]
registry = "gcr.io"
repository = "x/pause"
tag = "1.0"
public = false
"""


def write_manifest(directory: Path, content: str = SAMPLE_MANIFEST) -> Path:
    """Write a manifest file and return its path."""
    path = directory / "satchel.toml"
    path.write_text(content, encoding="utf-8")
    return path


def sample_summaries() -> list[ImageSummary]:
    """Daemon image list matching SAMPLE_MANIFEST."""
    return [
        ImageSummary(id="sha256:java8", repo_tags=["java:8"]),
        ImageSummary(id="sha256:child", parent_id="sha256:pause", repo_tags=["x/pause:1.0"]),
        ImageSummary(
            id="sha256:pause", repo_tags=["gcr.io/x/pause:1.0", "x/pause:1.0"]
        ),
        ImageSummary(id="sha256:other", repo_tags=["nginx:alpine"]),
    ]


class FakeExportStream:
    """Export stream yielding fixed chunks, optionally failing partway."""

    def __init__(self, chunks: list[bytes], fail_after: int | None = None):
        self.chunks = chunks
        self.fail_after = fail_after
        self.closed = False

    async def iter_chunks(self):
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index >= self.fail_after:
                raise SaveError("Error reading image export stream: connection reset")
            yield chunk

    async def close(self):
        self.closed = True


class FakeOutputFile:
    """Async file stand-in that records writes and closing."""

    def __init__(self, fail_on_write: bool = False, fail_on_close: bool = False):
        self.data = b""
        self.fail_on_write = fail_on_write
        self.fail_on_close = fail_on_close
        self.closed = False

    async def write(self, data):
        if self.fail_on_write:
            raise OSError("No space left on device")
        self.data += data

    async def close(self):
        self.closed = True
        if self.fail_on_close:
            raise OSError(28, "No space left on device")


class FakeDaemonClient:
    """In-memory daemon client that records every call."""

    def __init__(
        self,
        summaries: list[ImageSummary] | None = None,
        chunks: list[bytes] | None = None,
        fail_pull: set[str] | None = None,
        fail_tag: set[str] | None = None,
    ):
        self.summaries = sample_summaries() if summaries is None else summaries
        self.chunks = [b"image-tar-data"] if chunks is None else chunks
        self.fail_pull = fail_pull or set()
        self.fail_tag = fail_tag or set()
        self.calls: list[tuple] = []
        self.streams: list[FakeExportStream] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.calls.append(("close",))

    async def ping(self):
        self.calls.append(("ping",))
        return True

    async def pull_image(self, image_name):
        self.calls.append(("pull", image_name))
        if image_name in self.fail_pull:
            raise PullError(f"Error pulling image {image_name}: not found")

    async def tag_image(self, source, target):
        self.calls.append(("tag", source, target))
        if source in self.fail_tag:
            raise TagError(f"Error tagging image {source} -> {target}: no such image")

    async def list_images(self):
        self.calls.append(("list",))
        return self.summaries

    async def save_images(self, image_ids):
        self.calls.append(("save", list(image_ids)))
        stream = FakeExportStream(self.chunks)
        self.streams.append(stream)
        return stream

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


def create_fake_daemon_app() -> web.Application:
    """Build an aiohttp app imitating the Docker Engine API endpoints."""
    app = web.Application()
    app["requests"] = []
    # Mutable holder so tests can swap the image list after startup
    app["state"] = {
        "images": [
            {"Id": "sha256:aaa", "ParentId": "", "RepoTags": ["java:8"]},
            {"Id": "sha256:bbb", "ParentId": "sha256:aaa", "RepoTags": None},
        ]
    }

    async def ping(request):
        return web.Response(text="OK")

    async def create_image(request):
        app["requests"].append(("pull", dict(request.query)))
        from_image = request.query.get("fromImage", "")
        if from_image == "missing":
            return web.json_response(
                {"message": "pull access denied for missing"}, status=404
            )

        response = web.StreamResponse()
        await response.prepare(request)
        await response.write(
            json.dumps({"status": f"Pulling from {from_image}"}).encode() + b"\r\n"
        )
        if from_image == "broken":
            await response.write(
                json.dumps({"error": "manifest unknown"}).encode() + b"\r\n"
            )
        else:
            await response.write(json.dumps({"status": "Downloaded"}).encode() + b"\r\n")
        await response.write_eof()
        return response

    async def tag_image(request):
        name = request.match_info["name"]
        app["requests"].append(("tag", name, dict(request.query)))
        if name.startswith("missing"):
            return web.json_response(
                {"message": f"No such image: {name}"}, status=404
            )
        return web.Response(status=201)

    async def list_images(request):
        return web.json_response(app["state"]["images"])

    async def get_images(request):
        names = request.query.getall("names", [])
        app["requests"].append(("save", names))
        if "sha256:bad" in names:
            return web.json_response({"message": "reference does not exist"}, status=500)

        response = web.StreamResponse()
        response.content_type = "application/x-tar"
        await response.prepare(request)
        for name in names:
            await response.write(f"layer-data-for-{name}\n".encode())
        await response.write_eof()
        return response

    app.router.add_get("/_ping", ping)
    app.router.add_get("/v1.41/_ping", ping)
    app.router.add_post("/images/create", create_image)
    app.router.add_post("/images/{name:.+}/tag", tag_image)
    app.router.add_get("/images/json", list_images)
    app.router.add_get("/images/get", get_images)
    return app
