"""Shared test helpers: asset lists, in-memory archives and a fake aiohttp session."""

import io
import tarfile
import zipfile
from typing import Dict, List, Optional

import aiohttp

from coolclis.types import ReleaseAsset


def make_assets(*names: str) -> List[ReleaseAsset]:
    return [
        ReleaseAsset(name=n, download_url=f"https://example.invalid/{n}", size=len(n))
        for n in names
    ]


def make_tar_gz(files: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
        for name, content in files.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(content)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def make_zip(files: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buffer.getvalue()


class FakeContent:
    def __init__(self, body: bytes):
        self.body = body

    async def iter_chunked(self, size: int):
        for start in range(0, len(self.body), size):
            yield self.body[start : start + size]


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse used as an async context manager"""

    def __init__(self, status: int = 200, json_data=None, body: bytes = b"", error=None):
        self.status = status
        self.json_data = json_data
        self.body = body
        self.error = error
        self.headers = {"content-length": str(len(body))}
        self.content = FakeContent(body)

    async def __aenter__(self):
        if self.error is not None:
            raise self.error
        return self

    async def __aexit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status >= 400:
            raise aiohttp.ClientError(f"HTTP {self.status}")

    async def json(self, content_type: Optional[str] = "application/json"):
        if isinstance(self.json_data, Exception):
            raise self.json_data
        return self.json_data


class FakeSession:
    """Serves queued responses per URL and records every request made.

    The last queued response for a URL is repeated; unknown URLs get a 404.
    Calling the instance returns itself so it can replace aiohttp.ClientSession.
    """

    def __init__(self, responses: Dict[str, List[FakeResponse]]):
        self.responses = {url: list(queue) for url, queue in responses.items()}
        self.requests: List[tuple] = []

    def __call__(self, *args, **kwargs):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def _next(self, method: str, url: str) -> FakeResponse:
        self.requests.append((method, url))
        queue = self.responses.get(url)
        if not queue:
            return FakeResponse(status=404)
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def get(self, url, **kwargs):
        return self._next("GET", url)

    def head(self, url, **kwargs):
        return self._next("HEAD", url)
