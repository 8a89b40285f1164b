"""HTTP fetching with bounded retries."""

import asyncio
import os
from typing import Any, Callable, Dict, Optional

import aiohttp

from coolclis.binaries.constants import (
    CHUNK_SIZE,
    GITHUB_TOKEN_ENV,
    MAX_ATTEMPTS,
    RETRY_DELAY_SECS,
    TIMEOUT_SECS,
    USER_AGENT,
)
from coolclis.errors import DownloadError
from coolclis.logging import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]

RETRYABLE_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class Downloader:
    """Fetch JSON metadata and binary payloads, retrying transient failures.

    A 404 is never retried: the resource does not exist.
    """

    def __init__(
        self,
        max_attempts: int = MAX_ATTEMPTS,
        timeout_secs: float = TIMEOUT_SECS,
        retry_delay_secs: float = RETRY_DELAY_SECS,
        token: Optional[str] = None,
    ):
        self.max_attempts = max(1, max_attempts)
        self.timeout = aiohttp.ClientTimeout(total=timeout_secs)
        self.retry_delay_secs = retry_delay_secs
        self.token = token if token is not None else os.environ.get(GITHUB_TOKEN_ENV)

    def headers(self, accept: Optional[str] = None) -> Dict[str, str]:
        headers = {"User-Agent": USER_AGENT}
        if accept:
            headers["Accept"] = accept
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(timeout=self.timeout, headers=self.headers())

    async def _retry(self, url: str, attempt_fn) -> Any:
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await attempt_fn()
            except DownloadError:
                raise
            except RETRYABLE_ERRORS as e:
                last_error = e
                logger.warning(
                    {
                        "event": "fetch_attempt_failed",
                        "url": url,
                        "attempt": attempt,
                        "max_attempts": self.max_attempts,
                        "error": str(e) or e.__class__.__name__,
                    }
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.retry_delay_secs)

        raise DownloadError(
            url,
            f"failed after {self.max_attempts} attempts: {last_error}",
            status=getattr(last_error, "status", None),
        ) from last_error

    async def get_json(self, url: str, accept: str = "application/json") -> Any:
        """GET ``url`` and decode the JSON body."""

        async with self.session() as session:

            async def attempt():
                async with session.get(url, headers=self.headers(accept)) as response:
                    if response.status == 404:
                        raise DownloadError(url, "not found (404)", status=404)
                    response.raise_for_status()
                    return await response.json(content_type=None)

            return await self._retry(url, attempt)

    async def download(
        self, url: str, size: int = 0, progress: Optional[ProgressCallback] = None
    ) -> bytes:
        """Download ``url`` into memory, streaming in chunks."""

        logger.info({"event": "download_started", "url": url, "expected_size": size})

        async with self.session() as session:

            async def attempt():
                async with session.get(url) as response:
                    if response.status == 404:
                        raise DownloadError(url, "not found (404)", status=404)
                    response.raise_for_status()

                    total = size or int(response.headers.get("content-length", 0))
                    buffer = bytearray()
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        buffer.extend(chunk)
                        if progress:
                            progress(len(buffer), total)
                    return bytes(buffer)

            data = await self._retry(url, attempt)

        logger.info({"event": "download_complete", "url": url, "size": len(data)})
        return data

    async def head_status(self, session: aiohttp.ClientSession, url: str) -> int:
        """HEAD ``url`` following redirects; returns the final status code."""
        async with session.head(url, allow_redirects=True) as response:
            return response.status
