"""Concurrent validation of catalog repository links."""

import asyncio
from typing import AsyncIterator, List, Optional, Sequence

import aiohttp

from coolclis.logging import get_logger
from coolclis.types import LinkStatus, ToolEntry
from coolclis.utils.fetching import Downloader
from coolclis.utils.github import repo_web_url

logger = get_logger(__name__)


async def check_link(
    downloader: Downloader, session: aiohttp.ClientSession, tool: ToolEntry
) -> LinkStatus:
    url = repo_web_url(tool.repo)
    try:
        status = await downloader.head_status(session, url)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.debug({"event": "link_check_error", "url": url, "error": str(e)})
        return LinkStatus(
            name=tool.name, repo=tool.repo, ok=False, error=str(e) or e.__class__.__name__
        )

    ok = 200 <= status < 400
    return LinkStatus(
        name=tool.name,
        repo=tool.repo,
        ok=ok,
        status=status,
        error=None if ok else f"HTTP {status}",
    )


async def check_links(
    tools: Sequence[ToolEntry], downloader: Optional[Downloader] = None
) -> AsyncIterator[LinkStatus]:
    """Check every tool's repository concurrently, yielding results as they land."""
    downloader = downloader or Downloader()

    async with downloader.session() as session:
        pending = [check_link(downloader, session, tool) for tool in tools]
        for next_done in asyncio.as_completed(pending):
            result = await next_done
            logger.debug(
                {"event": "link_checked", "repo": result.repo, "ok": result.ok}
            )
            yield result


async def collect_link_statuses(
    tools: Sequence[ToolEntry], downloader: Optional[Downloader] = None
) -> List[LinkStatus]:
    return [status async for status in check_links(tools, downloader)]


def format_link_status(status: LinkStatus) -> str:
    mark = "OK  " if status.ok else "FAIL"
    line = f"[{mark}] {status.name:<15} {status.repo}"
    if status.error:
        line += f" ({status.error})"
    return line


def summarize(statuses: Sequence[LinkStatus]) -> str:
    failed = sum(1 for s in statuses if not s.ok)
    return f"Checked {len(statuses)} tools: {len(statuses) - failed} ok, {failed} failed"
