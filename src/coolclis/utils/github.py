import os
from typing import Any, Dict, Optional

from coolclis.binaries.constants import (
    GITHUB_API_BASE,
    GITHUB_REPOS_PATH,
    GITHUB_WEB_BASE,
    LATEST_PATH,
    RELEASES_PATH,
    TAGS_PATH,
)
from coolclis.errors import InvalidRepoError, InvalidToolNameError
from coolclis.types import Release, ReleaseAsset
from coolclis.utils.fetching import Downloader

GITHUB_JSON = "application/vnd.github+json"


def validate_repo(repo: str) -> str:
    """Ensure ``repo`` looks like ``owner/repo``."""
    parts = repo.split("/")
    if len(parts) != 2 or not all(_is_plain_name(p) for p in parts):
        raise InvalidRepoError(repo)
    return repo


def _is_plain_name(name: str) -> bool:
    separators = {"/", "\\", os.sep} | ({os.altsep} if os.altsep else set())
    return (
        bool(name.strip())
        and name not in (".", "..")
        and not any(sep in name for sep in separators)
    )


def validate_tool_name(name: str) -> str:
    """Ensure ``name`` is a single path component, safe to join onto a directory."""
    if not _is_plain_name(name):
        raise InvalidToolNameError(name)
    return name


def tool_name_from_repo(repo: str) -> str:
    return repo.rstrip("/").split("/")[-1]


def release_url(repo: str, version: Optional[str] = None) -> str:
    base = f"{GITHUB_API_BASE}/{GITHUB_REPOS_PATH}/{repo}/{RELEASES_PATH}"
    if version is None:
        return f"{base}/{LATEST_PATH}"
    return f"{base}/{TAGS_PATH}/{version}"


def repo_web_url(repo: str) -> str:
    return f"{GITHUB_WEB_BASE}/{repo}"


def parse_release(payload: Dict[str, Any]) -> Release:
    """Convert a GitHub release JSON document into a Release."""
    assets = tuple(
        ReleaseAsset(
            name=item["name"],
            download_url=item["browser_download_url"],
            size=int(item.get("size") or 0),
        )
        for item in payload.get("assets", [])
    )
    return Release(tag=payload["tag_name"], assets=assets)


async def fetch_release(
    repo: str, version: Optional[str] = None, downloader: Optional[Downloader] = None
) -> Release:
    """Fetch the latest release of ``repo``, or the one tagged ``version``."""
    downloader = downloader or Downloader()
    payload = await downloader.get_json(release_url(repo, version), accept=GITHUB_JSON)
    return parse_release(payload)
