"""Install a tool from its GitHub release."""

import shutil
from pathlib import Path
from typing import Callable, Optional

from coolclis.binaries.constants import DEFAULT_INSTALL_DIR, TEMP_DIR_SUFFIX
from coolclis.binaries.locator import locate, set_executable
from coolclis.binaries.platforms import describe_platform, is_platform_supported
from coolclis.binaries.resolver import resolve
from coolclis.binaries.unpack import archive_format, unpack
from coolclis.errors import NoExecutableFound
from coolclis.logging import get_logger
from coolclis.types import OS, InstallResult, PlatformDescriptor
from coolclis.utils.fetching import Downloader, ProgressCallback
from coolclis.utils.github import (
    fetch_release,
    tool_name_from_repo,
    validate_repo,
    validate_tool_name,
)

logger = get_logger(__name__)

NotifyCallback = Callable[[str], None]


def default_install_dir() -> Path:
    return DEFAULT_INSTALL_DIR.expanduser()


def installed_name(tool: str, platform: PlatformDescriptor) -> str:
    if platform.os_canonical == OS.WINDOWS and not tool.lower().endswith(".exe"):
        return f"{tool}.exe"
    return tool


def prepare_temp_dir(install_dir: Path, tool: str) -> Path:
    """Create a fresh ``<tool>_temp`` working directory, dropping any stale one."""
    validate_tool_name(tool)
    temp_dir = install_dir / f"{tool}{TEMP_DIR_SUFFIX}"
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
    temp_dir.mkdir(parents=True)
    return temp_dir


def place_executable(
    data: bytes,
    asset_name: str,
    tool: str,
    install_dir: Path,
    platform: PlatformDescriptor,
) -> Path:
    """Write the downloaded payload to ``install_dir`` as an executable.

    Archives are extracted into a temporary directory next to the target,
    which is removed whether or not an executable is found.
    """
    validate_tool_name(tool)
    install_dir.mkdir(parents=True, exist_ok=True)
    dest_path = install_dir / installed_name(tool, platform)

    if archive_format(asset_name) is None:
        dest_path.write_bytes(data)
        set_executable(dest_path)
        logger.debug({"event": "binary_written", "path": str(dest_path)})
        return dest_path

    temp_dir = prepare_temp_dir(install_dir, tool)
    try:
        unpack(data, asset_name, temp_dir)
        found = locate(temp_dir, tool)
        if found is None:
            raise NoExecutableFound(str(temp_dir))
        shutil.copy(found, dest_path)
        set_executable(dest_path)
        logger.debug(
            {"event": "binary_copied", "source": str(found), "destination": str(dest_path)}
        )
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    return dest_path


async def install_tool(
    repo: str,
    version: Optional[str] = None,
    install_dir: Optional[Path] = None,
    tool_name: Optional[str] = None,
    downloader: Optional[Downloader] = None,
    platform: Optional[PlatformDescriptor] = None,
    progress: Optional[ProgressCallback] = None,
    notify: Optional[NotifyCallback] = None,
) -> InstallResult:
    """Fetch, resolve, download and place the executable for ``repo``."""
    notify = notify or (lambda _msg: None)
    validate_repo(repo)
    tool = validate_tool_name(tool_name or tool_name_from_repo(repo))
    downloader = downloader or Downloader()
    platform = platform or describe_platform()
    if not is_platform_supported(platform):
        logger.warning({"event": "unsupported_platform", "platform": platform.token})
    install_dir = Path(install_dir).expanduser() if install_dir else default_install_dir()

    logger.info(
        {"event": "install_started", "tool": tool, "repo": repo, "version": version}
    )
    notify(f"Installing {tool} from {repo}")

    release = await fetch_release(repo, version, downloader)
    notify(f"Found release: {release.tag}")

    asset = resolve(release.assets, tool, platform)
    notify(f"Selected asset: {asset.name} ({asset.size} bytes)")
    logger.info(
        {
            "event": "asset_selected",
            "tag": release.tag,
            "asset": asset.name,
            "size": asset.size,
        }
    )

    data = await downloader.download(asset.download_url, asset.size, progress)
    path = place_executable(data, asset.name, tool, install_dir, platform)

    logger.info({"event": "install_complete", "tool": tool, "path": str(path)})
    return InstallResult(tool=tool, repo=repo, tag=release.tag, asset=asset, path=path)
