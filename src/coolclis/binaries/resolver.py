"""Release asset selection for the running OS/architecture.

Release asset naming is not standardised across projects
(``tool-x86_64-apple-darwin.tar.gz``, ``tool_darwin_arm64``, ``tool-mac``),
so matching tries many textual spellings. Selection is first-match:
patterns in generation order, then extensions, then assets in the order the
release lists them. There is no scoring.
"""

from typing import Callable, Iterable, List, Optional, Sequence

from coolclis.errors import NoMatchingAsset
from coolclis.logging import get_logger
from coolclis.types import PlatformDescriptor, ReleaseAsset

logger = get_logger(__name__)


def search_patterns(platform: PlatformDescriptor) -> List[str]:
    """Build the ordered list of OS/arch tokens to look for in asset names."""
    patterns = []
    for os_syn in platform.os_synonyms:
        for arch_syn in platform.arch_synonyms:
            patterns.append(f"{os_syn}-{arch_syn}")
            patterns.append(f"{os_syn}_{arch_syn}")
            patterns.append(f"{os_syn}{arch_syn}")
            patterns.append(f"{arch_syn}-{os_syn}")
        patterns.append(os_syn)  # OS only
    return patterns


def _first_match(
    assets: Sequence[ReleaseAsset],
    patterns: Iterable[str],
    extensions: Iterable[str],
    accept: Callable[[str], bool],
) -> Optional[ReleaseAsset]:
    extensions = tuple(extensions)
    for pattern in patterns:
        for ext in extensions:
            for asset in assets:
                name = asset.name.lower()
                if pattern in name and name.endswith(ext) and accept(name):
                    return asset
    return None


def resolve(
    assets: Sequence[ReleaseAsset], tool_name: str, platform: PlatformDescriptor
) -> ReleaseAsset:
    """Pick the one asset to install for ``platform``.

    Assets naming the tool are preferred; if none does, any asset matching
    the platform is taken. Raises NoMatchingAsset when nothing matches.
    """
    patterns = search_patterns(platform)
    tool_lower = tool_name.lower()

    asset = _first_match(
        assets, patterns, platform.extensions, lambda name: tool_lower in name
    )
    if asset is None:
        asset = _first_match(assets, patterns, platform.extensions, lambda _: True)
        if asset is not None:
            logger.debug(
                {
                    "event": "asset_matched_platform_only",
                    "tool": tool_name,
                    "asset": asset.name,
                }
            )

    if asset is None:
        logger.debug(
            {
                "event": "no_matching_asset",
                "tool": tool_name,
                "platform": platform.token,
                "assets": [a.name for a in assets],
            }
        )
        raise NoMatchingAsset(
            platform.os_canonical.value, platform.arch_canonical.value
        )

    logger.debug(
        {"event": "asset_resolved", "tool": tool_name, "asset": asset.name}
    )
    return asset
