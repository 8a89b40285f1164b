"""Find the executable inside an extracted release archive.

Archives come in many layouts (a flat binary, ``bin/tool``,
``tool-v1.2.3-linux/tool``), so the search runs from most specific to least:

1. a file in ``bin/`` named like the tool
2. any file in ``bin/``
3. a top-level file named exactly like the tool
4. a recursive scan skipping docs and dotfiles, where an exact name wins
5. otherwise extensionless files first, then the shortest name

The shortest-name rule is a heuristic; versioned binaries with long
canonical names can lose to a shorter helper script.
"""

import os
import stat
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from coolclis.binaries.constants import (
    IGNORED_FRAGMENTS,
    IGNORED_PREFIXES,
    TEMP_DIR_SUFFIX,
)
from coolclis.logging import get_logger
from coolclis.types import Candidate

logger = get_logger(__name__)

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def set_executable(path: Path) -> None:
    """Add execute permission for owner, group and other. No-op on Windows."""
    if os.name == "nt":
        return
    mode = os.stat(path).st_mode
    os.chmod(path, mode | EXECUTE_BITS)


def expected_tool_name(directory: Path, tool_name: Optional[str] = None) -> str:
    """Name the executable should carry, derived from the directory if not given."""
    if tool_name:
        return tool_name
    name = Path(directory).name
    if name.endswith(TEMP_DIR_SUFFIX) and len(name) > len(TEMP_DIR_SUFFIX):
        return name[: -len(TEMP_DIR_SUFFIX)]
    return name


def _is_exact(name: str, expected: str) -> bool:
    if name == expected:
        return True
    return os.name == "nt" and name.lower() == f"{expected}.exe".lower()


def _sorted_entries(directory: Path) -> List[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


def _is_ignored(name: str) -> bool:
    return name.startswith(IGNORED_PREFIXES) or any(
        fragment in name for fragment in IGNORED_FRAGMENTS
    )


def iter_candidates(directory: Path) -> Iterator[Path]:
    """Yield plausible executables depth-first, in sorted listing order."""
    for path in _sorted_entries(directory):
        if path.is_file():
            if not _is_ignored(path.name):
                yield path
        elif path.is_dir() and not path.name.startswith("."):
            yield from iter_candidates(path)


def rank_key(candidate: Candidate) -> Tuple[bool, int]:
    return (candidate.has_extension, candidate.name_length)


def _search_bin(bin_dir: Path, expected: str) -> Optional[Path]:
    files = [p for p in _sorted_entries(bin_dir) if p.is_file()]
    for path in files:
        if path.name == expected or path.name.startswith(expected):
            return path
    if files:
        logger.debug({"event": "bin_fallback", "bin_dir": str(bin_dir), "file": files[0].name})
        return files[0]
    return None


def _select(directory: Path, expected: str) -> Optional[Path]:
    bin_dir = directory / "bin"
    if bin_dir.is_dir():
        found = _search_bin(bin_dir, expected)
        if found is not None:
            return found

    for path in (directory / expected, directory / f"{expected}.exe"):
        if path.is_file() and _is_exact(path.name, expected):
            return path

    candidates = [Candidate.from_path(p) for p in iter_candidates(directory)]
    for candidate in candidates:
        if _is_exact(candidate.path.name, expected):
            return candidate.path

    if not candidates:
        return None

    ranked = sorted(candidates, key=rank_key)
    logger.debug(
        {
            "event": "ranked_candidates",
            "candidates": [str(c.path.relative_to(directory)) for c in ranked],
        }
    )
    return ranked[0].path


def locate(directory: Path, tool_name: Optional[str] = None) -> Optional[Path]:
    """Find the executable under ``directory`` and mark it executable.

    Returns None when the directory holds nothing that could be one.
    """
    directory = Path(directory)
    expected = expected_tool_name(directory, tool_name)

    found = _select(directory, expected)
    if found is None:
        logger.info({"event": "no_executable_found", "directory": str(directory)})
        return None

    set_executable(found)
    logger.info({"event": "executable_located", "path": str(found), "expected": expected})
    return found
