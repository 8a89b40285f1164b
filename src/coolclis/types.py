"""Core type definitions"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class OS(str, Enum):
    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


class Arch(str, Enum):
    X86_64 = "x86_64"
    ARM64 = "arm64"
    X86 = "x86"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ReleaseAsset:
    """One uploaded file of a release"""

    name: str
    download_url: str
    size: int = 0


@dataclass(frozen=True)
class Release:
    """A published release and its assets, in API order"""

    tag: str
    assets: Tuple[ReleaseAsset, ...] = ()


@dataclass(frozen=True)
class PlatformDescriptor:
    """Canonical OS/arch tokens plus the spellings vendors use for them.

    Synonyms are ordered: asset matching walks them in sequence and takes
    the first hit.
    """

    os_canonical: OS
    arch_canonical: Arch
    os_synonyms: Tuple[str, ...]
    arch_synonyms: Tuple[str, ...]

    @property
    def extensions(self) -> Tuple[str, ...]:
        if self.os_canonical == OS.WINDOWS:
            return (".exe", ".zip", ".tar.gz", ".tgz")
        return ("", ".tar.gz", ".tgz", ".zip")

    @property
    def token(self) -> str:
        return f"{self.os_canonical.value}-{self.arch_canonical.value}"


@dataclass(frozen=True)
class Candidate:
    """Executable candidate found while scanning an extracted archive"""

    path: Path
    has_extension: bool
    name_length: int

    @classmethod
    def from_path(cls, path: Path) -> "Candidate":
        return cls(path=path, has_extension="." in path.name, name_length=len(path.name))


@dataclass(frozen=True)
class ToolEntry:
    """Catalog row mapping a short tool name to its repository"""

    name: str
    repo: str
    description: str = "No description provided"


@dataclass(frozen=True)
class InstallResult:
    tool: str
    repo: str
    tag: str
    asset: ReleaseAsset
    path: Path


@dataclass(frozen=True)
class LinkStatus:
    name: str
    repo: str
    ok: bool
    status: Optional[int] = None
    error: Optional[str] = field(default=None, compare=False)
