"""Platform tables, GitHub API and downloader constants."""

from pathlib import Path

from coolclis.types import OS, Arch

# GitHub API URL structure
GITHUB_API_BASE = "https://api.github.com"
GITHUB_WEB_BASE = "https://github.com"
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"
LATEST_PATH = "latest"
TAGS_PATH = "tags"

USER_AGENT = "coolclis"
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"

# Downloader defaults
MAX_ATTEMPTS = 3
TIMEOUT_SECS = 120
RETRY_DELAY_SECS = 2
CHUNK_SIZE = 8192

DEFAULT_INSTALL_DIR = Path("~/.local/bin")
TEMP_DIR_SUFFIX = "_temp"

# Normalisation of platform.system() / platform.machine() values
SYSTEM_ALIASES = {
    "linux": OS.LINUX,
    "darwin": OS.DARWIN,
    "windows": OS.WINDOWS,
    "win32": OS.WINDOWS,
}

MACHINE_ALIASES = {
    "x86_64": Arch.X86_64,
    "amd64": Arch.X86_64,
    "x64": Arch.X86_64,
    "aarch64": Arch.ARM64,
    "arm64": Arch.ARM64,
    "armv8": Arch.ARM64,
    "armv8l": Arch.ARM64,
    "i386": Arch.X86,
    "i486": Arch.X86,
    "i586": Arch.X86,
    "i686": Arch.X86,
    "x86": Arch.X86,
}

# Filename spellings seen in release assets, in matching order
OS_SYNONYMS = {
    OS.DARWIN: ("apple-darwin", "darwin", "macos", "mac", "osx"),
    OS.LINUX: ("unknown-linux", "linux"),
    OS.WINDOWS: ("pc-windows", "windows"),
}

ARCH_SYNONYMS = {
    Arch.X86_64: ("x86_64", "amd64", "x64"),
    Arch.ARM64: ("arm64", "aarch64"),
}

# Files the executable scan never considers
IGNORED_PREFIXES = (".", "LICENSE", "README")
IGNORED_FRAGMENTS = (".md", ".txt")
