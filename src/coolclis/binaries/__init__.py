"""Asset resolution, archive extraction and executable discovery."""
from coolclis.binaries.platforms import describe_platform, is_platform_supported
from coolclis.binaries.resolver import resolve, search_patterns
from coolclis.binaries.unpack import archive_format, unpack
from coolclis.binaries.locator import locate, set_executable

__all__ = [
    "describe_platform",
    "is_platform_supported",
    "resolve",
    "search_patterns",
    "archive_format",
    "unpack",
    "locate",
    "set_executable",
]
