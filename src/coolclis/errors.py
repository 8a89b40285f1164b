"""Error types for coolclis."""

import logging
from typing import Any, Dict, Optional

from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST

from coolclis.logging import log_with_data


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Log an error with context."""
    logger = logger or logging.getLogger("coolclis.errors")

    error_info: Dict[str, Any] = {
        "error_type": error.__class__.__name__,
        "error_message": str(error),
    }
    if context:
        error_info["context"] = context
    if isinstance(error, CoolclisError):
        error_info["code"] = error.code
        error_info["details"] = error.details

    log_with_data(logger, logging.ERROR, "Operation failed", error_info)


class CoolclisError(Exception):
    """Base error class for coolclis."""

    def __init__(
        self,
        message: str,
        code: int = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_error_data(self) -> ErrorData:
        """Convert to ErrorData format."""
        return ErrorData(code=self.code, message=str(self), data=self.details)


class NoMatchingAsset(CoolclisError):
    """No release asset fits the running platform."""

    def __init__(self, os_name: str, arch: str):
        super().__init__(
            f"No suitable asset found for your platform ({os_name}-{arch})",
            code=INVALID_REQUEST,
            details={"os": os_name, "arch": arch},
        )
        self.os_name = os_name
        self.arch = arch


class ArchiveExtractionFailed(CoolclisError):
    def __init__(self, filename: str, reason: str):
        super().__init__(
            f"Failed to extract {filename}: {reason}",
            code=INTERNAL_ERROR,
            details={"filename": filename, "reason": reason},
        )


class NoExecutableFound(CoolclisError):
    def __init__(self, directory: str):
        super().__init__(
            "Could not find executable in extracted archive",
            code=INTERNAL_ERROR,
            details={"directory": directory},
        )


class DownloadError(CoolclisError):
    def __init__(self, url: str, reason: str, status: Optional[int] = None):
        super().__init__(
            f"Failed to fetch {url}: {reason}",
            code=INTERNAL_ERROR,
            details={"url": url, "reason": reason, "status": status},
        )
        self.status = status


class UnknownToolError(CoolclisError):
    def __init__(self, name: str):
        super().__init__(
            f"Unknown tool: {name}. Use the 'list' command to see available tools.",
            code=INVALID_PARAMS,
            details={"name": name},
        )


class InvalidRepoError(CoolclisError):
    def __init__(self, repo: str):
        super().__init__(
            "Repository must be in the format 'owner/repo'",
            code=INVALID_PARAMS,
            details={"repo": repo},
        )


class InvalidToolNameError(CoolclisError):
    def __init__(self, name: str):
        super().__init__(
            f"Invalid tool name {name!r}: must be a plain file name",
            code=INVALID_PARAMS,
            details={"name": name},
        )


class DuplicateToolError(CoolclisError):
    def __init__(self, name: str):
        super().__init__(
            f"Tool {name} already exists in the configuration",
            code=INVALID_PARAMS,
            details={"name": name},
        )


class ConfigError(CoolclisError):
    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Invalid tool configuration {path}: {reason}",
            code=INTERNAL_ERROR,
            details={"path": path, "reason": reason},
        )
