"""Archive extraction for downloaded release assets."""

import io
import os
import tarfile
import zipfile
import zlib
from pathlib import Path
from typing import Iterable, Optional

from coolclis.errors import ArchiveExtractionFailed
from coolclis.logging import get_logger

logger = get_logger(__name__)

TAR_GZ = "tar.gz"
ZIP = "zip"

ARCHIVE_SUFFIXES = {
    ".tar.gz": TAR_GZ,
    ".tgz": TAR_GZ,
    ".zip": ZIP,
}

# zipfile raises NotImplementedError for unsupported compression and
# RuntimeError for encrypted members
EXTRACTION_ERRORS = (
    tarfile.TarError,
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    OSError,
    NotImplementedError,
    RuntimeError,
)


def archive_format(filename: str) -> Optional[str]:
    """Detect archive format from a filename suffix, or None for raw binaries."""
    lower = filename.lower()
    for suffix, fmt in ARCHIVE_SUFFIXES.items():
        if lower.endswith(suffix):
            return fmt
    return None


def _check_inside(dest_dir: Path, names: Iterable[str], filename: str) -> None:
    root = os.path.realpath(dest_dir)
    for name in names:
        target = os.path.realpath(os.path.join(root, name))
        if os.path.commonpath([root, target]) != root:
            raise ArchiveExtractionFailed(
                filename, f"member {name!r} escapes the destination directory"
            )


def _extract_tar(data: bytes, filename: str, dest_dir: Path) -> None:
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
        members = archive.getmembers()
        _check_inside(dest_dir, (m.name for m in members), filename)
        for member in members:
            if member.issym():
                link = os.path.join(os.path.dirname(member.name), member.linkname)
                _check_inside(dest_dir, [link], filename)
            elif member.islnk():
                _check_inside(dest_dir, [member.linkname], filename)
            elif member.isdev():
                raise ArchiveExtractionFailed(
                    filename, f"member {member.name!r} is a device file"
                )

        if hasattr(tarfile, "data_filter"):
            archive.extractall(dest_dir, filter="data")
        else:
            archive.extractall(dest_dir)


def _extract_zip(data: bytes, filename: str, dest_dir: Path) -> None:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        _check_inside(dest_dir, archive.namelist(), filename)
        archive.extractall(dest_dir)


EXTRACTORS = {
    TAR_GZ: _extract_tar,
    ZIP: _extract_zip,
}


def unpack(data: bytes, filename: str, dest_dir: Path) -> bool:
    """Extract ``data`` into ``dest_dir`` based on the ``filename`` suffix.

    Returns False, without touching ``dest_dir``, when ``filename`` is not a
    recognised archive: the payload is then the binary itself.
    """
    fmt = archive_format(filename)
    logger.debug({"event": "unpack", "filename": filename, "format": fmt})

    if fmt is None:
        return False

    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)

    try:
        EXTRACTORS[fmt](data, filename, dest_dir)
    except ArchiveExtractionFailed:
        raise
    except EXTRACTION_ERRORS as e:
        logger.error(
            {
                "event": "archive_extraction_failed",
                "filename": filename,
                "format": fmt,
                "error": str(e),
            }
        )
        raise ArchiveExtractionFailed(filename, str(e)) from e

    logger.info(
        {"event": "archive_extracted", "filename": filename, "extracted_to": str(dest_dir)}
    )
    return True
