"""Unpack archives that contain video files."""
import logging
import tarfile
import zipfile
from pathlib import Path

import rarfile

from .patterns import COMPRESSED_EXTENSIONS, VIDEO_EXTENSIONS

log = logging.getLogger(__name__)


def _archive_members(archive: Path) -> list[str]:
    if zipfile.is_zipfile(archive):
        with zipfile.ZipFile(archive) as zf:
            return zf.namelist()
    if rarfile.is_rarfile(archive):
        try:
            with rarfile.RarFile(archive) as rf:
                return rf.namelist()
        except rarfile.Error as e:
            raise ValueError(f"Could not read rar archive {archive.name}: {e}") from e
    if tarfile.is_tarfile(archive):
        with tarfile.open(archive) as tf:
            return tf.getnames()
    raise ValueError(f"Unsupported archive format: {archive.name}")


def contains_video(archive: Path) -> bool:
    """Return True when any member of *archive* has a video extension."""
    return any(
        Path(name).suffix.lower() in VIDEO_EXTENSIONS
        for name in _archive_members(archive)
    )


def extract_archive(archive: str | Path, extract_path: str | Path) -> Path | None:
    """
    Extract *archive* into its own folder under *extract_path*.

    Archives without video files are left alone.

    Args:
        archive: Path to a zip, rar or tar (optionally gz/bz2 compressed) file.
        extract_path: Root folder extractions are written to.

    Returns:
        The folder the archive was extracted to, or None when skipped.

    Raises:
        ValueError: If the archive format is not supported or unreadable.
    """
    archive = Path(archive)
    if not contains_video(archive):
        log.debug("No video files in %s, not extracting", archive)
        return None

    name = archive.name
    while Path(name).suffix.lower() in COMPRESSED_EXTENSIONS:
        name = Path(name).stem
    target = Path(extract_path) / (name or archive.stem)
    target.mkdir(parents=True, exist_ok=True)

    log.info("Extracting %s to %s", archive, target)
    if zipfile.is_zipfile(archive):
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(target)
    elif rarfile.is_rarfile(archive):
        # Needs an unrar/unar/bsdtar tool on PATH.
        try:
            with rarfile.RarFile(archive) as rf:
                rf.extractall(target)
        except rarfile.Error as e:
            raise ValueError(f"Could not extract rar archive {archive.name}: {e}") from e
    else:
        with tarfile.open(archive) as tf:
            tf.extractall(target, filter="data")
    return target
