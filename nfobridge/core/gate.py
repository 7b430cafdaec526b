"""
Change detection and persistence for rendered NFO files

A rendered document only reaches the disk when it differs from the file
already there once XML comments are ignored, so an unchanged NFO keeps its
modification time and media centers do not rescan the movie.
"""
import os
import re
import shutil
import tempfile
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from nfobridge.utils.error_handler import safe_file_operation, with_retry
from nfobridge.utils.exceptions import FileOperationError
from nfobridge.utils.logging import _log


_XML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)

BACKUP_FOLDER_NAME = ".backup"


class GateResult(Enum):
    WRITTEN = "written"
    UNCHANGED = "unchanged"


def strip_comments(text: str) -> str:
    return _XML_COMMENT.sub("", text)


def is_unchanged(new_content: str, old_content: Optional[str]) -> bool:
    """True when both documents are identical apart from XML comments"""
    if old_content is None:
        return False
    return strip_comments(new_content) == strip_comments(old_content)


def _read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def read_existing(path: Union[str, Path]) -> Optional[str]:
    """
    Current content of a file with line endings untouched

    Returns:
        The text, or None when the file does not exist

    Raises:
        FileOperationError: If the file exists but can not be read
    """
    path = Path(path)
    if not path.is_file():
        return None
    return safe_file_operation("read", path, _read_text, path)


def _write_and_replace(path: Path, content: str) -> None:
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(temp_name, path)
    except BaseException:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise


@with_retry(max_attempts=3, delay=0.5)
def write_atomic(path: Union[str, Path], content: str) -> None:
    """
    Write content through a temp file in the target folder and os.replace

    Either the old file stays untouched or the complete new content is in place.

    Raises:
        FileOperationError: If the write fails
        TemporaryFileError: If the disk stays full after retrying
    """
    path = Path(path)
    safe_file_operation("write", path, _write_and_replace, path, content)


def persist(path: Union[str, Path], content: str) -> GateResult:
    """
    Write content to path unless the existing file already matches

    Args:
        path: Target NFO file
        content: Fully serialized document

    Returns:
        GateResult.WRITTEN or GateResult.UNCHANGED

    Raises:
        FileOperationError: If reading the old file or writing the new one fails
    """
    path = Path(path)
    if is_unchanged(content, read_existing(path)):
        _log("DEBUG", f"NFO unchanged, skipping write: {path}")
        return GateResult.UNCHANGED

    write_atomic(path, content)
    _log("INFO", f"Wrote NFO {path}")
    return GateResult.WRITTEN


def backup_file(path: Union[str, Path], backup_dir: Union[str, Path, None] = None) -> Path:
    """
    Copy a file into the backup folder before it gets deleted

    Args:
        path: File to back up
        backup_dir: Backup folder; defaults to a .backup folder next to the file

    Returns:
        Path of the backup copy
    """
    path = Path(path)
    target_dir = Path(backup_dir) if backup_dir else path.parent / BACKUP_FOLDER_NAME
    safe_file_operation("mkdir", target_dir, target_dir.mkdir, parents=True, exist_ok=True)

    target = target_dir / path.name
    if target.exists():
        target = target_dir / f"{path.name}.{datetime.now():%Y%m%d%H%M%S}"
    safe_file_operation("backup", path, shutil.copy2, path, target)
    _log("INFO", f"Backed up {path} to {target}")
    return target


def delete_with_backup(path: Union[str, Path], backup_dir: Union[str, Path, None] = None) -> None:
    path = Path(path)
    backup_file(path, backup_dir)
    safe_file_operation("delete", path, path.unlink)
    _log("INFO", f"Deleted orphaned NFO {path}")


def delete_orphans(old_files: Iterable[Union[str, Path]], new_files: Iterable[Union[str, Path]],
                   backup_dir: Union[str, Path, None] = None) -> List[Path]:
    """
    Delete previously tracked NFOs that are not part of the new set

    Failures are logged and skipped; the new set is already on disk.

    Returns:
        The files that were deleted
    """
    keep = {Path(p) for p in new_files}
    deleted = []
    for old in old_files:
        old_path = Path(old)
        if old_path in keep or not old_path.exists():
            continue
        try:
            delete_with_backup(old_path, backup_dir)
            deleted.append(old_path)
        except FileOperationError as e:
            _log("DEBUG", f"Could not remove orphaned NFO {old_path}: {e.message}")
    return deleted
