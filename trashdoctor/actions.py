"""File operations: deleting, archiving and trashing files, plus small helpers."""

from __future__ import annotations

import errno
import os
import shutil
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path, PurePath
from typing import Iterator

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


class FileActionError(Exception):
    """A file operation failed; the base class also covers uncategorised failures."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Error: {self.message}"


class _KnownFileActionError(FileActionError):
    description = ""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.description if message is None else message)

    def __str__(self) -> str:
        return self.description


class PermissionDenied(_KnownFileActionError):
    """The file may not be changed or removed."""

    description = "Permission denied"


class FileMissing(_KnownFileActionError):
    """The file does not exist."""

    description = "File not found"


class InsufficientSpace(_KnownFileActionError):
    """The device has no room left."""

    description = "Insufficient disk space"


class FileInUse(_KnownFileActionError):
    """The file is busy."""

    description = "File is currently in use"


def _translate(err: OSError) -> FileActionError:
    if isinstance(err, PermissionError):
        return PermissionDenied()
    if isinstance(err, FileNotFoundError):
        return FileMissing()
    if err.errno == errno.ENOSPC:
        return InsufficientSpace()
    if err.errno == errno.EBUSY:
        return FileInUse()
    return FileActionError(str(err))


@contextmanager
def _file_errors() -> Iterator[None]:
    """Turn operating-system errors raised inside the block into FileActionError."""
    try:
        yield
    except OSError as err:
        raise _translate(err) from err


def _is_readonly(mode: int) -> bool:
    return not (mode & 0o222)


def _home() -> str:
    return os.environ.get("HOME", "/tmp")


def _file_name(path: str) -> str:
    name = PurePath(path).name
    if name in ("", ".."):
        raise FileActionError("Invalid file path")
    return name


def _split_name(name: str) -> tuple[str, str]:
    """Stem and extension of a file name; a lone leading dot is not an extension."""
    before, dot, after = name.rpartition(".")
    if not dot or not before:
        return name, ""
    return before, after


def _unique_path(directory: str, filename: str) -> str:
    candidate = f"{directory}/{filename}"
    stem, ext = _split_name(filename)
    counter = 1
    while Path(candidate).exists():
        if ext:
            candidate = f"{directory}/{stem}_{counter}.{ext}"
        else:
            candidate = f"{directory}/{stem}_{counter}"
        counter += 1
    return candidate


def delete_file(path: str) -> None:
    """Remove a file, refusing files that are missing or marked read-only."""
    if not Path(path).exists():
        raise FileMissing()
    with _file_errors():
        if _is_readonly(os.stat(path).st_mode):
            raise PermissionDenied()
        os.remove(path)


def archive_file(path: str) -> None:
    """Copy a file into ~/.trashdoctor/archive under a free name, then delete it."""
    if not Path(path).exists():
        raise FileMissing()
    archive_dir = f"{_home()}/.trashdoctor/archive"
    with _file_errors():
        os.makedirs(archive_dir, exist_ok=True)
    archive_path = _unique_path(archive_dir, _file_name(path))
    with _file_errors():
        shutil.copy(path, archive_path)
    delete_file(path)


def move_to_trash(path: str) -> None:
    """Move a file into the user's trash folder and record a .trashinfo entry."""
    home = _home()
    trash_dir = f"{home}/.local/share/Trash/files"
    info_dir = f"{home}/.local/share/Trash/info"
    with _file_errors():
        os.makedirs(trash_dir, exist_ok=True)
        os.makedirs(info_dir, exist_ok=True)

    trash_path = _unique_path(trash_dir, _file_name(path))
    with _file_errors():
        os.rename(path, trash_path)
        info_path = f"{info_dir}/{PurePath(trash_path).name}.trashinfo"
        deletion_date = datetime.now().strftime("%Y-%m-%dT%H:%M:%S")
        Path(info_path).write_text(
            f"[Trash Info]\nPath={path}\nDeletionDate={deletion_date}\n"
        )


def get_file_size(path: str) -> int:
    """Size of the file in bytes."""
    with _file_errors():
        return os.stat(path).st_size


def is_file_writable(path: str) -> bool:
    """True unless the file is marked read-only."""
    with _file_errors():
        return not _is_readonly(os.stat(path).st_mode)


def get_file_type(path: str) -> str:
    """Lower-case extension of the file, or 'unknown' when it has none."""
    name = PurePath(path).name
    if name in ("", ".", ".."):
        return "unknown"
    _, ext = _split_name(name)
    return ext.lower() if ext else "unknown"


def format_file_size(size: int) -> str:
    """Human-readable size using binary units up to TB."""
    value = float(size)
    unit = 0
    while value >= 1024.0 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{size} {_SIZE_UNITS[0]}"
    return f"{value:.2f} {_SIZE_UNITS[unit]}"