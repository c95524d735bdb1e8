"""Walk a folder and collect metadata about the files found in it."""

from __future__ import annotations

import os
import stat
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePath
from typing import Iterable, Iterator

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_TYPE_BY_EXTENSION = {
    **dict.fromkeys(("jpg", "jpeg", "png", "gif", "bmp", "webp", "svg"), "Image"),
    **dict.fromkeys(("mp4", "avi", "mov", "mkv", "flv", "wmv", "webm"), "Video"),
    **dict.fromkeys(("mp3", "wav", "flac", "aac", "ogg", "m4a"), "Audio"),
    "pdf": "PDF",
    **dict.fromkeys(("doc", "docx", "odt"), "Document"),
    **dict.fromkeys(("xls", "xlsx", "ods"), "Spreadsheet"),
    **dict.fromkeys(("ppt", "pptx", "odp"), "Presentation"),
    **dict.fromkeys(("zip", "rar", "7z", "tar", "gz", "bz2"), "Archive"),
    **dict.fromkeys(("exe", "msi", "deb", "rpm", "dmg", "pkg"), "Executable"),
    **dict.fromkeys(("txt", "md", "log", "cfg", "ini", "conf"), "Text"),
    **dict.fromkeys(("html", "htm", "css", "js", "json", "xml"), "Web"),
    **dict.fromkeys(("c", "cpp", "h", "py", "java", "rs", "go"), "Code"),
}


@dataclass
class FileInfo:
    """Metadata about one scanned file."""

    path: str
    size: int
    last_accessed: str = ""
    last_access_secs: int = 0
    last_modified: str = ""
    last_modified_secs: int = 0
    file_type: str = "No Extension"
    is_hidden: bool = False
    is_readonly: bool = False
    is_executable: bool = False


def _default_excludes() -> list[str]:
    return ["*.tmp", "*.cache", "*/.git/*", "*/node_modules/*"]


@dataclass
class ScanOptions:
    """Settings that control which files a scan reports."""

    include_hidden: bool = False
    include_system: bool = False
    max_depth: int | None = None
    follow_symlinks: bool = False
    file_extensions: list[str] | None = None
    exclude_patterns: list[str] = field(default_factory=_default_excludes)


def _file_name(path: str | os.PathLike) -> str | None:
    name = PurePath(path).name
    if name in ("", ".."):
        return None
    return name


def _extension(path: str | os.PathLike) -> str | None:
    """Text after the last dot of the file name, ignoring a lone leading dot."""
    name = _file_name(path)
    if name is None or name == ".":
        return None
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return ext


def file_type_from_path(path: str | os.PathLike) -> str:
    """Classify a file into a broad category by its extension."""
    ext = _extension(path)
    if ext is None:
        return "No Extension"
    ext = ext.lower()
    return _TYPE_BY_EXTENSION.get(ext, f".{ext}")


def is_hidden_file(path: str | os.PathLike) -> bool:
    """True when the file name starts with a dot."""
    name = _file_name(path)
    return name is not None and name.startswith(".")


def wildcard_match(pattern: str, text: str) -> bool:
    """Case-sensitive match where '*' stands for any run of characters."""
    if pattern == "*":
        return True
    if "*" not in pattern:
        return pattern == text

    parts = pattern.split("*")
    last = len(parts) - 1
    pos = 0
    for i, part in enumerate(parts):
        if not part:
            continue
        if i == 0:
            if not text.startswith(part):
                return False
            pos = len(part)
        elif i == last:
            return text[pos:].endswith(part)
        else:
            found = text.find(part, pos)
            if found < 0:
                return False
            pos = found + len(part)
    return True


def should_exclude_file(path: str | os.PathLike, exclude_patterns: Iterable[str]) -> bool:
    """True when the path matches any wildcard pattern or contains any plain one."""
    path_str = os.fspath(path)
    for pattern in exclude_patterns:
        if "*" in pattern:
            if wildcard_match(pattern, path_str):
                return True
        elif pattern in path_str:
            return True
    return False


def _walk_files(root: str, follow: bool, max_depth: int | None) -> Iterator[str]:
    """Yield paths of regular files below root, depth first; errors are skipped."""
    try:
        root_stat = os.stat(root)
    except OSError:
        return
    if stat.S_ISREG(root_stat.st_mode):
        yield root
        return
    if not stat.S_ISDIR(root_stat.st_mode):
        return

    def descend(directory: str, depth: int, ancestors: frozenset) -> Iterator[str]:
        if max_depth is not None and depth > max_depth:
            return
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError:
            return
        for entry in entries:
            try:
                if entry.is_file(follow_symlinks=follow):
                    yield entry.path
                elif entry.is_dir(follow_symlinks=follow):
                    key = None
                    if follow:
                        st = os.stat(entry.path)
                        key = (st.st_dev, st.st_ino)
                        if key in ancestors:
                            continue
                    yield from descend(entry.path, depth + 1, ancestors | {key})
            except OSError:
                continue

    start = (root_stat.st_dev, root_stat.st_ino)
    yield from descend(root, 1, frozenset({start}))


def _timestamp(seconds: float) -> tuple[str, int]:
    text = datetime.fromtimestamp(seconds).strftime(_TIME_FORMAT)
    return text, max(int(seconds), 0)


def _is_executable(mode: int) -> bool:
    if os.name == "nt":
        return False
    return bool(mode & 0o111)


def scan_folder_with_options(folder: str | os.PathLike, options: ScanOptions) -> list[FileInfo]:
    """Collect information about every file under folder that passes the options."""
    files: list[FileInfo] = []
    for path in _walk_files(os.fspath(folder), options.follow_symlinks, options.max_depth):
        if not options.include_hidden and is_hidden_file(path):
            continue
        if should_exclude_file(path, options.exclude_patterns):
            continue
        if options.file_extensions is not None:
            ext = _extension(path)
            if ext is not None:
                wanted = ext.lower()
                if not any(e.lower() == wanted for e in options.file_extensions):
                    continue
            elif options.file_extensions:
                continue
        try:
            st = os.stat(path)
        except OSError:
            continue

        accessed, access_secs = _timestamp(st.st_atime)
        modified, modified_secs = _timestamp(st.st_mtime)
        files.append(
            FileInfo(
                path=path,
                size=st.st_size,
                last_accessed=accessed,
                last_access_secs=access_secs,
                last_modified=modified,
                last_modified_secs=modified_secs,
                file_type=file_type_from_path(path),
                is_hidden=is_hidden_file(path),
                is_readonly=not (st.st_mode & 0o222),
                is_executable=_is_executable(st.st_mode),
            )
        )
    return files


def scan_folder(folder: str | os.PathLike) -> list[FileInfo]:
    """Scan a folder with the default options."""
    return scan_folder_with_options(folder, ScanOptions())


def get_file_type_statistics(files: Iterable[FileInfo]) -> dict[str, tuple[int, int]]:
    """Map each file type to (number of files, total size)."""
    stats: dict[str, tuple[int, int]] = {}
    for info in files:
        count, total = stats.get(info.file_type, (0, 0))
        stats[info.file_type] = (count + 1, total + info.size)
    return stats


def get_largest_files(files: Iterable[FileInfo], count: int) -> list[FileInfo]:
    """The count largest files, biggest first."""
    return sorted(files, key=lambda f: f.size, reverse=True)[:count]


def get_oldest_files(files: Iterable[FileInfo], count: int) -> list[FileInfo]:
    """The first count files ordered by access timestamp, highest first."""
    return sorted(files, key=lambda f: f.last_access_secs, reverse=True)[:count]


def get_duplicate_files(files: Iterable[FileInfo]) -> dict[int, list[FileInfo]]:
    """Group files by size, keeping only sizes shared by more than one file."""
    groups: defaultdict[int, list[FileInfo]] = defaultdict(list)
    for info in files:
        groups[info.size].append(info)
    return {size: group for size, group in groups.items() if len(group) > 1}


def calculate_space_savings(files: Iterable[FileInfo]) -> tuple[int, int]:
    """Bytes and file count freed by keeping one file of each same-size group."""
    savings = 0
    duplicates = 0
    for size, group in get_duplicate_files(files).items():
        extra = len(group) - 1
        savings += size * extra
        duplicates += extra
    return savings, duplicates