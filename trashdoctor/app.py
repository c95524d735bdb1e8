"""Application state and actions for browsing and cleaning up old, large files."""

from __future__ import annotations

import argparse
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Sequence

from trashdoctor.actions import archive_file, delete_file
from trashdoctor.rules import RuleConfig, apply_rules
from trashdoctor.scanner import FileInfo, scan_folder

TITLE = "TrashDoctor - Smart Disk Hygiene & File Management"
AUTO_REFRESH_SECONDS = 30.0
_MIB = 1024.0 * 1024.0
_U64_MAX = 2**64 - 1

_TYPE_FILTERS = {
    "Images": frozenset({"jpg", "jpeg", "png", "gif", "bmp", "tiff", "svg"}),
    "Documents": frozenset(
        {"pdf", "doc", "docx", "txt", "rtf", "odt", "xls", "xlsx", "ppt", "pptx"}
    ),
    "Videos": frozenset({"mp4", "avi", "mov", "wmv", "flv", "mkv", "webm"}),
}


class SortCriteria(Enum):
    """Orderings available for the file list."""

    NAME = "name"
    SIZE = "size"
    DATE = "date"
    TYPE = "type"


class AppState(Enum):
    """What the application is currently doing."""

    NORMAL = "normal"
    CONFIRMING_DELETE = "confirming_delete"
    PROCESSING = "processing"


class MessageType(Enum):
    """Severity of the status message."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


@dataclass
class FileStats:
    """Summary figures about every scanned file."""

    total_files: int = 0
    total_size: int = 0
    oldest_file: str = ""
    newest_file: str = ""
    largest_file: str = ""
    file_types: dict[str, int] = field(default_factory=dict)


def _extension(path: str) -> str:
    """Extension of the file name, or an empty string when it has none."""
    name = PurePath(path).name
    if name in ("", ".", ".."):
        return ""
    before, dot, after = name.rpartition(".")
    if not dot or not before:
        return ""
    return after


def _parse_count(text: str, default: int) -> int:
    """Parse a non-negative whole number, falling back to default."""
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        return default
    value = int(digits)
    return value if value <= _U64_MAX else default


def _last_max(files: Sequence[FileInfo], key) -> FileInfo | None:
    """The last element with the greatest key."""
    best = None
    for info in files:
        if best is None or key(info) >= key(best):
            best = info
    return best


def _first_min(files: Sequence[FileInfo], key) -> FileInfo | None:
    """The first element with the smallest key."""
    best = None
    for info in files:
        if best is None or key(info) < key(best):
            best = info
    return best


class TrashDoctor:
    """Holds the scanned files, the selection and the status shown to the user."""

    def __init__(
        self,
        folder_path: str = "/home",
        age_filter: str = "30",
        size_filter: str = "100",
    ) -> None:
        self.files: list[FileInfo] = []
        self.all_files: list[FileInfo] = []
        self.selected: list[bool] = []
        self.message = "Select a folder to begin scanning for old files."
        self.message_type = MessageType.INFO
        self.folder_path = folder_path
        self.age_filter = age_filter
        self.size_filter = size_filter
        self.rule = RuleConfig()
        self.state = AppState.NORMAL
        self.sort_by = SortCriteria.DATE
        self.filter_by_type = "All"
        self.auto_refresh = False
        self.stats = FileStats()
        self.selected_count = 0
        self.total_size_selected = 0

    @property
    def title(self) -> str:
        return TITLE

    @property
    def all_selected(self) -> bool:
        return all(self.selected)

    def _set_message(self, text: str, kind: MessageType) -> None:
        self.message = text
        self.message_type = kind

    # Selection

    def toggle_selection(self, index: int, value: bool) -> None:
        """Select or deselect one file of the displayed list."""
        if 0 <= index < len(self.selected):
            self.selected[index] = value
            self._update_selection_stats()

    def select_all(self, value: bool) -> None:
        """Select or deselect every displayed file."""
        self.selected = [value] * len(self.files)
        self._update_selection_stats()

    def _chosen_files(self) -> list[FileInfo]:
        return [info for info, chosen in zip(self.files, self.selected) if chosen]

    # Deletion and archiving

    def delete_selected(self) -> None:
        """Ask for confirmation before deleting the selected files."""
        self.show_delete_confirmation()

    def show_delete_confirmation(self) -> None:
        """Enter the confirmation state if anything is selected."""
        if self.selected_count > 0:
            self.state = AppState.CONFIRMING_DELETE
            self._set_message(
                f"Are you sure you want to delete {self.selected_count} files? "
                "This action cannot be undone!",
                MessageType.WARNING,
            )
        else:
            self._set_message("No files selected for deletion.", MessageType.WARNING)

    def confirm_delete(self) -> None:
        """Delete every selected file, report the outcome, then rescan."""
        self.state = AppState.PROCESSING
        deleted = failed = 0
        for info in self._chosen_files():
            try:
                delete_file(info.path)
            except Exception:
                failed += 1
            else:
                deleted += 1
        self.state = AppState.NORMAL
        if failed == 0:
            self._set_message(f"Successfully deleted {deleted} files.", MessageType.SUCCESS)
        else:
            self._set_message(
                f"Deleted {deleted} files, failed to delete {failed} files.",
                MessageType.ERROR,
            )
        self.refresh()

    def cancel_delete(self) -> None:
        """Leave the confirmation state without deleting anything."""
        self.state = AppState.NORMAL
        self._set_message("Delete operation cancelled.", MessageType.INFO)

    def archive_selected(self) -> None:
        """Archive every selected file, report the outcome, then rescan."""
        if self.selected_count == 0:
            self._set_message("No files selected for archiving.", MessageType.WARNING)
            return
        self.state = AppState.PROCESSING
        archived = failed = 0
        for info in self._chosen_files():
            try:
                archive_file(info.path)
            except Exception:
                failed += 1
            else:
                archived += 1
        self.state = AppState.NORMAL
        if failed == 0:
            self._set_message(f"Successfully archived {archived} files.", MessageType.SUCCESS)
        else:
            self._set_message(
                f"Archived {archived} files, failed to archive {failed} files.",
                MessageType.ERROR,
            )
        self.refresh()

    # Folder and filters

    def folder_selected(self, path: str) -> None:
        """Switch to a new folder and scan it; an empty path is ignored."""
        if path:
            self.folder_path = path
            self._scan_and_filter()

    def change_age(self, age: str) -> None:
        """Update the minimum-age field and rescan."""
        self.age_filter = age
        if self.folder_path:
            self._scan_and_filter()

    def change_size(self, size: str) -> None:
        """Update the minimum-size field and rescan."""
        self.size_filter = size
        if self.folder_path:
            self._scan_and_filter()

    def refresh(self) -> None:
        """Rescan the current folder."""
        if self.folder_path:
            self._scan_and_filter()
            self._set_message("Files refreshed successfully.", MessageType.SUCCESS)
        else:
            self._set_message(
                "No folder selected. Please select a folder first.", MessageType.WARNING
            )

    def set_sort(self, criteria: SortCriteria | str) -> None:
        """Change the ordering of the displayed files."""
        self.sort_by = SortCriteria(criteria)
        self._apply_sort_and_filter()

    def set_type_filter(self, file_type: str) -> None:
        """Show only files of one category: All, Images, Documents or Videos."""
        self.filter_by_type = file_type
        self._apply_sort_and_filter()

    # Messages

    def clear_message(self) -> None:
        self._set_message("Ready.", MessageType.INFO)

    def preview_file(self, path: str) -> None:
        self._set_message(f"Preview: {path}", MessageType.INFO)

    def show_stats(self) -> None:
        """Put totals for the scan and the selection into the status message."""
        self._set_message(
            f"Total Files: {self.stats.total_files}, "
            f"Total Size: {self.stats.total_size / _MIB:.2f} MB, "
            f"Selected: {self.selected_count} files "
            f"({self.total_size_selected / _MIB:.2f} MB)",
            MessageType.INFO,
        )

    def export_list(self) -> None:
        self._set_message("Exporting the file list is not supported.", MessageType.INFO)

    # Auto refresh

    def toggle_auto_refresh(self, value: bool) -> float | None:
        """Turn periodic rescans on or off.

        Returns the delay in seconds before auto_refresh_tick should run, or None.
        """
        self.auto_refresh = value
        if value:
            self._set_message(
                "Auto-refresh enabled (every 30 seconds).", MessageType.SUCCESS
            )
            return AUTO_REFRESH_SECONDS
        self._set_message("Auto-refresh disabled.", MessageType.INFO)
        return None

    def auto_refresh_tick(self) -> float | None:
        """Rescan if auto-refresh is on; returns the delay until the next tick, or None."""
        if not self.auto_refresh:
            return None
        self._scan_and_filter()
        return AUTO_REFRESH_SECONDS

    def summary(self) -> str:
        """One-line totals for all scanned files and the filtered list."""
        total = sum(f.size for f in self.all_files)
        return (
            f"Total: {len(self.all_files)} files ({total / _MIB:.2f} MB) | "
            f"Filtered: {len(self.files)} files"
        )

    # Internals

    def _scan_and_filter(self) -> None:
        self.all_files = scan_folder(self.folder_path)
        self.rule.max_age_days = _parse_count(self.age_filter, 30)
        self.rule.min_size_mb = _parse_count(self.size_filter, 100)
        self._apply_sort_and_filter()
        self._update_stats()

    def _apply_sort_and_filter(self) -> None:
        filtered = apply_rules(self.all_files, self.rule)

        wanted = _TYPE_FILTERS.get(self.filter_by_type)
        if self.filter_by_type != "All" and wanted is not None:
            filtered = [f for f in filtered if _extension(f.path).lower() in wanted]

        if self.sort_by is SortCriteria.NAME:
            filtered.sort(key=lambda f: f.path)
        elif self.sort_by is SortCriteria.SIZE:
            filtered.sort(key=lambda f: f.size, reverse=True)
        elif self.sort_by is SortCriteria.DATE:
            filtered.sort(key=lambda f: f.last_access_secs, reverse=True)
        else:
            filtered.sort(key=lambda f: _extension(f.path))

        self.files = filtered
        self.selected = [False] * len(filtered)
        self._update_selection_stats()

    def _update_stats(self) -> None:
        files = self.all_files
        self.stats.total_files = len(files)
        self.stats.total_size = sum(f.size for f in files)

        oldest = _last_max(files, lambda f: f.last_access_secs)
        if oldest is not None:
            self.stats.oldest_file = oldest.path
        newest = _first_min(files, lambda f: f.last_access_secs)
        if newest is not None:
            self.stats.newest_file = newest.path
        largest = _last_max(files, lambda f: f.size)
        if largest is not None:
            self.stats.largest_file = largest.path

        self.stats.file_types = dict(
            Counter(_extension(f.path).lower() or "no_extension" for f in files)
        )

    def _update_selection_stats(self) -> None:
        chosen = self._chosen_files()
        self.selected_count = sum(self.selected)
        self.total_size_selected = sum(f.size for f in chosen)


def _render(app: TrashDoctor) -> str:
    lines = [app.title, ""]
    for info in app.files:
        lines.append(f"{info.path}  {info.size // 1024} KB  {info.last_accessed}")
    lines.extend(["", app.message, app.summary()])
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """List old, large files under a folder."""
    parser = argparse.ArgumentParser(prog="trashdoctor", description=TITLE)
    parser.add_argument("folder", nargs="?", default="/home", help="folder to scan")
    parser.add_argument("--age", default="30", help="minimum age in days")
    parser.add_argument("--size", default="100", help="minimum size in MB")
    parser.add_argument(
        "--sort", choices=[c.value for c in SortCriteria], default=SortCriteria.DATE.value
    )
    parser.add_argument(
        "--type", dest="file_type", choices=["All", *_TYPE_FILTERS], default="All"
    )
    parser.add_argument("--stats", action="store_true", help="show totals")
    args = parser.parse_args(argv)

    app = TrashDoctor(folder_path=args.folder, age_filter=args.age, size_filter=args.size)
    app.refresh()
    app.set_sort(args.sort)
    app.set_type_filter(args.file_type)
    if args.stats:
        app.show_stats()
    print(_render(app))
    return 0