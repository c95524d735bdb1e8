"""Rules that decide which scanned files are candidates for cleanup."""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterable

from trashdoctor.scanner import FileInfo

_SECONDS_PER_DAY = 86400
_MIB = 1024 * 1024

_SIZE_RANGES = (
    (1024, "0-1KB"),
    (1048576, "1KB-1MB"),
    (104857600, "1MB-100MB"),
    (1073741824, "100MB-1GB"),
)


@dataclass
class RuleConfig:
    """Criteria a file must meet to be selected for cleanup."""

    max_age_days: int = 0
    min_size_mb: int = 0
    max_size_mb: int | None = None
    file_types: list[str] | None = None
    exclude_file_types: list[str] | None = None
    include_hidden: bool = False
    include_readonly: bool = False
    include_executable: bool = False
    custom_patterns: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(default_factory=list)


@dataclass
class SmartRule:
    """A named, described rule configuration."""

    name: str
    description: str
    config: RuleConfig
    priority: int = 5


def _now_secs() -> int:
    return max(int(time.time()), 0)


def wildcard_match(pattern: str, text: str) -> bool:
    """Match where '*' stands for any run of characters, ignoring case in the parts."""
    if pattern == "*":
        return True
    if "*" not in pattern:
        return pattern == text

    parts = pattern.split("*")
    last = len(parts) - 1
    text_lower = text.lower()
    pos = 0
    for i, part in enumerate(parts):
        if not part:
            continue
        part_lower = part.lower()
        if i == 0:
            if not text_lower.startswith(part_lower):
                return False
            pos = len(part_lower)
        elif i == last:
            return text_lower[pos:].endswith(part_lower)
        else:
            found = text_lower.find(part_lower, pos)
            if found < 0:
                return False
            pos = found + len(part_lower)
    return True


def pattern_matches(path: str, pattern: str) -> bool:
    """Wildcard match for patterns with '*', else a case-insensitive substring test."""
    if "*" in pattern:
        return wildcard_match(pattern, path)
    return pattern.lower() in path.lower()


def _type_matches(file_type: str, wanted: Iterable[str]) -> bool:
    lowered = file_type.lower()
    return any(t.lower() in lowered for t in wanted)


def matches_rule(file: FileInfo, rule: RuleConfig, now_secs: int) -> bool:
    """True when the file satisfies every criterion of the rule at time now_secs."""
    file_age_secs = max(now_secs - file.last_access_secs, 0)
    if file_age_secs < rule.max_age_days * _SECONDS_PER_DAY:
        return False

    if file.size < rule.min_size_mb * _MIB:
        return False
    if rule.max_size_mb is not None and file.size > rule.max_size_mb * _MIB:
        return False

    if file.is_hidden and not rule.include_hidden:
        return False
    if file.is_readonly and not rule.include_readonly:
        return False
    if file.is_executable and not rule.include_executable:
        return False

    if rule.file_types is not None and not _type_matches(file.file_type, rule.file_types):
        return False
    if rule.exclude_file_types is not None and _type_matches(
        file.file_type, rule.exclude_file_types
    ):
        return False

    if rule.custom_patterns and not any(
        pattern_matches(file.path, p) for p in rule.custom_patterns
    ):
        return False
    if rule.exclude_patterns and any(
        pattern_matches(file.path, p) for p in rule.exclude_patterns
    ):
        return False

    return True


def apply_rules(files: Iterable[FileInfo], rule: RuleConfig) -> list[FileInfo]:
    """The files that match the rule right now, in their original order."""
    now = _now_secs()
    return [f for f in files if matches_rule(f, rule, now)]


def get_predefined_rules() -> list[SmartRule]:
    """The built-in set of cleanup rules."""
    return [
        SmartRule(
            "Large Old Downloads",
            "Files in Downloads folder older than 30 days and larger than 10MB",
            RuleConfig(
                max_age_days=30,
                min_size_mb=10,
                custom_patterns=["*/Downloads/*", "*/downloads/*"],
            ),
        ),
        SmartRule(
            "Temporary Files",
            "Common temporary files and cache",
            RuleConfig(max_age_days=7, min_size_mb=1, file_types=["tmp", "temp", "cache"]),
        ),
        SmartRule(
            "Old Media Files",
            "Large media files not accessed in 90 days",
            RuleConfig(max_age_days=90, min_size_mb=50, file_types=["Video", "Audio", "Image"]),
        ),
        SmartRule(
            "Huge Files",
            "Files larger than 500MB regardless of age",
            RuleConfig(max_age_days=0, min_size_mb=500),
        ),
        SmartRule(
            "Old Archives",
            "Archive files older than 180 days",
            RuleConfig(max_age_days=180, min_size_mb=1, file_types=["Archive"]),
        ),
        SmartRule(
            "Old Documents",
            "Document files not accessed in 365 days",
            RuleConfig(
                max_age_days=365,
                min_size_mb=1,
                file_types=["Document", "PDF", "Spreadsheet"],
            ),
        ),
        SmartRule(
            "Log Files",
            "Log files older than 30 days",
            RuleConfig(max_age_days=30, min_size_mb=1, custom_patterns=["*.log", "*.log.*"]),
        ),
        SmartRule(
            "Backup Files",
            "Backup files older than 60 days",
            RuleConfig(
                max_age_days=60,
                min_size_mb=1,
                custom_patterns=["*.bak", "*.backup", "*~"],
            ),
        ),
    ]


def _parent_dir(path: str) -> str | None:
    pure = PurePath(path)
    if not pure.name:
        return None
    if len(pure.parts) == 1:
        return ""
    return str(pure.parent)


def _size_range(size: int) -> str:
    for upper, label in _SIZE_RANGES:
        if size <= upper:
            return label
    return "1GB+"


def analyze_file_patterns(files: Iterable[FileInfo]) -> dict[str, list[str]]:
    """Summaries of the files by type, by directory (top ten) and by size range."""
    files = list(files)

    by_type = Counter(f.file_type for f in files)
    by_dir = Counter(
        parent for parent in (_parent_dir(f.path) for f in files) if parent is not None
    )
    by_size = Counter(_size_range(f.size) for f in files)

    top_dirs = sorted(by_dir.items(), key=lambda item: item[1], reverse=True)[:10]
    return {
        "by_type": [f"{k}: {v} files" for k, v in by_type.items()],
        "by_directory": [f"{k}: {v} files" for k, v in top_dirs],
        "by_size": [f"{k}: {v} files" for k, v in by_size.items()],
    }


def suggest_rules_for_files(files: Iterable[FileInfo]) -> list[SmartRule]:
    """Rules that look useful given the sizes, types and ages of the files."""
    files = list(files)
    suggestions: list[SmartRule] = []

    total_size = sum(f.size for f in files)
    avg_size = total_size // len(files) if files else 0

    type_counts = Counter(f.file_type for f in files)
    if type_counts:
        most_common_type, count = max(type_counts.items(), key=lambda item: item[1])
        if count > len(files) // 4:
            suggestions.append(
                SmartRule(
                    f"Clean {most_common_type} Files",
                    f"Target {most_common_type} files which make up a large portion of your files",
                    RuleConfig(
                        max_age_days=60,
                        min_size_mb=max(avg_size // _MIB, 1),
                        file_types=[most_common_type],
                    ),
                )
            )

    if any(f.size > 100 * _MIB for f in files):
        suggestions.append(
            SmartRule(
                "Large File Cleanup",
                "Focus on files larger than 100MB",
                RuleConfig(max_age_days=30, min_size_mb=100),
            )
        )

    now = _now_secs()
    if any(max(now - f.last_access_secs, 0) > 365 * _SECONDS_PER_DAY for f in files):
        suggestions.append(
            SmartRule(
                "Ancient Files",
                "Files not accessed in over a year",
                RuleConfig(max_age_days=365, min_size_mb=1),
            )
        )

    return suggestions