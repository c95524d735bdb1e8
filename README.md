# trashdoctor

Disk hygiene helpers: scan a folder, pick out files that are old and large,
and delete, archive or trash them. The package has no dependencies beyond
the standard library.

## Install

    pip install .

## Command line

    trashdoctor [FOLDER] [--age DAYS] [--size MB] [--sort {name,size,date,type}]
                [--type {All,Images,Documents,Videos}] [--stats]

The command scans `FOLDER` (default `/home`) once and prints the files that
were last accessed at least `--age` days ago (default 30) and are at least
`--size` MB in size (default 100). Each line shows the path, the size in KB
and the last access time. After the list come a status message and a
summary line with the total number and size of scanned files and the number
of files that passed the filters.

- `--sort` orders the list: `date` (default, most recently accessed first),
  `size` (largest first), `name` (by path) or `type` (by extension).
- `--type` keeps only images, documents or videos, judged by extension.
- `--stats` replaces the status message with totals for the scan.

Age and size values that are not whole non-negative numbers fall back to 30
days and 100 MB.

## Library use

```python
from trashdoctor.scanner import scan_folder, get_largest_files
from trashdoctor.rules import RuleConfig, apply_rules, get_predefined_rules
from trashdoctor.actions import archive_file, format_file_size

files = scan_folder("/home/me/Downloads")
old_big = apply_rules(files, RuleConfig(max_age_days=30, min_size_mb=10))

for info in get_largest_files(old_big, 5):
    print(info.path, format_file_size(info.size))

for rule in get_predefined_rules():
    print(rule.name, "-", rule.description)
```

### `trashdoctor.scanner`

- `scan_folder(folder)` and `scan_folder_with_options(folder, options)` walk
  a directory tree and return `FileInfo` records: path, size, last access
  and modification time (as text and as Unix seconds), a category such as
  `Image`, `Video`, `Archive` or `Code` (`.ext` for unknown extensions,
  `No Extension` otherwise), and hidden / read-only / executable flags.
- `ScanOptions` sets `include_hidden`, `max_depth`, `follow_symlinks`,
  `file_extensions` and `exclude_patterns`. By default hidden files are
  skipped, as are paths matching `*.tmp`, `*.cache`, `*/.git/*` and
  `*/node_modules/*`.
- `get_file_type_statistics`, `get_largest_files`, `get_oldest_files`,
  `get_duplicate_files` (files grouped by equal size) and
  `calculate_space_savings` summarise a scan.
- `file_type_from_path`, `is_hidden_file`, `should_exclude_file` and
  `wildcard_match` (case-sensitive, `*` only) are also available.

### `trashdoctor.rules`

- `RuleConfig` holds the criteria: minimum age in days, minimum and maximum
  size in MB, categories to include or exclude (matched as case-insensitive
  substrings of the category), whether hidden, read-only and executable
  files are allowed, and include / exclude path patterns.
- `apply_rules(files, rule)` keeps the matching files in their order;
  `matches_rule(file, rule, now_secs)` tests one file at a given time.
- `pattern_matches` uses a case-insensitive wildcard match for patterns
  with `*` and a case-insensitive substring test otherwise.
- `get_predefined_rules()` returns eight ready-made `SmartRule`s (old
  downloads, temporary files, old media, huge files, old archives, old
  documents, log files, backup files).
- `analyze_file_patterns(files)` summarises files by type, by directory
  (top ten) and by size range; `suggest_rules_for_files(files)` proposes
  rules from what it sees.

### `trashdoctor.actions`

- `delete_file(path)` removes a file, refusing missing and read-only files.
- `archive_file(path)` copies a file into `$HOME/.trashdoctor/archive`
  (`/tmp/.trashdoctor/archive` when `HOME` is unset) under a free name and
  then deletes the original.
- `move_to_trash(path)` moves a file into `$HOME/.local/share/Trash/files`
  and writes a matching `.trashinfo` record.
- `get_file_size`, `is_file_writable`, `get_file_type` (lower-case
  extension or `unknown`) and `format_file_size` (for example `1.00 KB`).

Failures raise `FileActionError`, or one of its subclasses
`PermissionDenied`, `FileMissing`, `InsufficientSpace` and `FileInUse`.

### `trashdoctor.app`

`TrashDoctor` keeps a session's state: the scanned and filtered files, the
selection, sort order (`SortCriteria`), type filter, status message
(`MessageType`), `AppState` and `FileStats`. Its methods select files,
confirm and carry out deletion, archive the selection, change folder and
filters, and rescan. `toggle_auto_refresh` and `auto_refresh_tick` return
the delay in seconds before the next tick; scheduling it is up to the
caller.

## What it does not do

- There is no interactive or graphical screen. The `trashdoctor` command
  only lists files; it never deletes, archives or trashes anything. Use
  `trashdoctor.actions` or a `TrashDoctor` session for that.
- `TrashDoctor.export_list` does not export anything; it only sets a
  message saying that exporting is not supported.
- Duplicate detection groups files by size only; contents are not compared.

## Tests

    pip install .[test]
    pytest