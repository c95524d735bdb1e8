import os
import re

import pytest

from trashdoctor.scanner import (
    FileInfo,
    ScanOptions,
    calculate_space_savings,
    file_type_from_path,
    get_duplicate_files,
    get_file_type_statistics,
    get_largest_files,
    get_oldest_files,
    is_hidden_file,
    scan_folder,
    scan_folder_with_options,
    should_exclude_file,
    wildcard_match,
)


def _write(path, size=10):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.mark.parametrize(
    "pattern,text,expected",
    [
        ("*.txt", "test.txt", True),
        ("test*", "test.txt", True),
        ("*test*", "mytest.txt", True),
        ("*.jpg", "test.txt", False),
        ("*", "anything", True),
        ("exact", "exact", True),
        ("exact", "other", False),
        ("*.TXT", "test.txt", False),
        ("a*b*c", "axxbyyc", True),
        ("a*b*c", "axxcyyb", False),
    ],
)
def test_wildcard_match(pattern, text, expected):
    assert wildcard_match(pattern, text) is expected


@pytest.mark.parametrize(
    "path,expected",
    [
        ("test.jpg", "Image"),
        ("test.mp4", "Video"),
        ("test.unknown", ".unknown"),
        ("test", "No Extension"),
        ("song.FLAC", "Audio"),
        ("report.pdf", "PDF"),
        ("bundle.tar.gz", "Archive"),
        (".hidden", "No Extension"),
        ("main.rs", "Code"),
    ],
)
def test_file_type_from_path(path, expected):
    assert file_type_from_path(path) == expected


def test_is_hidden_file():
    assert is_hidden_file(".hidden")
    assert not is_hidden_file("visible.txt")
    assert is_hidden_file("/some/dir/.bashrc")
    assert not is_hidden_file("/some/.dir/file.txt")


def test_should_exclude_file():
    defaults = ScanOptions().exclude_patterns
    assert should_exclude_file("/a/b/file.tmp", defaults)
    assert should_exclude_file("/a/.git/config", defaults)
    assert should_exclude_file("/a/node_modules/x.js", defaults)
    assert not should_exclude_file("/a/b/file.txt", defaults)
    assert should_exclude_file("/a/secretstuff/file.txt", ["secretstuff"])


def test_scan_folder_default_filters(tmp_path):
    keep = _write(tmp_path / "keep.txt", 5)
    _write(tmp_path / ".hidden.txt")
    _write(tmp_path / "junk.tmp")
    _write(tmp_path / "node_modules" / "lib.js")
    nested = _write(tmp_path / "sub" / "photo.png", 7)

    found = {f.path: f for f in scan_folder(tmp_path)}
    assert set(found) == {str(keep), str(nested)}
    assert found[str(keep)].size == 5
    assert found[str(keep)].file_type == "Text"
    assert found[str(nested)].file_type == "Image"
    assert found[str(nested)].is_hidden is False


def test_scan_include_hidden(tmp_path):
    hidden = _write(tmp_path / ".profile")
    files = scan_folder_with_options(tmp_path, ScanOptions(include_hidden=True))
    assert [f.path for f in files] == [str(hidden)]
    assert files[0].is_hidden is True


def test_scan_extension_filter(tmp_path):
    _write(tmp_path / "a.TXT")
    _write(tmp_path / "b.png")
    _write(tmp_path / "noext")
    options = ScanOptions(file_extensions=["txt"])
    paths = [os.path.basename(f.path) for f in scan_folder_with_options(tmp_path, options)]
    assert paths == ["a.TXT"]


def test_scan_max_depth(tmp_path):
    top = _write(tmp_path / "top.txt")
    _write(tmp_path / "sub" / "deep.txt")
    options = ScanOptions(max_depth=1)
    assert [f.path for f in scan_folder_with_options(tmp_path, options)] == [str(top)]


def test_scan_missing_folder(tmp_path):
    assert scan_folder(tmp_path / "does-not-exist") == []


def test_scan_records_times_and_readonly(tmp_path):
    target = _write(tmp_path / "old.log")
    os.utime(target, (1_000_000_000, 1_100_000_000))
    os.chmod(target, 0o444)
    try:
        [info] = scan_folder(tmp_path)
        assert info.last_access_secs == 1_000_000_000
        assert info.last_modified_secs == 1_100_000_000
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", info.last_accessed)
        assert info.is_readonly is True
    finally:
        os.chmod(target, 0o644)


def _sample():
    return [
        FileInfo(path="/a.png", size=100, file_type="Image", last_access_secs=30),
        FileInfo(path="/b.png", size=300, file_type="Image", last_access_secs=10),
        FileInfo(path="/c.txt", size=100, file_type="Text", last_access_secs=20),
        FileInfo(path="/d.txt", size=100, file_type="Text", last_access_secs=40),
        FileInfo(path="/e.mp4", size=50, file_type="Video", last_access_secs=5),
    ]


def test_get_file_type_statistics():
    stats = get_file_type_statistics(_sample())
    assert stats == {"Image": (2, 400), "Text": (2, 200), "Video": (1, 50)}


def test_get_largest_files():
    largest = get_largest_files(_sample(), 2)
    assert [f.path for f in largest] == ["/b.png", "/a.png"]


def test_get_oldest_files_orders_by_timestamp_descending():
    result = get_oldest_files(_sample(), 3)
    assert [f.last_access_secs for f in result] == [40, 30, 20]


def test_get_duplicate_files():
    dups = get_duplicate_files(_sample())
    assert list(dups) == [100]
    assert [f.path for f in dups[100]] == ["/a.png", "/c.txt", "/d.txt"]


def test_calculate_space_savings():
    assert calculate_space_savings(_sample()) == (200, 2)
    assert calculate_space_savings([]) == (0, 0)


def test_scan_options_defaults():
    options = ScanOptions()
    assert options.include_hidden is False
    assert options.max_depth is None
    assert options.exclude_patterns == ["*.tmp", "*.cache", "*/.git/*", "*/node_modules/*"]
    assert ScanOptions().exclude_patterns is not options.exclude_patterns