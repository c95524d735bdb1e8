import time

import pytest

from trashdoctor.rules import (
    RuleConfig,
    SmartRule,
    analyze_file_patterns,
    apply_rules,
    get_predefined_rules,
    matches_rule,
    pattern_matches,
    suggest_rules_for_files,
    wildcard_match,
)
from trashdoctor.scanner import FileInfo

MIB = 1024 * 1024
DAY = 86400
NOW = 1_700_000_000


def make(path="/home/user/file.txt", size=0, access=0, file_type="Text", **kw):
    return FileInfo(path=path, size=size, last_access_secs=access, file_type=file_type, **kw)


def test_wildcard_match():
    assert wildcard_match("*.txt", "test.txt")
    assert wildcard_match("test*", "test.txt")
    assert wildcard_match("*test*", "mytest.txt")
    assert not wildcard_match("*.jpg", "test.txt")


def test_wildcard_match_ignores_case_in_parts():
    assert wildcard_match("*.TXT", "notes.txt")


def test_wildcard_without_star_is_exact():
    assert wildcard_match("abc", "abc")
    assert not wildcard_match("abc", "ABC")


def test_pattern_matches():
    assert pattern_matches("/home/user/Downloads/file.txt", "*/Downloads/*")
    assert pattern_matches("/home/user/file.log", "*.log")
    assert not pattern_matches("/home/user/file.txt", "*.log")


def test_pattern_matches_plain_substring_case_insensitive():
    assert pattern_matches("/home/user/CACHE/x", "cache")
    assert not pattern_matches("/home/user/x", "cache")


def test_rule_config_defaults():
    rule = RuleConfig()
    assert (rule.max_age_days, rule.min_size_mb, rule.max_size_mb) == (0, 0, None)
    assert rule.custom_patterns == [] and rule.exclude_patterns == []


def test_smart_rule_default_priority():
    assert SmartRule("n", "d", RuleConfig()).priority == 5


def test_matches_rule_age_boundary():
    rule = RuleConfig(max_age_days=30)
    assert matches_rule(make(access=NOW - 30 * DAY), rule, NOW)
    assert not matches_rule(make(access=NOW - 30 * DAY + 1), rule, NOW)


def test_matches_rule_future_access_counts_as_zero_age():
    assert matches_rule(make(access=NOW + 100), RuleConfig(), NOW)
    assert not matches_rule(make(access=NOW + 100), RuleConfig(max_age_days=1), NOW)


def test_matches_rule_size_bounds():
    rule = RuleConfig(min_size_mb=1, max_size_mb=2)
    assert not matches_rule(make(size=MIB - 1), rule, NOW)
    assert matches_rule(make(size=MIB), rule, NOW)
    assert matches_rule(make(size=2 * MIB), rule, NOW)
    assert not matches_rule(make(size=2 * MIB + 1), rule, NOW)


@pytest.mark.parametrize(
    "flag,include",
    [("is_hidden", "include_hidden"), ("is_readonly", "include_readonly"),
     ("is_executable", "include_executable")],
)
def test_matches_rule_flags(flag, include):
    info = make(**{flag: True})
    assert not matches_rule(info, RuleConfig(), NOW)
    assert matches_rule(info, RuleConfig(**{include: True}), NOW)


def test_matches_rule_file_types():
    info = make(file_type="Video")
    assert matches_rule(info, RuleConfig(file_types=["video"]), NOW)
    assert not matches_rule(info, RuleConfig(file_types=["Audio"]), NOW)
    assert not matches_rule(info, RuleConfig(exclude_file_types=["VID"]), NOW)
    assert matches_rule(info, RuleConfig(exclude_file_types=["Audio"]), NOW)


def test_matches_rule_patterns():
    info = make(path="/home/user/Downloads/big.iso")
    assert matches_rule(info, RuleConfig(custom_patterns=["*/Downloads/*"]), NOW)
    assert not matches_rule(info, RuleConfig(custom_patterns=["*.log"]), NOW)
    assert not matches_rule(info, RuleConfig(exclude_patterns=["downloads"]), NOW)


def test_apply_rules_filters_and_keeps_order():
    files = [
        make(path="/a/old_big", size=200 * MIB, access=0),
        make(path="/a/new_big", size=200 * MIB, access=int(time.time())),
        make(path="/a/old_small", size=10, access=0),
        make(path="/a/old_big2", size=150 * MIB, access=0),
    ]
    result = apply_rules(files, RuleConfig(max_age_days=30, min_size_mb=100))
    assert [f.path for f in result] == ["/a/old_big", "/a/old_big2"]


def test_predefined_rules():
    rules = get_predefined_rules()
    assert [r.name for r in rules] == [
        "Large Old Downloads", "Temporary Files", "Old Media Files", "Huge Files",
        "Old Archives", "Old Documents", "Log Files", "Backup Files",
    ]
    assert rules[3].config.min_size_mb == 500
    assert rules[6].config.custom_patterns == ["*.log", "*.log.*"]


def test_log_rule_matches_rotated_log():
    log_rule = get_predefined_rules()[6].config
    info = make(path="/var/log/app.log.1", size=2 * MIB, access=0)
    assert matches_rule(info, log_rule, NOW)


def test_analyze_file_patterns():
    files = [
        make(path="/d/a.txt", size=10, file_type="Text"),
        make(path="/d/b.txt", size=2048, file_type="Text"),
        make(path="/e/c.mp4", size=2 * 1024 ** 3, file_type="Video"),
    ]
    result = analyze_file_patterns(files)
    assert sorted(result["by_type"]) == ["Text: 2 files", "Video: 1 files"]
    assert result["by_directory"] == ["/d: 2 files", "/e: 1 files"]
    assert sorted(result["by_size"]) == ["0-1KB: 1 files", "1GB+: 1 files", "1KB-1MB: 1 files"]


def test_analyze_directory_limited_to_ten():
    files = [make(path=f"/dir{i}/f") for i in range(15)]
    assert len(analyze_file_patterns(files)["by_directory"]) == 10


def test_analyze_empty():
    assert analyze_file_patterns([]) == {"by_type": [], "by_directory": [], "by_size": []}


def test_suggest_rules_empty():
    assert suggest_rules_for_files([]) == []


def test_suggest_rules_all_kinds():
    files = [
        make(path="/a/1.mp4", size=300 * MIB, access=0, file_type="Video"),
        make(path="/a/2.mp4", size=100 * MIB, access=0, file_type="Video"),
    ]
    names = [r.name for r in suggest_rules_for_files(files)]
    assert names == ["Clean Video Files", "Large File Cleanup", "Ancient Files"]
    common = suggest_rules_for_files(files)[0].config
    assert common.min_size_mb == 200
    assert common.file_types == ["Video"]


def test_suggest_rules_small_recent():
    now = int(time.time())
    files = [make(size=10, access=now, file_type="Text")]
    result = suggest_rules_for_files(files)
    assert [r.name for r in result] == ["Clean Text Files"]
    assert result[0].config.min_size_mb == 1