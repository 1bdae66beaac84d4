#!/usr/bin/env python3
"""
cluster.py のユニットテスト
"""
# ruff: noqa: S101

import io
import os
from unittest.mock import patch

import pytest

from dupcmp.cluster import (
    checksum_entries,
    count_checksum_targets,
    find_duplicate_sets,
    group_by_size,
)
from dupcmp.compare import CompareConfig
from dupcmp.constants import shutdown_event
from dupcmp.entry import EntryStatus, make_entry
from dupcmp.report import Reporter


def _make_file(tmp_path, name: str, data: bytes):
    path = tmp_path / name
    path.write_bytes(data)
    return make_entry(str(path), len(data))


@pytest.fixture
def config():
    return CompareConfig(reporter=Reporter(io.StringIO()))


@pytest.fixture
def clear_shutdown():
    """停止フラグを元に戻す"""
    yield
    shutdown_event.clear()


class TestGroupBySize:
    """group_by_size のテスト"""

    def test_grouping(self):
        entries = [make_entry("/a", 1), make_entry("/b", 2), make_entry("/c", 1)]
        groups = group_by_size(entries)
        assert [e.path for e in groups[1]] == ["/a", "/c"]
        assert [e.path for e in groups[2]] == ["/b"]

    def test_empty(self):
        assert group_by_size([]) == {}


class TestCountChecksumTargets:
    """count_checksum_targets のテスト"""

    def test_unique_sizes_excluded(self):
        """サイズが一意なエントリは計算対象外"""
        entries = [make_entry("/a", 1), make_entry("/b", 2), make_entry("/c", 1), make_entry("/d", 3)]
        assert count_checksum_targets(entries) == 2


class TestChecksumEntries:
    """checksum_entries のテスト"""

    def test_only_same_size_entries(self, tmp_path, config):
        """同サイズのエントリのみ計算する"""
        a = _make_file(tmp_path, "a", b"111")
        b = _make_file(tmp_path, "b", b"222")
        c = _make_file(tmp_path, "c", b"4444")
        progress: list[int] = []

        ok_count = checksum_entries([a, b, c], config, progress.append, num_workers=2)

        assert ok_count == 2
        assert sum(progress) == 2
        assert a.status is EntryStatus.CHECKSUMMED
        assert b.status is EntryStatus.CHECKSUMMED
        assert c.status is EntryStatus.UNTOUCHED

    def test_each_entry_read_once(self, tmp_path, config):
        """同じエントリが何度現れても読み込みは1回"""
        a = _make_file(tmp_path, "a", b"111")
        b = _make_file(tmp_path, "b", b"111")

        with patch("dupcmp.entry.open", wraps=open, create=True) as mock_open:
            checksum_entries([a, b, a, b, a], config, num_workers=4)

        assert mock_open.call_count == 2

    def test_failure_counted(self, tmp_path, config):
        """読めないエントリは成功数に含めない"""
        a = _make_file(tmp_path, "a", b"111")
        missing = make_entry(str(tmp_path / "missing"), 3)

        assert checksum_entries([a, missing], config) == 1
        assert missing.status is EntryStatus.INVALID
        assert config.reporter.count == 1

    def test_nothing_to_do(self, config):
        assert checksum_entries([make_entry("/a", 1)], config) == 0


class TestFindDuplicateSets:
    """find_duplicate_sets のテスト"""

    def test_basic(self, tmp_path, config):
        """同一内容のファイルがグループ化される"""
        a1 = _make_file(tmp_path, "a1", b"AAAA")
        b1 = _make_file(tmp_path, "b1", b"BBBB")
        a2 = _make_file(tmp_path, "a2", b"AAAA")
        c1 = _make_file(tmp_path, "c1", b"CC")
        b2 = _make_file(tmp_path, "b2", b"BBBB")
        a3 = _make_file(tmp_path, "a3", b"AAAA")

        dup_sets = find_duplicate_sets([a1, b1, a2, c1, b2, a3], config)

        assert [[e.path for e in s] for s in dup_sets] == [
            [a1.path, a2.path, a3.path],
            [b1.path, b2.path],
        ]

    def test_results_are_copies(self, tmp_path, config):
        """結果は入力のエントリと独立"""
        a1 = _make_file(tmp_path, "a1", b"AAAA")
        a2 = _make_file(tmp_path, "a2", b"AAAA")

        dup_sets = find_duplicate_sets([a1, a2], config)

        assert dup_sets[0][0] is not a1
        assert dup_sets[0][0].digest == a1.digest
        assert dup_sets[0][0].status is EntryStatus.CHECKSUMMED

    def test_sorted_by_size(self, tmp_path, config):
        """サイズの小さい順"""
        big1 = _make_file(tmp_path, "big1", b"x" * 10)
        big2 = _make_file(tmp_path, "big2", b"x" * 10)
        small1 = _make_file(tmp_path, "small1", b"x")
        small2 = _make_file(tmp_path, "small2", b"x")

        dup_sets = find_duplicate_sets([big1, big2, small1, small2], config)

        assert [s[0].size for s in dup_sets] == [1, 10]

    def test_unreadable_does_not_stop_others(self, tmp_path, config):
        """読めないファイルがあっても他の比較は続く"""
        missing = _make_file(tmp_path, "missing", b"AAAA")
        a1 = _make_file(tmp_path, "a1", b"AAAA")
        a2 = _make_file(tmp_path, "a2", b"AAAA")
        os.remove(missing.path)

        dup_sets = find_duplicate_sets([missing, a1, a2], config)

        assert [[e.path for e in s] for s in dup_sets] == [[a1.path, a2.path]]
        assert config.reporter.count == 1

    def test_no_duplicates(self, tmp_path, config):
        a = _make_file(tmp_path, "a", b"1")
        b = _make_file(tmp_path, "b", b"2")
        assert find_duplicate_sets([a, b], config) == []

    def test_shutdown(self, tmp_path, config, clear_shutdown):
        """停止フラグが立っていれば何もしない"""
        a1 = _make_file(tmp_path, "a1", b"AAAA")
        a2 = _make_file(tmp_path, "a2", b"AAAA")
        shutdown_event.set()

        assert find_duplicate_sets([a1, a2], config) == []
        assert a1.status is EntryStatus.UNTOUCHED

    def test_keyboard_interrupt_cancels_pending(self, tmp_path, config, clear_shutdown):
        """Ctrl-C で未着手のチェックサム計算を取り消す"""
        entries = [_make_file(tmp_path, f"f{i:02d}", b"same size") for i in range(40)]

        def interrupt(_: int) -> None:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            checksum_entries(entries, config, interrupt, num_workers=1)

        done = sum(1 for entry in entries if entry.status is EntryStatus.CHECKSUMMED)
        assert done < len(entries)
        assert shutdown_event.is_set()
