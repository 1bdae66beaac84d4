"""ファイル比較パイプライン

不一致の証拠をできるだけ安い段階で見つける:
サイズ → チェックサム → (thorough 時のみ) バイト単位
"""

import enum
from dataclasses import dataclass, field
from typing import BinaryIO

from .constants import CHUNK_SIZE
from .entry import Entry, get_entry_checksum
from .errors import ChecksumUnavailableError, ComparisonIndeterminateError, DupcmpError, error_reason
from .report import Reporter


class Verdict(enum.Enum):
    """比較結果"""

    EQUAL = enum.auto()
    NOT_EQUAL = enum.auto()


@dataclass
class CompareConfig:
    """比較設定"""

    thorough: bool = False  # チェックサム一致後にバイト比較で確定する
    quiet: bool = False  # 読み込みエラーを表示しない
    reporter: Reporter = field(default_factory=Reporter)

    def report(self, error: DupcmpError) -> None:
        if not self.quiet:
            self.reporter.warning(error)


def compare_sizes(first: Entry, second: Entry) -> Verdict:
    """サイズ比較（I/O なし）"""
    if first.size != second.size:
        return Verdict.NOT_EQUAL
    return Verdict.EQUAL


def try_entry_checksum(entry: Entry, config: CompareConfig) -> bytes | None:
    """チェックサムを取得（失敗時は通知して None）"""
    try:
        return get_entry_checksum(entry)
    except ChecksumUnavailableError:
        # 初回の失敗時に通知済み
        return None
    except DupcmpError as e:
        config.report(e)
        return None


def compare_entry_checksums(first: Entry, second: Entry, config: CompareConfig | None = None) -> Verdict:
    """チェックサム比較（未計算なら計算する）

    どちらかが読めない場合は NOT_EQUAL とする。
    """
    if config is None:
        config = CompareConfig()

    digest1 = try_entry_checksum(first, config)
    if digest1 is None:
        return Verdict.NOT_EQUAL

    digest2 = try_entry_checksum(second, config)
    if digest2 is None:
        return Verdict.NOT_EQUAL

    if digest1 != digest2:
        return Verdict.NOT_EQUAL
    return Verdict.EQUAL


def _open_for_compare(entry: Entry) -> BinaryIO:
    try:
        return open(entry.path, "rb")
    except (OSError, ValueError) as e:
        raise ComparisonIndeterminateError(entry.path, error_reason(e)) from e


def _read_chunk(f: BinaryIO, entry: Entry) -> bytes:
    try:
        return f.read(CHUNK_SIZE)
    except OSError as e:
        raise ComparisonIndeterminateError(entry.path, error_reason(e)) from e


def compare_entry_contents(first: Entry, second: Entry, config: CompareConfig | None = None) -> Verdict:
    """バイト単位の比較

    両ファイルを同じ長さずつ読み進め、最初の不一致で打ち切る。
    """
    if config is None:
        config = CompareConfig()

    try:
        with _open_for_compare(first) as f1, _open_for_compare(second) as f2:
            while True:
                chunk1 = _read_chunk(f1, first)
                chunk2 = _read_chunk(f2, second)
                if chunk1 != chunk2:
                    return Verdict.NOT_EQUAL
                if not chunk1:
                    return Verdict.EQUAL
    except ComparisonIndeterminateError as e:
        config.report(e)
        return Verdict.NOT_EQUAL


def compare_entries(first: Entry, second: Entry, config: CompareConfig | None = None) -> Verdict:
    """2つのエントリが同一内容かを判定"""
    if config is None:
        config = CompareConfig()

    if compare_sizes(first, second) is Verdict.NOT_EQUAL:
        return Verdict.NOT_EQUAL

    if compare_entry_checksums(first, second, config) is Verdict.NOT_EQUAL:
        return Verdict.NOT_EQUAL

    if config.thorough:
        return compare_entry_contents(first, second, config)

    return Verdict.EQUAL
